"""
저장소 모듈
상품 카탈로그 로더
"""

from delivery_pricing.storage.catalog import JSONCatalog

__all__ = ["JSONCatalog"]
