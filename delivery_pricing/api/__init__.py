"""
배송비 계산 API
FastAPI 기반 상품 가격 조회 서버
"""

from .main import app, create_app

__all__ = ["app", "create_app"]
