"""
배송비 계산 시스템
상품 카탈로그에 배송사별 배송비와 총액을 계산하여 제공
"""

__version__ = "1.0.0"
