"""
도메인 로직 모듈
배송사 검증과 가격 계산 규칙을 담당
"""

from delivery_pricing.domain.pricing import PricingEngine, format_money, truncate_to_cents
from delivery_pricing.domain.provider import DeliveryProvider
from delivery_pricing.domain.rates import RateResolver

__all__ = [
    "PricingEngine",
    "RateResolver",
    "DeliveryProvider",
    "truncate_to_cents",
    "format_money",
]
