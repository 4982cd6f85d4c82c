"""
가격 계산 오류 정의
배송사 검증, 요율 조회, 상품 카탈로그 로드 실패를 구분하는 예외 계층
"""

from typing import Optional


class PricingError(Exception):
    """가격 계산 관련 오류의 기반 클래스"""

    pass


class InvalidProviderError(PricingError):
    """허용 목록에 없는 배송사"""

    def __init__(self, provider: Optional[str]):
        self.provider = provider
        super().__init__(f"invalid delivery provider: {provider!r}")


class RateResolutionError(PricingError):
    """배송사 요율 조회 실패"""

    def __init__(self, provider: str, message: Optional[str] = None):
        self.provider = provider
        super().__init__(message or f"failed to resolve delivery rate for {provider}")


class RateNotConfiguredError(RateResolutionError):
    """요율 설정 키가 없거나 비어 있음"""

    def __init__(self, provider: str, key: str):
        self.key = key
        super().__init__(provider, f"{key} environment variable not set")


class RateFormatError(RateResolutionError):
    """요율 값이 숫자가 아님"""

    def __init__(self, provider: str, key: str, raw_value: str):
        self.key = key
        self.raw_value = raw_value
        super().__init__(provider, f"invalid {key}: {raw_value!r}")


class PriceOutOfRangeError(PricingError):
    """금액이 유한한 범위를 벗어남 (NaN, inf, 오버플로)"""

    def __init__(self, product_name: str, provider: str):
        self.product_name = product_name
        self.provider = provider
        super().__init__(f"price out of range for product {product_name} ({provider})")


class CatalogUnavailableError(PricingError):
    """상품 카탈로그 로드 실패"""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"product catalog unavailable: {reason}")
