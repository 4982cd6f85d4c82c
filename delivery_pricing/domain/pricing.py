"""
배송비 가격 계산 엔진
배송사 검증, 요율 적용, 금액 절사 및 가격 레코드 생성
"""

import math
from typing import List, Optional, Sequence, Union

from delivery_pricing.domain.provider import DeliveryProvider
from delivery_pricing.domain.rates import RateResolver
from delivery_pricing.exceptions import (
    CatalogUnavailableError,
    InvalidProviderError,
    PriceOutOfRangeError,
    RateResolutionError,
)
from delivery_pricing.models.product import PricedProduct, Product
from delivery_pricing.monitoring.log_sink import LogSink


def truncate_to_cents(value: float) -> float:
    """
    소수점 둘째 자리 미만 버림

    반올림이 아닌 floor(value * 100) / 100 이다. 예: 3.125 -> 3.12
    """
    return math.floor(value * 100) / 100


def format_money(value: float) -> str:
    """금액을 소수점 둘째 자리 문자열로 변환"""
    return f"{value:.2f}"


class PricingEngine:
    """
    상품 목록에 배송비와 총액을 계산하여 붙이는 엔진

    하나라도 실패하면 전체 요청이 실패한다 (부분 결과 없음).
    """

    def __init__(self, rate_resolver: RateResolver, log_sink: LogSink):
        self.rate_resolver = rate_resolver
        self.log_sink = log_sink

    def price(
        self, products: Sequence[Product], provider: Union[str, DeliveryProvider]
    ) -> List[PricedProduct]:
        """
        상품 목록 가격 계산

        Args:
            products: 카탈로그 상품 목록
            provider: 배송사 이름 (대소문자 무관)

        Returns:
            입력 순서를 유지한 가격 레코드 목록

        Raises:
            InvalidProviderError: 허용되지 않은 배송사
            RateResolutionError: 요율 미설정 또는 형식 오류
            PriceOutOfRangeError: 금액 계산 결과가 유한하지 않음
        """
        carrier = self._resolve_provider(provider)
        if not products:
            return []

        try:
            rate = self.rate_resolver.rate(carrier)
        except RateResolutionError as e:
            self.log_sink.error(
                f"failed to calculate delivery price for product {products[0].name}: {e}",
                carrier.value,
            )
            raise

        result = []
        for product in products:
            try:
                priced = self._price_one(product, carrier, rate)
            except PriceOutOfRangeError as e:
                self.log_sink.error(
                    f"failed to calculate delivery price for product {product.name}: {e}",
                    carrier.value,
                )
                raise
            result.append(priced)
            self.log_sink.info(
                f"Product priced successfully: {product.name} with total price: {priced.total_price}",
                carrier.value,
            )

        return result

    def price_catalog(self, catalog, provider: Union[str, DeliveryProvider]) -> List[PricedProduct]:
        """카탈로그에서 상품을 로드하여 가격 계산"""
        try:
            products = catalog.load_products()
        except CatalogUnavailableError as e:
            self.log_sink.error(f"Failed to load products: {e.reason}", _provider_tag(provider))
            raise
        return self.price(products, provider)

    def _resolve_provider(self, provider: Union[str, DeliveryProvider]) -> DeliveryProvider:
        try:
            return DeliveryProvider.parse(provider)
        except InvalidProviderError:
            self.log_sink.error("delivery provider not allowed", _provider_tag(provider))
            raise

    def _price_one(self, product: Product, carrier: DeliveryProvider, rate: float) -> PricedProduct:
        raw_delivery = product.weight * rate
        # 센트 단위 변환 후에도 유한해야 절사 가능
        if not (math.isfinite(product.price * 100) and math.isfinite(raw_delivery * 100)):
            raise PriceOutOfRangeError(product.name, carrier.value)

        product_price = truncate_to_cents(product.price)
        delivery_price = truncate_to_cents(raw_delivery)
        total = product_price + delivery_price

        return PricedProduct(
            name=product.name,
            product_price=format_money(product_price),
            delivery_price=format_money(delivery_price),
            total_price=format_money(total),
            delivery_service=carrier.value,
        )


def _provider_tag(provider) -> Optional[str]:
    if isinstance(provider, DeliveryProvider):
        return provider.value
    if isinstance(provider, str) and provider.strip():
        return provider.strip().upper()
    return None
