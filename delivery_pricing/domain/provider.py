"""
배송사 정의
허용된 배송사 목록과 배송사별 요율 설정 키 매핑
"""

from enum import Enum
from typing import Dict, Union

from delivery_pricing.exceptions import InvalidProviderError


class DeliveryProvider(str, Enum):
    """배송사 타입"""

    DHL = "DHL"
    UPS = "UPS"
    AMAZON = "AMAZON"
    ROYAL_MAIL = "ROYAL_MAIL"  # Royal Mail
    DPD = "DPD"
    YODEL = "YODEL"

    @property
    def config_key(self) -> str:
        """요율 설정 키 (예: DHL_DELIVERY_PRICE)"""
        return RATE_CONFIG_KEYS[self]

    @classmethod
    def parse(cls, value: Union[str, "DeliveryProvider", None]) -> "DeliveryProvider":
        """
        배송사 이름을 정규화하여 변환

        앞뒤 공백을 제거하고 대문자로 비교한다.

        Raises:
            InvalidProviderError: 허용 목록에 없는 배송사
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            raise InvalidProviderError(value)

        normalized = value.strip().upper()
        try:
            return cls(normalized)
        except ValueError:
            raise InvalidProviderError(normalized or value) from None


RATE_CONFIG_KEYS: Dict[DeliveryProvider, str] = {
    provider: f"{provider.value}_DELIVERY_PRICE" for provider in DeliveryProvider
}
