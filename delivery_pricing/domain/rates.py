"""
배송 요율 조회
배송사별 설정 키에서 요율을 읽고 숫자 형식을 검증
"""

import math
from typing import Any, Mapping

from delivery_pricing.domain.provider import DeliveryProvider
from delivery_pricing.exceptions import RateFormatError, RateNotConfiguredError


class RateResolver:
    """
    배송사 요율 조회기

    설정 원본은 호출마다 새로 읽으므로 os.environ 같은 가변 매핑을
    넘기면 재시작 없이 변경된 요율이 반영된다.
    """

    def __init__(self, source: Mapping[str, Any]):
        self.source = source

    @classmethod
    def from_settings(cls, settings) -> "RateResolver":
        """Settings 기반 생성 (환경 변수 변경은 다음 조회부터 반영)"""
        return cls(settings.rate_source())

    def rate(self, provider: DeliveryProvider) -> float:
        """
        배송사 요율 조회

        Raises:
            RateNotConfiguredError: 설정 키가 없거나 비어 있음
            RateFormatError: 숫자로 해석할 수 없는 값
        """
        key = provider.config_key
        raw = self.source.get(key)

        if raw is None or (isinstance(raw, str) and not raw.strip()):
            raise RateNotConfiguredError(provider.value, key)

        try:
            value = float(raw.strip() if isinstance(raw, str) else raw)
        except (TypeError, ValueError):
            raise RateFormatError(provider.value, key, str(raw)) from None

        if not math.isfinite(value):
            raise RateFormatError(provider.value, key, str(raw))

        return value
