"""
상품 데이터 모델 정의
카탈로그 상품과 배송비가 계산된 상품의 표준 형식
"""

from pydantic import BaseModel, ConfigDict, Field


class Product(BaseModel):
    """카탈로그 상품"""

    name: str = Field(..., description="상품명")
    weight: float = Field(..., allow_inf_nan=False, description="무게 (배송 요율 단위)")
    price: float = Field(..., allow_inf_nan=False, description="상품 가격")

    model_config = ConfigDict(frozen=True)


class PricedProduct(BaseModel):
    """배송비가 계산된 상품

    금액 필드는 소수점 둘째 자리까지의 문자열 (JSON 직렬화 시 0.00 유지)
    """

    name: str
    product_price: str
    delivery_price: str
    total_price: str
    delivery_service: str

    model_config = ConfigDict(frozen=True)
