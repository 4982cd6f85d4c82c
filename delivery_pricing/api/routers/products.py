"""
상품 가격 API 엔드포인트
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from delivery_pricing.api.dependencies import (
    get_app_settings,
    get_catalog,
    get_log_sink,
    get_pricing_engine,
)
from delivery_pricing.config import Settings
from delivery_pricing.domain.pricing import PricingEngine
from delivery_pricing.exceptions import CatalogUnavailableError, PricingError
from delivery_pricing.models.product import PricedProduct
from delivery_pricing.monitoring.log_sink import LogSink
from delivery_pricing.storage.catalog import JSONCatalog

router = APIRouter()


@router.get("", response_model=List[PricedProduct])
def get_products(
    provider: Optional[str] = Query(None, description="배송사 (미지정 시 DELIVERY_PROVIDER)"),
    settings: Settings = Depends(get_app_settings),
    log_sink: LogSink = Depends(get_log_sink),
    catalog: JSONCatalog = Depends(get_catalog),
    engine: PricingEngine = Depends(get_pricing_engine),
) -> List[PricedProduct]:
    """상품 목록과 배송비/총액 조회"""
    default_provider = (settings.delivery_provider or "").strip().upper()
    if not default_provider:
        log_sink.error("DELIVERY_PROVIDER environment variable not set")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Delivery provider not set"
        )

    query_provider = (provider or "").strip().upper()
    if not query_provider:
        selected = default_provider
        log_sink.info("No provider specified in URL, using default from environment", selected)
    else:
        selected = query_provider
        if selected != default_provider:
            log_sink.warn("Query provider differs from env provider", selected)

    try:
        products = catalog.load_products()
    except CatalogUnavailableError as e:
        log_sink.error(f"Failed to load products: {e.reason}", selected)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to load products"
        )

    try:
        priced = engine.price(products, selected)
    except PricingError as e:
        log_sink.error(f"Failed to price products: {e}", selected)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to price products"
        )

    log_sink.info("successfully got the prices of the products", selected)
    return priced
