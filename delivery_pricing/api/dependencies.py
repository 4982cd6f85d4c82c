"""
API 의존성 주입
"""

from fastapi import Depends, Request

from delivery_pricing.config import Settings
from delivery_pricing.domain.pricing import PricingEngine
from delivery_pricing.domain.rates import RateResolver
from delivery_pricing.monitoring.log_sink import LogSink
from delivery_pricing.storage.catalog import JSONCatalog


def get_app_settings(request: Request) -> Settings:
    """애플리케이션 설정 반환"""
    return request.app.state.settings


def get_log_sink(request: Request) -> LogSink:
    """로그 싱크 인스턴스 반환"""
    return request.app.state.log_sink


def get_catalog(
    settings: Settings = Depends(get_app_settings),
    log_sink: LogSink = Depends(get_log_sink),
) -> JSONCatalog:
    """상품 카탈로그 반환"""
    return JSONCatalog(settings.products_file_path, log_sink)


def get_pricing_engine(
    settings: Settings = Depends(get_app_settings),
    log_sink: LogSink = Depends(get_log_sink),
) -> PricingEngine:
    """가격 계산 엔진 반환 (요율은 조회 시점의 환경 변수 우선)"""
    return PricingEngine(RateResolver.from_settings(settings), log_sink)
