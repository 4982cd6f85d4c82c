#!/usr/bin/env python3
"""
배송비 계산 시스템 메인 엔트리 포인트
"""

import json
import sys

import click
from loguru import logger

from delivery_pricing.config import get_settings, load_env_file
from delivery_pricing.domain.pricing import PricingEngine
from delivery_pricing.domain.provider import DeliveryProvider
from delivery_pricing.domain.rates import RateResolver
from delivery_pricing.exceptions import PricingError
from delivery_pricing.monitoring import LogSink, setup_logging
from delivery_pricing.storage.catalog import JSONCatalog


def _load_env(env_file):
    if env_file:
        if load_env_file(env_file):
            logger.info(f"환경 변수 로드: {env_file}")
        else:
            logger.warning(f"환경 변수 파일 없음: {env_file}")
        get_settings.cache_clear()


@click.group()
def cli():
    """배송비 계산 시스템 CLI"""
    pass


@cli.command()
@click.option("--env-file", default="env/.env", show_default=True, help="KEY=value 환경 파일")
@click.option("--host", default=None, help="바인드 호스트 (기본: APP_HOST)")
@click.option("--port", type=int, default=None, help="포트 (기본: APP_PORT, 없으면 9000)")
def serve(env_file, host, port):
    """HTTP API 서버 실행"""
    _load_env(env_file)

    from delivery_pricing.api.main import run

    run(host=host, port=port)


@cli.command()
@click.option("--provider", default=None, help="배송사 (기본: DELIVERY_PROVIDER)")
@click.option("--products-file", default=None, help="상품 JSON 파일 (기본: PRODUCTS_FILE_PATH)")
@click.option("--env-file", default=None, help="KEY=value 환경 파일")
def price(provider, products_file, env_file):
    """카탈로그 가격 계산 결과를 JSON으로 출력"""
    _load_env(env_file)
    settings = get_settings()
    setup_logging(log_level=settings.log_level, log_file=settings.log_file)

    provider = provider or settings.delivery_provider
    if not provider:
        click.echo("Delivery provider not set", err=True)
        sys.exit(1)

    sink = LogSink(stream=sys.stderr)
    sink.start()
    try:
        engine = PricingEngine(RateResolver.from_settings(settings), sink)
        catalog = JSONCatalog(products_file or settings.products_file_path, sink)
        try:
            priced = engine.price_catalog(catalog, provider)
        except PricingError:
            click.echo("Failed to price products", err=True)
            sys.exit(1)
    finally:
        sink.stop()

    click.echo(json.dumps([p.model_dump() for p in priced], indent=2))


@cli.command()
def providers():
    """지원 배송사와 요율 설정 키 목록"""
    for provider in DeliveryProvider:
        click.echo(f"{provider.value}\t{provider.config_key}")


if __name__ == "__main__":
    cli()
