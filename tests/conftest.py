"""
pytest 공통 fixtures 및 설정
"""

import io
import json
import os
import sys
from pathlib import Path

import pytest

# 프로젝트 루트를 Python 경로에 추가
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from delivery_pricing.domain.provider import DeliveryProvider  # noqa: E402
from delivery_pricing.models.product import Product  # noqa: E402
from delivery_pricing.monitoring.log_sink import LogSink  # noqa: E402


@pytest.fixture
def clean_env(monkeypatch):
    """설정 관련 환경 변수 제거 (dotenv로 로드한 값도 테스트 후 복원)"""
    saved = dict(os.environ)
    for key in ["DELIVERY_PROVIDER", "PRODUCTS_FILE_PATH", "APP_PORT", "ENV", "LOG_FILE"]:
        monkeypatch.delenv(key, raising=False)
    for provider in DeliveryProvider:
        monkeypatch.delenv(provider.config_key, raising=False)

    yield monkeypatch

    os.environ.clear()
    os.environ.update(saved)


@pytest.fixture
def log_stream():
    """로그 싱크 출력 버퍼"""
    return io.StringIO()


@pytest.fixture
def log_sink(log_stream):
    """StringIO로 출력하는 실행 중인 로그 싱크"""
    sink = LogSink(stream=log_stream)
    sink.start()
    yield sink
    sink.stop(timeout=5)


@pytest.fixture
def read_log_lines(log_sink, log_stream):
    """싱크를 비우고 기록된 로그 줄을 dict 목록으로 반환"""

    def _read():
        log_sink.flush()
        return [json.loads(line) for line in log_stream.getvalue().splitlines()]

    return _read


@pytest.fixture
def sample_products():
    """샘플 상품 목록"""
    return [
        Product(name="Item A", weight=1.0, price=15.99),
        Product(name="Item B", weight=2.5, price=25.50),
    ]


@pytest.fixture
def rates():
    """배송사 요율 설정"""
    return {
        "DHL_DELIVERY_PRICE": "2.00",
        "UPS_DELIVERY_PRICE": "1.50",
        "AMAZON_DELIVERY_PRICE": "1.25",
        "ROYAL_MAIL_DELIVERY_PRICE": "3.00",
        "DPD_DELIVERY_PRICE": "2.50",
        "YODEL_DELIVERY_PRICE": "2.75",
    }


@pytest.fixture
def products_file(tmp_path):
    """샘플 상품 JSON 파일"""
    path = tmp_path / "products.json"
    path.write_text(
        json.dumps(
            [
                {"name": "Item A", "weight": 1.5, "price": 20},
                {"name": "Item B", "weight": 2.0, "price": 15},
            ]
        ),
        encoding="utf-8",
    )
    return path
