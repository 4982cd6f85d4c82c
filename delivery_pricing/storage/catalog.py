"""
JSON 파일 기반 상품 카탈로그
상품 목록 파일을 읽어 Product 모델로 변환
"""

import json
from pathlib import Path
from typing import List, Optional, Union

from pydantic import TypeAdapter, ValidationError

from delivery_pricing.exceptions import CatalogUnavailableError
from delivery_pricing.models.product import Product
from delivery_pricing.monitoring.log_sink import LogSink

_products_adapter = TypeAdapter(List[Product])


class JSONCatalog:
    """JSON 파일 카탈로그"""

    def __init__(self, path: Optional[Union[str, Path]], log_sink: Optional[LogSink] = None):
        """
        Args:
            path: 상품 JSON 파일 경로 ([{"name", "weight", "price"}, ...])
            log_sink: 로그 싱크
        """
        self.path = Path(path) if path else None
        self.log_sink = log_sink

    def load_products(self) -> List[Product]:
        """
        상품 목록 로드

        Raises:
            CatalogUnavailableError: 경로 미설정, 파일 없음, JSON/스키마 오류
        """
        if self.path is None:
            if self.log_sink:
                self.log_sink.error("PRODUCTS_FILE_PATH environment variable not set")
            raise CatalogUnavailableError("PRODUCTS_FILE_PATH not set")

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            raise CatalogUnavailableError(f"products file not found: {self.path}") from None
        except OSError as e:
            raise CatalogUnavailableError(f"cannot read {self.path}: {e}") from e
        except ValueError as e:
            raise CatalogUnavailableError(f"invalid JSON in {self.path}: {e}") from e

        try:
            return _products_adapter.validate_python(data)
        except ValidationError as e:
            raise CatalogUnavailableError(
                f"invalid product records in {self.path}: {e.error_count()} error(s)"
            ) from e
