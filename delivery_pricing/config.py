"""
설정 관리 모듈
환경 변수를 읽어 Pydantic 모델로 변환하여 타입 안전성 보장
"""

import os
from collections import ChainMap
from functools import lru_cache
from pathlib import Path
from typing import Dict, Literal, Mapping, Optional, Union

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from delivery_pricing.domain.provider import DeliveryProvider

DEFAULT_APP_PORT = 9000


def load_env_file(path: Union[str, Path], override: bool = True) -> bool:
    """
    KEY=value 형식의 파일을 프로세스 환경 변수로 로드

    빈 줄과 # 주석은 무시한다.

    Returns:
        파일이 존재하여 로드되었는지 여부
    """
    env_path = Path(path)
    if not env_path.is_file():
        return False
    load_dotenv(dotenv_path=env_path, override=override)
    return True


class Settings(BaseSettings):
    """전체 애플리케이션 설정"""

    # 환경
    env: Literal["development", "staging", "production", "test"] = "development"
    debug: bool = False

    # 로깅
    log_level: str = "INFO"
    log_file: Optional[Path] = None

    # 서버
    app_host: str = "0.0.0.0"
    app_port: Optional[int] = None

    # 배송
    delivery_provider: Optional[str] = Field(default=None, description="기본 배송사")
    products_file_path: Optional[Path] = Field(default=None, description="상품 JSON 파일")

    # 배송사별 요율 (형식 검증은 RateResolver 담당)
    dhl_delivery_price: Optional[str] = None
    ups_delivery_price: Optional[str] = None
    amazon_delivery_price: Optional[str] = None
    royal_mail_delivery_price: Optional[str] = None
    dpd_delivery_price: Optional[str] = None
    yodel_delivery_price: Optional[str] = None

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("delivery_provider", mode="before")
    @classmethod
    def blank_provider_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("log_file", mode="before")
    @classmethod
    def create_log_path(cls, v):
        if v:
            path = Path(v)
            path.parent.mkdir(parents=True, exist_ok=True)
            return path
        return v

    def delivery_rates(self) -> Dict[str, Optional[str]]:
        """배송사 요율 설정 키 -> 원본 값"""
        return {
            provider.config_key: getattr(self, provider.config_key.lower())
            for provider in DeliveryProvider
        }

    def rate_source(self) -> Mapping[str, Optional[str]]:
        """요율 조회 원본: 현재 프로세스 환경 변수 우선, 없으면 시작 시점 설정값"""
        return ChainMap(os.environ, self.delivery_rates())

    def resolved_port(self) -> int:
        """서버 포트 (미설정 시 기본값)"""
        return self.app_port if self.app_port else DEFAULT_APP_PORT

    def is_production(self) -> bool:
        """프로덕션 환경 여부"""
        return self.env == "production"

    def is_development(self) -> bool:
        """개발 환경 여부"""
        return self.env == "development"


@lru_cache()
def get_settings() -> Settings:
    """설정 싱글톤 인스턴스 반환"""
    return Settings()
