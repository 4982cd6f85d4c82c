"""
애플리케이션 로깅
서버 시작, 미들웨어, 로그 싱크 장애 등 운영 로그를 loguru로 출력
"""

import sys
from pathlib import Path
from typing import Any, Dict, Optional

from loguru import logger

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"


def setup_logging(
    log_level: str = "INFO",
    log_file: Optional[Path] = None,
    json_logs: bool = False,
    backup_count: int = 5,
    console_output: bool = True,
):
    """
    로깅 시스템 초기화

    Args:
        log_level: 로그 레벨
        log_file: 로그 파일 경로
        json_logs: JSON 형식 로그 사용 여부
        backup_count: 백업 파일 개수
        console_output: 콘솔 출력 여부
    """
    logger.remove()
    level = log_level.upper()

    # 콘솔은 stderr (stdout은 로그 싱크 출력)
    if console_output:
        if json_logs:
            logger.add(sys.stderr, level=level, format="{message}", serialize=True)
        else:
            logger.add(sys.stderr, level=level, format=CONSOLE_FORMAT, colorize=True)

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            str(log_file),
            level=level,
            format="{message}" if json_logs else FILE_FORMAT,
            serialize=json_logs,
            rotation="100 MB",
            retention=backup_count,
            compression="zip",
        )


class LoggerAdapter:
    """컨텍스트 정보를 포함한 로거 어댑터"""

    def __init__(self, name: str, context: Optional[Dict[str, Any]] = None):
        self.name = name
        self.context = context or {}
        self._logger = logger.bind(name=name, **self.context)

    def bind(self, **kwargs) -> "LoggerAdapter":
        """새로운 컨텍스트 바인딩"""
        return LoggerAdapter(self.name, {**self.context, **kwargs})

    def debug(self, message: str, **kwargs):
        self._logger.opt(depth=1).debug(message, **kwargs)

    def info(self, message: str, **kwargs):
        self._logger.opt(depth=1).info(message, **kwargs)

    def warning(self, message: str, **kwargs):
        self._logger.opt(depth=1).warning(message, **kwargs)

    def error(self, message: str, **kwargs):
        self._logger.opt(depth=1).error(message, **kwargs)

    def exception(self, message: str, **kwargs):
        self._logger.opt(depth=1).exception(message, **kwargs)


def get_logger(name: str, **context) -> LoggerAdapter:
    """
    로거 인스턴스 생성

    Args:
        name: 로거 이름
        **context: 컨텍스트 정보

    Returns:
        LoggerAdapter 인스턴스
    """
    return LoggerAdapter(name, context)
