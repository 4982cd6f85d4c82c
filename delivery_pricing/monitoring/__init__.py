"""
모니터링 시스템
운영 로깅과 도메인 이벤트 로그 싱크
"""

from .log_sink import LogEntry, LogLevel, LogSink
from .logger import get_logger, setup_logging

__all__ = [
    "setup_logging",
    "get_logger",
    "LogSink",
    "LogEntry",
    "LogLevel",
]
