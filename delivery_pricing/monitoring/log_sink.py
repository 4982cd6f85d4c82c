"""
비동기 로그 싱크
여러 요청 핸들러의 로그를 단일 소비자 스레드로 직렬화하여 출력
"""

import json
import queue
import sys
import threading
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, TextIO

from loguru import logger

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


class LogLevel(str, Enum):
    """로그 레벨"""

    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"


@dataclass(frozen=True)
class LogEntry:
    """로그 항목"""

    level: LogLevel
    message: str
    provider: Optional[str] = None
    timestamp: datetime = field(default_factory=datetime.now)

    def format(self) -> str:
        """한 줄 구조화 로그 (필드 순서 고정: level, provider, timestamp, message)"""
        data = {"level": self.level.value}
        if self.provider:
            data["provider"] = self.provider
        data["timestamp"] = self.timestamp.strftime(TIMESTAMP_FORMAT)
        data["message"] = self.message
        return json.dumps(data, ensure_ascii=False)


class LogSink:
    """
    로그 싱크

    emit()은 항목을 만들어 큐에 넘기기만 하고, 포맷팅과 쓰기는
    start()로 시작된 단일 소비자 스레드가 제출 순서대로 처리한다.
    """

    _STOP = object()

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream if stream is not None else sys.stdout
        self._queue: "queue.Queue" = queue.Queue()
        self._thread: Optional[threading.Thread] = None
        self._lock = threading.Lock()
        self._stopping = False
        self.write_failures = 0

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def emit(self, level: LogLevel, message: str, provider: Optional[str] = None) -> None:
        """로그 항목 제출 (쓰기 대기 없음)"""
        self._queue.put_nowait(LogEntry(LogLevel(level), message, provider or None))

    def info(self, message: str, provider: Optional[str] = None) -> None:
        self.emit(LogLevel.INFO, message, provider)

    def warn(self, message: str, provider: Optional[str] = None) -> None:
        self.emit(LogLevel.WARN, message, provider)

    def error(self, message: str, provider: Optional[str] = None) -> None:
        self.emit(LogLevel.ERROR, message, provider)

    def start(self) -> None:
        """소비자 스레드 시작"""
        with self._lock:
            if self.running:
                return
            self._stopping = False
            self._thread = threading.Thread(target=self.run, name="log-sink", daemon=True)
            self._thread.start()
        logger.debug("로그 싱크 시작됨")

    def run(self) -> None:
        """큐 처리 루프 (stop() 전까지 반환하지 않음)"""
        while True:
            entry = self._queue.get()
            try:
                if entry is self._STOP:
                    return
                self._write(entry)
            finally:
                self._queue.task_done()

    def _write(self, entry: LogEntry) -> None:
        try:
            self.stream.write(entry.format() + "\n")
            self.stream.flush()
        except Exception as e:
            # 쓰기 실패는 재시도하지 않고 생산자에게 전파하지 않음
            self.write_failures += 1
            logger.warning(f"로그 싱크 쓰기 실패: {e}")

    def flush(self) -> None:
        """지금까지 제출된 항목이 모두 기록될 때까지 대기"""
        if self.running:
            self._queue.join()

    def stop(self, timeout: Optional[float] = None) -> None:
        """
        남은 항목을 모두 기록한 뒤 소비자 스레드 종료

        timeout 안에 끝나지 않으면 소비자는 계속 실행 중으로 남고,
        다시 stop()을 호출하여 종료를 기다릴 수 있다.
        """
        with self._lock:
            thread = self._thread
            if thread is None:
                return
            # 종료 신호는 소비자당 한 번만
            if not self._stopping:
                self._queue.put_nowait(self._STOP)
                self._stopping = True
            thread.join(timeout)
            if thread.is_alive():
                logger.warning(f"로그 싱크 종료 대기 시간 초과 (남은 항목 {self._queue.qsize()}개)")
                return
            self._thread = None
            self._stopping = False
        logger.debug("로그 싱크 중지됨")
