"""
로그 싱크 테스트
"""

import io
import json
import threading
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime

import pytest

from delivery_pricing.monitoring.log_sink import LogEntry, LogLevel, LogSink


class TestLogEntry:
    """로그 항목 포맷 테스트"""

    def test_format_field_order_with_provider(self):
        entry = LogEntry(LogLevel.INFO, "priced", "DHL", datetime(2025, 1, 2, 3, 4, 5))

        line = entry.format()

        assert line == (
            '{"level": "INFO", "provider": "DHL", '
            '"timestamp": "2025-01-02 03:04:05", "message": "priced"}'
        )
        assert list(json.loads(line)) == ["level", "provider", "timestamp", "message"]

    def test_format_without_provider(self):
        entry = LogEntry(LogLevel.WARN, "no provider", None, datetime(2025, 1, 2, 3, 4, 5))

        assert list(json.loads(entry.format())) == ["level", "timestamp", "message"]

    def test_format_escapes_quotes_and_newlines(self):
        entry = LogEntry(LogLevel.ERROR, 'bad "value"\nnext')

        line = entry.format()

        assert "\n" not in line
        assert json.loads(line)["message"] == 'bad "value"\nnext'


class TestLogSink:
    """로그 싱크 테스트"""

    def test_writes_in_submission_order(self, log_sink, read_log_lines):
        for i in range(50):
            log_sink.info(f"message {i}", "UPS")

        lines = read_log_lines()

        assert [line["message"] for line in lines] == [f"message {i}" for i in range(50)]

    def test_levels(self, log_sink, read_log_lines):
        log_sink.info("a")
        log_sink.warn("b", "DPD")
        log_sink.error("c", "DHL")
        log_sink.emit("INFO", "d")

        assert [line["level"] for line in read_log_lines()] == ["INFO", "WARN", "ERROR", "INFO"]

    def test_entries_before_start_are_kept(self):
        stream = io.StringIO()
        sink = LogSink(stream=stream)
        sink.info("early")
        sink.info("later")

        assert stream.getvalue() == ""

        sink.start()
        sink.stop(timeout=5)

        assert [json.loads(line)["message"] for line in stream.getvalue().splitlines()] == [
            "early",
            "later",
        ]

    def test_emit_does_not_write(self):
        """emit은 큐에 넘기기만 한다"""
        stream = io.StringIO()
        sink = LogSink(stream=stream)

        sink.error("queued only")

        assert stream.getvalue() == ""

    def test_start_is_idempotent(self, log_stream):
        sink = LogSink(stream=log_stream)
        sink.start()
        first = sink._thread
        sink.start()

        assert sink._thread is first
        assert sink.running
        sink.stop(timeout=5)
        assert not sink.running

    def test_stop_drains_queue(self):
        stream = io.StringIO()
        sink = LogSink(stream=stream)
        sink.start()
        for i in range(200):
            sink.info(f"m{i}")

        sink.stop(timeout=5)

        assert len(stream.getvalue().splitlines()) == 200

    def test_stop_timeout_keeps_single_consumer(self):
        """stop() 시간 초과 후 start()는 두 번째 소비자를 만들지 않음"""
        release = threading.Event()
        writing = threading.Event()

        class BlockingStream(io.StringIO):
            def write(self, s):
                writing.set()
                release.wait(5)
                return super().write(s)

        stream = BlockingStream()
        sink = LogSink(stream=stream)
        sink.start()
        first = sink._thread
        for i in range(3):
            sink.info(f"m{i}")
        assert writing.wait(5)

        sink.stop(timeout=0.05)

        assert sink.running
        assert sink._thread is first
        sink.start()
        assert sink._thread is first

        sink.stop(timeout=0.05)
        # m1, m2 와 종료 신호 하나만 대기 중
        assert sink._queue.qsize() == 3

        release.set()
        sink.stop(timeout=5)

        assert not sink.running
        assert sink._thread is None
        assert [json.loads(line)["message"] for line in stream.getvalue().splitlines()] == [
            "m0",
            "m1",
            "m2",
        ]

    def test_concurrent_producers(self, log_sink, read_log_lines):
        """N개 동시 생산자 -> N개의 온전한 줄"""
        n = 200

        def produce(i):
            log_sink.info(f"request {i}", "AMAZON")

        with ThreadPoolExecutor(max_workers=20) as executor:
            list(executor.map(produce, range(n)))

        lines = read_log_lines()

        assert len(lines) == n
        assert sorted(line["message"] for line in lines) == sorted(f"request {i}" for i in range(n))

    def test_per_producer_order_is_kept(self, log_sink, read_log_lines):
        def produce(worker):
            for seq in range(30):
                log_sink.info(f"{worker}:{seq}")

        threads = [threading.Thread(target=produce, args=(w,)) for w in range(5)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        lines = read_log_lines()
        for worker in range(5):
            seqs = [
                int(line["message"].split(":")[1])
                for line in lines
                if line["message"].startswith(f"{worker}:")
            ]
            assert seqs == list(range(30))

    def test_write_failure_is_not_propagated(self):
        """닫힌 스트림에 대한 쓰기 실패는 생산자에게 전파되지 않음"""
        stream = io.StringIO()
        stream.close()
        sink = LogSink(stream=stream)
        sink.start()

        sink.error("lost")
        sink.info("also lost")
        sink.flush()

        assert sink.write_failures == 2
        assert sink.running
        sink.stop(timeout=5)

    def test_invalid_level_rejected_at_emit(self, log_sink):
        with pytest.raises(ValueError):
            log_sink.emit("DEBUG", "unsupported")
