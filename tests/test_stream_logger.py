import io

import pytest

from xmppstanza.stream_logger import (
    RECV_PREFIX,
    SEND_PREFIX,
    SEPARATOR,
    ShortWriteError,
    StreamLogger,
    new_stream_logger,
)


class HalfWriter:
    def __init__(self):
        self.received = b""

    def write(self, data):
        self.received += data[: len(data) // 2]
        return len(data) // 2


def test_new_stream_logger_without_log_returns_conn():
    conn = io.BytesIO()
    assert new_stream_logger(conn, None) is conn


def test_new_stream_logger_with_log_wraps():
    conn, log = io.BytesIO(), io.BytesIO()
    wrapped = new_stream_logger(conn, log)
    assert isinstance(wrapped, StreamLogger)
    assert wrapped.socket is conn and wrapped.log_file is log


def test_read_logs_received_data():
    payload = b"<stream:features/>"
    log = io.BytesIO()
    logger = StreamLogger(io.BytesIO(payload), log)
    assert logger.read(1024) == payload
    assert log.getvalue() == RECV_PREFIX + payload + SEPARATOR
    assert log.getvalue() == b"RECV:\n" + payload + b"\n\n"


def test_read_empty_logs_nothing():
    log = io.BytesIO()
    logger = StreamLogger(io.BytesIO(b""), log)
    assert logger.read(10) == b""
    assert log.getvalue() == b""


def test_write_sends_and_logs():
    payload = b"<presence/>"
    conn, log = io.BytesIO(), io.BytesIO()
    logger = StreamLogger(conn, log)
    assert logger.write(payload) == len(payload)
    assert conn.getvalue() == payload
    assert log.getvalue() == SEND_PREFIX + payload + SEPARATOR
    assert log.getvalue() == b"SEND:\n" + payload + b"\n\n"


def test_short_write_raises():
    log = io.BytesIO()
    logger = StreamLogger(HalfWriter(), log)
    with pytest.raises(ShortWriteError):
        logger.write(b"<message/>")
    assert log.getvalue() == SEND_PREFIX


def test_multiple_reads_accumulate_in_log():
    log = io.BytesIO()
    logger = StreamLogger(io.BytesIO(b"abcdef"), log)
    first = logger.read(3)
    second = logger.read(3)
    assert first + second == b"abcdef"
    assert log.getvalue() == RECV_PREFIX + first + SEPARATOR + RECV_PREFIX + second + SEPARATOR