"""Connection wrapper that copies traffic to a log file."""

from __future__ import annotations

from typing import BinaryIO

RECV_PREFIX = b"RECV:\n"
SEND_PREFIX = b"SEND:\n"
SEPARATOR = b"\n\n"


class ShortWriteError(OSError):
    """A write accepted fewer bytes than it was given."""

    def __init__(self) -> None:
        super().__init__("short write")


class StreamLogger:
    """Read and write through a connection, logging both directions."""

    def __init__(self, socket: BinaryIO, log_file: BinaryIO) -> None:
        self.socket = socket
        self.log_file = log_file

    def read(self, size: int = -1) -> bytes:
        """Read from the connection and log what arrived."""
        data = self.socket.read(size)
        if data:
            self.log_file.write(RECV_PREFIX)
            self.log_file.write(data)
            self.log_file.write(SEPARATOR)
        return data

    def write(self, data: bytes) -> int:
        """Write to the connection, then to the log.

        Raises ShortWriteError if either target takes only part of the data.
        """
        self.log_file.write(SEND_PREFIX)
        for target in (self.socket, self.log_file):
            written = target.write(data)
            if written is not None and written != len(data):
                raise ShortWriteError()
        self.log_file.write(SEPARATOR)
        return len(data)


def new_stream_logger(conn: BinaryIO, log_file: BinaryIO | None) -> BinaryIO | StreamLogger:
    """Wrap ``conn`` in a StreamLogger, or return it unchanged without a log file."""
    if log_file is None:
        return conn
    return StreamLogger(conn, log_file)