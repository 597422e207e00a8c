"""Input and output collaborators for the fish VM.

``InputQueue`` is the bounded byte queue polled by the ``i`` instruction.
``StreamReader`` adds a daemon thread draining a binary stream into it, so
the VM never blocks waiting for input.
"""

from __future__ import annotations

import logging
import math
import queue
import threading
from typing import BinaryIO, Iterable, Optional

LOGGER = logging.getLogger("fishvm.io")

DEFAULT_QUEUE_CAPACITY = 1024
READ_CHUNK = 1024


class InputQueue:
    """Bounded queue of pending input bytes."""

    def __init__(self, capacity: int = DEFAULT_QUEUE_CAPACITY) -> None:
        self.capacity = max(1, int(capacity))
        self._queue: "queue.Queue[int]" = queue.Queue(maxsize=self.capacity)

    def feed(self, data: Iterable[int]) -> int:
        """Queue bytes; returns how many were accepted.

        Bytes beyond the free capacity are dropped.
        """
        payload = bytes(data)
        accepted = 0
        for byte in payload:
            try:
                self._queue.put_nowait(byte)
            except queue.Full:
                LOGGER.warning("input queue full; dropped %d byte(s)", len(payload) - accepted)
                break
            accepted += 1
        return accepted

    def poll(self) -> Optional[int]:
        try:
            return self._queue.get_nowait()
        except queue.Empty:
            return None

    def pending(self) -> int:
        return self._queue.qsize()


class StreamReader(InputQueue):
    """Input queue fed from a binary stream by a background thread."""

    def __init__(self, stream: BinaryIO, capacity: int = DEFAULT_QUEUE_CAPACITY) -> None:
        super().__init__(capacity)
        self._stream = stream
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self.eof = threading.Event()

    def start(self) -> "StreamReader":
        if self._thread and self._thread.is_alive():
            return self
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._reader_loop, name="fishvm-stdin", daemon=True)
        self._thread.start()
        return self

    def stop(self) -> None:
        self._stop_event.set()

    def _read_chunk(self) -> bytes:
        read1 = getattr(self._stream, "read1", None)
        if read1 is not None:
            return read1(READ_CHUNK)
        return self._stream.read(READ_CHUNK)

    def _reader_loop(self) -> None:
        while not self._stop_event.is_set():
            try:
                chunk = self._read_chunk()
            except (OSError, ValueError) as exc:
                LOGGER.debug("input stream closed: %s", exc)
                break
            if not chunk:
                break
            for byte in chunk:
                # a full queue blocks only this thread, never the VM
                while not self._stop_event.is_set():
                    try:
                        self._queue.put(byte, timeout=0.1)
                        break
                    except queue.Full:
                        continue
        self.eof.set()


def format_number(value: float) -> str:
    """Render a value the way ``n`` prints it."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    if value == 0 and math.copysign(1.0, value) < 0:
        return "-0"
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    text = repr(value)
    if "e" in text:
        mantissa, exponent = text.split("e")
        sign = "-" if exponent.startswith("-") else "+"
        digits = exponent.lstrip("+-").rjust(2, "0")
        text = f"{mantissa}e{sign}{digits}"
    return text


__all__ = ["InputQueue", "StreamReader", "format_number", "DEFAULT_QUEUE_CAPACITY"]
