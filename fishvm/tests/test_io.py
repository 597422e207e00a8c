import io
import math

import pytest

from fishvm.io import InputQueue, StreamReader, format_number


def test_input_queue_is_fifo_and_non_blocking():
    queue = InputQueue()
    assert queue.poll() is None
    assert queue.feed(b"ab") == 2
    assert queue.pending() == 2
    assert queue.poll() == ord("a")
    assert queue.poll() == ord("b")
    assert queue.poll() is None


def test_input_queue_drops_bytes_beyond_capacity(caplog):
    queue = InputQueue(capacity=2)
    assert queue.feed(b"abc") == 2
    assert "dropped 1 byte" in caplog.text
    assert [queue.poll(), queue.poll(), queue.poll()] == [97, 98, None]


def test_stream_reader_drains_stream_in_background():
    reader = StreamReader(io.BytesIO(b"hi")).start()
    assert reader.eof.wait(2.0)
    assert reader.poll() == ord("h")
    assert reader.poll() == ord("i")
    assert reader.poll() is None
    reader.stop()


def test_stream_reader_survives_closed_stream():
    stream = io.BytesIO(b"x")
    stream.close()
    reader = StreamReader(stream).start()
    assert reader.eof.wait(2.0)
    assert reader.poll() is None


@pytest.mark.parametrize(
    "value,expected",
    [
        (3.0, "3"),
        (-2.0, "-2"),
        (0.0, "0"),
        (0.5, "0.5"),
        (-0.25, "-0.25"),
        (-0.0, "-0"),
        (1e21, "1e+21"),
        (1.5e-07, "1.5e-07"),
        (math.inf, "+Inf"),
        (-math.inf, "-Inf"),
        (math.nan, "NaN"),
    ],
)
def test_format_number(value, expected):
    assert format_number(value) == expected
