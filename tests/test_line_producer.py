import gc
import logging

import pytest
from candor.core.errors import InvalidScanOptionError, ProducerError, SourceOpenError
from candor.core.lines import LineProducer
from candor.core.system import ScanGuard


def test_size_counts_newline_bytes(write_file):
    path = write_file(b"alpha\nbeta\ngamma\n")
    producer = LineProducer(path)
    assert producer.size() == 3
    assert producer.size_is_estimate is False
    producer.close()


def test_yields_raw_lines_in_order(write_file):
    path = write_file(b"alpha\nbeta\r\n\ngamma\n")
    producer = LineProducer(path)

    assert producer.next() == b"alpha\n"
    assert producer.next() == b"beta\r\n"
    assert producer.next() == b"\n"
    assert producer.next() == b"gamma\n"
    assert producer.next() is None


def test_exhausted_state_is_stable(write_file):
    producer = LineProducer(write_file(b"one\n"))
    assert producer.next() == b"one\n"
    for _ in range(3):
        assert producer.next() is None


def test_unterminated_last_line_is_produced_but_not_counted(write_file):
    """
    Size counts newline bytes, so a trailing line without a terminator
    yields one more candidate than size() reports.
    """
    producer = LineProducer(write_file(b"a\nb\nc"))
    candidates = list(producer)

    assert candidates == [b"a\n", b"b\n", b"c"]
    assert len(candidates) == producer.size() + 1


def test_empty_file(write_file):
    producer = LineProducer(write_file(b""))
    assert producer.size() == 0
    assert producer.next() is None


def test_size_is_unchanged_by_consumption(write_file):
    producer = LineProducer(write_file(b"x\ny\nz\n"))
    before = producer.size()
    producer.next()
    during = producer.size()
    list(producer)
    assert before == during == producer.size() == 3


def test_non_utf8_bytes_are_passed_through(write_file):
    data = b"\xff\xfe\x00pass\n\xc3\x28\n"
    producer = LineProducer(write_file(data))
    assert list(producer) == [b"\xff\xfe\x00pass\n", b"\xc3\x28\n"]


def test_missing_file_fails_at_construction(tmp_path):
    missing = tmp_path / "nope.txt"
    with pytest.raises(SourceOpenError) as excinfo:
        LineProducer(missing)
    assert excinfo.value.path == str(missing)
    assert isinstance(excinfo.value, ProducerError)
    assert isinstance(excinfo.value.__cause__, OSError)


def test_directory_fails_at_construction(tmp_path):
    with pytest.raises(SourceOpenError):
        LineProducer(tmp_path)


class _FailingReader:
    closed = False

    def readline(self):
        raise OSError("device went away")

    def close(self):
        self.closed = True


def test_read_error_ends_sequence_and_is_logged(write_file, caplog):
    producer = LineProducer(write_file(b"a\nb\n"))
    producer._reader.close()
    failing = _FailingReader()
    producer._reader = failing

    with caplog.at_level(logging.DEBUG, logger="candor.core.lines"):
        assert producer.next() is None

    assert failing.closed
    assert "device went away" in caplog.text
    assert producer.next() is None
    assert producer.size() == 2


def test_handle_released_on_exhaustion(write_file):
    producer = LineProducer(write_file(b"a\n"))
    reader = producer._reader
    list(producer)
    assert reader.closed
    assert producer._reader is None


def test_context_manager_closes_handle(write_file):
    with LineProducer(write_file(b"a\nb\n")) as producer:
        reader = producer._reader
        assert producer.next() == b"a\n"
    assert reader.closed
    assert producer.next() is None


def test_scan_limit_estimates_large_files(write_file):
    # 100 lines of 10 bytes each; scan only the first 100 bytes
    path = write_file(b"123456789\n" * 100)
    producer = LineProducer(path, scan_limit_bytes=100, chunk_size=32)

    assert producer.size_is_estimate is True
    assert producer.size() == 100
    assert len(list(producer)) == 100


def test_scan_limit_not_reached_counts_exactly(write_file):
    path = write_file(b"a\nb\n")
    producer = LineProducer(path, scan_limit_bytes=1024)
    assert producer.size_is_estimate is False
    assert producer.size() == 2
    producer.close()


def test_small_chunks_count_exactly(write_file):
    path = write_file(b"ab\ncd\nef\ngh\n")
    producer = LineProducer(path, chunk_size=1)
    assert producer.size() == 4
    producer.close()


@pytest.mark.parametrize("options", [
    {"chunk_size": 0},
    {"chunk_size": -4},
    {"scan_limit_bytes": 0},
    {"scan_limit_bytes": -1},
])
def test_unusable_scan_options_are_rejected(write_file, options):
    path = write_file(b"a\nb\nc\n")
    with pytest.raises(InvalidScanOptionError) as excinfo:
        LineProducer(path, **options)
    assert isinstance(excinfo.value, ProducerError)
    assert isinstance(excinfo.value, ValueError)


def test_one_byte_scan_limit_is_accepted(write_file):
    producer = LineProducer(write_file(b"\n\n\n\n"), scan_limit_bytes=1)
    assert producer.size_is_estimate is True
    assert producer.size() == 4
    producer.close()


def test_handle_released_when_dropped(write_file):
    producer = LineProducer(write_file(b"a\nb\nc\n"))
    assert producer.next() == b"a\n"
    reader = producer._reader

    del producer
    gc.collect()

    assert reader.closed


def test_scan_handle_closed_before_construction_returns(write_file, monkeypatch):
    scan_handles = []
    original = ScanGuard.count_newlines

    def recording_count(handle, chunk_size, limit=None):
        scan_handles.append(handle)
        return original(handle, chunk_size, limit)

    monkeypatch.setattr(ScanGuard, "count_newlines", staticmethod(recording_count))
    producer = LineProducer(write_file(b"a\nb\n"))

    assert len(scan_handles) == 1
    assert scan_handles[0].closed
    assert scan_handles[0] is not producer._reader
    assert not producer._reader.closed
    producer.close()
