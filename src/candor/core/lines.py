import logging
from pathlib import Path
from typing import Optional

from candor.core.errors import InvalidScanOptionError, SourceOpenError
from candor.core.producer import Candidate, END, Producer
from candor.core.system import ScanGuard

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 1024 * 1024


class LineProducer(Producer):
    """
    Streams the newline-delimited records of a file as raw byte candidates.

    Construction scans the whole file once to count newline bytes, which is
    proportional to the file length. With ``scan_limit_bytes`` set, files
    larger than the limit get an extrapolated size instead.

    ``size()`` counts newline bytes, so a final line without a terminator is
    still produced but is not included in the size.
    """

    def __init__(self, path, scan_limit_bytes: Optional[int] = None, chunk_size: int = DEFAULT_CHUNK_SIZE):
        self._reader = None
        if chunk_size <= 0:
            raise InvalidScanOptionError(
                f"Chunk size must be positive, got {chunk_size}")
        if scan_limit_bytes is not None and scan_limit_bytes < 1:
            raise InvalidScanOptionError(
                f"Scan limit must be at least 1 byte, got {scan_limit_bytes}")

        self.path = Path(path)
        self.size_is_estimate = False
        self._size = self._scan(scan_limit_bytes, chunk_size)

        try:
            self._reader = open(self.path, "rb")
        except OSError as e:
            raise SourceOpenError(self.path, e.strerror or str(e)) from e

        logger.debug("Opened %s (%d lines%s)", self.path, self._size,
                     ", estimated" if self.size_is_estimate else "")

    def _scan(self, scan_limit_bytes: Optional[int], chunk_size: int) -> int:
        try:
            total = ScanGuard.file_size(self.path)
            estimate = ScanGuard.should_estimate(total, scan_limit_bytes)
            with open(self.path, "rb") as handle:
                count, scanned = ScanGuard.count_newlines(
                    handle, chunk_size, limit=scan_limit_bytes if estimate else None)
        except OSError as e:
            raise SourceOpenError(self.path, e.strerror or str(e)) from e

        if estimate:
            self.size_is_estimate = True
            return ScanGuard.extrapolate(count, scanned, total)
        return count

    def next(self) -> Optional[Candidate]:
        if self._reader is None:
            return END

        try:
            line = self._reader.readline()
        except (OSError, ValueError) as e:
            # Read failures end the sequence early instead of aborting the run
            logger.debug("Unable to read from %s: %s", self.path, e)
            self.close()
            return END

        if not line:
            self.close()
            return END
        return line

    def size(self) -> int:
        return self._size

    def close(self) -> None:
        if self._reader is not None:
            self._reader.close()
            self._reader = None

    def __del__(self):
        self.close()
