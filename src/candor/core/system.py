import os
from typing import BinaryIO, Optional, Tuple

NEWLINE = b"\n"


class ScanGuard:
    """
    Protects construction time from very large dictionary files.
    Decides between an exact newline count and an extrapolated estimate.
    """

    @staticmethod
    def file_size(path) -> int:
        return os.stat(path).st_size

    @staticmethod
    def should_estimate(size_bytes: int, scan_limit_bytes: Optional[int]) -> bool:
        """
        True when a scan limit is configured and the file exceeds it.
        Without a limit every file is counted exactly.
        """
        if scan_limit_bytes is None:
            return False
        return size_bytes > scan_limit_bytes

    @staticmethod
    def count_newlines(handle: BinaryIO, chunk_size: int, limit: Optional[int] = None) -> Tuple[int, int]:
        """
        Counts newline bytes read from ``handle`` in fixed-size chunks.
        Stops after ``limit`` bytes when given.
        Returns (newlines, bytes_scanned).
        """
        count = 0
        scanned = 0
        while limit is None or scanned < limit:
            want = chunk_size if limit is None else min(chunk_size, limit - scanned)
            chunk = handle.read(want)
            if not chunk:
                break
            count += chunk.count(NEWLINE)
            scanned += len(chunk)
        return count, scanned

    @staticmethod
    def extrapolate(count: int, scanned: int, total: int) -> int:
        """Scales a partial newline count to the whole file."""
        if scanned <= 0:
            return 0
        return round(count * total / scanned)
