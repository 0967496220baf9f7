from typing import Optional

from candor.core.errors import InvalidRangeError
from candor.core.producer import Candidate, END, Producer


class RangeProducer(Producer):
    """
    Enumerates ``[lower_bound, upper_bound)`` as zero-padded decimal strings.
    Numbers wider than ``padding_len`` are emitted whole, never truncated.
    """

    def __init__(self, padding_len: int, lower_bound: int, upper_bound: int):
        if padding_len < 0:
            raise InvalidRangeError(
                f"Padding length must be non-negative, got {padding_len}")
        if lower_bound < 0:
            raise InvalidRangeError(
                f"Lower bound must be non-negative, got {lower_bound}")
        if lower_bound > upper_bound:
            raise InvalidRangeError(
                f"Lower bound ({lower_bound}) cannot be greater than upper bound ({upper_bound})")

        self.padding_len = padding_len
        self.lower_bound = lower_bound
        self.upper_bound = upper_bound
        self._current = lower_bound
        self._size = upper_bound - lower_bound

    def next(self) -> Optional[Candidate]:
        if self._current >= self.upper_bound:
            return END
        number = self._current
        self._current += 1
        return str(number).zfill(self.padding_len).encode("ascii")

    def size(self) -> int:
        return self._size
