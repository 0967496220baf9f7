from abc import ABC, abstractmethod
from typing import Iterator, Optional

# A candidate is an immutable byte string; None marks exhaustion.
Candidate = bytes
END = None


class Producer(ABC):
    """
    Pull contract shared by every candidate source.

    A producer is a single-owner cursor: each call to ``next()`` advances it
    by exactly one candidate and, once exhausted, it keeps returning ``None``.
    ``size()`` is the original cardinality of the source, fixed at
    construction. It is a denominator for progress, never a remaining count.
    """

    @abstractmethod
    def next(self) -> Optional[Candidate]:
        """Returns the next candidate, or None once the source is exhausted."""
        pass

    @abstractmethod
    def size(self) -> int:
        """Total number of candidates this instance was built to produce."""
        pass

    def close(self) -> None:
        """Releases any resource held by the producer."""
        pass

    def __iter__(self) -> Iterator[Candidate]:
        while True:
            candidate = self.next()
            if candidate is END:
                return
            yield candidate

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False
