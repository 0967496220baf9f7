class ProducerError(Exception):
    """Base class for every error raised by a candidate producer."""


class SourceOpenError(ProducerError):
    """
    The source behind a producer could not be opened or scanned.
    Raised only at construction time; iteration never raises it.
    """

    def __init__(self, path, reason: str):
        self.path = str(path)
        self.reason = reason
        super().__init__(f"Cannot open source '{self.path}': {reason}")


class InvalidRangeError(ProducerError, ValueError):
    """Bounds or padding given to a RangeProducer are not usable."""


class InvalidScanOptionError(ProducerError, ValueError):
    """Chunk size or scan limit given to a LineProducer is not usable."""
