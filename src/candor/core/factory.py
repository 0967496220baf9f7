from candor.core.lines import LineProducer
from candor.core.producer import Producer
from candor.core.ranges import RangeProducer

KINDS = ("lines", "range")


class ProducerFactory:
    @staticmethod
    def get_producer(kind: str, **params) -> Producer:
        if kind == "lines":
            return LineProducer(params["path"],
                                scan_limit_bytes=params.get("scan_limit_bytes"),
                                chunk_size=params.get("chunk_size", 1024 * 1024))
        elif kind == "range":
            return RangeProducer(params.get("padding_len", 0),
                                 params["lower_bound"],
                                 params["upper_bound"])
        else:
            raise ValueError(
                f"Unknown producer kind: {kind} (expected one of: {', '.join(KINDS)})")

    @staticmethod
    def from_config(kind: str, config: dict, **params) -> Producer:
        """
        Builds a producer with the section of ``config`` named after its kind
        as defaults. Explicit ``params`` take precedence over the config.
        """
        section = dict(config.get(kind, {}))
        section.update({k: v for k, v in params.items() if v is not None})
        return ProducerFactory.get_producer(kind, **section)
