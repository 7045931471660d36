import json
from typing import Any, Protocol


class Codec(Protocol):
    def encode(self, value: Any) -> bytes:
        ...

    def decode(self, data: bytes) -> Any:
        ...


class JsonCodec:
    """
    Standard library backed JSON codec. Pass configured ``json.JSONEncoder``
    or ``json.JSONDecoder`` instances to change how values are (de)serialized.
    """

    def __init__(
        self,
        encoder: json.JSONEncoder | None = None,
        decoder: json.JSONDecoder | None = None,
    ) -> None:
        self.encoder = encoder or json.JSONEncoder(
            ensure_ascii=False, separators=(",", ":")
        )
        self.decoder = decoder or json.JSONDecoder()

    def encode(self, value: Any) -> bytes:
        return self.encoder.encode(value).encode("utf-8")

    def decode(self, data: bytes) -> Any:
        return self.decoder.decode(data.decode("utf-8"))


DEFAULT_CODEC = JsonCodec()
