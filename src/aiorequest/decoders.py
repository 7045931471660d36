import abc
import dataclasses
from collections.abc import Callable
from typing import Any, Generic, TypeVar

from .codec import DEFAULT_CODEC, Codec

T = TypeVar("T")


class Decoder(Generic[T], metaclass=abc.ABCMeta):
    @abc.abstractmethod
    def decode(self, data: bytes) -> T:
        raise NotImplementedError()


DecodeStrategy = Decoder[T] | type[Decoder[T]] | Callable[[bytes], T]


def resolve(strategy: DecodeStrategy[T]) -> Callable[[bytes], T]:
    """
    Decoder instances and Decoder subclasses use ``decode``; anything else is
    called with the body as a plain ``bytes -> T`` function.
    """
    if isinstance(strategy, Decoder):
        return strategy.decode
    if isinstance(strategy, type) and issubclass(strategy, Decoder):
        return strategy().decode
    return strategy  # type: ignore[return-value]


class EmptyDecoder(Decoder[None]):
    def decode(self, data: bytes) -> None:
        return None


class BytesDecoder(Decoder[bytes]):
    def decode(self, data: bytes) -> bytes:
        return data


class JsonDecoder(Decoder[T]):
    """
    Decodes a JSON body. ``into`` converts the decoded value: a dataclass is
    built from a JSON object's members, any other callable gets the decoded
    value. With ``many`` the body must be a JSON array and ``into`` is applied
    to every element.

    The codec used is, in order: ``codec``, ``into.json_codec`` when ``into``
    declares one, the default codec.
    """

    def __init__(
        self,
        into: Callable[[Any], T] | None = None,
        *,
        codec: Codec | None = None,
        many: bool = False,
    ) -> None:
        self.into = into
        self.codec = codec or getattr(into, "json_codec", None) or DEFAULT_CODEC
        self.many = many

    def convert(self, value: Any) -> Any:
        if self.into is None:
            return value
        if dataclasses.is_dataclass(self.into) and isinstance(value, dict):
            return self.into(**value)
        return self.into(value)

    def decode(self, data: bytes) -> T:
        value = self.codec.decode(data)
        if not self.many:
            return self.convert(value)  # type: ignore[no-any-return]
        if not isinstance(value, list):
            raise TypeError(f"expected a JSON array, got {type(value).__name__}")
        return [self.convert(item) for item in value]  # type: ignore[return-value]
