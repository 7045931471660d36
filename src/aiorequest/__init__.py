from .client import get, post, post_json, upload
from .config import RequestConfiguration
from .decoders import BytesDecoder, Decoder, EmptyDecoder, JsonDecoder
from .errors import (
    BodyRetrievalError,
    DecodingError,
    HttpError,
    RequestError,
    TransportError,
    UnknownError,
    UrlError,
)

__all__ = [
    "BodyRetrievalError",
    "BytesDecoder",
    "Decoder",
    "DecodingError",
    "EmptyDecoder",
    "HttpError",
    "JsonDecoder",
    "RequestConfiguration",
    "RequestError",
    "TransportError",
    "UnknownError",
    "UrlError",
    "get",
    "post",
    "post_json",
    "upload",
]
