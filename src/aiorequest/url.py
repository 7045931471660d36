from urllib.parse import quote, urlsplit, urlunsplit

from .errors import UrlError
from .types import Params

# RFC 3986 unreserved characters, everything else is percent-encoded.
SAFE = "-._~"


def encode_component(value: str) -> str:
    return quote(value, safe=SAFE, encoding="utf-8", errors="strict")


def encode_query(params: Params) -> str:
    """
    Encodes ``params`` as ``key=value`` pairs joined by ``&``, in the mapping's
    iteration order. Raises UnicodeEncodeError for strings that have no UTF-8
    representation.
    """
    return "&".join(
        f"{encode_component(key)}={encode_component(value)}"
        for key, value in params.items()
    )


def build_url(base: str, params: Params | None = None) -> str:
    """
    Returns ``base`` with its query string replaced by ``params``. When
    ``params`` is empty, ``base`` is only validated and returned unchanged.
    """
    try:
        parts = urlsplit(base)
        # raises on a non-numeric or out of range port
        parts.port
    except ValueError as exc:
        raise UrlError(base, exc) from exc
    if not parts.scheme or not parts.hostname:
        raise UrlError(base)
    if not params:
        return base
    try:
        query = encode_query(params)
    except UnicodeEncodeError as exc:
        raise UrlError(base, exc) from exc
    return urlunsplit(parts._replace(query=query))
