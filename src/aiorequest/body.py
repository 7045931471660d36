import uuid
from dataclasses import dataclass, field

from .codec import DEFAULT_CODEC, Codec
from .errors import UrlError
from .types import Params
from .url import encode_query

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"
JSON_CONTENT_TYPE = "application/json; charset=utf-8"
FILE_CONTENT_TYPE = "application/octet-stream"


@dataclass(frozen=True)
class Body:
    content: bytes | None
    headers: dict[str, str] = field(default_factory=dict)


def form_body(params: Params | None = None) -> Body:
    headers = {"Content-Type": FORM_CONTENT_TYPE}
    try:
        query = encode_query(params or {})
    except UnicodeEncodeError as exc:
        raise UrlError(str(params), exc) from exc
    if not query:
        return Body(None, headers)
    return Body(query.encode("utf-8"), headers)


def json_body(value: object, codec: Codec | None = None) -> Body:
    try:
        content = (codec or DEFAULT_CODEC).encode(value)
    except Exception as exc:
        raise UrlError(repr(value), exc) from exc
    return Body(content, {"Content-Type": JSON_CONTENT_TYPE})


def make_boundary() -> str:
    return f"Boundary-{str(uuid.uuid4()).upper()}"


def multipart_body(
    data: bytes,
    *,
    filename: str,
    key: str = "file",
    params: Params | None = None,
    boundary: str | None = None,
) -> Body:
    """
    Builds a multipart/form-data body holding every entry of ``params`` as a
    plain field followed by ``data`` as a file field named ``key``. The body
    ends with the closing boundary and no trailing CRLF.
    """
    boundary = boundary or make_boundary()
    prefix = f"--{boundary}\r\n"
    parts: list[bytes] = []

    def append(text: str) -> None:
        try:
            parts.append(text.encode("utf-8"))
        except UnicodeEncodeError as exc:
            raise UrlError(text, exc) from exc

    for name, value in (params or {}).items():
        append(prefix)
        append(f'Content-Disposition: form-data; name="{name}"\r\n\r\n')
        append(f"{value}\r\n")
    append(prefix)
    append(
        f'Content-Disposition: form-data; name="{key}"; filename="{filename}"\r\n'
    )
    append(f"Content-Type: {FILE_CONTENT_TYPE}\r\n\r\n")
    parts.append(bytes(data))
    append("\r\n")
    append(f"--{boundary}--")

    content = b"".join(parts)
    return Body(
        content,
        {
            "Content-Length": str(len(content)),
            "Content-Type": f"multipart/form-data; boundary={boundary}",
        },
    )
