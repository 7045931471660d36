from dataclasses import dataclass


class RequestError(Exception):
    description = "Request failed"

    def __str__(self) -> str:
        return self.description


@dataclass
class UrlError(RequestError):
    url: str
    cause: Exception | None = None

    description = "Incorrect URL"


@dataclass
class TransportError(RequestError):
    cause: Exception

    @property  # type: ignore[override]
    def description(self) -> str:
        return str(self.cause) or type(self.cause).__name__


@dataclass
class BodyRetrievalError(RequestError):
    cause: Exception | None = None

    description = "Error getting body data"


@dataclass
class HttpError(RequestError):
    status: int
    reason: str
    body: bytes

    @property  # type: ignore[override]
    def description(self) -> str:
        return self.reason


@dataclass
class DecodingError(RequestError):
    cause: Exception

    @property  # type: ignore[override]
    def description(self) -> str:
        return str(self.cause) or type(self.cause).__name__


@dataclass
class UnknownError(RequestError):
    cause: Exception | None = None

    description = "Unknown error"
