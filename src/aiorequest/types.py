from collections.abc import Callable, Mapping

Seconds = float | int

Params = Mapping[str, str]
Headers = Mapping[str, str]

Sanitizer = Callable[[bytes], bytes]
