from dataclasses import dataclass, field
from typing import Tuple
from urllib.parse import urlsplit

from soappost.http.errors import TransportSetupError
from soappost.settings import POSTER_SETTINGS

SOAP_HEADERS: Tuple[Tuple[str, str], ...] = tuple(POSTER_SETTINGS.headers)

_HTTP_SCHEMES = ("http", "https")


@dataclass
class SoapRequest:
    url: str
    payload: bytes | None = None
    headers: Tuple[Tuple[str, str], ...] = field(default=SOAP_HEADERS)
    timeout: float | None = None

    def header_dict(self) -> dict[str, str]:
        # dicts keep insertion order, which is the order sent on the wire
        return dict(self.headers)

    def validate(self) -> "SoapRequest":
        if not self.url or not isinstance(self.url, str):
            raise TransportSetupError(f"Invalid URL provided: {self.url!r}", self.url)

        try:
            parts = urlsplit(self.url.strip())
        except ValueError as exc:
            raise TransportSetupError(f"Malformed URL: {self.url!r}", self.url) from exc

        if parts.scheme.lower() not in _HTTP_SCHEMES:
            raise TransportSetupError(
                f"URL must start with http:// or https://: {self.url!r}", self.url
            )
        if not parts.hostname:
            raise TransportSetupError(f"URL has no host: {self.url!r}", self.url)
        try:
            parts.hostname.encode("idna")
        except UnicodeError as exc:
            raise TransportSetupError(
                f"Host label empty or too long: {parts.hostname!r}", self.url
            ) from exc

        if self.payload is not None and not isinstance(self.payload, (bytes, bytearray)):
            raise TransportSetupError(
                f"Payload must be bytes, got {type(self.payload).__name__}", self.url
            )
        return self
