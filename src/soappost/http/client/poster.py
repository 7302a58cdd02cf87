import io
from typing import Any
from urllib.parse import unquote_plus

import requests
from requests.exceptions import (
    InvalidHeader,
    InvalidSchema,
    InvalidURL,
    MissingSchema,
    RequestException,
)
from urllib3.exceptions import HTTPError as Urllib3Error, LocationValueError

from soappost.http.client.request import SoapRequest
from soappost.http.client.result import PostResult
from soappost.http.errors import TransportSetupError
from soappost.settings import POSTER_SETTINGS
from soappost.util.logging import get_logger
from soappost.util.serialize import message_to_bytes
from soappost.util.streams import copy_stream
from soappost.util.verbose import verbose

log = get_logger(__name__)

# Raised before anything is sent
_SETUP_ERRORS = (MissingSchema, InvalidSchema, InvalidURL, InvalidHeader, LocationValueError)


class _BodyBuffer(io.BytesIO):
    """BytesIO that keeps its contents readable after copy_stream closes it."""

    value = b""

    def close(self):
        if not self.closed:
            self.value = self.getvalue()
        super().close()


def decode_reason(reason: str | None) -> str | None:
    """URL-decode an HTTP reason phrase as UTF-8 (``+`` becomes a space)."""
    if not reason:
        return None
    return unquote_plus(reason, encoding="utf-8")


def build_request(request: SoapRequest) -> requests.PreparedRequest:
    try:
        return requests.Request(
            "POST",
            request.url,
            headers=request.header_dict(),
            data=request.payload,
        ).prepare()
    except _SETUP_ERRORS as exc:
        raise TransportSetupError(str(exc), request.url) from exc


class SoapPoster:
    """
    Synchronous SOAP-over-HTTP poster.

    Every call to `post` opens its own session and connection and releases
    both before returning. Instances hold configuration only, so one poster
    may be shared between threads.

    Args:
        timeout (float, optional): Seconds to wait for connect and read.
            ``None`` waits forever.
        verbosity (str | bool, optional): Explicit verbosity switch. When
            unset, the ``SOAPPOST_VERBOSE`` environment variable is read on
            every call.
    """

    def __init__(
        self,
        timeout: float | None = None,
        verbosity: str | bool | None = None,
    ):
        self.timeout = timeout if timeout is not None else POSTER_SETTINGS.timeout
        self.verbosity = verbosity

    def build_session(self) -> requests.Session:
        return requests.Session()

    def post(self, url: str, payload: Any = None) -> PostResult:
        """
        POST `payload` to `url` with the fixed SOAP headers.

        Args:
            url (str): Absolute http(s) URL of the web service.
            payload: Request body; bytes, str or an lxml element. ``None``
                sends no body.

        Returns:
            PostResult: ``(body, 200)`` on success, ``(reason, status)`` on an
            HTTP error status, ``(None, 500)`` when no HTTP status was
            obtained.

        Raises:
            TransportSetupError: The request could not be attempted.
        """
        try:
            body = message_to_bytes(payload)
        except TypeError as exc:
            raise TransportSetupError(str(exc), url) from exc

        request = SoapRequest(url, body, timeout=self.timeout).validate()
        prepared = build_request(request)

        result = self._send(request, prepared)
        verbose(
            f'post-soap to "{url}" completed with status:={result.status_code}',
            self.verbosity,
            url=url,
            status=result.status_code,
        )
        return result

    def _send(self, request: SoapRequest, prepared: requests.PreparedRequest) -> PostResult:
        with self.build_session() as session:
            try:
                response = session.send(prepared, timeout=request.timeout, stream=True)
            except _SETUP_ERRORS as exc:
                raise TransportSetupError(str(exc), request.url) from exc
            except RequestException as exc:
                log.warning(
                    "request failed",
                    extra={"url": request.url, "error": type(exc).__name__},
                )
                return PostResult.transport_failure()

            with response:
                if response.status_code >= 400:
                    log.debug(
                        "http error",
                        extra={"url": request.url, "status": response.status_code},
                    )
                    return PostResult.failure(
                        decode_reason(response.reason), response.status_code
                    )

                response.raw.decode_content = True
                buffer = _BodyBuffer()
                try:
                    copy_stream(response.raw, buffer)
                except (RequestException, Urllib3Error, OSError) as exc:
                    log.warning(
                        "response read failed",
                        extra={"url": request.url, "error": type(exc).__name__},
                    )
                    return PostResult.transport_failure()
                text = buffer.value.decode(POSTER_SETTINGS.encoding, errors="replace")
                return PostResult.success(text)


def post(
    url: str,
    payload: Any = None,
    *,
    timeout: float | None = None,
    verbosity: str | bool | None = None,
) -> PostResult:
    """One-shot `SoapPoster.post`."""
    return SoapPoster(timeout=timeout, verbosity=verbosity).post(url, payload)
