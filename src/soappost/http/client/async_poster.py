import asyncio
from typing import Any

import aiohttp

from soappost.http.client.poster import decode_reason
from soappost.http.client.request import SoapRequest
from soappost.http.client.result import PostResult
from soappost.http.errors import TransportSetupError
from soappost.settings import POSTER_SETTINGS
from soappost.util.logging import get_logger
from soappost.util.serialize import message_to_bytes
from soappost.util.verbose import verbose

log = get_logger(__name__)


class AsyncSoapPoster:
    """
    asyncio counterpart of `SoapPoster`, on aiohttp.

    Same contract: one POST per call with the fixed SOAP headers, one
    session per call, closed before the call returns.
    """

    def __init__(
        self,
        timeout: float | None = None,
        verbosity: str | bool | None = None,
    ):
        self.timeout = timeout if timeout is not None else POSTER_SETTINGS.timeout
        self.verbosity = verbosity

    def build_session(self) -> aiohttp.ClientSession:
        return aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=self.timeout))

    async def post(self, url: str, payload: Any = None) -> PostResult:
        try:
            body = message_to_bytes(payload)
        except TypeError as exc:
            raise TransportSetupError(str(exc), url) from exc

        request = SoapRequest(url, body, timeout=self.timeout).validate()

        result = await self._send(request)
        verbose(
            f'post-soap to "{url}" completed with status:={result.status_code}',
            self.verbosity,
            url=url,
            status=result.status_code,
        )
        return result

    async def _send(self, request: SoapRequest) -> PostResult:
        async with self.build_session() as session:
            try:
                async with session.post(
                    request.url,
                    data=request.payload,
                    headers=request.header_dict(),
                ) as resp:
                    if resp.status >= 400:
                        log.debug(
                            "http error",
                            extra={"url": request.url, "status": resp.status},
                        )
                        return PostResult.failure(decode_reason(resp.reason), resp.status)

                    data = await resp.read()
                    return PostResult.success(
                        data.decode(POSTER_SETTINGS.encoding, errors="replace")
                    )
            except asyncio.CancelledError:
                raise
            except aiohttp.InvalidURL as exc:
                raise TransportSetupError(str(exc), request.url) from exc
            except (aiohttp.ClientError, asyncio.TimeoutError, OSError) as exc:
                log.warning(
                    "request failed",
                    extra={"url": request.url, "error": type(exc).__name__},
                )
                return PostResult.transport_failure()


async def post_async(
    url: str,
    payload: Any = None,
    *,
    timeout: float | None = None,
    verbosity: str | bool | None = None,
) -> PostResult:
    """One-shot `AsyncSoapPoster.post`."""
    return await AsyncSoapPoster(timeout=timeout, verbosity=verbosity).post(url, payload)
