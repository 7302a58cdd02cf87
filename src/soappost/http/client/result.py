from dataclasses import dataclass
from http import HTTPStatus
from typing import Optional


@dataclass(frozen=True)
class PostResult:
    """
    Outcome of one POST attempt.

    Two shapes share this type: a success carrying the response body with
    status 200, and a failure carrying the server's decoded reason phrase
    (or nothing, for a carrier-layer failure) with the status code.
    """

    body: Optional[str]
    status_code: int

    @property
    def ok(self) -> bool:
        return self.status_code == HTTPStatus.OK

    @classmethod
    def success(cls, body: str) -> "PostResult":
        return cls(body, HTTPStatus.OK.value)

    @classmethod
    def failure(cls, message: Optional[str], status_code: int) -> "PostResult":
        return cls(message, status_code)

    @classmethod
    def transport_failure(cls) -> "PostResult":
        return cls(None, HTTPStatus.INTERNAL_SERVER_ERROR.value)
