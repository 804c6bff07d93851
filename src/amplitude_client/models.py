"""
Result types shared by the transport, dispatcher and client.

RequestOptions describes one HTTP attempt; OutcomeRecord is what a
submission returns on success and what ApiError carries on failure.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

# An event is an open mapping of JSON-serializable values
Event = dict[str, Any]


@dataclass(frozen=True)
class RequestOptions:
    """Effective transport parameters for a request."""

    method: str
    path: str
    protocol: str
    hostname: str
    port: int | None
    timeout_ms: int
    headers: dict[str, str] = field(default_factory=dict)

    @property
    def url(self) -> str:
        """protocol://hostname[:port]path"""
        # IPv6 literals need their brackets back
        host = f'[{self.hostname}]' if ':' in self.hostname else self.hostname
        port = f':{self.port}' if self.port else ''
        return f'{self.protocol}://{host}{port}{self.path}'


@dataclass(frozen=True)
class OutcomeRecord:
    """
    Result of a submission.

    ``succeeded`` is true iff the final status was 200, except for the
    synthetic record a disabled client returns (status 0, empty body).
    ``retry_count`` is the number of retries performed before this outcome.
    """

    start: datetime
    end: datetime
    body: bytes
    request_options: RequestOptions | None
    response_headers: dict[str, str]
    status_code: int
    succeeded: bool
    retry_count: int
    request_data: dict[str, str]

    @classmethod
    def disabled(cls, request_data: dict[str, str]) -> 'OutcomeRecord':
        """Synthetic success for a client with enabled=False."""
        now = datetime.now(timezone.utc)
        return cls(
            start=now,
            end=now,
            body=b'',
            request_options=None,
            response_headers={},
            status_code=0,
            succeeded=True,
            retry_count=0,
            request_data=request_data,
        )

    @property
    def duration_ms(self) -> float:
        return (self.end - self.start).total_seconds() * 1000

    def to_dict(self) -> dict[str, Any]:
        """Summarize for logging (request data omitted, it holds the API key)."""
        return {
            'status_code': self.status_code,
            'succeeded': self.succeeded,
            'retry_count': self.retry_count,
            'url': self.request_options.url if self.request_options else None,
            'duration_ms': round(self.duration_ms, 2),
            'body_bytes': len(self.body),
        }
