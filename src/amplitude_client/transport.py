"""
HTTP transport for the Amplitude client.

Handles:
- Deriving protocol/host/port from the configured endpoint
- One POST attempt per dispatch() call, body fully buffered
- Wrapping httpx network failures into TransportError
"""

from datetime import datetime, timezone
from urllib.parse import urlsplit

import httpx

from .config import ClientConfig
from .errors import wrap_transport_error
from .logging import get_logger
from .models import OutcomeRecord, RequestOptions

logger = get_logger(__name__)


def build_request_options(
    config: ClientConfig,
    path: str,
    headers: dict[str, str],
    method: str = 'POST',
) -> RequestOptions:
    """Resolve the configured endpoint into the parameters of one request."""
    parts = urlsplit(config.endpoint)
    return RequestOptions(
        method=method,
        path=path,
        protocol=parts.scheme,
        hostname=parts.hostname or '',
        port=parts.port,
        timeout_ms=config.timeout_ms,
        headers=dict(headers),
    )


class HttpTransport:
    """
    Issues single HTTP(S) attempts with httpx.

    The scheme of each request's URL picks plain TCP or TLS. A fresh
    AsyncClient is opened per attempt, so nothing is shared between
    concurrent submissions.
    """

    def __init__(self, transport: httpx.AsyncBaseTransport | None = None):
        """
        Initialize the transport.

        Args:
            transport: Optional httpx transport override (e.g. httpx.MockTransport)
        """
        self._transport = transport

    async def dispatch(
        self,
        options: RequestOptions,
        body: bytes,
        request_data: dict[str, str],
        retry_count: int = 0,
    ) -> OutcomeRecord:
        """
        Send one request and buffer the whole response.

        Args:
            options: Effective request parameters
            body: Encoded request body
            request_data: The form fields the body was encoded from
            retry_count: Retries performed before this attempt

        Returns:
            OutcomeRecord for this attempt, whatever its status

        Raises:
            TransportError: On connection failure, timeout or reset
        """
        timeout = httpx.Timeout(options.timeout_ms / 1000)

        start = datetime.now(timezone.utc)
        try:
            async with httpx.AsyncClient(transport=self._transport, timeout=timeout) as client:
                response = await client.request(
                    options.method,
                    options.url,
                    content=body,
                    headers=options.headers,
                )
                payload = await response.aread()
        except httpx.TransportError as e:
            raise wrap_transport_error(
                e,
                context={'url': options.url, 'retry_count': retry_count},
            ) from e
        end = datetime.now(timezone.utc)

        logger.debug(
            'request.dispatched',
            url=options.url,
            status_code=response.status_code,
            retry_count=retry_count,
        )

        return OutcomeRecord(
            start=start,
            end=end,
            body=payload,
            request_options=options,
            response_headers=dict(response.headers),
            status_code=response.status_code,
            succeeded=response.status_code == 200,
            retry_count=retry_count,
            request_data=request_data,
        )
