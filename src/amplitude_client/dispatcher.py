"""
Retry orchestration for Amplitude API requests.

Each send() drives one or more transport attempts:
- 200: return the OutcomeRecord
- 500/502/503/504: retry immediately while retries remain
- anything else, or retries exhausted: raise ApiError with the final record

Transport errors are not retried; they propagate from the first attempt
that hits one.
"""

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_result,
    stop_after_attempt,
    wait_none,
)

from .errors import AmplitudeError, ApiError
from .logging import get_logger
from .models import OutcomeRecord, RequestOptions
from .transport import HttpTransport

logger = get_logger(__name__)

RETRYABLE_STATUS_CODES = frozenset({500, 502, 503, 504})


def is_retryable_status(status_code: int) -> bool:
    """True for statuses that indicate a transient server-side condition."""
    return status_code in RETRYABLE_STATUS_CODES


def _should_retry(outcome: OutcomeRecord) -> bool:
    return is_retryable_status(outcome.status_code)


def _final_outcome(retry_state: RetryCallState) -> OutcomeRecord:
    return retry_state.outcome.result()


class RequestDispatcher:
    """Sends a request through the transport with bounded, immediate retries."""

    def __init__(self, transport: HttpTransport, max_retries: int):
        self.transport = transport
        self.max_retries = max_retries

    async def send(
        self,
        options: RequestOptions,
        body: bytes,
        request_data: dict[str, str],
    ) -> OutcomeRecord:
        """
        Dispatch until success, a non-retryable status, or retries run out.

        Args:
            options: Effective request parameters
            body: Encoded request body, resent unchanged on retry
            request_data: Form fields behind ``body``

        Returns:
            The successful OutcomeRecord

        Raises:
            ApiError: Final status was not 200
            TransportError: Network failure on any attempt
        """
        retrying = AsyncRetrying(
            stop=stop_after_attempt(self.max_retries + 1),
            wait=wait_none(),
            retry=retry_if_result(_should_retry),
            retry_error_callback=_final_outcome,
        )

        outcome: OutcomeRecord | None = None
        async for attempt in retrying:
            with attempt:
                retry_count = attempt.retry_state.attempt_number - 1
                outcome = await self.transport.dispatch(
                    options, body, request_data, retry_count=retry_count
                )
            if not attempt.retry_state.outcome.failed:
                attempt.retry_state.set_result(outcome)
                if _should_retry(outcome) and retry_count < self.max_retries:
                    logger.info(
                        'request.retrying',
                        url=options.url,
                        status_code=outcome.status_code,
                        retry_count=retry_count + 1,
                        max_retries=self.max_retries,
                    )

        if outcome is None:
            raise AmplitudeError(
                'Request finished without a dispatched attempt',
                context={'url': options.url},
            )
        if outcome.succeeded:
            return outcome

        logger.warning('request.failed', **outcome.to_dict())
        raise ApiError(
            f"Amplitude API call failed with status {outcome.status_code} "
            f"({options.url})",
            response=outcome,
        )
