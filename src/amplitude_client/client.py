"""
Async Amplitude HTTP API client.

Handles:
- Event submission (POST /httpapi) with time/app_version/insert_id enrichment
- Group identification (POST /groupidentify)
- Immediate retry on 500/502/503/504 via RequestDispatcher
- Short-circuiting all network calls when the client is disabled
"""

from typing import Any, Mapping

from .config import ClientConfig, ClientSettings, get_settings
from .dispatcher import RequestDispatcher
from .encoding import encode_form, event_fields, identification_fields
from .envelope import enrich
from .errors import ConfigurationError
from .logging import get_logger, logging_context
from .models import Event, OutcomeRecord
from .transport import HttpTransport, build_request_options

logger = get_logger(__name__)

TRACK_PATH = '/httpapi'
GROUP_IDENTIFY_PATH = '/groupidentify'


class AmplitudeClient:
    """
    Submits events and group identifications to the Amplitude HTTP API.

    Configuration comes from, in order of precedence:
    - an explicit ``config``
    - ``api_key`` plus keyword options (enabled, app_version, set_time,
      max_retries, timeout_ms, endpoint)
    - AMPLITUDE_* environment variables, when ``api_key`` is omitted

    Every call is independent; one client can serve any number of
    concurrent track()/group_identify() calls.
    """

    def __init__(
        self,
        api_key: str | None = None,
        *,
        config: ClientConfig | None = None,
        transport: HttpTransport | None = None,
        **options: Any,
    ):
        """
        Initialize the client.

        Args:
            api_key: Amplitude API key (defaults to AMPLITUDE_API_KEY env var)
            config: Fully built configuration; other options are ignored
            transport: Transport override (defaults to a new HttpTransport)
            **options: ClientConfig fields other than api_key
        """
        if config is None:
            if api_key is None:
                settings = get_settings()
                if settings.missing_required():
                    raise ConfigurationError(
                        'AMPLITUDE_API_KEY environment variable is required',
                        context={'missing': settings.missing_required()},
                    )
                config = settings.to_client_config(**options)
            else:
                config = ClientConfig(api_key=api_key, **options)

        self.config = config
        self.transport = transport or HttpTransport()
        self.dispatcher = RequestDispatcher(self.transport, config.max_retries)

    @classmethod
    def from_settings(
        cls,
        settings: ClientSettings | None = None,
        transport: HttpTransport | None = None,
    ) -> 'AmplitudeClient':
        """Build a client from environment settings."""
        settings = settings or get_settings()
        missing = settings.missing_required()
        if missing:
            raise ConfigurationError(
                f"Missing required settings: {', '.join(missing)}",
                context={'missing': missing},
            )
        return cls(config=settings.to_client_config(), transport=transport)

    async def track(self, event: Event) -> OutcomeRecord:
        """
        Submit one event.

        The event is copied before enrichment; the caller's mapping is left
        untouched. The enriched copy is what ends up in request_data.

        Args:
            event: Event mapping (user_id/device_id, event_type, properties...)

        Returns:
            OutcomeRecord of the successful submission, or a synthetic
            record (status_code 0) when the client is disabled

        Raises:
            ApiError: The API answered with a non-200 status
            TransportError: The request could not be delivered
        """
        enriched = enrich(event, self.config)
        fields = event_fields(self.config.api_key, enriched)

        with logging_context(insert_id=enriched['insert_id'], request_path=TRACK_PATH):
            if not self.config.enabled:
                logger.debug('track.disabled')
                return OutcomeRecord.disabled(fields)
            return await self._send(TRACK_PATH, fields)

    async def group_identify(
        self,
        group_type: str,
        group_value: Any,
        group_properties: Mapping[str, Any] | None = None,
    ) -> OutcomeRecord:
        """
        Associate a group (type + value) with a set of properties.

        Args:
            group_type: Group category, e.g. "org"
            group_value: Group identifier, e.g. "acme"
            group_properties: Properties to set on the group

        Returns:
            OutcomeRecord of the successful submission, or a synthetic
            record when the client is disabled

        Raises:
            ApiError: The API answered with a non-200 status
            TransportError: The request could not be delivered
        """
        fields = identification_fields(
            self.config.api_key, group_type, group_value, group_properties
        )

        with logging_context(request_path=GROUP_IDENTIFY_PATH):
            if not self.config.enabled:
                logger.debug('group_identify.disabled')
                return OutcomeRecord.disabled(fields)
            return await self._send(GROUP_IDENTIFY_PATH, fields)

    async def _send(self, path: str, fields: dict[str, str]) -> OutcomeRecord:
        body, headers = encode_form(fields)
        options = build_request_options(self.config, path, headers)
        return await self.dispatcher.send(options, body, fields)
