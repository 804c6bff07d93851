"""
Amplitude Client

An async client for the Amplitude HTTP API that enriches, form-encodes and
delivers telemetry events, retrying immediately on transient server errors.
"""

__version__ = '0.1.0'

# Re-export key classes for convenience
from .client import AmplitudeClient
from .config import ClientConfig, ClientSettings, get_settings
from .dispatcher import RequestDispatcher, is_retryable_status
from .envelope import enrich, generate_insert_id
from .encoding import encode_form
from .models import Event, OutcomeRecord, RequestOptions
from .transport import HttpTransport
from .logging import (
    configure_logging,
    get_logger,
    logging_context,
)
from .errors import (
    AmplitudeError,
    ConfigurationError,
    TransportError,
    TransportTimeoutError,
    TransportConnectionError,
    ApiError,
)

__all__ = [
    # Version
    '__version__',
    # Client
    'AmplitudeClient',
    'ClientConfig',
    'ClientSettings',
    'get_settings',
    # Components
    'RequestDispatcher',
    'is_retryable_status',
    'HttpTransport',
    'enrich',
    'generate_insert_id',
    'encode_form',
    # Models
    'Event',
    'OutcomeRecord',
    'RequestOptions',
    # Logging
    'configure_logging',
    'get_logger',
    'logging_context',
    # Errors
    'AmplitudeError',
    'ConfigurationError',
    'TransportError',
    'TransportTimeoutError',
    'TransportConnectionError',
    'ApiError',
]
