"""Enrich a caller-supplied event with time, app_version and insert_id."""

import random
import time

from .config import ClientConfig
from .models import Event


def now_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


def generate_insert_id(timestamp_ms: int | None = None) -> str:
    """
    Build a best-effort unique insert_id: ``<epoch-ms>_<random digits>``.

    Collisions are possible but unlikely; the ingestion API uses the id for
    deduplication only.
    """
    if timestamp_ms is None:
        timestamp_ms = now_ms()
    digits = f'{random.random():.16f}'[2:]
    return f'{timestamp_ms}_{digits}'


def enrich(event: Event, config: ClientConfig, timestamp_ms: int | None = None) -> Event:
    """
    Return a copy of ``event`` with derived metadata applied.

    The caller's mapping is never modified. On the copy:
    - ``time`` is overwritten with the current time when config.set_time
    - ``app_version`` is overwritten when config.app_version is set
    - ``insert_id`` is generated when absent or empty

    Args:
        event: Raw event mapping
        config: Client configuration
        timestamp_ms: Clock override in epoch ms (defaults to now)

    Returns:
        The enriched event
    """
    if timestamp_ms is None:
        timestamp_ms = now_ms()

    enriched = dict(event)
    if config.set_time:
        enriched['time'] = timestamp_ms
    if config.app_version:
        enriched['app_version'] = config.app_version
    if not enriched.get('insert_id'):
        enriched['insert_id'] = generate_insert_id(timestamp_ms)
    return enriched
