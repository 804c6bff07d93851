"""
Tests for event enrichment.
"""

import re
import time

from amplitude_client.config import ClientConfig
from amplitude_client.envelope import enrich, generate_insert_id, now_ms


INSERT_ID_PATTERN = re.compile(r'^\d+_\d+$')


class TestGenerateInsertId:
    """Test insert_id generation."""

    def test_format(self):
        insert_id = generate_insert_id(1700000000000)

        assert insert_id.startswith('1700000000000_')
        assert INSERT_ID_PATTERN.match(insert_id)

    def test_defaults_to_current_time(self):
        before = now_ms()
        insert_id = generate_insert_id()
        after = now_ms()

        timestamp = int(insert_id.split('_')[0])
        assert before <= timestamp <= after

    def test_ids_differ_between_calls(self):
        ids = {generate_insert_id(1700000000000) for _ in range(50)}

        assert len(ids) == 50


class TestEnrich:
    """Test enrich() against the client configuration."""

    def test_adds_insert_id_when_missing(self):
        config = ClientConfig(api_key='k')
        enriched = enrich({'user_id': 'u1'}, config)

        assert enriched['user_id'] == 'u1'
        assert INSERT_ID_PATTERN.match(enriched['insert_id'])

    def test_keeps_caller_insert_id(self):
        config = ClientConfig(api_key='k')
        enriched = enrich({'user_id': 'u1', 'insert_id': 'abc'}, config)

        assert enriched['insert_id'] == 'abc'

    def test_replaces_empty_insert_id(self):
        config = ClientConfig(api_key='k')
        enriched = enrich({'insert_id': ''}, config)

        assert enriched['insert_id']

    def test_set_time_overwrites_time(self):
        config = ClientConfig(api_key='k', set_time=True)
        before = int(time.time() * 1000)
        enriched = enrich({'time': 1}, config)
        after = int(time.time() * 1000)

        assert before <= enriched['time'] <= after

    def test_time_untouched_without_set_time(self):
        config = ClientConfig(api_key='k')

        assert 'time' not in enrich({'user_id': 'u1'}, config)
        assert enrich({'time': 42}, config)['time'] == 42

    def test_app_version_overwrites(self):
        config = ClientConfig(api_key='k', app_version='2.0.1')
        enriched = enrich({'app_version': '1.0.0'}, config)

        assert enriched['app_version'] == '2.0.1'

    def test_app_version_untouched_when_unset(self):
        config = ClientConfig(api_key='k')
        enriched = enrich({'app_version': '1.0.0'}, config)

        assert enriched['app_version'] == '1.0.0'

    def test_does_not_mutate_input(self):
        config = ClientConfig(api_key='k', set_time=True, app_version='2.0')
        event = {'user_id': 'u1'}
        enriched = enrich(event, config)

        assert event == {'user_id': 'u1'}
        assert enriched is not event

    def test_timestamp_override(self):
        config = ClientConfig(api_key='k', set_time=True)
        enriched = enrich({}, config, timestamp_ms=1234)

        assert enriched['time'] == 1234
        assert enriched['insert_id'].startswith('1234_')
