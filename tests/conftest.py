"""
Pytest configuration and shared fixtures.

Key fixtures:
- client_config: ClientConfig pointing at a test endpoint
- recorder: captures every request a MockTransport-backed client sends
- make_client: builds an AmplitudeClient whose HTTP layer is httpx.MockTransport

No network access is required; all HTTP traffic goes to httpx.MockTransport.
"""

import sys
from pathlib import Path
from urllib.parse import parse_qs

import httpx
import pytest

# Add src to path for imports
src_path = Path(__file__).parent.parent / 'src'
sys.path.insert(0, str(src_path))

from amplitude_client.client import AmplitudeClient  # noqa: E402
from amplitude_client.config import ClientConfig  # noqa: E402
from amplitude_client.transport import HttpTransport  # noqa: E402

TEST_ENDPOINT = 'https://api.test.amplitude.com'
TEST_API_KEY = 'test-api-key'


class RequestRecorder:
    """Records requests and answers them from a list of status codes."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.statuses: list[int] = [200]
        self.body = b'success'

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        index = min(len(self.requests), len(self.statuses)) - 1
        return httpx.Response(
            self.statuses[index],
            content=self.body,
            headers={'X-Test': 'yes'},
        )

    @property
    def count(self) -> int:
        return len(self.requests)

    def form(self, index: int = -1) -> dict[str, str]:
        """Decode the form body of a recorded request."""
        parsed = parse_qs(self.requests[index].content.decode('ascii'))
        return {key: values[0] for key, values in parsed.items()}


@pytest.fixture
def client_config() -> ClientConfig:
    return ClientConfig(api_key=TEST_API_KEY, endpoint=TEST_ENDPOINT)


@pytest.fixture
def recorder() -> RequestRecorder:
    return RequestRecorder()


@pytest.fixture
def make_client(recorder):
    """Factory for clients that talk to the recorder."""

    def _make(**options) -> AmplitudeClient:
        options.setdefault('endpoint', TEST_ENDPOINT)
        transport = HttpTransport(transport=httpx.MockTransport(recorder.handler))
        return AmplitudeClient(TEST_API_KEY, transport=transport, **options)

    return _make
