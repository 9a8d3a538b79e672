"""
Shared fixtures for A2A server container unit tests.

Unit tests never touch Docker: the container runtime is replaced by
FakeRuntime and HTTP traffic is intercepted with the responses library.
"""

from collections.abc import Generator

import pytest
import responses

from a2a_testcontainers import A2AServerContainer, ContainerConfig

FAKE_HOST = "localhost"
FAKE_PORT = 32768
BASE_URL = f"http://{FAKE_HOST}:{FAKE_PORT}"

HELLO_WORLD_CARD = {
    "name": "Hello World Agent",
    "description": "Just a hello world agent",
    "url": "http://localhost:9999",
    "version": "1.0.0",
    "protocolVersion": "0.3.0",
    "capabilities": {
        "streaming": True,
        "pushNotifications": True,
        "stateTransitionHistory": True,
    },
    "defaultInputModes": ["text"],
    "defaultOutputModes": ["text"],
    "skills": [
        {
            "id": "hello_world",
            "name": "Returns hello world",
            "description": "just returns hello world",
            "tags": ["hello world"],
        }
    ],
}


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "fast: quick unit tests")
    config.addinivalue_line("markers", "medium: unit tests with timing or HTTP mocking")
    config.addinivalue_line("markers", "unit: isolated unit tests")
    config.addinivalue_line("markers", "integration: tests that start real containers")


class FakeRuntime:
    """In-memory ContainerRuntime recording every lifecycle call."""

    def __init__(self, host: str = FAKE_HOST, port: int = FAKE_PORT):
        self._host = host
        self._port = port
        self.env: dict[str, str] = {}
        self.started = False
        self.start_calls = 0
        self.stop_calls = 0
        self.requested_ports: list[int] = []
        self.start_error: Exception | None = None

    def with_env(self, key: str, value: str) -> "FakeRuntime":
        self.env[key] = value
        return self

    def start(self) -> None:
        self.start_calls += 1
        if self.start_error is not None:
            raise self.start_error
        self.started = True

    def stop(self) -> None:
        self.stop_calls += 1
        self.started = False

    @property
    def host(self) -> str:
        return self._host

    def get_mapped_port(self, port: int) -> int:
        self.requested_ports.append(port)
        return self._port

    def is_running(self) -> bool:
        return self.started

    def get_logs(self) -> tuple[str, str]:
        return ("Listening on: http://0.0.0.0:9999\n", "")


@pytest.fixture
def fake_runtime() -> FakeRuntime:
    return FakeRuntime()


@pytest.fixture
def runtime_factory() -> type[FakeRuntime]:
    return FakeRuntime


@pytest.fixture
def fast_config() -> ContainerConfig:
    """Config with timings shrunk so timeout paths run in milliseconds."""
    return ContainerConfig(startup_timeout=0.2, poll_interval=0.01, request_timeout=1.0)


@pytest.fixture
def mocked_http() -> Generator[responses.RequestsMock, None, None]:
    with responses.RequestsMock(assert_all_requests_are_fired=False) as rsps:
        yield rsps


@pytest.fixture
def started_server(
    fake_runtime, fast_config, mocked_http
) -> Generator[A2AServerContainer, None, None]:
    """Server handle already past its readiness probe."""
    mocked_http.add(responses.GET, f"{BASE_URL}/q/health", json={"status": "UP"}, status=200)

    server = A2AServerContainer(config=fast_config, runtime=fake_runtime)
    server.start()
    try:
        yield server
    finally:
        server.stop()


@pytest.fixture
def hello_world_card() -> dict:
    return HELLO_WORLD_CARD
