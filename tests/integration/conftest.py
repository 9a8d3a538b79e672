"""
Docker integration test configuration and fixtures.

Provides A2A server container fixtures backed by real Docker. The whole
suite is skipped when SKIP_INTEGRATION_TESTS=true, when no Docker daemon is
reachable, or when the server image has not been built locally.
"""

from collections.abc import Generator

import docker
import pytest
from docker.errors import DockerException, ImageNotFound

from a2a_testcontainers import A2AServerContainer, ContainerConfig, load_container_config
from a2a_testcontainers.config import integration_tests_disabled
from a2a_testcontainers.docker_environment_detector import get_docker_detector


def skip_if_docker_unavailable() -> None:
    """Skip test if integration tests are disabled or Docker is not available."""
    if integration_tests_disabled():
        pytest.skip("Integration tests disabled by SKIP_INTEGRATION_TESTS=true")

    result = get_docker_detector().detect()
    if not result.is_available:
        pytest.skip(f"Docker not available for integration tests: {result.error_message}")


def skip_if_image_missing(image_name: str) -> None:
    client = docker.from_env()
    try:
        client.images.get(image_name)
    except ImageNotFound:
        pytest.skip(f"{image_name} not built. Run: docker build -t {image_name} .")
    except DockerException as e:
        pytest.skip(f"Could not inspect {image_name}: {e}")
    finally:
        client.close()


@pytest.fixture(scope="session")
def integration_config() -> ContainerConfig:
    skip_if_docker_unavailable()
    config = load_container_config()
    skip_if_image_missing(config.image_name)
    return config


@pytest.fixture
def a2a_server(integration_config) -> Generator[A2AServerContainer, None, None]:
    """Configured but unstarted container; always stopped on teardown."""
    container = A2AServerContainer(config=integration_config)
    try:
        yield container
    finally:
        container.stop()


@pytest.fixture
def running_a2a_server(integration_config) -> Generator[A2AServerContainer, None, None]:
    with A2AServerContainer(config=integration_config) as container:
        yield container
