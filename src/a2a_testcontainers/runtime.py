"""
Container runtime seam for A2AServerContainer.

A2AServerContainer composes against the ContainerRuntime protocol instead of
inheriting from a concrete container class. TestcontainersRuntime is the
production implementation on top of testcontainers and the Docker SDK; unit
tests substitute an in-memory fake.
"""

import logging
from typing import Protocol, runtime_checkable

from docker.errors import APIError, DockerException, ImageNotFound
from testcontainers.core.container import DockerContainer

from .exceptions import ContainerStartError, ContainerStateError

logger = logging.getLogger(__name__)


@runtime_checkable
class ContainerRuntime(Protocol):
    """Minimal lifecycle surface the server handle needs from a container."""

    def with_env(self, key: str, value: str) -> "ContainerRuntime": ...

    def start(self) -> None: ...

    def stop(self) -> None: ...

    @property
    def host(self) -> str: ...

    def get_mapped_port(self, port: int) -> int: ...

    def is_running(self) -> bool: ...

    def get_logs(self) -> tuple[str, str]: ...


class TestcontainersRuntime:
    """ContainerRuntime backed by testcontainers.core.container.DockerContainer."""

    __test__ = False  # not a pytest test class despite the name

    def __init__(self, image_name: str, exposed_port: int, env: dict[str, str] | None = None):
        self.image_name = image_name
        self.exposed_port = exposed_port
        self._container = DockerContainer(image_name).with_exposed_ports(exposed_port)
        for key, value in (env or {}).items():
            self._container.with_env(key, value)
        self._started = False

    def with_env(self, key: str, value: str) -> "TestcontainersRuntime":
        if self._started:
            raise ContainerStateError(
                f"Cannot set {key} on running container {self.image_name}",
                state="running",
                operation="with_env",
            )
        self._container.with_env(key, value)
        return self

    def start(self) -> None:
        """
        Launch the container.

        Raises:
            ContainerStartError: On Docker daemon, image or API failure
        """
        logger.info(f"Starting container from image {self.image_name}")
        try:
            self._container.start()
        except ImageNotFound as e:
            raise ContainerStartError(
                f"A2A server image not found: {self.image_name}. "
                f"Build it first with: docker build -t {self.image_name} .",
                image_name=self.image_name,
                operation="start",
            ) from e
        except APIError as e:
            raise ContainerStartError(
                f"Docker API error starting {self.image_name}: {e}. "
                f"Check port availability and resource limits.",
                image_name=self.image_name,
                operation="start",
            ) from e
        except DockerException as e:
            raise ContainerStartError(
                f"Docker daemon unavailable: {e}. "
                f"Ensure Docker daemon is running and accessible.",
                image_name=self.image_name,
                operation="start",
            ) from e
        self._started = True

    def stop(self) -> None:
        if not self._started:
            logger.debug(f"Container for {self.image_name} not started - nothing to stop")
            return
        try:
            self._container.stop()
        finally:
            self._started = False

    @property
    def host(self) -> str:
        self._require_started("host")
        return self._container.get_container_host_ip()

    def get_mapped_port(self, port: int) -> int:
        self._require_started("get_mapped_port")
        return int(self._container.get_exposed_port(port))

    def is_running(self) -> bool:
        if not self._started:
            return False
        wrapped = self._container.get_wrapped_container()
        if wrapped is None:
            return False
        try:
            wrapped.reload()
        except DockerException as e:
            logger.debug(f"Could not refresh container status: {e}")
            return False
        return wrapped.status == "running"

    def get_logs(self) -> tuple[str, str]:
        self._require_started("get_logs")
        stdout, stderr = self._container.get_logs()
        return (
            stdout.decode("utf-8", errors="replace"),
            stderr.decode("utf-8", errors="replace"),
        )

    def _require_started(self, operation: str) -> None:
        if not self._started:
            raise ContainerStateError(
                f"Container for {self.image_name} is not started",
                state="unstarted",
                operation=operation,
            )

    def __str__(self) -> str:
        return f"TestcontainersRuntime(image={self.image_name}, port={self.exposed_port})"


__all__ = ["ContainerRuntime", "TestcontainersRuntime"]
