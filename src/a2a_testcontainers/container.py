"""
A2AServerContainer: test container for the A2A Java reference server.

Wraps the A2A hello-world server image and provides convenience methods for
testing A2A protocol implementations: lifecycle management, readiness
polling, the public agent card and the JSON-RPC invoke endpoint.

Usage:
    with A2AServerContainer() as server:
        card = server.get_public_agent_card()
        reply = server.send_message("Hi there!")
"""

import threading
from dataclasses import replace
from datetime import timedelta
from enum import Enum
from typing import Any

import requests
import structlog

from .agent_card import AgentCard
from .config import DEFAULT_IMAGE, DEFAULT_PORT, ContainerConfig
from .deadline import Deadline
from .exceptions import (
    ContainerStateError,
    ReadinessTimeoutError,
    ServerIOError,
    StartupTimeoutError,
)
from .runtime import ContainerRuntime, TestcontainersRuntime

logger = structlog.get_logger(__name__)


class ServerState(Enum):
    """Lifecycle of one server container. There is no STOPPED -> RUNNING path."""

    UNSTARTED = "unstarted"
    STARTING = "starting"
    RUNNING = "running"
    STOPPED = "stopped"

    def __str__(self) -> str:
        return self.value


class A2AServerContainer:
    """
    Handle on one containerized A2A server.

    The container is not started by the constructor. Call start() or use the
    handle as a context manager; stop() always releases the HTTP session and
    tears the container down, and is safe to call repeatedly.
    """

    DEFAULT_PORT = DEFAULT_PORT
    DEFAULT_IMAGE = DEFAULT_IMAGE

    def __init__(
        self,
        image_name: str | None = None,
        *,
        config: ContainerConfig | None = None,
        runtime: ContainerRuntime | None = None,
    ):
        """
        Configure (but do not start) an A2A server container.

        Args:
            image_name: Docker image to run (default: a2a-java-server:latest)
            config: Ports, endpoints and timeouts (default: ContainerConfig())
            runtime: Container runtime to drive; built from config when omitted
        """
        config = config or ContainerConfig()
        if image_name is not None:
            config = replace(config, image_name=image_name)
        self.config = config
        self.image_name = config.image_name

        self._runtime = runtime or TestcontainersRuntime(self.image_name, config.port)
        for key, value in config.env.items():
            self._runtime.with_env(key, value)

        self._state = ServerState.UNSTARTED
        self._session: requests.Session | None = None

        # Deadlines of wait_for_ready() calls in progress, for cancel_wait()
        self._active_waits: set[Deadline] = set()
        self._wait_lock = threading.Lock()

    # Lifecycle

    @property
    def state(self) -> ServerState:
        return self._state

    def with_env(self, key: str, value: str) -> "A2AServerContainer":
        """Add a container environment variable. Only valid before start()."""
        if self._state is not ServerState.UNSTARTED:
            raise ContainerStateError(
                f"Environment can only be changed before start (state: {self._state})",
                state=str(self._state),
                operation="with_env",
            )
        self._runtime.with_env(key, value)
        return self

    def start(self) -> "A2AServerContainer":
        """
        Launch the container and block until /q/health answers 200.

        Returns:
            self, for chaining

        Raises:
            ContainerStateError: If the handle was already started or stopped
            ContainerStartError: If the runtime cannot launch the container
            StartupTimeoutError: If the server is not ready within startup_timeout
        """
        if self._state is not ServerState.UNSTARTED:
            raise ContainerStateError(
                f"A2A server container cannot be started from state {self._state}",
                state=str(self._state),
                operation="start",
            )

        self._state = ServerState.STARTING
        try:
            self._runtime.start()
        except BaseException:
            self._state = ServerState.UNSTARTED
            raise

        try:
            self._await_startup()
        except BaseException:
            self._teardown_runtime()
            self._state = ServerState.UNSTARTED
            raise

        self._session = requests.Session()
        self._state = ServerState.RUNNING
        logger.info(
            f"A2A Server container started on {self._runtime.host}:{self.get_mapped_port()}"
        )
        return self

    def stop(self) -> None:
        """
        Release the HTTP session, then tear down the container.

        Failure to close the session is logged, not raised. Safe to call on a
        stopped or never-started handle.
        """
        if self._session is not None:
            try:
                self._session.close()
            except Exception as e:
                logger.warning(f"Failed to close HTTP client: {e}")
            self._session = None

        if self._state is ServerState.UNSTARTED:
            logger.debug("stop() called on unstarted A2A server container")
            return
        if self._state is ServerState.STOPPED:
            return

        self._state = ServerState.STOPPED
        self._runtime.stop()
        logger.info(f"A2A Server container for {self.image_name} stopped")

    def is_running(self) -> bool:
        return self._state is ServerState.RUNNING and self._runtime.is_running()

    def get_logs(self) -> tuple[str, str]:
        """Return the container's (stdout, stderr)."""
        self._require_running("get_logs")
        return self._runtime.get_logs()

    def __enter__(self) -> "A2AServerContainer":
        if self._state is ServerState.UNSTARTED:
            self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        self.stop()
        return False

    # Addressing

    @property
    def host(self) -> str:
        self._require_running("host")
        return self._runtime.host

    def get_mapped_port(self, port: int | None = None) -> int:
        """Host port mapped to the container port (default: the server port)."""
        if self._state not in (ServerState.STARTING, ServerState.RUNNING):
            raise ContainerStateError(
                "Mapped port is only available after start()",
                state=str(self._state),
                operation="get_mapped_port",
            )
        return self._runtime.get_mapped_port(port if port is not None else self.config.port)

    def get_server_url(self) -> str:
        """
        Get the base URL of the A2A server.

        Returns:
            The base URL, e.g. http://localhost:32768
        """
        if self._state not in (ServerState.STARTING, ServerState.RUNNING):
            raise ContainerStateError(
                "Server URL is only available after start()",
                state=str(self._state),
                operation="get_server_url",
            )
        return f"http://{self._runtime.host}:{self.get_mapped_port()}"

    # HTTP conveniences

    def get_public_agent_card(self) -> dict[str, Any]:
        """
        Get the public agent card from the server.

        Returns:
            The agent card as parsed JSON

        Raises:
            ServerIOError: On transport failure, empty body or invalid JSON
        """
        endpoint = self.config.agent_card_path
        response = self._request("GET", endpoint, operation="get_public_agent_card")
        try:
            return response.json()
        except ValueError as e:
            raise ServerIOError(
                f"Agent card is not valid JSON: {e}",
                endpoint=endpoint,
                status_code=response.status_code,
                operation="get_public_agent_card",
            ) from e

    def get_agent_card(self) -> AgentCard:
        """Typed variant of get_public_agent_card()."""
        return AgentCard.from_json(self.get_public_agent_card())

    def send_message(self, message: str) -> str:
        """
        Send a message to the A2A agent and get the raw response.

        Args:
            message: Text passed as params.input of the execute call

        Returns:
            Response body, verbatim

        Raises:
            ServerIOError: On transport failure or empty body
        """
        payload = {
            "jsonrpc": "2.0",
            "method": "execute",
            "id": 1,
            "params": {"input": message},
        }
        response = self._request(
            "POST", self.config.invoke_path, json=payload, operation="send_message"
        )
        return response.text

    send_request = send_message

    def is_healthy(self) -> bool:
        """True only if the health endpoint answers HTTP 200."""
        if self._state is not ServerState.RUNNING or self._session is None:
            return False
        try:
            response = self._session.get(
                self.get_server_url() + self.config.health_path,
                timeout=self.config.request_timeout,
            )
        except requests.RequestException as e:
            logger.debug(f"Health check failed: {e}")
            return False
        return response.status_code == 200

    def wait_for_ready(
        self, timeout: float | timedelta, poll_interval: float | None = None
    ) -> None:
        """
        Poll is_healthy() until it succeeds or timeout elapses.

        Args:
            timeout: Maximum time to wait, seconds or timedelta
            poll_interval: Seconds between checks (default: config.poll_interval)

        Raises:
            ReadinessTimeoutError: If the server is not healthy within timeout
            InterruptedWaitError: If cancel_wait() was called
        """
        interval = poll_interval if poll_interval is not None else self.config.poll_interval
        deadline = Deadline(timeout)
        with self._wait_lock:
            self._active_waits.add(deadline)

        try:
            while True:
                if self.is_healthy():
                    logger.info("A2A Server is ready")
                    return
                if deadline.expired:
                    break
                deadline.sleep(interval)
        finally:
            with self._wait_lock:
                self._active_waits.discard(deadline)

        raise ReadinessTimeoutError(
            f"A2A Server failed to become ready within {deadline.timeout:.1f}s",
            timeout=deadline.timeout,
            operation="wait_for_ready",
        )

    def cancel_wait(self) -> None:
        """
        Interrupt every wait_for_ready() currently blocked on this handle.

        Only waits already in progress are cancelled. A call made before
        wait_for_ready() starts has no effect on that later wait.
        """
        with self._wait_lock:
            for deadline in self._active_waits:
                deadline.cancel()

    # Internals

    def _await_startup(self) -> None:
        """Readiness probe used by start(): GET health_path until 200."""
        deadline = Deadline(self.config.startup_timeout)
        health_url = self.get_server_url() + self.config.health_path
        last_error: str | None = None

        with requests.Session() as probe:
            while True:
                try:
                    response = probe.get(health_url, timeout=self.config.request_timeout)
                    if response.status_code == 200:
                        return
                    last_error = f"HTTP {response.status_code}"
                except requests.RequestException as e:
                    last_error = str(e)

                if deadline.expired:
                    break
                deadline.sleep(self.config.poll_interval)

        raise StartupTimeoutError(
            f"A2A server {self.image_name} did not pass readiness probe {health_url} "
            f"within {deadline.timeout:.0f}s. Last error: {last_error}",
            timeout=deadline.timeout,
            operation="start",
        )

    def _request(
        self,
        method: str,
        endpoint: str,
        operation: str,
        json: dict[str, Any] | None = None,
    ) -> requests.Response:
        """One request on a fresh session; empty bodies are an error."""
        self._require_running(operation)
        url = self.get_server_url() + endpoint

        try:
            with requests.Session() as session:
                response = session.request(
                    method, url, json=json, timeout=self.config.request_timeout
                )
        except requests.RequestException as e:
            raise ServerIOError(
                f"{method} {url} failed: {e}", endpoint=endpoint, operation=operation
            ) from e

        if not response.content:
            raise ServerIOError(
                "Empty response from server",
                endpoint=endpoint,
                status_code=response.status_code,
                operation=operation,
            )
        return response

    def _teardown_runtime(self) -> None:
        try:
            self._runtime.stop()
        except Exception as e:
            logger.error(f"Failed to tear down container after failed start: {e}")

    def _require_running(self, operation: str) -> None:
        if self._state is not ServerState.RUNNING:
            raise ContainerStateError(
                f"A2A server container is not running (state: {self._state})",
                state=str(self._state),
                operation=operation,
            )

    def __str__(self) -> str:
        return f"A2AServerContainer(image={self.image_name}, state={self._state})"


__all__ = ["A2AServerContainer", "ServerState"]
