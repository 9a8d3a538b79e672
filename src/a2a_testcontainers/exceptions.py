"""
Exception hierarchy for A2AServerContainer.

Every error raised by the harness derives from A2AContainerError so test
code can catch one type, while the subclasses keep startup, readiness and
HTTP failures distinguishable.
"""

import time
from typing import Any


class A2AContainerError(Exception):
    """
    Base exception for all A2A server container errors.

    Carries the failed operation name and a details dict so that
    failures in test logs point at the endpoint or timeout involved.
    """

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        """
        Initialize container error with context.

        Args:
            message: Human-readable error description
            operation: Name of the operation that failed
            details: Additional debugging information
        """
        super().__init__(message)

        self.message = message
        self.operation = operation
        self.details = details or {}
        self.timestamp = time.time()

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary format for test reports."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "operation": self.operation,
            "details": self.details,
            "timestamp": self.timestamp,
        }

    def __str__(self) -> str:
        if self.operation:
            return f"{self.operation} - {self.message}"
        return self.message


class ContainerStateError(A2AContainerError):
    """Operation is not valid in the container's current lifecycle state."""

    def __init__(self, message: str, state: str | None = None, **kwargs):
        details = kwargs.pop("details", {})
        details["state"] = state
        super().__init__(message, details=details, **kwargs)
        self.state = state


class ContainerStartError(A2AContainerError):
    """
    The container runtime could not launch the container.

    Raised for Docker daemon, image and port binding failures. Not
    raised for readiness failures, see StartupTimeoutError.
    """

    def __init__(self, message: str, image_name: str | None = None, **kwargs):
        details = kwargs.pop("details", {})
        details["image_name"] = image_name
        super().__init__(message, details=details, **kwargs)
        self.image_name = image_name


class TimeoutExceededError(A2AContainerError):
    """Common base for the wait timeouts."""

    def __init__(self, message: str, timeout: float | None = None, **kwargs):
        details = kwargs.pop("details", {})
        details["timeout_seconds"] = timeout
        super().__init__(message, details=details, **kwargs)
        self.timeout = timeout


class StartupTimeoutError(TimeoutExceededError):
    """The readiness probe never succeeded within the startup timeout."""


class ReadinessTimeoutError(TimeoutExceededError):
    """wait_for_ready() exceeded the caller-supplied timeout."""


class InterruptedWaitError(A2AContainerError):
    """A blocking wait was cancelled before it completed."""


class ServerIOError(A2AContainerError):
    """
    HTTP exchange with the server failed.

    Covers transport failures, empty response bodies and response bodies
    that are not valid JSON where JSON was expected.
    """

    def __init__(
        self,
        message: str,
        endpoint: str | None = None,
        status_code: int | None = None,
        **kwargs,
    ):
        details = kwargs.pop("details", {})
        details.update({"endpoint": endpoint, "status_code": status_code})
        super().__init__(message, details=details, **kwargs)
        self.endpoint = endpoint
        self.status_code = status_code


__all__ = [
    "A2AContainerError",
    "ContainerStateError",
    "ContainerStartError",
    "TimeoutExceededError",
    "StartupTimeoutError",
    "ReadinessTimeoutError",
    "InterruptedWaitError",
    "ServerIOError",
]
