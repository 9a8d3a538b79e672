"""
Configuration for the A2A server test container.

Defaults match the A2A Java hello-world reference server. Any field can be
overridden through environment variables so CI can point the harness at a
different image or relax timeouts without code changes.
"""

import logging
import os
from dataclasses import dataclass, field, replace

logger = logging.getLogger(__name__)

DEFAULT_IMAGE = "a2a-java-server:latest"
DEFAULT_PORT = 9999

HEALTH_PATH = "/q/health"
AGENT_CARD_PATH = "/a2a/agent-card/public"
INVOKE_PATH = "/a2a/invoke"


def _server_env(port: int) -> dict[str, str]:
    return {
        "QUARKUS_HTTP_HOST": "0.0.0.0",
        "QUARKUS_HTTP_PORT": str(port),
    }


@dataclass
class ContainerConfig:
    """Settings for one A2A server container."""

    image_name: str = DEFAULT_IMAGE
    port: int = DEFAULT_PORT
    env: dict[str, str] = field(default_factory=dict)

    # Endpoints
    health_path: str = HEALTH_PATH
    agent_card_path: str = AGENT_CARD_PATH
    invoke_path: str = INVOKE_PATH

    # Timing, in seconds
    startup_timeout: float = 180.0
    poll_interval: float = 1.0
    request_timeout: float = 30.0

    def __post_init__(self):
        # Caller-supplied QUARKUS_HTTP_* values win over the port-derived ones
        self.env = {**_server_env(self.port), **self.env}

    def with_port(self, port: int) -> "ContainerConfig":
        """Return a copy bound to another container port, env included."""
        env = dict(self.env)
        env.update(_server_env(port))
        return replace(self, port=port, env=env)


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning(f"Ignoring {name}={raw!r}: not a number")
        return default


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning(f"Ignoring {name}={raw!r}: not an integer")
        return default


def load_container_config(base: ContainerConfig | None = None) -> ContainerConfig:
    """
    Build a ContainerConfig with environment variable overrides applied.

    Recognized variables: A2A_SERVER_IMAGE, A2A_SERVER_PORT,
    A2A_STARTUP_TIMEOUT, A2A_POLL_INTERVAL, A2A_REQUEST_TIMEOUT.

    Args:
        base: Starting configuration (defaults when omitted)

    Returns:
        New ContainerConfig; base is not modified
    """
    config = replace(base) if base is not None else ContainerConfig()

    if os.environ.get("A2A_SERVER_IMAGE"):
        config.image_name = os.environ["A2A_SERVER_IMAGE"]

    port = _env_int("A2A_SERVER_PORT", config.port)
    if port != config.port:
        config = config.with_port(port)

    config.startup_timeout = _env_float("A2A_STARTUP_TIMEOUT", config.startup_timeout)
    config.poll_interval = _env_float("A2A_POLL_INTERVAL", config.poll_interval)
    config.request_timeout = _env_float("A2A_REQUEST_TIMEOUT", config.request_timeout)

    logger.debug(f"Container configuration: {config}")
    return config


def integration_tests_disabled() -> bool:
    """True when SKIP_INTEGRATION_TESTS=true is set."""
    return os.environ.get("SKIP_INTEGRATION_TESTS", "").lower() == "true"


__all__ = [
    "DEFAULT_IMAGE",
    "DEFAULT_PORT",
    "HEALTH_PATH",
    "AGENT_CARD_PATH",
    "INVOKE_PATH",
    "ContainerConfig",
    "load_container_config",
    "integration_tests_disabled",
]
