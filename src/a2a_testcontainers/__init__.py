"""A2A Testcontainers - containerized A2A reference server for integration tests."""

__version__ = "0.1.0"

from .agent_card import AgentCapabilities, AgentCard, AgentSkill
from .config import (
    AGENT_CARD_PATH,
    DEFAULT_IMAGE,
    DEFAULT_PORT,
    HEALTH_PATH,
    INVOKE_PATH,
    ContainerConfig,
    load_container_config,
)
from .container import A2AServerContainer, ServerState
from .deadline import Deadline
from .docker_environment_detector import DockerEnvironmentDetector, is_docker_available
from .exceptions import (
    A2AContainerError,
    ContainerStartError,
    ContainerStateError,
    InterruptedWaitError,
    ReadinessTimeoutError,
    ServerIOError,
    StartupTimeoutError,
)
from .runtime import ContainerRuntime, TestcontainersRuntime

__all__ = [
    # Server handle
    "A2AServerContainer",
    "ServerState",
    "ContainerRuntime",
    "TestcontainersRuntime",
    "Deadline",
    # Configuration
    "ContainerConfig",
    "load_container_config",
    "DEFAULT_IMAGE",
    "DEFAULT_PORT",
    "HEALTH_PATH",
    "AGENT_CARD_PATH",
    "INVOKE_PATH",
    # Agent card
    "AgentCard",
    "AgentCapabilities",
    "AgentSkill",
    # Environment
    "DockerEnvironmentDetector",
    "is_docker_available",
    # Errors
    "A2AContainerError",
    "ContainerStateError",
    "ContainerStartError",
    "StartupTimeoutError",
    "ReadinessTimeoutError",
    "InterruptedWaitError",
    "ServerIOError",
]
