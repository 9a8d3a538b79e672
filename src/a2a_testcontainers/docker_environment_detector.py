"""Docker daemon detection used to decide whether container tests can run.

The A2A server tests need a reachable Docker daemon. Detection happens at
runtime (not import time), is cached for a short period so a test session
pings the daemon once, and turns Docker SDK errors into messages that say
what to fix.
"""

import logging
import threading
import time

import docker
from docker.errors import DockerException

logger = logging.getLogger(__name__)


class DockerDetectionResult:
    """Outcome of one Docker daemon probe."""

    def __init__(
        self,
        is_available: bool,
        server_version: str | None = None,
        error_message: str | None = None,
        detection_time_ms: float = 0.0,
    ):
        self.is_available = is_available
        self.server_version = server_version
        self.error_message = error_message
        self.detection_time_ms = detection_time_ms
        self.timestamp = time.time()

    def __repr__(self) -> str:
        status = "available" if self.is_available else "unavailable"
        return f"DockerDetectionResult(status={status}, time={self.detection_time_ms:.1f}ms)"


class DockerEnvironmentDetector:
    """Thread-safe, cached Docker daemon probe."""

    def __init__(self, cache_timeout_seconds: int = 60):
        self._cache_timeout = cache_timeout_seconds
        self._cache: DockerDetectionResult | None = None
        self._lock = threading.Lock()

    def detect(self, force_refresh: bool = False) -> DockerDetectionResult:
        """
        Probe the Docker daemon, reusing a recent result unless force_refresh.

        Args:
            force_refresh: Bypass the cache

        Returns:
            DockerDetectionResult for the current environment
        """
        with self._lock:
            if not force_refresh and self._is_cache_valid():
                return self._cache

            result = self._probe()
            self._cache = result

            if result.is_available:
                logger.info(
                    f"Docker daemon detected (version: {result.server_version}, "
                    f"detection time: {result.detection_time_ms:.1f}ms)"
                )
            else:
                logger.warning(f"Docker daemon not available: {result.error_message}")
            return result

    def is_docker_available(self, force_refresh: bool = False) -> bool:
        return self.detect(force_refresh).is_available

    def clear_cache(self) -> None:
        with self._lock:
            self._cache = None

    def _is_cache_valid(self) -> bool:
        if self._cache is None:
            return False
        return time.time() - self._cache.timestamp < self._cache_timeout

    def _probe(self) -> DockerDetectionResult:
        start_time = time.perf_counter()
        client = None
        try:
            client = docker.from_env(timeout=5)
            client.ping()
            version = client.version().get("Version", "unknown")
            return DockerDetectionResult(
                is_available=True,
                server_version=version,
                detection_time_ms=(time.perf_counter() - start_time) * 1000,
            )
        except DockerException as e:
            return DockerDetectionResult(
                is_available=False,
                error_message=format_docker_error(e),
                detection_time_ms=(time.perf_counter() - start_time) * 1000,
            )
        finally:
            if client is not None:
                client.close()


def format_docker_error(error: Exception) -> str:
    """Map a Docker SDK error to an actionable message."""
    error_str = str(error).lower()

    if "connection refused" in error_str or "cannot connect" in error_str:
        return (
            "Docker daemon not running or not accessible. "
            "Try 'docker info' to verify the Docker installation."
        )
    if "permission denied" in error_str:
        return (
            "Permission denied accessing Docker daemon. "
            "Add your user to the docker group or run with sudo."
        )
    if "timeout" in error_str or "timed out" in error_str:
        return "Timeout connecting to Docker daemon. The daemon may be under heavy load."
    return f"Docker daemon error: {error}"


_default_detector: DockerEnvironmentDetector | None = None
_detector_lock = threading.Lock()


def get_docker_detector() -> DockerEnvironmentDetector:
    """Shared detector instance."""
    global _default_detector

    with _detector_lock:
        if _default_detector is None:
            _default_detector = DockerEnvironmentDetector()
        return _default_detector


def is_docker_available(force_refresh: bool = False) -> bool:
    return get_docker_detector().is_docker_available(force_refresh)


__all__ = [
    "DockerDetectionResult",
    "DockerEnvironmentDetector",
    "format_docker_error",
    "get_docker_detector",
    "is_docker_available",
]
