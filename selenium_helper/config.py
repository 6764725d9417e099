"""Configuration classes for the selenium helper."""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

TRUE_VALUES = ("1", "true", "yes")


class Timeouts:
    """Timeout constants for different wait scenarios."""

    DEFAULT_WAIT = 20  # Every helper wait, in seconds
    POLL_INTERVAL = 0.1  # Pause between condition evaluations
    PAGE_LOAD = 30  # Selenium page load timeout


def _env_flag(environ: Mapping[str, str], name: str) -> bool:
    return environ.get(name, "").strip().lower() in TRUE_VALUES


def _worker_index(worker: str) -> int:
    # pytest-xdist names its workers gw0, gw1, ...
    digits = worker.lstrip("gw")
    return int(digits) if digits.isdigit() else 0


@dataclass
class HelperConfig:
    """Selenium helper configuration settings."""

    headless: bool = False
    remote: bool = False
    ci: bool = False
    using_circle: bool = False
    build_id: str = "0000"
    sauce_username: Optional[str] = None
    sauce_access_key: Optional[str] = None
    sauce_url: str = "https://ondemand.saucelabs.com/wd/hub"
    sauce_platform: str = "macOS 10.14"
    chrome_version: str = "latest"
    worker_index: int = 0
    base_debug_port: int = 9222
    window_size: str = "1024,1680"
    timeout: float = Timeouts.DEFAULT_WAIT
    poll_interval: float = Timeouts.POLL_INTERVAL
    # Directory to save debug artifacts (screenshots, page sources)
    artifacts_dir: str = "/tmp/selenium-artifacts"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "HelperConfig":
        """
        Build configuration from environment variables.

        Args:
            environ: Mapping to read from (default: os.environ)

        Returns:
            HelperConfig populated from the environment
        """
        if environ is None:
            environ = os.environ
        return cls(
            headless=_env_flag(environ, "SMOKE_HEADLESS"),
            remote=_env_flag(environ, "SMOKE_REMOTE"),
            ci=_env_flag(environ, "CI"),
            using_circle=_env_flag(environ, "CIRCLECI"),
            build_id=environ.get("CIRCLE_BUILD_NUM", "0000"),
            sauce_username=environ.get("SAUCE_USERNAME"),
            sauce_access_key=environ.get("SAUCE_ACCESS_KEY"),
            chrome_version=environ.get("SMOKE_CHROME_VERSION", "latest"),
            worker_index=_worker_index(environ.get("PYTEST_XDIST_WORKER", "")),
            timeout=float(environ.get("SMOKE_TIMEOUT", Timeouts.DEFAULT_WAIT)),
            artifacts_dir=environ.get("SMOKE_ARTIFACTS_DIR", "/tmp/selenium-artifacts"),
        )

    @property
    def debug_port(self) -> int:
        """Return the Chrome remote debugging port for this worker."""
        return self.base_debug_port + self.worker_index

    def session_name(self, name: str) -> str:
        """Return the remote lab session name for a test."""
        if not self.ci:
            return name
        ci_name = "circleCi" if self.using_circle else "unknown"
        return f"{ci_name} {self.build_id} : {name}"
