from dotenv import load_dotenv
from dataclasses import dataclass
from typing import Optional
import os
import sys

from psi_report.constants import (
    DEFAULT_FORMAT,
    DEFAULT_STRATEGY,
    DEFAULT_THRESHOLD,
    MAX_THRESHOLD,
    MIN_THRESHOLD,
)
from psi_report.exceptions import ConfigurationError

load_dotenv()  # Loads variables from .env file


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _parse_threshold(value, source: str) -> int:
    try:
        threshold = int(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"{source} must be an integer, got {value!r}")
    if not MIN_THRESHOLD <= threshold <= MAX_THRESHOLD:
        raise ConfigurationError(
            f"{source} must be between {MIN_THRESHOLD} and {MAX_THRESHOLD}, got {threshold}"
        )
    return threshold


@dataclass
class Config:
    """Runtime configuration for a report run."""
    default_threshold: int = DEFAULT_THRESHOLD
    persistence_enabled: bool = True  # Tests inject False to keep the filesystem clean
    hyperlinks: bool = True  # OSC 8 hyperlinks in the cli format; from_env() follows stdout isatty()
    log_level: str = "WARNING"

    # PageSpeed Insights API
    google_psi_api_key: Optional[str] = None
    psi_strategy: str = DEFAULT_STRATEGY
    psi_format: str = DEFAULT_FORMAT
    psi_locale: str = "en"

    def __post_init__(self):
        self.default_threshold = _parse_threshold(self.default_threshold, "default_threshold")

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables.

        Returns:
            Config: Configuration instance with values from environment

        Raises:
            ConfigurationError: If PSI_THRESHOLD is not an integer in [0, 100]
        """
        threshold = os.getenv("PSI_THRESHOLD")
        return cls(
            default_threshold=(
                _parse_threshold(threshold, "PSI_THRESHOLD")
                if threshold not in (None, "") else DEFAULT_THRESHOLD
            ),
            persistence_enabled=_env_bool("PSI_PERSISTENCE_ENABLED", True),
            hyperlinks=_env_bool("PSI_HYPERLINKS", sys.stdout.isatty()),
            log_level=os.getenv("LOG_LEVEL", "WARNING"),
            google_psi_api_key=os.getenv("GOOGLE_PSI_API_KEY"),
            psi_strategy=os.getenv("PSI_STRATEGY", DEFAULT_STRATEGY),
            psi_format=os.getenv("PSI_FORMAT", DEFAULT_FORMAT),
            psi_locale=os.getenv("PSI_LOCALE", "en"),
        )


@dataclass
class ReportOptions:
    """Per-invocation parameters recognized by the report pipeline."""
    format: str = DEFAULT_FORMAT
    strategy: str = DEFAULT_STRATEGY
    file_path: Optional[str] = None  # Output directory for persisted reports
    threshold: Optional[int] = None  # Overrides Config.default_threshold when set
    links: bool = False
    to_file: bool = False


def resolve_threshold(threshold: Optional[int], config: Optional[Config] = None) -> int:
    """Resolve the effective threshold for one run.

    Args:
        threshold: Explicit override, or None to use the configured default
        config: Configuration providing the default

    Returns:
        Threshold as an integer percentage in [0, 100]
    """
    if threshold is None:
        return (config or Config()).default_threshold
    return _parse_threshold(threshold, "threshold")
