"""Configuration loader for the bus sign client."""

from __future__ import annotations

from dataclasses import dataclass
import os
from typing import Any, Mapping

from dotenv import load_dotenv
import yaml

DEFAULT_API_HOST = "127.0.0.1"
DEFAULT_API_PORT = "8080"


@dataclass(frozen=True)
class FeedConfig:
    """Prediction feed configuration."""

    base_url: str
    stop_ids: tuple[str, str]
    refresh_interval_ms: int
    timeout_seconds: float

    @property
    def refresh_interval_seconds(self) -> float:
        return self.refresh_interval_ms / 1000.0


@dataclass(frozen=True)
class DisplayConfig:
    """Frame size and output location for the virtual sign."""

    width: int
    height: int
    output_path: str


@dataclass(frozen=True)
class LoggingConfig:
    """Logging configuration."""

    level: str
    log_dir: str


@dataclass(frozen=True)
class AppConfig:
    """Top-level application configuration."""

    feed: FeedConfig
    display: DisplayConfig
    log: LoggingConfig


def _require_key(mapping: dict[str, Any], key: str, context: str) -> Any:
    if key not in mapping:
        raise ValueError(f"Missing required key '{key}' in {context} config")
    return mapping[key]


def resolve_base_url(env: Mapping[str, str] | None = None) -> str:
    """Build the feed base URL from API_BASE_URL or API_HOST/API_PORT."""
    if env is None:
        env = os.environ
    override = env.get("API_BASE_URL", "").strip()
    if override:
        return override.rstrip("/")
    host = env.get("API_HOST", "").strip() or DEFAULT_API_HOST
    port = env.get("API_PORT", "").strip() or DEFAULT_API_PORT
    return f"http://{host}:{port}"


def _parse_stop_ids(value: Any) -> tuple[str, str]:
    if not isinstance(value, list) or len(value) != 2:
        raise ValueError("'feed.stop_ids' must be a list of exactly two stop identifiers")
    first, second = (str(stop_id) for stop_id in value)
    if first == second:
        raise ValueError("'feed.stop_ids' must name two different stops")
    return first, second


def load_config(path: str = "config/config.yaml") -> AppConfig:
    """Load application configuration from a YAML file and the environment."""
    load_dotenv()
    try:
        with open(path, "r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle)
    except FileNotFoundError as exc:
        raise ValueError(f"Config file not found: {path}") from exc

    if not isinstance(data, dict):
        raise ValueError("Config file must contain a mapping at the top level")

    feed_section = _require_key(data, "feed", "feed")
    display_section = _require_key(data, "display", "display")
    logging_section = _require_key(data, "logging", "logging")

    if not isinstance(feed_section, dict):
        raise ValueError("'feed' config must be a mapping")
    if not isinstance(display_section, dict):
        raise ValueError("'display' config must be a mapping")
    if not isinstance(logging_section, dict):
        raise ValueError("'logging' config must be a mapping")

    refresh_interval_ms = int(_require_key(feed_section, "refresh_interval_ms", "feed"))
    timeout_seconds = float(_require_key(feed_section, "timeout_seconds", "feed"))
    if refresh_interval_ms <= 0:
        raise ValueError("'feed.refresh_interval_ms' must be positive")
    if timeout_seconds <= 0:
        raise ValueError("'feed.timeout_seconds' must be positive")

    feed = FeedConfig(
        base_url=resolve_base_url(),
        stop_ids=_parse_stop_ids(_require_key(feed_section, "stop_ids", "feed")),
        refresh_interval_ms=refresh_interval_ms,
        timeout_seconds=timeout_seconds,
    )

    display = DisplayConfig(
        width=_require_key(display_section, "width", "display"),
        height=_require_key(display_section, "height", "display"),
        output_path=display_section.get("output_path", "emulator_output/sign.png"),
    )

    logging = LoggingConfig(
        level=_require_key(logging_section, "level", "logging"),
        log_dir=_require_key(logging_section, "log_dir", "logging"),
    )

    return AppConfig(feed=feed, display=display, log=logging)
