"""Configuration management for the layered application."""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Mapping, Optional

import yaml

DEFAULT_TITLE = "Layered Application"
DEFAULT_LOG_LEVEL = "INFO"

_PROJECT_ROOT = Path(__file__).resolve().parent.parent


@dataclass(frozen=True)
class Settings:
    """Runtime settings shared by the web application and the CLI."""

    database_url: str
    log_level: str = DEFAULT_LOG_LEVEL
    title: str = DEFAULT_TITLE

    @staticmethod
    def from_dict(data: Mapping[str, object], base_path: Path | None = None) -> "Settings":
        """Create :class:`Settings` from raw dictionary data.

        Relative SQLite paths in ``database_url`` are resolved against
        ``base_path`` so a configuration file can sit next to its database.
        """
        unknown = set(data.keys()) - {"database_url", "log_level", "title"}
        if unknown:
            raise ValueError(f"Unknown configuration fields: {', '.join(sorted(unknown))}")

        raw_url = data.get("database_url")
        if raw_url:
            database_url = _resolve_sqlite_url(str(raw_url), base_path)
        else:
            database_url = resolve_database_url(None)

        return Settings(
            database_url=database_url,
            log_level=str(data.get("log_level") or DEFAULT_LOG_LEVEL).upper(),
            title=str(data.get("title") or DEFAULT_TITLE),
        )

    def with_overrides(self, env: Mapping[str, str]) -> "Settings":
        """Return a copy with ``LAYERED_*`` environment overrides applied."""
        values: Dict[str, str] = {
            "database_url": self.database_url,
            "log_level": self.log_level,
            "title": self.title,
        }
        if env.get("LAYERED_DATABASE_URL"):
            values["database_url"] = resolve_database_url(env["LAYERED_DATABASE_URL"])
        if env.get("LAYERED_LOG_LEVEL"):
            values["log_level"] = env["LAYERED_LOG_LEVEL"].strip().upper()
        if env.get("LAYERED_TITLE"):
            values["title"] = env["LAYERED_TITLE"].strip()
        return Settings(**values)


def _resolve_sqlite_url(url: str, base_path: Path | None) -> str:
    prefix = "sqlite:///"
    if not url.startswith(prefix) or base_path is None:
        return url
    raw_path = url[len(prefix):]
    if not raw_path or raw_path == ":memory:" or raw_path.startswith("/"):
        return url
    resolved = (base_path / Path(raw_path).expanduser()).resolve(strict=False)
    return f"{prefix}{resolved}"


def resolve_database_url(env_value: Optional[str]) -> str:
    """Resolve the SQLAlchemy URL for the application database."""
    if env_value:
        return env_value.strip()
    path = (_PROJECT_ROOT / "data" / "layered.sqlite3").resolve(strict=False)
    return f"sqlite:///{path}"


def resolve_config_path(env_value: Optional[str]) -> Path:
    """Resolve the path to the configuration file."""
    if env_value:
        candidate = Path(env_value).expanduser().resolve(strict=False)
    else:
        candidate = (_PROJECT_ROOT / "config" / "settings.yaml").resolve(strict=False)
    return candidate


def load_settings(
    config_path: Path | None = None,
    *,
    env: Mapping[str, str] | None = None,
) -> Settings:
    """Load settings from a YAML file and apply environment overrides.

    A missing configuration file is not an error; defaults are used instead.
    """
    if env is None:
        env = os.environ
    if config_path is None:
        config_path = resolve_config_path(env.get("LAYERED_CONFIG"))

    raw: object = {}
    if config_path.is_file():
        with config_path.open("r", encoding="utf-8") as handle:
            raw = yaml.safe_load(handle) or {}

    if not isinstance(raw, dict):
        raise ValueError(f"Configuration file {config_path} must contain a mapping")

    settings = Settings.from_dict(raw, base_path=config_path.parent)
    return settings.with_overrides(env)


__all__ = [
    "Settings",
    "load_settings",
    "resolve_config_path",
    "resolve_database_url",
]
