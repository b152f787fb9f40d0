"""Configuration helpers for sdom rendering."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from typing import Optional, Tuple

from dotenv import load_dotenv

_DEFAULT_LOG_LEVEL = "INFO"
_DEFAULT_PYTHON_SCRIPT_TYPES: Tuple[str, ...] = ("text/python", "python", "py")
_ENV_LOADED = False

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class SdomConfig:
    """Holds runtime settings for rendering and rehydration.

    Attributes:
        report_url: Address the bootstrap script reports events to.
            ``None`` posts to the page's own address.
        log_level: Logging level name used by the CLI
        python_script_types: Script ``type`` values executed by the
            Python script runner
        execute_scripts: Whether server-context scripts are executed
    """

    report_url: Optional[str] = None
    log_level: str = _DEFAULT_LOG_LEVEL
    python_script_types: Tuple[str, ...] = _DEFAULT_PYTHON_SCRIPT_TYPES
    execute_scripts: bool = True

    def __post_init__(self) -> None:
        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise ValueError(f"Unknown log level: '{self.log_level}'")

    @property
    def log_level_number(self) -> int:
        return logging.getLevelName(self.log_level.upper())

    def with_overrides(
        self,
        *,
        report_url: Optional[str] = None,
        log_level: Optional[str] = None,
        python_script_types: Optional[Tuple[str, ...]] = None,
        execute_scripts: Optional[bool] = None,
    ) -> "SdomConfig":
        """Return a copy with the provided overrides applied."""

        cfg = self
        if report_url is not None:
            cfg = replace(cfg, report_url=report_url or None)
        if log_level:
            cfg = replace(cfg, log_level=log_level)
        if python_script_types is not None:
            cfg = replace(cfg, python_script_types=tuple(python_script_types))
        if execute_scripts is not None:
            cfg = replace(cfg, execute_scripts=execute_scripts)
        return cfg


def load_config(
    *,
    report_url: Optional[str] = None,
    log_level: Optional[str] = None,
    python_script_types: Optional[Tuple[str, ...]] = None,
    execute_scripts: Optional[bool] = None,
) -> SdomConfig:
    """Load configuration from environment variables and overrides."""

    _ensure_env_loaded()
    base = SdomConfig(
        report_url=os.getenv("SDOM_REPORT_URL", "").strip() or None,
        log_level=os.getenv("SDOM_LOG_LEVEL", "").strip() or _DEFAULT_LOG_LEVEL,
        python_script_types=_parse_list(os.getenv("SDOM_PYTHON_SCRIPT_TYPES"))
        or _DEFAULT_PYTHON_SCRIPT_TYPES,
        execute_scripts=_parse_bool(os.getenv("SDOM_EXECUTE_SERVER_SCRIPTS"), default=True),
    )
    return base.with_overrides(
        report_url=report_url,
        log_level=log_level,
        python_script_types=python_script_types,
        execute_scripts=execute_scripts,
    )


def _parse_list(raw: Optional[str]) -> Tuple[str, ...]:
    if not raw:
        return ()
    return tuple(item.strip().lower() for item in raw.split(",") if item.strip())


def _parse_bool(raw: Optional[str], *, default: bool) -> bool:
    if raw is None or not raw.strip():
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"Expected a boolean value, got '{raw}'")


def _ensure_env_loaded() -> None:
    global _ENV_LOADED
    if _ENV_LOADED:
        return
    load_dotenv()
    _ENV_LOADED = True
