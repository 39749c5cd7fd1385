from __future__ import annotations

import dataclasses
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from .errors import ConfigError

logger = logging.getLogger(__name__)


POLICY_PROPAGATE = "propagate"
POLICY_LOG = "log"
CALLBACK_ERROR_POLICIES = (POLICY_PROPAGATE, POLICY_LOG)

ENV_PREFIX = "HOSTEVENTS_"
ENV_SETTINGS_FILE = "HOSTEVENTS_SETTINGS_FILE"


@dataclass
class DispatchSettings:
    """Dispatch behaviour shared by observable hosts.

    Sources, lowest to highest precedence: defaults, a YAML file
    (``HOSTEVENTS_SETTINGS_FILE`` or an explicit path), then environment
    variables prefixed with ``HOSTEVENTS_``.

    Example YAML::

        dispatch:
          on_callback_error: log
          max_depth: 16
          log_level: DEBUG
    """

    # "propagate" re-raises callback exceptions to the caller, "log" records them
    on_callback_error: str = POLICY_PROPAGATE
    # Nested dispatches allowed on one host before DispatchRecursionError
    max_depth: int = 32
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        self.validate()

    @staticmethod
    def default() -> "DispatchSettings":
        return DispatchSettings()

    def validate(self) -> None:
        """Normalise values and raise ConfigError for anything unusable."""
        policy = str(self.on_callback_error).strip().lower()
        if policy not in CALLBACK_ERROR_POLICIES:
            raise ConfigError(
                f"on_callback_error must be one of {CALLBACK_ERROR_POLICIES}, got {self.on_callback_error!r}"
            )
        self.on_callback_error = policy
        try:
            depth = int(self.max_depth)
        except (TypeError, ValueError) as exc:
            raise ConfigError(f"max_depth must be an integer, got {self.max_depth!r}") from exc
        if depth < 1:
            raise ConfigError(f"max_depth must be at least 1, got {depth}")
        self.max_depth = depth
        level = str(self.log_level).strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ConfigError(f"Unknown log level: {self.log_level!r}")
        self.log_level = level

    def as_dict(self) -> Dict[str, Any]:
        return dataclasses.asdict(self)

    @property
    def swallows_callback_errors(self) -> bool:
        return self.on_callback_error == POLICY_LOG

    # ------------------------ Loading ------------------------
    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "DispatchSettings":
        allowed = {f.name for f in dataclasses.fields(cls)}
        unknown = set(data) - allowed
        if unknown:
            logger.warning("Ignoring unknown dispatch settings: %s", ", ".join(sorted(unknown)))
        return cls(**{k: v for k, v in data.items() if k in allowed})

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
        env = os.environ if env is None else env
        mapping = {
            "HOSTEVENTS_ON_CALLBACK_ERROR": ("on_callback_error", str),
            "HOSTEVENTS_MAX_DEPTH": ("max_depth", int),
            "HOSTEVENTS_LOG_LEVEL": ("log_level", str),
        }
        out: Dict[str, Any] = {}
        for env_key, (field_name, caster) in mapping.items():
            if env.get(env_key, "") != "":
                try:
                    out[field_name] = caster(env[env_key])
                except ValueError as exc:
                    logger.error("Invalid env for %s=%r: %s", env_key, env[env_key], exc)
        return out

    @classmethod
    def from_yaml_file(cls, path: Path) -> Dict[str, Any]:
        if not path.exists():
            logger.debug("Settings file not found: %s", path)
            return {}
        with path.open("r", encoding="utf-8") as f:
            try:
                doc = yaml.safe_load(f) or {}
            except yaml.YAMLError as exc:
                raise ConfigError(f"Failed to parse settings file {path}: {exc}") from exc
        if not isinstance(doc, dict):
            raise ConfigError(f"Settings file {path} must contain a mapping")
        flat: Dict[str, Any] = {}
        # Allow a [dispatch] section as well as top-level keys
        if isinstance(doc.get("dispatch"), dict):
            flat.update(doc["dispatch"])
        for k, v in doc.items():
            if isinstance(v, dict):
                continue
            flat[k] = v
        logger.info("Loaded dispatch settings from %s", path)
        return flat

    @classmethod
    def from_sources(
        cls,
        *,
        env: Optional[Mapping[str, str]] = None,
        file_path: Optional[Path | str] = None,
    ) -> "DispatchSettings":
        env = os.environ if env is None else env
        data: Dict[str, Any] = {}
        if file_path is None and env.get(ENV_SETTINGS_FILE):
            file_path = env[ENV_SETTINGS_FILE]
        if file_path is not None:
            data.update(cls.from_yaml_file(Path(file_path).expanduser()))
        data.update(cls.from_env(env))
        return cls.from_dict(data)
