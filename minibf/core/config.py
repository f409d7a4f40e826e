"""
Runtime configuration.

Defaults live on the dataclass. An optional YAML file can override them, and
MINIBF_* environment variables override both.
"""

import os
import sys
from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Optional

import yaml

from minibf.core.errors import ConfigError
from minibf.core.tape import DEFAULT_CELL_MAX, DEFAULT_TAPE_SIZE

ENV_PREFIX = "MINIBF_"

# env var suffix -> field name
ENV_FIELDS = {
    "TAPE_SIZE": "tape_size",
    "CELL_MAX": "cell_max",
    "STEP_LIMIT": "step_limit",
    "COLOR": "color",
    "CC": "compiler",
    "C_OUTPUT": "c_output",
}


def _default_color() -> bool:
    return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()


@dataclass(frozen=True)
class RuntimeConfig:
    tape_size: int = DEFAULT_TAPE_SIZE
    cell_max: int = DEFAULT_CELL_MAX
    step_limit: int = 0
    color: bool = False
    compiler: str = "gcc"
    c_output: str = "output.c"

    def validate(self) -> "RuntimeConfig":
        if self.tape_size < 2:
            raise ConfigError("tape_size must be at least 2")
        if not 0 < self.cell_max < 32768:
            raise ConfigError("cell_max must be in 1..32767")
        if self.step_limit < 0:
            raise ConfigError("step_limit must be >= 0 (0 means unlimited)")
        return self


def _coerce(name: str, value: Any) -> Any:
    if name in ("tape_size", "cell_max", "step_limit"):
        if isinstance(value, bool):
            raise ConfigError(f"{name} must be an integer")
        try:
            return int(value)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"{name} must be an integer, got {value!r}") from e
    if name == "color":
        if isinstance(value, str):
            return value.strip().lower() in ("1", "true", "yes", "on")
        return bool(value)
    return str(value)


def _apply(config: RuntimeConfig, overrides: Dict[str, Any]) -> RuntimeConfig:
    known = {f.name for f in fields(RuntimeConfig)}
    unknown = sorted(set(overrides) - known)
    if unknown:
        raise ConfigError(f"Unknown config keys: {unknown}")
    return replace(config, **{k: _coerce(k, v) for k, v in overrides.items()})


def load_yaml_overrides(path: str) -> Dict[str, Any]:
    """Read a YAML mapping of config fields, optionally nested under 'minibf'."""
    try:
        with open(path, "r") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"Could not read config file {path}") from e
    if data is None:
        return {}
    if isinstance(data, dict) and isinstance(data.get("minibf"), dict):
        data = data["minibf"]
    if not isinstance(data, dict):
        raise ConfigError("Unsupported config structure; expected a mapping")
    return data


def env_overrides(environ=None) -> Dict[str, Any]:
    environ = os.environ if environ is None else environ
    out = {}
    for suffix, name in ENV_FIELDS.items():
        value = environ.get(ENV_PREFIX + suffix)
        if value is not None and value != "":
            out[name] = value
    return out


def load_config(path: Optional[str] = None, environ=None) -> RuntimeConfig:
    config = RuntimeConfig(color=_default_color())
    if path:
        config = _apply(config, load_yaml_overrides(path))
    config = _apply(config, env_overrides(environ))
    return config.validate()
