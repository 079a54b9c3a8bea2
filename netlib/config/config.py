"""
Configuration loading for netlib.

Loads a YAML file, layers it over the built-in defaults and applies
environment variable overrides.

Environment Variable Override Format:
    NETLIB_<SECTION>_<KEY>=value

Examples:
    NETLIB_NET_BACKLOG=16
    NETLIB_NET_FAMILY=ipv4
    NETLIB_LOGGING_LEVEL=debug

Keys containing underscores are matched against the keys already present
in the section, so NETLIB_NET_RECV_SIZE sets net.recv_size.
"""

from __future__ import annotations

import copy
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml  # type: ignore[import-untyped]

from ..exceptions import ConfigError
from ..net.address import family_from_name
from .constants import DEFAULT_ENV_PREFIX, DEFAULTS, MAX_CONFIG_SIZE_BYTES


def _check_file_size(path: Path) -> None:
    """Check file size limit before parsing."""
    file_size = os.path.getsize(path)
    if file_size > MAX_CONFIG_SIZE_BYTES:
        raise ConfigError(
            "Configuration file exceeds maximum size",
            path=path,
            size=file_size,
            limit=MAX_CONFIG_SIZE_BYTES,
        )


def _merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge override into a copy of base."""
    result = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = _merge(result[key], value)
        else:
            result[key] = value
    return result


def _convert_env_value(value: str) -> bool | int | float | str | list | None:
    """
    Convert environment variable string to appropriate type.

    Args:
        value: Environment variable value as string

    Returns:
        Converted value with appropriate type
    """
    if value.lower() in ("null", "none", ""):
        return None

    if value.lower() in ("true", "false"):
        return value.lower() == "true"

    if "," in value:
        return [_convert_env_value(v.strip()) for v in value.split(",")]

    try:
        if "." in value:
            return float(value)
        return int(value)
    except ValueError:
        pass

    return value


def _env_key_to_path(data: dict[str, Any], key: str) -> list[str]:
    """
    Convert an environment variable key (prefix removed) to a config path.

    Joins underscore-separated parts greedily when the joined name is an
    existing key, e.g. 'net_recv_size' -> ['net', 'recv_size'].
    """
    parts = key.lower().split("_")
    path: list[str] = []
    current: Any = data
    i = 0
    while i < len(parts):
        j = len(parts)
        while j > i + 1:
            candidate = "_".join(parts[i:j])
            if isinstance(current, dict) and candidate in current:
                break
            j -= 1
        name = "_".join(parts[i:j])
        path.append(name)
        current = current.get(name) if isinstance(current, dict) else None
        i = j
    return path


def _set_nested_value(data: dict[str, Any], path: list[str], value: Any) -> None:
    current = data
    for part in path[:-1]:
        if not isinstance(current.get(part), dict):
            current[part] = {}
        current = current[part]
    current[path[-1]] = value


def apply_env_overrides(
    data: dict[str, Any],
    env_prefix: str = DEFAULT_ENV_PREFIX,
    environ: dict[str, str] | None = None,
) -> dict[str, Any]:
    """
    Apply environment variable overrides to configuration data.

    Args:
        data: Configuration data dictionary (modified in place)
        env_prefix: Prefix selecting the variables to apply
        environ: Environment mapping (defaults to os.environ)

    Returns:
        The updated configuration data
    """
    env = os.environ if environ is None else environ
    for key in sorted(env):
        if not key.startswith(env_prefix) or len(key) == len(env_prefix):
            continue
        path = _env_key_to_path(data, key[len(env_prefix) :])
        _set_nested_value(data, path, _convert_env_value(env[key]))
    return data


def load_config(
    path: str | Path | None = None,
    enable_env_overrides: bool = True,
    env_prefix: str = DEFAULT_ENV_PREFIX,
) -> dict[str, Any]:
    """
    Load configuration as a plain dictionary.

    Args:
        path: YAML file to load; defaults only when None
        enable_env_overrides: Whether to apply environment variable overrides
        env_prefix: Prefix for environment variables

    Returns:
        dict: Defaults merged with the file and the environment

    Raises:
        ConfigError: If the file is missing, too large or not a YAML mapping
    """
    data = copy.deepcopy(DEFAULTS)

    if path is not None:
        file_path = Path(path)
        if not file_path.is_file():
            raise ConfigError("Configuration file not found", path=file_path)
        _check_file_size(file_path)
        try:
            with open(file_path, encoding="utf-8") as f:
                loaded = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError("Invalid YAML", path=file_path) from e
        if loaded is None:
            loaded = {}
        if not isinstance(loaded, dict):
            raise ConfigError("Configuration root must be a mapping", path=file_path)
        data = _merge(data, loaded)

    if enable_env_overrides:
        data = apply_env_overrides(data, env_prefix)
    return data


@dataclass(frozen=True)
class NetConfig:
    """
    Immutable network settings.

    Attributes:
        family: Address family name ("any", "ipv4" or "ipv6")
        backlog: Pending connection queue length for accept_once()
        recv_size: Maximum bytes per receive
    """

    family: str = "any"
    backlog: int = 128
    recv_size: int = 4096

    def __post_init__(self) -> None:
        try:
            family_from_name(self.family)
        except (ValueError, AttributeError) as e:
            raise ConfigError("Invalid address family", family=self.family) from e
        for name in ("backlog", "recv_size"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise ConfigError(f"{name} must be a positive integer", value=value)

    @property
    def address_family(self) -> int:
        """AF_* constant for the configured family."""
        return family_from_name(self.family)

    @classmethod
    def from_config(
        cls, config_dict: dict[str, Any], section: str = "net"
    ) -> NetConfig:
        current = config_dict.get(section) or {}
        if not isinstance(current, dict):
            raise ConfigError(
                "Configuration section must be a mapping", section=section
            )
        return cls(
            family=current.get("family", cls.family),
            backlog=current.get("backlog", cls.backlog),
            recv_size=current.get("recv_size", cls.recv_size),
        )
