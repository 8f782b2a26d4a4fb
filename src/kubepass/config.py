"""Configuration with XDG paths and precedence resolution.

* **Directory layout** -- XDG Base Directory compliant on Linux/BSD,
  ``~/.kubepass/`` on macOS and Windows. See :func:`get_config_dir` and
  :func:`get_data_dir`.
* **Config file** -- a single :class:`~kubepass.models.KubepassConfig`
  JSON file, ``config.json`` in the config directory, or the path named by
  ``KUBEPASS_CONFIG``.
* **Precedence resolution** -- :func:`resolve_config` merges CLI flags,
  environment variables, the config file and defaults.

The plugin runs on every ``kubectl`` call, so reading configuration never
creates directories; only :func:`get_data_dir` and :func:`get_logs_dir`
(used for crash logs) do.
"""

from __future__ import annotations

import json
import os
import platform
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from kubepass.exceptions import ConfigError
from kubepass.models import KubepassConfig

_APP_NAME = "kubepass"
_CONFIG_FILENAME = "config.json"

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off", ""})


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True if the platform supports XDG Base Directory spec (Linux/FreeBSD)."""
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def _fallback_base_dir() -> Path:
    """Fallback base directory for non-XDG platforms (macOS, Windows)."""
    return Path.home() / f".{_APP_NAME}"


def _xdg_base(env_var: str, default_segments: tuple[str, ...]) -> Path:
    """Resolve an XDG base directory from an env var with fallback segments under $HOME."""
    env_value = os.environ.get(env_var, "")
    if env_value:
        return Path(env_value)
    base = Path.home()
    for seg in default_segments:
        base = base / seg
    return base


def get_config_dir() -> Path:
    """Return the configuration directory. It may not exist.

    On Linux/BSD: ``$XDG_CONFIG_HOME/kubepass/`` (default ``~/.config/kubepass/``).
    On macOS/Windows: ``~/.kubepass/``.
    """
    if _is_xdg_platform():
        return _xdg_base("XDG_CONFIG_HOME", (".config",)) / _APP_NAME
    return _fallback_base_dir()


def get_data_dir() -> Path:
    """Return the data directory, creating it if necessary.

    On Linux/BSD: ``$XDG_DATA_HOME/kubepass/`` (default ``~/.local/share/kubepass/``).
    On macOS/Windows: ``~/.kubepass/``.

    Returns:
        Absolute path to the data directory (guaranteed to exist).
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_DATA_HOME", (".local", "share")) / _APP_NAME
    else:
        path = _fallback_base_dir()
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_logs_dir() -> Path:
    """Return the crash-log directory, ``logs/`` under the data directory."""
    path = get_data_dir() / "logs"
    path.mkdir(exist_ok=True)
    return path


def get_config_path() -> Path:
    """Return the config file path, honouring ``KUBEPASS_CONFIG``."""
    override = os.environ.get("KUBEPASS_CONFIG", "")
    if override:
        return Path(override).expanduser()
    return get_config_dir() / _CONFIG_FILENAME


# --- Config file ---


def load_config_file(path: Optional[Path] = None) -> dict[str, Any]:
    """Load the raw config file as a dict.

    Args:
        path: Explicit file path; defaults to :func:`get_config_path`.

    Returns:
        The parsed JSON object, or an empty dict if the file does not exist.

    Raises:
        ConfigError: If the file exists but is unreadable, is not valid
            JSON, or does not contain a JSON object.
    """
    path = path or get_config_path()
    if not path.is_file():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, OSError) as exc:
        raise ConfigError(f"Invalid config at {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid config at {path}: expected a JSON object")
    return data


# --- Environment overrides ---


def _parse_bool(name: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ConfigError(f"Environment variable {name} must be a boolean, got '{value}'")


def _env_overrides() -> dict[str, Any]:
    """Collect config overrides from ``KUBEPASS_*`` and ``PASSWORD_STORE_DIR``."""
    overrides: dict[str, Any] = {}

    binary = os.environ.get("KUBEPASS_PASS_BINARY")
    if binary:
        overrides["pass_binary"] = binary

    timeout = os.environ.get("KUBEPASS_PASS_TIMEOUT")
    if timeout:
        try:
            overrides["pass_timeout"] = float(timeout)
        except ValueError:
            raise ConfigError(
                f"Environment variable KUBEPASS_PASS_TIMEOUT must be a number, got '{timeout}'"
            ) from None

    store_dir = os.environ.get("PASSWORD_STORE_DIR")
    if store_dir:
        overrides["password_store_dir"] = store_dir

    strict = os.environ.get("KUBEPASS_STRICT_KEYS")
    if strict is not None:
        overrides["strict_keys"] = _parse_bool("KUBEPASS_STRICT_KEYS", strict)

    return overrides


# --- Precedence resolution ---


def resolve_config(cli_strict_keys: Optional[bool] = None) -> KubepassConfig:
    """Resolve config with full precedence chain.

    Precedence (high to low):
        1. CLI flags (``cli_strict_keys``)
        2. Environment variables (``KUBEPASS_PASS_BINARY``,
           ``KUBEPASS_PASS_TIMEOUT``, ``KUBEPASS_STRICT_KEYS``,
           ``PASSWORD_STORE_DIR``)
        3. Config file (``~/.config/kubepass/config.json``)
        4. Defaults

    Returns:
        The effective :class:`~kubepass.models.KubepassConfig`.

    Raises:
        ConfigError: If the file or an environment value is invalid.
    """
    data = load_config_file()
    data.update(_env_overrides())
    if cli_strict_keys:
        data["strict_keys"] = True
    try:
        return KubepassConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc
