from __future__ import annotations

import copy
import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Tuple

from dotenv import load_dotenv
from omegaconf import DictConfig, OmegaConf

_HERE = Path(__file__).resolve()
_CANDIDATE_CONFIG_PATHS = [parent / "config/config.yaml" for parent in _HERE.parents[:4]]

DEFAULTS: Dict[str, Any] = {
    "service": {"name": "Dashboard API", "version": "1.0.0"},
    "server": {"host": "0.0.0.0", "port": 5000},
    "database": {"path": "data/dashboard.db"},
    "cache": {"directory": "data/cache", "key": "dashboardData"},
    "api": {"base_url": "http://localhost:5000/api", "timeout": 10.0},
    "logging": {"level": "INFO"},
}

# Environment variable -> (dotted config key, value type)
ENV_OVERRIDES: Dict[str, Tuple[str, Callable[[str], Any]]] = {
    "DASHBOARD_DB_PATH": ("database.path", str),
    "DASHBOARD_CACHE_DIR": ("cache.directory", str),
    "DASHBOARD_CACHE_KEY": ("cache.key", str),
    "DASHBOARD_API_BASE_URL": ("api.base_url", str),
    "DASHBOARD_API_TIMEOUT": ("api.timeout", float),
    "SERVER_HOST": ("server.host", str),
    "PORT": ("server.port", int),
    "LOG_LEVEL": ("logging.level", str),
}


def find_config_file() -> Path | None:
    explicit = os.environ.get("DASHBOARD_CONFIG")
    if explicit:
        return Path(explicit)
    return next((path for path in _CANDIDATE_CONFIG_PATHS if path.exists()), None)


def _env_config() -> DictConfig:
    overrides = OmegaConf.create()
    for env_name, (key, cast) in ENV_OVERRIDES.items():
        value = os.environ.get(env_name)
        if not value:
            continue
        try:
            OmegaConf.update(overrides, key, cast(value))
        except ValueError as exc:
            raise ValueError(f"Invalid value for {env_name}: {value!r}") from exc
    return overrides


@lru_cache(maxsize=1)
def load_settings() -> DictConfig:
    """
    Build the service configuration.

    Built-in defaults are merged with ``config/config.yaml`` (when one is found)
    and then with environment variables, which may come from a ``.env`` file.
    The result is struct-locked so typos in keys fail loudly.
    """
    load_dotenv()

    base = OmegaConf.create(DEFAULTS)
    layers = [base]

    config_path = find_config_file()
    if config_path is not None:
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found at {config_path}")
        layers.append(OmegaConf.load(config_path))

    layers.append(_env_config())
    merged = OmegaConf.merge(*layers)
    assert isinstance(merged, DictConfig)
    OmegaConf.set_struct(merged, True)
    return merged


def make_runtime_config(overrides: Optional[Dict[str, Any]] = None) -> DictConfig:
    """
    Return a private copy of the settings with ``overrides`` merged in.

    The copy keeps the struct flag, so overriding a key that does not exist
    raises ``ConfigKeyError`` instead of being silently ignored.
    """
    runtime = copy.deepcopy(load_settings())
    if overrides:
        runtime.merge_with(overrides)
    return runtime
