# inplace/config/loader.py
"""
Loads plugin options from TOML files.
"""
import toml
from pathlib import Path
from typing import Any, Dict, Optional
import structlog

from inplace.exceptions import ConfigError

from .settings import PluginConfig

log = structlog.get_logger(__name__)

PROJECT_CONFIG_FILENAMES = [".inplace.toml", "inplace.toml", "pyproject.toml"]

def load_config_file(file_path: Path) -> Dict[str, Any]:
    # returns the plugin options table; pyproject.toml keeps them under [tool.inplace].
    if not file_path.is_file():
        raise ConfigError(f"config file not found: {file_path}")
    log.debug("loading_toml_config_file", path=str(file_path))
    try:
        data = toml.load(file_path)
    except toml.TomlDecodeError as e:
        raise ConfigError(f"could not parse config file {file_path}: {e}") from e
    if file_path.name == "pyproject.toml":
        data = data.get("tool", {}).get("inplace", {})
    if not isinstance(data, dict):
        raise ConfigError(f"plugin options in {file_path} must be a table")
    return data

def find_config_file(directory: Path) -> Optional[Path]:
    for filename in PROJECT_CONFIG_FILENAMES:
        candidate = directory / filename
        if not candidate.is_file():
            continue
        # a pyproject.toml without a [tool.inplace] table does not count.
        if filename == "pyproject.toml" and not load_config_file(candidate):
            continue
        return candidate
    return None

def load_plugin_config(directory: Optional[Path] = None, **overrides: Any) -> PluginConfig:
    """Builds a PluginConfig from the first config file in `directory`, then explicit overrides."""
    directory = directory or Path.cwd()
    options: Dict[str, Any] = {}
    config_file = find_config_file(directory)
    if config_file:
        log.info("loading_project_plugin_config", path=str(config_file))
        options.update(load_config_file(config_file))
    else:
        log.debug("no_plugin_config_file_found", directory=str(directory))
    options.update(overrides)
    return PluginConfig.from_options(**options)
