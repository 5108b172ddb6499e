from .settings import PluginConfig, default_pattern
from .loader import find_config_file, load_config_file, load_plugin_config

__all__ = ["PluginConfig", "default_pattern", "find_config_file", "load_config_file", "load_plugin_config"]
