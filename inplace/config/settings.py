from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union
import structlog

from inplace.core.engines.registry import EngineRef, EngineRegistry, engine_ref_from_option
from inplace.exceptions import ConfigError

log = structlog.get_logger(__name__)

# option names accepted from hosts, mapped to PluginConfig attributes.
OPTION_KEY_TO_ATTR_MAP: Dict[str, str] = {
    "pattern": "pattern",
    "engine": "engine",
    "engineOptions": "engine_options",
    "engine_options": "engine_options",
    "concurrency": "concurrency",
}

def default_pattern(extensions: List[str]) -> str:
    # matches every file with one of the given extensions, or every file when there are none.
    if not extensions:
        return "**"
    if len(extensions) == 1:
        return f"**/*.{extensions[0]}"
    return "**/*.{" + ",".join(extensions) + "}"

@dataclass
class PluginConfig:
    # holds the plugin options for a single build.
    # pattern is validated when filtering so that a bad value surfaces as InvalidPatternError.
    pattern: Optional[Union[str, List[str], Any]] = None
    engine: Optional[EngineRef] = None
    engine_options: Dict[str, Any] = field(default_factory=dict)
    concurrency: int = 1

    def __post_init__(self):
        self.engine = engine_ref_from_option(self.engine)
        if self.engine_options is None:
            self.engine_options = {}
        if not isinstance(self.engine_options, dict):
            raise ConfigError(f"engine_options must be a mapping, got {type(self.engine_options).__name__}")
        if isinstance(self.concurrency, bool) or not isinstance(self.concurrency, int) or self.concurrency < 1:
            raise ConfigError(f"concurrency must be a positive integer, got {self.concurrency!r}")

    @classmethod
    def from_options(cls, **options: Any) -> "PluginConfig":
        kwargs: Dict[str, Any] = {}
        for key, value in options.items():
            attr = OPTION_KEY_TO_ATTR_MAP.get(key)
            if attr is None:
                log.warning("unknown_plugin_option_ignored", option=key)
                continue
            kwargs[attr] = value
        return cls(**kwargs)

    def effective_pattern(self, registry: EngineRegistry) -> Any:
        if self.pattern is not None:
            return self.pattern
        # a configured engine narrows the default to its own trigger extensions.
        if self.engine is not None:
            engine = self.engine.resolve(registry)
            if engine is not None:
                return default_pattern(list(engine.input_extensions))
        return default_pattern(registry.input_extensions())
