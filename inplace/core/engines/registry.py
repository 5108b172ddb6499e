# inplace/core/engines/registry.py
"""
Engine capability, the explicit engine registry, and the engine reference
used by the `engine` plugin option.
"""
import asyncio
import inspect
from collections import abc
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Awaitable, Callable, Dict, Iterator, List, Mapping, Optional, Tuple, Union

import structlog

from inplace.exceptions import ConfigError

log = structlog.get_logger(__name__)

RenderFunction = Callable[[str, Mapping[str, Any], Mapping[str, Any]], Union[str, Awaitable[str]]]

@dataclass(frozen=True)
class Engine:
    # a render capability: render(content, options, context) -> str, sync or awaitable.
    name: str
    renderer: RenderFunction = field(repr=False)
    input_extensions: Tuple[str, ...] = ()
    output_extension: str = "html"

    def __post_init__(self):
        if not callable(self.renderer):
            raise ConfigError(f"engine '{self.name}' has no callable render function")
        # extensions are stored without the leading dot.
        object.__setattr__(self, "input_extensions", tuple(ext.lstrip(".") for ext in self.input_extensions))
        object.__setattr__(self, "output_extension", self.output_extension.lstrip("."))

    @classmethod
    def from_object(cls, capability: Any) -> "Engine":
        """Wraps any object exposing a callable `render` attribute."""
        if isinstance(capability, Engine):
            return capability
        render = getattr(capability, "render", None)
        if not callable(render):
            raise ConfigError(f"engine object {capability!r} has no callable 'render' attribute")
        return cls(
            name=getattr(capability, "name", None) or "inline",
            renderer=render,
            input_extensions=tuple(getattr(capability, "input_extensions", ()) or ()),
            output_extension=getattr(capability, "output_extension", None) or "html",
        )

    def render(self, content: str, options: Mapping[str, Any], context: Mapping[str, Any]) -> Union[str, Awaitable[str]]:
        return self.renderer(content, options, context)

    async def render_async(
        self, content: str, options: Mapping[str, Any], context: Mapping[str, Any], offload: bool = False
    ) -> str:
        # with offload, synchronous renderers run in a worker thread so other files keep rendering.
        if offload and not inspect.iscoroutinefunction(self.renderer):
            result = await asyncio.to_thread(self.renderer, content, options, context)
        else:
            result = self.renderer(content, options, context)
        if inspect.isawaitable(result):
            result = await result
        return result

class EngineRegistry(abc.Mapping):
    """Immutable name -> Engine mapping built once per plugin configuration."""

    def __init__(self, engines: Optional[List[Engine]] = None):
        table: Dict[str, Engine] = {}
        for engine in engines or []:
            if engine.name in table:
                log.warning("engine_registered_twice_replacing", engine=engine.name)
            table[engine.name] = engine
        self._engines = MappingProxyType(table)

    def __getitem__(self, name: str) -> Engine:
        return self._engines[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._engines)

    def __len__(self) -> int:
        return len(self._engines)

    def for_extension(self, extension: str) -> Optional[Engine]:
        extension = extension.lstrip(".")
        if not extension:
            return None
        for engine in self._engines.values():
            if extension in engine.input_extensions:
                return engine
        return None

    def input_extensions(self) -> List[str]:
        extensions: List[str] = []
        for engine in self._engines.values():
            for ext in engine.input_extensions:
                if ext not in extensions:
                    extensions.append(ext)
        return extensions

    def with_engine(self, engine: Engine) -> "EngineRegistry":
        # registries never change after construction; adding an engine builds a new one.
        return EngineRegistry(list(self._engines.values()) + [engine])

    def __repr__(self) -> str:
        return f"EngineRegistry({list(self._engines)!r})"

@dataclass(frozen=True)
class ByName:
    name: str

    def resolve(self, registry: EngineRegistry) -> Optional[Engine]:
        return registry.get(self.name)

    def __str__(self) -> str:
        return self.name

@dataclass(frozen=True)
class Inline:
    engine: Engine

    def resolve(self, registry: EngineRegistry) -> Optional[Engine]:
        return self.engine

    def __str__(self) -> str:
        return self.engine.name

EngineRef = Union[ByName, Inline]

def engine_ref_from_option(value: Any) -> Optional[EngineRef]:
    """Turns an `engine` option (name, Engine, or object with `render`) into an EngineRef."""
    if value is None:
        return None
    if isinstance(value, (ByName, Inline)):
        return value
    if isinstance(value, str):
        if not value.strip():
            raise ConfigError("engine name must not be empty")
        return ByName(value.strip())
    if isinstance(value, Engine) or callable(getattr(value, "render", None)):
        return Inline(Engine.from_object(value))
    raise ConfigError(
        f"invalid engine option {value!r}: expected an engine name or an object with a render method"
    )
