# inplace/core/engines/__init__.py
"""
Template engines for inplace.

Engines are looked up through an EngineRegistry built when the plugin is
configured; nothing here keeps global mutable state.
"""
from .registry import ByName, Engine, EngineRef, EngineRegistry, Inline, engine_ref_from_option
from .builtin import BUILTIN_ENGINES, default_registry

__all__ = [
    "ByName",
    "Engine",
    "EngineRef",
    "EngineRegistry",
    "Inline",
    "engine_ref_from_option",
    "BUILTIN_ENGINES",
    "default_registry",
]
