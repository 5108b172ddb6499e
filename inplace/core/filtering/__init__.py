# inplace/core/filtering/__init__.py
"""
File selection for the plugin: glob pattern matching plus the extension check.
"""
from .check_file import should_process, check_file
from .pattern_matching import PatternMatcher, compile_pattern, expand_braces, normalize_pattern

__all__ = [
    "should_process",
    "check_file",
    "PatternMatcher",
    "compile_pattern",
    "expand_braces",
    "normalize_pattern",
]
