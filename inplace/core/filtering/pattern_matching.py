# inplace/core/filtering/pattern_matching.py
from collections.abc import Sequence
from typing import List, Optional, Tuple, Union

import pathspec
import structlog

from inplace.exceptions import InvalidPatternError

log = structlog.get_logger(__name__)

PatternOption = Union[str, Sequence]

# named group pathspec sets when a gitwildmatch pattern matched a parent directory of the path.
DIRECTORY_MATCH_GROUP = "ps_d"

def _find_brace_group(pattern: str, start: int) -> Optional[Tuple[int, int, List[int]]]:
    # returns (open, close, top-level comma positions) of the first balanced group at or after start.
    open_idx = pattern.find("{", start)
    while open_idx != -1:
        depth = 0
        commas: List[int] = []
        for idx in range(open_idx, len(pattern)):
            char = pattern[idx]
            if char == "{":
                depth += 1
            elif char == "}":
                depth -= 1
                if depth == 0:
                    if commas:
                        return open_idx, idx, commas
                    break
            elif char == "," and depth == 1:
                commas.append(idx)
        # unbalanced or comma-less groups are literal text; try the next brace.
        open_idx = pattern.find("{", open_idx + 1)
    return None

def expand_braces(pattern: str) -> List[str]:
    # expands "{a,b}" alternation, including nested groups: "*.{md,{h,x}tml}" -> 3 patterns.
    group = _find_brace_group(pattern, 0)
    if group is None:
        return [pattern]

    open_idx, close_idx, commas = group
    prefix, suffix = pattern[:open_idx], pattern[close_idx + 1:]
    bounds = [open_idx] + commas + [close_idx]
    alternatives = [pattern[bounds[i] + 1:bounds[i + 1]] for i in range(len(bounds) - 1)]

    expanded: List[str] = []
    for alternative in alternatives:
        for candidate in expand_braces(prefix + alternative + suffix):
            if candidate not in expanded:
                expanded.append(candidate)
    return expanded

def _anchor(pattern: str) -> str:
    # gitwildmatch lets slash-less patterns match at any depth; anchor them to the root instead.
    negated = pattern.startswith("!")
    body = pattern[1:] if negated else pattern
    if body.startswith("./"):
        body = body[2:]
    if body and not body.startswith("/"):
        body = "/" + body
    # a trailing "**" must select files below it directly, not through a directory match.
    if body == "/**" or body.endswith("/**"):
        body += "/*"
    return ("!" if negated else "") + body

def normalize_pattern(pattern: object) -> List[str]:
    # validates the pattern option and returns it as a list of strings.
    if isinstance(pattern, str):
        return [pattern]
    if isinstance(pattern, Sequence) and not isinstance(pattern, (bytes, bytearray)):
        if all(isinstance(item, str) for item in pattern):
            return list(pattern)
    raise InvalidPatternError(
        f"invalid pattern {pattern!r}: expected a string or a sequence of strings, "
        f"got {type(pattern).__name__}"
    )

class PatternMatcher:
    """Glob patterns compiled once per build and matched against file mapping keys."""

    def __init__(self, pattern: PatternOption):
        self.patterns: List[str] = normalize_pattern(pattern)
        self.expanded: List[str] = [
            _anchor(expanded)
            for raw in self.patterns
            for expanded in expand_braces(raw)
        ]
        try:
            self.spec = pathspec.PathSpec.from_lines("gitwildmatch", self.expanded)
        except Exception as e:
            raise InvalidPatternError(f"error compiling glob patterns {self.patterns}: {e}") from e
        log.debug("pattern_compiled", patterns=self.patterns, expanded=self.expanded)

    def match(self, filename: str) -> bool:
        # last matching pattern wins, as in pathspec, but only direct file matches count:
        # "*" must not select "blog/post.md" just because it matches the "blog" directory.
        path = filename.replace("\\", "/")
        selected = False
        for compiled in self.spec.patterns:
            if compiled.include is None:
                continue
            found = compiled.regex.match(path)
            if found is None or found.groupdict().get(DIRECTORY_MATCH_GROUP) is not None:
                continue
            selected = compiled.include
        return selected

    def __str__(self) -> str:
        return ", ".join(self.patterns)

    def __repr__(self) -> str:
        return f"PatternMatcher({self.patterns!r})"

def compile_pattern(pattern: Union[PatternOption, PatternMatcher]) -> PatternMatcher:
    if isinstance(pattern, PatternMatcher):
        return pattern
    return PatternMatcher(pattern)
