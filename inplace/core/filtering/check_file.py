# inplace/core/filtering/check_file.py
import posixpath
from typing import Union

import structlog

from .pattern_matching import PatternMatcher, PatternOption, compile_pattern

log = structlog.get_logger(__name__)

def should_process(filename: str, pattern: Union[PatternOption, PatternMatcher]) -> bool:
    """
    Decides whether a file is handed to the render dispatcher.

    A file qualifies when it matches the pattern and its final path segment
    has an extension. Raises InvalidPatternError for a pattern that is not a
    string or a sequence of strings.
    """
    matcher = compile_pattern(pattern)

    # only process files that match the pattern
    if not matcher.match(filename):
        log.debug("file_does_not_match_pattern", filename=filename, pattern=str(matcher))
        return False

    # only process files with an extension
    if "." not in posixpath.basename(filename.replace("\\", "/")):
        log.debug("file_has_no_extension", filename=filename)
        return False

    return True

check_file = should_process
