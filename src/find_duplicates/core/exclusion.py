"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/exclusion.py
Turns exclusion rules into compiled path matchers.

Directories and patterns share one representation: a glob matched against the
full candidate path. `*` crosses path separators, so `*/node_modules` prunes a
node_modules directory at any depth. Malformed patterns are rejected here,
before the walk touches the file system.
"""

import fnmatch
import glob
import logging
import os
import re
from typing import Iterable, List

from find_duplicates.core.models import Exclusion, ExclusionKind

logger = logging.getLogger(__name__)


class ExclusionPatternError(ValueError):
    """Raised when an exclusion rule cannot be compiled into a glob."""

    def __init__(self, pattern: str, reason: str):
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"Invalid exclusion pattern '{pattern}': {reason}")


class ExclusionMatcher:
    """A compiled exclusion rule."""

    def __init__(self, exclusion: Exclusion, glob_pattern: str):
        self.exclusion = exclusion
        self.glob_pattern = glob_pattern
        self._regex = compile_glob(glob_pattern)

    def matches(self, path: str) -> bool:
        return self._regex.match(path) is not None

    def __repr__(self):
        return f"<ExclusionMatcher {self.glob_pattern!r}>"


def exclusion_to_pattern(exclusion: Exclusion) -> str:
    """
    Single glob for an exclusion rule.
    Directory paths are normalised and their glob metacharacters escaped,
    so a directory is only ever matched literally.
    """
    if exclusion.kind is ExclusionKind.DIRECTORY:
        if not exclusion.value:
            raise ExclusionPatternError(exclusion.value, "empty directory")
        return glob.escape(os.path.normpath(exclusion.value))

    _validate_glob(exclusion.value)
    return exclusion.value


def compile_exclusion(exclusion: Exclusion) -> ExclusionMatcher:
    return ExclusionMatcher(exclusion, exclusion_to_pattern(exclusion))


def compile_exclusions(exclusions: Iterable[Exclusion]) -> List[ExclusionMatcher]:
    """Compile every rule, failing on the first malformed one."""
    matchers = [compile_exclusion(exclusion) for exclusion in exclusions]
    logger.debug(f"Compiled {len(matchers)} exclusion rules")
    return matchers


def is_excluded(path: str, matchers: Iterable[ExclusionMatcher]) -> bool:
    return any(matcher.matches(path) for matcher in matchers)


def compile_glob(pattern: str) -> "re.Pattern[str]":
    """Validate and compile a glob for matching whole paths."""
    _validate_glob(pattern)
    return re.compile(fnmatch.translate(pattern))


def _validate_glob(pattern: str) -> None:
    """
    Reject patterns the glob syntax does not allow:
    - an empty pattern
    - a `[` character class without its closing `]`
    - `**` that is not a whole path component (e.g. `a**`, `***`)
    """
    if not pattern:
        raise ExclusionPatternError(pattern, "empty pattern")

    i = 0
    n = len(pattern)
    while i < n:
        char = pattern[i]
        if char == "[":
            j = i + 1
            if j < n and pattern[j] == "!":
                j += 1
            # A ']' right after '[' or '[!' is a literal member of the class
            if j < n and pattern[j] == "]":
                j += 1
            close = pattern.find("]", j)
            if close == -1:
                raise ExclusionPatternError(pattern, "unclosed character class")
            i = close + 1
            continue

        if char == "*":
            j = i
            while j < n and pattern[j] == "*":
                j += 1
            run = j - i
            if run > 2:
                raise ExclusionPatternError(pattern, "wildcards are either '*' or '**'")
            if run == 2:
                before_ok = i == 0 or pattern[i - 1] == "/"
                after_ok = j == n or pattern[j] == "/"
                if not (before_ok and after_ok):
                    raise ExclusionPatternError(
                        pattern, "'**' must form a whole path component")
            i = j
            continue

        i += 1
