"""
Unit tests for exclusion rule compilation and matching.
"""
import pytest

from find_duplicates.core.exclusion import (
    ExclusionPatternError, compile_exclusion, compile_exclusions, compile_glob,
    exclusion_to_pattern, is_excluded)
from find_duplicates.core.models import Exclusion, DEFAULT_EXCLUSIONS


class TestExclusionToPattern:
    def test_directory_is_normalised(self):
        assert exclusion_to_pattern(Exclusion.directory("/data/cache/")) == "/data/cache"

    def test_directory_metacharacters_are_literal(self):
        """A directory named '[old]' must not turn into a character class."""
        matcher = compile_exclusion(Exclusion.directory("/data/[old]"))

        assert matcher.matches("/data/[old]")
        assert not matcher.matches("/data/o")

    def test_pattern_kept_as_is(self):
        assert exclusion_to_pattern(Exclusion.pattern("*/node_modules")) == "*/node_modules"


class TestMatching:
    def test_directory_matches_full_path_only(self):
        matcher = compile_exclusion(Exclusion.directory("/tmp"))

        assert matcher.matches("/tmp")
        assert not matcher.matches("/tmp/file.txt")
        assert not matcher.matches("/var/tmp")

    def test_star_crosses_separators(self):
        matcher = compile_exclusion(Exclusion.pattern("*/.git"))

        assert matcher.matches("/home/user/project/.git")
        assert matcher.matches("/.git")
        assert not matcher.matches("/home/user/project/.github")

    def test_matching_is_case_sensitive(self):
        matcher = compile_exclusion(Exclusion.pattern("*/CVS"))
        assert matcher.matches("/src/CVS")
        assert not matcher.matches("/src/cvs")

    def test_character_classes_and_question_mark(self):
        assert compile_exclusion(Exclusion.pattern("*/file?.[ch]")).matches("/src/file1.c")
        assert not compile_exclusion(Exclusion.pattern("*/file?.[!ch]")).matches("/src/file1.c")

    def test_double_star_component(self):
        matcher = compile_exclusion(Exclusion.pattern("/data/**/cache"))
        assert matcher.matches("/data/a/b/cache")

    def test_is_excluded_checks_every_rule(self):
        matchers = compile_exclusions(DEFAULT_EXCLUSIONS)

        assert is_excluded("/proc", matchers)
        assert is_excluded("/home/u/app/node_modules", matchers)
        assert is_excluded("/home/u/crate/target", matchers)
        assert not is_excluded("/home/u/photos", matchers)


class TestPatternErrors:
    """Malformed patterns fail at compile time, before any walk."""

    @pytest.mark.parametrize("pattern", ["*/[abc", "[!", "a***", "a**/b", "/x/**b", ""])
    def test_rejects_malformed(self, pattern):
        with pytest.raises(ExclusionPatternError):
            compile_exclusion(Exclusion.pattern(pattern))

    def test_error_is_a_value_error_with_details(self):
        with pytest.raises(ValueError) as exc_info:
            compile_glob("*/[abc")

        assert exc_info.value.pattern == "*/[abc"
        assert "unclosed character class" in str(exc_info.value)

    def test_closing_bracket_first_in_class_is_literal(self):
        assert compile_glob("*[]]").match("/a]")

    def test_first_bad_rule_aborts_compilation(self):
        rules = [Exclusion.pattern("*/ok"), Exclusion.pattern("*/[bad")]
        with pytest.raises(ExclusionPatternError):
            compile_exclusions(rules)

    def test_empty_directory_rejected(self):
        with pytest.raises(ExclusionPatternError):
            compile_exclusion(Exclusion.directory(""))
