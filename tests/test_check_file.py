# tests/test_check_file.py
"""Tests for file selection: glob matching and the extension check."""

import pytest

from inplace.core.filtering import compile_pattern, expand_braces, should_process
from inplace.exceptions import InvalidPatternError


class TestExtensionRule:
    """Files without an extension are never rendered."""

    @pytest.mark.parametrize("pattern", ["*", "**", ["**", "README"], "README"])
    def test_file_without_extension_is_rejected(self, pattern):
        assert should_process("README", pattern) is False

    def test_dot_in_directory_does_not_count(self):
        assert should_process("site.d/LICENSE", "**") is False

    def test_file_with_extension_is_accepted(self):
        assert should_process("index.md", "*.md") is True


class TestGlobMatching:

    def test_star_is_anchored_at_the_root(self):
        assert should_process("index.md", "*.md") is True
        assert should_process("blog/post.md", "*.md") is False

    def test_star_does_not_cross_directories(self):
        assert should_process("blog/post.md", "*") is False
        assert should_process("blog/2024/post.md", "blog/*") is False
        assert should_process("blog/post.md", "blog/*") is True

    def test_pattern_matching_a_directory_does_not_select_its_files(self):
        assert should_process("guide.md/notes.txt", "*.md") is False
        assert should_process("guide.md/notes.txt", "**/*.md") is False
        assert should_process("blog/post.md", "blog") is False

    def test_trailing_globstar_selects_everything_below(self):
        assert should_process("blog/2024/post.md", "blog/**") is True
        assert should_process("blog/post.md", "**") is True

    def test_negated_directory_globstar(self):
        pattern = ["**/*.md", "!drafts/**"]
        assert should_process("drafts/idea.md", pattern) is False
        assert should_process("posts/idea.md", pattern) is True

    def test_wildcards_match_dotfiles(self):
        assert should_process(".hidden.md", "*.md") is True
        assert should_process(".well-known/security.txt", "**/*.txt") is True

    def test_globstar_matches_any_depth(self):
        assert should_process("index.md", "**/*.md") is True
        assert should_process("blog/2024/post.md", "**/*.md") is True

    def test_matching_is_case_sensitive(self):
        assert should_process("INDEX.MD", "*.md") is False

    def test_non_matching_extension_is_rejected(self):
        assert should_process("notes.txt", "*.md") is False

    def test_array_pattern(self):
        pattern = ["index.md", "extra.md"]
        assert should_process("index.md", pattern) is True
        assert should_process("extra.md", pattern) is True
        assert should_process("other.md", pattern) is False

    def test_negated_pattern_excludes(self):
        pattern = ["*.md", "!draft.md"]
        assert should_process("index.md", pattern) is True
        assert should_process("draft.md", pattern) is False

    def test_brace_alternation(self):
        pattern = "**/*.{hbs,j2}"
        assert should_process("index.hbs", pattern) is True
        assert should_process("pages/about.html.j2", pattern) is True
        assert should_process("style.css", pattern) is False

    def test_leading_dot_slash_is_ignored(self):
        assert should_process("index.md", "./index.md") is True

    def test_compiled_matcher_is_reusable(self):
        matcher = compile_pattern(["*.md", "*.hbs"])
        assert [should_process(f, matcher) for f in ("a.md", "b.hbs", "c.txt")] == [True, True, False]
        assert compile_pattern(matcher) is matcher

    def test_filtering_is_deterministic(self):
        files = ["a.md", "b/c.md", "d.txt", "e"]
        first = [should_process(f, "**/*.md") for f in files]
        second = [should_process(f, "**/*.md") for f in files]
        assert first == second == [True, True, False, False]


class TestInvalidPatterns:

    @pytest.mark.parametrize("pattern", [lambda: None, 42, None, b"*.md", ["*.md", 3], {"*.md": True}])
    def test_invalid_pattern_raises(self, pattern):
        with pytest.raises(InvalidPatternError) as exc_info:
            should_process("index.md", pattern)
        assert "invalid pattern" in str(exc_info.value)


class TestBraceExpansion:

    def test_simple_group(self):
        assert expand_braces("*.{md,html}") == ["*.md", "*.html"]

    def test_multiple_groups(self):
        assert expand_braces("{a,b}/{c,d}.md") == ["a/c.md", "a/d.md", "b/c.md", "b/d.md"]

    def test_nested_groups(self):
        assert expand_braces("*.{md,{h,x}tml}") == ["*.md", "*.html", "*.xtml"]

    def test_group_without_comma_is_literal(self):
        assert expand_braces("file{1}.md") == ["file{1}.md"]

    def test_unbalanced_brace_is_literal(self):
        assert expand_braces("a{b.md") == ["a{b.md"]

    def test_duplicates_are_dropped(self):
        assert expand_braces("{a,a}.md") == ["a.md"]
