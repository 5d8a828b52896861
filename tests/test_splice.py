"""
Tests for docsplice.splice module.

Tests marker lookup and region replacement in README text.
"""

import pytest

from docsplice.errors import MarkerNotFoundError
from docsplice.renderer import DocRenderer
from docsplice.schema import ActionDoc, DocCategory, SourceDoc, TypeDoc
from docsplice.splice import (
    SPLICE_ORDER,
    marker_pair,
    replace_between_markers,
    update_readme,
)


def empty_readme() -> str:
    parts = ["# deck.nvim", "", "Intro text."]
    for category in ("action", "source", "autocmd", "api", "type"):
        start, end = marker_pair(DocCategory(category))
        parts.extend(["", f"## {category}", start, end])
    parts.append("")
    return "\n".join(parts)


class TestMarkerPair:
    """Tests for marker naming."""

    def test_marker_text(self):
        """Markers embed the category value."""
        assert marker_pair(DocCategory.API) == (
            "<!-- auto-generate-s:api -->",
            "<!-- auto-generate-e:api -->",
        )

    def test_splice_order_covers_every_category(self):
        """Every category has a README region."""
        assert set(SPLICE_ORDER) == set(DocCategory)


class TestReplaceBetweenMarkers:
    """Tests for replace_between_markers()."""

    def test_fills_empty_region(self):
        """Replacement lines go between the markers."""
        lines = ["a", "<s>", "<e>", "b"]
        assert replace_between_markers(lines, "<s>", "<e>", ["x", "y"]) == ["a", "<s>", "x", "y", "<e>", "b"]

    def test_replaces_existing_content(self):
        """Old content between the markers is dropped."""
        lines = ["<s>", "old 1", "old 2", "<e>"]
        assert replace_between_markers(lines, "<s>", "<e>", ["new"]) == ["<s>", "new", "<e>"]

    def test_empty_replacement_clears_region(self):
        """No replacements leave the markers adjacent."""
        lines = ["<s>", "old", "<e>"]
        assert replace_between_markers(lines, "<s>", "<e>", []) == ["<s>", "<e>"]

    def test_uses_first_markers(self):
        """The earliest start and the earliest end after it are used."""
        lines = ["<s>", "old", "<e>", "<s>", "keep", "<e>"]
        assert replace_between_markers(lines, "<s>", "<e>", ["new"]) == ["<s>", "new", "<e>", "<s>", "keep", "<e>"]

    def test_end_before_start_is_not_used(self):
        """An end marker above the start marker does not count."""
        lines = ["<e>", "<s>", "old", "<e>"]
        assert replace_between_markers(lines, "<s>", "<e>", []) == ["<e>", "<s>", "<e>"]

    def test_marker_must_match_whole_line(self):
        """Markers are matched exactly, not as substrings or after stripping."""
        with pytest.raises(MarkerNotFoundError):
            replace_between_markers(["  <s>", "<e>"], "<s>", "<e>", [])

    def test_missing_start_marker(self):
        """A missing start marker raises and leaves the input alone."""
        lines = ["a", "<e>"]
        with pytest.raises(MarkerNotFoundError) as excinfo:
            replace_between_markers(lines, "<s>", "<e>", ["x"])
        assert excinfo.value.marker == "<s>"
        assert lines == ["a", "<e>"]

    def test_missing_end_marker(self):
        """A missing end marker raises and leaves the input alone."""
        lines = ["<s>", "old"]
        with pytest.raises(MarkerNotFoundError) as excinfo:
            replace_between_markers(lines, "<s>", "<e>", ["x"])
        assert excinfo.value.marker == "<e>"
        assert lines == ["<s>", "old"]

    def test_does_not_mutate_input(self):
        """The input list is never modified."""
        lines = ["<s>", "old", "<e>"]
        replace_between_markers(lines, "<s>", "<e>", ["new"])
        assert lines == ["<s>", "old", "<e>"]

    def test_idempotent(self):
        """Splicing the same content twice equals splicing it once."""
        lines = ["top", "<s>", "stale", "<e>", "bottom"]
        once = replace_between_markers(lines, "<s>", "<e>", ["x", "y"])
        twice = replace_between_markers(once, "<s>", "<e>", ["x", "y"])
        assert twice == once


class TestUpdateReadme:
    """Tests for update_readme()."""

    def test_only_populated_regions_change(self):
        """Categories without records keep empty regions."""
        docs = [
            SourceDoc(name="files", desc="List files"),
            TypeDoc(name="Foo", definition="---@class Foo"),
        ]

        updated = update_readme(empty_readme(), docs, DocRenderer())

        assert "<!-- auto-generate-s:action -->\n<!-- auto-generate-e:action -->" in updated
        assert "<!-- auto-generate-s:autocmd -->\n<!-- auto-generate-e:autocmd -->" in updated
        assert "<!-- auto-generate-s:api -->\n<!-- auto-generate-e:api -->" in updated
        assert "<!-- auto-generate-s:source -->\n### files\n\nList files\n\n_No options_\n\n\n<!-- auto-generate-e:source -->" in updated
        assert "<!-- auto-generate-s:type -->\n```vimdoc\n*Foo*\n```\n```lua\n---@class Foo\n```\n<!-- auto-generate-e:type -->" in updated

    def test_text_outside_markers_preserved(self):
        """Content around the regions, including the final newline, is kept."""
        readme = empty_readme()
        updated = update_readme(readme, [ActionDoc(name="open", desc="Open")], DocRenderer())

        assert updated.startswith("# deck.nvim\n\nIntro text.\n")
        assert updated.endswith("<!-- auto-generate-e:type -->\n")

    def test_fragments_joined_by_newline(self):
        """Fragments of one category are separated by single newlines."""
        docs = [ActionDoc(name="a", desc="A"), ActionDoc(name="b", desc="B")]

        updated = update_readme(empty_readme(), docs, DocRenderer())

        assert "<!-- auto-generate-s:action -->\n- `a`\n  - A\n- `b`\n  - B\n<!-- auto-generate-e:action -->" in updated

    def test_idempotent(self):
        """A second run over the output changes nothing."""
        docs = [
            ActionDoc(name="open", desc="Open"),
            SourceDoc(name="files", desc="List files", example="deck.start(files())"),
        ]
        renderer = DocRenderer()

        once = update_readme(empty_readme(), docs, renderer)
        twice = update_readme(once, docs, renderer)

        assert twice == once

    def test_stale_content_replaced(self):
        """Records removed from the sources disappear from the README."""
        renderer = DocRenderer()
        first = update_readme(empty_readme(), [ActionDoc(name="old", desc="Old")], renderer)
        second = update_readme(first, [ActionDoc(name="new", desc="New")], renderer)

        assert "`old`" not in second
        assert "`new`" in second

    def test_missing_category_markers(self):
        """Every category's markers must be present."""
        readme = empty_readme().replace("<!-- auto-generate-e:api -->\n", "")

        with pytest.raises(MarkerNotFoundError, match="auto-generate-e:api"):
            update_readme(readme, [], DocRenderer())
