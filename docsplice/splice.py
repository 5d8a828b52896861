"""
docsplice README Splicing

The README owns five generated regions, one per record category:

    <!-- auto-generate-s:action -->
    ...generated, replaced on every run...
    <!-- auto-generate-e:action -->

Everything outside these regions is left exactly as written. The marker
lines themselves are kept, so running the generator again replaces the
region in place.
"""

from docsplice.errors import MarkerNotFoundError
from docsplice.renderer import DocRenderer
from docsplice.schema import Doc, DocCategory

START_MARKER = "<!-- auto-generate-s:{category} -->"
END_MARKER = "<!-- auto-generate-e:{category} -->"

# Order in which regions are rewritten.
SPLICE_ORDER: tuple[DocCategory, ...] = (
    DocCategory.ACTION,
    DocCategory.SOURCE,
    DocCategory.AUTOCMD,
    DocCategory.API,
    DocCategory.TYPE,
)


def marker_pair(category: DocCategory) -> tuple[str, str]:
    """Return the (start, end) marker lines for `category`."""
    return (
        START_MARKER.format(category=category.value),
        END_MARKER.format(category=category.value),
    )


def replace_between_markers(
    lines: list[str],
    start_marker: str,
    end_marker: str,
    replacements: list[str],
) -> list[str]:
    """
    Replace the lines between two marker lines.

    The first line equal to `start_marker` is used, then the first line
    equal to `end_marker` at or after it. Both markers are kept.

    Args:
        lines: README content split into lines
        start_marker: Exact text of the opening marker line
        end_marker: Exact text of the closing marker line
        replacements: Lines to place between the markers

    Returns:
        A new list of lines; `lines` is not modified

    Raises:
        MarkerNotFoundError: If either marker is missing
    """
    try:
        start = lines.index(start_marker)
    except ValueError:
        raise MarkerNotFoundError(start_marker) from None

    try:
        end = lines.index(end_marker, start)
    except ValueError:
        raise MarkerNotFoundError(end_marker) from None

    return [*lines[:start + 1], *replacements, *lines[end:]]


def update_readme(text: str, docs: list[Doc], renderer: DocRenderer) -> str:
    """
    Regenerate every marked region of a README.

    Regions are rewritten one category at a time, each against the text
    produced by the previous one.

    Args:
        text: Current README content
        docs: Records to render, already sorted
        renderer: Renderer producing each record's fragment

    Returns:
        The updated README content

    Raises:
        MarkerNotFoundError: If any category's markers are missing
    """
    lines = text.split("\n")
    for category in SPLICE_ORDER:
        start_marker, end_marker = marker_pair(category)
        lines = replace_between_markers(
            lines,
            start_marker,
            end_marker,
            renderer.render_category(docs, category),
        )
    return "\n".join(lines)
