"""
docsplice Markdown Renderer

This module turns documentation records into Markdown fragments for the
README. Each category has its own layout; the fragments of one category
are placed, in order, between that category's README markers.

Output per category:
    action / autocmd  - a bullet with the name and an indented description
    source            - a heading, description, options table, example
    api               - a panvimdoc-aware heading, description, args table
    type              - a vimdoc help tag followed by the definition

panvimdoc converts the README into a Vim help file. The
`panvimdoc-include-comment` / `panvimdoc-ignore-*` comments make API
entries show up as help tags there while keeping the Markdown heading on
GitHub.
"""

from dataclasses import dataclass
from typing import Callable, Optional

from docsplice.schema import (
    ActionDoc,
    ApiDoc,
    AutocmdDoc,
    Doc,
    DocCategory,
    SourceDoc,
    TypeDoc,
)


def escape_table(s: str) -> str:
    """
    Escape a string for use inside a Markdown table cell.

    Only `|` is escaped; other Markdown is passed through as written.
    """
    return s.replace("|", "\\|")


@dataclass
class RenderOptions:
    """
    Configuration options for record rendering.

    Attributes:
        code_language: Fence language for examples and type definitions
        help_tag_language: Fence language for the help tag of a type
    """
    code_language: str = "lua"
    help_tag_language: str = "vimdoc"


class DocRenderer:
    """
    Renders documentation records into Markdown fragments.

    Usage:
        renderer = DocRenderer()
        fragment = renderer.render(doc)

        # Only one category
        fragments = renderer.render_category(docs, DocCategory.SOURCE)
    """

    def __init__(self, options: Optional[RenderOptions] = None):
        """
        Initialize the renderer.

        Args:
            options: Rendering options (uses defaults if not provided)
        """
        self.options = options or RenderOptions()
        self._renderers: dict[DocCategory, Callable[[Doc], str]] = {
            DocCategory.ACTION: self.render_action,
            DocCategory.API: self.render_api,
            DocCategory.AUTOCMD: self.render_autocmd,
            DocCategory.SOURCE: self.render_source,
            DocCategory.TYPE: self.render_type,
        }
        missing = set(DocCategory) - self._renderers.keys()
        if missing:
            raise RuntimeError(f"No renderer for: {', '.join(sorted(c.value for c in missing))}")

    def render(self, doc: Doc) -> str:
        """Render one record with the layout of its category."""
        return self._renderers[doc.category](doc)

    def render_category(self, docs: list[Doc], category: DocCategory) -> list[str]:
        """Render the records of `category`, keeping their order."""
        return [self.render(doc) for doc in docs if doc.category is category]

    def render_action(self, doc: ActionDoc) -> str:
        return f"- `{doc.name}`\n  - {doc.desc}"

    def render_autocmd(self, doc: AutocmdDoc) -> str:
        return f"- `{doc.name}`\n  - {doc.desc}"

    def render_source(self, doc: SourceDoc) -> str:
        """
        Render a source: heading, description, options, example.

        A source without options gets "_No options_" in place of the table.
        Missing defaults and descriptions render as empty cells.
        """
        options = "_No options_"
        if doc.options:
            rows = [
                "| Name | Type | Default |Description|",
                "|------|------|---------|-----------|",
            ]
            for option in doc.options:
                rows.append(
                    f"| {escape_table(option.name)} | {escape_table(option.type)} | "
                    f"{escape_table(option.default or '')} | {escape_table(option.desc or '')} |"
                )
            options = "\n".join(rows)

        example = ""
        if doc.example:
            example = f"```{self.options.code_language}\n{doc.example}\n```"

        return f"### {doc.name}\n\n{doc.desc}\n\n{options}\n\n{example}"

    def render_api(self, doc: ApiDoc) -> str:
        """Render an API function, ending with a `&nbsp;` spacer line."""
        args = "_No arguments_"
        if doc.args:
            rows = [
                "| Name | Type | Description |",
                "|------|------|-------------|",
            ]
            for arg in doc.args:
                rows.append(
                    f"| {escape_table(arg.name)} | {escape_table(arg.type)} | {escape_table(arg.desc)} |"
                )
            args = "\n".join(rows)

        section = "\n"
        section += f"<!-- panvimdoc-include-comment {doc.name} ~ -->\n"
        section += "\n"
        section += "<!-- panvimdoc-ignore-start -->\n"
        section += f"### {doc.name}\n"
        section += "<!-- panvimdoc-ignore-end -->\n"
        section += "\n"
        section += f"{doc.desc}\n"
        section += "\n"
        section += f"{args}\n"
        section += "&nbsp;"
        return section

    def render_type(self, doc: TypeDoc) -> str:
        # The definition goes in untouched, including its annotations
        return (
            f"```{self.options.help_tag_language}\n*{doc.name}*\n```\n"
            f"```{self.options.code_language}\n{doc.definition}\n```"
        )


def render_doc(doc: Doc, options: Optional[RenderOptions] = None) -> str:
    """
    Convenience function to render a single record.

    Example:
        from docsplice.schema import ActionDoc
        print(render_doc(ActionDoc(name="open", desc="Open the item")))
    """
    return DocRenderer(options).render(doc)
