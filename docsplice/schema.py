"""
docsplice Record Schema

This module defines the documentation records that extractors produce and
the renderer consumes, together with the validator that turns a parsed
`@doc` block (a plain mapping) into one of them.

Design Principles:
    1. Closed set: a record is exactly one of five shapes, tagged by category
    2. Strict: unknown fields, non-string values and unknown categories fail
    3. One validator per category, dispatched on the `category` field

Block example (TOML inside a Lua comment):

    --[=[@doc
      category = "action"
      name = "open"
      desc = "Open the selected item"
    --]=]
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, ClassVar, Optional, Union

from docsplice.errors import DocValidationError


class DocCategory(Enum):
    """
    Record categories.

    The value is the literal used in `category = "..."` and in the README
    marker names. Records sort by this value.
    """
    ACTION = "action"
    API = "api"
    AUTOCMD = "autocmd"
    SOURCE = "source"
    TYPE = "type"

    def __str__(self) -> str:
        return self.value


@dataclass
class SourceOption:
    """
    One configurable option of a source.

    Attributes:
        name: Option key
        type: Lua type annotation (e.g. "boolean", "fun(): string")
        default: Default value as displayed in the docs
        desc: Short explanation
    """
    name: str
    type: str
    default: Optional[str] = None
    desc: Optional[str] = None


@dataclass
class ApiArg:
    """A single argument of a public API function."""
    name: str
    type: str
    desc: str


@dataclass
class TypeDoc:
    """
    A type definition taken from a `---@doc.type` block.

    Attributes:
        name: The class name following `@class`
        definition: The whole annotation block, as written
    """
    category: ClassVar[DocCategory] = DocCategory.TYPE

    name: str
    definition: str

    def to_dict(self) -> dict[str, Any]:
        return {"category": self.category.value, "name": self.name, "definition": self.definition}


@dataclass
class SourceDoc:
    """
    A completion/picker source.

    Attributes:
        name: Source name
        desc: Paragraph describing the source
        options: Configurable options (None when the block has no `options`)
        example: Lua snippet showing how to configure the source
    """
    category: ClassVar[DocCategory] = DocCategory.SOURCE

    name: str
    desc: str
    options: Optional[list[SourceOption]] = None
    example: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"category": self.category.value, "name": self.name, "desc": self.desc}
        if self.options is not None:
            result["options"] = [_drop_none(vars(option)) for option in self.options]
        if self.example is not None:
            result["example"] = self.example
        return result


@dataclass
class ActionDoc:
    """A named action the user can map."""
    category: ClassVar[DocCategory] = DocCategory.ACTION

    name: str
    desc: str

    def to_dict(self) -> dict[str, Any]:
        return {"category": self.category.value, "name": self.name, "desc": self.desc}


@dataclass
class AutocmdDoc:
    """A `User` autocmd emitted by the plugin."""
    category: ClassVar[DocCategory] = DocCategory.AUTOCMD

    name: str
    desc: str

    def to_dict(self) -> dict[str, Any]:
        return {"category": self.category.value, "name": self.name, "desc": self.desc}


@dataclass
class ApiDoc:
    """
    A public Lua API function.

    Attributes:
        name: Fully qualified function name
        desc: What the function does
        args: Arguments in call order (None when the block has no `args`)
    """
    category: ClassVar[DocCategory] = DocCategory.API

    name: str
    desc: str
    args: Optional[list[ApiArg]] = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"category": self.category.value, "name": self.name, "desc": self.desc}
        if self.args is not None:
            result["args"] = [vars(arg).copy() for arg in self.args]
        return result


Doc = Union[TypeDoc, SourceDoc, ActionDoc, AutocmdDoc, ApiDoc]


def _drop_none(values: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in values.items() if value is not None}


# === Field checks ===

def _check_fields(
    raw: Mapping[str, Any],
    required: set[str],
    optional: set[str],
    where: str,
) -> None:
    """
    Ensure `raw` has every required key and nothing outside required/optional.

    Args:
        raw: The mapping being validated
        required: Keys that must be present
        optional: Keys that may be present
        where: Human-readable location used in error messages
    """
    missing = sorted(required - raw.keys())
    if missing:
        raise DocValidationError(f"{where}: missing required field(s): {', '.join(missing)}")

    unknown = sorted(raw.keys() - required - optional)
    if unknown:
        raise DocValidationError(f"{where}: unknown field(s): {', '.join(unknown)}")


def _string(raw: Mapping[str, Any], key: str, where: str) -> str:
    value = raw[key]
    if not isinstance(value, str):
        raise DocValidationError(
            f"{where}: field '{key}' must be a string, got {type(value).__name__}"
        )
    return value


def _optional_string(raw: Mapping[str, Any], key: str, where: str) -> Optional[str]:
    if key not in raw:
        return None
    return _string(raw, key, where)


def _table_list(raw: Mapping[str, Any], key: str, where: str) -> Optional[list[Mapping[str, Any]]]:
    """Return the array-of-tables stored under `key`, or None if absent."""
    if key not in raw:
        return None

    value = raw[key]
    if not isinstance(value, list):
        raise DocValidationError(
            f"{where}: field '{key}' must be an array, got {type(value).__name__}"
        )
    for index, item in enumerate(value):
        if not isinstance(item, Mapping):
            raise DocValidationError(
                f"{where}: {key}[{index}] must be a table, got {type(item).__name__}"
            )
    return value


# === Per-category validators ===

def _validate_type(raw: Mapping[str, Any]) -> TypeDoc:
    where = "type"
    _check_fields(raw, {"category", "name", "definition"}, set(), where)
    return TypeDoc(
        name=_string(raw, "name", where),
        definition=_string(raw, "definition", where),
    )


def _validate_source(raw: Mapping[str, Any]) -> SourceDoc:
    where = "source"
    _check_fields(raw, {"category", "name", "desc"}, {"options", "example"}, where)

    options = None
    items = _table_list(raw, "options", where)
    if items is not None:
        options = []
        for index, item in enumerate(items):
            item_where = f"{where}.options[{index}]"
            _check_fields(item, {"name", "type"}, {"default", "desc"}, item_where)
            options.append(SourceOption(
                name=_string(item, "name", item_where),
                type=_string(item, "type", item_where),
                default=_optional_string(item, "default", item_where),
                desc=_optional_string(item, "desc", item_where),
            ))

    return SourceDoc(
        name=_string(raw, "name", where),
        desc=_string(raw, "desc", where),
        options=options,
        example=_optional_string(raw, "example", where),
    )


def _validate_action(raw: Mapping[str, Any]) -> ActionDoc:
    where = "action"
    _check_fields(raw, {"category", "name", "desc"}, set(), where)
    return ActionDoc(name=_string(raw, "name", where), desc=_string(raw, "desc", where))


def _validate_autocmd(raw: Mapping[str, Any]) -> AutocmdDoc:
    where = "autocmd"
    _check_fields(raw, {"category", "name", "desc"}, set(), where)
    return AutocmdDoc(name=_string(raw, "name", where), desc=_string(raw, "desc", where))


def _validate_api(raw: Mapping[str, Any]) -> ApiDoc:
    where = "api"
    _check_fields(raw, {"category", "name", "desc"}, {"args"}, where)

    args = None
    items = _table_list(raw, "args", where)
    if items is not None:
        args = []
        for index, item in enumerate(items):
            item_where = f"{where}.args[{index}]"
            _check_fields(item, {"name", "type", "desc"}, set(), item_where)
            args.append(ApiArg(
                name=_string(item, "name", item_where),
                type=_string(item, "type", item_where),
                desc=_string(item, "desc", item_where),
            ))

    return ApiDoc(
        name=_string(raw, "name", where),
        desc=_string(raw, "desc", where),
        args=args,
    )


VALIDATORS: dict[DocCategory, Callable[[Mapping[str, Any]], Doc]] = {
    DocCategory.TYPE: _validate_type,
    DocCategory.SOURCE: _validate_source,
    DocCategory.ACTION: _validate_action,
    DocCategory.AUTOCMD: _validate_autocmd,
    DocCategory.API: _validate_api,
}


def validate_doc(raw: Mapping[str, Any]) -> Doc:
    """
    Turn a parsed block into a typed record.

    Args:
        raw: Mapping produced by parsing a `@doc` block

    Returns:
        The record matching `raw["category"]`

    Raises:
        DocValidationError: If the category is missing or unknown, or the
            fields do not match that category's shape exactly
    """
    if not isinstance(raw, Mapping):
        raise DocValidationError(f"Doc block must be a table, got {type(raw).__name__}")

    if "category" not in raw:
        raise DocValidationError("missing required field: category")

    value = raw["category"]
    try:
        category = DocCategory(value)
    except ValueError:
        known = ", ".join(c.value for c in DocCategory)
        raise DocValidationError(f"unknown category {value!r} (expected one of: {known})") from None

    return VALIDATORS[category](raw)


def sort_docs(docs: Iterable[Doc]) -> list[Doc]:
    """
    Order records by category, then by name.

    Returns a new list; the input is left untouched.
    """
    return sorted(docs, key=lambda doc: (doc.category.value, doc.name))
