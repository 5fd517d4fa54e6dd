"""Field values and the field value formatter.

Purpose
-------
Represent structured field values as a closed tagged variant and turn each
of them into the canonical text shown after ``key=`` on the console.

Contents
--------
* Variant dataclasses: :class:`String`, :class:`Integer`, :class:`Float`,
  :class:`Bool`, :class:`ErrorValue`, :class:`Nested`, :class:`Unit` and the
  :class:`Other` fallback arm.
* :func:`field_value` / :func:`error_value` converting arbitrary Python
  objects (exceptions included) into variants.
* :func:`normalize_fields` producing ordered, key-unique field tuples.
* :func:`format_value`, :func:`quote_text`, :func:`quote_key`, :func:`escape_text`,
  :func:`describe_error` and :func:`error_chain` used by the renderer.

System Role
-----------
Leaf of the rendering engine. Nothing in here raises on malformed input: any
value that cannot be represented degrades to a placeholder text.
"""

from __future__ import annotations

import math
import re
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Union

MAX_NESTING_DEPTH = 6
MAX_CAUSE_DEPTH = 8
TRUNCATION_MARKER = "…"
UNNAMED_FIELDS_KEY = "fields"


@dataclass(slots=True, frozen=True)
class String:
    value: str


@dataclass(slots=True, frozen=True)
class Integer:
    value: int


@dataclass(slots=True, frozen=True)
class Float:
    value: float


@dataclass(slots=True, frozen=True)
class Bool:
    value: bool


@dataclass(slots=True, frozen=True)
class ErrorValue:
    """Error message with an optional cause chain.

    Attributes
    ----------
    message:
        Text describing what failed.
    cause:
        The error that caused this one, if known.
    truncated:
        ``True`` when the chain continued past this node but was cut, either
        because it looped or because it exceeded the depth limit.
    """

    message: str
    cause: ErrorValue | None = None
    truncated: bool = False


@dataclass(slots=True, frozen=True)
class Nested:
    items: tuple[tuple[str, "FieldValue"], ...] = ()


@dataclass(slots=True, frozen=True)
class Unit:
    """Field present without a value."""


@dataclass(slots=True, frozen=True)
class Other:
    """Best-effort text for values outside the closed variant."""

    text: str
    type_name: str = ""


FieldValue = Union[String, Integer, Float, Bool, ErrorValue, Nested, Unit, Other]
FieldPairs = tuple[tuple[str, FieldValue], ...]

UNIT = Unit()

_VARIANTS = (String, Integer, Float, Bool, ErrorValue, Nested, Unit, Other)


def _type_name(obj: Any) -> str:
    return type(obj).__name__


def placeholder(obj: Any) -> str:
    """Return the text used when ``obj`` cannot be represented."""

    return f"<unrepresentable {_type_name(obj)}>"


def safe_text(obj: Any) -> str:
    """Return ``str(obj)`` falling back to ``repr`` and then a placeholder.

    Examples
    --------
    >>> class Broken:
    ...     def __str__(self):
    ...         raise RuntimeError("nope")
    ...     def __repr__(self):
    ...         raise RuntimeError("nope")
    >>> safe_text(Broken())
    '<unrepresentable Broken>'
    """
    for convert in (str, repr):
        try:
            return convert(obj)
        except Exception:
            continue
    return placeholder(obj)


def _exception_text(exc: BaseException) -> str:
    text = safe_text(exc)
    name = _type_name(exc)
    return f"{name}: {text}" if text else name


def _next_cause(exc: BaseException) -> BaseException | None:
    if exc.__cause__ is not None:
        return exc.__cause__
    if exc.__suppress_context__:
        return None
    return exc.__context__


def error_value(exc: BaseException, *, max_cause_depth: int = MAX_CAUSE_DEPTH) -> ErrorValue:
    """Convert ``exc`` and its ``__cause__``/``__context__`` chain.

    Looping chains and chains longer than ``max_cause_depth`` causes are cut
    and the last kept node is flagged as truncated.

    Examples
    --------
    >>> try:
    ...     try:
    ...         raise KeyError("users")
    ...     except KeyError as inner:
    ...         raise RuntimeError("query failed") from inner
    ... except RuntimeError as outer:
    ...     value = error_value(outer)
    >>> value.message, value.cause.message
    ('RuntimeError: query failed', "KeyError: 'users'")
    """
    messages: list[str] = []
    seen: set[int] = set()
    current: BaseException | None = exc
    truncated = False
    while current is not None:
        if id(current) in seen or (messages and len(messages) > max_cause_depth):
            truncated = True
            break
        seen.add(id(current))
        messages.append(_exception_text(current))
        current = _next_cause(current)

    value = ErrorValue(messages[-1], truncated=truncated)
    for message in reversed(messages[:-1]):
        value = ErrorValue(message, cause=value)
    return value


def field_value(obj: Any, *, max_depth: int = MAX_NESTING_DEPTH, max_cause_depth: int = MAX_CAUSE_DEPTH) -> FieldValue:
    """Convert an arbitrary Python object into a :data:`FieldValue`.

    Examples
    --------
    >>> field_value(True)
    Bool(value=True)
    >>> field_value(None)
    Unit()
    >>> field_value({"id": 1})
    Nested(items=(('id', Integer(value=1)),))
    """
    try:
        return _convert(obj, max_depth, max_cause_depth, frozenset())
    except Exception:
        return Other(placeholder(obj), type_name=_type_name(obj))


def _convert(obj: Any, depth: int, max_cause_depth: int, seen: frozenset[int]) -> FieldValue:
    if isinstance(obj, _VARIANTS):
        return obj
    if obj is None:
        return UNIT
    if isinstance(obj, bool):
        return Bool(obj)
    if isinstance(obj, int):
        return Integer(int(obj))
    if isinstance(obj, float):
        return Float(float(obj))
    if isinstance(obj, str):
        return String(str(obj))
    if isinstance(obj, BaseException):
        return error_value(obj, max_cause_depth=max_cause_depth)
    if isinstance(obj, Mapping):
        if id(obj) in seen:
            return Other("<cycle>", type_name=_type_name(obj))
        if depth <= 0:
            return Other("{" + TRUNCATION_MARKER + "}", type_name=_type_name(obj))
        inner = seen | {id(obj)}
        return Nested(
            tuple((safe_text(key), _convert(value, depth - 1, max_cause_depth, inner)) for key, value in obj.items())
        )
    return Other(safe_text(obj), type_name=_type_name(obj))


def normalize_fields(fields: Mapping[str, Any] | Iterable[tuple[Any, Any]] | None) -> FieldPairs:
    """Return ``fields`` as an ordered tuple of unique ``(key, FieldValue)`` pairs.

    A duplicated key keeps only its last value, placed at the position of its
    last occurrence. Items that are not ``(key, value)`` pairs are dropped; a
    ``fields`` argument that is not a collection at all is kept as a single
    ``fields`` entry.

    Examples
    --------
    >>> normalize_fields([("a", 1), ("b", 2), ("a", 3)])
    (('b', Integer(value=2)), ('a', Integer(value=3)))
    >>> normalize_fields([("a",), ("b", 2, 3), ("c", 4)])
    (('c', Integer(value=4)),)
    >>> normalize_fields(5)
    (('fields', Integer(value=5)),)
    """
    if fields is None:
        return ()
    if isinstance(fields, (str, bytes)) or not isinstance(fields, (Mapping, Iterable)):
        return ((UNNAMED_FIELDS_KEY, field_value(fields)),)
    try:
        pairs = list(fields.items()) if isinstance(fields, Mapping) else list(fields)
    except Exception:
        return ((UNNAMED_FIELDS_KEY, Other(placeholder(fields), type_name=_type_name(fields))),)
    merged: dict[str, FieldValue] = {}
    for item in pairs:
        pair = _as_pair(item)
        if pair is None:
            continue
        name = safe_text(pair[0])
        merged.pop(name, None)
        merged[name] = field_value(pair[1])
    return tuple(merged.items())


def _as_pair(item: Any) -> tuple[Any, Any] | None:
    if isinstance(item, (str, bytes)) or not isinstance(item, Sequence):
        return None
    try:
        if len(item) != 2:
            return None
        return item[0], item[1]
    except Exception:
        return None


_NEEDS_QUOTES = re.compile(r"[\s\"'\x00-\x1f\x7f-\x9f]")
_KEY_NEEDS_QUOTES = re.compile(r"[\s\"'=,{}\x00-\x1f\x7f-\x9f]")
_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f-\x9f]")
_NAMED_ESCAPES = {"\n": "\\n", "\r": "\\r", "\t": "\\t"}


def _escape_control(match: re.Match[str]) -> str:
    char = match.group(0)
    return _NAMED_ESCAPES.get(char, f"\\x{ord(char):02x}")


def escape_text(text: str) -> str:
    """Escape control characters so ``text`` stays on one terminal line.

    Examples
    --------
    >>> escape_text("a\\nb\\x1b")
    'a\\\\nb\\\\x1b'
    """
    return _CONTROL_CHARS.sub(_escape_control, text)


def quote_text(text: str) -> str:
    """Return ``text`` bare, or double-quoted and escaped when it needs it.

    Examples
    --------
    >>> quote_text("DEV")
    'DEV'
    >>> quote_text('say "hi"')
    '"say \\\\"hi\\\\""'
    >>> quote_text("")
    ''
    """
    if not _NEEDS_QUOTES.search(text):
        return text
    return _quoted(text)


def quote_key(key: str) -> str:
    """Return a field key bare, or quoted when it could be misread.

    Keys are quoted under the value rules and additionally when they are
    empty or contain ``=``, ``,`` or braces.

    Examples
    --------
    >>> quote_key("port")
    'port'
    >>> quote_key("a=b")
    '"a=b"'
    >>> quote_key("")
    '""'
    """
    if key and not _KEY_NEEDS_QUOTES.search(key):
        return key
    return _quoted(key)


def _quoted(text: str) -> str:
    escaped = text.replace("\\", "\\\\").replace('"', '\\"')
    return '"' + escape_text(escaped) + '"'


def error_chain(value: ErrorValue, *, max_cause_depth: int = MAX_CAUSE_DEPTH) -> tuple[tuple[str, ...], bool]:
    """Return the cause messages below ``value`` and whether they were cut."""

    causes: list[str] = []
    node = value
    while node.cause is not None:
        if len(causes) >= max_cause_depth:
            return tuple(causes), True
        node = node.cause
        causes.append(node.message)
    return tuple(causes), node.truncated


def describe_error(value: ErrorValue, *, max_cause_depth: int = MAX_CAUSE_DEPTH) -> str:
    """Return the one-line description of an error and its causes.

    Examples
    --------
    >>> describe_error(ErrorValue("boom", cause=ErrorValue("disk full")))
    'boom (caused by: disk full)'
    """
    causes, truncated = error_chain(value, max_cause_depth=max_cause_depth)
    parts = list(causes)
    if truncated:
        parts.append(TRUNCATION_MARKER)
    if not parts:
        return value.message
    return f"{value.message} (caused by: {': '.join(parts)})"


def format_value(
    value: Any,
    *,
    max_depth: int = MAX_NESTING_DEPTH,
    max_cause_depth: int = MAX_CAUSE_DEPTH,
) -> str:
    """Return the canonical text of ``value``.

    Examples
    --------
    >>> format_value(8000)
    '8000'
    >>> format_value(False)
    'false'
    >>> format_value({"id": 42, "name": "Ada Lovelace"})
    '{id=42, name="Ada Lovelace"}'
    >>> format_value(None)
    ''
    """
    try:
        variant = value if isinstance(value, _VARIANTS) else field_value(value, max_cause_depth=max_cause_depth)
        return _format(variant, max_depth, max_cause_depth)
    except Exception:
        return placeholder(value)


def _format(value: FieldValue, depth: int, max_cause_depth: int) -> str:
    if isinstance(value, String):
        return quote_text(value.value)
    if isinstance(value, Bool):
        return "true" if value.value else "false"
    if isinstance(value, Integer):
        return str(value.value)
    if isinstance(value, Float):
        return _format_float(value.value)
    if isinstance(value, ErrorValue):
        return quote_text(describe_error(value, max_cause_depth=max_cause_depth))
    if isinstance(value, Nested):
        if depth <= 0:
            return "{" + TRUNCATION_MARKER + "}"
        return "{" + ", ".join(_format_pair(key, item, depth - 1, max_cause_depth) for key, item in value.items) + "}"
    if isinstance(value, Unit):
        return ""
    if isinstance(value, Other):
        return quote_text(value.text)
    return placeholder(value)


def _format_float(number: float) -> str:
    if math.isnan(number):
        return "NaN"
    if math.isinf(number):
        return "inf" if number > 0 else "-inf"
    text = repr(number)
    if "e" not in text:
        return text
    return format(Decimal(text), "f")


def _format_pair(key: str, value: FieldValue, depth: int, max_cause_depth: int) -> str:
    if isinstance(value, Unit):
        return quote_key(key)
    return f"{quote_key(key)}={_format(value, depth, max_cause_depth)}"


__all__ = [
    "Bool",
    "ErrorValue",
    "FieldPairs",
    "FieldValue",
    "Float",
    "Integer",
    "MAX_CAUSE_DEPTH",
    "MAX_NESTING_DEPTH",
    "Nested",
    "Other",
    "String",
    "TRUNCATION_MARKER",
    "UNIT",
    "Unit",
    "describe_error",
    "error_chain",
    "error_value",
    "escape_text",
    "field_value",
    "format_value",
    "normalize_fields",
    "placeholder",
    "quote_key",
    "quote_text",
    "safe_text",
]
