"""Recognize ``Option<T>`` and ``Option<Option<T>>`` in declared type text.

Recognition is purely syntactic. A type alias of ``Option`` is not
recognized, and a foreign type that happens to be named ``Option`` is.

Accepted spellings:

* ``Option<T>``
* ``std::option::Option<T>``, with or without leading ``::``
* ``core::option::Option<T>``, with or without leading ``::``

Parenthesized types are unwrapped before matching.
"""

from __future__ import annotations

from optmark.domain.types import TypeShape

_OPENERS = {"<": ">", "(": ")", "[": "]"}
_QUALIFIED_ROOTS = ("std", "core")


def _split_generic_args(text: str) -> list[str] | None:
    """Split ``text`` on top-level commas; None when brackets are unbalanced."""
    parts: list[str] = []
    stack: list[str] = []
    start = 0
    for i, ch in enumerate(text):
        if ch in _OPENERS:
            stack.append(_OPENERS[ch])
        elif ch == ">" and i > 0 and text[i - 1] == "-":
            continue  # `->` in fn pointer types
        elif ch in _OPENERS.values():
            if not stack or stack.pop() != ch:
                return None
        elif ch == "," and not stack:
            parts.append(text[start:i])
            start = i + 1
    if stack:
        return None
    parts.append(text[start:])
    return parts


def _unwrap_parens(text: str) -> str:
    while text.startswith("(") and text.endswith(")"):
        inner = text[1:-1]
        parts = _split_generic_args(inner)
        # ``(A, B)`` is a tuple and ``()`` is unit, neither is a grouping.
        if parts is None or len(parts) != 1 or not inner:
            break
        text = inner
    return text


def option_inner(type_name: str) -> str | None:
    """Return ``T`` when *type_name* spells ``Option<T>``, else None."""
    compact = _unwrap_parens("".join(type_name.split()))
    open_at = compact.find("<")
    if open_at == -1 or not compact.endswith(">"):
        return None

    path = compact[:open_at]
    leading_colon = path.startswith("::")
    segments = path.removeprefix("::").split("::")
    if len(segments) == 1:
        if leading_colon or segments[0] != "Option":
            return None
    elif len(segments) == 3:
        if segments[0] not in _QUALIFIED_ROOTS or segments[1:] != ["option", "Option"]:
            return None
    else:
        return None

    args = _split_generic_args(compact[open_at + 1 : -1])
    if args is None or len(args) != 1 or not args[0]:
        return None
    return args[0]


def recognize_shape(type_name: str) -> TypeShape:
    """Classify *type_name* as not optional, optional or double optional."""
    inner = option_inner(type_name)
    if inner is None:
        return TypeShape.NOT_OPTIONAL
    if option_inner(inner) is not None:
        return TypeShape.DOUBLE_OPTIONAL
    return TypeShape.OPTIONAL
