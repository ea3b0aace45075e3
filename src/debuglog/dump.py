"""Human-readable dump of nested context data.

Layout follows PHP's ``print_r`` with the outer ``Array ( ... )`` wrapper
removed, which is what the text sink prints under ``  data:``:

        [user] => bob
        [roles] => Array
            (
                [0] => admin
            )
"""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping, Set
from typing import Any

_STEP = " " * 8


def _scalar(value: Any) -> str:
    if value is True:
        return "1"
    if value is False or value is None:
        return ""
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return str(value)


def _items(value: Any) -> tuple[str, list[tuple[Any, Any]]] | None:
    """Header and entries for a container value; None for scalars."""
    if isinstance(value, Mapping):
        return "Array", list(value.items())
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return (
            f"{type(value).__name__} Object",
            [(f.name, getattr(value, f.name)) for f in dataclasses.fields(value)],
        )
    if isinstance(value, (list, tuple)):
        return "Array", list(enumerate(value))
    if isinstance(value, Set):
        return "Array", list(enumerate(sorted(value, key=repr)))
    return None


def _render(value: Any, pad: str, seen: frozenset[int]) -> str:
    container = _items(value)
    if container is None:
        return _scalar(value)
    if id(value) in seen:
        return f"{container[0]}\n *RECURSION*"
    header, entries = container
    seen = seen | {id(value)}
    inner = pad + _STEP
    body = "".join(
        f"{pad}    [{key}] => {_render(item, inner, seen)}\n" for key, item in entries
    )
    return f"{header}\n{pad}(\n{body}{pad})\n"


def dump_context(context: Mapping[str, Any]) -> str:
    """Render ``context`` as indented ``[key] => value`` lines.

    Nested containers recurse with deeper indentation. No enclosing
    brackets and no trailing blank lines.
    """
    full = _render(dict(context), "", frozenset())
    # Strip "Array\n(\n" and the closing ")\n"
    body = full[len("Array\n(\n"):-len(")\n")]
    return body.rstrip("\n")
