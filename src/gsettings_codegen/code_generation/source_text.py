"""Helpers for rendering Python source fragments."""

from __future__ import annotations

import json
import math
from collections.abc import Sequence

INDENT = "    "


def string_literal(text: str) -> str:
    """Return a double-quoted Python string literal for `text`."""
    return json.dumps(text, ensure_ascii=False)


def python_literal(value: object) -> str:
    """Return Python source for a raw store value (bool, int, float, str or list of str)."""
    if isinstance(value, bool):
        return "True" if value else "False"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            return f'float("{value}")'
        return repr(value)
    if isinstance(value, str):
        return string_literal(value)
    if isinstance(value, (list, tuple)):
        return "[" + ", ".join(python_literal(item) for item in value) + "]"
    raise TypeError(f"Cannot render {type(value).__name__} as a literal.")


def docstring(paragraphs: Sequence[str], *, indent: int) -> list[str]:
    """Render paragraphs as a docstring block at the given indent level."""
    prefix = INDENT * indent
    escaped = [_escape(paragraph) for paragraph in paragraphs if paragraph]
    if not escaped:
        return []
    if len(escaped) == 1 and "\n" not in escaped[0]:
        return [f'{prefix}"""{escaped[0]}"""']
    lines = [f'{prefix}"""{escaped[0]}']
    for paragraph in escaped[1:]:
        lines.append("")
        lines.extend(f"{prefix}{line}" if line else "" for line in paragraph.split("\n"))
    lines.append(f'{prefix}"""')
    return lines


def indent_lines(lines: Sequence[str], levels: int = 1) -> list[str]:
    prefix = INDENT * levels
    return [f"{prefix}{line}" if line else "" for line in lines]


def _escape(text: str) -> str:
    escaped = text.replace("\\", "\\\\").replace('"""', '\\"\\"\\"')
    if escaped.endswith('"'):
        escaped = escaped[:-1] + '\\"'
    return escaped
