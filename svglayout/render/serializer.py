"""Write SVG markup from resolved element geometry."""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from svglayout.config import settings

_CAMEL_RE = re.compile(r"([a-z0-9])([A-Z])")


def format_number(value: float) -> str:
    """Decimal pixel value rounded to the configured precision, no trailing zeros."""
    rounded = round(float(value), settings.decimal_precision)
    if rounded == 0:
        rounded = 0.0  # drop "-0"
    text = f"{rounded:.{settings.decimal_precision}f}".rstrip("0").rstrip(".")
    return text or "0"


def to_kebab_case(name: str) -> str:
    return _CAMEL_RE.sub(r"\1-\2", name).replace("_", "-").lower()


def style_attributes(style: Mapping[str, Any] | None) -> dict[str, str]:
    """CSS/SVG style mapping (camelCase or kebab-case keys) -> SVG attributes."""
    if not style:
        return {}
    attrs: dict[str, str] = {}
    for key, value in style.items():
        if value is None:
            continue
        attrs[to_kebab_case(key)] = format_number(value) if isinstance(value, float) else str(value)
    return attrs


def escape_attr(value: str) -> str:
    return (
        value.replace("&", "&amp;")
        .replace('"', "&quot;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
    )


def serialize_tag(tag: str, attrs: Mapping[str, Any], comment: str | None = None) -> str:
    """One self-closing SVG tag, optionally preceded by a name comment."""
    parts = []
    for key, value in attrs.items():
        if value is None or value == "":
            continue
        text = format_number(value) if isinstance(value, (int, float)) and not isinstance(value, bool) else str(value)
        parts.append(f'{key}="{escape_attr(text)}"')
    line = f"<{tag} {' '.join(parts)} />" if parts else f"<{tag} />"
    if comment:
        return f"<!-- {comment.replace('--', '- -')} -->\n{line}"
    return line


def serialize_svg(
    fragments: list[str],
    width: float,
    height: float,
    background: Mapping[str, Any] | None = None,
    title: str = "",
) -> str:
    """Wrap rendered fragments in a sized canvas element."""
    w, h = format_number(width), format_number(height)
    lines = [
        f'<svg width="{w}" height="{h}" viewBox="0 0 {w} {h}"'
        f' xmlns="{settings.svg_namespace}">',
    ]
    if title:
        lines.append(f"  <title>{escape_attr(title)}</title>")
    if background:
        lines.append("  " + serialize_tag("rect", {"x": 0, "y": 0, "width": width, "height": height, **background}))

    for fragment in fragments:
        if not fragment:
            continue
        for line in fragment.splitlines():
            lines.append(f"  {line}")

    lines.append("</svg>")
    return "\n".join(lines)
