"""Configuration models for containers, artboards and the box model."""

from __future__ import annotations

import enum
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from svglayout.utils.units import Length, parse_unit

HorizontalAlign = Literal["left", "center", "right"]
VerticalAlign = Literal["top", "center", "bottom"]
SizeMode = float | Literal["auto"]
SpacingValue = float | int | str | dict[str, float | int | str]

_SIDES = ("top", "right", "bottom", "left")


class Direction(str, enum.Enum):
    FREEFORM = "freeform"
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"
    GRID = "grid"
    ZSTACK = "zstack"


@dataclass(frozen=True)
class ParsedSpacing:
    top: float = 0.0
    right: float = 0.0
    bottom: float = 0.0
    left: float = 0.0

    @property
    def horizontal(self) -> float:
        return self.left + self.right

    @property
    def vertical(self) -> float:
        return self.top + self.bottom


@dataclass(frozen=True)
class ParsedBoxModel:
    margin: ParsedSpacing = ParsedSpacing()
    border: ParsedSpacing = ParsedSpacing()
    padding: ParsedSpacing = ParsedSpacing()


class BoxModel(BaseModel):
    """CSS-like spacing. Each side accepts a length, a shorthand string
    ("10px 20px") or a ``{top, right, bottom, left}`` mapping."""

    margin: SpacingValue = 0
    border: SpacingValue = 0
    padding: SpacingValue = 0


def parse_spacing(value: SpacingValue | None) -> ParsedSpacing:
    """Resolve a spacing value into per-side pixels (CSS shorthand order)."""
    if value is None:
        return ParsedSpacing()
    if isinstance(value, Mapping):
        unknown = set(value) - set(_SIDES)
        if unknown:
            raise ValueError(f"Unknown spacing sides: {sorted(unknown)}")
        return ParsedSpacing(*(parse_unit(value.get(side, 0)) for side in _SIDES))
    if isinstance(value, str) and len(value.split()) > 1:
        parts = [parse_unit(p) for p in value.split()]
        if len(parts) == 2:
            top, right = parts
            return ParsedSpacing(top, right, top, right)
        if len(parts) == 3:
            top, right, bottom = parts
            return ParsedSpacing(top, right, bottom, right)
        if len(parts) == 4:
            return ParsedSpacing(*parts)
        raise ValueError(f"Spacing shorthand takes 1 to 4 values, got {value!r}")
    px = parse_unit(value)
    return ParsedSpacing(px, px, px, px)


def parse_box_model(box_model: BoxModel | Mapping[str, Any] | None) -> ParsedBoxModel:
    if box_model is None:
        return ParsedBoxModel()
    if not isinstance(box_model, BoxModel):
        box_model = BoxModel.model_validate(box_model)
    return ParsedBoxModel(
        margin=parse_spacing(box_model.margin),
        border=parse_spacing(box_model.border),
        padding=parse_spacing(box_model.padding),
    )


def _parse_size(value: Any) -> Any:
    if isinstance(value, str) and value.strip() == "auto":
        return "auto"
    return parse_unit(value)


class ContainerConfig(BaseModel):
    model_config = ConfigDict(use_enum_values=False)

    width: SizeMode = "auto"
    height: SizeMode = "auto"
    direction: Direction = Direction.FREEFORM
    spacing: float = 0.0
    columns: int = Field(default=2, ge=1)
    spread: bool = False
    layer_offset: float = Field(default=0.0, ge=0)
    horizontal_alignment: HorizontalAlign = "left"
    vertical_alignment: VerticalAlign = "top"
    box_model: BoxModel = Field(default_factory=BoxModel)
    style: dict[str, Any] = Field(default_factory=dict)
    name: str | None = None
    z_index: float | None = None

    @field_validator("width", "height", mode="before")
    @classmethod
    def _size(cls, v: Any) -> Any:
        return _parse_size(v)

    @field_validator("spacing", "layer_offset", mode="before")
    @classmethod
    def _spacing(cls, v: Length) -> float:
        return parse_unit(v)


class ArtboardConfig(BaseModel):
    width: SizeMode = "auto"
    height: SizeMode = "auto"
    box_model: BoxModel = Field(default_factory=BoxModel)
    style: dict[str, Any] = Field(default_factory=dict)
    background_color: str | None = None
    title: str = ""
    name: str | None = None

    @field_validator("width", "height", mode="before")
    @classmethod
    def _size(cls, v: Any) -> Any:
        return _parse_size(v)
