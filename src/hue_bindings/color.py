from __future__ import annotations

import sys
from dataclasses import dataclass


def _gamma_correct(value: float) -> float:
    if value > 0.04045:
        return ((value + 0.055) / (1.0 + 0.055)) ** 2.4
    return value / 12.92


@dataclass(frozen=True)
class Color:
    """A color in CIE xy space, optionally carrying the brightness it was derived with."""

    space_coordinates: tuple[float, float]
    brightness: int | None = None

    @classmethod
    def from_space_coordinates(cls, x: float, y: float) -> "Color":
        return cls(space_coordinates=(x, y))

    @classmethod
    def from_rgb(cls, red: int, green: int, blue: int) -> "Color":
        for channel in (red, green, blue):
            if not 0 <= channel <= 255:
                raise ValueError(f"RGB channel out of range: {channel}")
        r = _gamma_correct(red / 255.0)
        g = _gamma_correct(green / 255.0)
        b = _gamma_correct(blue / 255.0)
        # Wide gamut D65 conversion.
        x = r * 0.649926 + g * 0.103455 + b * 0.197109
        y = r * 0.234327 + g * 0.743075 + b * 0.022598
        z = g * 0.053077 + b * 1.035763
        total = x + y + z + sys.float_info.min
        return cls(
            space_coordinates=(x / total, y / total),
            brightness=min(254, int(y * 255.0)),
        )

    @classmethod
    def from_hex(cls, value: str) -> "Color":
        text = value.strip()
        if text.startswith("#"):
            text = text[1:]
        if len(text) == 3:
            text = "".join(ch * 2 for ch in text)
        if len(text) != 6:
            raise ValueError(f"Invalid hex color: {value!r}")
        try:
            red, green, blue = (int(text[i : i + 2], 16) for i in (0, 2, 4))
        except ValueError as exc:
            raise ValueError(f"Invalid hex color: {value!r}") from exc
        return cls.from_rgb(red, green, blue)
