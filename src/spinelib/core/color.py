"""
Color

Fixed 4-byte RGBA tint used by slots and color timelines.
"""

import string
from dataclasses import dataclass
from typing import Tuple

from ..config.settings import DEFAULT_SLOT_COLOR
from .errors import InvalidColor


def _channel(value: float) -> int:
    # Nearest integer, halves round up
    return int(max(0.0, min(255.0, value)) + 0.5)


@dataclass(frozen=True)
class Color:
    """RGBA color with integer channels in [0, 255]."""

    r: int = 255
    g: int = 255
    b: int = 255
    a: int = 255

    @classmethod
    def white(cls) -> "Color":
        return cls(*DEFAULT_SLOT_COLOR)

    @classmethod
    def from_hex(cls, value: str) -> "Color":
        """
        Parse a Spine hex color.

        Args:
            value: ``RRGGBBAA`` or ``RRGGBB`` (opaque), with an optional leading ``#``

        Returns:
            Parsed color

        Raises:
            InvalidColor: If the string is not 6 or 8 hex digits
        """
        if not isinstance(value, str):
            raise InvalidColor(value)

        digits = value[1:] if value.startswith("#") else value
        if len(digits) not in (6, 8) or any(c not in string.hexdigits for c in digits):
            raise InvalidColor(value)
        channels = bytes.fromhex(digits)

        if len(channels) == 3:
            return cls(channels[0], channels[1], channels[2], 255)
        return cls(channels[0], channels[1], channels[2], channels[3])

    def lerp(self, other: "Color", t: float) -> "Color":
        """Per-channel linear blend towards ``other``."""
        return Color(
            _channel(self.r + (other.r - self.r) * t),
            _channel(self.g + (other.g - self.g) * t),
            _channel(self.b + (other.b - self.b) * t),
            _channel(self.a + (other.a - self.a) * t),
        )

    def to_tuple(self) -> Tuple[int, int, int, int]:
        return (self.r, self.g, self.b, self.a)

    def to_floats(self) -> Tuple[float, float, float, float]:
        """Normalized (0.0 to 1.0) channels, as shaders expect them."""
        return (self.r / 255.0, self.g / 255.0, self.b / 255.0, self.a / 255.0)

    def to_hex(self) -> str:
        return f"{self.r:02X}{self.g:02X}{self.b:02X}{self.a:02X}"

    def __repr__(self):
        return f"Color({self.to_hex()})"
