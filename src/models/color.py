"""
Color model - RGBA custom attribute value

Custom colors travel with a FrameSnapshot as four float channels in 0..1.
Conversions from packed ARGB ints and hex strings are provided for the
configuration layer and tests.
"""

from dataclasses import dataclass
from typing import Tuple


@dataclass
class RGBA:
    """
    Mutable RGBA color with float channels (0.0 - 1.0)

    The engine blends into the instance already held by the output snapshot.

    Examples:
        red = RGBA(1.0, 0.0, 0.0, 1.0)
        teal = RGBA.from_hex("#008080")

        out = RGBA()
        out.copy_from(red)
    """

    r: float = 0.0
    g: float = 0.0
    b: float = 0.0
    a: float = 1.0

    # === CONSTRUCTORS ===

    @classmethod
    def from_int_argb(cls, argb: int) -> 'RGBA':
        """
        Create from packed 0xAARRGGBB integer

        Args:
            argb: Packed color (alpha in the high byte)

        Returns:
            RGBA with channels scaled to 0..1
        """
        a = (argb >> 24) & 0xFF
        r = (argb >> 16) & 0xFF
        g = (argb >> 8) & 0xFF
        b = argb & 0xFF
        return cls(r / 255.0, g / 255.0, b / 255.0, a / 255.0)

    @classmethod
    def from_hex(cls, value: str) -> 'RGBA':
        """
        Create from "#RRGGBB" or "#AARRGGBB"

        Raises:
            ValueError: If the string is not a 6 or 8 digit hex color
        """
        digits = value.lstrip("#")
        if len(digits) == 6:
            digits = "FF" + digits
        if len(digits) != 8:
            raise ValueError(f"Invalid hex color: {value}")
        try:
            packed = int(digits, 16)
        except ValueError:
            raise ValueError(f"Invalid hex color: {value}")
        return cls.from_int_argb(packed)

    # === MUTATION ===

    def copy_from(self, other: 'RGBA') -> None:
        """Overwrite all four channels with another color's"""
        self.r = other.r
        self.g = other.g
        self.b = other.b
        self.a = other.a

    def copy(self) -> 'RGBA':
        return RGBA(self.r, self.g, self.b, self.a)

    # === EXPORT ===

    def as_tuple(self) -> Tuple[float, float, float, float]:
        return (self.r, self.g, self.b, self.a)

    def to_int_argb(self) -> int:
        """Pack into 0xAARRGGBB, clamping each channel into 0..255"""
        def channel(v: float) -> int:
            return max(0, min(255, int(v * 255 + 0.5)))
        return (channel(self.a) << 24) | (channel(self.r) << 16) | (channel(self.g) << 8) | channel(self.b)

    def __str__(self) -> str:
        return f"RGBA({self.r:.3f}, {self.g:.3f}, {self.b:.3f}, {self.a:.3f})"
