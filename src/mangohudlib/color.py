"""
RGB colour values as MangoHud writes them (``RRGGBB`` hex, no prefix).
"""

import re
from dataclasses import dataclass


_HEX_RE = re.compile(r"^(?:#|0x)?([0-9a-fA-F]{6})$")


@dataclass(frozen=True)
class Color:
    """
    A 24-bit RGB colour.

    Properties:
        r, g, b: channel values, 0..255
    """

    r: int
    g: int
    b: int

    def __post_init__(self):
        for channel in (self.r, self.g, self.b):
            if not isinstance(channel, int) or not 0 <= channel <= 255:
                raise ValueError(f"Colour channel out of range: {channel!r}")

    @classmethod
    def from_hex(cls, text: str) -> "Color":
        """
        Parse ``RRGGBB``, ``#RRGGBB`` or ``0xRRGGBB`` (any case).

        Raises:
            ValueError: If text is not a six digit hex colour
        """
        match = _HEX_RE.match(text.strip())
        if not match:
            raise ValueError(f"Invalid colour: {text!r}")
        value = int(match.group(1), 16)
        return cls((value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF)

    def to_hex(self) -> str:
        return f"{self.r:02X}{self.g:02X}{self.b:02X}"

    def __str__(self) -> str:
        return self.to_hex()


# Palette used by MangoHud's defaults
WHITE = Color(0xFF, 0xFF, 0xFF)
BLACK = Color(0x00, 0x00, 0x00)
ALMOST_BLACK = Color(0x02, 0x02, 0x02)
DARK_LIME_GREEN = Color(0x2E, 0x97, 0x62)
BLUE = Color(0x2E, 0x97, 0xCB)
LIGHT_MAGENTA = Color(0xAD, 0x64, 0xC1)
LIGHT_PINK = Color(0xC2, 0x66, 0x93)
SOFT_RED = Color(0xEB, 0x5B, 0x5B)
LIGHT_VIOLET = Color(0xA4, 0x91, 0xD3)
LIME_GREEN = Color(0x00, 0xFF, 0x00)
LIGHT_RED = Color(0xFF, 0x90, 0x78)
DARK_RED = Color(0xB2, 0x22, 0x22)
VIVID_YELLOW = Color(0xFD, 0xFD, 0x09)
GREEN = Color(0x39, 0xF9, 0x00)
