"""
Screen geometry and display naming helpers.
"""

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple


@dataclass(frozen=True)
class Rect:
    """Screen rectangle in virtual-desktop coordinates."""
    x: int
    y: int
    width: int
    height: int

    def contains(self, point: Tuple[int, int]) -> bool:
        px, py = point
        return self.x <= px < self.x + self.width and self.y <= py < self.y + self.height

    def center(self) -> Tuple[int, int]:
        return self.x + self.width // 2, self.y + self.height // 2


@dataclass(frozen=True)
class ScreenInfo:
    """A connected screen, as seen by the platform layer."""
    index: int
    device_name: str
    bounds: Rect
    primary: bool = False


def primary_screen(screens: Sequence[ScreenInfo]) -> Optional[ScreenInfo]:
    """Return the primary screen, falling back to the first one."""
    for screen in screens:
        if screen.primary:
            return screen
    return screens[0] if screens else None


def device_name_contains_instance_token(device_name: str, instance_name: str) -> bool:
    """
    Check whether a monitor instance name refers to a display device.

    The instance name is split on backslashes; any non-blank token found
    (case-insensitively) inside the device name is a match.
    """
    if not device_name or not device_name.strip():
        return False
    if not instance_name or not instance_name.strip():
        return False

    device = device_name.lower()
    for token in instance_name.split('\\'):
        if token.strip() and token.lower() in device:
            return True
    return False


def compose_display_name(device_name: str, friendly_name: Optional[str]) -> str:
    """Return "Friendly Name (DEVICE)", or the device name alone."""
    return f"{friendly_name} ({device_name})" if friendly_name else device_name


def friendly_name_from_codes(codes: Optional[Sequence[int]]) -> str:
    """Decode a zero-terminated array of UTF-16 code units."""
    if not codes:
        return ""
    chars = []
    for code in codes:
        if code == 0:
            break
        chars.append(chr(code))
    return "".join(chars)
