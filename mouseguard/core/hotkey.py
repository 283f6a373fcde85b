"""
Hotkey text conversion.

Hotkeys are persisted as comma-separated names, modifiers first:
"Control,Alt,B". Key names follow the Windows Forms ``Keys`` names.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Protocol, Tuple

logger = logging.getLogger(__name__)

# RegisterHotKey modifier flags
MOD_ALT = 0x1
MOD_CONTROL = 0x2
MOD_SHIFT = 0x4

_MODIFIER_ALIASES = {
    "control": "control",
    "ctrl": "control",
    "alt": "alt",
    "shift": "shift",
}


def _build_key_codes() -> Dict[str, int]:
    codes = {}
    for offset in range(26):
        codes[chr(ord('A') + offset)] = 0x41 + offset
    for digit in range(10):
        codes[f"D{digit}"] = 0x30 + digit
        codes[f"NumPad{digit}"] = 0x60 + digit
    for n in range(1, 25):
        codes[f"F{n}"] = 0x6F + n
    codes.update({
        "Back": 0x08,
        "Tab": 0x09,
        "Return": 0x0D,
        "Enter": 0x0D,
        "Pause": 0x13,
        "Escape": 0x1B,
        "Space": 0x20,
        "PageUp": 0x21,
        "PageDown": 0x22,
        "End": 0x23,
        "Home": 0x24,
        "Left": 0x25,
        "Up": 0x26,
        "Right": 0x27,
        "Down": 0x28,
        "PrintScreen": 0x2C,
        "Insert": 0x2D,
        "Delete": 0x2E,
        "Scroll": 0x91,
    })
    return codes


KEY_CODES = _build_key_codes()

# Case-insensitive lookup -> canonical name
_KEY_NAMES = {name.lower(): name for name in KEY_CODES}


@dataclass(frozen=True)
class Hotkey:
    """A key plus modifier flags."""
    key: str
    control: bool = False
    alt: bool = False
    shift: bool = False

    def __str__(self) -> str:
        return hotkey_to_string(self)


DEFAULT_HOTKEY = Hotkey("B", control=True, alt=True)


def hotkey_to_string(hotkey: Hotkey) -> str:
    """
    Format a hotkey as "Control,Alt,Shift,Key".

    Only the modifiers that are set are included, always in that order.
    """
    parts = []
    if hotkey.control:
        parts.append("Control")
    if hotkey.alt:
        parts.append("Alt")
    if hotkey.shift:
        parts.append("Shift")
    parts.append(hotkey.key)
    return ",".join(parts)


def try_parse_hotkey(text: Optional[str]) -> Optional[Hotkey]:
    """
    Parse "Control,Alt,B" style text.

    Matching is case-insensitive and tolerates surrounding whitespace.
    Unknown tokens are skipped.

    Returns:
        Hotkey, or None if the text names no key
    """
    if not text or not text.strip():
        return None

    modifiers = set()
    key = None
    for token in text.split(','):
        token = token.strip().lower()
        if not token:
            continue
        if token in _MODIFIER_ALIASES:
            modifiers.add(_MODIFIER_ALIASES[token])
        elif token in _KEY_NAMES:
            key = _KEY_NAMES[token]
        else:
            logger.debug(f"Ignoring unknown hotkey token: {token}")

    if key is None:
        return None

    return Hotkey(
        key=key,
        control="control" in modifiers,
        alt="alt" in modifiers,
        shift="shift" in modifiers,
    )


def parse_hotkey(text: Optional[str]) -> Hotkey:
    """
    Strict variant of try_parse_hotkey().

    Raises:
        ValueError: If the text names no key
    """
    hotkey = try_parse_hotkey(text)
    if hotkey is None:
        raise ValueError(f"Invalid hotkey: {text!r}")
    return hotkey


def modifiers_and_key_code(hotkey: Hotkey) -> Tuple[int, int]:
    """
    Convert to the (modifiers, virtual key code) pair expected by an OS
    hotkey registration call.
    """
    mod = 0
    if hotkey.control:
        mod |= MOD_CONTROL
    if hotkey.alt:
        mod |= MOD_ALT
    if hotkey.shift:
        mod |= MOD_SHIFT
    return mod, KEY_CODES[hotkey.key]


class HotkeyRegistrar(Protocol):
    """
    Binds one system-wide hotkey to a callback.

    Implementations wrap the platform call (RegisterHotKey on Windows).
    A registrar holds at most one hotkey; registering again replaces it.
    """

    def register(self, modifiers: int, key_code: int, callback: Callable[[], None]) -> bool:
        """Bind the hotkey. Returns False if the system refused it."""
        ...

    def unregister(self) -> None:
        ...
