# SPDX-FileCopyrightText: 2023 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
import typing

import msgspec

from ..commontypes import LayoutKind


class KeyDescriptor(msgspec.Struct, frozen=True):
    # code is the logical identity ("Shift", "Backspace") or, for printable keys, the literal itself
    code: str
    label: str
    wide: bool = False
    xwide: bool = False
    space: bool = False

    @classmethod
    def printable(cls, literal: str):
        return cls(code=literal, label=literal)


MODIFIER_CODES = frozenset(["CapsLock", "Shift", "Alt", "Control", "AltGr"])
CONTROL_CODES = frozenset(["Backspace", "Delete", "Enter", "Tab", "Space"])


def _row(*keys: typing.Union[str, KeyDescriptor]):
    return tuple(KeyDescriptor.printable(k) if isinstance(k, str) else k for k in keys)


BACKSPACE = KeyDescriptor(code="Backspace", label="← Backspace", wide=True)
TAB = KeyDescriptor(code="Tab", label="Tab", wide=True)
DELETE = KeyDescriptor(code="Delete", label="Del")
CAPS = KeyDescriptor(code="CapsLock", label="Caps", wide=True)
ENTER = KeyDescriptor(code="Enter", label="Enter", wide=True)
SHIFT = KeyDescriptor(code="Shift", label="Shift", xwide=True)
CTRL = KeyDescriptor(code="Control", label="Ctrl")
ALT = KeyDescriptor(code="Alt", label="Alt")
SPACE = KeyDescriptor(code="Space", label="Space", space=True)
ALTGR = KeyDescriptor(code="AltGr", label="AltGr")
# the Pipe key types its label; it is not a control key
PIPE = KeyDescriptor(code="Pipe", label="|")

DIGIT_ROW = _row("0", "1", "2", "3", "4", "5", "6", "7", "8", "9", "ö", "ü", "ó", BACKSPACE)
HOME_ROW = _row(CAPS, "a", "s", "d", "f", "g", "h", "j", "k", "l", "é", "á", "ű", ENTER)
BOTTOM_ROW = _row(CTRL, ALT, SPACE, ALTGR, CTRL)

LAYOUTS: dict[LayoutKind, tuple[tuple[KeyDescriptor, ...], ...]] = {
    LayoutKind.QWERTZ: (
        DIGIT_ROW,
        _row(TAB, "q", "w", "e", "r", "t", "z", "u", "i", "o", "p", "ő", "ú", DELETE),
        HOME_ROW,
        _row(SHIFT, "í", "y", "x", "c", "v", "b", "n", "m", ",", ".", "-", SHIFT),
        BOTTOM_ROW,
    ),
    LayoutKind.QWERTY: (
        DIGIT_ROW,
        _row(TAB, "q", "w", "e", "r", "t", "y", "u", "i", "o", "p", "ő", "ú", PIPE),
        HOME_ROW,
        _row(SHIFT, "z", "x", "c", "v", "b", "n", "m", "ö", "ü", "ó", ",", ".", "-", SHIFT),
        BOTTOM_ROW,
    ),
}


def get_layout(kind: LayoutKind):
    return LAYOUTS[kind]


def find_key(kind: LayoutKind, code: str) -> typing.Optional[KeyDescriptor]:
    for row in LAYOUTS[kind]:
        for key in row:
            if key.code == code:
                return key
    return None
