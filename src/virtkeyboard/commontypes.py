# SPDX-FileCopyrightText: 2023 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
import enum

import msgspec


class SelectionRange(msgspec.Struct, frozen=True):
    start: int
    end: int

    @property
    def collapsed(self):
        return self.start == self.end

    def is_valid_for(self, length: int):
        return 0 <= self.start <= self.end <= length

    def clamped(self, length: int):
        start = min(max(self.start, 0), length)
        end = min(max(self.end, start), length)
        return SelectionRange(start=start, end=end)

    @classmethod
    def caret(cls, offset: int):
        return cls(start=offset, end=offset)


class LayoutKind(enum.Enum):
    QWERTZ = "qwertz"
    QWERTY = "qwerty"


class DockCorner(enum.Enum):
    BOTTOM_RIGHT = "bottom-right"
    BOTTOM_LEFT = "bottom-left"
    TOP_RIGHT = "top-right"
    TOP_LEFT = "top-left"


class VirtKeyboardError(Exception):
    pass


class ConfigurationError(VirtKeyboardError):
    pass


class TargetNotFound(VirtKeyboardError):
    def __init__(self, target):
        return super().__init__(f"Not a text surface: {target!r}")
