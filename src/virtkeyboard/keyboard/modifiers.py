# SPDX-FileCopyrightText: 2023 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import collections.abc
import enum
import logging
import typing

import msgspec

logger = logging.getLogger(__name__)


class Modifier(enum.Enum):
    CAPS = "caps"
    SHIFT = "shift"
    ALT = "alt"
    CTRL = "ctrl"
    ALTGR = "altgr"

    @classmethod
    def for_code(cls, code: str) -> typing.Optional[Modifier]:
        return _MODIFIERS_BY_CODE.get(code)

    @property
    def one_shot(self):
        return self in (Modifier.SHIFT, Modifier.ALTGR)


_MODIFIERS_BY_CODE = {
    "CapsLock": Modifier.CAPS,
    "Shift": Modifier.SHIFT,
    "Alt": Modifier.ALT,
    "Control": Modifier.CTRL,
    "AltGr": Modifier.ALTGR,
}


class ModifierState(msgspec.Struct, frozen=True):
    caps: bool = False
    shift: bool = False
    alt: bool = False
    ctrl: bool = False
    altgr: bool = False
    hu_compose: bool = True
    hu: bool = True

    @property
    def need_upper(self):
        # both on cancels out, like a physical keyboard
        return self.caps ^ self.shift

    def __getitem__(self, modifier: Modifier) -> bool:
        return getattr(self, modifier.value)


ToggleObserver = collections.abc.Callable[[Modifier, bool], None]


class ModifierStateMachine:
    def __init__(self, hu_compose: bool = True):
        self.toggles = {modifier: False for modifier in Modifier}
        self.hu_compose = hu_compose
        self.hu = True
        self.observers: list[ToggleObserver] = []

    def subscribe(self, observer: ToggleObserver):
        self.observers.append(observer)

    def _set(self, modifier: Modifier, value: bool):
        self.toggles[modifier] = value
        logger.debug("%s is now %s", modifier.value, "on" if value else "off")
        for observer in self.observers:
            observer(modifier, value)

    def toggle(self, modifier: Modifier) -> bool:
        if modifier not in self.toggles:
            return False
        self._set(modifier, not self.toggles[modifier])
        return self.toggles[modifier]

    def consume_one_shot(self, modifier: Modifier):
        if not modifier.one_shot or not self.toggles[modifier]:
            return
        self._set(modifier, False)

    def is_active(self, modifier: Modifier):
        return self.toggles[modifier]

    def snapshot(self):
        return ModifierState(
            caps=self.toggles[Modifier.CAPS],
            shift=self.toggles[Modifier.SHIFT],
            alt=self.toggles[Modifier.ALT],
            ctrl=self.toggles[Modifier.CTRL],
            altgr=self.toggles[Modifier.ALTGR],
            hu_compose=self.hu_compose,
            hu=self.hu,
        )
