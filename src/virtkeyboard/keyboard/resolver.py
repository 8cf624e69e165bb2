# SPDX-FileCopyrightText: 2023 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import enum
import logging
import re
import typing

import msgspec

from .layouts import CONTROL_CODES, MODIFIER_CODES, KeyDescriptor
from .modifiers import Modifier, ModifierState

if typing.TYPE_CHECKING:
    import pygtrie

    from ..settings import Settings

logger = logging.getLogger(__name__)

HUNGARIAN_LETTER = re.compile(r"^[a-záéíóöőúüű]$", re.IGNORECASE)


class ControlKey(enum.Enum):
    BACKSPACE = "Backspace"
    DELETE = "Delete"
    ENTER = "Enter"
    TAB = "Tab"
    SPACE = "Space"

    @property
    def text(self) -> typing.Optional[str]:
        match self:
            case ControlKey.ENTER:
                return "\n"
            case ControlKey.TAB:
                return "\t"
            case ControlKey.SPACE:
                return " "
        return None


class NoAction(msgspec.Struct, frozen=True):
    pass


class ToggleModifier(msgspec.Struct, frozen=True):
    modifier: Modifier


class ControlEdit(msgspec.Struct, frozen=True):
    control: ControlKey


class InsertText(msgspec.Struct, frozen=True):
    text: str
    consumes: tuple[Modifier, ...] = ()


class ComposeReplace(msgspec.Struct, frozen=True):
    # replaces the single character before the caret
    text: str
    consumes: tuple[Modifier, ...] = ()


Action = NoAction | ToggleModifier | ControlEdit | InsertText | ComposeReplace


class SurfaceContext(msgspec.Struct, frozen=True):
    # None unless a target is attached and the caret is collapsed past offset 0
    preceding: typing.Optional[str] = None


class KeyLegend(msgspec.Struct, frozen=True):
    main: str
    sub: str = ""


def is_letter(ch: str):
    return bool(HUNGARIAN_LETTER.match(ch))


class LayerMaps:
    def __init__(self, shift_map: dict[str, str], altgr_map: dict[str, str]):
        self.shift_map = shift_map
        self.altgr_map = altgr_map

    def shifted(self, ch: str) -> str:
        return self.shift_map.get(ch, ch)

    def altgr(self, ch: str) -> typing.Optional[str]:
        base = ch.lower() if len(ch) == 1 else ch
        return self.altgr_map.get(base)


class ComposeRules:
    def __init__(self, sequences: pygtrie.Trie):
        self.sequences = sequences

    def compose(self, preceding: str, typed: str, upper: bool = False) -> typing.Optional[str]:
        pair = (preceding, typed)
        if self.sequences.has_key(pair):
            return self.sequences[pair]
        if upper:
            upper_pair = (preceding.upper(), typed.upper())
            if self.sequences.has_key(upper_pair):
                return self.sequences[upper_pair]
        return None


class KeyResolver:
    def __init__(self, layers: LayerMaps, compose_rules: ComposeRules):
        self.layers = layers
        self.compose_rules = compose_rules

    @classmethod
    def from_settings(cls, settings: Settings):
        return cls(LayerMaps(settings.shift_map, settings.altgr_map), ComposeRules(settings.compose_sequences))

    def resolve(self, key: KeyDescriptor, modifiers: ModifierState, context: SurfaceContext = SurfaceContext()) -> Action:
        if (modifier := Modifier.for_code(key.code)) is not None:
            return ToggleModifier(modifier=modifier)
        if key.code in CONTROL_CODES:
            return ControlEdit(control=ControlKey(key.code))
        ch = key.label
        if not isinstance(ch, str) or not ch:
            logger.debug("Key %r has no printable literal", key)
            return NoAction()

        consumes = [Modifier.SHIFT] if modifiers.shift else []
        if modifiers.altgr and (mapped := self.layers.altgr(ch)) is not None:
            return InsertText(text=mapped, consumes=(*consumes, Modifier.ALTGR))
        if modifiers.shift and not is_letter(ch):
            ch = self.layers.shifted(ch)
        elif is_letter(ch):
            ch = ch.upper() if modifiers.need_upper else ch.lower()

        if modifiers.hu and modifiers.hu_compose and context.preceding:
            composed = self.compose_rules.compose(context.preceding, ch, upper=modifiers.need_upper)
            if composed is not None:
                logger.debug("Composed %r + %r into %r", context.preceding, ch, composed)
                return ComposeReplace(text=composed, consumes=tuple(consumes))
        return InsertText(text=ch, consumes=tuple(consumes))

    def legend(self, key: KeyDescriptor, modifiers: ModifierState) -> KeyLegend:
        base = key.label
        if key.code in MODIFIER_CODES or key.code in CONTROL_CODES or key.code != base:
            return KeyLegend(main=base)
        if modifiers.altgr and (mapped := self.layers.altgr(base)) is not None:
            return KeyLegend(main=mapped, sub=base)
        if is_letter(base):
            if modifiers.need_upper:
                return KeyLegend(main=base.upper(), sub=base.lower())
            return KeyLegend(main=base.lower(), sub=base.upper())
        if modifiers.shift:
            shown = self.layers.shifted(base)
            return KeyLegend(main=shown, sub=base if shown != base else "")
        return KeyLegend(main=base)
