# SPDX-FileCopyrightText: 2023 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import typing

from ..commontypes import SelectionRange
from ..keyboard.resolver import Action, ComposeReplace, ControlEdit, ControlKey, InsertText, SurfaceContext, ToggleModifier

if typing.TYPE_CHECKING:
    from ..keyboard.modifiers import ModifierStateMachine
    from .surface import TextSurface


def surface_context(surface: typing.Optional[TextSurface]):
    if surface is None:
        return SurfaceContext()
    selection = surface.get_selection()
    if not selection.collapsed or selection.start == 0:
        return SurfaceContext()
    return SurfaceContext(preceding=surface.get_value()[selection.start - 1 : selection.start])


class EditApplier:
    def __init__(self, modifiers: ModifierStateMachine, attach_at_cursor: bool = True):
        self.modifiers = modifiers
        self.attach_at_cursor = attach_at_cursor

    def insertion_range(self, surface: TextSurface):
        if self.attach_at_cursor:
            return surface.get_selection()
        return SelectionRange.caret(len(surface.get_value()))

    def deletion_range(self, surface: TextSurface, control: ControlKey) -> typing.Optional[SelectionRange]:
        selection = surface.get_selection()
        if not selection.collapsed:
            return selection
        if control is ControlKey.BACKSPACE:
            if selection.start == 0:
                return None
            return SelectionRange(start=selection.start - 1, end=selection.start)
        if selection.start >= len(surface.get_value()):
            return None
        return SelectionRange(start=selection.start, end=selection.start + 1)

    def _replace(self, surface: TextSurface, target: SelectionRange, text: str):
        target = target.clamped(len(surface.get_value()))
        return surface.replace_range(target.start, target.end, text)

    def apply(self, action: Action, surface: typing.Optional[TextSurface]) -> bool:
        match action:
            case ToggleModifier(modifier=modifier):
                self.modifiers.toggle(modifier)
                return True
            case ControlEdit(control=ControlKey.BACKSPACE | ControlKey.DELETE as control):
                if surface is None:
                    return False
                target = self.deletion_range(surface, control)
                if target is None:
                    return False
                return self._replace(surface, target, "")
            case ControlEdit(control=control):
                if surface is None:
                    return False
                return self._replace(surface, self.insertion_range(surface), control.text)
            case InsertText(text=text, consumes=consumes):
                if surface is None:
                    return False
                committed = self._replace(surface, self.insertion_range(surface), text)
            case ComposeReplace(text=text, consumes=consumes):
                if surface is None:
                    return False
                caret = surface.get_selection().start
                committed = self._replace(surface, SelectionRange(start=caret - 1, end=caret), text)
            case _:
                return False
        if committed:
            for modifier in consumes:
                self.modifiers.consume_one_shot(modifier)
        return committed
