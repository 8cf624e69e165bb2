# SPDX-FileCopyrightText: 2023 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import logging
import typing

import msgspec

from .commontypes import DockCorner, TargetNotFound
from .editor.applier import EditApplier, surface_context
from .editor.surface import TextSurface
from .keyboard.layouts import KeyDescriptor, find_key, get_layout
from .keyboard.modifiers import ModifierStateMachine, ToggleObserver
from .keyboard.resolver import Action, KeyResolver, NoAction
from .panel import PanelState

if typing.TYPE_CHECKING:
    from .panel import PanelStore
    from .settings import Settings

logger = logging.getLogger(__name__)


class VirtKeyboard:
    """One on-screen keyboard: its modifier state, its layer tables, and the surface it types into."""

    def __init__(self, settings: Settings, target: typing.Optional[TextSurface] = None, panel_store: typing.Optional[PanelStore] = None):
        self.settings = settings
        self.layout = get_layout(settings.layout)
        self.modifiers = ModifierStateMachine(hu_compose=settings.hun_compose)
        self.resolver = KeyResolver.from_settings(settings)
        self.applier = EditApplier(self.modifiers, attach_at_cursor=settings.attach_at_cursor)
        self.target: typing.Optional[TextSurface] = None
        self.attach_to(target)
        self.panel_store = panel_store
        self.panel = PanelState(minimized=settings.start_minimized, dock_corner=settings.dock_corner)
        self._restore_panel()

    def attach_to(self, target: typing.Optional[TextSurface]):
        if target is not None and not isinstance(target, TextSurface):
            raise TargetNotFound(target)
        self.target = target

    def focus_changed(self, surface: typing.Optional[TextSurface]):
        if not self.settings.follow_focus:
            return
        if isinstance(surface, TextSurface) and surface.writable:
            self.target = surface

    def on_toggle(self, observer: ToggleObserver):
        self.modifiers.subscribe(observer)

    def press(self, key: KeyDescriptor) -> Action:
        action = self.resolver.resolve(key, self.modifiers.snapshot(), surface_context(self.target))
        self.applier.apply(action, self.target)
        return action

    def press_code(self, code: str) -> Action:
        key = find_key(self.settings.layout, code)
        if key is None:
            logger.debug("No %r key on the %s layout", code, self.settings.layout.value)
            return NoAction()
        return self.press(key)

    def legends(self):
        snapshot = self.modifiers.snapshot()
        return [[self.resolver.legend(key, snapshot) for key in row] for row in self.layout]

    def minimize(self):
        if not self.panel.minimized:
            self._set_minimized(True)

    def restore(self):
        if self.panel.minimized:
            self._set_minimized(False)

    def toggle_minimized(self):
        self._set_minimized(not self.panel.minimized)

    def _set_minimized(self, minimized: bool):
        self.panel = msgspec.structs.replace(self.panel, minimized=minimized)
        self._save_panel()

    def set_position(self, x: float, y: float):
        self.panel = self.panel.moved_to(x, y)
        self._save_panel()

    def set_dock_corner(self, corner: DockCorner):
        self.panel = msgspec.structs.replace(self.panel, dock_corner=corner)
        self._save_panel()

    def _save_panel(self):
        if not self.settings.remember_position or self.panel_store is None:
            return
        try:
            self.panel_store.save(self.panel)
        except Exception:
            logger.warning("Could not save keyboard panel state", exc_info=True)

    def _restore_panel(self):
        if not self.settings.remember_position or self.panel_store is None:
            return
        try:
            restored = self.panel_store.load()
        except Exception:
            logger.warning("Could not restore keyboard panel state", exc_info=True)
            return
        if restored is not None:
            self.panel = restored.moved_to(restored.x, restored.y)
