# SPDX-FileCopyrightText: 2023 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import collections.abc
import typing

import msgspec

from .commontypes import DockCorner

if typing.TYPE_CHECKING:
    from .settings import Settings


class PanelState(msgspec.Struct, frozen=True, kw_only=True):
    """Where the keyboard panel sits and whether it is minimized.

    Coordinates are only kept non-negative, here and when a saved state is
    restored. The panel's size and the viewport belong to whatever draws the
    panel, so pulling an off-screen position back into view is up to it.
    """

    x: float = 120
    y: float = 120
    minimized: bool = False
    dock_corner: DockCorner = DockCorner.BOTTOM_RIGHT

    def moved_to(self, x: float, y: float):
        return msgspec.structs.replace(self, x=max(0, x), y=max(0, y))


class PanelStore(typing.Protocol):
    def save(self, state: PanelState) -> None: ...

    def load(self) -> typing.Optional[PanelState]: ...


class MappingPanelStore:
    """Keeps the encoded panel state under one key of a string mapping."""

    def __init__(self, storage: collections.abc.MutableMapping[str, bytes], key: str):
        self.storage = storage
        self.key = key

    @classmethod
    def from_settings(cls, storage: collections.abc.MutableMapping[str, bytes], settings: Settings):
        return cls(storage, settings.storage_key)

    def save(self, state: PanelState):
        self.storage[self.key] = msgspec.json.encode(state)

    def load(self):
        raw = self.storage.get(self.key)
        if not raw:
            return None
        return msgspec.json.decode(raw, type=PanelState)
