# SPDX-FileCopyrightText: 2023 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import abc
import enum
from contextlib import aclosing, asynccontextmanager
from typing import TYPE_CHECKING, Any, AsyncIterable, cast

import msgspec
import trio

from .keyboard.layouts import KeyDescriptor
from .keyboard.resolver import Action

if TYPE_CHECKING:
    from .app import VirtKeyboard


class KeyPress(enum.IntEnum):
    RELEASED = 0
    PRESSED = 1
    REPEATED = 2


class KeyEvent(msgspec.Struct, frozen=True):
    key: KeyDescriptor
    press: KeyPress

    @classmethod
    def pressed(cls, key: KeyDescriptor):
        return cls(key=key, press=KeyPress.PRESSED)

    @classmethod
    def released(cls, key: KeyDescriptor):
        return cls(key=key, press=KeyPress.RELEASED)


class AppliedKey(msgspec.Struct, frozen=True):
    key: KeyDescriptor
    action: Action


class Section(abc.ABC):
    @abc.abstractmethod
    async def pump(self, source: trio.MemoryReceiveChannel[Any], sink: trio.MemorySendChannel[Any]): ...


# stage 0.5: drop KeyPress.RELEASED events
class OnlyPresses(Section):
    async def pump(self, source: trio.MemoryReceiveChannel[KeyEvent], sink: trio.MemorySendChannel[KeyEvent]):
        async with aclosing(source), aclosing(sink):
            async for event in source:
                if event.press is not KeyPress.RELEASED:
                    await sink.send(event)


# stages 1-4: each press runs to completion on the keyboard before the next is read
class PressKeys(Section):
    def __init__(self, keyboard: VirtKeyboard):
        self.keyboard = keyboard

    async def pump(self, source: trio.MemoryReceiveChannel[KeyEvent], sink: trio.MemorySendChannel[AppliedKey]):
        async with aclosing(source), aclosing(sink):
            async for event in source:
                action = self.keyboard.press(event.key)
                await sink.send(AppliedKey(key=event.key, action=action))


@asynccontextmanager
async def pump_all(first_source: AsyncIterable[Any], *sections: Section):
    async with trio.open_nursery() as nursery:
        section_input = first_source
        for section in sections:
            section_send_channel, section_receive_channel = trio.open_memory_channel(0)
            nursery.start_soon(section.pump, section_input, section_send_channel)
            section_input = section_receive_channel
        yield section_input
        nursery.cancel_scope.cancel()


@asynccontextmanager
async def make_keystream(key_event_channel: trio.MemoryReceiveChannel[KeyEvent], keyboard: VirtKeyboard):
    async with pump_all(key_event_channel, OnlyPresses(), PressKeys(keyboard)) as keystream:
        yield cast(trio.MemoryReceiveChannel[AppliedKey], keystream)
