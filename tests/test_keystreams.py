# SPDX-FileCopyrightText: 2023 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
import collections.abc
import typing
from contextlib import aclosing

import trio
from trio.lowlevel import checkpoint
from virtkeyboard.app import VirtKeyboard
from virtkeyboard.commontypes import LayoutKind
from virtkeyboard.editor.surface import ValueSurface
from virtkeyboard.keyboard.layouts import SHIFT, find_key
from virtkeyboard.keyboard.modifiers import Modifier
from virtkeyboard.keyboard.resolver import ComposeReplace, InsertText, ToggleModifier
from virtkeyboard.keystreams import AppliedKey, KeyEvent, KeyPress, OnlyPresses, make_keystream, pump_all
from virtkeyboard.settings import Settings

T = typing.TypeVar("T")

O_KEY = find_key(LayoutKind.QWERTZ, "o")
ONE_KEY = find_key(LayoutKind.QWERTZ, "1")
K_KEY = find_key(LayoutKind.QWERTZ, "k")


async def make_async_source(
    items: collections.abc.Sequence[T],
):
    for item in items:
        await checkpoint()
        yield item


async def test_only_presses():
    events = [
        KeyEvent.pressed(SHIFT),
        KeyEvent.released(SHIFT),
        KeyEvent(key=O_KEY, press=KeyPress.REPEATED),
        KeyEvent.released(O_KEY),
    ]
    async with (
        aclosing(make_async_source(events)) as keysource,
        pump_all(keysource, OnlyPresses()) as presses,
    ):
        results = [await presses.receive() for _ in range(2)]
    assert results == [KeyEvent.pressed(SHIFT), KeyEvent(key=O_KEY, press=KeyPress.REPEATED)]


async def test_keystream_types_into_surface():
    surface = ValueSurface()
    keyboard = VirtKeyboard(Settings.for_test(), target=surface)
    events = [
        KeyEvent.pressed(SHIFT),
        KeyEvent.released(SHIFT),
        KeyEvent.pressed(K_KEY),
        KeyEvent.released(K_KEY),
        KeyEvent.pressed(O_KEY),
        KeyEvent.released(O_KEY),
        KeyEvent.pressed(SHIFT),
        KeyEvent.released(SHIFT),
        KeyEvent.pressed(ONE_KEY),
        KeyEvent.released(ONE_KEY),
    ]
    send_channel, receive_channel = trio.open_memory_channel(len(events))
    for event in events:
        send_channel.send_nowait(event)
    send_channel.close()

    results = []
    async with make_keystream(receive_channel, keyboard) as keystream:
        async for applied in keystream:
            results.append(applied)

    assert results == [
        AppliedKey(key=SHIFT, action=ToggleModifier(modifier=Modifier.SHIFT)),
        AppliedKey(key=K_KEY, action=InsertText(text="K", consumes=(Modifier.SHIFT,))),
        AppliedKey(key=O_KEY, action=InsertText(text="o")),
        AppliedKey(key=SHIFT, action=ToggleModifier(modifier=Modifier.SHIFT)),
        AppliedKey(key=ONE_KEY, action=ComposeReplace(text="ő", consumes=(Modifier.SHIFT,))),
    ]
    assert surface.get_value() == "Kő"
