# SPDX-FileCopyrightText: 2023 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
import pygtrie
import pytest
from virtkeyboard.keyboard.layouts import BACKSPACE, ENTER, PIPE, SHIFT, KeyDescriptor
from virtkeyboard.keyboard.modifiers import Modifier, ModifierState
from virtkeyboard.keyboard.resolver import (
    ComposeReplace,
    ComposeRules,
    ControlEdit,
    ControlKey,
    InsertText,
    KeyLegend,
    KeyResolver,
    NoAction,
    SurfaceContext,
    ToggleModifier,
)
from virtkeyboard.settings import SHIFT_MAP, Settings

key = KeyDescriptor.printable


@pytest.fixture
def resolver():
    return KeyResolver.from_settings(Settings.for_test())


def test_modifier_and_control_keys(resolver: KeyResolver):
    assert resolver.resolve(SHIFT, ModifierState()) == ToggleModifier(modifier=Modifier.SHIFT)
    assert resolver.resolve(KeyDescriptor(code="AltGr", label="AltGr"), ModifierState()) == ToggleModifier(modifier=Modifier.ALTGR)
    assert resolver.resolve(BACKSPACE, ModifierState()) == ControlEdit(control=ControlKey.BACKSPACE)
    assert resolver.resolve(ENTER, ModifierState(shift=True)) == ControlEdit(control=ControlKey.ENTER)
    assert ControlKey.ENTER.text == "\n"
    assert ControlKey.TAB.text == "\t"
    assert ControlKey.SPACE.text == " "
    assert ControlKey.DELETE.text is None


def test_key_without_literal(resolver: KeyResolver):
    assert resolver.resolve(KeyDescriptor(code="Mystery", label=""), ModifierState()) == NoAction()


@pytest.mark.parametrize(
    "caps,shift,expected",
    [
        (False, False, "ő"),
        (False, True, "Ő"),
        (True, False, "Ő"),
        (True, True, "ő"),
    ],
)
def test_letter_case(resolver: KeyResolver, caps: bool, shift: bool, expected: str):
    action = resolver.resolve(key("ő"), ModifierState(caps=caps, shift=shift))
    assert isinstance(action, InsertText)
    assert action.text == expected
    assert action.consumes == ((Modifier.SHIFT,) if shift else ())


def test_shift_layer_for_punctuation(resolver: KeyResolver):
    assert resolver.resolve(key("1"), ModifierState(shift=True)) == InsertText(text="'", consumes=(Modifier.SHIFT,))
    assert resolver.resolve(key("-"), ModifierState(shift=True)) == InsertText(text="_", consumes=(Modifier.SHIFT,))
    # not in the shift layer
    assert resolver.resolve(key("ö"), ModifierState(shift=True)) == InsertText(text="Ö", consumes=(Modifier.SHIFT,))
    # capslock leaves digits alone
    assert resolver.resolve(key("1"), ModifierState(caps=True)) == InsertText(text="1")
    assert resolver.resolve(PIPE, ModifierState(shift=True)) == InsertText(text="|", consumes=(Modifier.SHIFT,))


def test_altgr_takes_precedence(resolver: KeyResolver):
    action = resolver.resolve(key("e"), ModifierState(altgr=True, shift=True))
    assert action == InsertText(text="Ä", consumes=(Modifier.SHIFT, Modifier.ALTGR))
    assert resolver.resolve(key("q"), ModifierState(altgr=True, caps=True)) == InsertText(text="\\", consumes=(Modifier.ALTGR,))


def test_altgr_miss_falls_through(resolver: KeyResolver):
    assert resolver.resolve(key("m"), ModifierState(altgr=True)) == InsertText(text="m")
    assert resolver.resolve(key("m"), ModifierState(altgr=True, shift=True)) == InsertText(text="M", consumes=(Modifier.SHIFT,))


def test_compose_with_preceding_character(resolver: KeyResolver):
    after_o = SurfaceContext(preceding="o")
    assert resolver.resolve(key("1"), ModifierState(shift=True), after_o) == ComposeReplace(text="ő", consumes=(Modifier.SHIFT,))
    assert resolver.resolve(key("."), ModifierState(shift=True), SurfaceContext(preceding="U")) == ComposeReplace(
        text="Ü", consumes=(Modifier.SHIFT,)
    )


def test_altgr_output_is_not_composed(resolver: KeyResolver):
    assert resolver.resolve(key("9"), ModifierState(altgr=True), SurfaceContext(preceding="e")) == InsertText(
        text="´", consumes=(Modifier.ALTGR,)
    )
    assert resolver.resolve(key("9"), ModifierState(altgr=True, shift=True), SurfaceContext(preceding="A")) == InsertText(
        text="´", consumes=(Modifier.SHIFT, Modifier.ALTGR)
    )


def test_acute_pairs_with_shifted_marker():
    resolver = KeyResolver.from_settings(Settings.for_test(shift_map={**SHIFT_MAP, "9": "´"}))
    assert resolver.resolve(key("9"), ModifierState(shift=True), SurfaceContext(preceding="e")) == ComposeReplace(
        text="é", consumes=(Modifier.SHIFT,)
    )
    assert resolver.resolve(key("9"), ModifierState(shift=True, caps=True), SurfaceContext(preceding="A")) == ComposeReplace(
        text="Á", consumes=(Modifier.SHIFT,)
    )


def test_compose_misses(resolver: KeyResolver):
    assert resolver.resolve(key("1"), ModifierState(shift=True), SurfaceContext(preceding="x")) == InsertText(text="'", consumes=(Modifier.SHIFT,))
    assert resolver.resolve(key("1"), ModifierState(shift=True), SurfaceContext()) == InsertText(text="'", consumes=(Modifier.SHIFT,))
    assert resolver.resolve(key("1"), ModifierState(shift=True, hu_compose=False), SurfaceContext(preceding="o")) == InsertText(
        text="'", consumes=(Modifier.SHIFT,)
    )


def test_compose_rules_upper_retry():
    rules = ComposeRules(pygtrie.Trie({("A", "´"): "Á"}))
    assert rules.compose("a", "´") is None
    assert rules.compose("a", "´", upper=True) == "Á"
    assert rules.compose("A", "´") == "Á"


def test_resolve_is_pure(resolver: KeyResolver):
    modifiers = ModifierState(shift=True)
    context = SurfaceContext(preceding="u")
    first = resolver.resolve(key("1"), modifiers, context)
    second = resolver.resolve(key("1"), modifiers, context)
    assert first == second == ComposeReplace(text="ű", consumes=(Modifier.SHIFT,))


def test_legends(resolver: KeyResolver):
    assert resolver.legend(key("a"), ModifierState()) == KeyLegend(main="a", sub="A")
    assert resolver.legend(key("a"), ModifierState(caps=True)) == KeyLegend(main="A", sub="a")
    assert resolver.legend(key("1"), ModifierState()) == KeyLegend(main="1")
    assert resolver.legend(key("1"), ModifierState(shift=True)) == KeyLegend(main="'", sub="1")
    assert resolver.legend(key("e"), ModifierState(altgr=True)) == KeyLegend(main="Ä", sub="e")
    assert resolver.legend(SHIFT, ModifierState(shift=True)) == KeyLegend(main="Shift")
    assert resolver.legend(PIPE, ModifierState(shift=True)) == KeyLegend(main="|")
