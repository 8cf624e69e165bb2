# SPDX-FileCopyrightText: 2023 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
import dataclasses
import json
import pathlib
import typing

import cattrs
import pygtrie

from .commontypes import ConfigurationError, DockCorner, LayoutKind

# Hungarian compose pairs: the character already before the caret, then the typed marker.
# : is Shift+. and ' is Shift+1 on the layer maps below. AltGr output is never composed, so
# the ´ pairs only apply when a shift_map puts ´ on a key.
COMPOSE_SEQUENCES = {
    "a ´": "á",
    "e ´": "é",
    "i ´": "í",
    "o ´": "ó",
    "u ´": "ú",
    "A ´": "Á",
    "E ´": "É",
    "I ´": "Í",
    "O ´": "Ó",
    "U ´": "Ú",
    "o :": "ö",
    "u :": "ü",
    "O :": "Ö",
    "U :": "Ü",
    "o '": "ő",
    "u '": "ű",
    "O '": "Ő",
    "U '": "Ű",
}

SHIFT_MAP = {
    "0": "§",
    "1": "'",
    "2": '"',
    "3": "+",
    "4": "!",
    "5": "%",
    "6": "/",
    "7": "=",
    "8": "(",
    "9": ")",
    "-": "_",
    "=": "+",
    ",": "?",
    ".": ":",
    "|": "|",
    # letters are cased before the shift layer is consulted, so this only shows up in legends
    "í": "Í",
}

ALTGR_MAP = {
    "0": "¬",
    "1": "~",
    "2": "ˇ",
    "3": "^",
    "4": "˘",
    "5": "°",
    "6": "˛",
    "7": "`",
    "8": "˙",
    "9": "´",
    "ö": "˝",
    "ü": "¨",
    "ó": "¸",
    "q": "\\",
    "w": "|",
    "e": "Ä",
    "u": "€",
    "i": "Í",
    "ő": "÷",
    "ú": "×",
    "a": "ä",
    "s": "đ",
    "d": "Đ",
    "f": "[",
    "g": "]",
    "j": "í",
    "k": "ł",
    "l": "Ł",
    "é": "$",
    "á": "ß",
    "ű": "¤",
    "í": "<",
    "y": ">",
    "x": "#",
    "c": "&",
    "v": "@",
    "b": "{",
    "n": "}",
    ",": ";",
    ".": ">",
    "-": "*",
}

STORAGE_KEY = "virtkeyboard"


settings_converter = cattrs.Converter(detailed_validation=False)


def unstructure_trie(t: pygtrie.Trie):
    return {" ".join(k): v for k, v in t.items()}


def structure_trie(d: dict, typ: type[pygtrie.Trie]):
    return pygtrie.Trie({tuple(k.split()): v for k, v in d.items()})


settings_converter.register_unstructure_hook(pygtrie.Trie, unstructure_trie)
settings_converter.register_structure_hook(pygtrie.Trie, structure_trie)
settings_converter.register_unstructure_hook(pathlib.Path, str)
settings_converter.register_structure_hook(pathlib.Path, lambda v, _: pathlib.Path(v))


def structure_layout_kind(v: str, typ: type[LayoutKind]):
    try:
        return LayoutKind(v.lower())
    except (AttributeError, ValueError):
        raise ConfigurationError(f"Unexpected layout {v!r}") from None


def structure_dock_corner(v: str, typ: type[DockCorner]):
    try:
        return DockCorner(v)
    except ValueError:
        raise ConfigurationError(f"Unexpected dock corner {v!r}") from None


settings_converter.register_unstructure_hook(LayoutKind, lambda v: v.value)
settings_converter.register_structure_hook(LayoutKind, structure_layout_kind)
settings_converter.register_unstructure_hook(DockCorner, lambda v: v.value)
settings_converter.register_structure_hook(DockCorner, structure_dock_corner)


@dataclasses.dataclass(kw_only=True)
class Settings:
    _path: typing.Optional[pathlib.Path] = None
    layout: LayoutKind
    hun_compose: bool
    attach_at_cursor: bool
    follow_focus: bool
    remember_position: bool
    start_minimized: bool
    dock_corner: DockCorner
    storage_key: str
    shift_map: dict[str, str]
    altgr_map: dict[str, str]
    compose_sequences: pygtrie.Trie

    def save(self, dest: typing.Optional[pathlib.Path] = None):
        if dest is None:
            dest = self._path
        raw = settings_converter.unstructure(self)
        del raw["_path"]
        with dest.open("w", encoding="utf-8") as out:
            json.dump(raw, out, indent=2, ensure_ascii=False)

    @classmethod
    def load(cls, src: pathlib.Path):
        with src.open(encoding="utf-8") as f:
            raw = json.load(f)
        raw["_path"] = str(src)
        return settings_converter.structure(raw, cls)

    @classmethod
    def for_test(cls, **overrides):
        raw = {
            "layout": "qwertz",
            "hun_compose": True,
            "attach_at_cursor": True,
            "follow_focus": True,
            "remember_position": True,
            "start_minimized": True,
            "dock_corner": "bottom-right",
            "storage_key": STORAGE_KEY,
            "shift_map": SHIFT_MAP,
            "altgr_map": ALTGR_MAP,
            "compose_sequences": COMPOSE_SEQUENCES,
        }
        raw.update(overrides)
        return settings_converter.structure(raw, cls)


settings_converter.register_structure_hook(Settings, cattrs.gen.make_dict_structure_fn(Settings, settings_converter))
