# SPDX-FileCopyrightText: 2023 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import abc
import collections.abc
import enum
import logging
import typing

import msgspec

from ..commontypes import SelectionRange

logger = logging.getLogger(__name__)

WRITABLE_INPUT_TYPES = frozenset(["text", "search", "email", "url", "tel", "password", "number"])


class SurfaceKind(enum.Enum):
    INPUT = enum.auto()
    TEXTAREA = enum.auto()
    CONTENT_EDITABLE = enum.auto()


def is_writable(kind: SurfaceKind, input_type: typing.Optional[str] = None):
    if kind is SurfaceKind.INPUT:
        return (input_type or "text").lower() in WRITABLE_INPUT_TYPES
    return kind in (SurfaceKind.TEXTAREA, SurfaceKind.CONTENT_EDITABLE)


class BeforeEdit(msgspec.Struct, frozen=True):
    start: int
    end: int
    data: str
    input_type: str = "insertReplacementText"


class Edited(msgspec.Struct, frozen=True):
    value: str


# returning False cancels the edit; anything else lets it through
BeforeEditHandler = collections.abc.Callable[[BeforeEdit], typing.Optional[bool]]
EditedHandler = collections.abc.Callable[[Edited], None]


class TextSurface(abc.ABC):
    """An edit destination: a plain text field or a rich editable region.

    Offsets are indices into get_value(). All mutation goes through replace_range,
    which announces the edit first and lets any before-edit handler veto it.
    """

    kind: SurfaceKind

    def __init__(self):
        self.before_edit_handlers: list[BeforeEditHandler] = []
        self.edited_handlers: list[EditedHandler] = []

    @property
    def writable(self):
        return is_writable(self.kind)

    @abc.abstractmethod
    def get_value(self) -> str: ...

    @abc.abstractmethod
    def set_value(self, value: str): ...

    @abc.abstractmethod
    def get_selection(self) -> SelectionRange: ...

    @abc.abstractmethod
    def set_selection(self, start: int, end: int): ...

    def on_before_edit(self, handler: BeforeEditHandler):
        self.before_edit_handlers.append(handler)

    def on_edited(self, handler: EditedHandler):
        self.edited_handlers.append(handler)

    def _announce(self, notification: BeforeEdit):
        allowed = True
        for handler in self.before_edit_handlers:
            if handler(notification) is False:
                allowed = False
        return allowed

    def replace_range(self, start: int, end: int, text: str) -> bool:
        value = self.get_value()
        if not SelectionRange(start=start, end=end).is_valid_for(len(value)):
            raise ValueError(f"Range {start}:{end} is outside 0:{len(value)}")
        if not self._announce(BeforeEdit(start=start, end=end, data=text)):
            logger.debug("Edit of %d:%d cancelled", start, end)
            return False
        self.set_value(value[:start] + text + value[end:])
        caret = start + len(text)
        self.set_selection(caret, caret)
        edited = Edited(value=self.get_value())
        for handler in self.edited_handlers:
            handler(edited)
        return True


class ValueSurface(TextSurface):
    """A single-line or multi-line plain text field."""

    def __init__(self, value: str = "", *, multiline: bool = False, input_type: str = "text", selection: typing.Optional[SelectionRange] = None):
        super().__init__()
        self.kind = SurfaceKind.TEXTAREA if multiline else SurfaceKind.INPUT
        self.input_type = input_type
        self.value = value
        if selection is None:
            selection = SelectionRange.caret(len(value))
        self.selection = selection.clamped(len(value))

    @property
    def writable(self):
        return is_writable(self.kind, self.input_type)

    def get_value(self):
        return self.value

    def set_value(self, value: str):
        self.value = value
        self.selection = self.selection.clamped(len(value))

    def get_selection(self):
        return self.selection

    def set_selection(self, start: int, end: int):
        self.selection = SelectionRange(start=start, end=end).clamped(len(self.value))


class NodeAnchor(msgspec.Struct, frozen=True):
    node: int
    offset: int


class ContentSurface(TextSurface):
    """A rich editable region, held as a run of text nodes.

    The selection is anchored to (node, offset) pairs, the way a document selection is,
    and only counts when both ends land inside this region. Writing the value collapses
    the region to a single text node.
    """

    kind = SurfaceKind.CONTENT_EDITABLE

    def __init__(self, nodes: collections.abc.Iterable[str] = ()):
        super().__init__()
        self.nodes = list(nodes)
        self.anchors: typing.Optional[tuple[NodeAnchor, NodeAnchor]] = None

    def get_value(self):
        return "".join(self.nodes)

    def set_value(self, value: str):
        self.nodes = [value] if value else []

    def _inside(self, anchor: NodeAnchor):
        if not self.nodes:
            return anchor.node == 0 and anchor.offset == 0
        return 0 <= anchor.node < len(self.nodes) and 0 <= anchor.offset <= len(self.nodes[anchor.node])

    def _serialized_offset(self, anchor: NodeAnchor):
        return sum(len(n) for n in self.nodes[: anchor.node]) + anchor.offset

    def select_nodes(self, start: NodeAnchor, end: NodeAnchor):
        self.anchors = (start, end)

    def clear_selection(self):
        self.anchors = None

    def get_selection(self):
        if self.anchors is not None and all(self._inside(a) for a in self.anchors):
            start, end = sorted(self._serialized_offset(a) for a in self.anchors)
            return SelectionRange(start=start, end=end)
        return SelectionRange.caret(len(self.get_value()))

    def set_selection(self, start: int, end: int):
        # only a collapsed caret in the first text node; end is not honored
        first_length = len(self.nodes[0]) if self.nodes else 0
        caret = NodeAnchor(node=0, offset=min(max(start, 0), first_length))
        self.anchors = (caret, caret)
