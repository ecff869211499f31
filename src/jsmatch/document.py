"""Width-aware document layout.

A small "Strictly Pretty" (Lindig, 2000) engine. Emitters build an
immutable tree of ``Text``, ``Line``, ``Break``, ``Concat``, ``Nest`` and
``Group`` nodes; ``render`` is the only place line-width decisions are made.

Each ``Group`` is laid out flat when its flat form, plus whatever follows it
up to the next line break, fits in the remaining width. Otherwise its
``Break`` nodes turn into newlines. ``Line`` is a hard newline in every mode.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Union

MAX_WIDTH = 80
INDENT = 2

_FLAT = False
_BROKEN = True


@dataclass(frozen=True)
class Text:
    text: str

    def __post_init__(self) -> None:
        if "\n" in self.text:
            raise ValueError("Text documents cannot contain newlines")


@dataclass(frozen=True)
class Line:
    pass


@dataclass(frozen=True)
class Break:
    flat: str
    broken: str


@dataclass(frozen=True)
class Concat:
    parts: tuple[Doc, ...]


@dataclass(frozen=True)
class Nest:
    doc: Doc
    indent: int
    # only indents when the enclosing group is broken
    if_broken: bool = False


@dataclass(frozen=True)
class Group:
    doc: Doc


Doc = Union[Text, Line, Break, Concat, Nest, Group]

LINE = Line()
SOFT_BREAK = Break("", "")


# ── Constructors ─────────────────────────────────────────────────


def text(value: str) -> Doc:
    return Text(value)


def concat(docs: Iterable[Doc]) -> Doc:
    return Concat(tuple(docs))


def join(docs: Iterable[Doc], sep: Doc) -> Doc:
    """Concatenate ``docs`` with ``sep`` between each pair."""
    parts: list[Doc] = []
    for i, doc in enumerate(docs):
        if i:
            parts.append(sep)
        parts.append(doc)
    return Concat(tuple(parts))


def separator(flat: str, broken: str) -> Doc:
    """``flat`` when the group fits, otherwise ``broken`` then a newline."""
    return Break(flat, broken)


def nest(doc: Doc, indent: int = INDENT) -> Doc:
    return Nest(doc, indent)


def nest_if_broken(doc: Doc, indent: int = INDENT) -> Doc:
    """Like ``nest``, but a flat group keeps the outer indentation.

    Hard lines inside a flat group (an immediately invoked block in a list
    item, say) then line up with the line the group started on.
    """
    return Nest(doc, indent, if_broken=True)


def group(doc: Doc) -> Doc:
    return Group(doc)


# ── Layout ───────────────────────────────────────────────────────

_Item = tuple[int, bool, Doc]


def _fits(width: int, pending: list[_Item], rest: list[_Item]) -> bool:
    """Check that ``pending`` in flat mode, then ``rest``, fit before a newline.

    ``rest`` is the renderer's stack (top at the end); it is not mutated.
    """
    todo = list(pending)
    rest_index = len(rest)
    while width >= 0:
        if not todo:
            if rest_index == 0:
                return True
            rest_index -= 1
            todo.append(rest[rest_index])
        indent, mode, doc = todo.pop()
        if isinstance(doc, Text):
            width -= len(doc.text)
        elif isinstance(doc, Line):
            return True
        elif isinstance(doc, Break):
            if mode is _BROKEN:
                return True
            width -= len(doc.flat)
        elif isinstance(doc, Concat):
            todo.extend((indent, mode, part) for part in reversed(doc.parts))
        elif isinstance(doc, Nest):
            todo.append((indent + doc.indent, mode, doc.doc))
        elif isinstance(doc, Group):
            todo.append((indent, mode, doc.doc))
        else:
            raise TypeError(f"not a document: {doc!r}")
    return False


def render(doc: Doc, max_width: int = MAX_WIDTH) -> str:
    """Lay out ``doc`` so that groups fit within ``max_width`` columns."""
    out: list[str] = []
    column = 0
    stack: list[_Item] = [(0, _BROKEN, doc)]
    while stack:
        indent, mode, current = stack.pop()
        if isinstance(current, Text):
            out.append(current.text)
            column += len(current.text)
        elif isinstance(current, Line):
            out.append("\n" + " " * indent)
            column = indent
        elif isinstance(current, Break):
            if mode is _FLAT:
                out.append(current.flat)
                column += len(current.flat)
            else:
                out.append(current.broken + "\n" + " " * indent)
                column = indent
        elif isinstance(current, Concat):
            stack.extend((indent, mode, part) for part in reversed(current.parts))
        elif isinstance(current, Nest):
            if current.if_broken and mode is _FLAT:
                stack.append((indent, mode, current.doc))
            else:
                stack.append((indent + current.indent, mode, current.doc))
        elif isinstance(current, Group):
            if mode is _FLAT or _fits(
                max_width - column, [(indent, _FLAT, current.doc)], stack
            ):
                stack.append((indent, _FLAT, current.doc))
            else:
                stack.append((indent, _BROKEN, current.doc))
        else:
            raise TypeError(f"not a document: {current!r}")
    return "".join(out)
