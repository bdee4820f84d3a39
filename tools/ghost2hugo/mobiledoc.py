"""
Walks a mobiledoc 0.3 document and renders it as Markdown.

Cards and atoms are rendered by callbacks registered by name; everything
else (markup, list and image sections, inline markups) is rendered here.
Every structural problem is raised as `MobiledocError`, including an
exception escaping a card or atom callback, so callers only have one
failure to handle per document.
"""

from __future__ import annotations

import json
from typing import Any, Callable, Dict, List, Mapping, Optional

from .config import HEADING_TAG, MOBILEDOC_VERSIONS, QUOTE_TAGS

CardRenderer = Callable[[Any], str]
AtomRenderer = Callable[[Any, Any], str]
UnknownHandler = Callable[[str, str], str]

MARKUP_SECTION = 1
IMAGE_SECTION = 2
LIST_SECTION = 3
CARD_SECTION = 10

TEXT_MARKER = 0
ATOM_MARKER = 1

_SIMPLE_MARKUPS = {
    "b": ("**", "**"),
    "strong": ("**", "**"),
    "i": ("*", "*"),
    "em": ("*", "*"),
    "s": ("~~", "~~"),
    "code": ("`", "`"),
    "u": ("<u>", "</u>"),
    "sub": ("<sub>", "</sub>"),
    "sup": ("<sup>", "</sup>"),
}


class MobiledocError(Exception):
    pass


def _raise_unknown(kind: str, name: str) -> str:
    raise MobiledocError(f"no renderer for {kind} {name!r}")


def _attrs(markup: List[Any]) -> Dict[str, Any]:
    flat = markup[1] if len(markup) > 1 and isinstance(markup[1], list) else []
    return dict(zip(flat[::2], flat[1::2]))


class Mobiledoc:
    def __init__(
        self,
        cards: Mapping[str, CardRenderer],
        atoms: Mapping[str, AtomRenderer],
        unknown: Optional[UnknownHandler] = None,
    ) -> None:
        self.cards = dict(cards)
        self.atoms = dict(atoms)
        self.unknown = unknown or _raise_unknown

    def render(self, raw: str) -> str:
        try:
            doc = json.loads(raw)
        except (json.JSONDecodeError, RecursionError) as e:
            raise MobiledocError(f"invalid mobiledoc JSON: {e}") from e
        if not isinstance(doc, dict):
            raise MobiledocError("mobiledoc is not an object")
        version = doc.get("version")
        if version not in MOBILEDOC_VERSIONS:
            raise MobiledocError(f"unsupported mobiledoc version {version!r}")
        try:
            return _Walk(self, doc).run()
        except MobiledocError:
            raise
        except (AttributeError, IndexError, KeyError, TypeError, ValueError) as e:
            raise MobiledocError(f"malformed mobiledoc: {e!r}") from e


class _Walk:
    def __init__(self, md: Mobiledoc, doc: Dict[str, Any]) -> None:
        self.md = md
        self.markups: List[Any] = doc.get("markups") or []
        self.atoms: List[Any] = doc.get("atoms") or []
        self.cards: List[Any] = doc.get("cards") or []
        self.sections: List[Any] = doc.get("sections") or []

    def run(self) -> str:
        return "".join(self.section(s) for s in self.sections)

    def section(self, section: List[Any]) -> str:
        kind = section[0]
        if kind == MARKUP_SECTION:
            return self.markup_section(section[1], section[2])
        if kind == LIST_SECTION:
            return self.list_section(section[1], section[2])
        if kind == IMAGE_SECTION:
            return f"![]({section[1]})\n\n"
        if kind == CARD_SECTION:
            return self.card(section[1]) + "\n"
        raise MobiledocError(f"unknown section type {kind!r}")

    def markup_section(self, tag: str, markers: List[Any]) -> str:
        text = self.markers(markers)
        tag = tag.lower()
        m = HEADING_TAG.match(tag)
        if m:
            return f"{'#' * int(m.group('level'))} {text}\n\n"
        if tag in QUOTE_TAGS:
            return f"> {text}\n\n"
        return f"{text}\n\n"

    def list_section(self, tag: str, items: List[List[Any]]) -> str:
        out = []
        for n, markers in enumerate(items, start=1):
            bullet = f"{n}." if tag.lower() == "ol" else "*"
            out.append(f"{bullet} {self.markers(markers)}\n")
        out.append("\n")
        return "".join(out)

    def markers(self, markers: List[Any]) -> str:
        out: List[str] = []
        stack: List[List[Any]] = []
        for kind, opened, closed, value in markers:
            for idx in opened:
                markup = self.markups[idx]
                stack.append(markup)
                out.append(self.open_markup(markup))
            if kind == TEXT_MARKER:
                out.append(value)
            elif kind == ATOM_MARKER:
                out.append(self.atom(value))
            else:
                raise MobiledocError(f"unknown marker type {kind!r}")
            if closed > len(stack):
                raise MobiledocError("marker closes more markups than are open")
            for _ in range(closed):
                out.append(self.close_markup(stack.pop()))
        while stack:
            out.append(self.close_markup(stack.pop()))
        return "".join(out)

    def open_markup(self, markup: List[Any]) -> str:
        tag = markup[0].lower()
        if tag == "a":
            return "["
        return _SIMPLE_MARKUPS.get(tag, ("", ""))[0]

    def close_markup(self, markup: List[Any]) -> str:
        tag = markup[0].lower()
        if tag == "a":
            return f"]({_attrs(markup).get('href', '')})"
        return _SIMPLE_MARKUPS.get(tag, ("", ""))[1]

    def card(self, index: int) -> str:
        name, payload = self.cards[index][0], self.cards[index][1]
        render = self.md.cards.get(name)
        if render is None:
            return self.md.unknown("card", name)
        return _call(f"card {name!r}", render, payload)

    def atom(self, index: int) -> str:
        name, value, payload = self.atoms[index]
        render = self.md.atoms.get(name)
        if render is None:
            return self.md.unknown("atom", name)
        return _call(f"atom {name!r}", render, value, payload)


def _call(what: str, fn: Callable[..., str], *args: Any) -> str:
    try:
        out = fn(*args)
    except Exception as e:
        raise MobiledocError(f"{what} failed: {e!r}") from e
    if not isinstance(out, str):
        raise MobiledocError(f"{what} returned {type(out).__name__}")
    return out
