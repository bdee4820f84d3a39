"""
Mobiledoc card and atom renderers.

Card payloads are whatever the Ghost editor stored, so every payload goes
through `decode_card` first: it either returns a typed card with the
fields that renderer needs, or raises `CardDecodeError`. Renderers below
only ever see well-formed cards and are pure functions of them.

- markdown / card-markdown -> the markdown text
- hr -> `---`
- html, embed -> raw HTML
- image -> Hugo `figure` shortcode
- code -> fenced code block
- gallery -> `<figure>` with rows of three images
- bookmark -> `<figure>` link preview
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Tuple

from .config import GALLERY_ROW_SIZE, SOFT_BREAK_ATOMS
from .utils import strip_content_folder


class CardDecodeError(Exception):
    def __init__(self, card: str, missing: str) -> None:
        super().__init__(f"{card} card missing {missing}")
        self.card = card
        self.missing = missing


# ---------- Card types


@dataclass(frozen=True)
class MarkdownCard:
    markdown: str


@dataclass(frozen=True)
class HrCard:
    pass


@dataclass(frozen=True)
class HtmlCard:
    html: str


@dataclass(frozen=True)
class EmbedCard:
    html: str


@dataclass(frozen=True)
class ImageCard:
    src: str
    caption: Optional[str] = None


@dataclass(frozen=True)
class CodeCard:
    code: str
    language: Optional[str] = None


@dataclass(frozen=True)
class GalleryImage:
    src: str
    width: Optional[float] = None
    height: Optional[float] = None
    alt: Optional[str] = None
    title: Optional[str] = None


@dataclass(frozen=True)
class GalleryCard:
    # None marks an entry that was not an image; it still takes a slot
    # when rows are counted.
    images: Tuple[Optional[GalleryImage], ...] = ()
    caption: Optional[str] = None


@dataclass(frozen=True)
class BookmarkCard:
    url: str
    title: str
    description: str
    thumbnail: Optional[str] = None
    icon: Optional[str] = None
    author: Optional[str] = None
    publisher: Optional[str] = None
    caption: Optional[str] = None


# ---------- Decoding


def _mapping(name: str, payload: Any) -> Dict[str, Any]:
    if not isinstance(payload, dict):
        raise CardDecodeError(name, "payload")
    return payload


def _required_str(name: str, m: Dict[str, Any], key: str) -> str:
    v = m.get(key)
    if not isinstance(v, str):
        raise CardDecodeError(name, key)
    return v


def _optional_str(m: Dict[str, Any], key: str) -> Optional[str]:
    v = m.get(key)
    return v if isinstance(v, str) else None


def _optional_number(m: Dict[str, Any], key: str) -> Optional[float]:
    v = m.get(key)
    if isinstance(v, bool) or not isinstance(v, (int, float)):
        return None
    return float(v)


def _decode_markdown(name, payload):
    m = _mapping(name, payload)
    return MarkdownCard(_required_str(name, m, "markdown"))


def _decode_hr(name, payload):
    return HrCard()


def _decode_html(name, payload):
    m = _mapping(name, payload)
    return HtmlCard(_required_str(name, m, "html"))


def _decode_embed(name, payload):
    m = _mapping(name, payload)
    return EmbedCard(_required_str(name, m, "html"))


def _decode_image(name, payload):
    m = _mapping(name, payload)
    return ImageCard(
        src=_required_str(name, m, "src"),
        caption=_optional_str(m, "caption"),
    )


def _decode_code(name, payload):
    m = _mapping(name, payload)
    return CodeCard(
        code=_required_str(name, m, "code"),
        language=_optional_str(m, "language"),
    )


def _decode_gallery_image(raw: Any) -> Optional[GalleryImage]:
    if not isinstance(raw, dict) or not isinstance(raw.get("src"), str):
        return None
    return GalleryImage(
        src=raw["src"],
        width=_optional_number(raw, "width"),
        height=_optional_number(raw, "height"),
        alt=_optional_str(raw, "alt"),
        title=_optional_str(raw, "title"),
    )


def _decode_gallery(name, payload):
    m = _mapping(name, payload)
    images = m.get("images")
    if not isinstance(images, list):
        raise CardDecodeError(name, "images")
    return GalleryCard(
        images=tuple(_decode_gallery_image(i) for i in images),
        caption=_optional_str(m, "caption"),
    )


def _decode_bookmark(name, payload):
    m = _mapping(name, payload)
    meta = m.get("metadata")
    if not isinstance(meta, dict):
        raise CardDecodeError(name, "metadata")
    return BookmarkCard(
        url=_required_str(name, meta, "url"),
        title=_required_str(name, meta, "title"),
        description=_required_str(name, meta, "description"),
        thumbnail=_optional_str(meta, "thumbnail"),
        icon=_optional_str(meta, "icon"),
        author=_optional_str(meta, "author"),
        publisher=_optional_str(meta, "publisher"),
        caption=_optional_str(m, "caption"),
    )


# ---------- Rendering


def render_markdown(card: MarkdownCard) -> str:
    return f"{card.markdown}\n"


def render_hr(card: HrCard) -> str:
    return "---\n"


def render_html(card) -> str:
    return card.html


def render_image(card: ImageCard) -> str:
    if card.caption is not None:
        return f'{{{{< figure src="{card.src}" caption="{card.caption}" >}}}}\n'
    return f'{{{{< figure src="{card.src}" >}}}}\n'


def render_code(card: CodeCard) -> str:
    return f"```{card.language or ''}\n{card.code}\n```\n"


def _gallery_img(image: GalleryImage) -> str:
    attrs = [f'src="{strip_content_folder(image.src)}"']
    if image.width is not None:
        attrs.append(f'width="{image.width:.0f}"')
    if image.height is not None:
        attrs.append(f'height="{image.height:.0f}"')
    if image.alt is not None:
        attrs.append(f'alt="{image.alt}"')
    if image.title is not None:
        attrs.append(f'title="{image.title}"')
    return f"      <div><img {' '.join(attrs)}/></div>\n"


def render_gallery(card: GalleryCard) -> str:
    out = ["<figure>\n", "  <div>\n", "    <div>\n"]
    for i, image in enumerate(card.images):
        if i > 0 and i % GALLERY_ROW_SIZE == 0:
            out.append("    </div>")
            out.append("    <div>")
        if image is None:
            continue
        out.append(_gallery_img(image))
    out.append("    </div>\n")
    out.append("  </div>\n")
    if card.caption is not None:
        out.append(f"  <figcaption>\n    {card.caption}\n  </figcaption>\n")
    out.append("</figure>")
    return "".join(out)


_BOOKMARK_TEMPLATE = (
    "<figure>\n"
    '\t     <a href="{url}">\n'
    "\t       <div>\n"
    "\t         <div>{title}</div>\n"
    "\t         <div>{description}</div>\n"
    "\t         <div>\n"
    "\t           {icon}\n"
    "\t           {author}\n"
    "\t           {publisher}\n"
    "\t         </div>\n"
    "\t       </div>\n"
    "\t       {thumbnail}\n"
    "\t     </a>\n"
    "\t     {caption}\n"
    "\t   </figure>"
)


def render_bookmark(card: BookmarkCard) -> str:
    # Absent parts leave their line in place, blank.
    def part(value: Optional[str], fmt: str) -> str:
        return fmt.format(value) if value is not None else ""

    return _BOOKMARK_TEMPLATE.format(
        url=card.url,
        title=card.title,
        description=card.description,
        icon=part(card.icon, '<img src="{}">'),
        author=part(card.author, "<span>{}</span>"),
        publisher=part(card.publisher, "<span>{}</span>"),
        thumbnail=part(card.thumbnail, '<div><img src="{}"></div>'),
        caption=part(card.caption, "<figcaption>{}</figcaption>"),
    )


@dataclass(frozen=True)
class CardType:
    decode: Callable[[str, Any], Any]
    render: Callable[[Any], str]
    # failures worth reporting; the rest degrade silently
    report_missing: bool = False


CARD_TYPES: Dict[str, CardType] = {
    "markdown": CardType(_decode_markdown, render_markdown),
    "card-markdown": CardType(_decode_markdown, render_markdown),
    "hr": CardType(_decode_hr, render_hr),
    "html": CardType(_decode_html, render_html),
    "embed": CardType(_decode_embed, render_html, report_missing=True),
    "image": CardType(_decode_image, render_image, report_missing=True),
    "code": CardType(_decode_code, render_code),
    "gallery": CardType(_decode_gallery, render_gallery),
    "bookmark": CardType(_decode_bookmark, render_bookmark),
}


def decode_card(name: str, payload: Any):
    try:
        card_type = CARD_TYPES[name]
    except KeyError:
        raise CardDecodeError(name, "renderer") from None
    return card_type.decode(name, payload)


def render_card(name: str, payload: Any, diagnostics=None) -> str:
    try:
        card = decode_card(name, payload)
    except CardDecodeError as e:
        card_type = CARD_TYPES.get(name)
        if diagnostics is not None and card_type and card_type.report_missing:
            # Only a missing payload field is reported, not a non-object payload.
            if e.missing != "payload":
                diagnostics.report("card", f"{e.card} card missing {e.missing}")
        return ""
    return CARD_TYPES[name].render(card)


def card_renderers(diagnostics=None) -> Dict[str, Callable[[Any], str]]:
    """Binds every registered card type to `diagnostics`."""

    def bind(name: str) -> Callable[[Any], str]:
        return lambda payload: render_card(name, payload, diagnostics)

    return {name: bind(name) for name in CARD_TYPES}


# ---------- Atoms


def render_soft_break(value: Any, payload: Any) -> str:
    return "\n"


ATOM_RENDERERS: Dict[str, Callable[[Any, Any], str]] = {
    name: render_soft_break for name in SOFT_BREAK_ATOMS
}
