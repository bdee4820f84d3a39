from __future__ import annotations

import pathlib
import sys
from typing import Any, Dict

from .cards import ATOM_RENDERERS, card_renderers
from .config import POST_SECTION
from .diagnostics import Diagnostics
from .export import PostRecord
from .mobiledoc import Mobiledoc, MobiledocError
from .utils import strip_content_folder, write_if_changed, yaml_frontmatter_block


def render_mobiledoc(post: PostRecord, diagnostics: Diagnostics) -> str:
    if post.mobiledoc == "":
        return ""
    diag = diagnostics.for_post(post.id)

    def unknown(kind: str, name: str) -> str:
        diag.report(kind, f"no renderer for {kind} {name!r}, skipped")
        return ""

    md = Mobiledoc(card_renderers(diag), ATOM_RENDERERS, unknown=unknown)
    try:
        return md.render(post.mobiledoc)
    except MobiledocError as e:
        print(f"ERROR rendering post {post.id} ({e})", file=sys.stderr)
        diag.report("render", str(e))
        return ""


def post_body(post: PostRecord, diagnostics: Diagnostics) -> str:
    """
    Mobiledoc wins whenever the post has one, even if it renders to
    nothing; the markdown field is only used by posts that predate it.
    """
    if post.mobiledoc != "":
        return render_mobiledoc(post, diagnostics)
    return post.markdown


def front_matter(post: PostRecord) -> Dict[str, Any]:
    fm: Dict[str, Any] = {}

    date = post.created if post.is_draft else post.published
    if date is not None:
        fm["date"] = date
    fm["title"] = post.title
    fm["draft"] = post.is_draft
    fm["slug"] = post.slug
    fm["description"] = post.meta_description

    if post.image:
        fm["image"] = strip_content_folder(post.image)
    elif post.feature_image:
        fm["image"] = strip_content_folder(post.feature_image)

    if post.tags:
        fm["tags"] = list(post.tags)
        fm["categories"] = list(post.tags)
    if post.author:
        fm["author"] = post.author
    return fm


def post_path(post: PostRecord, content_root: pathlib.Path) -> pathlib.Path:
    if post.is_page:
        return pathlib.Path(content_root) / f"{post.slug}.md"
    return pathlib.Path(content_root) / POST_SECTION / f"{post.slug}.md"


def render_post(post: PostRecord, diagnostics: Diagnostics) -> str:
    return yaml_frontmatter_block(front_matter(post)) + post_body(post, diagnostics)


def export_post(
    post: PostRecord,
    content_root: pathlib.Path,
    diagnostics: Diagnostics,
    dry_run: bool = False,
) -> pathlib.Path:
    out_path = post_path(post, content_root)
    text = render_post(post, diagnostics)

    if dry_run:
        print(f"~ would write {out_path}")
        return out_path

    if write_if_changed(out_path, text):
        kind = "page" if post.is_page else "post"
        print(f"✓ exported {kind} {post.slug}")
    else:
        print(f"= {post.slug} unchanged, skip")
    return out_path
