from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from dateutil import parser as date_parser

from .config import DRAFT_STATUS, FALSE_STRINGS, TRUE_STRINGS, Config
from .diagnostics import Diagnostics
from .export import GhostExport, PostRecord
from .joins import find_author, find_tags


def parse_bool(raw: Any) -> bool:
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, (int, float)):
        return raw != 0
    if isinstance(raw, str):
        if raw in TRUE_STRINGS:
            return True
        if raw in FALSE_STRINGS:
            return False
    return False


def parse_time(
    raw: Any,
    config: Config,
    diagnostics: Optional[Diagnostics] = None,
) -> Optional[datetime]:
    """
    Ghost 0.x wrote epoch milliseconds, 1.x and later ISO strings, and
    unpublished posts carry null. Returns None when the value is unset or
    unparseable; the latter is reported, never raised.
    """
    if raw is None or raw == "":
        return None
    zone = config.tzinfo()
    try:
        if isinstance(raw, bool):
            raise ValueError("boolean is not a timestamp")
        if isinstance(raw, (int, float)):
            return datetime.fromtimestamp(raw / 1000, tz=zone)
        if not isinstance(raw, str):
            raise ValueError(f"unsupported type {type(raw).__name__}")
        if config.date_format:
            dt = datetime.strptime(raw, config.date_format)
        else:
            dt = date_parser.parse(raw)
    except (ValueError, OverflowError, OSError) as e:
        if diagnostics is not None:
            diagnostics.report("time", f"cannot parse time {raw!r}: {e}")
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=zone)
    return dt


def populate(
    post: PostRecord,
    export: GhostExport,
    config: Config,
    diagnostics: Diagnostics,
) -> PostRecord:
    if post.populated:
        return post
    diag = diagnostics.for_post(post.id)

    post.published = parse_time(post.raw_published_at, config, diag)
    post.created = parse_time(post.raw_created_at, config, diag)
    post.is_draft = post.status == DRAFT_STATUS
    post.is_page = parse_bool(post.raw_page)
    post.author = find_author(post.raw_author_id, export.users)
    post.tags = find_tags(post.id, export.tags, export.posts_tags)
    post.populated = True
    return post
