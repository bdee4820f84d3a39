from __future__ import annotations

import json
import pathlib
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional


class ExportError(Exception):
    pass


def _text(raw: Dict[str, Any], key: str) -> str:
    v = raw.get(key)
    return v if isinstance(v, str) else ""


@dataclass
class User:
    id: Any
    name: str

    @classmethod
    def from_json(cls, raw: Dict[str, Any]) -> "User":
        return cls(id=raw.get("id"), name=_text(raw, "name"))


@dataclass
class Tag:
    id: Any
    name: str

    @classmethod
    def from_json(cls, raw: Dict[str, Any]) -> "Tag":
        return cls(id=raw.get("id"), name=_text(raw, "name"))


@dataclass
class PostTag:
    post_id: Any
    tag_id: Any

    @classmethod
    def from_json(cls, raw: Dict[str, Any]) -> "PostTag":
        return cls(post_id=raw.get("post_id"), tag_id=raw.get("tag_id"))


@dataclass
class PostRecord:
    """
    One Ghost post as exported. The raw_* fields keep whatever JSON type
    the exporter wrote; `populate` in classify.py turns them into the
    derived fields below exactly once.
    """

    id: Any
    title: str = ""
    slug: str = ""
    markdown: str = ""
    plaintext: str = ""
    mobiledoc: str = ""
    image: str = ""
    feature_image: str = ""
    meta_description: str = ""
    status: str = ""
    raw_page: Any = None
    raw_author_id: Any = None
    raw_published_at: Any = None
    raw_created_at: Any = None

    # derived
    published: Optional[datetime] = None
    created: Optional[datetime] = None
    is_draft: bool = False
    is_page: bool = False
    author: str = ""
    tags: List[str] = field(default_factory=list)
    populated: bool = False

    @classmethod
    def from_json(cls, raw: Dict[str, Any]) -> "PostRecord":
        return cls(
            id=raw.get("id"),
            title=_text(raw, "title"),
            slug=_text(raw, "slug"),
            markdown=_text(raw, "markdown"),
            plaintext=_text(raw, "plaintext"),
            mobiledoc=_text(raw, "mobiledoc"),
            image=_text(raw, "image"),
            feature_image=_text(raw, "feature_image"),
            meta_description=_text(raw, "meta_description"),
            status=_text(raw, "status"),
            raw_page=raw.get("page"),
            raw_author_id=raw.get("author_id"),
            raw_published_at=raw.get("published_at"),
            raw_created_at=raw.get("created_at"),
        )


@dataclass
class GhostExport:
    posts: List[PostRecord] = field(default_factory=list)
    users: List[User] = field(default_factory=list)
    tags: List[Tag] = field(default_factory=list)
    posts_tags: List[PostTag] = field(default_factory=list)

    @classmethod
    def from_json(cls, doc: Any) -> "GhostExport":
        data = _find_data(doc)

        def rows(key: str) -> List[Dict[str, Any]]:
            value = data.get(key) or []
            if not isinstance(value, list):
                raise ExportError(f"export field {key!r} is not a list")
            return [r for r in value if isinstance(r, dict)]

        return cls(
            posts=[PostRecord.from_json(r) for r in rows("posts")],
            users=[User.from_json(r) for r in rows("users")],
            tags=[Tag.from_json(r) for r in rows("tags")],
            posts_tags=[PostTag.from_json(r) for r in rows("posts_tags")],
        )


def _find_data(doc: Any) -> Dict[str, Any]:
    # Ghost wraps the tables as {"db": [{"meta": ..., "data": ...}]};
    # hand-trimmed exports often drop the outer list.
    if isinstance(doc, dict) and isinstance(doc.get("db"), list):
        for entry in doc["db"]:
            if isinstance(entry, dict) and isinstance(entry.get("data"), dict):
                return entry["data"]
        raise ExportError("export has a 'db' list but no 'data' section")
    if isinstance(doc, dict) and isinstance(doc.get("data"), dict):
        return doc["data"]
    raise ExportError("export has neither 'db' nor 'data' section")


def load_export(path: pathlib.Path) -> GhostExport:
    try:
        text = pathlib.Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise ExportError(f"cannot read export {path}: {e}") from e
    try:
        doc = json.loads(text)
    except json.JSONDecodeError as e:
        raise ExportError(f"export {path} is not valid JSON: {e}") from e
    return GhostExport.from_json(doc)
