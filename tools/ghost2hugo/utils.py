from __future__ import annotations

import pathlib
from datetime import date, datetime
from typing import Any, Dict

import yaml

from .config import CONTENT_PREFIX


def strip_content_folder(s: str) -> str:
    if s.startswith(CONTENT_PREFIX):
        return s[len(CONTENT_PREFIX):]
    return s


def _fmt_value(v: Any) -> Any:
    # Hugo wants full timestamps, not the YAML date tag
    if isinstance(v, datetime):
        return v.isoformat()
    if isinstance(v, date):
        return v.isoformat()
    if isinstance(v, list):
        return [_fmt_value(i) for i in v]
    return v


def yaml_frontmatter_block(data: Dict[str, Any]) -> str:
    dumped = yaml.safe_dump(
        {k: _fmt_value(v) for k, v in data.items()},
        sort_keys=False,
        allow_unicode=True,
    ).rstrip()
    return f"---\n{dumped}\n---\n\n"


def write_if_changed(path: pathlib.Path, text: str) -> bool:
    """
    Writes `text` to `path` unless the file already holds exactly that
    text. Returns True when the file was (re)written.
    """
    if path.exists() and path.read_text(encoding="utf-8") == text:
        return False
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return True
