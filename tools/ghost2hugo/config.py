#!/usr/bin/env python3
from __future__ import annotations

import pathlib
import re
from dataclasses import dataclass, fields
from typing import Any, Dict, Optional

import yaml
from dateutil import tz

# ---------- Paths

# Relative to the Hugo site root handed to the CLI.
CONTENT_DIR = "content"
POST_SECTION = "post"
DEFAULT_CONFIG_NAME = "ghost2hugo.yml"

# ---------- Config

CONTENT_PREFIX = "/content"
DRAFT_STATUS = "draft"
SOFT_BREAK_ATOMS = ("soft-break", "soft-return")
MOBILEDOC_VERSIONS = ("0.3.0", "0.3.1", "0.3.2")
GALLERY_ROW_SIZE = 3

# accepted spellings of a boolean page flag
TRUE_STRINGS = frozenset({"1", "t", "T", "TRUE", "true", "True"})
FALSE_STRINGS = frozenset({"0", "f", "F", "FALSE", "false", "False"})

# Some shared regexes

HEADING_TAG = re.compile(r"^h(?P<level>[1-6])$")
QUOTE_TAGS = ("blockquote", "aside", "pull-quote")


class ConfigError(Exception):
    pass


@dataclass
class Config:
    content_dir: str = CONTENT_DIR
    date_format: Optional[str] = None
    timezone: str = "UTC"
    include_drafts: bool = True

    def __post_init__(self) -> None:
        if not isinstance(self.timezone, str) or tz.gettz(self.timezone) is None:
            raise ConfigError(f"unknown timezone {self.timezone!r}")

    def tzinfo(self):
        return tz.gettz(self.timezone)

    def content_root(self, site: pathlib.Path) -> pathlib.Path:
        return pathlib.Path(site) / self.content_dir

    def merged(self, **overrides: Any) -> "Config":
        values = {f.name: getattr(self, f.name) for f in fields(self)}
        values.update({k: v for k, v in overrides.items() if v is not None})
        return Config(**values)


def load_config(path: Optional[pathlib.Path]) -> Config:
    """Reads the optional YAML config. Unknown keys are rejected."""
    if path is None:
        return Config()
    try:
        data: Dict[str, Any] = (
            yaml.safe_load(pathlib.Path(path).read_text(encoding="utf-8")) or {}
        )
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"cannot read config {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config {path} must be a mapping")

    known = {f.name for f in fields(Config)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigError(
            f"unknown config keys in {path}: {', '.join(unknown)}"
        )
    return Config().merged(**data)
