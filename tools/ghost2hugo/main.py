#!/usr/bin/env python3
"""
Ghost JSON export -> Hugo content converter.

- Posts -> <site>/content/post/<slug>.md
- Pages -> <site>/content/<slug>.md
  frontmatter: date, title, draft, slug, description, image?, tags?,
  categories?, author?

Key features:
- Author and tags rebuilt from the users / tags / posts_tags tables
- Draft status, page flag and timestamps tolerant of every export vintage
  (epoch millis or ISO strings, bool/0/1/"true" page flags)
- Mobiledoc bodies rendered through per-card renderers (markdown, hr,
  html, embed, image, code, gallery, bookmark) and soft-break atoms
- Old Markdown-only posts exported verbatim
- One broken post never stops the export: its body is left empty and
  the problem is reported
- Unchanged output files are not rewritten
"""

from __future__ import annotations

import argparse
import pathlib
import sys
from dataclasses import dataclass
from typing import List, Optional

from .classify import populate
from .config import DEFAULT_CONFIG_NAME, Config, ConfigError, load_config
from .diagnostics import Diagnostics
from .export import ExportError, GhostExport, load_export
from .posts import export_post


@dataclass
class Summary:
    posts: int = 0
    pages: int = 0
    skipped: int = 0
    failed: int = 0
    problems: int = 0


def convert(
    export: GhostExport,
    site: pathlib.Path,
    config: Config,
    diagnostics: Diagnostics,
    dry_run: bool = False,
) -> Summary:
    content_root = config.content_root(site)
    summary = Summary()

    if not export.posts:
        print("- no posts in export")
        return summary

    for post in export.posts:
        populate(post, export, config, diagnostics)
        if post.is_draft and not config.include_drafts:
            print(f"= {post.slug} is a draft, skip")
            summary.skipped += 1
            continue
        try:
            export_post(post, content_root, diagnostics, dry_run=dry_run)
        except (OSError, ValueError) as e:
            print(f"ERROR writing post {post.id} ({e})", file=sys.stderr)
            diagnostics.report("write", str(e), post.id)
            summary.failed += 1
            continue
        if post.is_page:
            summary.pages += 1
        else:
            summary.posts += 1

    summary.problems = len(diagnostics)
    return summary


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ghost2hugo",
        description="Convert a Ghost JSON export into Hugo content files.",
    )
    parser.add_argument("export", type=pathlib.Path, help="Ghost export .json")
    parser.add_argument("site", type=pathlib.Path, help="Hugo site root")
    parser.add_argument(
        "--config",
        type=pathlib.Path,
        help=f"YAML config (default: <site>/{DEFAULT_CONFIG_NAME} if present)",
    )
    parser.add_argument("--content-dir", help="content dir inside the site")
    parser.add_argument(
        "--date-format",
        help="strptime format for export dates (default: autodetect)",
    )
    parser.add_argument("--timezone", help="zone for dates without one")
    parser.add_argument(
        "--skip-drafts",
        action="store_true",
        help="do not export posts with status 'draft'",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="report what would be written without writing",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    config_path = args.config
    if config_path is None and (args.site / DEFAULT_CONFIG_NAME).exists():
        config_path = args.site / DEFAULT_CONFIG_NAME

    try:
        config = load_config(config_path).merged(
            content_dir=args.content_dir,
            date_format=args.date_format,
            timezone=args.timezone,
            include_drafts=False if args.skip_drafts else None,
        )
        export = load_export(args.export)
    except (ConfigError, ExportError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    diagnostics = Diagnostics(echo=True)
    summary = convert(export, args.site, config, diagnostics, dry_run=args.dry_run)
    print(
        f"✓ {summary.posts} posts, {summary.pages} pages"
        f" ({summary.skipped} skipped, {summary.failed} failed,"
        f" {summary.problems} problems)"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
