#!/usr/bin/env python3
# CUI // SP-CTI
"""Generate Cursor rule files (.cursor/rules/*.gen.mdc), one per source.

A source that already starts with YAML frontmatter is treated as a
hand-authored rule and copied as-is. Any other source gets a default
frontmatter block naming the file it came from. In both cases sentinel
comment lines are dropped.
"""

import logging
import shutil
from pathlib import Path

from rulegen.dx.rule_transform import (
    SourceDocument,
    collect_sources,
    encoded_size,
    ensure_trailing_newline,
    strip_sentinel_comments,
    write_output,
)
from rulegen.dx.target_registry import DEFAULT_SUFFIX, render_template
from rulegen.errors import DirectoryCreateError

logger = logging.getLogger(__name__)

TEMPLATE_CURSOR_FRONTMATTER = """---
description: Auto-generated from {{ name }}.md
globs: ["**"]
alwaysApply: false
---
"""


def render_cursor_rule(document: SourceDocument) -> str:
    """Build the .mdc content for one source document."""
    body = strip_sentinel_comments(document.text)
    if document.has_frontmatter:
        return ensure_trailing_newline(body)
    header = render_template(TEMPLATE_CURSOR_FRONTMATTER, {"name": document.name})
    return ensure_trailing_newline(header + body)


def clear_directory(path) -> Path:
    """Remove path and everything in it, then recreate it empty."""
    path = Path(path)
    try:
        if path.exists():
            shutil.rmtree(path)
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise DirectoryCreateError(f"clearing {path}: {exc}", path=str(path)) from exc
    return path


def generate_cursor_rules(src_dir, dst_dir, suffix=DEFAULT_SUFFIX):
    """Write one rule file per *.md in src_dir into dst_dir.

    Existing outputs with the same name are replaced; nothing else in
    dst_dir is touched.

    Returns:
        list of {source, path, size_bytes} in the order written.
    """
    dst_dir = Path(dst_dir)
    try:
        dst_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise DirectoryCreateError(f"creating {dst_dir}: {exc}", path=str(dst_dir)) from exc

    results = []
    for source in collect_sources(src_dir):
        document = SourceDocument.read(source)
        content = render_cursor_rule(document)
        out_path = write_output(dst_dir / f"{document.name}{suffix}", content)
        logger.debug("cursor rule %s -> %s", source, out_path)
        results.append({
            "source": str(source),
            "path": str(out_path),
            "size_bytes": encoded_size(content),
        })
    return results
