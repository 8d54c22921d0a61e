#!/usr/bin/env python3
# CUI // SP-CTI
"""Concatenate agentrules sources into a single instruction file.

Used for .windsurfrules, CLAUDE.md, AGENTS.md and .cursor/BUGBOT.md. The
variants differ only in banner, separator and destination.
"""

import logging
from pathlib import Path

from rulegen.dx.rule_transform import (
    SourceDocument,
    collect_sources,
    encoded_size,
    ensure_trailing_newline,
    transform_document,
    write_output,
)
from rulegen.errors import DirectoryCreateError

logger = logging.getLogger(__name__)


def build_concatenated(source_dirs, banner="", separator=""):
    """Return the banner followed by every transformed source document.

    Directories are walked in the order given; files within a directory are
    sorted by name. Each document is followed by separator.
    """
    parts = [banner]
    for src_dir in source_dirs:
        for source in collect_sources(src_dir):
            document = SourceDocument.read(source)
            parts.append(transform_document(document.text))
            parts.append(separator)
            logger.debug("appended %s", source)
    return ensure_trailing_newline("".join(parts))


def generate_concatenated_rules(source_dirs, destination, banner="", separator=""):
    """Build the concatenated file and write it to destination.

    Returns:
        dict: {path, sources, size_bytes}
    """
    destination = Path(destination)
    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise DirectoryCreateError(
            f"creating {destination.parent}: {exc}", path=str(destination.parent)
        ) from exc

    content = build_concatenated(source_dirs, banner=banner, separator=separator)
    write_output(destination, content)
    return {
        "path": str(destination),
        "sources": [str(d) for d in source_dirs],
        "size_bytes": encoded_size(content),
    }
