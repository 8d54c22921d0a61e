#!/usr/bin/env python3
# CUI // SP-CTI
"""Line-level transform for agentrules markdown sources.

Source files under agentrules/ may start with a YAML frontmatter block or a
level-1 heading, and may carry a sentinel comment addressed to agents
reading the source tree directly:

    <!-- @agentrules: contents are already included in your instructions -->

Generated output never contains the sentinel. Everything else about a
document is line-oriented: no markdown structure is parsed.
"""

import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import List

from rulegen.errors import OutputWriteError, SourceReadError

logger = logging.getLogger(__name__)

SENTINEL_PREFIX = "<!-- @agentrules:"
SENTINEL_SUFFIX = "-->"
FRONTMATTER_DELIMITER = "---"
HEADING_PREFIX = "# "
SOURCE_GLOB = "*.md"
OUTPUT_MODE = 0o600
# Undecodable bytes survive the read/write round trip unchanged.
TEXT_ERRORS = "surrogateescape"


# ── Source Documents ────────────────────────────────────────────────────

@dataclass
class SourceDocument:
    """A markdown source file read from one of the agentrules directories."""
    path: Path
    text: str

    @classmethod
    def read(cls, path) -> "SourceDocument":
        path = Path(path)
        try:
            text = path.read_bytes().decode("utf-8", errors=TEXT_ERRORS)
        except OSError as exc:
            raise SourceReadError(f"reading {path}: {exc}", path=str(path)) from exc
        return cls(path=path, text=text)

    @property
    def name(self) -> str:
        """Base name without the .md extension."""
        return self.path.stem

    @property
    def lines(self) -> List[str]:
        return split_lines(self.text)

    @property
    def has_frontmatter(self) -> bool:
        lines = self.lines
        return bool(lines) and lines[0] == FRONTMATTER_DELIMITER


def collect_sources(directory) -> List[Path]:
    """Return the *.md files directly inside directory, sorted by filename.

    A directory that does not exist contributes no files.
    """
    directory = Path(directory)
    if not directory.is_dir():
        logger.debug("Source directory %s not present, skipping", directory)
        return []
    return sorted(directory.glob(SOURCE_GLOB), key=lambda p: p.name)


# ── Transform ───────────────────────────────────────────────────────────

def is_sentinel_comment(line: str) -> bool:
    """True when the trimmed line is a complete @agentrules comment."""
    stripped = line.strip()
    return stripped.startswith(SENTINEL_PREFIX) and stripped.endswith(SENTINEL_SUFFIX)


def split_lines(text: str) -> List[str]:
    """Split on \\n only, dropping one \\r before each break.

    Other control characters (form feed, U+2028, ...) stay inside the line.
    """
    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def encoded_size(text: str) -> int:
    return len(text.encode("utf-8", errors=TEXT_ERRORS))


def _join_lines(lines) -> str:
    return "".join(line + "\n" for line in lines)


def strip_sentinel_comments(text: str) -> str:
    """Drop every sentinel line; everything else is kept byte for byte."""
    return "\n".join(line for line in text.split("\n") if not is_sentinel_comment(line))


def _skip_leading_block(lines: List[str]) -> List[str]:
    if not lines:
        return lines
    if lines[0] == FRONTMATTER_DELIMITER:
        for i in range(1, len(lines)):
            if lines[i] == FRONTMATTER_DELIMITER:
                return lines[i + 1:]
        # Unclosed frontmatter swallows the rest of the document.
        return []
    if lines[0].startswith(HEADING_PREFIX):
        return lines[1:]
    return lines


def transform_document(text: str) -> str:
    """Apply the concatenation transform to one source document.

    1. Leading YAML frontmatter (first line exactly ``---``) is removed
       through its closing ``---``; otherwise a leading ``# `` heading line
       is removed.
    2. Sentinel comment lines are removed.
    3. Remaining lines are emitted verbatim, each terminated by ``\\n``.

    A document holding only frontmatter and a sentinel yields "".
    """
    body = _skip_leading_block(split_lines(text))
    return _join_lines(line for line in body if not is_sentinel_comment(line))


def ensure_trailing_newline(text: str) -> str:
    """Normalize text to end with exactly one newline."""
    return text.rstrip("\r\n") + "\n"


# ── Output ──────────────────────────────────────────────────────────────

def write_output(path, text: str) -> Path:
    """Atomically replace path with text, readable by the owner only."""
    path = Path(path)
    try:
        fd, tmp_name = tempfile.mkstemp(
            dir=str(path.parent), prefix=f".{path.name}.", suffix=".tmp"
        )
    except OSError as exc:
        raise OutputWriteError(f"writing {path}: {exc}", path=str(path)) from exc

    try:
        with os.fdopen(fd, "w", encoding="utf-8", errors=TEXT_ERRORS, newline="\n") as f:
            f.write(text)
        os.chmod(tmp_name, OUTPUT_MODE)
        os.replace(tmp_name, path)
    except OSError as exc:
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass
        raise OutputWriteError(f"writing {path}: {exc}", path=str(path)) from exc

    logger.debug("Wrote %s (%d bytes)", path, encoded_size(text))
    return path
