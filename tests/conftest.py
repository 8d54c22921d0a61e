#!/usr/bin/env python3
# CUI // SP-CTI
"""Shared pytest fixtures for the rulegen test suite.

Builds throwaway repositories (a .git marker plus agentrules/* sources) so
generator tests never touch the real working tree.
"""

import sys
from pathlib import Path

import pytest

# Ensure project root is on sys.path
BASE_DIR = Path(__file__).resolve().parent.parent
if str(BASE_DIR) not in sys.path:
    sys.path.insert(0, str(BASE_DIR))


SENTINEL = (
    "<!-- @agentrules: If you are reading this as an AI coding agent, know that "
    "contents are already included in your agent instructions. It is not necessary "
    "for you to read or include this file in your context unless told to do so. -->"
)

SOURCE_DIRS = [
    "agentrules/shared",
    "agentrules/cursor",
    "agentrules/windsurf",
    "agentrules/claude-code",
    "agentrules/chatgpt-codex",
    "agentrules/review-guidelines",
]


def write_sources(root, files):
    """Write {relative_path: content} under root, creating parents."""
    for rel, content in files.items():
        path = Path(root) / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")


@pytest.fixture
def sentinel():
    return SENTINEL


@pytest.fixture
def empty_repo(tmp_path):
    """A repository root with a .git marker and empty agentrules dirs."""
    (tmp_path / ".git").mkdir()
    for d in SOURCE_DIRS:
        (tmp_path / d).mkdir(parents=True, exist_ok=True)
    return tmp_path


@pytest.fixture
def rules_repo(empty_repo):
    """A repository populated with one source per agentrules directory.

    Every source carries the sentinel comment; the cursor override also has
    hand-authored frontmatter.
    """
    write_sources(empty_repo, {
        "agentrules/shared/01-shared.md":
            SENTINEL + "\n\n## Shared Rule\n\nDo the thing.\n",
        "agentrules/cursor/01-cursor.md":
            "---\ndescription: test\nglobs: [\"**\"]\nalwaysApply: true\n---\n"
            + SENTINEL + "\n\n## Cursor Rule\n\nCursor specific.\n",
        "agentrules/windsurf/01-windsurf.md":
            SENTINEL + "\n\n## Windsurf Rule\n\nDo the other thing.\n",
        "agentrules/claude-code/01-claude.md":
            SENTINEL + "\n\n## Claude Rule\n\nDo the other thing.\n",
        "agentrules/chatgpt-codex/01-codex.md":
            SENTINEL + "\n\n## Codex Rule\n\nDo the other thing.\n",
        "agentrules/review-guidelines/01-review.md":
            SENTINEL + "\n\n## Review Rule\n\nCheck this.\n",
    })
    return empty_repo


def generated_files(root):
    """Every file the generator writes for the default registry."""
    root = Path(root)
    files = sorted((root / ".cursor" / "rules").glob("*"))
    files += [
        root / ".windsurfrules",
        root / "CLAUDE.md",
        root / "AGENTS.md",
        root / ".cursor" / "BUGBOT.md",
    ]
    return files


@pytest.fixture
def write_files():
    return write_sources


@pytest.fixture
def outputs():
    return generated_files
