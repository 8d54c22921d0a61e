#!/usr/bin/env python3
# CUI // SP-CTI
"""Regenerate every AI agent instruction file from agentrules/ sources.

Reads markdown from <repo>/agentrules/shared plus the per-tool override
directories and writes:

    .cursor/rules/*.gen.mdc   one rule per source (shared + cursor)
    .windsurfrules            shared + windsurf
    CLAUDE.md                 shared + claude-code
    AGENTS.md                 shared + chatgpt-codex + review-guidelines
    .cursor/BUGBOT.md         review-guidelines

Every run rewrites all outputs. Steps run in order and the first failure
aborts the run; outputs written before the failure are not rolled back.

Usage:
    rulegen
    python rulegen/dx/rules_generator.py --json
    python rulegen/dx/rules_generator.py --dir /path/inside/repo --verbose

Exit codes: 0 = all outputs regenerated, 1 = generation failed
"""

import argparse
import contextlib
import json
import logging
import sys
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent.parent
if str(BASE_DIR) not in sys.path:
    sys.path.insert(0, str(BASE_DIR))

from rulegen.dx.concat_rules import generate_concatenated_rules
from rulegen.dx.cursor_rules import clear_directory, generate_cursor_rules
from rulegen.dx.target_registry import load_registry
from rulegen.dx.warning_files import add_warning_files
from rulegen.errors import RepoRootNotFoundError, RulegenError

logger = logging.getLogger(__name__)

VCS_MARKER = ".git"
SHARED_SOURCE = "shared"


def find_repo_root(start=None) -> Path:
    """Walk upward from start (default: cwd) to the first dir holding .git."""
    current = Path(start).resolve() if start else Path.cwd().resolve()
    while True:
        if (current / VCS_MARKER).exists():
            return current
        if current.parent == current:
            raise RepoRootNotFoundError(path=str(start or ""))
        current = current.parent


@contextlib.contextmanager
def _stage(name):
    """Tag any RulegenError escaping the block with the step that failed."""
    try:
        yield
    except RulegenError as exc:
        if not exc.stage:
            exc.stage = name
        raise


def _emit(progress, line):
    if progress is not None:
        progress(line)


def _run_per_file(target, root, progress):
    dst_dir = target.destination_path(root)
    if target.clear_destination:
        with _stage(f"clearing {target.target_id} directory"):
            clear_directory(dst_dir)

    written = []
    for src_dir in target.source_paths(root):
        origin = src_dir.name if src_dir.name == SHARED_SOURCE else f"{src_dir.name}-specific"
        with _stage(f"generating {target.target_id} rules from {origin}"):
            for entry in generate_cursor_rules(src_dir, dst_dir, suffix=target.suffix):
                _emit(progress, f"[{target.target_id}] {entry['path']}")
                written.append(entry)
    return {"path": str(dst_dir), "files": written}


def _run_concatenated(target, root, progress):
    with _stage(f"generating {target.target_id} rules"):
        result = generate_concatenated_rules(
            target.source_paths(root),
            target.destination_path(root),
            banner=target.rendered_banner(),
            separator=target.separator,
        )
    _emit(progress, f"[{target.target_id}] rebuilt")
    return result


def generate_rules(directory=None, registry_path=None, progress=None):
    """Regenerate all targets for the repository containing directory.

    Args:
        directory: Where to start looking for the repository root (default: cwd).
        registry_path: Alternate target registry (default: the built-in one).
        progress: Optional callable receiving one line per file/target written.

    Returns:
        dict: {root, targets: {target_id: result}, warnings: [...]}

    Raises:
        RulegenError: any failure, with .stage naming the failed step.
    """
    with _stage("finding git root"):
        root = find_repo_root(directory)
    with _stage("loading target registry"):
        registry = load_registry(registry_path)

    logger.info("Generating agent rules in %s (%d targets)", root, len(registry.targets))

    results = {}
    readme_dirs = []
    for target in registry.targets:
        if target.is_per_file:
            results[target.target_id] = _run_per_file(target, root, progress)
        else:
            results[target.target_id] = _run_concatenated(target, root, progress)
        if target.warning_readme:
            readme_dirs.append(target.destination_path(root))

    warnings = []
    if readme_dirs:
        with _stage("adding warning files"):
            warnings = add_warning_files(
                readme_dirs,
                source_root=registry.source_root,
                command=registry.regenerate_command,
            )
        _emit(progress, "[warnings] added README file to generated directory")

    return {"root": str(root), "targets": results, "warnings": warnings}


def main():
    parser = argparse.ArgumentParser(
        description="Generate AI agent instruction files from agentrules/ sources"
    )
    parser.add_argument("--dir", help="Start directory for the repository root search")
    parser.add_argument("--json", action="store_true", help="Output JSON summary")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )

    try:
        result = generate_rules(
            directory=args.dir,
            progress=None if args.json else print,
        )
    except RulegenError as exc:
        print(f"Error generating rules: {exc}", file=sys.stderr)
        sys.exit(1)

    if args.json:
        print(json.dumps(result, indent=2))
    else:
        print("Rules generation completed successfully")


if __name__ == "__main__":
    main()
