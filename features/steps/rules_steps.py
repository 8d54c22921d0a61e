# CUI // SP-CTI
"""Step definitions for rulegen BDD scenarios."""

import os
import shutil
import sys
from pathlib import Path

from behave import given, then, when

sys.path.insert(0, str(Path(__file__).resolve().parent.parent.parent))
from rulegen.dx.rules_generator import generate_rules
from rulegen.errors import RulegenError

SENTINEL = "<!-- @agentrules: contents are already in your agent instructions. -->"

SOURCE_DIRS = ["shared", "cursor", "windsurf", "claude-code", "chatgpt-codex", "review-guidelines"]

GENERATED = [".windsurfrules", "CLAUDE.md", "AGENTS.md", ".cursor/BUGBOT.md"]


def _generated_paths(root):
    root = Path(root)
    rules_dir = root / ".cursor" / "rules"
    paths = sorted(rules_dir.glob("*")) if rules_dir.is_dir() else []
    return paths + [root / rel for rel in GENERATED]


def _read(context, rel):
    return (Path(context.work_dir) / rel).read_text(encoding="utf-8")


@given('a repository with agentrules sources')
def step_repo_with_sources(context):
    """Create a .git marker and empty agentrules directories."""
    root = Path(context.work_dir)
    (root / ".git").mkdir()
    for name in SOURCE_DIRS:
        (root / "agentrules" / name).mkdir(parents=True, exist_ok=True)


@given('the shared source "{name}" contains a heading "{heading}" and the line "{line}"')
def step_shared_source(context, name, heading, line):
    path = Path(context.work_dir) / "agentrules" / "shared" / name
    path.write_text(f"# {heading}\n\n{line}\n", encoding="utf-8")


@given('the claude-code source "{name}" contains a sentinel and the line "{line}"')
def step_claude_source(context, name, line):
    path = Path(context.work_dir) / "agentrules" / "claude-code" / name
    path.write_text(f"{SENTINEL}\n\n{line}\n", encoding="utf-8")


@given('a directory that is not inside a repository')
def step_no_repo(context):
    shutil.rmtree(os.path.join(context.work_dir, ".git"), ignore_errors=True)


@when('I run the rules generator')
@when('I run the rules generator again')
def step_run_generator(context):
    try:
        context.result = generate_rules(directory=context.work_dir)
        context.error = None
    except RulegenError as exc:
        context.result = None
        context.error = exc
        return
    context.snapshots.append({
        str(p): p.read_bytes() for p in _generated_paths(context.work_dir)
    })


@then('the generator succeeds')
def step_succeeds(context):
    assert context.error is None, f"Generation failed: {context.error}"
    assert context.result is not None


@then('the generator fails with "{message}"')
def step_fails(context, message):
    assert context.error is not None, "Expected generation to fail"
    assert message in str(context.error), str(context.error)


@then('"{rel}" starts with the generated banner')
def step_starts_with_banner(context, rel):
    content = _read(context, rel)
    assert content.startswith(f"# {rel}\n<!-- generated; DO NOT EDIT."), content[:200]


@then('"{rel}" contains "{first}" before "{second}"')
def step_contains_in_order(context, rel, first, second):
    content = _read(context, rel)
    assert first in content and second in content, content
    assert content.index(first) < content.index(second), content


@then('"{rel}" does not contain "{text}"')
def step_not_contains(context, rel, text):
    assert text not in _read(context, rel)


@then('no generated file contains the sentinel')
def step_no_sentinel(context):
    for path in _generated_paths(context.work_dir):
        assert "@agentrules" not in path.read_text(encoding="utf-8"), str(path)


@then('the generated files are byte-identical between runs')
def step_idempotent(context):
    assert len(context.snapshots) == 2, "Expected two successful runs"
    assert context.snapshots[0] == context.snapshots[1]
