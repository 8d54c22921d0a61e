#!/usr/bin/env python3
# CUI // SP-CTI
"""Tests for rulegen/dx/target_registry.py."""

import sys
import textwrap
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))
from rulegen.dx.target_registry import (
    MODE_CONCATENATED,
    MODE_PER_FILE,
    OutputTarget,
    load_registry,
    render_template,
)
from rulegen.errors import RegistryError


def _write_registry(tmp_path, body):
    path = tmp_path / "registry.yaml"
    path.write_text(textwrap.dedent(body), encoding="utf-8")
    return path


class TestBuiltinRegistry:
    def test_target_order(self):
        registry = load_registry()
        ids = [t.target_id for t in registry.targets]
        assert ids == ["cursor", "windsurf", "claude", "agents", "bugbot"]

    def test_cursor_is_per_file(self):
        cursor = load_registry().get("cursor")
        assert cursor.mode == MODE_PER_FILE
        assert cursor.sources == ["shared", "cursor"]
        assert cursor.destination == ".cursor/rules"
        assert cursor.suffix == ".gen.mdc"
        assert cursor.clear_destination is True
        assert cursor.warning_readme is True

    @pytest.mark.parametrize("target_id,destination,separator", [
        ("windsurf", ".windsurfrules", "\n---\n\n"),
        ("claude", "CLAUDE.md", "\n---\n\n"),
        ("agents", "AGENTS.md", "\n"),
        ("bugbot", ".cursor/BUGBOT.md", "\n"),
    ])
    def test_concatenated_variants(self, target_id, destination, separator):
        target = load_registry().get(target_id)
        assert target.mode == MODE_CONCATENATED
        assert target.destination == destination
        assert target.separator == separator

    def test_all_concatenated_start_with_shared_except_bugbot(self):
        registry = load_registry()
        for target in registry.targets:
            if target.target_id == "bugbot":
                assert target.sources == ["review-guidelines"]
            else:
                assert target.sources[0] == "shared"

    def test_agents_includes_review_guidelines(self):
        assert load_registry().get("agents").sources[-1] == "review-guidelines"

    def test_banners_render_source_root(self):
        claude = load_registry().get("claude")
        assert claude.rendered_banner() == (
            "# CLAUDE.md\n<!-- generated; DO NOT EDIT. Edit files in agentrules/shared. -->\n\n"
        )

    def test_defaults(self):
        registry = load_registry()
        assert registry.source_root == "agentrules"
        assert registry.regenerate_command == "rulegen"
        assert registry.get("nope") is None


class TestOutputTarget:
    def test_paths(self, tmp_path):
        target = OutputTarget(
            target_id="claude", mode=MODE_CONCATENATED,
            sources=["shared", "claude-code"], destination="CLAUDE.md",
        )
        assert target.source_paths(tmp_path) == [
            tmp_path / "agentrules" / "shared",
            tmp_path / "agentrules" / "claude-code",
        ]
        assert target.destination_path(tmp_path) == tmp_path / "CLAUDE.md"
        assert target.is_per_file is False

    def test_empty_banner(self):
        target = OutputTarget(target_id="x", mode=MODE_CONCATENATED,
                              sources=["shared"], destination="X.md")
        assert target.rendered_banner() == ""


class TestLoadRegistryErrors:
    def test_missing_file(self, tmp_path):
        with pytest.raises(RegistryError):
            load_registry(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path):
        path = _write_registry(tmp_path, "targets: [unclosed\n")
        with pytest.raises(RegistryError):
            load_registry(path)

    def test_no_targets(self, tmp_path):
        path = _write_registry(tmp_path, "source_root: agentrules\n")
        with pytest.raises(RegistryError):
            load_registry(path)

    def test_unknown_mode(self, tmp_path):
        path = _write_registry(tmp_path, """\
            targets:
              foo:
                mode: sideways
                sources: [shared]
                destination: FOO.md
        """)
        with pytest.raises(RegistryError) as exc_info:
            load_registry(path)
        assert exc_info.value.target_id == "foo"

    def test_missing_destination(self, tmp_path):
        path = _write_registry(tmp_path, """\
            targets:
              foo:
                mode: concatenated
                sources: [shared]
        """)
        with pytest.raises(RegistryError):
            load_registry(path)

    def test_empty_sources(self, tmp_path):
        path = _write_registry(tmp_path, """\
            targets:
              foo:
                mode: concatenated
                sources: []
                destination: FOO.md
        """)
        with pytest.raises(RegistryError):
            load_registry(path)

    def test_custom_source_root(self, tmp_path):
        path = _write_registry(tmp_path, """\
            source_root: rules
            targets:
              foo:
                mode: concatenated
                sources: [common]
                destination: FOO.md
        """)
        target = load_registry(path).get("foo")
        assert target.source_paths(tmp_path) == [tmp_path / "rules" / "common"]


class TestRenderTemplate:
    def test_keeps_trailing_newline(self):
        assert render_template("Hi {{ name }}\n\n", {"name": "x"}) == "Hi x\n\n"
