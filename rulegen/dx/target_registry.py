#!/usr/bin/env python3
# CUI // SP-CTI
"""Built-in registry of agent instruction output targets.

Each target is either per-file (one .mdc per source document) or
concatenated (one file built from every source document in order).
The table lives in rulegen/args/rules_registry.yaml, shipped with the
package; target repositories cannot extend it.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List

import yaml
from jinja2 import BaseLoader, Environment

from rulegen.errors import RegistryError

REGISTRY_PATH = Path(__file__).resolve().parent.parent / "args" / "rules_registry.yaml"

MODE_PER_FILE = "per_file"
MODE_CONCATENATED = "concatenated"
VALID_MODES = (MODE_PER_FILE, MODE_CONCATENATED)

DEFAULT_SOURCE_ROOT = "agentrules"
DEFAULT_REGENERATE_COMMAND = "rulegen"
DEFAULT_SUFFIX = ".gen.mdc"


# ── Template Helpers ────────────────────────────────────────────────────

def render_template(template_str, data):
    """Render a Jinja2 template string, keeping its trailing newline."""
    env = Environment(loader=BaseLoader(), keep_trailing_newline=True)
    return env.from_string(template_str).render(**data)


# ── Targets ─────────────────────────────────────────────────────────────

@dataclass
class OutputTarget:
    """One generated artifact and the source directories feeding it."""
    target_id: str
    mode: str
    sources: List[str]
    destination: str
    banner: str = ""
    separator: str = ""
    suffix: str = DEFAULT_SUFFIX
    clear_destination: bool = False
    warning_readme: bool = False
    source_root: str = DEFAULT_SOURCE_ROOT

    @property
    def is_per_file(self) -> bool:
        return self.mode == MODE_PER_FILE

    def source_paths(self, root) -> List[Path]:
        base = Path(root) / self.source_root
        return [base / name for name in self.sources]

    def destination_path(self, root) -> Path:
        return Path(root) / self.destination

    def rendered_banner(self) -> str:
        if not self.banner:
            return ""
        return render_template(self.banner, {
            "source_root": self.source_root,
            "target_id": self.target_id,
        })


@dataclass
class Registry:
    source_root: str = DEFAULT_SOURCE_ROOT
    regenerate_command: str = DEFAULT_REGENERATE_COMMAND
    targets: List[OutputTarget] = field(default_factory=list)

    def get(self, target_id):
        for target in self.targets:
            if target.target_id == target_id:
                return target
        return None


def _build_target(target_id, cfg, source_root, path):
    if not isinstance(cfg, dict):
        raise RegistryError(f"target {target_id!r} must be a mapping",
                            path=str(path), target_id=target_id)
    mode = cfg.get("mode")
    if mode not in VALID_MODES:
        raise RegistryError(
            f"target {target_id!r} has unknown mode {mode!r} (expected one of {list(VALID_MODES)})",
            path=str(path), target_id=target_id,
        )
    sources = cfg.get("sources") or []
    if not isinstance(sources, list) or not sources:
        raise RegistryError(f"target {target_id!r} needs a non-empty sources list",
                            path=str(path), target_id=target_id)
    destination = cfg.get("destination")
    if not destination:
        raise RegistryError(f"target {target_id!r} has no destination",
                            path=str(path), target_id=target_id)

    return OutputTarget(
        target_id=target_id,
        mode=mode,
        sources=[str(s) for s in sources],
        destination=str(destination),
        banner=cfg.get("banner", ""),
        separator=cfg.get("separator", ""),
        suffix=cfg.get("suffix", DEFAULT_SUFFIX),
        clear_destination=bool(cfg.get("clear_destination", False)),
        warning_readme=bool(cfg.get("warning_readme", False)),
        source_root=source_root,
    )


def load_registry(registry_path=None) -> Registry:
    """Load and validate the target registry.

    Raises:
        RegistryError: file missing, unparsable, or a target is malformed.
    """
    path = Path(registry_path) if registry_path else REGISTRY_PATH
    try:
        with open(path, encoding="utf-8") as f:
            raw = yaml.safe_load(f)
    except OSError as exc:
        raise RegistryError(f"reading registry {path}: {exc}", path=str(path)) from exc
    except yaml.YAMLError as exc:
        raise RegistryError(f"parsing registry {path}: {exc}", path=str(path)) from exc

    if not isinstance(raw, dict) or not isinstance(raw.get("targets"), dict):
        raise RegistryError(f"registry {path} has no targets mapping", path=str(path))

    source_root = raw.get("source_root", DEFAULT_SOURCE_ROOT)
    targets = [
        _build_target(target_id, cfg, source_root, path)
        for target_id, cfg in raw["targets"].items()
    ]
    return Registry(
        source_root=source_root,
        regenerate_command=raw.get("regenerate_command", DEFAULT_REGENERATE_COMMAND),
        targets=targets,
    )

