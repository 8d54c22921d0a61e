#!/usr/bin/env python3
# CUI // SP-CTI
"""rulegen — Structured Exception Hierarchy.

Every failure during a generation run is fatal. Library code raises one of
these; only the CLI entry point catches them, reports the stage prefix and
exits non-zero.

Usage:
    from rulegen.errors import OutputWriteError

    raise OutputWriteError(f"writing {path}: {exc}", path=str(path)) from exc
"""


class RulegenError(Exception):
    """Base exception for all rule generation errors.

    Attributes:
        path: Filesystem path involved in the failure (if any).
        stage: Name of the generation step that failed, set by the
            orchestrator (e.g. "generating claude rules").
    """

    def __init__(self, message: str, path: str = ""):
        super().__init__(message)
        self.path = path
        self.stage = ""

    def __str__(self) -> str:
        message = super().__str__()
        if self.stage:
            return f"{self.stage}: {message}"
        return message


class RepoRootNotFoundError(RulegenError):
    """No ancestor of the start directory contains a .git marker."""

    def __init__(self, message: str = "not in a git repository", path: str = ""):
        super().__init__(message, path=path)


class SourceReadError(RulegenError):
    """A source markdown document could not be read."""


class OutputWriteError(RulegenError):
    """A generated file could not be written or replaced."""


class DirectoryCreateError(RulegenError):
    """An output directory could not be created or cleared."""


class RegistryError(RulegenError):
    """The built-in target registry is missing or malformed."""

    def __init__(self, message: str, path: str = "", target_id: str = ""):
        super().__init__(message, path=path)
        self.target_id = target_id
