# CUI // SP-CTI
"""Behave environment configuration for rulegen BDD tests."""

import os
import shutil
import sys
import tempfile


def before_all(context):
    """Set up global test context."""
    # Ensure project root is in path
    project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    if project_root not in sys.path:
        sys.path.insert(0, project_root)
    context.project_root = project_root


def before_scenario(context, scenario):
    """Give each scenario its own scratch directory."""
    context.result = None
    context.error = None
    context.snapshots = []
    context.work_dir = tempfile.mkdtemp(prefix="rulegen-bdd-")


def after_scenario(context, scenario):
    """Remove the scratch directory."""
    shutil.rmtree(context.work_dir, ignore_errors=True)
