#!/usr/bin/env python3
# CUI // SP-CTI
"""Drop a "do not edit" README into generated output directories."""

import logging
from pathlib import Path

from rulegen.dx.rule_transform import encoded_size, ensure_trailing_newline, write_output
from rulegen.dx.target_registry import (
    DEFAULT_REGENERATE_COMMAND,
    DEFAULT_SOURCE_ROOT,
    render_template,
)

logger = logging.getLogger(__name__)

README_NAME = "README.md"

TEMPLATE_WARNING_README = r"""# Generated Files - Do Not Edit

⚠️ **WARNING**: All files in this directory are automatically generated.

**DO NOT EDIT** these files directly. Instead, edit the source files in:
- `{{ source_root }}/shared/`

To regenerate these files, run:
```bash
{{ command }}
```

Any changes made directly to files in this directory will be lost when the rules are regenerated.
"""


def render_warning_readme(source_root=DEFAULT_SOURCE_ROOT, command=DEFAULT_REGENERATE_COMMAND):
    return ensure_trailing_newline(render_template(TEMPLATE_WARNING_README, {
        "source_root": source_root,
        "command": command,
    }))


def add_warning_files(directories, source_root=DEFAULT_SOURCE_ROOT,
                      command=DEFAULT_REGENERATE_COMMAND):
    """Write README.md into each generated directory.

    Returns:
        list of {path, size_bytes}
    """
    content = render_warning_readme(source_root=source_root, command=command)
    results = []
    for directory in directories:
        path = write_output(Path(directory) / README_NAME, content)
        logger.debug("warning README written to %s", path)
        results.append({"path": str(path), "size_bytes": encoded_size(content)})
    return results
