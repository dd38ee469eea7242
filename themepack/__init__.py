"""
themepack package

This package builds the package manifest for a static-site theme: which tracked
files ship with the theme, and the metadata a package manager needs.

Key responsibilities are split across modules:
- `manifest.py`: file inclusion predicate, metadata record, manifest assembly
- `descriptor.py`: load and validate theme metadata from YAML / frontmatter
- `git_files.py`: list tracked files via git or from a supplied listing
- `renderer.py`: serialize a manifest as json, yaml, or a gemspec
- `cli.py`: CLI entrypoint and orchestration (list -> filter -> render)
"""

from __future__ import annotations

__all__ = ["__version__"]

__version__ = "0.1.0"
