"""
manifest.py

Responsibility: Decide which tracked files ship with a theme and pair them with
the theme's package metadata.

Rules:
- A path is packaged when it lives under `assets/`, `_includes/`, `_layouts/`
  or `_sass/`, or when its base name is LICENSE/README with an optional
  `.txt`, `.md` or `.markdown` extension. Matching is case-insensitive.
- Selection preserves input order.

This module performs no I/O. Listing files and loading metadata happen elsewhere.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterable, Mapping

_DIR_RE = re.compile(r"^(assets|_(includes|layouts|sass))/", re.IGNORECASE)
_DOC_RE = re.compile(r"(LICENSE|README)(\.(txt|md|markdown))?", re.IGNORECASE)


@dataclass(frozen=True)
class Dependency:
    name: str
    requirement: str


@dataclass(frozen=True)
class ThemeMetadata:
    """Package metadata declared once per theme release."""

    name: str
    version: str
    authors: tuple[str, ...] = ()
    emails: tuple[str, ...] = ()
    summary: str = ""
    description: str = ""
    homepage: str = ""
    license: str = "MIT"
    plugin_type: str = "theme"
    dependencies: tuple[Dependency, ...] = ()
    development_dependencies: tuple[Dependency, ...] = ()

    @property
    def requirements(self) -> Mapping[str, str]:
        return MappingProxyType({d.name: d.requirement for d in self.dependencies})

    @property
    def development_requirements(self) -> Mapping[str, str]:
        return MappingProxyType({d.name: d.requirement for d in self.development_dependencies})


@dataclass(frozen=True)
class Manifest:
    metadata: ThemeMetadata
    files: tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        # Key order is the output order for json/yaml.
        m = self.metadata
        return {
            "name": m.name,
            "version": m.version,
            "authors": list(m.authors),
            "emails": list(m.emails),
            "summary": m.summary,
            "description": m.description,
            "homepage": m.homepage,
            "license": m.license,
            "metadata": {"plugin_type": m.plugin_type},
            "dependencies": dict(m.requirements),
            "development_dependencies": dict(m.development_requirements),
            "files": list(self.files),
        }


def is_packaged_file(path: str) -> bool:
    """
    Return True if `path` belongs in the theme package.

    Paths use `/` separators, as git reports them.
    """
    if _DIR_RE.match(path):
        return True
    base_name = path.rsplit("/", 1)[-1]
    return _DOC_RE.fullmatch(base_name) is not None


def select_files(paths: Iterable[str]) -> list[str]:
    return [p for p in paths if is_packaged_file(p)]


def build_manifest(paths: Iterable[str], metadata: ThemeMetadata) -> Manifest:
    return Manifest(metadata=metadata, files=tuple(select_files(paths)))
