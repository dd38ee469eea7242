"""
descriptor.py

Responsibility: Load a theme descriptor into a validated `ThemeMetadata`.

Two input shapes are accepted:
- A YAML file (`theme.yml`) whose top-level mapping holds the metadata.
- A markdown file that begins with YAML frontmatter delimited by '---'.

Runtime dependency ranges must use the pessimistic form `~> MAJOR.MINOR`.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any

import yaml

from themepack.logging import get_logger
from themepack.manifest import Dependency, ThemeMetadata

log = get_logger(__name__)

_RANGE_RE = re.compile(r"~>\s*\d+\.\d+")
_MARKDOWN_SUFFIXES = {".md", ".markdown"}


class DescriptorError(ValueError):
    pass


def _parse_yaml_frontmatter(text: str) -> tuple[dict[str, Any] | None, str]:
    """
    If the markdown begins with YAML frontmatter delimited by '---', parse it.
    Returns (frontmatter_dict_or_none, remaining_markdown_text).
    """
    if not text.startswith("---\n"):
        return None, text

    end = text.find("\n---\n", 4)
    if end == -1:
        raise DescriptorError("YAML frontmatter starts with '---' but no closing '---' was found.")

    fm_text = text[4:end]
    rest = text[end + len("\n---\n") :]
    data = _safe_load(fm_text)
    return data, rest


def _safe_load(text: str) -> dict[str, Any]:
    try:
        data = yaml.safe_load(text) or {}
    except yaml.YAMLError as e:
        raise DescriptorError(f"Descriptor is not valid YAML: {e}") from e
    if not isinstance(data, dict):
        raise DescriptorError("Descriptor must be a mapping/object at the top level.")
    return data


def _string_list(data: dict[str, Any], *keys: str) -> tuple[str, ...]:
    for key in keys:
        raw = data.get(key)
        if raw is None:
            continue
        if isinstance(raw, str):
            raw = [raw]
        if not isinstance(raw, list):
            raise DescriptorError(f"`{key}` must be a string or a list of strings.")
        return tuple(str(v).strip() for v in raw if str(v).strip())
    return ()


def _dependencies(data: dict[str, Any], key: str, *, pinned: bool) -> tuple[Dependency, ...]:
    raw = data.get(key) or {}
    if not isinstance(raw, dict):
        raise DescriptorError(f"`{key}` must be a mapping of name to version range.")

    deps: list[Dependency] = []
    for name, requirement in raw.items():
        name = str(name).strip()
        requirement = str(requirement or "").strip()
        if not name or not requirement:
            raise DescriptorError(f"`{key}` entries need both a name and a version range.")
        if pinned and not _RANGE_RE.fullmatch(requirement):
            raise DescriptorError(f"Dependency {name!r} must be pinned as '~> MAJOR.MINOR', got {requirement!r}.")
        deps.append(Dependency(name=name, requirement=requirement))
    return tuple(deps)


def parse_metadata(data: dict[str, Any]) -> ThemeMetadata:
    """
    Validate an already-loaded descriptor mapping.

    Required keys: `name`, `version`. Everything else has a default.
    """
    name = str(data.get("name") or "").strip()
    if not name:
        raise DescriptorError("Descriptor must define `name`.")
    version = str(data.get("version") or "").strip()
    if not version:
        raise DescriptorError("Descriptor must define `version`.")

    homepage = str(data.get("homepage") or "").strip()
    if homepage and not homepage.startswith(("http://", "https://")):
        raise DescriptorError(f"`homepage` must be an http(s) URL, got {homepage!r}.")

    return ThemeMetadata(
        name=name,
        version=version,
        authors=_string_list(data, "authors", "author"),
        emails=_string_list(data, "emails", "email"),
        summary=str(data.get("summary") or "").strip(),
        description=str(data.get("description") or "").strip(),
        homepage=homepage,
        license=str(data.get("license") or "MIT").strip(),
        plugin_type=str(data.get("plugin_type") or "theme").strip(),
        dependencies=_dependencies(data, "dependencies", pinned=True),
        development_dependencies=_dependencies(data, "development_dependencies", pinned=False),
    )


def load_metadata(descriptor_path: str | Path) -> ThemeMetadata:
    path = Path(descriptor_path)
    if not path.is_file():
        raise DescriptorError(f"Descriptor file does not exist or is not a file: {path}")
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise DescriptorError(f"Cannot read descriptor {path}: {e}") from e

    if path.suffix.lower() in _MARKDOWN_SUFFIXES:
        data, _rest = _parse_yaml_frontmatter(text)
        if data is None:
            raise DescriptorError(f"Markdown descriptor has no YAML frontmatter: {path}")
    else:
        data = _safe_load(text)

    metadata = parse_metadata(data)
    log.debug("loaded descriptor", path=str(path), name=metadata.name, version=metadata.version)
    return metadata
