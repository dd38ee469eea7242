"""
renderer.py

Responsibility: Serialize a `Manifest` into the text a package manager consumes.

Formats:
- json: `Manifest.to_dict()` with 2-space indentation.
- yaml: the same mapping through `yaml.safe_dump`, key order preserved.
- gemspec: a Jinja2 template rendered with the manifest mapping as context.

Output is deterministic for a given manifest and always ends with a newline.
This module does not know about git, descriptors, or CLI parsing.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml
from jinja2 import Environment, StrictUndefined

from themepack.manifest import Manifest

FORMATS = ("json", "yaml", "gemspec")

DEFAULT_GEMSPEC_TEMPLATE = Path(__file__).resolve().parent / "templates" / "theme.gemspec.j2"


class RenderError(RuntimeError):
    pass


def ruby_literal(value: Any) -> str:
    """
    Render a string or a list of strings as a Ruby double-quoted literal.
    """
    if isinstance(value, (list, tuple)):
        return "[" + ", ".join(ruby_literal(v) for v in value) + "]"
    text = str(value)
    escaped = (
        text.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("#", "\\#")
        .replace("\n", "\\n")
    )
    return f'"{escaped}"'


def _environment() -> Environment:
    env = Environment(
        autoescape=False,
        undefined=StrictUndefined,
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["rb"] = ruby_literal
    return env


def render_gemspec(manifest: Manifest, template_path: str | Path | None = None) -> str:
    path = Path(template_path) if template_path is not None else DEFAULT_GEMSPEC_TEMPLATE
    if not path.is_file():
        raise RenderError(f"Template file not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        template = _environment().from_string(text)
        return template.render(**manifest.to_dict())
    except Exception as e:  # noqa: BLE001 - surface as RenderError
        raise RenderError(f"Failed rendering template file: {path}") from e


def render_manifest(manifest: Manifest, fmt: str = "json", *, template_path: str | Path | None = None) -> str:
    if fmt == "json":
        return json.dumps(manifest.to_dict(), indent=2, ensure_ascii=False) + "\n"
    if fmt == "yaml":
        return yaml.safe_dump(manifest.to_dict(), sort_keys=False, allow_unicode=True, default_flow_style=False)
    if fmt == "gemspec":
        return render_gemspec(manifest, template_path)
    raise RenderError(f"Unknown output format: {fmt!r} (expected one of {', '.join(FORMATS)})")
