"""
cli.py

Responsibility: CLI entrypoint for themepack.

High-level flow (shared by every command):
1) List tracked files -> `git_files.py` (git work tree, a listing file, or stdin)
2) Keep the packaged subset -> `manifest.py`
3) Load theme metadata -> `descriptor.py` (manifest/gemspec only)
4) Serialize -> `renderer.py`, write to stdout or `--output`

This module orchestrates; each concern stays in its own module.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from themepack.descriptor import DescriptorError, load_metadata
from themepack.git_files import GitError, list_tracked_files, read_listing
from themepack.logging import configure_logging, get_logger
from themepack.manifest import build_manifest, select_files
from themepack.renderer import FORMATS, RenderError, render_manifest

log = get_logger(__name__)


class CLIError(RuntimeError):
    pass


def _tracked_files(args: argparse.Namespace) -> list[str]:
    if args.listing is None:
        return list_tracked_files(args.repo)
    if args.listing == "-":
        try:
            return read_listing(sys.stdin.read())
        except UnicodeDecodeError as e:
            raise CLIError(f"Cannot read listing from stdin: {e}") from e
    listing = Path(args.listing)
    if not listing.is_file():
        raise CLIError(f"Listing file does not exist: {listing}")
    try:
        text = listing.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise CLIError(f"Cannot read listing {listing}: {e}") from e
    return read_listing(text)


def _emit(text: str, output: str | None) -> None:
    # Tracked paths may carry undecodable bytes as surrogates; write them back unchanged.
    if output is None:
        buffer = getattr(sys.stdout, "buffer", None)
        if buffer is None:
            sys.stdout.write(text)
            return
        sys.stdout.flush()
        buffer.write(text.encode("utf-8", "surrogateescape"))
        buffer.flush()
        return
    out_path = Path(output)
    try:
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(text, encoding="utf-8", errors="surrogateescape", newline="\n")
    except OSError as e:
        raise CLIError(f"Cannot write output {out_path}: {e}") from e
    log.info("wrote output", path=str(out_path))


def files_cmd(args: argparse.Namespace) -> int:
    tracked = _tracked_files(args)
    selected = select_files(tracked)
    log.info("selected packaged files", tracked=len(tracked), selected=len(selected))
    _emit("".join(f"{p}\n" for p in selected), args.output)
    return 0


def _render_cmd(args: argparse.Namespace, fmt: str) -> int:
    metadata = load_metadata(args.descriptor)
    tracked = _tracked_files(args)
    manifest = build_manifest(tracked, metadata)
    log.info(
        "built manifest",
        name=metadata.name,
        version=metadata.version,
        tracked=len(tracked),
        selected=len(manifest.files),
    )
    _emit(render_manifest(manifest, fmt, template_path=getattr(args, "template", None)), args.output)
    return 0


def manifest_cmd(args: argparse.Namespace) -> int:
    return _render_cmd(args, args.format)


def gemspec_cmd(args: argparse.Namespace) -> int:
    return _render_cmd(args, "gemspec")


def _add_source_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--repo", default=".", help="Git work tree to list tracked files from (default: .)")
    p.add_argument(
        "--listing",
        default=None,
        help="Read paths from this file instead of git ('-' for stdin; newline or NUL separated)",
    )
    p.add_argument("-o", "--output", default=None, help="Write output to this file instead of stdout")


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="themepack", description="themepack - package manifests for site themes")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    p.add_argument("-q", "--quiet", action="store_true", help="Only log warnings and errors")
    p.add_argument("--json-log", action="store_true", help="Log JSON lines instead of console output")
    sub = p.add_subparsers(dest="command", required=True)

    f = sub.add_parser("files", help="Print the tracked files that ship with the theme")
    _add_source_args(f)
    f.set_defaults(func=files_cmd)

    m = sub.add_parser("manifest", help="Print the full manifest (metadata + files)")
    _add_source_args(m)
    m.add_argument("--descriptor", default="theme.yml", help="Theme descriptor file (default: theme.yml)")
    m.add_argument("--format", default="json", choices=[name for name in FORMATS if name != "gemspec"], help="Output format")
    m.set_defaults(func=manifest_cmd)

    g = sub.add_parser("gemspec", help="Render a gemspec for the theme")
    _add_source_args(g)
    g.add_argument("--descriptor", default="theme.yml", help="Theme descriptor file (default: theme.yml)")
    g.add_argument("--template", default=None, help="Jinja2 gemspec template (default: bundled template)")
    g.set_defaults(func=gemspec_cmd)

    return p


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    configure_logging(verbose=args.verbose, quiet=args.quiet, json_log=args.json_log)
    try:
        return int(args.func(args))
    except (CLIError, DescriptorError, GitError, RenderError) as e:
        log.error("themepack failed", command=args.command, error=str(e))
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
