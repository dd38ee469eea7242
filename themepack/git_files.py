"""
git_files.py

Responsibility: Produce the list of repository-tracked paths that the manifest
filters.

Paths come either from `git ls-files -z` in a working tree, or from a listing
supplied by the caller (a file or stdin).
"""

from __future__ import annotations

import subprocess
from pathlib import Path

from themepack.logging import get_logger

log = get_logger(__name__)


class GitError(RuntimeError):
    pass


def _split_listing(raw: str, sep: str) -> list[str]:
    return [p for p in (part.strip("\r") for part in raw.split(sep)) if p.strip()]


def read_listing(text: str) -> list[str]:
    """
    Parse a pre-supplied listing.

    NUL-separated when any NUL is present (`git ls-files -z` output),
    otherwise one path per line. Blank entries are dropped.
    """
    if "\x00" in text:
        return _split_listing(text, "\x00")
    return _split_listing(text, "\n")


def list_tracked_files(repo_root: str | Path = ".") -> list[str]:
    """
    Return tracked paths in `repo_root`, in git's order.

    Raises GitError if git is unavailable or `repo_root` is not a work tree.
    """
    root = Path(repo_root)
    if not root.is_dir():
        raise GitError(f"Repository directory not found: {root}")
    cmd = ["git", "ls-files", "-z"]
    try:
        proc = subprocess.run(cmd, cwd=str(root), check=True, stdout=subprocess.PIPE, stderr=subprocess.PIPE)
    except FileNotFoundError as e:
        raise GitError(f"git executable not found (needed to list files in {root})") from e
    except subprocess.CalledProcessError as e:
        stderr = (e.stderr or b"").decode("utf-8", "replace")
        raise GitError(f"Command failed: {' '.join(cmd)} (in {root})\n\n{stderr}") from e

    # Git stores path bytes verbatim; undecodable bytes survive as surrogates.
    files = read_listing(proc.stdout.decode("utf-8", "surrogateescape"))
    log.debug("listed tracked files", repo=str(root), count=len(files))
    return files
