import subprocess
from pathlib import Path

import pytest

from themepack import git_files
from themepack.git_files import GitError, list_tracked_files, read_listing


def test_read_listing_newlines() -> None:
    text = "assets/a.png\n\n_layouts/default.html\r\nREADME.md\n"
    assert read_listing(text) == ["assets/a.png", "_layouts/default.html", "README.md"]


def test_read_listing_nul_separated() -> None:
    text = "assets/a b.png\x00_config.yml\x00README.md\x00"
    assert read_listing(text) == ["assets/a b.png", "_config.yml", "README.md"]


def test_read_listing_empty() -> None:
    assert read_listing("") == []


def test_list_tracked_files_runs_git_ls_files(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    calls = []

    def fake_run(cmd, **kwargs):
        calls.append((cmd, kwargs["cwd"]))
        return subprocess.CompletedProcess(cmd, 0, stdout=b"_sass/a.scss\x00Gemfile\x00", stderr=b"")

    monkeypatch.setattr(git_files.subprocess, "run", fake_run)

    assert list_tracked_files(tmp_path) == ["_sass/a.scss", "Gemfile"]
    assert calls == [(["git", "ls-files", "-z"], str(tmp_path))]


def test_list_tracked_files_surfaces_git_failure(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_run(cmd, **kwargs):
        raise subprocess.CalledProcessError(128, cmd, output=b"", stderr=b"fatal: not a git repository")

    monkeypatch.setattr(git_files.subprocess, "run", fake_run)

    with pytest.raises(GitError, match="not a git repository"):
        list_tracked_files(tmp_path)


def test_list_tracked_files_without_git(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_run(cmd, **kwargs):
        raise FileNotFoundError("git")

    monkeypatch.setattr(git_files.subprocess, "run", fake_run)

    with pytest.raises(GitError, match="git executable not found"):
        list_tracked_files(tmp_path)


def test_list_tracked_files_missing_directory(tmp_path: Path) -> None:
    with pytest.raises(GitError, match="not found"):
        list_tracked_files(tmp_path / "missing")


def test_list_tracked_files_keeps_non_utf8_names(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_run(cmd, **kwargs):
        return subprocess.CompletedProcess(cmd, 0, stdout=b"assets/logo-\xff.png\x00Gemfile\x00", stderr=b"")

    monkeypatch.setattr(git_files.subprocess, "run", fake_run)

    files = list_tracked_files(tmp_path)
    assert files == ["assets/logo-\udcff.png", "Gemfile"]
    assert files[0].encode("utf-8", "surrogateescape") == b"assets/logo-\xff.png"
