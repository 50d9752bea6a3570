from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Set

import pytest
from git import Repo

from lfscheck.git_files import GitFileLister


@dataclass
class FakeLfs:
    paths: Set[str] = field(default_factory=set)
    installed: bool = True
    calls: List[tuple] = field(default_factory=list)


@pytest.fixture(autouse=True)
def no_github_env(monkeypatch):
    """Tests must not pick the GitHub output format up from the CI they run in."""
    monkeypatch.delenv("GITHUB_ACTIONS", raising=False)


@pytest.fixture
def git_repo(tmp_path) -> Repo:
    repo = Repo.init(tmp_path / "repo")
    with repo.config_writer() as cw:
        cw.set_value("user", "name", "Test User")
        cw.set_value("user", "email", "test@example.com")
    yield repo
    repo.close()


@pytest.fixture
def repo_root(git_repo) -> Path:
    return Path(git_repo.working_tree_dir)


@pytest.fixture
def add_files(git_repo, repo_root) -> Callable[..., None]:
    """Writes the given repository-relative files and stages them."""
    def add(*paths: str, content: bytes = b"\x89PNG\r\n\x1a\n") -> None:
        for rel in paths:
            target = repo_root / rel
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(content)
        git_repo.git.add("--", *paths)
    return add


@pytest.fixture
def fake_lfs(monkeypatch) -> FakeLfs:
    """
    Stands in for git-lfs, which is usually not installed where tests run.
    Add paths to `fake_lfs.paths` to mark them as stored in LFS.
    """
    from git.exc import GitCommandError

    lfs = FakeLfs()

    def fake(self, *args: str) -> str:
        lfs.calls.append(args)
        if not lfs.installed:
            raise GitCommandError(["git", "lfs", *args], 1, b"git: 'lfs' is not a git command. See 'git --help'.")
        match args:
            case ("version",):
                return "git-lfs/3.4.0 (GitHub; linux amd64; go 1.21)"
            case ("ls-files", "-n"):
                return "\n".join(sorted(lfs.paths))
            case ("track", "--filename", *paths):
                with (self.root / ".gitattributes").open("a", encoding="utf-8") as f:
                    for path in paths:
                        f.write(f"{path} filter=lfs diff=lfs merge=lfs -text\n")
                return ""
        raise AssertionError(f"Unexpected git lfs call: {args}")

    monkeypatch.setattr(GitFileLister, "_lfs", fake)
    return lfs
