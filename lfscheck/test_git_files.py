import os

import pytest
from git.exc import GitCommandError

from lfscheck.errors import GitCommandFailedError, GitLfsMissingError, NotAGitRepositoryError
from lfscheck.git_files import GitFileLister, normalize_paths, open_repo


def test_normalize_paths():
    assert normalize_paths(["a/b.png", "", "  ", "c.png"]) == {"a/b.png", "c.png"}


def test_tracked_files_lists_the_index(git_repo, add_files, repo_root):
    add_files("logo.png", "docs/guide.md", "assets/ünïcode name.png")
    (repo_root / "untracked.png").write_bytes(b"x")

    files = GitFileLister(git_repo).tracked_files()
    assert files == {"logo.png", "docs/guide.md", "assets/ünïcode name.png"}


def test_tracked_files_of_empty_repository(git_repo):
    assert GitFileLister(git_repo).tracked_files() == set()


def test_open_repo_from_subdirectory(git_repo, add_files, repo_root):
    add_files("sub/dir/a.png")
    with open_repo(repo_root / "sub" / "dir") as repo:
        assert GitFileLister(repo).root.resolve() == repo_root.resolve()


def test_open_repo_outside_work_tree(tmp_path):
    outside = tmp_path / "plain"
    outside.mkdir()
    with pytest.raises(NotAGitRepositoryError):
        open_repo(outside)


def test_open_repo_missing_path(tmp_path):
    with pytest.raises(NotAGitRepositoryError):
        open_repo(tmp_path / "does-not-exist")


def test_lfs_files(git_repo, fake_lfs):
    fake_lfs.paths.update({"a.png", "b/c.png"})
    lister = GitFileLister(git_repo)
    assert lister.lfs_available()
    assert lister.lfs_files() == {"a.png", "b/c.png"}


def test_lfs_missing(git_repo, fake_lfs):
    fake_lfs.installed = False
    lister = GitFileLister(git_repo)
    assert not lister.lfs_available()
    with pytest.raises(GitLfsMissingError):
        lister.lfs_files()


def test_lfs_failure_is_reported(git_repo, monkeypatch):
    def failing(self, *args):
        raise GitCommandError(["git", "lfs", *args], 2, b"fatal: something broke")

    monkeypatch.setattr(GitFileLister, "_lfs", failing)
    with pytest.raises(GitCommandFailedError) as e:
        GitFileLister(git_repo).lfs_files()
    assert e.value.status == 2
    assert "something broke" in e.value.message


def test_track_in_lfs_without_paths_does_nothing(git_repo, fake_lfs):
    GitFileLister(git_repo).track_in_lfs([])
    assert fake_lfs.calls == []


@pytest.mark.skipif(os.sep == "\\", reason="backslash is a separator on Windows")
def test_backslash_is_part_of_the_name_on_posix(git_repo, repo_root):
    (repo_root / "odd\\name.png").write_bytes(b"x")
    git_repo.index.add(["odd\\name.png"])
    assert GitFileLister(git_repo).tracked_files() == {"odd\\name.png"}
    assert normalize_paths(["odd\\name.png"]) == {"odd\\name.png"}


def test_track_in_lfs_stages_gitattributes(git_repo, add_files, repo_root, fake_lfs):
    add_files("media/logo.png")
    GitFileLister(git_repo).track_in_lfs(["media/logo.png"])

    assert ("track", "--filename", "media/logo.png") in fake_lfs.calls
    assert "media/logo.png filter=lfs" in (repo_root / ".gitattributes").read_text()
    assert GitFileLister(git_repo).tracked_files() == {"media/logo.png", ".gitattributes"}


def test_track_in_lfs_names_the_failing_step(git_repo, add_files, fake_lfs):
    add_files("a.png")
    with pytest.raises(GitCommandFailedError) as e:
        GitFileLister(git_repo).track_in_lfs(["missing.png"])
    assert e.value.command == "git add --renormalize -- missing.png"


def test_track_in_lfs_reports_lfs_failure(git_repo, add_files, fake_lfs):
    add_files("a.png")
    fake_lfs.installed = False
    with pytest.raises(GitCommandFailedError) as e:
        GitFileLister(git_repo).track_in_lfs(["a.png"])
    assert e.value.command == "git lfs track --filename"
