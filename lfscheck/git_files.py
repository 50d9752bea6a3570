from __future__ import annotations
from typing import Iterable, List, Set
from pathlib import Path
import logging
import os

from git import Repo
from git.exc import GitCommandError, GitCommandNotFound, InvalidGitRepositoryError, NoSuchPathError

from lfscheck.errors import GitCommandFailedError, GitLfsMissingError, NotAGitRepositoryError

logger = logging.getLogger(__name__)


def normalize_paths(entries: Iterable[str]) -> Set[str]:
    """
    Turns raw listing entries into repository-relative, '/'-separated paths.
    A backslash is an ordinary filename character outside Windows.
    """
    if os.sep == "\\":
        return {entry.replace("\\", "/") for entry in entries if entry.strip()}
    return {entry for entry in entries if entry.strip()}


def open_repo(path: Path) -> Repo:
    """
    Opens the git work tree that contains `path`.
    """
    try:
        repo = Repo(path, search_parent_directories=True)
    except (InvalidGitRepositoryError, NoSuchPathError):
        raise NotAGitRepositoryError(path)

    if repo.bare:
        repo.close()
        raise NotAGitRepositoryError(path)
    return repo


class GitFileLister:
    """
    Lists the files git knows about, and the subset that git-lfs manages.
    """
    def __init__(self, repo: Repo) -> None:
        self.repo = repo

    @property
    def root(self) -> Path:
        if self.repo.working_tree_dir is None:
            raise ValueError("Bare repositories have no work tree")
        return Path(self.repo.working_tree_dir)

    def _lfs(self, *args: str) -> str:
        return self.repo.git.lfs(*args)

    def tracked_files(self) -> Set[str]:
        # -z keeps non-ASCII and quoted names as-is (no core.quotepath escaping)
        try:
            output = self.repo.git.ls_files("-z")
        except GitCommandError as e:
            raise GitCommandFailedError("git ls-files", e.status, str(e.stderr))

        files = normalize_paths(output.split("\0"))
        logger.debug(f"git ls-files: {len(files)} tracked files")
        return files

    def lfs_available(self) -> bool:
        try:
            version = self._lfs("version")
        except (GitCommandError, GitCommandNotFound):
            return False
        logger.debug(f"Using {version.strip()}")
        return True

    def lfs_files(self) -> Set[str]:
        try:
            output = self._lfs("ls-files", "-n")
        except GitCommandNotFound as e:
            raise GitLfsMissingError(str(e))
        except GitCommandError as e:
            stderr = str(e.stderr)
            # git reports unknown subcommands as "'lfs' is not a git command"
            if "is not a git command" in stderr:
                raise GitLfsMissingError()
            raise GitCommandFailedError("git lfs ls-files -n", e.status, stderr)

        files = normalize_paths(output.splitlines())
        logger.debug(f"git lfs ls-files: {len(files)} LFS files")
        return files

    def track_in_lfs(self, paths: List[str]) -> None:
        """
        Moves already-committed files into LFS: adds an exact-path rule to
        .gitattributes and re-stages the files so the LFS clean filter applies.
        """
        if not paths:
            return
        try:
            self._lfs("track", "--filename", *paths)
        except GitCommandNotFound as e:
            raise GitLfsMissingError(str(e))
        except GitCommandError as e:
            raise GitCommandFailedError("git lfs track --filename", e.status, str(e.stderr))

        self._add("--renormalize", "--", *paths)
        self._add("--", ".gitattributes")

    def _add(self, *args: str) -> None:
        try:
            self.repo.git(literal_pathspecs=True).add(*args)
        except GitCommandError as e:
            raise GitCommandFailedError(f"git add {' '.join(args)}", e.status, str(e.stderr))
