"""
* [x] Binary assets (images by default) must be stored in Git LFS rather than in
      the regular object database, so that clones stay small. Directories holding
      data that has to stay in plain git (e.g. assets embedded at build time)
      can be exempted by path prefix or by gitignore-style pattern.
"""
from __future__ import annotations

from typing import Dict, Iterable, List, Sequence, Set
import logging

import pathspec

from lfscheck.checks.base import Issue, IssueType, RepoCheck
from lfscheck.config import Config
from lfscheck.git_files import GitFileLister

logger = logging.getLogger(__name__)

E_NOT_IN_LFS = IssueType(
    "0f3c6a52-8d1e-4b7a-9c25-6e41d2b8a7f3",
    "Found binary file with extension .{extension} not tracked by git LFS. See CONTRIBUTING.md")


def is_excluded(path: str, exclude_paths: Sequence[str], spec: pathspec.PathSpec | None = None) -> bool:
    # Plain prefix test: "data" also exempts "data_old/x.png"
    if any(path.startswith(prefix) for prefix in exclude_paths):
        return True
    return spec is not None and spec.match_file(path)


def find_untracked_binaries(
    tracked: Iterable[str],
    lfs_tracked: Iterable[str],
    extensions: Sequence[str],
    exclude_paths: Sequence[str],
    exclude_patterns: Sequence[str] = (),
) -> Dict[str, List[str]]:
    """
    Returns, per extension, the sorted paths that git tracks outside LFS and
    outside the exempted paths. Extensions without violations are left out.
    """
    spec = pathspec.PathSpec.from_lines(pathspec.patterns.GitWildMatchPattern, exclude_patterns) if exclude_patterns else None

    candidates: Set[str] = {p for p in tracked if not is_excluded(p, exclude_paths, spec)}
    candidates -= set(lfs_tracked)

    result: Dict[str, List[str]] = {}
    for ext in extensions:
        suffix = f".{ext}"
        matches = sorted(p for p in candidates if p.endswith(suffix))
        if matches:
            result[ext] = matches
    return result


class LfsTrackingCheck(RepoCheck):
    """Flags watched binary files that are committed without Git LFS."""

    def check(self, files: GitFileLister, config: Config) -> List[Issue]:
        tracked = files.tracked_files()
        lfs_tracked = files.lfs_files()

        violations = find_untracked_binaries(
            tracked,
            lfs_tracked,
            config.extensions,
            config.exclude_paths,
            config.exclude_patterns,
        )

        issues: List[Issue] = []
        for ext, paths in violations.items():
            logger.debug(f".{ext}: {len(paths)} file(s) outside LFS")
            for path in paths:
                issue = E_NOT_IN_LFS.make(extension=ext).at(path)
                if config.fix:
                    issue.fixable(lambda path=path: files.track_in_lfs([path]))
                issues.append(issue)
        return issues
