from __future__ import annotations
from typing import Dict, List
from pathlib import Path
import logging

from lfscheck.checks.base import Issue, IssueList, RepoCheck, Severity
from lfscheck.config import Config, OutputFormat, load_config
from lfscheck.errors import GitLfsMissingError
from lfscheck.git_files import GitFileLister, open_repo
from lfscheck.messages import annotate, error, info, success, warning

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_VIOLATIONS = 1
EXIT_TOOL_ERROR = 2

ANNOTATION_LEVELS: Dict[Severity, str] = {
    Severity.INFO: "notice",
    Severity.WARNING: "warning",
    Severity.ERROR: "error",
}


def all_checks() -> Dict[str, RepoCheck]:
    from lfscheck.checks.lfs_tracking import LfsTrackingCheck

    return {
        "lfs_tracking": LfsTrackingCheck(),
    }


def report(issue: Issue | IssueList | List, output_format: OutputFormat) -> None:
    if isinstance(issue, IssueList) or isinstance(issue, list):
        for i in issue:
            report(i, output_format)
        return

    if output_format == OutputFormat.GITHUB:
        file = str(issue.location.path) if issue.location is not None else None
        annotate(ANNOTATION_LEVELS[issue.issue_type.severity], issue.message, file=file)
        return

    msg = ''
    if issue.location is not None:
        msg += str(issue.location.path)
        msg += ' > '
    else:
        msg += '> '

    msg += issue.message
    msg += " (fixable)" if issue.fix else ""

    error(msg)


def run_checks(files: GitFileLister, config: Config, enabled_checks: List[str] | None = None) -> IssueList:
    """
    Runs the selected checks against one work tree and applies fixes when the
    config asks for them.
    """
    checks = all_checks()
    for check_name in enabled_checks or []:
        if check_name not in checks:
            raise ValueError(f"Unknown check: {check_name}")
    check_set = set(enabled_checks) if enabled_checks else set(checks.keys())

    issues = IssueList()
    for name, check in checks.items():
        if name not in check_set:
            continue
        logger.debug(f"Running check {name}")
        issues.extend(check.check(files, config))

    report(issues, config.output_format)

    if config.fix:
        for issue in issues:
            if issue.fix is not None:
                info(f"Fixing {issue.location.path if issue.location else ''}")
                issue.fix()

    return issues


def check_main(
    path: Path,
    config_path: Path | None = None,
    extensions: List[str] | None = None,
    exclude_paths: List[str] | None = None,
    fix: bool | None = None,
    output_format: OutputFormat | None = None,
) -> int:
    """
    Checks the work tree containing `path` and returns the process exit code.
    Command line values replace the ones from the config file.
    """
    with open_repo(path) as repo:
        files = GitFileLister(repo)
        config = load_config(files.root, config_path).with_overrides(
            extensions=extensions,
            exclude_paths=exclude_paths,
            fix=fix,
            output_format=output_format,
        )

        if not files.lfs_available():
            raise GitLfsMissingError()

        logger.debug("\n".join(config.describe()))
        issues = run_checks(files, config)

    if not issues.failed:
        if config.output_format == OutputFormat.TEXT:
            success(f"All {', '.join('.' + e for e in config.extensions)} files are tracked by git LFS")
        return EXIT_OK

    if config.fix:
        warning(f"Moved {len(issues)} file(s) to git LFS. Commit the result and run the check again.")
    else:
        error(f"{len(issues)} file(s) must be tracked by git LFS. See CONTRIBUTING.md")
    return EXIT_VIOLATIONS
