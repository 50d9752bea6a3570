import abc
from typing import Any, List, Mapping, Callable, Set, Tuple
from dataclasses import dataclass, field
from pathlib import PurePosixPath
import enum
import uuid

from lfscheck.config import Config
from lfscheck.git_files import GitFileLister


@dataclass(frozen=True)
class FileLocation:
    # Repository-relative, as git prints it
    path: PurePosixPath


class Severity(enum.Enum):
    """
    Severity levels for checks.
    """
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class IssueType:
    """
    Represents a type of issue.
    """
    id: str
    message: str
    severity: Severity = Severity.ERROR

    def __post_init__(self):
        # Verify that the ID is a valid UUID
        if not isinstance(self.id, str):
            raise ValueError(f"Invalid ID: {self.id}")
        try:
            uuid.UUID(self.id)
        except ValueError:
            raise ValueError(f"Invalid UUID: {self.id}")

    def make(self, **kwargs) -> 'Issue':
        """
        Creates an Issue of this type.
        """
        return Issue(self, data=kwargs)

    def at(self, path: str | PurePosixPath) -> 'Issue':
        """
        Returns an Issue with the specified path.
        """
        return Issue(self).at(path)


@dataclass
class Issue:
    """
    Represents an issue found during a check.
    """
    issue_type: IssueType
    data: Mapping[str, Any] | None = None
    location: FileLocation | None = None
    fix: Callable[[], None] | None = None

    @property
    def message(self) -> str:
        return self.issue_type.message.format(**(self.data or {}))

    def fixable(self, fix: Callable[[], None]) -> 'Issue':
        """
        Marks the issue as fixable.
        """
        self.fix = fix
        return self

    def at(self, path: str | PurePosixPath) -> 'Issue':
        """
        Returns an Issue with the specified path.
        """
        path = PurePosixPath(path)
        if self.location is not None and self.location.path != path:
            raise ValueError("Cannot change the path of an existing issue.")
        self.location = FileLocation(path)
        return self


@dataclass
class IssueList:
    """
    Represents a list of issues found during a check.
    """
    issues: List[Issue] = field(default_factory=list)
    _seen: Set[Tuple[str, FileLocation | None, str]] = field(default_factory=set, repr=False, compare=False)

    def __post_init__(self):
        self._seen.update(self._key(i) for i in self.issues)

    @staticmethod
    def _key(issue: Issue) -> Tuple[str, FileLocation | None, str]:
        return (issue.issue_type.id, issue.location, repr(sorted((issue.data or {}).items())))

    def append(self, issue: Issue) -> None:
        """
        Adds an issue to the list, skipping exact duplicates.
        """
        key = self._key(issue)
        if key in self._seen:
            return
        self._seen.add(key)
        self.issues.append(issue)

    def __iter__(self):
        return iter(self.issues)

    def __len__(self) -> int:
        return len(self.issues)

    def extend(self, issues: List[Issue] | 'IssueList') -> None:
        for issue in issues:
            self.append(issue)

    @property
    def failed(self) -> bool:
        return any(i.issue_type.severity == Severity.ERROR for i in self.issues)


class RepoCheck(abc.ABC):
    @abc.abstractmethod
    def check(self, files: GitFileLister, config: Config) -> List[Issue]:
        raise NotImplementedError()
