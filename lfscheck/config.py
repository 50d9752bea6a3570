from typing import Any, Dict, List, Optional
import dataclasses
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
import os

import yaml

from lfscheck.errors import ConfigError

CONFIG_FILE_NAME = ".lfscheck.yml"

DEFAULT_EXTENSIONS: List[str] = ["png"]

################################################################################
# Output format
################################################################################

class OutputFormat(Enum):
    TEXT = 'text'
    GITHUB = 'github'

    @classmethod
    def detect(cls) -> 'OutputFormat':
        # Set by the GitHub runner for every step
        if os.environ.get("GITHUB_ACTIONS") == "true":
            return cls.GITHUB
        return cls.TEXT

################################################################################
# Config
################################################################################

@dataclass
class Config:
    extensions: List[str] = field(default_factory=lambda: list(DEFAULT_EXTENSIONS))
    exclude_paths: List[str] = field(default_factory=list)
    exclude_patterns: List[str] = field(default_factory=list)
    fix: bool = False
    output_format: OutputFormat = OutputFormat.TEXT
    source: Path | None = None

    def __post_init__(self):
        self.extensions = normalize_extensions(self.extensions)
        self.exclude_paths = check_exclude_paths(self.exclude_paths)

    def with_overrides(
        self,
        extensions: Optional[List[str]] = None,
        exclude_paths: Optional[List[str]] = None,
        fix: Optional[bool] = None,
        output_format: Optional[OutputFormat] = None,
    ) -> 'Config':
        """
        Returns a copy where every non-empty override replaces the file value.
        """
        changes: Dict[str, Any] = {}
        if extensions:
            changes["extensions"] = list(extensions)
        if exclude_paths:
            changes["exclude_paths"] = list(exclude_paths)
        if fix is not None:
            changes["fix"] = fix
        if output_format is not None:
            changes["output_format"] = output_format
        return dataclasses.replace(self, **changes)

    def describe(self) -> List[str]:
        return [
            f"config file:      {self.source if self.source else '(none, using defaults)'}",
            f"extensions:       {', '.join('.' + e for e in self.extensions)}",
            f"exclude_paths:    {', '.join(self.exclude_paths) or '(none)'}",
            f"exclude_patterns: {', '.join(self.exclude_patterns) or '(none)'}",
            f"output format:    {self.output_format.value}",
        ]


def normalize_extensions(extensions: List[str]) -> List[str]:
    result: List[str] = []
    for ext in extensions:
        if not isinstance(ext, str):
            raise ConfigError(f"Extension must be a string, got {type(ext).__name__}: {ext!r}")
        ext = ext.strip().lstrip('.')
        if not ext:
            raise ConfigError("Extension must not be empty")
        if ext not in result:
            result.append(ext)
    return result


def check_exclude_paths(exclude_paths: List[str]) -> List[str]:
    # An empty prefix matches every path
    for prefix in exclude_paths:
        if not prefix.strip():
            raise ConfigError("Excluded path prefix must not be empty")
    return list(exclude_paths)


def _string_list(data: Dict[str, Any], key: str, path: Path) -> List[str] | None:
    if key not in data:
        return None
    value = data[key]
    # Allow `extensions: png` as a shorthand for a single entry
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"'{key}' must be a list of strings", path)
    return value


def parse_config(data: Any, path: Path) -> Config:
    if data is None:
        return Config(source=path)
    if not isinstance(data, dict):
        raise ConfigError("top level must be a mapping", path)

    known = {"extensions", "exclude_paths", "exclude_patterns"}
    unknown = sorted(str(k) for k in data if k not in known)
    if unknown:
        raise ConfigError(f"unknown keys: {', '.join(unknown)}", path)

    config = Config(source=path)
    extensions = _string_list(data, "extensions", path)
    exclude_paths = _string_list(data, "exclude_paths", path) or []
    try:
        if extensions is not None:
            config.extensions = normalize_extensions(extensions)
        config.exclude_paths = check_exclude_paths(exclude_paths)
    except ConfigError as e:
        raise ConfigError(e.message, path)
    config.exclude_patterns = _string_list(data, "exclude_patterns", path) or []
    return config


def load_config(root: Path, path: Path | None = None) -> Config:
    """
    Loads the policy configuration.

    An explicit `path` must exist. Otherwise `.lfscheck.yml` in the work tree
    root is used when present, and the built-in defaults when it is not.
    """
    if path is None:
        candidate = root / CONFIG_FILE_NAME
        if not candidate.is_file():
            return Config(output_format=OutputFormat.detect())
        path = candidate
    elif not path.is_file():
        raise ConfigError("config file does not exist", path)

    try:
        with path.open('rt', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid YAML: {e}", path)

    config = parse_config(data, path)
    config.output_format = OutputFormat.detect()
    return config
