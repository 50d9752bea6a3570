from pathlib import Path

from lfscheck.config import load_config
from lfscheck.git_files import GitFileLister, open_repo
from lfscheck.messages import info, success, warning

def show_config(path: Path, config_path: Path | None = None) -> None:
    with open_repo(path) as repo:
        files = GitFileLister(repo)
        config = load_config(files.root, config_path)
        lfs_available = files.lfs_available()

    success("Config is valid")
    info(*config.describe())
    if not lfs_available:
        warning("git-lfs is not installed; 'check' will fail until it is.")
