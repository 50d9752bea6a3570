from setuptools import setup, find_namespace_packages
from pathlib import Path

# Read the requirements from requirements.txt
reqs_path = Path(__file__).parent / "requirements.txt"
requirements = [
    line.strip()
    for line in reqs_path.read_text().splitlines()
    if line.strip() and not line.startswith("#")
]

setup(
    name="lfscheck",
    version="0.1.0",
    description="Checks that binary files in a git repository are stored in git LFS",
    packages=find_namespace_packages(include=["lfscheck", "lfscheck.*"]),
    python_requires=">=3.11",
    install_requires=requirements,
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "lfscheck=lfscheck.cli:main",
        ],
    },
)
