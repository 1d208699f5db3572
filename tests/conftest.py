"""Shared test fixtures for token-audit tests."""

import shutil
import subprocess
from pathlib import Path

import pytest

GIT_AVAILABLE = shutil.which("git") is not None


def pytest_configure(config):
    """Register the git marker."""
    config.addinivalue_line("markers", "git: test needs a git executable")


def pytest_collection_modifyitems(config, items):
    """Skip git tests when git is not installed."""
    if GIT_AVAILABLE:
        return
    skip_git = pytest.mark.skip(reason="git executable not found")
    for item in items:
        if "git" in item.keywords:
            item.add_marker(skip_git)


SAMPLE_MAIN = """\
// Entry point
use std::env;

/* Parses
   arguments */
fn main() {
    let args: Vec<String> = env::args().collect();
    println!("{}", args.len());
}
"""

SAMPLE_LIB = """\
pub fn add(a: i32, b: i32) -> i32 {
    a + b
}
"""

DUPLICATED_BLOCK = 'println!("x");\nprintln!("y");\nprintln!("z");\n'


def write_files(root: Path, files: dict) -> Path:
    """Write ``{relative_path: text}`` under ``root`` and return root."""
    for rel, text in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    return root


@pytest.fixture
def project_factory(tmp_path):
    """Build a throwaway crate: ``project_factory({"src/main.rs": "..."})``."""

    def _make(files: dict) -> Path:
        return write_files(tmp_path, files)

    return _make


@pytest.fixture
def sample_project(project_factory):
    """A small crate with a build directory that must be ignored."""
    return project_factory(
        {
            "src/main.rs": SAMPLE_MAIN,
            "src/lib.rs": SAMPLE_LIB,
            "target/debug/build/generated.rs": "fn generated() {}\n",
            "README.md": "# sample\n",
        }
    )


def git(repo: Path, *args: str) -> str:
    result = subprocess.run(
        ["git", "-C", str(repo), *args],
        capture_output=True,
        text=True,
        check=True,
    )
    return result.stdout


@pytest.fixture
def git_repo(project_factory):
    """A repository with two commits; the second grows src/lib.rs."""
    root = project_factory({"src/main.rs": SAMPLE_MAIN, "src/lib.rs": SAMPLE_LIB})
    git(root, "init", "-q")
    git(root, "config", "user.email", "dev@example.com")
    git(root, "config", "user.name", "Dev")
    git(root, "config", "commit.gpgsign", "false")
    git(root, "symbolic-ref", "HEAD", "refs/heads/main")
    git(root, "add", ".")
    git(root, "commit", "-q", "-m", "initial import")

    (root / "src" / "lib.rs").write_text(
        SAMPLE_LIB + "\npub fn sub(a: i32, b: i32) -> i32 {\n    a - b\n}\n", encoding="utf-8"
    )
    git(root, "add", ".")
    git(root, "commit", "-q", "-m", "add sub")
    return root
