"""Root test configuration: a sample corpus and session-level cleanup of runtime artifacts"""

import shutil
from pathlib import Path

import pytest


_PROJECT_ROOT = Path(__file__).parent.parent

_CLEANUP_DIRS = ["dist"]


RUST_POST = """\
+++
title = "Understanding Ownership in Rust"
date = 2024-12-05T11:20:00Z
+++

# Ownership

Every value has a single owner.
"""

DOCKER_POST = """\
+++
title = "Docker Basics"
date = 2023-06-01
slug = "docker-101"
+++
Containers share the host kernel.
"""

GIT_NOTE = """\
# Git Workflows

Rebase or merge? It depends.
"""


@pytest.fixture(scope="session", autouse=True)
def cleanup_artifacts():
    """Remove export directories created at the project root during the test session."""
    yield
    for name in _CLEANUP_DIRS:
        p = _PROJECT_ROOT / name
        if p.exists():
            shutil.rmtree(p)


@pytest.fixture(name="corpus_dir")
def corpus_dir_fixture(tmp_path):
    """A small content tree: two dated posts (one nested), one undated note, one non-Markdown file."""
    root = tmp_path / "content"
    (root / "posts").mkdir(parents=True)
    (root / "rust.md").write_text(RUST_POST, encoding="utf-8")
    (root / "git.md").write_text(GIT_NOTE, encoding="utf-8")
    (root / "posts" / "docker.md").write_text(DOCKER_POST, encoding="utf-8")
    (root / "notes.txt").write_text("not markdown", encoding="utf-8")
    return root


@pytest.fixture(name="broken_file")
def broken_file_fixture(corpus_dir):
    """Add a file whose front-matter is never closed."""
    p = corpus_dir / "broken.md"
    p.write_text('+++\ntitle = "Async Python"\n\nawait all the things\n', encoding="utf-8")
    return p
