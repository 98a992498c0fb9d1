"""Unit tests for core/load.py"""

from datetime import date

import pytest

from mdcorpus.core.frontmatter import MalformedFrontMatter
from mdcorpus.core.load import (
    UnreadableDocument, check_dir, discover_files, load_dir, load_file, sha256, slugify,
)
from mdcorpus.core.models import LoadedDoc


def test_discover_files_dir(corpus_dir):
    """discover_files finds .md files recursively, sorted, skipping other files."""
    files = discover_files(corpus_dir)
    assert [p.relative_to(corpus_dir).as_posix() for p in files] == [
        "git.md", "posts/docker.md", "rust.md",
    ]


def test_discover_files_single(corpus_dir):
    f = corpus_dir / "rust.md"
    assert discover_files(f) == [f]


def test_discover_files_non_md_skipped(corpus_dir):
    assert discover_files(corpus_dir / "notes.txt") == []


def test_discover_files_markdown_extension(tmp_path):
    (tmp_path / "a.markdown").write_text("a")
    (tmp_path / "B.MD").write_text("b")
    assert len(discover_files(tmp_path)) == 2


def test_load_file_with_frontmatter(corpus_dir):
    doc = load_file(corpus_dir / "posts" / "docker.md")
    assert isinstance(doc, LoadedDoc)
    assert doc.document.metadata["title"] == "Docker Basics"
    assert doc.date == date(2023, 6, 1)
    assert doc.title == "Docker Basics"
    assert doc.document.body == "Containers share the host kernel.\n"


def test_load_file_hash_matches_raw(corpus_dir):
    f = corpus_dir / "rust.md"
    doc = load_file(f)
    assert doc.raw == f.read_text(encoding="utf-8")
    assert doc.hash == sha256(doc.raw)
    assert len(doc.hash) == 64


def test_slug_from_frontmatter(corpus_dir):
    assert load_file(corpus_dir / "posts" / "docker.md").slug == "docker-101"


def test_slug_from_filename(tmp_path):
    f = tmp_path / "My First Post.md"
    f.write_text("# Body\n")
    doc = load_file(f)
    assert doc.slug == "my-first-post"
    assert doc.title == "my-first-post"
    assert doc.date is None


def test_load_file_malformed_names_path(broken_file):
    with pytest.raises(MalformedFrontMatter) as exc_info:
        load_file(broken_file)
    assert exc_info.value.path == broken_file
    assert str(broken_file) in str(exc_info.value)


def test_load_dir_order(corpus_dir):
    assert [d.slug for d in load_dir(corpus_dir)] == ["git", "docker-101", "rust"]


def test_load_dir_parallel_matches_sequential(corpus_dir):
    """Each file is independent, so the thread pool gives the same result in the same order."""
    assert load_dir(corpus_dir, workers=4) == load_dir(corpus_dir)


def test_load_dir_parallel_raises_malformed(broken_file, corpus_dir):
    with pytest.raises(MalformedFrontMatter) as exc_info:
        load_dir(corpus_dir, workers=3)
    assert exc_info.value.path == broken_file


def test_load_dir_empty(tmp_path):
    assert load_dir(tmp_path) == []


def test_check_dir_clean(corpus_dir):
    assert check_dir(corpus_dir) == []


def test_check_dir_collects_every_failure(broken_file, corpus_dir):
    second = corpus_dir / "posts" / "also-broken.md"
    second.write_text("+++\n")
    failures = check_dir(corpus_dir)
    assert [p for p, _ in failures] == [broken_file, second]
    assert all(isinstance(e, MalformedFrontMatter) for _, e in failures)


@pytest.mark.parametrize("text,expected", [
    ("Hello World",           "hello-world"),
    ("  Async/Await in Python ", "asyncawait-in-python"),
    ("snake_case_name",       "snake-case-name"),
    ("Café Crème",            "cafe-creme"),
    ("---",                   "doc"),
])
def test_slugify(text, expected):
    assert slugify(text) == expected


def test_load_file_invalid_utf8_names_path(tmp_path):
    f = tmp_path / "bad.md"
    f.write_bytes(b"+++\ntitle = \xff\xfe\n+++\nx")
    with pytest.raises(UnreadableDocument) as exc_info:
        load_file(f)
    assert exc_info.value.path == f
    assert str(exc_info.value).startswith(f"{f}: not valid UTF-8")


def test_load_file_strips_bom(tmp_path):
    """A UTF-8 byte-order mark does not hide the front-matter block."""
    f = tmp_path / "bom.md"
    f.write_bytes('\ufeff+++\ntitle = "Async Python"\n+++\nBody\n'.encode("utf-8"))
    doc = load_file(f)
    assert doc.document.metadata == {"title": "Async Python"}
    assert doc.document.body == "Body\n"
    assert not doc.raw.startswith("\ufeff")


def test_check_dir_collects_unreadable_and_keeps_going(broken_file, corpus_dir):
    bad = corpus_dir / "a-bad.md"
    bad.write_bytes(b"\xff\xfe")
    failures = check_dir(corpus_dir)
    assert [p for p, _ in failures] == [bad, broken_file]
    assert isinstance(failures[0][1], UnreadableDocument)
    assert isinstance(failures[1][1], MalformedFrontMatter)
