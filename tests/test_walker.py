"""Tests for directory traversal and ignore patterns."""

from pathlib import Path

import pytest

from crunchstore.walker import (
    IgnorePatterns,
    get_extension,
    matches_extension,
    walk_files,
)


@pytest.fixture
def tree(tmp_path: Path) -> Path:
    """Create a small tree with mixed extensions and VCS droppings."""
    (tmp_path / "index.html").write_bytes(b"<html></html>")
    (tmp_path / "style.css").write_bytes(b"body {}")
    (tmp_path / "README").write_bytes(b"no extension")
    (tmp_path / "sub").mkdir()
    (tmp_path / "sub" / "app.js").write_bytes(b"console.log(1)")
    (tmp_path / "sub" / "page.html").write_bytes(b"<p></p>")
    (tmp_path / ".git").mkdir()
    (tmp_path / ".git" / "config").write_bytes(b"[core]")
    return tmp_path


class TestGetExtension:
    """Tests for get_extension()."""

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("index.html", "html"),
            ("archive.tar.gz", "gz"),
            ("README", None),
            (".profile", None),
            ("dir.d/file", None),
            ("dir/file.txt", "txt"),
        ],
    )
    def test_get_extension(self, name: str, expected: str | None) -> None:
        assert get_extension(name) == expected


class TestMatchesExtension:
    """Tests for extension whitelisting."""

    def test_empty_whitelist_allows_all(self) -> None:
        assert matches_extension("a.bin", ()) is True

    def test_whitelisted(self) -> None:
        assert matches_extension("a.html", ["html", ".css"]) is True
        assert matches_extension("a.css", ["html", ".css"]) is True

    def test_not_whitelisted(self) -> None:
        assert matches_extension("a.js", ["html"]) is False

    def test_no_extension_always_allowed(self) -> None:
        assert matches_extension("Makefile", ["html"]) is True


class TestIgnorePatterns:
    """Tests for IgnorePatterns."""

    def test_defaults_ignore_vcs(self) -> None:
        patterns = IgnorePatterns()
        assert patterns.should_ignore(".git", is_dir=True) is True
        assert patterns.should_ignore(".git/config") is True
        assert patterns.should_ignore("sub/.DS_Store") is True

    def test_regular_file_not_ignored(self) -> None:
        assert IgnorePatterns().should_ignore("index.html") is False

    def test_custom_pattern(self) -> None:
        patterns = IgnorePatterns(["*.log"])
        assert patterns.should_ignore("logs/server.log") is True

    def test_directory_pattern(self) -> None:
        patterns = IgnorePatterns(["build/"])
        assert patterns.should_ignore("build", is_dir=True) is True
        assert patterns.should_ignore("build/out.js") is True

    def test_directory_pattern_matches_nested_directory(self) -> None:
        patterns = IgnorePatterns(["build/"], use_defaults=False)
        assert patterns.should_ignore("sub/build", is_dir=True) is True
        assert patterns.should_ignore("sub/build/out.js") is True

    def test_directory_pattern_skips_files_of_same_name(self) -> None:
        patterns = IgnorePatterns(["build/"], use_defaults=False)
        assert patterns.should_ignore("build") is False
        assert patterns.should_ignore("sub/build") is False

    def test_directory_pattern_with_path(self) -> None:
        patterns = IgnorePatterns(["docs/build/"], use_defaults=False)
        assert patterns.should_ignore("docs/build", is_dir=True) is True
        assert patterns.should_ignore("docs/build/index.html") is True
        assert patterns.should_ignore("build/index.html") is False

    def test_without_defaults(self) -> None:
        patterns = IgnorePatterns(use_defaults=False)
        assert patterns.patterns == []
        assert patterns.should_ignore(".git/config") is False

    def test_load_from_file(self, tmp_path: Path) -> None:
        ignore_file = tmp_path / ".crunchignore"
        ignore_file.write_text("# comment\n\n*.bak\n", encoding="utf-8")
        patterns = IgnorePatterns(use_defaults=False)
        patterns.load_from_file(ignore_file)

        assert patterns.patterns == ["*.bak"]


class TestWalkFiles:
    """Tests for walk_files()."""

    def test_walks_all_files_sorted(self, tree: Path) -> None:
        paths = [path for path, _ in walk_files(tree)]
        assert paths == ["README", "index.html", "style.css", "sub/app.js", "sub/page.html"]

    def test_yields_contents(self, tree: Path) -> None:
        files = dict(walk_files(tree))
        assert files["sub/app.js"] == b"console.log(1)"

    def test_extension_filter(self, tree: Path) -> None:
        paths = [path for path, _ in walk_files(tree, extensions=["html"])]
        assert paths == ["README", "index.html", "sub/page.html"]

    def test_ignore_directory(self, tree: Path) -> None:
        paths = [path for path, _ in walk_files(tree, ignore=IgnorePatterns(["sub/"]))]
        assert "sub/app.js" not in paths
        assert "index.html" in paths

    def test_skips_symlinks(self, tree: Path) -> None:
        (tree / "link.html").symlink_to(tree / "index.html")
        paths = [path for path, _ in walk_files(tree)]
        assert "link.html" not in paths

    def test_not_a_directory(self, tmp_path: Path) -> None:
        with pytest.raises(NotADirectoryError):
            list(walk_files(tmp_path / "missing"))

    def test_ignores_nested_directory(self, tree: Path) -> None:
        (tree / "sub" / "build").mkdir()
        (tree / "sub" / "build" / "out.js").write_bytes(b"bundle")
        (tree / "build").write_bytes(b"a file, not a directory")

        paths = [path for path, _ in walk_files(tree, ignore=IgnorePatterns(["build/"]))]
        assert "sub/build/out.js" not in paths
        assert "build" in paths
