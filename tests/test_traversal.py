"""Tests for file system traversal functionality."""

import logging
from pathlib import Path

import pytest

from loopscan.errors import NotFoundError
from loopscan.traversal import (
    DEFAULT_EXTENSIONS,
    DEFAULT_IGNORE_DIRS,
    find_source_files,
    is_source_file,
    should_ignore_directory,
)


class TestFileTypeChecks:
    """Test file type checking functions."""

    def test_is_source_file_recognizes_script_extensions(self):
        """is_source_file() accepts .js, .jsx, .ts and .tsx."""
        assert is_source_file(Path("app.js"))
        assert is_source_file(Path("src/View.jsx"))
        assert is_source_file(Path("/abs/util.ts"))
        assert is_source_file(Path("Page.tsx"))

    def test_is_source_file_case_insensitive(self):
        assert is_source_file(Path("APP.JS"))
        assert is_source_file(Path("Page.TSX"))

    def test_is_source_file_rejects_other_files(self):
        assert not is_source_file(Path("styles.css"))
        assert not is_source_file(Path("README.md"))
        assert not is_source_file(Path("data.json"))
        assert not is_source_file(Path("Makefile"))

    def test_is_source_file_custom_extensions(self):
        assert is_source_file(Path("app.js"), {".js"})
        assert not is_source_file(Path("app.ts"), {".js"})

    def test_default_extensions(self):
        assert DEFAULT_EXTENSIONS == {".js", ".jsx", ".ts", ".tsx"}


class TestDirectoryFiltering:
    """Test directory ignore logic."""

    def test_should_ignore_directory_recognizes_ignored_dirs(self):
        assert should_ignore_directory(Path("node_modules"), DEFAULT_IGNORE_DIRS)
        assert should_ignore_directory(Path("a/b/node_modules"), DEFAULT_IGNORE_DIRS)

    def test_should_ignore_directory_allows_other_dirs(self):
        assert not should_ignore_directory(Path("src"), DEFAULT_IGNORE_DIRS)
        assert not should_ignore_directory(Path("lib"), DEFAULT_IGNORE_DIRS)

    def test_should_ignore_directory_case_sensitive(self):
        assert not should_ignore_directory(Path("Node_Modules"), {"node_modules"})


class TestTraversal:
    """Test find_source_files()."""

    @pytest.fixture
    def temp_project(self, tmp_path):
        """Create a temporary project structure for testing."""
        # tmp_path/
        #   src/app.js, src/util.ts, src/View.jsx, src/Page.tsx, src/styles.css
        #   src/nested/deep.js
        #   node_modules/lib/index.js (ignored)
        #   README.md
        (tmp_path / "src" / "nested").mkdir(parents=True)
        (tmp_path / "node_modules" / "lib").mkdir(parents=True)

        (tmp_path / "src" / "app.js").write_text("run();")
        (tmp_path / "src" / "util.ts").write_text("export const x = 1;")
        (tmp_path / "src" / "View.jsx").write_text("export default () => null;")
        (tmp_path / "src" / "Page.tsx").write_text("export default () => null;")
        (tmp_path / "src" / "styles.css").write_text("body {}")
        (tmp_path / "src" / "nested" / "deep.js").write_text("deep();")
        (tmp_path / "node_modules" / "lib" / "index.js").write_text("while (true) {}")
        (tmp_path / "README.md").write_text("# Project")

        return tmp_path

    def test_collects_script_files_only(self, temp_project):
        files = find_source_files(temp_project)
        names = {f.name for f in files}
        assert names == {"app.js", "util.ts", "View.jsx", "Page.tsx", "deep.js"}
        assert all("node_modules" not in f.parts for f in files)

    def test_results_sorted(self, temp_project):
        files = find_source_files(temp_project)
        assert files == sorted(files, key=str)

    def test_sorted_by_string_form(self, tmp_path):
        """Paths compare as strings, and "-" sorts before "/"."""
        (tmp_path / "a").mkdir()
        (tmp_path / "a" / "b.js").write_text("run();")
        (tmp_path / "a-b.js").write_text("run();")
        files = find_source_files(tmp_path)
        root = tmp_path.resolve()
        assert [f.relative_to(root).as_posix() for f in files] == ["a-b.js", "a/b.js"]

    def test_root_inside_ignored_directory(self, temp_project):
        """The ignore list also applies to the target's own path parts."""
        assert find_source_files(temp_project / "node_modules" / "lib") == []
        assert find_source_files(temp_project / "node_modules") == []
        files = find_source_files(temp_project / "node_modules" / "lib", ignore_dirs=set())
        assert [f.name for f in files] == ["index.js"]

    def test_symlinks_not_followed(self, tmp_path):
        """A symlink cycle does not recurse; linked files are not collected."""
        (tmp_path / "src").mkdir()
        (tmp_path / "src" / "app.js").write_text("run();")
        try:
            (tmp_path / "src" / "loop").symlink_to(tmp_path, target_is_directory=True)
            (tmp_path / "src" / "alias.js").symlink_to(tmp_path / "src" / "app.js")
        except OSError:
            pytest.skip("symlinks not supported")
        files = find_source_files(tmp_path)
        assert [f.name for f in files] == ["app.js"]

    def test_returns_absolute_paths(self, temp_project):
        files = find_source_files(temp_project)
        assert all(f.is_absolute() for f in files)

    def test_custom_extensions(self, temp_project):
        files = find_source_files(temp_project, extensions={".ts"})
        assert [f.name for f in files] == ["util.ts"]

    def test_empty_ignore_dirs(self, temp_project):
        """With no ignore list node_modules is scanned too."""
        files = find_source_files(temp_project, ignore_dirs=set())
        assert "index.js" in {f.name for f in files}
        assert len(files) == 6

    def test_empty_directory(self, tmp_path):
        (tmp_path / "README.txt").write_text("No sources here")
        assert find_source_files(tmp_path) == []

    def test_nonexistent_directory(self):
        """A missing root raises NotFoundError (a FileNotFoundError)."""
        with pytest.raises(NotFoundError) as excinfo:
            find_source_files(Path("/nonexistent/directory"))
        assert isinstance(excinfo.value, FileNotFoundError)

    def test_file_instead_of_directory(self, tmp_path):
        file_path = tmp_path / "app.js"
        file_path.write_text("run();")
        with pytest.raises(NotFoundError):
            find_source_files(file_path)

    def test_logs_progress(self, temp_project, caplog):
        with caplog.at_level(logging.INFO):
            find_source_files(temp_project)
        assert "Starting traversal" in caplog.text
        assert "Traversal complete" in caplog.text
        assert "found 5 source file(s)" in caplog.text
