# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""Tests for the FileSystem primitive and glob matching."""

from pathlib import Path

import pytest

from nextscope.filesystem import FileSystem, expand_braces, glob_match


def _touch(root: Path, relative: str, content: str = "x") -> Path:
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    return path


class TestGlobMatching:
    def test_expand_braces(self):
        assert expand_braces("**/*.{ts,tsx}") == ["**/*.ts", "**/*.tsx"]
        assert expand_braces("{a,b}/{c,d}") == ["a/c", "a/d", "b/c", "b/d"]
        assert expand_braces("plain") == ["plain"]

    def test_double_star_matches_zero_or_more_directories(self):
        assert glob_match("App.tsx", "**/*.tsx")
        assert glob_match("src/components/Button.tsx", "**/*.tsx")
        assert not glob_match("src/App.css", "**/*.{ts,tsx}")

    def test_ignore_style_patterns(self):
        assert glob_match("node_modules/react/index.js", "**/node_modules/**")
        assert glob_match("src/App.test.tsx", "**/*.test.*")
        assert not glob_match("src/App.tsx", "**/*.test.*")

    def test_dot_segments_need_explicit_dot(self):
        assert not glob_match(".next/server/page.js", "**/*.js")
        assert glob_match(".next/server/page.js", ".next/**/*.js")


class TestFileOperations:
    def test_exists_size_and_directory(self, tmp_path: Path):
        fs = FileSystem()
        file_path = _touch(tmp_path, "a.ts", "12345")

        assert fs.exists(str(file_path))
        assert fs.is_directory(str(tmp_path))
        assert not fs.is_directory(str(file_path))
        assert fs.file_size(str(file_path)) == 5
        assert fs.file_size(str(tmp_path / "missing.ts")) == 0

    def test_list_dir_sorted_and_missing(self, tmp_path: Path):
        fs = FileSystem()
        _touch(tmp_path, "b.ts")
        _touch(tmp_path, "a.ts")

        assert fs.list_dir(str(tmp_path)) == ["a.ts", "b.ts"]
        assert fs.list_dir(str(tmp_path / "missing")) == []

    def test_relative_path_is_posix(self, tmp_path: Path):
        fs = FileSystem()
        file_path = _touch(tmp_path, "src/components/Button.tsx")

        assert fs.relative_path(str(tmp_path), str(file_path)) == "src/components/Button.tsx"

    @pytest.mark.asyncio
    async def test_read_file_utf8_and_latin1(self, tmp_path: Path):
        fs = FileSystem()
        utf8 = _touch(tmp_path, "utf8.ts", "const s = 'héllo';")
        latin1 = tmp_path / "latin1.ts"
        latin1.write_bytes("const s = 'caf\xe9';".encode("latin-1"))

        assert await fs.read_file(str(utf8)) == "const s = 'héllo';"
        assert await fs.read_file(str(latin1)) == "const s = 'café';"

    @pytest.mark.asyncio
    async def test_read_missing_file_returns_none(self, tmp_path: Path):
        assert await FileSystem().read_file(str(tmp_path / "missing.ts")) is None


class TestExpandGlob:
    def test_expand_glob_with_ignore(self, tmp_path: Path):
        fs = FileSystem()
        _touch(tmp_path, "src/App.tsx")
        _touch(tmp_path, "src/util.ts")
        _touch(tmp_path, "src/style.css")
        _touch(tmp_path, "node_modules/lib/index.tsx")

        found = fs.expand_glob("**/*.{ts,tsx}", str(tmp_path), ["**/node_modules/**"])

        assert found == [
            str(tmp_path.resolve() / "src/App.tsx"),
            str(tmp_path.resolve() / "src/util.ts"),
        ]

    def test_results_are_absolute_and_sorted(self, tmp_path: Path):
        fs = FileSystem()
        for name in ["z.ts", "a.ts", "m/b.ts"]:
            _touch(tmp_path, name)

        found = fs.expand_glob("**/*.ts", str(tmp_path))

        assert all(Path(p).is_absolute() for p in found)
        assert [Path(p).name for p in found] == ["a.ts", "z.ts", "b.ts"]

    def test_missing_root_yields_nothing(self, tmp_path: Path):
        assert FileSystem().expand_glob("**/*.ts", str(tmp_path / "missing")) == []
