"""
Тесты для модуля scanner.py
"""

import os
import shutil
import sys
import tempfile
from pathlib import Path
from unittest.mock import Mock

import pytest

from file_renamer.logger import FileRenamerLogger
from file_renamer.scanner import (
    DirectoryReadError,
    DirectoryScanner,
    EncodingError,
    ScanError,
    extension_of,
)


class TestExtensionOf:
    """Тесты для функции extension_of."""

    @pytest.mark.parametrize("path, expected", [
        ("A.JPG", "jpg"),
        ("photo.jpeg", "jpeg"),
        ("archive.tar.GZ", "gz"),
        ("noext", ""),
        (".bashrc", ""),
        ("..hidden", "hidden"),
        (".config.yml", "yml"),
        ("trailing.", ""),
        ("dir.d/file", ""),
        ("dir/file.Txt", "txt"),
    ])
    def test_extension_of(self, path, expected):
        assert extension_of(path) == expected

    def test_accepts_path_objects(self):
        assert extension_of(Path("some") / "IMG_001.PNG") == "png"

    def test_idempotent(self):
        """Повторное применение к нормализованному имени дает тот же результат."""
        extension = extension_of("A.JPG")
        assert extension_of(f"a.{extension}") == extension

    def test_undecodable_extension(self):
        """Суррогатные символы в расширении - ошибка кодировки."""
        name = b"file.\xff\xfe".decode("utf-8", "surrogateescape")
        with pytest.raises(EncodingError):
            extension_of(name)

    def test_undecodable_stem_is_allowed(self):
        """Недекодируемые байты вне расширения не мешают классификации."""
        name = b"\xff.txt".decode("utf-8", "surrogateescape")
        assert extension_of(name) == "txt"


class TestDirectoryScanner:
    """Тесты для класса DirectoryScanner."""

    @pytest.fixture
    def temp_dir(self):
        """Создает временную директорию для тестов."""
        temp_path = tempfile.mkdtemp()
        yield Path(temp_path)
        shutil.rmtree(temp_path, ignore_errors=True)

    @pytest.fixture
    def mock_logger(self):
        """Создает мок логгера."""
        return Mock(spec=FileRenamerLogger)

    @pytest.fixture
    def scanner(self, mock_logger):
        return DirectoryScanner(mock_logger)

    @pytest.fixture
    def tree(self, temp_dir):
        """
        Создает дерево:

            a.txt
            b/
              c.jpg
              d/
                e.png
                f/
                  g.gif
            z.md
        """
        (temp_dir / "a.txt").write_text("a")
        (temp_dir / "b" / "d" / "f").mkdir(parents=True)
        (temp_dir / "b" / "c.jpg").write_text("c")
        (temp_dir / "b" / "d" / "e.png").write_text("e")
        (temp_dir / "b" / "d" / "f" / "g.gif").write_text("g")
        (temp_dir / "z.md").write_text("z")
        return temp_dir

    def relative(self, paths, root):
        return [p.relative_to(root).as_posix() for p in paths]

    def test_list_directory(self, scanner, tree, mock_logger):
        """Тест получения непосредственного содержимого каталога."""
        paths = scanner.list_directory(tree)

        assert self.relative(paths, tree) == ["a.txt", "b", "z.md"]
        mock_logger.log_directory_listed.assert_called_once_with(tree, 3)

    def test_list_directory_missing(self, scanner, temp_dir, mock_logger):
        """Тест чтения несуществующего каталога."""
        with pytest.raises(DirectoryReadError):
            scanner.list_directory(temp_dir / "missing")

        mock_logger.log_file_error.assert_called_once()

    def test_list_directory_on_file(self, scanner, tree):
        """Файл вместо каталога - ошибка чтения каталога."""
        with pytest.raises(DirectoryReadError):
            scanner.list_directory(tree / "a.txt")

    @pytest.mark.skipif(
        sys.platform == "win32" or (hasattr(os, "geteuid") and os.geteuid() == 0),
        reason="права доступа не действуют для root и в Windows",
    )
    def test_list_directory_permission_denied(self, scanner, temp_dir):
        """Тест чтения каталога без прав доступа."""
        locked = temp_dir / "locked"
        locked.mkdir()
        locked.chmod(0)
        try:
            with pytest.raises(DirectoryReadError):
                scanner.list_directory(locked)
        finally:
            locked.chmod(0o755)

    def test_list_recursive_level_zero(self, scanner, tree):
        """На глубине 0 возвращается только содержимое корня."""
        paths = scanner.list_recursive(tree, 0)
        assert self.relative(paths, tree) == ["a.txt", "b", "z.md"]

    def test_list_recursive_level_one(self, scanner, tree):
        """Содержимое подкаталога следует сразу за ним."""
        paths = scanner.list_recursive(tree, 1)
        assert self.relative(paths, tree) == ["a.txt", "b", "b/c.jpg", "b/d", "z.md"]

    def test_list_recursive_deep(self, scanner, tree):
        """Тест полного обхода в глубину."""
        paths = scanner.list_recursive(tree, 10)
        assert self.relative(paths, tree) == [
            "a.txt", "b", "b/c.jpg", "b/d", "b/d/e.png", "b/d/f", "b/d/f/g.gif", "z.md",
        ]

    def test_list_recursive_monotonic(self, scanner, tree):
        """Результат для L-1 - упорядоченное подмножество результата для L."""
        for level in range(1, 4):
            shallow = scanner.list_recursive(tree, level - 1)
            deep = scanner.list_recursive(tree, level)
            positions = [deep.index(path) for path in shallow]
            assert positions == sorted(positions)

    def test_list_recursive_negative_level(self, scanner, tree):
        with pytest.raises(ValueError):
            scanner.list_recursive(tree, -1)

    def test_list_files(self, scanner, tree):
        """Тест получения только файлов."""
        paths = scanner.list_files(tree, 1)
        assert self.relative(paths, tree) == ["a.txt", "b/c.jpg", "z.md"]

    def test_list_recursive_missing(self, scanner, temp_dir):
        with pytest.raises(ScanError):
            scanner.list_recursive(temp_dir / "missing", 2)

    def test_empty_directory(self, scanner, temp_dir):
        assert scanner.list_recursive(temp_dir, 3) == []
