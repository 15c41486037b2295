"""
Тесты для модуля config_loader.py
"""

import os
import tempfile
from pathlib import Path

import pytest

from file_renamer.config_loader import (
    Config,
    ConfigError,
    ConfigLoader,
    load_config,
    normalize_extension,
    normalize_extensions,
    validate_config,
)


def write_config(content: str) -> str:
    """Записывает временный файл конфигурации и возвращает путь к нему."""
    with tempfile.NamedTemporaryFile(mode='w', suffix='.ini', delete=False, encoding='utf-8') as f:
        f.write(content)
        return f.name


class TestConfigLoader:
    """Тесты для класса ConfigLoader."""

    def test_load_config_defaults(self):
        """Тест значений по умолчанию без файла конфигурации."""
        config = load_config()

        assert config.scan.directory == Path(".")
        assert config.scan.level == 1
        assert config.scan.blacklist == frozenset()
        assert config.scan.whitelist == frozenset()

        assert config.rename.output_directory == Path("./output")
        assert config.rename.start_number == 1
        assert config.rename.template is None

        assert config.logging.level == "INFO"
        assert config.logging.log_file is None
        assert config.logging.max_log_size == 10
        assert config.logging.backup_count == 5

    def test_load_config_success(self):
        """Тест успешной загрузки конфигурации из файла."""
        config_path = write_config("""[scan]
directory = photos
level = 3
blacklist = PNG, .tmp
whitelist =

[rename]
output_directory = renamed
start_number = 10
template = img_{number:04d}.jpg

[logging]
level = DEBUG
log_file = logs/test.log
max_log_size = 2
backup_count = 1
""")
        try:
            config = load_config(config_path)
        finally:
            os.unlink(config_path)

        assert config.scan.directory == Path("photos")
        assert config.scan.level == 3
        assert config.scan.blacklist == frozenset({"png", "tmp"})
        assert config.scan.whitelist == frozenset()

        assert config.rename.output_directory == Path("renamed")
        assert config.rename.start_number == 10
        assert config.rename.template == "img_{number:04d}.jpg"

        assert config.logging.level == "DEBUG"
        assert config.logging.log_file == Path("logs/test.log")
        assert config.logging.max_log_size == 2
        assert config.logging.backup_count == 1

    def test_missing_sections_use_defaults(self):
        """Тест: отсутствующие секции заменяются значениями по умолчанию."""
        config_path = write_config("[scan]\nlevel = 0\n")
        try:
            config = load_config(config_path)
        finally:
            os.unlink(config_path)

        assert config.scan.level == 0
        assert config.rename.start_number == 1
        assert config.logging.level == "INFO"

    def test_config_file_not_found(self):
        """Тест ошибки при отсутствии указанного файла конфигурации."""
        with pytest.raises(FileNotFoundError):
            load_config("nonexistent_config.ini")

    def test_invalid_level(self):
        """Тест валидации отрицательной глубины рекурсии."""
        config_path = write_config("[scan]\nlevel = -1\n")
        try:
            with pytest.raises(ConfigError, match="Глубина рекурсии"):
                load_config(config_path)
        finally:
            os.unlink(config_path)

    def test_invalid_integer(self):
        """Тест ошибки при нечисловом значении."""
        config_path = write_config("[rename]\nstart_number = one\n")
        try:
            with pytest.raises(ConfigError, match="Ошибка загрузки конфигурации"):
                load_config(config_path)
        finally:
            os.unlink(config_path)

    def test_invalid_log_level(self):
        """Тест валидации уровня логирования."""
        config_path = write_config("[logging]\nlevel = VERBOSE\n")
        try:
            with pytest.raises(ConfigError, match="Некорректный уровень логирования"):
                load_config(config_path)
        finally:
            os.unlink(config_path)

    def test_malformed_file(self):
        """Тест ошибки разбора файла без заголовка секции."""
        config_path = write_config("level = 1\n")
        try:
            with pytest.raises(ConfigError):
                load_config(config_path)
        finally:
            os.unlink(config_path)

    def test_get_config_before_load(self):
        """Тест получения конфигурации до загрузки."""
        loader = ConfigLoader()
        with pytest.raises(ConfigError):
            loader.get_config()

    def test_get_config_after_load(self):
        """Тест получения загруженной конфигурации."""
        loader = ConfigLoader()
        config = loader.load_config()
        assert loader.get_config() is config

    def test_config_error_is_value_error(self):
        """ConfigError совместим с ValueError."""
        assert issubclass(ConfigError, ValueError)


class TestValidateConfig:
    """Тесты для функции validate_config."""

    def test_negative_start_number(self):
        config = Config()
        config.rename.start_number = -5
        with pytest.raises(ConfigError, match="Начальный номер"):
            validate_config(config)

    def test_invalid_log_size(self):
        config = Config()
        config.logging.max_log_size = 0
        with pytest.raises(ConfigError):
            validate_config(config)

    def test_valid_default_config(self):
        validate_config(Config())


class TestNormalizeExtension:
    """Тесты нормализации расширений из списков."""

    @pytest.mark.parametrize("value, expected", [
        ("png", "png"),
        ("PNG", "png"),
        (".jpg", "jpg"),
        ("  .Tar  ", "tar"),
        ("", ""),
    ])
    def test_normalize_extension(self, value, expected):
        assert normalize_extension(value) == expected

    def test_normalize_extensions_drops_empty(self):
        assert normalize_extensions(["JPG", ".jpg", " ", "."]) == frozenset({"jpg"})
