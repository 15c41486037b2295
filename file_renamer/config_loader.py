"""
Модуль для загрузки и валидации конфигурации приложения.

Обеспечивает загрузку параметров сканирования, переименования и логирования
из INI-файла (например, config/settings.ini) с валидацией. Файл конфигурации
необязателен: без него используются значения по умолчанию, которые затем
переопределяются аргументами командной строки.
"""

import configparser
from dataclasses import dataclass, field
from pathlib import Path
from typing import FrozenSet, Iterable, Optional


DEFAULT_DIRECTORY = Path(".")
DEFAULT_LEVEL = 1
DEFAULT_OUTPUT_DIRECTORY = Path("./output")
DEFAULT_START_NUMBER = 1
VALID_LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']


class ConfigError(ValueError):
    """Исключение для некорректной конфигурации."""
    pass


def normalize_extension(value: str) -> str:
    """
    Приводит расширение из списка к виду, который возвращает классификатор.

    Args:
        value: Расширение в произвольной форме (``PNG``, ``.png``, `` png ``)

    Returns:
        str: Расширение без ведущей точки в нижнем регистре
    """
    value = value.strip()
    if value.startswith('.'):
        value = value[1:]
    return value.lower()


def normalize_extensions(values: Iterable[str]) -> FrozenSet[str]:
    """Нормализует набор расширений, отбрасывая пустые значения."""
    return frozenset(
        extension for extension in (normalize_extension(v) for v in values) if extension
    )


@dataclass
class ScanConfig:
    """Конфигурация сканирования каталога."""
    directory: Path = DEFAULT_DIRECTORY
    level: int = DEFAULT_LEVEL
    blacklist: FrozenSet[str] = field(default_factory=frozenset)
    whitelist: FrozenSet[str] = field(default_factory=frozenset)


@dataclass
class RenameConfig:
    """Конфигурация операции переименования."""
    output_directory: Path = DEFAULT_OUTPUT_DIRECTORY
    start_number: int = DEFAULT_START_NUMBER
    template: Optional[str] = None


@dataclass
class LoggingConfig:
    """Конфигурация логирования."""
    level: str = 'INFO'
    log_file: Optional[Path] = None
    max_log_size: int = 10
    backup_count: int = 5


@dataclass
class Config:
    """Основная конфигурация приложения."""
    scan: ScanConfig = field(default_factory=ScanConfig)
    rename: RenameConfig = field(default_factory=RenameConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


class ConfigLoader:
    """Класс для загрузки и валидации конфигурации."""

    def __init__(self, config_path: Optional[str] = None):
        """
        Инициализация загрузчика конфигурации.

        Args:
            config_path: Путь к файлу конфигурации (None - значения по умолчанию)
        """
        self.config_path = Path(config_path) if config_path else None
        self._config: Optional[Config] = None

    def load_config(self) -> Config:
        """
        Загружает конфигурацию из файла.

        Returns:
            Config: Объект конфигурации

        Raises:
            FileNotFoundError: Если указанный файл конфигурации не найден
            ConfigError: Если конфигурация некорректна
        """
        config_parser = configparser.ConfigParser()

        if self.config_path is not None:
            if not self.config_path.exists():
                raise FileNotFoundError(f"Файл конфигурации не найден: {self.config_path}")
            try:
                config_parser.read(self.config_path, encoding='utf-8')
            except configparser.Error as e:
                raise ConfigError(f"Ошибка разбора конфигурации: {e}")

        try:
            self._config = Config(
                scan=self._load_scan_config(config_parser),
                rename=self._load_rename_config(config_parser),
                logging=self._load_logging_config(config_parser),
            )
        except (ValueError, configparser.Error) as e:
            raise ConfigError(f"Ошибка загрузки конфигурации: {e}")

        validate_config(self._config)
        return self._config

    def _load_scan_config(self, parser: configparser.ConfigParser) -> ScanConfig:
        """Загружает конфигурацию сканирования."""
        section = 'scan'
        if not parser.has_section(section):
            return ScanConfig()

        return ScanConfig(
            directory=Path(parser.get(section, 'directory', fallback=str(DEFAULT_DIRECTORY))),
            level=parser.getint(section, 'level', fallback=DEFAULT_LEVEL),
            blacklist=normalize_extensions(_split_list(parser.get(section, 'blacklist', fallback=''))),
            whitelist=normalize_extensions(_split_list(parser.get(section, 'whitelist', fallback=''))),
        )

    def _load_rename_config(self, parser: configparser.ConfigParser) -> RenameConfig:
        """Загружает конфигурацию переименования."""
        section = 'rename'
        if not parser.has_section(section):
            return RenameConfig()

        template = parser.get(section, 'template', fallback='', raw=True)
        return RenameConfig(
            output_directory=Path(
                parser.get(section, 'output_directory', fallback=str(DEFAULT_OUTPUT_DIRECTORY))
            ),
            start_number=parser.getint(section, 'start_number', fallback=DEFAULT_START_NUMBER),
            template=template or None,
        )

    def _load_logging_config(self, parser: configparser.ConfigParser) -> LoggingConfig:
        """Загружает конфигурацию логирования."""
        section = 'logging'
        if not parser.has_section(section):
            return LoggingConfig()

        log_file = parser.get(section, 'log_file', fallback='').strip()
        return LoggingConfig(
            level=parser.get(section, 'level', fallback='INFO'),
            log_file=Path(log_file) if log_file else None,
            max_log_size=parser.getint(section, 'max_log_size', fallback=10),
            backup_count=parser.getint(section, 'backup_count', fallback=5),
        )

    def get_config(self) -> Config:
        """
        Возвращает загруженную конфигурацию.

        Raises:
            ConfigError: Если конфигурация не загружена
        """
        if self._config is None:
            raise ConfigError("Конфигурация не загружена. Вызовите load_config() сначала.")
        return self._config


def _split_list(value: str) -> list:
    return [item for item in value.replace('\n', ',').split(',') if item.strip()]


def validate_config(config: Config) -> None:
    """
    Валидирует конфигурацию.

    Вызывается после загрузки файла и повторно после применения
    аргументов командной строки.

    Raises:
        ConfigError: Если какой-либо параметр некорректен
    """
    if config.scan.level < 0:
        raise ConfigError("Глубина рекурсии не может быть отрицательной")

    if config.rename.start_number < 0:
        raise ConfigError("Начальный номер не может быть отрицательным")

    if config.logging.level.upper() not in VALID_LOG_LEVELS:
        raise ConfigError(f"Некорректный уровень логирования: {config.logging.level}")

    if config.logging.max_log_size <= 0:
        raise ConfigError("Размер файла лога должен быть больше 0")

    if config.logging.backup_count < 0:
        raise ConfigError("Количество резервных копий лога не может быть отрицательным")


def load_config(config_path: Optional[str] = None) -> Config:
    """
    Удобная функция для быстрой загрузки конфигурации.

    Args:
        config_path: Путь к файлу конфигурации

    Returns:
        Config: Объект конфигурации
    """
    loader = ConfigLoader(config_path)
    return loader.load_config()
