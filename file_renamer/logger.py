"""
Модуль для настройки и управления логированием приложения.

Обеспечивает централизованную настройку логирования с цветным выводом
в консоль и необязательным файлом лога с ротацией.
"""

import logging
import logging.handlers
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

from .config_loader import LoggingConfig


LOGGER_NAME = 'file_renamer'
LOG_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


class ColoredFormatter(logging.Formatter):
    """Форматтер с цветным выводом для консоли."""

    # Цветовые коды ANSI
    COLORS = {
        'DEBUG': '\033[36m',      # Cyan
        'INFO': '\033[32m',       # Green
        'WARNING': '\033[33m',    # Yellow
        'ERROR': '\033[31m',      # Red
        'CRITICAL': '\033[35m',   # Magenta
        'RESET': '\033[0m'        # Reset
    }

    def format(self, record):
        """Форматирует запись лога с цветом."""
        levelname = record.levelname
        if levelname in self.COLORS:
            record.levelname = f"{self.COLORS[levelname]}{levelname}{self.COLORS['RESET']}"
        try:
            return super().format(record)
        finally:
            # Запись может быть передана следующим обработчикам
            record.levelname = levelname


class FileRenamerLogger:
    """Класс для управления логированием приложения File Renamer."""

    def __init__(self, config: LoggingConfig):
        """
        Инициализация логгера.

        Args:
            config: Конфигурация логирования
        """
        self.config = config
        self.logger: Optional[logging.Logger] = None
        self._setup_logger()

    def _setup_logger(self) -> None:
        """Настраивает логгер с консольным и (опционально) файловым выводом."""
        level = getattr(logging, self.config.level.upper())

        self.logger = logging.getLogger(LOGGER_NAME)
        self.logger.setLevel(level)

        # Очищаем существующие обработчики
        for handler in self.logger.handlers[:]:
            handler.close()
            self.logger.removeHandler(handler)

        # Консольный обработчик пишет в stderr: stdout занят отчетами команд
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(ColoredFormatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
        console_handler.setLevel(level)
        self.logger.addHandler(console_handler)

        if self.config.log_file:
            log_file_path = Path(self.config.log_file)
            log_file_path.parent.mkdir(parents=True, exist_ok=True)

            file_handler = logging.handlers.RotatingFileHandler(
                filename=log_file_path,
                maxBytes=self.config.max_log_size * 1024 * 1024,  # MB -> байты
                backupCount=self.config.backup_count,
                encoding='utf-8'
            )
            file_handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
            file_handler.setLevel(level)
            self.logger.addHandler(file_handler)

        # Предотвращаем дублирование сообщений
        self.logger.propagate = False

    def get_logger(self) -> logging.Logger:
        """
        Возвращает настроенный логгер.

        Returns:
            logging.Logger: Настроенный логгер
        """
        if self.logger is None:
            raise RuntimeError("Логгер не инициализирован")
        return self.logger

    def log_scan_start(self, directory: Path, level: int) -> None:
        """
        Логирует начало сканирования каталога.

        Args:
            directory: Корневой каталог
            level: Глубина рекурсии
        """
        self.logger.info(f"🔍 Сканирование {directory} (глубина: {level})")

    def log_directory_listed(self, directory: Path, entries: int) -> None:
        """Логирует чтение содержимого каталога."""
        self.logger.debug(f"📂 {directory}: {entries} элементов")

    def log_file_skipped(self, file_path: Path, reason: str) -> None:
        """
        Логирует пропуск файла при переименовании.

        Args:
            file_path: Путь к файлу
            reason: Причина пропуска
        """
        self.logger.debug(f"⏭️ Пропущен {file_path}: {reason}")

    def log_file_copied(self, source_path: Path, target_path: Path) -> None:
        """
        Логирует успешное копирование файла.

        Args:
            source_path: Исходный путь
            target_path: Целевой путь
        """
        self.logger.info(f"📁 Файл скопирован: {source_path} → {target_path}")

    def log_output_reset(self, output_directory: Path, existed: bool) -> None:
        """
        Логирует подготовку выходного каталога.

        Args:
            output_directory: Выходной каталог
            existed: Был ли каталог удален перед созданием
        """
        if existed:
            self.logger.warning(f"🧹 Выходной каталог очищен: {output_directory}")
        else:
            self.logger.info(f"📁 Выходной каталог создан: {output_directory}")

    def log_rename_start(self, total_files: int, start_number: int, template: str) -> None:
        """
        Логирует начало переименования.

        Args:
            total_files: Количество найденных файлов
            start_number: Начальный номер
            template: Шаблон имени
        """
        self.logger.info(f"🚀 Начало переименования")
        self.logger.info(f"📊 Найдено файлов: {total_files}")
        self.logger.info(f"🔢 Начальный номер: {start_number}, шаблон: {template}")
        self.logger.info(f"⏰ Время начала: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")

    def log_rename_end(self, copied_files: int, skipped_files: int) -> None:
        """
        Логирует завершение переименования.

        Args:
            copied_files: Скопировано файлов
            skipped_files: Пропущено файлов
        """
        self.logger.info(f"✅ Переименование завершено")
        self.logger.info(f"   • Скопировано: {copied_files}")
        self.logger.info(f"   • Пропущено: {skipped_files}")
        self.logger.info(f"⏰ Время завершения: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")

    def log_file_error(self, file_path: Path, error: Exception) -> None:
        """
        Логирует ошибку при обработке файла или каталога.

        Args:
            file_path: Путь к файлу
            error: Исключение
        """
        self.logger.error(f"❌ Ошибка при обработке {file_path}: {error}")

    def log_system_info(self, info: str) -> None:
        """
        Логирует системную информацию.

        Args:
            info: Информационное сообщение
        """
        self.logger.info(f"ℹ️ {info}")

    def log_warning(self, message: str) -> None:
        """
        Логирует предупреждение.

        Args:
            message: Сообщение предупреждения
        """
        self.logger.warning(f"⚠️ {message}")

    def log_critical_error(self, message: str, error: Exception = None) -> None:
        """
        Логирует критическую ошибку.

        Args:
            message: Сообщение об ошибке
            error: Исключение (опционально)
        """
        if error:
            self.logger.critical(f"💥 {message}: {error}")
        else:
            self.logger.critical(f"💥 {message}")


def setup_logger(config: LoggingConfig) -> logging.Logger:
    """
    Удобная функция для быстрой настройки логгера.

    Args:
        config: Конфигурация логирования

    Returns:
        logging.Logger: Настроенный логгер
    """
    renamer_logger = FileRenamerLogger(config)
    return renamer_logger.get_logger()


def get_logger(name: str = LOGGER_NAME) -> logging.Logger:
    """
    Получает логгер по имени.

    Args:
        name: Имя логгера

    Returns:
        logging.Logger: Логгер
    """
    return logging.getLogger(name)
