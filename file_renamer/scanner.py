"""
Модуль для обхода каталогов и классификации файлов по расширению.

Обеспечивает получение содержимого каталога, рекурсивный обход
с ограничением глубины и определение расширения файла.
"""

import os
from pathlib import Path
from typing import List, Union

from .logger import FileRenamerLogger


class ScanError(Exception):
    """Исключение для ошибок сканирования."""
    pass


class DirectoryReadError(ScanError):
    """Исключение для случая, когда каталог невозможно прочитать."""
    pass


class EncodingError(ScanError):
    """Исключение для расширения, которое не является корректным текстом."""
    pass


def extension_of(path: Union[str, Path]) -> str:
    """
    Возвращает расширение файла в нижнем регистре.

    Расширение - часть имени после последней точки. Имя, единственная
    точка в котором ведущая (``.bashrc``), расширения не имеет.

    Args:
        path: Путь к файлу

    Returns:
        str: Расширение без точки или пустая строка

    Raises:
        EncodingError: Если расширение содержит байты, не являющиеся текстом
    """
    name = Path(path).name
    stem = name[1:] if name.startswith('.') else name
    if '.' not in stem:
        return ''

    extension = stem.rsplit('.', 1)[1]
    try:
        # Недекодируемые байты имени попадают в str как суррогаты
        extension.encode('utf-8')
    except UnicodeEncodeError as e:
        raise EncodingError(f"Расширение файла {path!r} не является корректным текстом: {e}")
    return extension.lower()


class DirectoryScanner:
    """Класс для обхода каталогов."""

    def __init__(self, logger: FileRenamerLogger):
        """
        Инициализация сканера.

        Args:
            logger: Логгер для записи операций
        """
        self.logger = logger

    def list_directory(self, directory: Path) -> List[Path]:
        """
        Возвращает непосредственное содержимое каталога.

        Элементы упорядочены по имени.

        Args:
            directory: Каталог для чтения

        Returns:
            List[Path]: Пути к файлам и каталогам

        Raises:
            DirectoryReadError: Если каталог не существует или недоступен
        """
        directory = Path(directory)
        try:
            names = sorted(os.listdir(directory))
        except OSError as e:
            self.logger.log_file_error(directory, e)
            raise DirectoryReadError(f"Ошибка чтения каталога {directory}: {e}")

        self.logger.log_directory_listed(directory, len(names))
        return [directory / name for name in names]

    def list_recursive(self, directory: Path, level: int) -> List[Path]:
        """
        Обходит каталог в глубину.

        При level == 0 возвращается только содержимое самого каталога.
        Каждый подкаталог раскрывается с глубиной level - 1, и его
        содержимое следует сразу за ним.

        Args:
            directory: Корневой каталог
            level: Количество дополнительных уровней вложенности

        Returns:
            List[Path]: Пути в порядке обхода

        Raises:
            DirectoryReadError: Если какой-либо каталог недоступен
        """
        if level < 0:
            raise ValueError(f"Глубина рекурсии не может быть отрицательной: {level}")

        paths: List[Path] = []
        for path in self.list_directory(directory):
            paths.append(path)
            if level > 0 and path.is_dir():
                paths.extend(self.list_recursive(path, level - 1))
        return paths

    def list_files(self, directory: Path, level: int) -> List[Path]:
        """Возвращает только файлы (не каталоги) в порядке обхода."""
        return [path for path in self.list_recursive(directory, level) if not path.is_dir()]
