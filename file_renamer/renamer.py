"""
Модуль переименования файлов.

Копирует отобранные файлы в заново созданный выходной каталог под
именами, построенными по шаблону с последовательной нумерацией.
Номер расходуется только на реально скопированные файлы.
"""

import shutil
import string
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Sequence, Set, Tuple

from .filters import FilterPolicy
from .logger import FileRenamerLogger
from .scanner import DirectoryScanner, extension_of


NUMBER_FIELD = 'number'


class RenameError(Exception):
    """Исключение для ошибок переименования."""
    pass


class TemplateError(RenameError):
    """Исключение для некорректного шаблона имени."""
    pass


class OutputIOError(RenameError):
    """Исключение для ошибок работы с выходным каталогом."""
    pass


class NameTemplate:
    """
    Шаблон имени файла в синтаксисе str.format.

    Поддерживается единственное поле ``number``, в том числе
    со спецификацией формата: ``img_{number:04d}.jpg``.
    """

    def __init__(self, template: str):
        """
        Компилирует шаблон.

        Args:
            template: Строка шаблона

        Raises:
            TemplateError: Если синтаксис шаблона некорректен или в нем нет поля number
        """
        self.template = template
        self.fields = self._parse_fields(template)

        if NUMBER_FIELD not in self.fields:
            raise TemplateError(
                f"Шаблон {template!r} должен содержать поле {{{NUMBER_FIELD}}}"
            )

    @staticmethod
    def _parse_fields(template: str) -> Set[str]:
        fields = set()
        try:
            for _, field_name, _, _ in string.Formatter().parse(template):
                if field_name is None:
                    continue
                # "number.real" и "number[0]" ссылаются на поле number
                base_name = field_name.split('.', 1)[0].split('[', 1)[0]
                if base_name == '' or base_name.isdigit():
                    raise TemplateError(
                        f"Позиционные поля не поддерживаются в шаблоне {template!r}"
                    )
                fields.add(base_name)
        except ValueError as e:
            raise TemplateError(f"Некорректный шаблон {template!r}: {e}")
        return fields

    def render(self, number: int) -> str:
        """
        Формирует имя файла для номера.

        Raises:
            TemplateError: Если шаблон не удалось применить
        """
        try:
            name = self.template.format(**{NUMBER_FIELD: number})
        except (KeyError, IndexError, AttributeError, TypeError, ValueError) as e:
            raise TemplateError(f"Ошибка применения шаблона {self.template!r}: {e!r}")

        if name in ('', '.', '..'):
            raise TemplateError(f"Шаблон {self.template!r} дает недопустимое имя {name!r}")
        return name

    def __repr__(self) -> str:
        return f"NameTemplate({self.template!r})"


@dataclass
class RenameEntry:
    """Запланированное копирование одного файла."""
    source: Path
    target: Path
    number: int


@dataclass
class RenameResult:
    """Результат (или план) переименования."""
    entries: List[RenameEntry] = field(default_factory=list)
    skipped: List[Tuple[Path, str]] = field(default_factory=list)
    next_number: int = 0
    dry_run: bool = False

    @property
    def copied_count(self) -> int:
        return len(self.entries)

    @property
    def skipped_count(self) -> int:
        return len(self.skipped)


def plan_renames(
    files: Sequence[Path],
    policy: FilterPolicy,
    template: NameTemplate,
    output_directory: Path,
    start_number: int,
) -> RenameResult:
    """
    Строит план копирования для списка файлов.

    Номер передается по цепочке как аккумулятор: файлы без расширения
    и файлы, не прошедшие фильтр, номер не расходуют.

    Args:
        files: Файлы в порядке обхода
        policy: Политика отбора по расширениям
        template: Скомпилированный шаблон имени
        output_directory: Выходной каталог
        start_number: Номер первого копируемого файла

    Returns:
        RenameResult: План; next_number - первый неизрасходованный номер

    Raises:
        TemplateError: Если шаблон не удалось применить
        OutputIOError: Если два файла получают одинаковое имя
    """
    output_directory = Path(output_directory)
    result = RenameResult(next_number=start_number)
    used_names: Set[str] = set()

    for source in files:
        extension = extension_of(source)
        if not extension:
            result.skipped.append((source, "нет расширения"))
            continue
        if not policy.admits(extension):
            result.skipped.append((source, f"расширение '{extension}' отклонено фильтром"))
            continue

        name = template.render(result.next_number)
        if name in used_names:
            raise OutputIOError(
                f"Имя {name!r} для {source} уже занято: шаблон дает повторяющиеся имена"
            )
        used_names.add(name)

        result.entries.append(RenameEntry(source, output_directory / name, result.next_number))
        result.next_number += 1

    return result


class Renamer:
    """Класс для копирования файлов под нумерованными именами."""

    def __init__(self, scanner: DirectoryScanner, policy: FilterPolicy, logger: FileRenamerLogger):
        """
        Инициализация переименователя.

        Args:
            scanner: Сканер каталогов
            policy: Политика отбора по расширениям
            logger: Логгер для записи операций
        """
        self.scanner = scanner
        self.policy = policy
        self.logger = logger

    def _check_output_directory(self, input_directory: Path, output_directory: Path) -> None:
        """Запрещает выходной каталог, удаление которого уничтожит входные файлы."""
        input_resolved = Path(input_directory).resolve()
        output_resolved = Path(output_directory).resolve()
        if output_resolved == input_resolved or output_resolved in input_resolved.parents:
            raise OutputIOError(
                f"Выходной каталог {output_directory} совпадает с входным "
                f"каталогом {input_directory} или содержит его"
            )

    def prepare_output_directory(self, input_directory: Path, output_directory: Path) -> None:
        """
        Удаляет выходной каталог, если он существует, и создает его заново.

        Raises:
            OutputIOError: Если каталог нельзя удалить или создать
        """
        output_directory = Path(output_directory)
        self._check_output_directory(input_directory, output_directory)

        is_symlink = output_directory.is_symlink()
        existed = is_symlink or output_directory.exists()
        if existed and not is_symlink and not output_directory.is_dir():
            error = OutputIOError(f"Выходной путь {output_directory} существует и не является каталогом")
            self.logger.log_file_error(output_directory, error)
            raise error

        try:
            if is_symlink:
                output_directory.unlink()
            elif existed:
                shutil.rmtree(output_directory)
            output_directory.mkdir(parents=True)
        except OSError as e:
            self.logger.log_file_error(output_directory, e)
            raise OutputIOError(f"Ошибка подготовки выходного каталога {output_directory}: {e}")

        self.logger.log_output_reset(output_directory, existed)

    def _copy_file(self, entry: RenameEntry) -> None:
        """
        Копирует файл побайтно.

        Raises:
            OutputIOError: Если целевой файл уже существует или копирование не удалось
        """
        if entry.target.exists():
            error = OutputIOError(f"Целевой файл уже существует: {entry.target}")
            self.logger.log_file_error(entry.source, error)
            raise error

        try:
            shutil.copy(entry.source, entry.target)
        except OSError as e:
            self.logger.log_file_error(entry.source, e)
            raise OutputIOError(f"Ошибка копирования {entry.source} в {entry.target}: {e}")

        self.logger.log_file_copied(entry.source, entry.target)

    def rename(
        self,
        input_directory: Path,
        level: int,
        output_directory: Path,
        start_number: int,
        template: str,
        dry_run: bool = False,
    ) -> RenameResult:
        """
        Копирует отобранные файлы в выходной каталог под именами по шаблону.

        В режиме dry_run файловая система не изменяется: возвращается план.

        Args:
            input_directory: Входной каталог
            level: Глубина рекурсии
            output_directory: Выходной каталог (пересоздается)
            start_number: Номер первого копируемого файла
            template: Шаблон имени
            dry_run: Только построить план

        Returns:
            RenameResult: Выполненные (или запланированные) копирования

        Raises:
            DirectoryReadError: Если входной каталог недоступен
            EncodingError: Если расширение файла не является текстом
            TemplateError: Если шаблон некорректен
            OutputIOError: Если не удалось подготовить каталог или скопировать файл
        """
        output_directory = Path(output_directory)

        if dry_run:
            self._check_output_directory(input_directory, output_directory)
        else:
            self.prepare_output_directory(input_directory, output_directory)

        name_template = NameTemplate(template)

        self.logger.log_scan_start(input_directory, level)
        files = self.scanner.list_files(input_directory, level)
        self.logger.log_rename_start(len(files), start_number, template)

        result = plan_renames(files, self.policy, name_template, output_directory, start_number)
        result.dry_run = dry_run
        for source, reason in result.skipped:
            self.logger.log_file_skipped(source, reason)

        if not dry_run:
            for entry in result.entries:
                self._copy_file(entry)

        self.logger.log_rename_end(result.copied_count, result.skipped_count)
        return result
