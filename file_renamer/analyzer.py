"""
Модуль анализа каталога.

Подсчитывает файлы по расширениям и количество файлов,
попадающих в активный (белый или черный) список.
"""

from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List

from .filters import FilterPolicy
from .logger import FileRenamerLogger
from .scanner import DirectoryScanner, extension_of


@dataclass
class AnalysisReport:
    """Результат анализа каталога."""
    file_count: int = 0
    file_types: Dict[str, int] = field(default_factory=dict)
    matched: int = 0
    list_name: str = 'blacklist'

    def sorted_file_types(self) -> List[tuple]:
        """Возвращает пары (расширение, количество): сначала самые частые."""
        return sorted(self.file_types.items(), key=lambda item: (-item[1], item[0]))

    def format_lines(self) -> List[str]:
        """
        Формирует строки отчета для вывода в консоль.

        Returns:
            List[str]: Строки отчета без завершающих переводов строки
        """
        lines = [f"Detected {self.file_count} file(s), {self.matched} in {self.list_name}"]
        if self.file_count > 0:
            lines.append("File type(s):")
            for extension, count in self.sorted_file_types():
                lines.append(f"\t{count} '{extension}' file(s)")
        return lines

    def to_dict(self) -> Dict:
        """Преобразует отчет в словарь."""
        return {
            'file_count': self.file_count,
            'file_types': dict(self.file_types),
            'matched': self.matched,
            'list_name': self.list_name,
        }


class Analyzer:
    """Класс для анализа содержимого каталога по расширениям."""

    def __init__(self, scanner: DirectoryScanner, policy: FilterPolicy, logger: FileRenamerLogger):
        """
        Инициализация анализатора.

        Args:
            scanner: Сканер каталогов
            policy: Политика отбора по расширениям
            logger: Логгер для записи операций
        """
        self.scanner = scanner
        self.policy = policy
        self.logger = logger

    def analyze(self, directory: Path, level: int) -> AnalysisReport:
        """
        Анализирует каталог.

        Каталоги и файлы без расширения в подсчет не входят.

        Args:
            directory: Корневой каталог
            level: Глубина рекурсии

        Returns:
            AnalysisReport: Результат анализа

        Raises:
            DirectoryReadError: Если каталог недоступен
            EncodingError: Если расширение файла не является текстом
        """
        self.logger.log_scan_start(directory, level)

        file_types: Counter = Counter()
        for path in self.scanner.list_recursive(directory, level):
            if path.is_dir():
                continue
            extension = extension_of(path)
            if extension:
                file_types[extension] += 1

        report = AnalysisReport(
            file_count=sum(file_types.values()),
            file_types=dict(file_types),
            matched=self.policy.matched_count(file_types),
            list_name=self.policy.list_name,
        )
        self.logger.log_system_info(
            f"Анализ завершен: {report.file_count} файлов, {len(report.file_types)} типов"
        )
        return report


def print_report(report: AnalysisReport) -> None:
    """Выводит отчет анализа в stdout."""
    for line in report.format_lines():
        print(line)
