"""
Главный модуль CLI интерфейса утилиты.

Предоставляет команды analyze (статистика по расширениям) и rename
(копирование файлов под нумерованными именами).
"""

import argparse
import sys
from pathlib import Path
from typing import Optional

from .analyzer import Analyzer, print_report
from .config_loader import Config, ConfigError, load_config, normalize_extensions, validate_config
from .filters import FilterPolicy
from .logger import FileRenamerLogger
from .renamer import Renamer, RenameError
from .scanner import DirectoryScanner, ScanError


class FileRenamerCLI:
    """Класс для обработки команд CLI."""

    def __init__(self):
        self.config: Optional[Config] = None
        self.logger: Optional[FileRenamerLogger] = None
        self.scanner: Optional[DirectoryScanner] = None
        self.policy: Optional[FilterPolicy] = None

    def setup(self, args) -> bool:
        """
        Инициализирует CLI: загружает конфигурацию и применяет аргументы.

        Args:
            args: Аргументы командной строки

        Returns:
            bool: True если инициализация успешна
        """
        try:
            config = load_config(args.config)
            apply_arguments(config, args)
            validate_config(config)

            self.config = config
            self.logger = FileRenamerLogger(config.logging)
            self.scanner = DirectoryScanner(self.logger)
            self.policy = FilterPolicy(config.scan.blacklist, config.scan.whitelist)

            if args.config:
                self.logger.log_system_info(f"Конфигурация загружена из: {args.config}")
            self.logger.log_system_info(f"Фильтр: {self.policy!r}")
            return True

        except (OSError, ConfigError) as e:
            print(f"❌ Ошибка инициализации: {e}", file=sys.stderr)
            return False

    def cmd_analyze(self, args) -> int:
        """
        Команда анализа каталога.

        Args:
            args: Аргументы командной строки

        Returns:
            int: Код возврата (0 - успех, 1 - ошибка)
        """
        try:
            analyzer = Analyzer(self.scanner, self.policy, self.logger)
            report = analyzer.analyze(self.config.scan.directory, self.config.scan.level)
            print_report(report)
            return 0

        except ScanError as e:
            self.logger.log_critical_error("Ошибка анализа", e)
            print(f"❌ Ошибка анализа: {e}", file=sys.stderr)
            return 1

    def cmd_rename(self, args) -> int:
        """
        Команда переименования (копирования) файлов.

        Args:
            args: Аргументы командной строки

        Returns:
            int: Код возврата (0 - успех, 1 - ошибка)
        """
        rename_config = self.config.rename
        if not rename_config.template:
            print("❌ Не указан шаблон имени (-t/--template)", file=sys.stderr)
            return 1

        try:
            renamer = Renamer(self.scanner, self.policy, self.logger)
            result = renamer.rename(
                self.config.scan.directory,
                self.config.scan.level,
                rename_config.output_directory,
                rename_config.start_number,
                rename_config.template,
                dry_run=args.dry_run,
            )

        except (ScanError, RenameError) as e:
            self.logger.log_critical_error("Ошибка переименования", e)
            print(f"❌ Ошибка переименования: {e}", file=sys.stderr)
            return 1

        if result.dry_run:
            self.logger.log_warning("Режим dry-run: файлы не копируются, выходной каталог не изменен")
            for entry in result.entries:
                print(f"{entry.source} -> {entry.target}")
            print(f"Would copy {result.copied_count} file(s) to {rename_config.output_directory}")
        else:
            print(f"Copied {result.copied_count} file(s) to {rename_config.output_directory}")
        return 0


def apply_arguments(config: Config, args) -> None:
    """
    Переопределяет значения конфигурации аргументами командной строки.

    Аргументы со значением None (не указаны) конфигурацию не меняют.
    """
    if args.directory is not None:
        config.scan.directory = Path(args.directory)
    if args.level is not None:
        config.scan.level = args.level
    if args.blacklist:
        config.scan.blacklist = normalize_extensions(args.blacklist)
    if args.whitelist:
        config.scan.whitelist = normalize_extensions(args.whitelist)
    if args.verbose:
        config.logging.level = 'DEBUG'

    if args.command == 'rename':
        if args.start_number is not None:
            config.rename.start_number = args.start_number
        if args.output_directory is not None:
            config.rename.output_directory = Path(args.output_directory)
        if args.template is not None:
            config.rename.template = args.template


def create_parser() -> argparse.ArgumentParser:
    """
    Создает парсер аргументов командной строки.

    Returns:
        argparse.ArgumentParser: Настроенный парсер
    """
    parser = argparse.ArgumentParser(
        prog='file-renamer',
        description="Анализ файлов по расширениям и копирование под нумерованными именами",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Примеры использования:

  # Статистика по расширениям на два уровня вглубь
  file-renamer -d photos -l 2 analyze

  # Копирование jpg-файлов как img_0001.jpg, img_0002.jpg, ...
  file-renamer -d photos -w jpg rename -t "img_{number:04d}.jpg"

  # Все файлы, кроме png, начиная с номера 5, без изменений на диске
  file-renamer -b png rename -n 5 -o out -t "{number}.dat" --dry-run
        """
    )

    # Общие аргументы
    parser.add_argument(
        '-d', '--directory',
        help='Каталог для обработки (по умолчанию: текущий)'
    )
    parser.add_argument(
        '-l', '--level',
        type=int,
        help='Глубина рекурсии, 0 - без вложенных каталогов (по умолчанию: 1)'
    )
    parser.add_argument(
        '-b', '--blacklist',
        action='append',
        default=[],
        metavar='EXT',
        help='Исключить расширение (можно указывать несколько раз)'
    )
    parser.add_argument(
        '-w', '--whitelist',
        action='append',
        default=[],
        metavar='EXT',
        help='Отбирать только расширение; отменяет черный список'
    )
    parser.add_argument(
        '-c', '--config',
        help='Путь к файлу конфигурации INI'
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Подробный вывод'
    )

    # Подкоманды
    subparsers = parser.add_subparsers(dest='command', help='Доступные команды')

    subparsers.add_parser('analyze', help='Статистика по расширениям файлов')

    rename_parser = subparsers.add_parser('rename', help='Копирование файлов под именами по шаблону')
    rename_parser.add_argument(
        '-n', '--start-number',
        type=int,
        help='Номер первого файла (по умолчанию: 1)'
    )
    rename_parser.add_argument(
        '-o', '--output-directory',
        help='Выходной каталог, пересоздается (по умолчанию: ./output)'
    )
    rename_parser.add_argument(
        '-t', '--template',
        help='Шаблон имени, например "img_{number}.jpg"'
    )
    rename_parser.add_argument(
        '--dry-run',
        action='store_true',
        help='Показать план без изменений на диске'
    )

    return parser


def main(argv=None) -> int:
    """Главная функция CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    # Проверяем, что команда указана
    if not args.command:
        parser.print_help()
        return 1

    cli = FileRenamerCLI()
    if not cli.setup(args):
        return 1

    try:
        if args.command == 'analyze':
            return cli.cmd_analyze(args)
        elif args.command == 'rename':
            return cli.cmd_rename(args)
        else:
            print(f"❌ Неизвестная команда: {args.command}", file=sys.stderr)
            return 1

    except KeyboardInterrupt:
        print("\n⚠️ Операция прервана пользователем", file=sys.stderr)
        return 1
    except Exception as e:
        cli.logger.log_critical_error("Неожиданная ошибка", e)
        print(f"❌ Неожиданная ошибка: {e}", file=sys.stderr)
        if args.verbose:
            import traceback
            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
