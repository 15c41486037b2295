"""
Модуль политики отбора файлов по расширению.

Белый список, если он не пуст, имеет приоритет: черный список
в этом случае полностью игнорируется.
"""

from typing import Dict, FrozenSet, Iterable

from .config_loader import normalize_extensions


class FilterPolicy:
    """Политика отбора файлов по черному и белому спискам расширений."""

    def __init__(self, blacklist: Iterable[str] = (), whitelist: Iterable[str] = ()):
        self.blacklist: FrozenSet[str] = normalize_extensions(blacklist)
        self.whitelist: FrozenSet[str] = normalize_extensions(whitelist)

    @property
    def uses_whitelist(self) -> bool:
        return bool(self.whitelist)

    @property
    def active_list(self) -> FrozenSet[str]:
        """Список, который определяет решение политики."""
        return self.whitelist if self.uses_whitelist else self.blacklist

    @property
    def list_name(self) -> str:
        return 'whitelist' if self.uses_whitelist else 'blacklist'

    def admits(self, extension: str) -> bool:
        """
        Проверяет, проходит ли расширение через фильтр.

        Args:
            extension: Расширение, полученное от extension_of()

        Returns:
            bool: True если файл с таким расширением отбирается
        """
        if self.uses_whitelist:
            return extension in self.whitelist
        return extension not in self.blacklist

    def matched_count(self, file_types: Dict[str, int]) -> int:
        """Суммирует количество файлов, расширения которых входят в активный список."""
        active = self.active_list
        return sum(count for extension, count in file_types.items() if extension in active)

    def __repr__(self) -> str:
        return (
            f"FilterPolicy(blacklist={sorted(self.blacklist)}, "
            f"whitelist={sorted(self.whitelist)})"
        )
