"""
File Renamer Utility

Утилита для анализа каталогов по расширениям файлов и копирования
отобранных файлов в выходной каталог под последовательно нумерованными именами.
"""

__version__ = "1.0.0"
__author__ = "File Renamer Team"
__description__ = "Utility for analyzing files by extension and copying them under numbered names"
