"""Athar: read-only API for Quran surahs, verses, tafsir, juz navigation and doa."""

__version__ = "1.0.0"
