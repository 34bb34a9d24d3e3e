from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict


class OrmModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)


# Surah models
class SurahRef(OrmModel):
    number: int
    name: str
    latin_name: str


class SurahSummary(SurahRef):
    verse_count: int
    revelation_place: str
    meaning: str


class SurahListItem(SurahSummary):
    juz: List[int] = []


class SurahInfo(SurahSummary):
    description: str = ""
    audio_full: Optional[Dict[str, Any]] = None


class VerseOut(OrmModel):
    number: int
    juz: int
    arabic: str
    latin: str
    translation: str
    audio: Optional[Dict[str, Any]] = None


class TafsirOut(OrmModel):
    verse_number: int
    text: str


class SurahDetail(BaseModel):
    surah: SurahInfo
    verses: List[VerseOut]
    prev_info: Optional[SurahRef] = None
    next_info: Optional[SurahRef] = None


class SurahTafsirDetail(BaseModel):
    surah: SurahInfo
    tafsir: List[TafsirOut]
    prev_info: Optional[SurahRef] = None
    next_info: Optional[SurahRef] = None


# Juz models
class VerseAddress(BaseModel):
    surah: int
    verse: int


class VerseSpan(BaseModel):
    start: int
    end: int


class JuzNumberRef(BaseModel):
    number: int


class JuzSummary(BaseModel):
    number: int
    start: VerseAddress
    end: VerseAddress
    total_verses: int
    surahs: List[SurahRef]


class JuzSurahSegment(SurahSummary):
    verses_in_juz: VerseSpan
    total_verses_in_juz: int


class JuzDetail(BaseModel):
    number: int
    start: VerseAddress
    end: VerseAddress
    total_verses: int
    surahs: List[JuzSurahSegment]
    prev_info: Optional[JuzNumberRef] = None
    next_info: Optional[JuzNumberRef] = None


class JuzSurahNav(BaseModel):
    juz: int
    surah: SurahRef


class SurahInJuz(BaseModel):
    juz: int
    surah: SurahInfo
    verses: List[VerseOut]
    prev_info: Optional[JuzSurahNav] = None
    next_info: Optional[JuzSurahNav] = None


class SurahTafsirInJuz(BaseModel):
    juz: int
    surah: SurahInfo
    tafsir: List[TafsirOut]
    prev_info: Optional[JuzSurahNav] = None
    next_info: Optional[JuzSurahNav] = None
