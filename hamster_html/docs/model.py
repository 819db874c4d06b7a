from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Optional


class TextDir(str, Enum):
    LTR = "ltr"
    RTL = "rtl"
    TTB = "ttb"


@dataclass(frozen=True)
class IntermediateText:
    id: str
    content: str
    x: float
    y: float
    width: float
    height: float
    font_size: float
    line_height: float
    font_family: str = ""
    font_weight: float = 400
    italic: bool = False
    color: str = "#000"
    ascent: float = 0
    descent: float = 0
    vertical: bool = False
    dir: TextDir = TextDir.LTR
    rotate: float = 0
    skew: float = 0
    is_eol: bool = True


@dataclass
class IntermediatePage:
    id: str
    number: int
    width: float
    height: float
    texts: List[IntermediateText] = field(default_factory=list)
    thumbnail: Optional[str] = None

    def get_texts(self) -> List[IntermediateText]:
        return list(self.texts)

    def get_thumbnail(self, scale: float = 1.0) -> Optional[str]:
        # A stored thumbnail is a ready-made image URL; scale is a hint for renderers.
        return self.thumbnail


@dataclass(frozen=True)
class PageSize:
    x: float
    y: float


@dataclass
class PageInfo:
    id: str
    page_number: int
    size: PageSize
    get_data: Callable[[], IntermediatePage]


class IntermediatePageMap:
    """Lazy page collection keyed by page number.

    Each page is materialized on first access through its ``get_data`` loader;
    later lookups return the cached page.
    """

    def __init__(self, infos: List[PageInfo]) -> None:
        self._infos: Dict[int, PageInfo] = {info.page_number: info for info in infos}
        self._loaded: Dict[str, IntermediatePage] = {}

    @classmethod
    def make_by_info_list(cls, infos: List[PageInfo]) -> "IntermediatePageMap":
        return cls(list(infos))

    @property
    def page_numbers(self) -> List[int]:
        return sorted(self._infos)

    @property
    def page_count(self) -> int:
        return len(self._infos)

    def get_page_by_page_number(self, number: int) -> Optional[IntermediatePage]:
        info = self._infos.get(number)
        if info is None:
            return None
        page = self._loaded.get(info.id)
        if page is None:
            page = info.get_data()
            self._loaded[info.id] = page
        return page

    def get_page_size(self, number: int) -> Optional[PageSize]:
        info = self._infos.get(number)
        return info.size if info is not None else None

    def is_loaded(self, number: int) -> bool:
        info = self._infos.get(number)
        return info is not None and info.id in self._loaded

    @property
    def pages(self) -> List[IntermediatePage]:
        out: List[IntermediatePage] = []
        for number in self.page_numbers:
            page = self.get_page_by_page_number(number)
            if page is not None:
                out.append(page)
        return out


@dataclass
class IntermediateOutline:
    title: str
    page_number: int
    children: List["IntermediateOutline"] = field(default_factory=list)


@dataclass
class IntermediateDocument:
    id: str
    title: str
    pages_map: IntermediatePageMap
    outline: List[IntermediateOutline] = field(default_factory=list)

    @property
    def pages(self) -> List[IntermediatePage]:
        return self.pages_map.pages

    def get_outline(self) -> List[IntermediateOutline]:
        return list(self.outline)

    def get_page_by_page_number(self, number: int) -> Optional[IntermediatePage]:
        return self.pages_map.get_page_by_page_number(number)

    def get_page_size_by_page_number(self, number: int) -> Optional[PageSize]:
        return self.pages_map.get_page_size(number)

    def get_cover(self) -> Optional[str]:
        """Cover image URL: the first page's thumbnail, if any."""
        numbers = self.pages_map.page_numbers
        if not numbers:
            return None
        page = self.get_page_by_page_number(numbers[0])
        return page.get_thumbnail(1.0) if page is not None else None
