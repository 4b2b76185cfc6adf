"""Data types returned by the comick source."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Optional


class MangaStatus(Enum):
    """Publication status of a series."""

    UNKNOWN = "unknown"
    ONGOING = "ongoing"
    COMPLETED = "completed"

    @classmethod
    def from_code(cls, code: int) -> "MangaStatus":
        """Map the API's numeric status code to a status."""
        return {1: cls.ONGOING, 2: cls.COMPLETED}.get(code, cls.UNKNOWN)


class ContentRating(Enum):
    """How suitable a series is for all audiences."""

    SAFE = "safe"
    SUGGESTIVE = "suggestive"
    NSFW = "nsfw"


class Viewer(Enum):
    """Preferred reading mode."""

    RTL = "rtl"
    SCROLL = "scroll"


class FilterType(Enum):
    """Kinds of search filters a client may send."""

    TITLE = "title"
    GENRE = "genre"
    SELECT = "select"
    CHECK = "check"
    SORT = "sort"
    GROUP = "group"


@dataclass
class Filter:
    """A single search filter.

    ``value`` is a string for title filters and an integer for the others;
    ``attributes`` holds extra data such as a genre's ``id``.
    """

    kind: FilterType
    name: str = ""
    value: Any = None
    attributes: Mapping[str, Any] = field(default_factory=dict)


@dataclass
class Manga:
    """A series; its id has the form ``slug|hid``."""

    id: str
    title: str = ""
    cover: str = ""
    author: str = ""
    artist: str = ""
    description: str = ""
    url: str = ""
    categories: list[str] = field(default_factory=list)
    status: MangaStatus = MangaStatus.UNKNOWN
    nsfw: ContentRating = ContentRating.SAFE
    viewer: Viewer = Viewer.RTL

    def slug(self) -> str:
        """The part of the id before the first ``|``."""
        return self.id.split("|")[0]

    def hid(self) -> str:
        """The part of the id after the first ``|``, or an empty string."""
        parts = self.id.split("|")
        return parts[1] if len(parts) > 1 else ""


@dataclass
class Chapter:
    """A chapter of a series."""

    id: str
    title: str = ""
    volume: float = -1.0
    chapter: float = 0.0
    date_updated: float = -1.0
    scanlator: str = ""
    url: str = ""
    lang: str = "en"


@dataclass
class Page:
    """One image page of a chapter."""

    index: int
    url: str = ""
    base64: str = ""
    text: str = ""


@dataclass
class MangaPageResult:
    """One page of a list of series."""

    manga: list[Manga] = field(default_factory=list)
    has_more: bool = False


@dataclass
class DeepLink:
    """What a URL opened by the user points at."""

    manga: Optional[Manga] = None
    chapter: Optional[Chapter] = None