"""Turning filters into search criteria and API responses into models."""

from __future__ import annotations

import html
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Iterable, Mapping, Sequence

from .models import (
    Chapter,
    ContentRating,
    Filter,
    FilterType,
    Manga,
    MangaPageResult,
    MangaStatus,
    Page,
    Viewer,
)
from .urls import string_field

SORT_OPTIONS = ("", "view", "uploaded", "rating", "follow", "user_follow_count")
TYPE_OPTIONS = ("", "jp", "kr", "cn")
COMPLETED_OPTIONS = ("", "true", "false")
DEMOGRAPHICS = {"Shounen": "1", "Shoujo": "2", "Seinen": "3", "Josei": "4"}
SITE_URL = "https://comick.app/comic"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S%z"


class ParseError(ValueError):
    """Raised when a filter or an API response does not have the expected shape."""


@dataclass
class SearchQuery:
    """Search criteria gathered from a list of filters."""

    title: str = ""
    included_tags: list[str] = field(default_factory=list)
    excluded_tags: list[str] = field(default_factory=list)
    demographic_tags: list[str] = field(default_factory=list)
    sort_by: str = ""
    manga_type: str = ""
    completed: str = ""

    def is_empty(self) -> bool:
        """True when no criterion is set, so a plain listing should be shown."""
        return not (
            self.title
            or self.demographic_tags
            or self.included_tags
            or self.excluded_tags
            or self.sort_by
            or self.manga_type
            or self.completed
        )


def _as_int(value: Any, default: int) -> int:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        return int(value)
    if isinstance(value, str):
        try:
            return int(float(value))
        except ValueError:
            return default
    return default


def _as_float(value: Any, default: float) -> float:
    if isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return default
    return default


def _require_str(value: Any, what: str) -> str:
    if not isinstance(value, str):
        raise ParseError(f"{what} is not a string")
    return value


def _require_object(value: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ParseError(f"{what} is not an object")
    return value


def _require_array(value: Any, what: str) -> Sequence[Any]:
    if not isinstance(value, list):
        raise ParseError(f"{what} is not an array")
    return value


def _select(options: Sequence[str], value: Any, name: str) -> str:
    index = _as_int(value, -1)
    if not 0 <= index < len(options):
        raise ParseError(f"{name} option {index} is out of range")
    return options[index]


def parse_filters(filters: Iterable[Filter]) -> SearchQuery:
    """Collect search criteria from the filters a client sent."""
    query = SearchQuery()
    for item in filters:
        if item.kind is FilterType.TITLE:
            query.title = _require_str(item.value, "title filter value")
        elif item.kind is FilterType.GENRE:
            state = _as_int(item.value, -1)
            if state not in (0, 1):
                continue
            tag = _require_str(item.attributes.get("id"), "genre id")
            (query.included_tags if state == 1 else query.excluded_tags).append(tag)
        elif item.kind is FilterType.SELECT:
            if item.name == "Sort":
                query.sort_by = _select(SORT_OPTIONS, item.value, item.name)
            elif item.name == "Type":
                query.manga_type = _select(TYPE_OPTIONS, item.value, item.name)
            elif item.name == "Completed":
                query.completed = _select(COMPLETED_OPTIONS, item.value, item.name)
        elif item.kind is FilterType.CHECK:
            if _as_int(item.value, -1) <= 0:
                continue
            demographic = DEMOGRAPHICS.get(item.name)
            if demographic is not None:
                query.demographic_tags.append(demographic)
    return query


def _summary(entry: Any) -> Manga | None:
    if not isinstance(entry, Mapping):
        return None
    values = [entry.get(key) for key in ("title", "slug", "hid", "cover_url")]
    if not all(isinstance(value, str) for value in values):
        return None
    title, slug, hid, cover = values
    return Manga(id=f"{slug}|{hid}", title=title, cover=cover)


def parse_search_results(data: Any) -> MangaPageResult:
    """Read a search response; entries lacking a needed field are skipped."""
    entries = _require_array(data, "search response")
    manga = [m for m in (_summary(entry) for entry in entries) if m is not None]
    return MangaPageResult(manga=manga, has_more=bool(entries))


def parse_listing_entries(data: Any) -> list[Manga]:
    """Read the series out of a chapter listing response."""
    entries = _require_array(data, "listing response")
    result = []
    for entry in entries:
        if not isinstance(entry, Mapping):
            continue
        manga = _summary(entry.get("md_comics"))
        if manga is not None:
            result.append(manga)
    return result


def _first_name(people: Any, what: str) -> str:
    people = _require_array(people, what)
    if not people:
        return ""
    first = _require_object(people[0], f"first of {what}")
    return _require_str(first.get("name"), f"name in {what}")


def _genre_name(genre: Any) -> str:
    if not isinstance(genre, Mapping):
        return ""
    inner = genre.get("md_genres")
    if not isinstance(inner, Mapping):
        return ""
    name = inner.get("name")
    return name if isinstance(name, str) else ""


def parse_manga_details(data: Any, manga_id: str) -> Manga:
    """Read a series' details response into a full Manga."""
    root = _require_object(data, "details response")
    comic = _require_object(root.get("comic"), "comic")

    genres = _require_array(comic.get("md_comic_md_genres"), "genres")
    if comic.get("hentai") is True:
        rating = ContentRating.NSFW
    elif _require_str(comic.get("content_rating"), "content_rating") == "Suggestive":
        rating = ContentRating.SUGGESTIVE
    else:
        rating = ContentRating.SAFE
    country = _require_str(comic.get("country"), "country")
    viewer = Viewer.SCROLL if country in ("kr", "cn") else Viewer.RTL

    slug = manga_id.split("|")[0]
    return Manga(
        id=manga_id,
        title=string_field(comic, "title"),
        cover=string_field(comic, "cover_url"),
        author=_first_name(root.get("authors"), "authors"),
        artist=_first_name(root.get("artists"), "artists"),
        description=html.unescape(string_field(comic, "desc")),
        url=f"{SITE_URL}/{slug}",
        categories=[_genre_name(genre) for genre in genres],
        status=MangaStatus.from_code(_as_int(comic.get("status"), 0)),
        nsfw=rating,
        viewer=viewer,
    )


def _timestamp(value: Any) -> float:
    if not isinstance(value, str):
        return -1.0
    try:
        return datetime.strptime(value, DATE_FORMAT).timestamp()
    except ValueError:
        return -1.0


def _scanlator(value: Any) -> str:
    if isinstance(value, list) and value and isinstance(value[0], str):
        return value[0]
    return ""


def parse_chapters(data: Any, lang: str) -> list[Chapter]:
    """Read a chapter list response; every chapter is tagged with ``lang``."""
    root = _require_object(data, "chapters response")
    chapters = []
    for entry in _require_array(root.get("chapters"), "chapters"):
        obj = _require_object(entry, "chapter")
        chapters.append(
            Chapter(
                id=string_field(obj, "hid"),
                title=string_field(obj, "title"),
                volume=_as_float(obj.get("vol"), -1.0),
                chapter=_as_float(obj.get("chap"), 0.0),
                date_updated=_timestamp(obj.get("created_at")),
                scanlator=_scanlator(obj.get("group_name")),
                lang=lang,
            )
        )
    return chapters


def parse_pages(data: Any) -> list[Page]:
    """Read the image pages of a chapter response."""
    root = _require_object(data, "chapter response")
    chapter = root.get("chapter")
    if not isinstance(chapter, Mapping):
        return []
    images = chapter.get("images")
    if not isinstance(images, list):
        return []
    objects = (image for image in images if isinstance(image, Mapping))
    return [
        Page(index=index, url=_require_str(image.get("url"), "image url"))
        for index, image in enumerate(objects)
    ]


def language_list(data: Any) -> list[str]:
    """The languages a series' details response says it is available in."""
    root = _require_object(data, "details response")
    languages = _require_array(root.get("langList"), "langList")
    return [lang for lang in languages if isinstance(lang, str)]