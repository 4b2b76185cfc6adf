"""The comick source: fetches API responses and turns them into models."""

from __future__ import annotations

from typing import Any, Callable, Iterable, Optional, Sequence

import requests

from .models import Chapter, DeepLink, Filter, Manga, MangaPageResult, Page
from .parsing import (
    ParseError,
    language_list,
    parse_chapters,
    parse_filters,
    parse_listing_entries,
    parse_manga_details,
    parse_pages,
    parse_search_results,
)
from .urls import (
    API_URL,
    BASE_URL,
    DEFAULT_LANG,
    chapters_url,
    details_url,
    listing_url,
    page_list_url,
    search_url,
)

DEFAULT_CHAPTER_LIMIT = 100
FILTERED_LANG = "zh-hk"
REQUEST_TIMEOUT = 30

Fetcher = Callable[[str], Any]


def fetch_json(url: str) -> Any:
    """GET ``url`` and return its decoded JSON body."""
    response = requests.get(url, timeout=REQUEST_TIMEOUT)
    response.raise_for_status()
    return response.json()


def _total(value: Any) -> int:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        return int(value)
    return -1


class ComickSource:
    """Access to the comick catalogue through its JSON API."""

    def __init__(
        self,
        fetch: Optional[Fetcher] = None,
        languages: Optional[Sequence[str]] = None,
        api_url: str = API_URL,
        base_url: str = BASE_URL,
    ) -> None:
        self.fetch: Fetcher = fetch if fetch is not None else fetch_json
        self.languages = list(languages or [])
        self.api_url = api_url
        self.base_url = base_url

    def lang_code(self) -> str:
        """The preferred language: the first configured one, else English."""
        return self.languages[0] if self.languages else DEFAULT_LANG

    def get_manga_list(self, filters: Iterable[Filter], page: int) -> MangaPageResult:
        """Search with the given filters; with none set, show the hot listing."""
        query = parse_filters(filters)
        if query.is_empty():
            return self.get_manga_listing("Hot", page)
        url = search_url(
            self.api_url,
            query.title,
            query.included_tags,
            query.excluded_tags,
            query.demographic_tags,
            query.manga_type,
            query.sort_by,
            query.completed,
            page,
        )
        return parse_search_results(self.fetch(url))

    def get_manga_listing(self, name: str, page: int) -> MangaPageResult:
        """One page of the ``Hot`` listing or, for any other name, the newest."""
        lang = self.lang_code()
        entries = parse_listing_entries(
            self.fetch(listing_url(self.api_url, name, page, lang))
        )
        if lang == FILTERED_LANG:
            entries = [manga for manga in entries if self._available_in(manga, lang)]
        return MangaPageResult(manga=entries, has_more=True)

    def _available_in(self, manga: Manga, lang: str) -> bool:
        data = self.fetch(f"{self.api_url}/comic/{manga.id}?tachiyomi=true")
        return lang in language_list(data)

    def get_manga_details(self, manga_id: str) -> Manga:
        """Full details of the series with id ``slug|hid``."""
        data = self.fetch(details_url(self.api_url, manga_id))
        return parse_manga_details(data, manga_id)

    def get_chapter_list(self, manga_id: str) -> list[Chapter]:
        """All chapters of a series in the preferred language."""
        lang = self.lang_code()
        first = self.fetch(
            chapters_url(self.api_url, manga_id, DEFAULT_CHAPTER_LIMIT, 1, lang)
        )
        if not isinstance(first, dict):
            raise ParseError("chapters response is not an object")
        limit = _total(first.get("total"))
        data = self.fetch(chapters_url(self.api_url, manga_id, limit, 1, lang))
        return parse_chapters(data, lang)

    def get_page_list(self, manga_id: str, chapter_id: str) -> list[Page]:
        """The image pages of a chapter."""
        return parse_pages(self.fetch(page_list_url(self.api_url, chapter_id)))

    def image_headers(self) -> dict[str, str]:
        """Headers to send with every image request."""
        return {"Referer": self.base_url}

    def handle_url(self, url: str) -> DeepLink:
        """Resolve a URL opened by the user to the series it names."""
        data = self.fetch(details_url(self.base_url, url))
        return DeepLink(manga=parse_manga_details(data, url), chapter=None)