"""Building API URLs and reading plain fields from JSON objects."""

from __future__ import annotations

from typing import Any, Iterable, Mapping

API_URL = "https://api.comick.fun"
BASE_URL = "https://comick.io"
DEFAULT_LANG = "en"


def _id_part(manga_id: str, position: int) -> str:
    parts = manga_id.split("|")
    return parts[position] if len(parts) > position else ""


def search_url(
    api_url: str,
    query: str,
    included_tags: Iterable[str],
    excluded_tags: Iterable[str],
    demographic_tags: Iterable[str],
    manga_type: str,
    sort_by: str,
    completed: str,
    page: int,
) -> str:
    """URL of the search endpoint for the given criteria."""
    parts = [f"{api_url}/v1.0/search?page={page}&tachiyomi=true"]
    if query:
        parts.append(f"&t=true&q={query.replace(' ', '%20')}")
    parts.extend(f"&demographic={tag}" for tag in demographic_tags)
    parts.extend(f"&genres={tag}" for tag in included_tags)
    parts.extend(f"&excludes={tag}" for tag in excluded_tags)
    if sort_by:
        parts.append(f"&sort={sort_by}")
    if manga_type:
        parts.append(f"&country={manga_type}")
    if completed:
        parts.append(f"&completed={completed}")
    return "".join(parts)


def listing_url(api_url: str, list_name: str, page: int, lang: str) -> str:
    """URL of a chapter listing: ``Hot`` orders by heat, anything else by date."""
    order = "hot" if list_name == "Hot" else "new"
    return f"{api_url}/chapter?lang={lang}&page={page}&order={order}&tachiyomi=true"


def details_url(api_url: str, manga_id: str) -> str:
    """URL of a series' details, addressed by the slug part of its id."""
    return f"{api_url}/comic/{_id_part(manga_id, 0)}?tachiyomi=true"


def chapters_url(api_url: str, manga_id: str, limit: int, page: int, lang: str) -> str:
    """URL of a series' chapter list, addressed by the hid part of its id."""
    return (
        f"{api_url}/comic/{_id_part(manga_id, 1)}/chapters"
        f"?limit={limit}&page={page}&lang={lang}"
    )


def page_list_url(api_url: str, chapter_id: str) -> str:
    """URL of a chapter's page images."""
    return f"{api_url}/chapter/{chapter_id}?tachiyomi=true"


def string_field(data: Mapping[str, Any], key: str) -> str:
    """The string stored under ``key``, or an empty string if there is none."""
    value = data.get(key)
    return value if isinstance(value, str) else ""