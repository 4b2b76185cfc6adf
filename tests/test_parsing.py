from datetime import datetime, timezone

import pytest

from comicksource.models import (
    ContentRating,
    Filter,
    FilterType,
    MangaStatus,
    Viewer,
)
from comicksource.parsing import (
    ParseError,
    SearchQuery,
    language_list,
    parse_chapters,
    parse_filters,
    parse_listing_entries,
    parse_manga_details,
    parse_pages,
    parse_search_results,
)


def _entry(slug="one-piece", hid="abc", title="One Piece", cover="cover.jpg"):
    return {"slug": slug, "hid": hid, "title": title, "cover_url": cover}


def _details(**overrides):
    comic = {
        "title": "A Title",
        "desc": "Tom &amp; Jerry",
        "status": 1,
        "md_comic_md_genres": [
            {"md_genres": {"name": "Action"}},
            {"md_genres": {}},
        ],
        "hentai": False,
        "content_rating": "safe",
        "country": "jp",
        "cover_url": "cover.jpg",
    }
    comic.update(overrides)
    return {
        "comic": comic,
        "authors": [{"name": "Author A"}, {"name": "Author B"}],
        "artists": [],
    }


def test_empty_filters_give_empty_query():
    query = parse_filters([])
    assert query.is_empty()
    assert query == SearchQuery()


def test_title_filter():
    query = parse_filters([Filter(FilterType.TITLE, "Title", "naruto")])
    assert query.title == "naruto"
    assert not query.is_empty()


def test_title_filter_requires_string():
    with pytest.raises(ParseError):
        parse_filters([Filter(FilterType.TITLE, "Title", 5)])


def test_genre_filters_split_by_state():
    filters = [
        Filter(FilterType.GENRE, "Action", 1, {"id": "action"}),
        Filter(FilterType.GENRE, "Drama", 0, {"id": "drama"}),
        Filter(FilterType.GENRE, "Horror", 2, {"id": "horror"}),
    ]
    query = parse_filters(filters)
    assert query.included_tags == ["action"]
    assert query.excluded_tags == ["drama"]


def test_genre_filter_requires_id():
    with pytest.raises(ParseError):
        parse_filters([Filter(FilterType.GENRE, "Action", 1, {})])


@pytest.mark.parametrize(
    "name,index,attr,expected",
    [
        ("Sort", 5, "sort_by", "user_follow_count"),
        ("Sort", 1, "sort_by", "view"),
        ("Type", 2, "manga_type", "kr"),
        ("Completed", 1, "completed", "true"),
        ("Completed", 2, "completed", "false"),
    ],
)
def test_select_filters(name, index, attr, expected):
    query = parse_filters([Filter(FilterType.SELECT, name, index)])
    assert getattr(query, attr) == expected


def test_select_first_option_leaves_query_empty():
    query = parse_filters([Filter(FilterType.SELECT, "Sort", 0)])
    assert query.is_empty()


@pytest.mark.parametrize("index", [-1, 6, None])
def test_select_out_of_range_raises(index):
    with pytest.raises(ParseError):
        parse_filters([Filter(FilterType.SELECT, "Sort", index)])


def test_unknown_select_is_ignored():
    query = parse_filters([Filter(FilterType.SELECT, "Other", 99)])
    assert query.is_empty()


def test_check_filters_map_demographics():
    filters = [
        Filter(FilterType.CHECK, "Shounen", 1),
        Filter(FilterType.CHECK, "Josei", 1),
        Filter(FilterType.CHECK, "Seinen", 0),
        Filter(FilterType.CHECK, "Unknown", 1),
    ]
    assert parse_filters(filters).demographic_tags == ["1", "4"]


def test_search_results():
    data = [_entry(), {"slug": "x", "hid": "y", "title": "T"}, "junk"]
    result = parse_search_results(data)
    assert result.has_more is True
    assert [m.id for m in result.manga] == ["one-piece|abc"]
    assert result.manga[0].title == "One Piece"
    assert result.manga[0].cover == "cover.jpg"
    assert result.manga[0].viewer is Viewer.RTL


def test_empty_search_results_have_no_more():
    result = parse_search_results([])
    assert result.manga == []
    assert result.has_more is False


def test_search_results_require_array():
    with pytest.raises(ParseError):
        parse_search_results({"results": []})


def test_listing_entries():
    data = [
        {"md_comics": _entry(slug="a", hid="1")},
        {"md_comics": _entry(slug="b", hid=None)},
        {"other": _entry()},
        {"md_comics": _entry(slug="c", hid="3")},
    ]
    manga = parse_listing_entries(data)
    assert [m.id for m in manga] == ["a|1", "c|3"]
    assert [m.slug() for m in manga] == ["a", "c"]


def test_listing_requires_array():
    with pytest.raises(ParseError):
        parse_listing_entries("nope")


def test_manga_details():
    manga = parse_manga_details(_details(), "a-title|xyz")
    assert manga.id == "a-title|xyz"
    assert manga.title == "A Title"
    assert manga.description == "Tom & Jerry"
    assert manga.status is MangaStatus.ONGOING
    assert manga.categories == ["Action", ""]
    assert manga.nsfw is ContentRating.SAFE
    assert manga.viewer is Viewer.RTL
    assert manga.author == "Author A"
    assert manga.artist == ""
    assert manga.url == "https://comick.app/comic/a-title"


def test_details_hentai_is_nsfw():
    manga = parse_manga_details(_details(hentai=True), "s|h")
    assert manga.nsfw is ContentRating.NSFW


def test_details_suggestive():
    manga = parse_manga_details(_details(content_rating="Suggestive"), "s|h")
    assert manga.nsfw is ContentRating.SUGGESTIVE


@pytest.mark.parametrize("country", ["kr", "cn"])
def test_details_scroll_viewer(country):
    manga = parse_manga_details(_details(country=country), "s|h")
    assert manga.viewer is Viewer.SCROLL


def test_details_status_completed_and_missing():
    assert parse_manga_details(_details(status=2), "s|h").status is MangaStatus.COMPLETED
    assert parse_manga_details(_details(status=None), "s|h").status is MangaStatus.UNKNOWN


@pytest.mark.parametrize(
    "overrides",
    [{"country": None}, {"content_rating": None}, {"md_comic_md_genres": None}],
)
def test_details_missing_required_fields(overrides):
    with pytest.raises(ParseError):
        parse_manga_details(_details(**overrides), "s|h")


def test_details_requires_comic_object():
    with pytest.raises(ParseError):
        parse_manga_details({"authors": [], "artists": []}, "s|h")


def test_chapters():
    data = {
        "chapters": [
            {
                "hid": "ch1",
                "title": "Start",
                "vol": "2",
                "chap": "10.5",
                "created_at": "2023-01-02T03:04:05Z",
                "group_name": ["Group"],
            },
            {"hid": "ch2"},
        ]
    }
    chapters = parse_chapters(data, "fr")
    first, second = chapters
    assert first.id == "ch1"
    assert first.title == "Start"
    assert first.volume == 2.0
    assert first.chapter == 10.5
    expected = datetime(2023, 1, 2, 3, 4, 5, tzinfo=timezone.utc).timestamp()
    assert first.date_updated == expected
    assert first.scanlator == "Group"
    assert first.lang == "fr"
    assert (second.volume, second.chapter, second.date_updated) == (-1.0, 0.0, -1.0)
    assert second.scanlator == ""
    assert second.title == ""


def test_chapters_require_objects():
    with pytest.raises(ParseError):
        parse_chapters({"chapters": ["bad"]}, "en")
    with pytest.raises(ParseError):
        parse_chapters({}, "en")


def test_pages_index_only_objects():
    data = {"chapter": {"images": [{"url": "a.png"}, "skip", {"url": "b.png"}]}}
    pages = parse_pages(data)
    assert [(p.index, p.url) for p in pages] == [(0, "a.png"), (1, "b.png")]


def test_pages_missing_chapter_is_empty():
    assert parse_pages({}) == []
    assert parse_pages({"chapter": {"images": None}}) == []


def test_pages_require_url():
    with pytest.raises(ParseError):
        parse_pages({"chapter": {"images": [{"url": 3}]}})


def test_language_list():
    assert language_list({"langList": ["en", 4, "zh-hk"]}) == ["en", "zh-hk"]
    with pytest.raises(ParseError):
        language_list({"comic": {}})