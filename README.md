# comicksource

A small client library for the Comick manga catalogue API. It builds the
API's URLs, fetches the JSON responses and turns them into plain Python
dataclasses: `Manga`, `Chapter`, `Page`, `MangaPageResult` and `DeepLink`.

## Installation

```
pip install comicksource
```

To run the test suite:

```
pip install "comicksource[test]"
pytest
```

## Usage

```python
from comicksource.source import ComickSource

source = ComickSource(languages=["en"])

# The "Hot" listing, first page
result = source.get_manga_listing("Hot", 1)
for manga in result.manga:
    print(manga.id, manga.title)

# Full details and chapters of one series
manga = source.get_manga_details(result.manga[0].id)
print(manga.title, manga.status, manga.author)

chapters = source.get_chapter_list(manga.id)
pages = source.get_page_list(manga.id, chapters[0].id)
for page in pages:
    print(page.index, page.url)
```

Series ids have the form `slug|hid`; `Manga.slug()` and `Manga.hid()`
return the two halves. Details are looked up by the slug, chapter lists
by the hid.

### Listings

`get_manga_listing(name, page)` returns the `"Hot"` listing for that
name and the newest listing for any other name. Listing results always
report `has_more=True`.

### Searching with filters

`get_manga_list(filters, page)` takes `Filter` objects from
`comicksource.models`:

- `FilterType.TITLE` with a string `value`: the search text.
- `FilterType.GENRE` with `attributes={"id": ...}`: `value` 1 includes
  the genre, 0 excludes it, anything else ignores it.
- `FilterType.SELECT` named `Sort`, `Type` or `Completed`, with an index
  `value` into the options `("", "view", "uploaded", "rating", "follow",
  "user_follow_count")`, `("", "jp", "kr", "cn")` and
  `("", "true", "false")` respectively. An index out of range raises
  `comicksource.parsing.ParseError`.
- `FilterType.CHECK` named `Shounen`, `Shoujo`, `Seinen` or `Josei`,
  active when `value` is positive.

When no criterion is set, the `"Hot"` listing is returned instead. A
search result's `has_more` is true when the response held any entries.

The pieces can also be used alone: `comicksource.parsing.parse_filters`
gathers filters into a `SearchQuery`, and `comicksource.urls.search_url`
builds the matching URL.

### Languages

The first entry of `languages` (`ComickSource.lang_code()`) chooses the
listing and chapter language; `"en"` is used when none is given. With
`"zh-hk"`, listings fetch each series' details and keep only those whose
language list contains it.

### Images

Page images need a referer: `source.image_headers()` returns
`{"Referer": source.base_url}` to send with each image request.

### Opening a link

`source.handle_url(value)` fetches series details under
`source.base_url`, addressed by the slug part of `value`, and returns a
`DeepLink` holding that series and no chapter.

### Custom transport

`ComickSource` takes a `fetch` callable that receives a URL and returns
decoded JSON. The default, `comicksource.source.fetch_json`, performs a
GET with `requests` (30 second timeout) and raises for HTTP error
statuses. Supplying your own callable lets you add caching or serve
canned responses in tests.

### Errors

Responses that lack a required field or have the wrong shape raise
`comicksource.parsing.ParseError`, a subclass of `ValueError`. Optional
fields fall back to defaults: empty strings, volume `-1.0`, chapter
`0.0`, and date `-1.0` when `created_at` cannot be parsed.

## What it does not do

This is a library only. It has no command-line program, does not
download or store images or chapters, and keeps no cache or reading
history of its own.