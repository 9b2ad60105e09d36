"""Tests for the knowledge-API adapters (DuckDuckGo, Wikipedia, Wikidata, Commons, Internet Archive)."""

import httpx
import pytest

from portal_search.adapters.duckduckgo import parse_instant_answer, search_duckduckgo
from portal_search.adapters.internet_archive import search_archive_videos, search_internet_archive
from portal_search.adapters.openlibrary import search_open_library
from portal_search.adapters.wikidata import search_wikidata
from portal_search.adapters.wikimedia import search_commons_images
from portal_search.adapters.wikipedia import (
    get_wikipedia_summary,
    search_wikipedia,
    search_wikipedia_images,
    wiki_lang,
)
from portal_search.models.results import InstantAnswer, WikidataSearch

DDG_PAYLOAD = {
    "AbstractText": "The octopus is a soft-bodied, eight-limbed mollusc.",
    "Results": [
        {"FirstURL": "https://official.example/one", "Text": "Official one"},
        {"FirstURL": "https://official.example/two", "Text": "Official two"},
    ],
    "RelatedTopics": [
        {"FirstURL": "https://duckduckgo.com/Cephalopod", "Text": "Cephalopod - A class of molluscs"},
        {
            "Name": "In media",
            "Topics": [
                {"FirstURL": "https://duckduckgo.com/Octopussy", "Text": "Octopussy - A 1983 film"},
            ],
        },
        {"Text": "No link here"},
    ],
    "Infobox": {"content": []},
}


def test_parse_instant_answer_order():
    answer = parse_instant_answer(DDG_PAYLOAD)

    assert answer.abstract.startswith("The octopus")
    assert [r.url for r in answer.related_topics] == [
        "https://official.example/two",
        "https://official.example/one",
        "https://duckduckgo.com/Cephalopod",
        "https://duckduckgo.com/Octopussy",
    ]
    assert answer.related_topics[0].type == "official"
    assert answer.related_topics[2].title == "Cephalopod"
    assert answer.related_topics[2].type == "related"


async def test_search_duckduckgo_failure_is_empty(http_client, routes):
    routes[("api.duckduckgo.com", "/")] = httpx.Response(500)

    assert await search_duckduckgo(http_client, "octopus") == InstantAnswer()


async def test_search_duckduckgo_invalid_json_is_empty(http_client, routes):
    routes[("api.duckduckgo.com", "/")] = httpx.Response(200, text="<html>not json</html>")

    assert await search_duckduckgo(http_client, "octopus") == InstantAnswer()


async def test_search_wikipedia_strips_snippet_markup(http_client, routes, upstream_calls):
    routes[("de.wikipedia.org", "/w/api.php")] = httpx.Response(
        200,
        json={
            "query": {
                "search": [
                    {"title": "Gemeiner Krake", "snippet": 'Der <span class="searchmatch">Krake</span> &quot;lebt&quot;'},
                ]
            }
        },
    )

    results = await search_wikipedia(http_client, "Krake", lang="de")

    assert len(results) == 1
    assert results[0].url == "https://de.wikipedia.org/wiki/Gemeiner_Krake"
    assert results[0].description == 'Der Krake "lebt"'
    assert results[0].type == "wikipedia"
    assert upstream_calls[0].url.params["srlimit"] == "8"


def test_wiki_lang_falls_back_to_english():
    assert wiki_lang("FR") == "fr"
    assert wiki_lang("en.evil.com/") == "en"
    assert wiki_lang(None) == "en"


@pytest.mark.parametrize("page_type, expected", [("standard", True), ("disambiguation", True), ("no-extract", False)])
async def test_wikipedia_summary_page_types(http_client, routes, page_type, expected):
    routes[("en.wikipedia.org", "/api/rest_v1/page/summary/")] = httpx.Response(
        200,
        json={
            "type": page_type,
            "title": "Octopus",
            "extract": "An octopus is a mollusc.",
            "thumbnail": {"source": "https://upload.wikimedia.org/octo.jpg"},
            "content_urls": {"desktop": {"page": "https://en.wikipedia.org/wiki/Octopus"}},
        },
    )

    panel = await get_wikipedia_summary(http_client, "Octopus")

    assert (panel is not None) is expected
    if panel:
        assert panel.extract == "An octopus is a mollusc."
        assert panel.thumbnail == "https://upload.wikimedia.org/octo.jpg"


async def test_wikipedia_summary_missing_page_is_none(http_client):
    assert await get_wikipedia_summary(http_client, "zzz_no_such_topic_xyz") is None


async def test_search_wikidata(http_client, routes):
    routes[("www.wikidata.org", "/w/api.php")] = httpx.Response(
        200,
        json={
            "search": [
                {"id": "Q40152", "label": "Octopus", "description": "order of molluscs",
                 "concepturi": "http://www.wikidata.org/entity/Q40152"},
                {"id": "Q1", "label": "No URI"},
            ]
        },
    )

    found = await search_wikidata(http_client, "octopus")

    assert [e.id for e in found.entities] == ["Q40152", "Q1"]
    assert found.results[0].url == "http://www.wikidata.org/entity/Q40152"
    assert found.results[1].url == "https://www.wikidata.org/wiki/Q1"
    assert found.results[1].description == "Wikidata entity: No URI"


async def test_search_wikidata_failure_is_empty(http_client):
    assert await search_wikidata(http_client, "octopus") == WikidataSearch()


async def test_search_open_library(http_client, routes):
    routes[("openlibrary.org", "/search.json")] = httpx.Response(
        200,
        json={
            "docs": [
                {"key": "/works/OL1W", "title": "Other Minds", "author_name": ["Peter Godfrey-Smith"],
                 "first_publish_year": 2016, "cover_i": 42},
                {"key": "/works/OL2W", "title": "Anonymous Tract"},
            ]
        },
    )

    books = await search_open_library(http_client, "octopus book")

    assert books[0].description == "Peter Godfrey-Smith (2016)"
    assert books[0].thumbnail == "https://covers.openlibrary.org/b/id/42-M.jpg"
    assert books[1].description == "Unknown author"
    assert all(b.type == "book" for b in books)


IMAGE_PAGES = {
    "query": {
        "pages": {
            "10": {"pageid": 10, "index": 2, "title": "File:Big octopus.jpg",
                   "imageinfo": [{"url": "https://upload.wikimedia.org/big.jpg", "thumburl": "https://upload.wikimedia.org/big-800.jpg",
                                  "width": 1600, "height": 1200,
                                  "extmetadata": {"Artist": {"value": "<a href='x'>Jane</a>"},
                                                  "LicenseShortName": {"value": "CC BY-SA 4.0"}}}]},
            "11": {"pageid": 11, "index": 1, "title": "File:Tiny icon.png",
                   "imageinfo": [{"url": "https://upload.wikimedia.org/tiny.png", "width": 64, "height": 64}]},
            "12": {"pageid": 12, "index": 3, "title": "File:Diagram.svg",
                   "imageinfo": [{"url": "https://upload.wikimedia.org/diagram.svg", "width": 800, "height": 800}]},
        }
    }
}


async def test_search_commons_images_filters_small(http_client, routes):
    routes[("commons.wikimedia.org", "/w/api.php")] = httpx.Response(200, json=IMAGE_PAGES)

    images = await search_commons_images(http_client, "octopus", limit=10)

    assert [i.id for i in images] == ["wikimedia-10", "wikimedia-12"]
    assert images[0].author == "Jane"
    assert images[0].license == "CC BY-SA 4.0"
    assert images[0].thumbnail == "https://upload.wikimedia.org/big-800.jpg"


async def test_search_wikipedia_images_skips_svg_and_small(http_client, routes):
    routes[("en.wikipedia.org", "/w/api.php")] = httpx.Response(200, json=IMAGE_PAGES)

    images = await search_wikipedia_images(http_client, "Octopus", limit=10)

    assert [i.id for i in images] == ["wiki-10"]
    assert images[0].domain == "en.wikipedia.org"
    assert images[0].source == "https://en.wikipedia.org/wiki/File:Big%20octopus.jpg"


async def test_internet_archive_results(http_client, routes):
    routes[("archive.org", "/advancedsearch.php")] = httpx.Response(
        200,
        json={
            "response": {
                "docs": [
                    {"identifier": "octo-film", "title": "Octopus Film", "description": ["First", "Second"],
                     "mediatype": "movies", "date": "1950-01-01T00:00:00Z", "downloads": 2500},
                    {"identifier": "octo-text", "mediatype": "texts"},
                ]
            }
        },
    )

    web = await search_internet_archive(http_client, "octopus")
    videos = await search_archive_videos(http_client, "octopus")

    assert [r.url for r in web] == ["https://archive.org/details/octo-film", "https://archive.org/details/octo-text"]
    assert web[0].description == "First"
    assert web[1].description == "texts on Internet Archive"
    assert videos[0].views == "2.5K downloads"
    assert videos[0].duration == "N/A"
    assert videos[0].thumbnail == "https://archive.org/services/img/octo-film"
    assert videos[1].views is None
