"""Tests for related searches, trending words and autocomplete."""

from portal_search.services.suggestions import (
    TRENDING_SUGGESTIONS,
    academic_related,
    autocomplete,
    related_searches,
    related_topics,
    trending_topics,
)


def test_related_search_templates():
    assert related_searches("octopus")[:3] == ["octopus meaning", "octopus examples", "what is octopus"]
    assert len(related_searches("octopus")) == 8
    assert academic_related("zzz")[0] == "zzz systematic review"
    assert related_topics("zzz") == [
        "zzz review",
        "zzz systematic review",
        "zzz meta-analysis",
        "zzz recent advances",
    ]


def test_trending_topics_counts_long_words():
    titles = ["Global markets rally", "Markets slump again", "Global rally continues"]

    assert trending_topics(titles) == ["Global", "Markets", "Rally", "Slump", "Again", "Continues"]


def test_trending_topics_ignores_short_words_and_caps_at_six():
    titles = ["a big cat ate the rat", "one two three four five seven eleven twelve"]

    assert trending_topics(titles) == ["Three", "Seven", "Eleven", "Twelve"]
    assert len(trending_topics(["alpha bravo charlie delta echoes foxtrot golfer hotel"])) == 6
    assert trending_topics([]) == []


def test_autocomplete_empty_query_is_trending():
    response = autocomplete("")

    assert response.type == "trending"
    assert response.suggestions == list(TRENDING_SUGGESTIONS[:8])
    assert response.query is None


def test_autocomplete_templates_then_trending():
    response = autocomplete("machine", limit=30)

    assert response.type == "autocomplete"
    assert response.suggestions[0] == "machine tutorial"
    assert response.suggestions[-1] == "machine learning"
    assert len(response.suggestions) == len(set(response.suggestions))


def test_autocomplete_respects_limit():
    response = autocomplete("python", limit=3)

    assert response.suggestions == ["python tutorial", "python guide", "python examples"]
    assert all("python" in s for s in autocomplete("python").suggestions)
    assert len(autocomplete("python").suggestions) == 8
