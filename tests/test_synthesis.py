"""Tests for the AI summary layer and its fallbacks."""

from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest
from openai import OpenAIError

from portal_search.dependencies import get_synthesizer
from portal_search.models.academic import AcademicPaper
from portal_search.models.results import SearchResult
from portal_search.services.synthesis import (
    WEB_SYSTEM_PROMPT,
    Synthesizer,
    build_context,
    extractive_fallback,
)

RESULTS = [
    SearchResult(title="Octopus", url="https://en.wikipedia.org/wiki/Octopus", description="A mollusc"),
    SearchResult(title="Cephalopod", url="https://en.wikipedia.org/wiki/Cephalopod", description="A class"),
]


def fake_openai(content=None, error=None):
    """Stand-in for AsyncOpenAI exposing only ``chat.completions.create``."""
    if error is not None:
        create = AsyncMock(side_effect=error)
    else:
        message = SimpleNamespace(content=content)
        create = AsyncMock(return_value=SimpleNamespace(choices=[SimpleNamespace(message=message)]))
    return SimpleNamespace(chat=SimpleNamespace(completions=SimpleNamespace(create=create)))


def test_build_context_numbers_sources_after_abstracts():
    context = build_context(RESULTS, ["Octopuses have eight arms.", ""])

    assert context.startswith("Octopuses have eight arms.\n\nSources:\n")
    assert "[1] Octopus: A mollusc" in context
    assert "[2] Cephalopod: A class" in context


def test_extractive_fallback():
    assert extractive_fallback(["", "  ", "Second abstract"], "fallback") == "Second abstract"
    assert extractive_fallback([], "fallback") == "fallback"


async def test_without_key_uses_abstract(settings):
    synthesizer = Synthesizer(settings)

    assert not synthesizer.enabled
    answer = await synthesizer.synthesize("octopus", RESULTS, ["DDG abstract"], 'Found 2 results for "octopus".')
    assert answer == "DDG abstract"


async def test_without_key_or_abstract_uses_template(settings):
    answer = await Synthesizer(settings).synthesize("octopus", RESULTS, [], 'Found 2 results for "octopus".')

    assert answer == 'Found 2 results for "octopus".'


async def test_completion_is_returned_stripped(settings):
    client = fake_openai("  Octopuses are clever [1].  ")
    synthesizer = Synthesizer(settings, client=client)

    answer = await synthesizer.synthesize("octopus", RESULTS, ["DDG abstract"], "fallback")

    assert answer == "Octopuses are clever [1]."
    kwargs = client.chat.completions.create.await_args.kwargs
    assert kwargs["model"] == settings.ai_model
    assert kwargs["messages"][0] == {"role": "system", "content": WEB_SYSTEM_PROMPT}
    assert 'Query: "octopus"' in kwargs["messages"][1]["content"]


async def test_gateway_error_falls_back(settings):
    synthesizer = Synthesizer(settings, client=fake_openai(error=OpenAIError("gateway down")))

    answer = await synthesizer.synthesize("octopus", RESULTS, ["DDG abstract"], "fallback")

    assert answer == "DDG abstract"


async def test_empty_completion_falls_back(settings):
    synthesizer = Synthesizer(settings, client=fake_openai(""))

    assert await synthesizer.synthesize("octopus", RESULTS, [], "fallback") == "fallback"


async def test_paper_summary_empty_when_no_papers(settings):
    client = fake_openai("unused")

    assert await Synthesizer(settings, client=client).summarize_papers("zzz", []) == ""
    client.chat.completions.create.assert_not_awaited()


async def test_paper_summary_template_without_key(settings):
    papers = [
        AcademicPaper(id="arxiv-1", title="One", url="https://arxiv.org/abs/1", source="arxiv"),
        AcademicPaper(id="arxiv-2", title="Two", url="https://arxiv.org/abs/2", source="arxiv"),
    ]

    summary = await Synthesizer(settings).summarize_papers("octopus", papers)

    assert summary == 'Found 2 papers about "octopus".'


async def test_paper_summary_requests_short_completion(settings):
    client = fake_openai("Research centres on cognition.")
    papers = [
        AcademicPaper(
            id="arxiv-1",
            title="One",
            url="https://arxiv.org/abs/1",
            source="arxiv",
            authors=["A", "B", "C"],
            abstract="Abstract text",
        )
    ]

    summary = await Synthesizer(settings, client=client).summarize_papers("octopus", papers)

    assert summary == "Research centres on cognition."
    kwargs = client.chat.completions.create.await_args.kwargs
    assert kwargs["max_tokens"] == 300
    assert '- "One" by A, B et al.: Abstract text...' in kwargs["messages"][0]["content"]


async def test_research_summary_template(settings):
    summary = await Synthesizer(settings).summarize_research("octopus", RESULTS)

    assert summary == 'Found 2 academic sources for "octopus".'


async def test_aclose_closes_created_client(settings):
    settings.ai_gateway_api_key = "sk-test"
    synthesizer = Synthesizer(settings)
    created = synthesizer.client

    await synthesizer.aclose()

    assert created.is_closed()


async def test_aclose_leaves_injected_client_open(settings):
    client = fake_openai("unused")
    client.close = AsyncMock()
    synthesizer = Synthesizer(settings, client=client)

    await synthesizer.aclose()

    client.close.assert_not_awaited()


async def test_request_dependency_closes_gateway_client(settings):
    settings.ai_gateway_api_key = "sk-test"
    dependency = get_synthesizer(settings)
    synthesizer = await anext(dependency)
    created = synthesizer.client

    with pytest.raises(StopAsyncIteration):
        await anext(dependency)

    assert created.is_closed()
