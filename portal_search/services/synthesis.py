"""
AI summaries over aggregated results.

Talks to an OpenAI-compatible chat-completion gateway through the ``openai``
SDK. A missing key, a gateway error or an empty completion never fails the
request: callers always receive a string, falling back to an extractive
abstract or a templated sentence.
"""

import logging
from typing import Iterable, List, Optional, Sequence

from openai import AsyncOpenAI, OpenAIError

from ..config import Settings
from ..models.academic import AcademicPaper
from ..models.news import NewsArticle
from ..models.results import SearchResult

logger = logging.getLogger(__name__)

WEB_SYSTEM_PROMPT = (
    "You are a search assistant. Provide comprehensive answers based on search results. "
    "Cite sources [1], [2], etc. Be factual and concise."
)

NEWS_SYSTEM_PROMPT = (
    "You are a news summarizer. Provide a brief, objective 2-3 sentence summary of the main news themes."
)

MAX_CONTEXT_RESULTS = 8
MAX_CONTEXT_PAPERS = 8
MAX_CONTEXT_ARTICLES = 5


def build_context(results: Sequence[SearchResult], abstracts: Iterable[str] = ()) -> str:
    """Direct abstracts first, then the top results as ``[i] title: description`` lines."""
    parts = [text for text in abstracts if text]
    lines = [f"[{i}] {r.title}: {r.description}" for i, r in enumerate(results[:MAX_CONTEXT_RESULTS], start=1)]
    parts.append("Sources:\n" + "\n".join(lines))
    return "\n\n".join(parts)


def extractive_fallback(abstracts: Iterable[str], fallback: str) -> str:
    """First non-empty abstract, else the templated fallback."""
    for text in abstracts:
        if text and text.strip():
            return text
    return fallback


def _paper_line(paper: AcademicPaper) -> str:
    authors = ", ".join(paper.authors[:2])
    if len(paper.authors) > 2:
        authors += " et al."
    return f'- "{paper.title}" by {authors}: {paper.abstract[:150]}...'


class Synthesizer:
    """Chat-completion summaries with a fixed prompt per search mode."""

    def __init__(self, settings: Settings, client: Optional[AsyncOpenAI] = None):
        self.settings = settings
        self._client = client
        self._owns_client = client is None

    @property
    def enabled(self) -> bool:
        return self._client is not None or self.settings.ai_enabled

    @property
    def client(self) -> AsyncOpenAI:
        if self._client is None:
            self._client = AsyncOpenAI(
                api_key=self.settings.ai_gateway_api_key,
                base_url=self.settings.ai_gateway_base_url,
                timeout=self.settings.ai_timeout,
                max_retries=0,
            )
        return self._client

    async def aclose(self) -> None:
        """Close the gateway client if this synthesizer created it."""
        if self._owns_client and self._client is not None:
            await self._client.close()
            self._client = None

    async def complete(self, messages: List[dict], max_tokens: Optional[int] = None) -> str:
        """
        Run one chat completion.

        Returns the stripped message content, or ``""`` when AI is disabled,
        the gateway fails or the completion is empty.
        """
        if not self.enabled:
            logger.debug("AI gateway key not configured, skipping completion")
            return ""

        kwargs = {"model": self.settings.ai_model, "messages": messages}
        if max_tokens:
            kwargs["max_tokens"] = max_tokens
        try:
            completion = await self.client.chat.completions.create(**kwargs)
        except OpenAIError as e:
            logger.warning(f"AI gateway error: {e!r}")
            return ""
        except Exception as e:
            logger.warning(f"AI completion failed: {e!r}")
            return ""

        if not completion.choices:
            return ""
        return (completion.choices[0].message.content or "").strip()

    async def synthesize(
        self,
        query: str,
        results: Sequence[SearchResult],
        abstracts: Sequence[str],
        fallback: str,
    ) -> str:
        """Cited narrative answer for a web query; extractive fallback on any failure."""
        context = build_context(results, abstracts)
        answer = await self.complete(
            [
                {"role": "system", "content": WEB_SYSTEM_PROMPT},
                {
                    "role": "user",
                    "content": f'Query: "{query}"\n\n{context}\n\nProvide a helpful answer with citations.',
                },
            ]
        )
        if answer:
            logger.info(f"AI answer generated ({len(answer)} chars)")
            return answer
        return extractive_fallback(abstracts, fallback)

    async def summarize_research(self, query: str, results: Sequence[SearchResult]) -> str:
        """Research-landscape summary for the academic filter of web search."""
        if not results:
            return ""
        context = "\n".join(f"- {r.title}: {r.description}" for r in results[:10])
        prompt = (
            f'You are a research assistant. Based on these academic papers and sources about "{query}", '
            "provide a helpful summary of the research landscape, key findings, and notable papers. "
            f"Be concise and cite specific papers when relevant.\n\nSources:\n{context}"
        )
        answer = await self.complete([{"role": "user", "content": prompt}], max_tokens=800)
        return answer or f'Found {len(results)} academic sources for "{query}".'

    async def summarize_papers(self, query: str, papers: Sequence[AcademicPaper]) -> str:
        """2-3 sentence overview of the papers; ``""`` when there are none."""
        if not papers:
            return ""
        context = "\n".join(_paper_line(p) for p in papers[:MAX_CONTEXT_PAPERS])
        prompt = (
            f'You are a research assistant. Based on these academic papers about "{query}", provide a brief '
            "2-3 sentence summary of the current research landscape and key themes. Be specific and cite "
            f"paper titles when relevant.\n\nPapers:\n{context}"
        )
        answer = await self.complete([{"role": "user", "content": prompt}], max_tokens=300)
        return answer or f'Found {len(papers)} papers about "{query}".'

    async def summarize_news(self, query: str, articles: Sequence[NewsArticle]) -> str:
        if not articles:
            return ""
        context = "\n".join(f"- {a.title}: {a.description}" for a in articles[:MAX_CONTEXT_ARTICLES])
        answer = await self.complete(
            [
                {"role": "system", "content": NEWS_SYSTEM_PROMPT},
                {"role": "user", "content": f"Summarize these news headlines:\n{context}"},
            ]
        )
        return answer or f'Found {len(articles)} articles for "{query}".'
