"""Tests for the arXiv and PubMed adapters against canned upstream payloads."""

import httpx

from portal_search.adapters.arxiv import arxiv_result, build_search_query, parse_arxiv_feed, search_arxiv
from portal_search.adapters.pubmed import build_term, parse_abstracts, pubmed_result, search_pubmed
from portal_search.models.academic import AcademicPaper

ARXIV_FEED = """<?xml version="1.0" encoding="UTF-8"?>
<feed xmlns="http://www.w3.org/2005/Atom" xmlns:arxiv="http://arxiv.org/schemas/atom">
  <title>ArXiv Query</title>
  <entry>
    <id>http://arxiv.org/abs/2301.00001v1</id>
    <published>2023-01-01T10:00:00Z</published>
    <title>Deep
      Learning   for Octopi</title>
    <summary>  We study   cephalopod
      cognition.  </summary>
    <author><name>Ada Lovelace</name></author>
    <author><name>Alan Turing</name></author>
    <author><name>Grace Hopper</name></author>
    <author><name>Edsger Dijkstra</name></author>
    <arxiv:doi>10.1000/octo</arxiv:doi>
    <category term="cs.LG" scheme="http://arxiv.org/schemas/atom"/>
    <category term="cs.AI" scheme="http://arxiv.org/schemas/atom"/>
    <category term="q-bio.NC" scheme="http://arxiv.org/schemas/atom"/>
    <category term="stat.ML" scheme="http://arxiv.org/schemas/atom"/>
    <category term="cs.NE" scheme="http://arxiv.org/schemas/atom"/>
    <category term="cs.CV" scheme="http://arxiv.org/schemas/atom"/>
  </entry>
  <entry>
    <id>http://arxiv.org/abs/2302.00002v2</id>
    <title>Second Paper</title>
    <summary>Short.</summary>
  </entry>
</feed>
"""

EFETCH_XML = """<?xml version="1.0" ?>
<PubmedArticleSet>
  <PubmedArticle>
    <MedlineCitation Status="MEDLINE">
      <PMID Version="1">111</PMID>
      <Article>
        <Abstract>
          <AbstractText Label="BACKGROUND">Octopus <i>cognition</i> matters.</AbstractText>
          <AbstractText Label="METHODS">Ignored second section.</AbstractText>
        </Abstract>
      </Article>
    </MedlineCitation>
  </PubmedArticle>
</PubmedArticleSet>
"""

ESEARCH = {"esearchresult": {"idlist": ["111", "222", "333"]}}
ESUMMARY = {
    "result": {
        "uids": ["111", "222", "333"],
        "111": {
            "title": "A <i>study</i> of octopus",
            "authors": [{"name": "Smith J"}, {"name": "Doe A"}],
            "pubdate": "2023 Jun 1",
            "source": "Nature",
            "articleids": [
                {"idtype": "pubmed", "value": "111"},
                {"idtype": "doi", "value": "10.1/abc"},
                {"idtype": "pmc", "value": "PMC123"},
            ],
            "pmcrefcount": 7,
        },
        "222": {"title": "Second", "authors": [], "articleids": []},
        "333": {"error": "cannot get document summary"},
    }
}


def test_parse_arxiv_feed_fields():
    papers = parse_arxiv_feed(ARXIV_FEED)

    assert len(papers) == 2
    first = papers[0]
    assert first.id == "arxiv-2301.00001v1"
    assert first.title == "Deep Learning for Octopi"
    assert first.abstract == "We study cephalopod cognition."
    assert first.url == "http://arxiv.org/abs/2301.00001v1"
    assert first.pdf_url == "http://arxiv.org/pdf/2301.00001v1.pdf"
    assert first.authors == ["Ada Lovelace", "Alan Turing", "Grace Hopper", "Edsger Dijkstra"]
    assert first.categories == ["cs.LG", "cs.AI", "q-bio.NC", "stat.ML", "cs.NE"]
    assert first.doi == "10.1000/octo"
    assert first.published_date == "2023-01-01T10:00:00Z"
    assert papers[1].published_date is None
    assert papers[1].doi is None


def test_arxiv_web_result_description():
    result = arxiv_result(parse_arxiv_feed(ARXIV_FEED)[0])

    assert result.type == "academic"
    assert result.description.startswith(
        "By Ada Lovelace, Alan Turing, Grace Hopper • 2023-01-01 • cs.LG, cs.AI. We study"
    )
    assert result.description.endswith("...")


def test_category_filters():
    assert build_search_query("octopus", "cs") == "all:octopus AND cat:cs.*"
    assert build_search_query("octopus", "unknown") == "all:octopus"
    assert build_term("octopus", "neuroscience") == "octopus neuroscience[mesh]"
    assert build_term("octopus", None) == "octopus"


async def test_search_arxiv_sends_query(http_client, routes, upstream_calls):
    routes[("export.arxiv.org", "/api/query")] = httpx.Response(200, text=ARXIV_FEED)

    papers = await search_arxiv(http_client, "octopus", limit=5, category="physics")

    assert [p.id for p in papers] == ["arxiv-2301.00001v1", "arxiv-2302.00002v2"]
    params = upstream_calls[0].url.params
    assert params["search_query"] == "all:octopus AND cat:physics.*"
    assert params["max_results"] == "5"


async def test_search_arxiv_malformed_xml_is_empty(http_client, routes):
    routes[("export.arxiv.org", "/api/query")] = httpx.Response(200, text="<feed><entry>")

    assert await search_arxiv(http_client, "octopus") == []


async def test_search_arxiv_http_error_is_empty(http_client, routes):
    routes[("export.arxiv.org", "/api/query")] = httpx.Response(503, text="down")

    assert await search_arxiv(http_client, "octopus") == []


def test_parse_abstracts_takes_first_section():
    assert parse_abstracts(EFETCH_XML) == {"111": "Octopus cognition matters."}


async def test_search_pubmed_full_pipeline(http_client, routes):
    routes[("eutils.ncbi.nlm.nih.gov", "/entrez/eutils/esearch.fcgi")] = httpx.Response(200, json=ESEARCH)
    routes[("eutils.ncbi.nlm.nih.gov", "/entrez/eutils/esummary.fcgi")] = httpx.Response(200, json=ESUMMARY)
    routes[("eutils.ncbi.nlm.nih.gov", "/entrez/eutils/efetch.fcgi")] = httpx.Response(200, text=EFETCH_XML)

    papers = await search_pubmed(http_client, "octopus", limit=3)

    assert [p.id for p in papers] == ["pubmed-111", "pubmed-222"]
    first = papers[0]
    assert first.title == "A study of octopus"
    assert first.abstract == "Octopus cognition matters."
    assert first.url == "https://pubmed.ncbi.nlm.nih.gov/111/"
    assert first.pdf_url == "https://www.ncbi.nlm.nih.gov/pmc/articles/PMC123/pdf/"
    assert first.doi == "10.1/abc"
    assert first.citations == 7
    assert first.journal == "Nature"
    assert papers[1].abstract == ""
    assert papers[1].pdf_url is None
    assert papers[1].citations == 0


async def test_search_pubmed_keeps_papers_when_efetch_fails(http_client, routes):
    routes[("eutils.ncbi.nlm.nih.gov", "/entrez/eutils/esearch.fcgi")] = httpx.Response(200, json=ESEARCH)
    routes[("eutils.ncbi.nlm.nih.gov", "/entrez/eutils/esummary.fcgi")] = httpx.Response(200, json=ESUMMARY)
    routes[("eutils.ncbi.nlm.nih.gov", "/entrez/eutils/efetch.fcgi")] = httpx.Response(500)

    papers = await search_pubmed(http_client, "octopus", limit=3)

    assert len(papers) == 2
    assert all(p.abstract == "" for p in papers)


async def test_search_pubmed_zero_ids_short_circuits(http_client, routes, upstream_calls):
    routes[("eutils.ncbi.nlm.nih.gov", "/entrez/eutils/esearch.fcgi")] = httpx.Response(
        200, json={"esearchresult": {"idlist": []}}
    )

    assert await search_pubmed(http_client, "zzz_no_such_topic_xyz") == []
    assert [c.url.path for c in upstream_calls] == ["/entrez/eutils/esearch.fcgi"]


async def test_search_pubmed_rate_limited_is_empty(http_client, routes):
    routes[("eutils.ncbi.nlm.nih.gov", "/entrez/eutils/esearch.fcgi")] = httpx.Response(429)

    assert await search_pubmed(http_client, "octopus") == []


def test_pubmed_web_result_description():
    paper = AcademicPaper(
        id="pubmed-1",
        title="Title",
        authors=["A", "B", "C", "D"],
        url="https://pubmed.ncbi.nlm.nih.gov/1/",
        source="pubmed",
        published_date="2023 Jun",
        journal="Cell",
    )

    assert pubmed_result(paper).description == "By A, B, C • 2023 Jun • Cell"
