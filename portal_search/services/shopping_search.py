"""
Shopping search backed by Firecrawl.

Product fields are read from the scraped page markdown. Anything the page
does not state is left at a neutral default (no price, zero rating, zero
reviews) rather than invented.
"""

import logging
import re
from typing import Optional

import httpx

from ..adapters import FirecrawlDocument, firecrawl_search
from ..config import Settings
from ..models.requests import SearchOptions, VerticalSearchRequest
from ..models.responses import ShoppingSearchResponse
from ..models.shopping import Product
from ..utils.text import display_domain

logger = logging.getLogger(__name__)

QUERY_SUFFIX = "buy price shop product store"
DEFAULT_LIMIT = 30
MAX_LIMIT = 50
PRICE_FALLBACK = "See price"

PRICE_RE = re.compile(r"\$[\d,]+(?:\.\d{2})?|\d+(?:,\d{3})*(?:\.\d{2})?\s*(?:USD|dollars?)", re.IGNORECASE)
ORIGINAL_PRICE_RE = re.compile(
    r"(?:list price|was|typical price|original price|msrp)\s*:?\s*(\$[\d,]+(?:\.\d{2})?)", re.IGNORECASE
)
RATING_RE = re.compile(r"(\d(?:\.\d)?)\s*(?:out of 5|/5|stars?)", re.IGNORECASE)
REVIEWS_RE = re.compile(r"(\d+(?:,\d{3})*)\s*(?:reviews?|ratings?)", re.IGNORECASE)
FREE_SHIPPING_RE = re.compile(r"free (?:shipping|delivery)", re.IGNORECASE)
OUT_OF_STOCK_RE = re.compile(r"out of stock|currently unavailable|sold out", re.IGNORECASE)
PRIME_RE = re.compile(r"\bprime\b", re.IGNORECASE)

STORES = (
    ("amazon", "Amazon"),
    ("ebay", "eBay"),
    ("walmart", "Walmart"),
    ("target", "Target"),
    ("bestbuy", "Best Buy"),
)


def store_badge(domain: str) -> Optional[str]:
    for needle, name in STORES:
        if needle in domain:
            return name
    return None


def _rating(text: str) -> float:
    match = RATING_RE.search(text)
    if not match:
        return 0.0
    return min(float(match.group(1)), 5.0)


def _reviews(text: str) -> int:
    match = REVIEWS_RE.search(text)
    return int(match.group(1).replace(",", "")) if match else 0


def to_product(index: int, doc: FirecrawlDocument) -> Product:
    title = doc.title or doc.metadata.title or "Product"
    description = doc.description or doc.metadata.description or ""
    domain = display_domain(doc.url)
    markdown = doc.markdown or ""
    text = markdown or description

    price = PRICE_RE.search(text)
    original_price = ORIGINAL_PRICE_RE.search(text)
    original = original_price.group(1) if original_price else None
    if original and price and original == price.group(0):
        original = None

    return Product(
        id=f"product-{index}",
        title=title[:100],
        description=description[:200],
        price=price.group(0) if price else PRICE_FALLBACK,
        original_price=original,
        rating=_rating(markdown),
        reviews=_reviews(markdown),
        url=doc.url,
        domain=domain,
        image=doc.metadata.og_image or doc.screenshot,
        store=store_badge(domain),
        free_shipping=bool(FREE_SHIPPING_RE.search(text)),
        in_stock=not OUT_OF_STOCK_RE.search(text),
        prime="amazon" in domain and bool(PRIME_RE.search(markdown)),
    )


async def run_shopping_search(
    client: httpx.AsyncClient, settings: Settings, request: VerticalSearchRequest
) -> ShoppingSearchResponse:
    """
    Search product pages.

    Raises:
        ConfigurationError: If no Firecrawl key is configured
        UpstreamError: If Firecrawl rejects the search
        NetworkError: If Firecrawl cannot be reached
    """
    query = request.query.strip()
    options = request.options or SearchOptions()
    logger.info(f"Shopping search for: {query!r}")

    documents = await firecrawl_search(
        client,
        settings.firecrawl_api_key,
        f"{query} {QUERY_SUFFIX}",
        limit=options.limit_or(DEFAULT_LIMIT, MAX_LIMIT),
        lang=options.lang or "en",
        formats=("markdown", "links"),
        base_url=settings.firecrawl_base_url,
    )

    products = [to_product(i, doc) for i, doc in enumerate(documents)]
    logger.info(f"Found {len(products)} products")

    return ShoppingSearchResponse(products=products, total_results=len(products), query=query)
