"""
importer.py

Purpose:
    Recipe import pipeline: page fetch -> JSON-LD extraction -> Recipe node
    lookup -> normalization -> image download -> duplicate resolution.

Usage:
    importer = RecipeImporter(store)
    outcome = await importer.import_from_url("https://example.com/cake")

Store calls and image writes run in the threadpool so the event loop only
waits on I/O. Stores are not locked between concurrent imports, so two
simultaneous imports of one URL can both pass the duplicate check.
"""

from typing import Any, Dict, Optional
from urllib.parse import urljoin, urlparse

from fastapi.concurrency import run_in_threadpool

from . import schemas
from .duplicates import ResolveOutcome, resolve_duplicate
from .errors import InvalidURL, NoRecipeFound, ParsingFailed
from .extract import extract_json_ld
from .fetch import HtmlSource, ImageFetcher
from .locate import locate_recipe
from .logging_utils import get_logger
from .normalize import extract_image_url, normalize_recipe

logger = get_logger(__name__)


def validate_url(url: str) -> str:
    url = (url or "").strip()
    try:
        parsed = urlparse(url)
    except ValueError as exc:
        raise InvalidURL(url) from exc
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise InvalidURL(url)
    return url


def resolve_image_url(page_url: str, image_url: Optional[str]) -> Optional[str]:
    if not image_url:
        return None
    try:
        return urljoin(page_url, image_url)
    except ValueError as exc:
        logger.warning("Ignoring malformed image URL %r: %s", image_url, exc)
        return None


def find_recipe_node(html: str, source_url: str) -> Dict[str, Any]:
    extraction = extract_json_ld(html)
    logger.info(
        "Found %d JSON-LD blocks (%d skipped) in %s",
        len(extraction.documents), extraction.skipped, source_url,
    )
    try:
        return locate_recipe(extraction.documents)
    except NoRecipeFound:
        logger.error("No JSON-LD block on %s contained a Recipe type", source_url)
        raise


def _normalize(node: Dict[str, Any], source_url: str) -> schemas.Recipe:
    try:
        return normalize_recipe(node, source_url)
    except (TypeError, ValueError) as exc:
        logger.error("Error mapping recipe from JSON-LD: %s", exc)
        raise ParsingFailed(str(exc)) from exc


def parse_recipe_from_html(html: str, source_url: str) -> schemas.Recipe:
    """Parse the first Recipe on a page without any network access.

    The returned recipe has no image.
    """
    return _normalize(find_recipe_node(html, source_url), source_url)


class RecipeImporter:
    def __init__(
        self,
        store,
        html_source: Optional[HtmlSource] = None,
        image_fetcher: Optional[ImageFetcher] = None,
    ):
        self.store = store
        self.html_source = html_source or HtmlSource()
        self.image_fetcher = image_fetcher or ImageFetcher()

    async def acquire_image(self, image_url: Optional[str], recipe_id: str) -> Optional[str]:
        data = await self.image_fetcher.fetch(image_url)
        if not data:
            return None
        return await run_in_threadpool(self.store.save_image, data, recipe_id)

    async def fetch_recipe(self, url: str) -> schemas.Recipe:
        """Fetch and normalize the recipe at ``url`` without touching stored recipes."""
        url = validate_url(url)
        html = await self.html_source.fetch(url)
        node = find_recipe_node(html, url)
        recipe = _normalize(node, url)

        image_url = resolve_image_url(url, extract_image_url(node.get("image")))
        image = await self.acquire_image(image_url, recipe.id)
        return recipe.model_copy(update={"image": image})

    async def import_from_url(self, url: str) -> ResolveOutcome:
        recipe = await self.fetch_recipe(url)
        outcome = await run_in_threadpool(resolve_duplicate, self.store, recipe)
        logger.info("Import of %s -> %s", url, type(outcome).__name__)
        return outcome
