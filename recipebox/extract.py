"""
Embedded JSON-LD extraction.

Parses the page with BeautifulSoup and reads every ``application/ld+json``
script block. A malformed block is skipped and the scan carries on with the
next block, so one broken block never hides a later recipe.
"""

import json
import re
from dataclasses import dataclass, field
from typing import Any, Iterator, List

from bs4 import BeautifulSoup

from .logging_utils import get_logger

logger = get_logger(__name__)

JSON_LD_TYPE = re.compile(r"application/ld\+json", re.IGNORECASE)


@dataclass
class ExtractionResult:
    documents: List[Any] = field(default_factory=list)
    skipped: int = 0


def iter_candidate_blocks(html: str) -> Iterator[str]:
    """Yield the stripped text of every JSON-LD block in document order."""
    soup = BeautifulSoup(html, "html.parser")
    for script in soup.find_all("script", type=JSON_LD_TYPE):
        yield (script.string or "").strip()


def extract_json_ld(html: str) -> ExtractionResult:
    documents = []
    skipped = 0
    for raw in iter_candidate_blocks(html):
        try:
            documents.append(json.loads(raw))
        except (ValueError, RecursionError) as exc:
            # RecursionError: nesting deeper than the decoder allows
            skipped += 1
            logger.info(
                "Failed to parse JSON-LD block (%s...): %s", raw[:100], type(exc).__name__
            )
    return ExtractionResult(documents=documents, skipped=skipped)
