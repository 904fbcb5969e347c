"""
Duplicate resolution for freshly imported recipes.

A candidate is first matched against stored recipes by source URL, then by
exact name. With no match it is saved straight away; otherwise the caller
receives a PendingDecision and chooses to keep both, update the existing
recipe, or drop the candidate. There is no timeout on the decision.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from .errors import DecisionAlreadyResolved
from .logging_utils import get_logger
from .normalize import utc_now_iso
from .schemas import Recipe

logger = get_logger(__name__)

# Fields kept from the existing record on update; everything else comes
# from the candidate.
PRESERVED_ON_UPDATE = ("id", "slug", "date_added", "created_at")


class MatchKind(str, Enum):
    URL = "url"
    NAME = "name"


@dataclass
class Persisted:
    recipe: Recipe


def merge_for_update(existing: Recipe, candidate: Recipe, now: Optional[str] = None) -> Recipe:
    now = now or utc_now_iso()
    update = {field: getattr(existing, field) for field in PRESERVED_ON_UPDATE}
    update["date_updated"] = now
    update["updated_at"] = now
    return candidate.model_copy(update=update)


class PendingDecision:
    def __init__(self, store, existing: Recipe, candidate: Recipe, match_kind: MatchKind):
        self.store = store
        self.existing = existing
        self.candidate = candidate
        self.match_kind = match_kind
        self.resolved = False

    @property
    def matched_by_url(self) -> bool:
        return self.match_kind is MatchKind.URL

    def rebind(self, store) -> "PendingDecision":
        """Same decision, resolved against another store handle."""
        return PendingDecision(store, self.existing, self.candidate, self.match_kind)

    def _resolve(self) -> None:
        if self.resolved:
            raise DecisionAlreadyResolved(self.candidate.id)
        self.resolved = True

    def confirm_new(self) -> Recipe:
        """Keep the candidate as an additional, independent recipe."""
        self._resolve()
        logger.info("Saving %r as a new recipe next to %s", self.candidate.name, self.existing.id)
        return self.store.save(self.candidate)

    def confirm_update(self, now: Optional[str] = None) -> Recipe:
        """Overwrite the existing recipe's content with the candidate's."""
        self._resolve()
        merged = merge_for_update(self.existing, self.candidate, now)
        # the image follows the surviving id
        image = self.store.move_image(self.candidate.id, self.existing.id)
        merged = merged.model_copy(update={"image": image})
        logger.info("Updating recipe %s from %s", self.existing.id, self.candidate.org_url)
        return self.store.save(merged)

    def cancel(self) -> None:
        self._resolve()
        self.store.delete_image(self.candidate.id)
        logger.info("Import of %r cancelled", self.candidate.name)


ResolveOutcome = Union[Persisted, PendingDecision]


def resolve_duplicate(store, candidate: Recipe) -> ResolveOutcome:
    existing = store.find_by_source_url(candidate.org_url)
    if existing is not None:
        return PendingDecision(store, existing, candidate, MatchKind.URL)
    existing = store.find_by_name(candidate.name)
    if existing is not None:
        return PendingDecision(store, existing, candidate, MatchKind.NAME)
    return Persisted(store.save(candidate))
