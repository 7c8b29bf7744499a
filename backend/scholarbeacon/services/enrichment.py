"""
ScholarBeacon Backend: Enrichment Joiner
========================================

What:  Denormalizes a list of primary documents by copying fields from a
       related document that each one references by id.
How:   One lookup per primary document, all awaited together with
       asyncio.gather. Results are recombined by position, so the output has
       the same length and order as the input regardless of which lookup
       finishes first.
Who:   ReviewService and ApplicationService.

Failure semantics:
    related document missing  → every mapped field gets its fallback value
    reference absent/non-string → same as missing (the fetcher returns None)
    store error               → propagates; the whole request fails (500)

Example (projection variant):
    review      {"reviewer_id": "R1", "scholarship_id": "S1",
                 "reviewer_comments": "Great!", "review_date": "2024-01-01"}
    scholarship {"_id": "S1", "subject_name": "CS", "university_name": "MIT"}
    output      {"scholarship_name": "CS", "university_name": "MIT",
                 "review_comments": "Great!", "review_date": "2024-01-01"}
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional, Sequence

logger = logging.getLogger(__name__)

Document = Dict[str, Any]
RelatedFetcher = Callable[[Any], Awaitable[Optional[Document]]]

UNKNOWN = "Unknown"
DEFAULT_IMAGE = "default.jpg"


@dataclass(frozen=True)
class Join:
    """
    Describes how one primary document is combined with its related document.

    Attributes:
        reference_field:   primary field holding the related document's id
        field_mapper:      output field → related document field
        fallback_defaults: output field → value used when the relation misses
        carried_fields:    output field → primary document field
        keep_original:     start from all primary fields (merge) or from an
                           empty dict (projection)
    """

    reference_field: str
    field_mapper: Mapping[str, str]
    fallback_defaults: Mapping[str, Any]
    carried_fields: Mapping[str, str] = field(default_factory=dict)
    keep_original: bool = True

    def project(self, primary: Document, related: Optional[Document]) -> Document:
        result: Document = dict(primary) if self.keep_original else {}
        for output_field, primary_field in self.carried_fields.items():
            result[output_field] = primary.get(primary_field)
        for output_field, related_field in self.field_mapper.items():
            if related is None:
                result[output_field] = self.fallback_defaults.get(output_field, UNKNOWN)
            else:
                result[output_field] = related.get(related_field)
        return result


async def enrich(
    items: Sequence[Document],
    fetch_related: RelatedFetcher,
    join: Join,
) -> List[Document]:
    """
    Enrich every item of `items` with fields from its related document.

    Args:
        items: Primary documents, already filtered by the caller.
        fetch_related: Coroutine resolving a reference value to the related
            document or None (e.g. `store.users.find_by_reference`).
        join: Field mapping, fallbacks and output variant.

    Returns:
        One projection per item, in input order.
    """
    # Every lookup is awaited to completion before the first failure is raised
    related_docs = await asyncio.gather(
        *(fetch_related(item.get(join.reference_field)) for item in items),
        return_exceptions=True,
    )
    for outcome in related_docs:
        if isinstance(outcome, BaseException):
            raise outcome

    misses = sum(1 for doc in related_docs if doc is None)
    if misses:
        logger.debug(
            "Enrichment on '%s': %d of %d references unresolved, using fallbacks",
            join.reference_field, misses, len(items),
        )

    return [join.project(item, related) for item, related in zip(items, related_docs)]


# ══════════════════════════════════════════════════════════════════════════
# Joins used by the API
# ══════════════════════════════════════════════════════════════════════════

# GET /reviews/{scholarship_id}: review + reviewer's name and photo
REVIEW_WITH_REVIEWER = Join(
    reference_field="reviewer_id",
    field_mapper={"reviewer_name": "name", "reviewer_image": "image"},
    fallback_defaults={"reviewer_name": UNKNOWN, "reviewer_image": DEFAULT_IMAGE},
)

# GET /reviews/r_id/{reviewer_id}: projection only, review fields renamed
REVIEWER_REVIEW_SUMMARY = Join(
    reference_field="scholarship_id",
    field_mapper={"scholarship_name": "subject_name", "university_name": "university_name"},
    fallback_defaults={"scholarship_name": UNKNOWN, "university_name": UNKNOWN},
    carried_fields={"review_comments": "reviewer_comments", "review_date": "review_date"},
    keep_original=False,
)

# GET /applications/{applicant_id}: application + scholarship details.
# scholarship_category is filled from university_name as existing clients
# receive it; this looks unintended and is pending confirmation.
APPLICATION_WITH_SCHOLARSHIP = Join(
    reference_field="scholarship_id",
    field_mapper={
        "scholarship_name": "subject_name",
        "university_name": "university_name",
        "scholarship_category": "university_name",
        "subject_name": "subject_name",
    },
    fallback_defaults={
        "scholarship_name": UNKNOWN,
        "university_name": UNKNOWN,
        "scholarship_category": UNKNOWN,
        "subject_name": UNKNOWN,
    },
)
