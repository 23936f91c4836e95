from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Optional

from .resolver import MISSING, resolve_path


class Domain(str, Enum):
    ORDERS = "orders"
    DISPUTES = "disputes"
    REVIEWS = "reviews"


class OrderStatus(str, Enum):
    PLACED = "placed"
    PENDING = "pending"
    OUT_FOR_DELIVERY = "out_for_delivery"
    DELIVERED = "delivered"
    COMPLETED = "completed"
    DISPUTED = "disputed"
    UNCOMPLETED = "uncompleted"
    UNKNOWN = "unknown"


class DisputeStatus(str, Enum):
    PENDING = "pending"
    ON_HOLD = "on_hold"
    RESOLVED = "resolved"
    UNKNOWN = "unknown"


class ReviewStatus(str, Enum):
    PUBLISHED = "published"
    PENDING = "pending"
    FLAGGED = "flagged"
    HIDDEN = "hidden"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class StatusTaxonomy:
    tags: type[Enum]
    # Ordered: earlier rows win both exact and substring ties.
    table: tuple[tuple[Enum, tuple[str, ...]], ...]
    passthrough_unknown: bool = False

    @property
    def unknown(self) -> Enum:
        return self.tags("unknown")


TAXONOMIES: dict[Domain, StatusTaxonomy] = {
    Domain.ORDERS: StatusTaxonomy(
        tags=OrderStatus,
        table=(
            (OrderStatus.DISPUTED, ("disputed", "dispute")),
            (
                OrderStatus.UNCOMPLETED,
                (
                    "uncompleted",
                    "not completed",
                    "incomplete",
                    "undelivered",
                    "not delivered",
                    "cancelled",
                    "canceled",
                    "failed",
                    "refunded",
                ),
            ),
            (OrderStatus.COMPLETED, ("completed", "complete")),
            (OrderStatus.OUT_FOR_DELIVERY, ("out_for_delivery", "out for delivery", "in_transit", "in transit", "shipped")),
            (OrderStatus.DELIVERED, ("delivered",)),
            (
                OrderStatus.PENDING,
                ("pending_acceptance", "pending acceptance", "pending", "processing", "accepted", "unpaid", "not paid"),
            ),
            (OrderStatus.PLACED, ("order placed", "placed", "paid", "new")),
        ),
    ),
    Domain.DISPUTES: StatusTaxonomy(
        tags=DisputeStatus,
        table=(
            (DisputeStatus.ON_HOLD, ("on_hold", "on hold", "onhold", "hold", "escalated")),
            (DisputeStatus.PENDING, ("pending", "open", "unresolved", "awaiting")),
            (DisputeStatus.RESOLVED, ("resolved", "closed", "settled")),
        ),
        passthrough_unknown=True,
    ),
    Domain.REVIEWS: StatusTaxonomy(
        tags=ReviewStatus,
        table=(
            (ReviewStatus.FLAGGED, ("flagged", "reported")),
            (ReviewStatus.HIDDEN, ("hidden", "rejected", "removed", "unpublished", "inactive")),
            (ReviewStatus.PENDING, ("pending", "in_review", "in review", "awaiting")),
            (ReviewStatus.PUBLISHED, ("published", "approved", "visible", "active")),
        ),
    ),
}

TAB_LABELS: dict[Domain, tuple[str, ...]] = {
    Domain.ORDERS: (
        "All",
        "Order Placed",
        "Out for delivery",
        "Delivered",
        "Completed",
        "Disputed",
        "Uncompleted",
    ),
    Domain.DISPUTES: ("All", "Pending", "On Hold", "Resolved"),
    Domain.REVIEWS: ("All", "Published", "Pending", "Flagged", "Hidden"),
}

ALL_TAB = "all"


def _clean(raw: Any) -> str:
    if raw is None or raw is MISSING:
        return ""
    if isinstance(raw, Enum):
        raw = raw.value
    return str(raw).strip().lower()


def taxonomy_for(domain: Domain | str) -> StatusTaxonomy:
    return TAXONOMIES[Domain(domain)]


def _match(taxonomy: StatusTaxonomy, value: str) -> Optional[Enum]:
    if not value:
        return None
    for tag, patterns in taxonomy.table:
        if value in patterns:
            return tag
    for tag, patterns in taxonomy.table:
        for pattern in patterns:
            if pattern in value or value in pattern:
                return tag
    return None


def map_status(domain: Domain | str, raw: Any) -> Enum:
    """Map a backend status label onto the domain's closed tag set."""
    taxonomy = taxonomy_for(domain)
    return _match(taxonomy, _clean(raw)) or taxonomy.unknown


def status_key(domain: Domain | str, raw: Any) -> str:
    """Bucket key for a raw status.

    Same as the tag value, except that passthrough domains keep the lowercased
    raw label for states the table does not know yet.
    """
    taxonomy = taxonomy_for(domain)
    value = _clean(raw)
    tag = _match(taxonomy, value)
    if tag is not None:
        return tag.value
    if taxonomy.passthrough_unknown and value and value != "n/a":
        return value
    return taxonomy.unknown.value


def filter_by_tab(domain: Domain | str, records: Iterable[Any], tab: Optional[str]) -> list[Any]:
    """Keep records that belong to a dashboard tab such as "Out for delivery"."""
    records = list(records)
    if not tab or _clean(tab) == ALL_TAB:
        return records

    taxonomy = taxonomy_for(domain)
    wanted = _match(taxonomy, _clean(tab))
    if wanted is not None:
        return [r for r in records if _tag_of(r) == wanted.value]
    if taxonomy.passthrough_unknown:
        key = _clean(tab)
        return [r for r in records if _clean(resolve_path(r, "status_key")) == key]
    return [r for r in records if _tag_of(r) == taxonomy.unknown.value]


def _tag_of(record: Any) -> str:
    return _clean(resolve_path(record, "status_tag"))
