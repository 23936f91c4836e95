import logging
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Iterable, Mapping, Union

from pydantic import BaseModel

from .amounts import DEFAULT_SYMBOL, format_currency
from .resolver import resolve
from .statuses import (
    DisputeStatus,
    Domain,
    OrderStatus,
    ReviewStatus,
    map_status,
    status_key,
)

LOG = logging.getLogger(__name__)

# canonical field -> candidate paths, highest priority first. The canonical
# name itself is always listed so a normalized record reads back unchanged.
ORDER_FIELDS: dict[str, tuple[str, ...]] = {
    "id": ("id", "store_order.id", "order_id"),
    "order_no": ("order_no", "store_order.order_no", "order.order_no", "order_number"),
    "buyer_name": ("buyer.name", "store_order.order.user.name", "user.name", "customer.name", "buyer_name"),
    "store_name": ("store_order.store.name", "store.name", "store_name", "store_order.store_name"),
    "product_name": (
        "product.name",
        "store_order.items.0.name",
        "store_order.items.0.product.name",
        "items.0.name",
        "items.0.product.name",
        "product_name",
    ),
    "price": (
        "store_order.subtotal_with_shipping",
        "pricing.subtotal_with_shipping",
        "subtotal_with_shipping",
        "total_price",
        "price",
    ),
    "order_date": ("order_date", "formatted_date", "store_order.order_date", "created_at"),
    "created_at": ("created_at", "store_order.created_at", "date"),
    # payment_status is a weak stand-in, only used when no order status exists
    "status": ("store_order.status", "status", "payment_status", "store_order.payment_status"),
    "status_color": ("status_color", "statusColor", "store_order.status_color"),
}

DISPUTE_FIELDS: dict[str, tuple[str, ...]] = {
    "id": ("id", "dispute_id", "dispute.id"),
    "store_name": ("store.name", "store_order.store.name", "order.store.name", "store_name", "storeName"),
    "user_name": ("user.name", "buyer.name", "user.full_name", "user_name", "userName"),
    "category": ("category", "dispute_category", "reason"),
    "last_message": (
        "last_message.message",
        "last_message.content",
        "latest_message.message",
        "last_message",
        "lastMessage",
    ),
    "chat_date": ("formatted_date", "chat_date", "chatDate", "created_at"),
    "created_at": ("created_at", "last_message_at", "last_message.created_at", "date"),
    "won_by": ("won_by", "wonBy", "resolution.won_by"),
    "status": ("status", "dispute_status", "dispute.status"),
}

REVIEW_FIELDS: dict[str, tuple[str, ...]] = {
    "id": ("id", "review_id"),
    "user_name": ("user.name", "user.full_name", "reviewer.name", "user_name", "userName"),
    "store_name": ("store.name", "product.store.name", "store_name"),
    "product_name": ("product.name", "product_name"),
    "rating": ("rating", "stars", "review.rating"),
    "comment": ("comment", "review_text", "review", "body"),
    "review_date": ("formatted_date", "review_date", "created_at"),
    "created_at": ("created_at", "date"),
    "status": ("status", "review_status", "moderation_status"),
}


class CanonicalOrder(BaseModel):
    id: str = "N/A"
    order_no: str = "N/A"
    buyer_name: str = "N/A"
    store_name: str = "Unknown Store"
    product_name: str = "N/A"
    price: str = f"{DEFAULT_SYMBOL}0"
    order_date: str = "N/A"
    created_at: str = ""
    status: str = "N/A"
    status_tag: OrderStatus = OrderStatus.UNKNOWN
    status_color: str = ""


class CanonicalDispute(BaseModel):
    id: str = "N/A"
    store_name: str = "Unknown Store"
    user_name: str = "N/A"
    category: str = "N/A"
    last_message: str = ""
    chat_date: str = "N/A"
    created_at: str = ""
    won_by: str = ""
    status: str = "N/A"
    status_tag: DisputeStatus = DisputeStatus.UNKNOWN
    status_key: str = DisputeStatus.UNKNOWN.value


class CanonicalReview(BaseModel):
    id: str = "N/A"
    user_name: str = "Anonymous User"
    store_name: str = "Unknown Store"
    product_name: str = "N/A"
    rating: int = 0
    comment: str = "No comment provided"
    review_date: str = "N/A"
    created_at: str = ""
    status: str = "N/A"
    status_tag: ReviewStatus = ReviewStatus.UNKNOWN


CanonicalRecord = Union[CanonicalOrder, CanonicalDispute, CanonicalReview]


def _is_scalar(value: Any) -> bool:
    if isinstance(value, str):
        return bool(value.strip())
    return isinstance(value, (int, float, Decimal, date))


def _as_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value).strip()


def _collect(raw: Any, table: Mapping[str, tuple[str, ...]]) -> dict[str, Any]:
    values: dict[str, Any] = {}
    for field, paths in table.items():
        value = resolve(raw, paths, accept=_is_scalar)
        if value is not None:
            values[field] = value
    return values


def _texts(values: dict[str, Any], *skip: str) -> dict[str, str]:
    return {k: _as_text(v) for k, v in values.items() if k not in skip}


def _rating(value: Any) -> int:
    try:
        stars = round(float(value))
    except (TypeError, ValueError, OverflowError):
        return 0
    return max(0, min(5, stars))


def normalize_order(raw: Any, currency_symbol: str = DEFAULT_SYMBOL) -> CanonicalOrder:
    values = _collect(raw, ORDER_FIELDS)
    fields = _texts(values, "price")
    fields["price"] = format_currency(values.get("price"), symbol=currency_symbol)
    fields["status_tag"] = map_status(Domain.ORDERS, fields.get("status"))
    return CanonicalOrder(**fields)


def normalize_dispute(raw: Any) -> CanonicalDispute:
    fields = _texts(_collect(raw, DISPUTE_FIELDS))
    fields["status_tag"] = map_status(Domain.DISPUTES, fields.get("status"))
    fields["status_key"] = status_key(Domain.DISPUTES, fields.get("status"))
    return CanonicalDispute(**fields)


def normalize_review(raw: Any) -> CanonicalReview:
    values = _collect(raw, REVIEW_FIELDS)
    fields: dict[str, Any] = _texts(values, "rating")
    fields["rating"] = _rating(values.get("rating", 0))
    fields["status_tag"] = map_status(Domain.REVIEWS, fields.get("status"))
    return CanonicalReview(**fields)


def normalize(domain: Domain | str, raw: Any, **options: Any) -> CanonicalRecord:
    """Turn one backend record of any known shape into its canonical model.

    Never raises on odd input: whatever cannot be found is left at the model's
    sentinel default.
    """
    domain = Domain(domain)
    if domain is Domain.ORDERS:
        return normalize_order(raw, **options)
    if domain is Domain.DISPUTES:
        return normalize_dispute(raw)
    return normalize_review(raw)


def normalize_many(domain: Domain | str, raws: Iterable[Any], **options: Any) -> list[CanonicalRecord]:
    records = [normalize(domain, raw, **options) for raw in raws or ()]
    LOG.debug("normalized %d %s records", len(records), Domain(domain).value)
    return records
