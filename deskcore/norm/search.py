from typing import Any, Iterable, Optional, Sequence

from .resolver import is_present, resolve_path
from .statuses import Domain

SEARCH_FIELDS: dict[Domain, tuple[str, ...]] = {
    Domain.ORDERS: ("order_no", "buyer_name", "store_name", "product_name", "price", "order_date", "status"),
    Domain.DISPUTES: ("store_name", "user_name", "last_message", "chat_date", "won_by", "category"),
    Domain.REVIEWS: ("user_name", "store_name", "product_name", "comment", "rating", "review_date"),
}


def search_records(
    records: Iterable[Any],
    query: Optional[str],
    fields: Sequence[str],
) -> list[Any]:
    records = list(records)
    q = (query or "").strip().lower()
    if not q:
        return records

    def _hit(record: Any) -> bool:
        for field in fields:
            value = resolve_path(record, field)
            if is_present(value) and q in str(value).lower():
                return True
        return False

    return [r for r in records if _hit(r)]


def search_domain(domain: Domain | str, records: Iterable[Any], query: Optional[str]) -> list[Any]:
    return search_records(records, query, SEARCH_FIELDS[Domain(domain)])
