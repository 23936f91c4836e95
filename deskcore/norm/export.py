import csv
import io
import re
from datetime import date, datetime
from enum import Enum
from typing import Any, Callable, Iterable, Mapping, Optional, Sequence

from pydantic import BaseModel

from .resolver import is_present, resolve
from .statuses import Domain

ValueLookup = Callable[[Any, str], Any]

_CAMEL_BOUNDARY_RE = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")
_NON_WORD_RE = re.compile(r"[^0-9a-zA-Z]+")

NOT_AVAILABLE = "N/A"

EXPORT_COLUMNS: dict[Domain, dict[str, tuple[str, ...]]] = {
    Domain.ORDERS: {
        "Order ID": ("id",),
        "Order No": ("order_no",),
        "Buyer Name": ("buyer_name",),
        "Store Name": ("store_name",),
        "Product Name": ("product_name",),
        "Status": ("status",),
        "Order Date": ("order_date",),
        "Total Price": ("price",),
    },
    Domain.DISPUTES: {
        "Dispute ID": ("id",),
        "Store Name": ("store_name",),
        "User Name": ("user_name",),
        "Category": ("category",),
        "Last Message": ("last_message",),
        "Date": ("chat_date",),
        "Won By": ("won_by",),
        "Status": ("status",),
    },
    Domain.REVIEWS: {
        "Review ID": ("id",),
        "User Name": ("user_name",),
        "Store Name": ("store_name",),
        "Product Name": ("product_name",),
        "Rating": ("rating",),
        "Comment": ("comment",),
        "Date": ("review_date",),
        "Status": ("status",),
    },
}


def snake_case(header: str) -> str:
    s = _CAMEL_BOUNDARY_RE.sub("_", header.strip())
    return _NON_WORD_RE.sub("_", s).strip("_").lower()


def camel_case(header: str) -> str:
    words = [w for w in snake_case(header).split("_") if w]
    if not words:
        return ""
    return words[0] + "".join(w[:1].upper() + w[1:] for w in words[1:])


def _as_mapping(record: Any) -> Mapping[str, Any]:
    if isinstance(record, BaseModel):
        return record.model_dump()
    if isinstance(record, Mapping):
        return record
    return getattr(record, "__dict__", {}) or {}


def lookup_value(record: Any, header: str) -> Any:
    """Find a header's value: exact key, lowercase, snake_case, then lowerCamelCase."""
    data = _as_mapping(record)
    for key in (header, header.lower(), snake_case(header), camel_case(header)):
        if key in data and data[key] is not None:
            return data[key]
    return ""


def column_lookup(rules: Mapping[str, Sequence[str]], default: Any = "") -> ValueLookup:
    """Build a lookup resolving each header through its own candidate paths.

    Headers without a rule fall back to :func:`lookup_value`.
    """

    def _lookup(record: Any, header: str) -> Any:
        paths = rules.get(header)
        if paths is None:
            value = lookup_value(record, header)
            return value if is_present(value) else default
        return resolve(record, paths, default)

    return _lookup


def _stringify(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, Enum):
        value = value.value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)


def project(
    records: Iterable[Any],
    headers: Sequence[str],
    value_lookup: Optional[ValueLookup] = None,
) -> list[list[str]]:
    """Flatten records into rows of strings, header row first."""
    lookup = value_lookup or lookup_value
    table = [[_stringify(h) for h in headers]]
    for record in records:
        table.append([_stringify(lookup(record, h)) for h in headers])
    return table


def to_csv(table: Iterable[Sequence[str]]) -> str:
    """Render rows as CSV text; cells are quoted only when needed, rows end with a newline."""
    buf = io.StringIO()
    writer = csv.writer(buf, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
    writer.writerows(table)
    return buf.getvalue()


def export_csv(
    records: Iterable[Any],
    headers: Sequence[str],
    value_lookup: Optional[ValueLookup] = None,
) -> str:
    return to_csv(project(records, headers, value_lookup))


def export_domain(domain: Domain | str, records: Iterable[Any]) -> str:
    columns = EXPORT_COLUMNS[Domain(domain)]
    return export_csv(records, list(columns), column_lookup(columns, default=NOT_AVAILABLE))
