from .resolver import MISSING, resolve, resolve_path
from .statuses import (
    TAB_LABELS,
    DisputeStatus,
    Domain,
    OrderStatus,
    ReviewStatus,
    filter_by_tab,
    map_status,
    status_key,
)
from .dates import parse_instant
from .amounts import format_currency, parse_amount
from .periods import (
    DEFAULT_DATE_FIELDS,
    PeriodLabel,
    PeriodWindow,
    filter_by_period,
    map_period_to_api,
    window_between,
    window_for,
)
from .records import (
    CanonicalDispute,
    CanonicalOrder,
    CanonicalRecord,
    CanonicalReview,
    normalize,
    normalize_many,
)
from .export import EXPORT_COLUMNS, column_lookup, export_csv, export_domain, lookup_value, project, to_csv
from .search import search_domain, search_records
