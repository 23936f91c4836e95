import logging
from typing import Any, Dict, List, Optional

import httpx

from deskcore.norm.periods import map_period_to_api
from deskcore.norm.resolver import resolve
from deskcore.norm.statuses import Domain

LOG = logging.getLogger(__name__)

ENDPOINTS: dict[Domain, str] = {
    Domain.ORDERS: "/admin/buyer-orders",
    Domain.DISPUTES: "/admin/disputes",
    Domain.REVIEWS: "/admin/ratings-reviews/products",
}

# Where each endpoint keeps its rows; the first list found wins.
LIST_PATHS: dict[Domain, tuple[str, ...]] = {
    Domain.ORDERS: ("data", "data.store_orders.data", "data.data"),
    Domain.DISPUTES: ("data", "data.disputes", "data.data"),
    Domain.REVIEWS: ("data", "data.reviews", "data.data"),
}


class AdminApiError(Exception):
    def __init__(self, detail: str, status_code: Optional[int] = None) -> None:
        super().__init__(detail)
        self.detail = detail
        self.status_code = status_code


def _headers(token: Optional[str]) -> Dict[str, str]:
    headers = {"Accept": "application/json"}
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return headers


def build_params(
    *,
    period: Optional[str] = None,
    status: Optional[str] = None,
    search: Optional[str] = None,
    date_from: Optional[str] = None,
    date_to: Optional[str] = None,
) -> Dict[str, str]:
    """Query string for a list call. A mapped period wins over an explicit range,
    and a range is only sent when both ends are given.
    """
    params = {"export": "true"}
    if status and status.strip().lower() != "all":
        params["status"] = status.strip()
    api_period = map_period_to_api(period)
    if api_period:
        params["period"] = api_period
    elif date_from and date_to:
        params["date_from"] = str(date_from).strip()
        params["date_to"] = str(date_to).strip()
    if search and search.strip():
        params["search"] = search.strip()
    return params


def extract_list(domain: Domain | str, payload: Any) -> List[Dict[str, Any]]:
    rows = resolve(payload, LIST_PATHS[Domain(domain)], [], accept=lambda v: isinstance(v, list))
    return [r for r in rows if isinstance(r, dict)]


async def fetch_records(
    domain: Domain | str,
    *,
    period: Optional[str] = None,
    status: Optional[str] = None,
    search: Optional[str] = None,
    date_from: Optional[str] = None,
    date_to: Optional[str] = None,
    base_url: Optional[str] = None,
    token: Optional[str] = None,
    timeout: float = 30.0,
    client: Optional[httpx.AsyncClient] = None,
) -> List[Dict[str, Any]]:
    """Fetch one domain's raw rows; no ``base_url`` means nothing is configured and ``[]`` comes back."""
    domain = Domain(domain)
    base = (base_url or "").strip().rstrip("/")
    if not base:
        LOG.debug("admin api not configured, skipping %s fetch", domain.value)
        return []

    url = f"{base}{ENDPOINTS[domain]}"
    params = build_params(period=period, status=status, search=search, date_from=date_from, date_to=date_to)
    LOG.info("fetching %s from %s", domain.value, url)

    try:
        if client is None:
            async with httpx.AsyncClient(timeout=timeout) as own_client:
                resp = await own_client.get(url, params=params, headers=_headers(token))
        else:
            resp = await client.get(url, params=params, headers=_headers(token))
        resp.raise_for_status()
        payload = resp.json()
    except httpx.HTTPStatusError as exc:
        raise AdminApiError(
            f"admin api returned {exc.response.status_code} for {domain.value}",
            status_code=exc.response.status_code,
        ) from exc
    except (httpx.HTTPError, ValueError) as exc:
        raise AdminApiError(f"admin api request for {domain.value} failed: {exc}") from exc

    return extract_list(domain, payload)
