from datetime import date
from typing import Any

from fastapi import APIRouter, Body, HTTPException, Response

from api.app.config import settings
from deskcore.clients.admin_api import AdminApiError, fetch_records
from deskcore.norm.export import export_domain
from deskcore.norm.periods import filter_by_period
from deskcore.norm.records import normalize_many
from deskcore.norm.search import search_domain
from deskcore.norm.statuses import Domain, filter_by_tab

router = APIRouter(prefix="/records", tags=["records"])


def get_domain(domain: str) -> Domain:
    try:
        return Domain(domain)
    except ValueError:
        raise HTTPException(status_code=404, detail=f"Unknown domain: {domain}")


def _prepare(
    domain: Domain,
    raws: list[Any],
    period: str | None,
    tab: str | None,
    q: str | None,
    date_from: str | None = None,
    date_to: str | None = None,
) -> list:
    options = {"currency_symbol": settings.currency_symbol} if domain is Domain.ORDERS else {}
    records = normalize_many(domain, raws, **options)
    records = filter_by_tab(domain, records, tab)
    records = filter_by_period(records, period, date_from=date_from, date_to=date_to)
    return search_domain(domain, records, q)


@router.post("/{domain}/normalize")
def normalize_records(
    domain: str,
    raws: list[Any] = Body(...),
    period: str | None = None,
    tab: str | None = None,
    q: str | None = None,
    date_from: str | None = None,
    date_to: str | None = None,
):
    return _prepare(get_domain(domain), raws, period, tab, q, date_from, date_to)


@router.post("/{domain}/export")
def export_records(
    domain: str,
    raws: list[Any] = Body(...),
    period: str | None = None,
    tab: str | None = None,
    date_from: str | None = None,
    date_to: str | None = None,
):
    d = get_domain(domain)
    csv_text = export_domain(d, _prepare(d, raws, period, tab, None, date_from, date_to))
    filename = f"{d.value}_{date.today().isoformat()}.csv"
    return Response(
        content=csv_text.encode("utf-8"),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/{domain}")
async def list_records(
    domain: str,
    period: str | None = None,
    tab: str | None = None,
    q: str | None = None,
    date_from: str | None = None,
    date_to: str | None = None,
):
    d = get_domain(domain)
    try:
        raws = await fetch_records(
            d,
            period=period,
            search=q,
            date_from=date_from,
            date_to=date_to,
            base_url=settings.admin_api_url,
            token=settings.admin_api_token,
            timeout=settings.admin_api_timeout,
        )
    except AdminApiError as exc:
        raise HTTPException(status_code=502, detail=exc.detail)
    return _prepare(d, raws, period, tab, q, date_from, date_to)
