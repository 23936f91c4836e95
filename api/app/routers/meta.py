from fastapi import APIRouter

from api.app.routers.records import get_domain
from deskcore.norm.periods import PeriodLabel
from deskcore.norm.statuses import TAB_LABELS

router = APIRouter(prefix="/meta", tags=["meta"])


@router.get("/periods")
def periods():
    return [p.value for p in PeriodLabel]


@router.get("/{domain}/tabs")
def tabs(domain: str):
    return list(TAB_LABELS[get_domain(domain)])
