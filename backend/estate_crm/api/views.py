"""
Server-rendered CRM pages.

Pages read through the CrmData query cache. Form posts write through the
same data layer and redirect back with a one-shot notice in the query
string.
"""
from datetime import datetime
from pathlib import Path
from typing import Optional
from urllib.parse import urlencode

from fastapi import APIRouter, Depends, Request
from fastapi.responses import RedirectResponse
from fastapi.templating import Jinja2Templates
from pydantic import BaseModel

from ..schemas.client import ClientStatus
from ..schemas.contract import ContractStatus
from ..schemas.property import PropertyStatus
from ..schemas.transaction import TransactionCategory, TransactionType
from ..ui import CrmData, MutationResult, PIPELINE_COLUMNS
from .deps import get_crm_data
from .responses import bad, ok

router = APIRouter(include_in_schema=False)

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))

# Page each resource's forms return to.
PAGES = {
    "clients": "/clients",
    "properties": "/properties",
    "transactions": "/accounting",
    "contracts": "/contracts",
}


def currency(value) -> str:
    if value is None:
        return ""
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.2f}"


def format_date(value) -> str:
    if isinstance(value, datetime):
        return value.strftime("%b %d, %Y")
    return "" if value is None else str(value)


def input_date(value) -> str:
    return value.strftime("%Y-%m-%d") if isinstance(value, datetime) else ""


templates.env.filters["currency"] = currency
templates.env.filters["date"] = format_date
templates.env.filters["input_date"] = input_date


def _render(request: Request, name: str, context: dict):
    notice = request.query_params.get("notice")
    context.update({
        "notice": notice,
        "level": request.query_params.get("level", "success") if notice else None,
        "path": request.url.path,
    })
    return templates.TemplateResponse(request, name, context)


def _redirect(resource: str, result: MutationResult) -> RedirectResponse:
    query = ""
    if result.notice is not None:
        query = "?" + urlencode({"notice": result.notice.message, "level": result.notice.level})
    return RedirectResponse(url=PAGES[resource] + query, status_code=303)


@router.get("/")
async def dashboard_page(request: Request, crm: CrmData = Depends(get_crm_data)):
    return _render(request, "dashboard.html", {"dashboard": crm.dashboard()})


@router.get("/clients")
async def clients_page(request: Request, crm: CrmData = Depends(get_crm_data)):
    return _render(request, "clients.html", {
        "clients": crm.records("clients"),
        "statuses": [s.value for s in ClientStatus],
    })


@router.get("/properties")
async def properties_page(request: Request, crm: CrmData = Depends(get_crm_data)):
    return _render(request, "properties.html", {
        "properties": crm.records("properties"),
        "statuses": [s.value for s in PropertyStatus],
    })


@router.get("/accounting")
async def accounting_page(request: Request, crm: CrmData = Depends(get_crm_data)):
    return _render(request, "accounting.html", {
        "transactions": crm.ledger_rows(),
        "categories": [c.value for c in TransactionCategory],
        "types": [t.value for t in TransactionType],
    })


@router.get("/contracts")
async def contracts_page(request: Request, crm: CrmData = Depends(get_crm_data)):
    return _render(request, "contracts.html", {
        "contracts": crm.contract_rows(),
        "clients": crm.records("clients"),
        "properties": crm.records("properties"),
        "statuses": [s.value for s in ContractStatus],
    })


@router.get("/pipeline")
async def pipeline_page(request: Request, crm: CrmData = Depends(get_crm_data)):
    return _render(request, "pipeline.html", {"columns": crm.pipeline(), "column_names": PIPELINE_COLUMNS})


@router.get("/search")
async def search_page(request: Request, q: Optional[str] = None, crm: CrmData = Depends(get_crm_data)):
    return _render(request, "search.html", {"q": q or "", "results": crm.search(q or "")})


@router.post("/{resource}/new")
async def create_from_form(resource: str, request: Request, crm: CrmData = Depends(get_crm_data)):
    if resource not in PAGES:
        return RedirectResponse(url="/", status_code=303)
    form = await request.form()
    return _redirect(resource, crm.create(resource, form))


@router.post("/{resource}/{record_id}/edit")
async def update_from_form(resource: str, record_id: str, request: Request, crm: CrmData = Depends(get_crm_data)):
    if resource not in PAGES:
        return RedirectResponse(url="/", status_code=303)
    form = await request.form()
    return _redirect(resource, crm.update(resource, record_id, form))


@router.post("/{resource}/{record_id}/delete")
async def delete_from_form(resource: str, record_id: str, crm: CrmData = Depends(get_crm_data)):
    if resource not in PAGES:
        return RedirectResponse(url="/", status_code=303)
    return _redirect(resource, crm.delete(resource, record_id))


class PipelineMove(BaseModel):
    clientId: str
    target: str


@router.post("/pipeline/move")
async def move_pipeline_card(move: PipelineMove, crm: CrmData = Depends(get_crm_data)):
    """Apply a drag-and-drop move from the pipeline board."""
    result = crm.move_card(move.clientId, move.target)
    if not result.ok:
        return bad(result.notice.message)
    return ok({
        "client": result.record,
        "notice": result.notice.message if result.notice else None,
    })
