"""HTML pages: add-time form, overview of all times and its Excel export."""

import asyncio
import sqlite3
from typing import Annotated

from fastapi import APIRouter, Depends, Form, HTTPException, Request, status
from fastapi.responses import HTMLResponse, Response

from api.dependencies import get_db, require_user, templates
from api.models.responses import JobSubmission
from api.routes.jobs import parse_month, record_submission
from services.overview import build_overview
from services.reports import overview_to_bytes

router = APIRouter()


@router.get("/add", response_class=HTMLResponse)
async def add_form(request: Request, username: str = Depends(require_user)):
    return templates.TemplateResponse(request, "add_time.html", {"username": username})


@router.post("/add", response_class=HTMLResponse)
async def add_submit(
    request: Request,
    date: Annotated[str, Form()] = "",
    intervals: Annotated[str, Form()] = "",
    house_number: Annotated[str | None, Form()] = None,
    extras: Annotated[str | None, Form()] = None,
    overtime: Annotated[str | None, Form()] = None,
    travel_time: Annotated[str | None, Form()] = None,
    username: str = Depends(require_user),
    conn: sqlite3.Connection = Depends(get_db),
):
    """Save the submitted form and show the total hours."""
    submission = JobSubmission(
        date=date,
        intervals=intervals,
        house_number=house_number,
        extras=extras,
        overtime=overtime,
        travel_time=travel_time,
    )
    try:
        result = await asyncio.to_thread(record_submission, request, conn, username, submission)
    except HTTPException as e:
        details = e.detail.get("details", []) if isinstance(e.detail, dict) else [str(e.detail)]
        return templates.TemplateResponse(
            request,
            "message.html",
            {
                "title": "Fehler beim Speichern",
                "lines": details,
                "back_url": "/add",
                "back_label": "Zurück",
            },
            status_code=e.status_code,
        )

    return templates.TemplateResponse(
        request,
        "message.html",
        {
            "title": "Zeiten gespeichert ✅",
            "lines": [f"Gesamtstunden: {result.total_hours:.2f}"],
            "back_url": "/dashboard",
            "back_label": "Zurück zum Dashboard",
        },
    )


@router.get("/all", response_class=HTMLResponse)
async def all_times(
    request: Request,
    username: str = Depends(require_user),
    conn: sqlite3.Connection = Depends(get_db),
):
    """Every job of the user, grouped by month with monthly totals."""
    months = await asyncio.to_thread(build_overview, conn, username)
    return templates.TemplateResponse(request, "all.html", {"months": months})


@router.get("/all/export")
async def export_times(
    month: str | None = None,
    username: str = Depends(require_user),
    conn: sqlite3.Connection = Depends(get_db),
):
    """Download the overview as an Excel workbook, optionally for one month."""
    month_key = parse_month(month)
    months = await asyncio.to_thread(build_overview, conn, username, month_key)
    content = await asyncio.to_thread(overview_to_bytes, months)
    filename = f"arbeitszeiten_{username}_{month_key or 'alle'}.xlsx"
    return Response(
        content=content,
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
        status_code=status.HTTP_200_OK,
    )
