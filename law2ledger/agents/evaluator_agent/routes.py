"""
Export HTTP route — GET /api/export-summary?session_id=...&format=txt|pdf

Serves the session's profile, suggestions and tax summary as a downloadable
report named <product>-Tax-Summary-<ISO date>.<ext>.
"""
from __future__ import annotations

import datetime
import logging
from typing import Literal

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import Response, StreamingResponse

from law2ledger.agents.evaluator_agent.pdf_generator import generate_pdf_report
from law2ledger.agents.evaluator_agent.report import (
    ExportPreconditionError,
    build_export_report,
    export_filename,
)
from law2ledger.cache import SessionClient
from law2ledger.dependencies import get_session_client, require_session

router = APIRouter(prefix="/api", tags=["evaluator_agent"])
logger = logging.getLogger(__name__)


def _attachment(filename: str) -> dict[str, str]:
    return {"Content-Disposition": f'attachment; filename="{filename}"'}


@router.get("/export-summary")
async def export_summary(
    session_id: str = Query(...),
    export_format: Literal["txt", "pdf"] = Query(default="txt", alias="format"),
    client: SessionClient = Depends(get_session_client),
) -> Response:
    """
    Download the tax summary report.

    Returns:
      200: text/plain or application/pdf attachment
      404: unknown session, or no profile submitted yet
    """
    session = await require_session(client, session_id)
    today = datetime.date.today()

    try:
        if export_format == "pdf":
            buffer = generate_pdf_report(
                session.profile, session.tax_summary, session.suggestions, today
            )
            filename = export_filename(today, "pdf")
            logger.info("Export served session_id=%s format=pdf", session_id)
            return StreamingResponse(
                buffer,
                media_type="application/pdf",
                headers=_attachment(filename),
            )

        report = build_export_report(
            session.profile, session.tax_summary, session.suggestions, today
        )
    except ExportPreconditionError as exc:
        raise HTTPException(status_code=404, detail=str(exc))

    logger.info("Export served session_id=%s format=txt", session_id)
    return Response(
        content=report.content,
        media_type="text/plain; charset=utf-8",
        headers=_attachment(report.filename),
    )
