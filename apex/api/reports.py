# apex/api/reports.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response

from ..domain.exceptions import ApexError
from ..schemas.report import Report as ReportSchema, ReportCreate, ReportUpdate
from ..services import ReportService
from ..utils.logging import api_logger
from .deps import get_current_user_id, get_report_service, to_http_exception

router = APIRouter(prefix="/api/reports", tags=["reports"])


@router.post("", response_model=ReportSchema, status_code=201)
async def create_report(
        report: ReportCreate,
        user_id: str = Depends(get_current_user_id),
        reports: ReportService = Depends(get_report_service)
):
    api_logger.info("Creating new report", extra={"user_id": user_id})

    try:
        return await reports.create_report(user_id, report.title, report.description)
    except ApexError as e:
        api_logger.warning("Report creation rejected", extra={
            "user_id": user_id,
            "error": e.message
        })
        raise to_http_exception(e)


@router.get("", response_model=List[ReportSchema])
async def list_reports(
        user_id: str = Depends(get_current_user_id),
        reports: ReportService = Depends(get_report_service)
):
    result = await reports.list_reports(user_id)
    api_logger.info("Listed reports", extra={
        "user_id": user_id,
        "report_count": len(result)
    })
    return result


@router.get("/search", response_model=List[ReportSchema])
async def search_reports(
        q: str,
        user_id: str = Depends(get_current_user_id),
        reports: ReportService = Depends(get_report_service)
):
    result = await reports.search_reports(user_id, q)
    api_logger.info("Searched reports", extra={
        "user_id": user_id,
        "query": q,
        "match_count": len(result)
    })
    return result


@router.get("/{report_id}", response_model=ReportSchema)
async def get_report(
        report_id: str,
        user_id: str = Depends(get_current_user_id),
        reports: ReportService = Depends(get_report_service)
):
    try:
        return await reports.get_report(report_id, user_id)
    except ApexError as e:
        api_logger.warning("Report lookup failed", extra={
            "report_id": report_id,
            "error": e.message
        })
        raise to_http_exception(e)


@router.patch("/{report_id}", response_model=ReportSchema)
async def update_report(
        report_id: str,
        report: ReportUpdate,
        user_id: str = Depends(get_current_user_id),
        reports: ReportService = Depends(get_report_service)
):
    updates = report.model_dump(exclude_unset=True)
    api_logger.info("Updating report", extra={
        "report_id": report_id,
        "update_fields": list(updates.keys())
    })

    if report.title is None and report.description is None:
        raise HTTPException(status_code=400, detail="At least one field (title or description) must be provided")

    try:
        return await reports.update_report(report_id, user_id, title=report.title, description=report.description)
    except ApexError as e:
        api_logger.warning("Report update failed", extra={
            "report_id": report_id,
            "error": e.message
        })
        raise to_http_exception(e)


@router.delete("/{report_id}", status_code=204)
async def delete_report(
        report_id: str,
        user_id: str = Depends(get_current_user_id),
        reports: ReportService = Depends(get_report_service)
):
    api_logger.info("Deleting report", extra={"report_id": report_id})

    try:
        await reports.delete_report(report_id, user_id)
    except ApexError as e:
        api_logger.warning("Report deletion failed", extra={
            "report_id": report_id,
            "error": e.message
        })
        raise to_http_exception(e)
    return Response(status_code=204)
