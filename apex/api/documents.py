# apex/api/documents.py
import time
from typing import List

from fastapi import APIRouter, Depends, File, Form, HTTPException, Response, UploadFile

from ..domain.entities import Document
from ..domain.exceptions import ApexError
from ..schemas.document import Document as DocumentSchema, DocumentUpdate
from ..services import DocumentService, ReportService
from ..utils.logging import api_logger
from .deps import get_current_user_id, get_document_service, get_report_service, to_http_exception

router = APIRouter(prefix="/api/documents", tags=["documents"])


async def _owned_document(
        document_id: str,
        user_id: str,
        documents: DocumentService,
        reports: ReportService
) -> Document:
    """Load an active document whose report belongs to the caller"""
    document = await documents.get_document(document_id)
    await reports.get_report(document.report_id, user_id)
    return document


@router.post("", response_model=DocumentSchema, status_code=201)
async def upload_document(
        file: UploadFile = File(...),
        report_id: str = Form(...),
        user_id: str = Depends(get_current_user_id),
        documents: DocumentService = Depends(get_document_service),
        reports: ReportService = Depends(get_report_service)
):
    api_logger.info("Uploading document", extra={
        "report_id": report_id,
        "file_name": file.filename
    })

    if not file.filename:
        raise HTTPException(status_code=400, detail="File and report_id are required")

    try:
        start_time = time.time()
        await reports.get_report(report_id, user_id)
        data = await file.read()
        document = await documents.upload_document(report_id, data, file.filename)

        api_logger.info("Successfully uploaded document", extra={
            "document_id": document.id,
            "report_id": report_id,
            "execution_time_ms": round((time.time() - start_time) * 1000, 2)
        })
        return document
    except ApexError as e:
        api_logger.warning("Document upload rejected", extra={
            "report_id": report_id,
            "error": e.message
        })
        raise to_http_exception(e)


@router.get("/report/{report_id}", response_model=List[DocumentSchema])
async def list_report_documents(
        report_id: str,
        user_id: str = Depends(get_current_user_id),
        documents: DocumentService = Depends(get_document_service),
        reports: ReportService = Depends(get_report_service)
):
    try:
        await reports.get_report(report_id, user_id)
    except ApexError as e:
        raise to_http_exception(e)

    result = await documents.list_documents(report_id)
    api_logger.info("Listed report documents", extra={
        "report_id": report_id,
        "document_count": len(result)
    })
    return result


@router.get("/report/{report_id}/search", response_model=List[DocumentSchema])
async def search_report_documents(
        report_id: str,
        q: str,
        user_id: str = Depends(get_current_user_id),
        documents: DocumentService = Depends(get_document_service),
        reports: ReportService = Depends(get_report_service)
):
    try:
        await reports.get_report(report_id, user_id)
    except ApexError as e:
        raise to_http_exception(e)

    result = await documents.search_documents(report_id, q)
    api_logger.info("Searched report documents", extra={
        "report_id": report_id,
        "query": q,
        "match_count": len(result)
    })
    return result


@router.get("/{document_id}", response_model=DocumentSchema)
async def get_document(
        document_id: str,
        user_id: str = Depends(get_current_user_id),
        documents: DocumentService = Depends(get_document_service),
        reports: ReportService = Depends(get_report_service)
):
    try:
        return await _owned_document(document_id, user_id, documents, reports)
    except ApexError as e:
        api_logger.warning("Document lookup failed", extra={
            "document_id": document_id,
            "error": e.message
        })
        raise to_http_exception(e)


@router.patch("/{document_id}", response_model=DocumentSchema)
async def update_document(
        document_id: str,
        document: DocumentUpdate,
        user_id: str = Depends(get_current_user_id),
        documents: DocumentService = Depends(get_document_service),
        reports: ReportService = Depends(get_report_service)
):
    api_logger.info("Updating document", extra={
        "document_id": document_id,
        "update_fields": list(document.model_dump(exclude_unset=True).keys())
    })

    try:
        await _owned_document(document_id, user_id, documents, reports)
        return await documents.update_document(document_id, filename=document.filename, notes=document.notes)
    except ApexError as e:
        api_logger.warning("Document update failed", extra={
            "document_id": document_id,
            "error": e.message
        })
        raise to_http_exception(e)


@router.delete("/{document_id}", status_code=204)
async def delete_document(
        document_id: str,
        user_id: str = Depends(get_current_user_id),
        documents: DocumentService = Depends(get_document_service),
        reports: ReportService = Depends(get_report_service)
):
    api_logger.info("Deleting document", extra={"document_id": document_id})

    try:
        await _owned_document(document_id, user_id, documents, reports)
        await documents.delete_document(document_id)
    except ApexError as e:
        api_logger.warning("Document deletion failed", extra={
            "document_id": document_id,
            "error": e.message
        })
        raise to_http_exception(e)
    return Response(status_code=204)


@router.post("/{document_id}/parse", response_model=DocumentSchema)
async def reparse_document(
        document_id: str,
        user_id: str = Depends(get_current_user_id),
        documents: DocumentService = Depends(get_document_service),
        reports: ReportService = Depends(get_report_service)
):
    api_logger.info("Re-parsing document", extra={"document_id": document_id})

    try:
        await _owned_document(document_id, user_id, documents, reports)
        return await documents.reparse_document(document_id)
    except ApexError as e:
        raise to_http_exception(e)
