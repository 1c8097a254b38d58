# apex/services/reports.py
from typing import List, Optional
from uuid import uuid4

from ..config import settings
from ..domain.entities import Report, is_deleted, utcnow, validate_title
from ..domain.exceptions import ReportNotFoundError, UnauthorizedError
from ..repositories.base import ReportRepository
from ..utils.logging import service_logger


class ReportService:
    """Report CRUD with ownership checks and title validation"""

    def __init__(self, report_repository: ReportRepository):
        self.report_repository = report_repository

    async def create_report(self, user_id: str, title: str, description: Optional[str] = None) -> Report:
        now = utcnow()
        report = Report(
            id=str(uuid4()),
            user_id=user_id,
            title=validate_title(title, settings.MAX_TITLE_LENGTH),
            description=description,
            created_at=now,
            updated_at=now,
        )
        saved = await self.report_repository.save(report)

        service_logger.info("Created report", extra={
            "report_id": saved.id,
            "user_id": user_id
        })
        return saved

    async def get_report(self, report_id: str, user_id: str) -> Report:
        """Fetch an active report owned by the user"""
        report = await self.report_repository.find_by_id(report_id)
        if report is None or is_deleted(report):
            raise ReportNotFoundError(report_id)

        if report.user_id != user_id:
            service_logger.warning("Report access denied", extra={
                "report_id": report_id,
                "user_id": user_id
            })
            raise UnauthorizedError(user_id, report_id)

        return report

    async def list_reports(self, user_id: str) -> List[Report]:
        return await self.report_repository.find_by_user_id(user_id)

    async def update_report(
            self,
            report_id: str,
            user_id: str,
            title: Optional[str] = None,
            description: Optional[str] = None
    ) -> Report:
        report = await self.get_report(report_id, user_id)

        if title is not None:
            report.title = validate_title(title, settings.MAX_TITLE_LENGTH)
        if description is not None:
            report.description = description
        report.updated_at = utcnow()

        saved = await self.report_repository.save(report)
        service_logger.info("Updated report", extra={"report_id": report_id})
        return saved

    async def delete_report(self, report_id: str, user_id: str) -> None:
        report = await self.get_report(report_id, user_id)
        await self.report_repository.delete(report.id)
        service_logger.info("Deleted report", extra={"report_id": report_id})

    async def search_reports(self, user_id: str, query: str) -> List[Report]:
        return await self.report_repository.search(user_id, query)
