# tests/services/test_report_service.py
import pytest

from apex.config import settings
from apex.domain.exceptions import ReportNotFoundError, UnauthorizedError, ValidationError
from apex.services import ReportService
from factories import OTHER_USER_ID, USER_ID


@pytest.fixture
def report_service(memory_report_repository):
    return ReportService(memory_report_repository)


@pytest.mark.asyncio
async def test_create_report_trims_title(report_service, memory_report_repository):
    report = await report_service.create_report(USER_ID, "  Trip  ", "Summer")

    assert report.title == "Trip"
    assert report.description == "Summer"
    assert report.user_id == USER_ID
    assert report.deleted_at is None
    assert memory_report_repository.inserts == 1


@pytest.mark.asyncio
async def test_create_report_rejects_invalid_title(report_service, memory_report_repository):
    with pytest.raises(ValidationError):
        await report_service.create_report(USER_ID, "   ")
    with pytest.raises(ValidationError):
        await report_service.create_report(USER_ID, "x" * 201)
    assert memory_report_repository.inserts == 0


@pytest.mark.asyncio
async def test_create_report_uses_configured_title_limit(report_service, monkeypatch):
    monkeypatch.setattr(settings, "MAX_TITLE_LENGTH", 10)

    with pytest.raises(ValidationError):
        await report_service.create_report(USER_ID, "x" * 11)
    report = await report_service.create_report(USER_ID, "x" * 10)
    assert report.title == "x" * 10


@pytest.mark.asyncio
async def test_get_report_checks_owner(report_service):
    report = await report_service.create_report(USER_ID, "Trip")

    assert (await report_service.get_report(report.id, USER_ID)).id == report.id
    with pytest.raises(UnauthorizedError):
        await report_service.get_report(report.id, OTHER_USER_ID)


@pytest.mark.asyncio
async def test_get_report_missing(report_service):
    with pytest.raises(ReportNotFoundError):
        await report_service.get_report("missing", USER_ID)


@pytest.mark.asyncio
async def test_deleted_report_is_not_found(report_service):
    report = await report_service.create_report(USER_ID, "Trip")
    await report_service.delete_report(report.id, USER_ID)

    with pytest.raises(ReportNotFoundError):
        await report_service.get_report(report.id, USER_ID)
    assert await report_service.list_reports(USER_ID) == []


@pytest.mark.asyncio
async def test_update_report(report_service, memory_report_repository):
    report = await report_service.create_report(USER_ID, "Trip")

    updated = await report_service.update_report(report.id, USER_ID, title=" Lisbon trip ", description="Notes")

    assert updated.title == "Lisbon trip"
    assert updated.description == "Notes"
    assert updated.updated_at >= report.updated_at
    assert memory_report_repository.updates == 1


@pytest.mark.asyncio
async def test_update_report_partial(report_service):
    report = await report_service.create_report(USER_ID, "Trip", "Keep me")

    updated = await report_service.update_report(report.id, USER_ID, title="Renamed")

    assert updated.description == "Keep me"


@pytest.mark.asyncio
async def test_delete_report_requires_owner(report_service):
    report = await report_service.create_report(USER_ID, "Trip")

    with pytest.raises(UnauthorizedError):
        await report_service.delete_report(report.id, OTHER_USER_ID)
    assert (await report_service.get_report(report.id, USER_ID)).deleted_at is None


@pytest.mark.asyncio
async def test_search_reports(report_service):
    await report_service.create_report(USER_ID, "Trip", "Lisbon")
    await report_service.create_report(USER_ID, "Budget")

    results = await report_service.search_reports(USER_ID, "lisbon")

    assert [r.title for r in results] == ["Trip"]
