# tests/services/test_file_storage.py
from pathlib import Path

import pytest

from apex.services import FileStorageService


@pytest.fixture
def storage(temp_storage_dir):
    return FileStorageService(temp_storage_dir / "files")


@pytest.mark.asyncio
async def test_save_file_uses_hash_and_extension(storage):
    path = await storage.save_file("report-1", "abc123", b"content", "Earnings.PDF")

    assert Path(path) == storage.base_path / "report-1" / "abc123.PDF"
    assert await storage.get_file(path) == b"content"
    assert await storage.file_exists(path)


@pytest.mark.asyncio
async def test_delete_file(storage):
    path = await storage.save_file("report-1", "todelete", b"content", "a.txt")

    await storage.delete_file(path)

    assert not await storage.file_exists(path)


@pytest.mark.asyncio
async def test_delete_missing_file_is_not_an_error(storage):
    await storage.delete_file(str(storage.base_path / "nowhere" / "missing.txt"))


def test_default_base_path_follows_settings(temp_storage_dir):
    assert FileStorageService().base_path == temp_storage_dir / "files"
