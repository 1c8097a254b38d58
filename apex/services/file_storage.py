# apex/services/file_storage.py
from pathlib import Path
from typing import Optional

from ..config import settings
from ..utils.logging import service_logger


class FileStorageService:
    """Stores uploaded file bytes on local disk, one directory per report"""

    def __init__(self, base_path: Optional[Path] = None):
        self._base_path = Path(base_path) if base_path else None

    @property
    def base_path(self) -> Path:
        return self._base_path or settings.FILES_PATH

    async def save_file(self, report_id: str, file_hash: str, data: bytes, filename: str) -> str:
        """Write file bytes to <base>/<report_id>/<file_hash><ext> and return the path"""
        directory = self.base_path / report_id
        directory.mkdir(parents=True, exist_ok=True)

        storage_path = directory / f"{file_hash}{Path(filename).suffix}"
        with storage_path.open("wb") as buffer:
            buffer.write(data)

        service_logger.info("Stored file", extra={
            "report_id": report_id,
            "storage_path": str(storage_path),
            "size_bytes": len(data)
        })
        return str(storage_path)

    async def get_file(self, storage_path: str) -> bytes:
        return Path(storage_path).read_bytes()

    async def delete_file(self, storage_path: str) -> None:
        """Delete a stored file; a file that is already gone is not an error"""
        path = Path(storage_path)
        if not path.exists():
            service_logger.debug("File already absent", extra={"storage_path": storage_path})
            return
        path.unlink()
        service_logger.info("Deleted file", extra={"storage_path": storage_path})

    async def file_exists(self, storage_path: str) -> bool:
        return Path(storage_path).is_file()


file_storage_service = FileStorageService()
