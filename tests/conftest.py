# tests/conftest.py
import os
import shutil
import tempfile
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from apex.main import app
from apex.database import Base, get_db
from apex.models import ReportRecord, DocumentRecord
from apex.config import settings
from apex.repositories import (
    SqlAlchemyReportRepository,
    SqlAlchemyDocumentRepository,
    InMemoryReportRepository,
    InMemoryDocumentRepository,
)
from factories import BASE_TIME, USER_ID

SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"

@pytest.fixture(scope="session")
def engine():
    """Create test database engine"""
    engine = create_engine(
        SQLALCHEMY_TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool  # Needed for SQLite in-memory database
    )
    return engine

@pytest.fixture(scope="session")
def tables(engine):
    """Create all tables in the test database"""
    Base.metadata.create_all(engine)
    yield
    Base.metadata.drop_all(engine)

@pytest.fixture
def db_session(engine, tables):
    """Creates a new database session for a test, rolled back afterwards"""
    connection = engine.connect()
    transaction = connection.begin()
    session = sessionmaker(bind=connection)()

    yield session

    session.close()
    transaction.rollback()
    connection.close()

@pytest.fixture(scope="session")
def temp_storage_dir():
    """Create temporary storage directory for test files"""
    temp_dir = tempfile.mkdtemp()
    for subdir in ["files", "logs"]:
        Path(temp_dir, subdir).mkdir(parents=True, exist_ok=True)
    yield Path(temp_dir)
    shutil.rmtree(temp_dir)

@pytest.fixture(autouse=True)
def override_settings(temp_storage_dir):
    """Point file storage at the temporary directory"""
    original_storage = settings.STORAGE_PATH
    original_files = settings.FILES_PATH

    settings.STORAGE_PATH = temp_storage_dir
    settings.FILES_PATH = temp_storage_dir / "files"

    yield

    settings.STORAGE_PATH = original_storage
    settings.FILES_PATH = original_files

@pytest.fixture
def report_repository(db_session):
    return SqlAlchemyReportRepository(db_session)

@pytest.fixture
def document_repository(db_session):
    return SqlAlchemyDocumentRepository(db_session)

@pytest.fixture
def memory_report_repository():
    return InMemoryReportRepository()

@pytest.fixture
def memory_document_repository():
    return InMemoryDocumentRepository()

@pytest.fixture
def client(db_session):
    """Test client using the test database"""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()

@pytest.fixture
def auth_headers():
    return {"X-User-Id": USER_ID}

@pytest.fixture
def sample_report(db_session):
    """Create a sample report owned by USER_ID"""
    report = ReportRecord(
        id="report-fixture",
        user_id=USER_ID,
        title="Test Report",
        description="Test Description",
        created_at=BASE_TIME,
        updated_at=BASE_TIME
    )
    db_session.add(report)
    db_session.commit()
    db_session.refresh(report)
    return report

@pytest.fixture
def sample_document(db_session, sample_report, temp_storage_dir):
    """Create a sample document with its stored file"""
    file_path = temp_storage_dir / "files" / sample_report.id / "fixturehash.txt"
    file_path.parent.mkdir(parents=True, exist_ok=True)
    file_path.write_bytes(b"Quarterly revenue grew")

    document = DocumentRecord(
        id="document-fixture",
        report_id=sample_report.id,
        filename="revenue.txt",
        file_hash="fixturehash",
        storage_path=str(file_path),
        parsed_content="Quarterly revenue grew",
        notes="",
        created_at=BASE_TIME,
        updated_at=BASE_TIME
    )
    db_session.add(document)
    db_session.commit()
    db_session.refresh(document)
    return document

@pytest.fixture(scope="session", autouse=True)
def cleanup_test_files():
    """Clean up database files created by importing the app"""
    yield
    for file in ["test.db", "apex.db"]:
        if os.path.exists(file):
            os.remove(file)
