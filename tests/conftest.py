import pytest

import portal_schema
from common.data_store import DataStore, SQLiteStore, StoreResult
from common.notifications import Notifier
from portal_service import PortalService


class RecordingNotifier(Notifier):
    def __init__(self):
        self.successes = []
        self.errors = []

    def success(self, title, description=""):
        self.successes.append((title, description))

    def error(self, title, description=""):
        self.errors.append((title, description))

    @property
    def error_titles(self):
        return [title for title, _ in self.errors]

    @property
    def success_messages(self):
        return [description for _, description in self.successes]


class FailingStore(DataStore):
    """Every call fails the way a backend outage does."""

    name = "Broken"

    def __init__(self, message="connection refused"):
        self.message = message

    def select(self, table, filters=None, order=None, limit=None):
        return StoreResult(error=self.message)

    def insert(self, table, rows):
        return StoreResult(error=self.message)

    def update(self, table, values, match):
        return StoreResult(error=self.message)

    def delete(self, table, match):
        return StoreResult(error=self.message)

    def upload(self, bucket, path, content, content_type=None):
        return StoreResult(error=self.message)

    def public_url(self, bucket, path):
        return f"broken://{bucket}/{path}"

    def remove(self, bucket, paths):
        return StoreResult(error=self.message)


class FakeUpload:
    """Stands in for Streamlit's UploadedFile."""

    def __init__(self, name="rotor.jpg", content=b"\x89PNG fake", type="image/jpeg"):
        self.name = name
        self.type = type
        self._content = content

    def getvalue(self):
        return self._content


@pytest.fixture()
def notifier():
    return RecordingNotifier()


@pytest.fixture()
def sqlite_store(tmp_path):
    db_file = str(tmp_path / "portal.db")
    portal_schema.initialize_database(db_file)
    return SQLiteStore(db_file, str(tmp_path / "files"))


@pytest.fixture()
def failing_store():
    return FailingStore()


@pytest.fixture()
def service(sqlite_store, notifier):
    return PortalService(store=sqlite_store, notifier=notifier)


@pytest.fixture()
def broken_service(failing_store, notifier):
    return PortalService(store=failing_store, notifier=notifier)


@pytest.fixture()
def upload():
    return FakeUpload()


@pytest.fixture()
def make_upload():
    return FakeUpload
