"""
Name: Local Adapter Tests

Responsibilities:
  - JsonFileStorage persists across instances and tolerates corrupt files
  - FileSystemDownloadSink writes atomically and never leaves temp files
  - TokenCredentials restores identity from durable storage
"""

import pytest

from leavemarker.domain.identity import Identity, Role
from leavemarker.infrastructure.downloads import FileSystemDownloadSink
from leavemarker.infrastructure.http.credentials import (
    CookieCredentials,
    TokenCredentials,
)
from leavemarker.infrastructure.navigation import InMemoryNavigator
from leavemarker.infrastructure.storage import InMemoryStorage, JsonFileStorage

pytestmark = pytest.mark.unit


class TestJsonFileStorage:
    def test_values_survive_a_new_instance(self, tmp_path):
        path = tmp_path / "state" / "local.json"
        JsonFileStorage(path).set("auth_token", "jwt")

        assert JsonFileStorage(path).get("auth_token") == "jwt"

    def test_remove(self, tmp_path):
        storage = JsonFileStorage(tmp_path / "local.json")
        storage.set("a", "1")

        storage.remove("a")
        storage.remove("missing")

        assert storage.get("a") is None

    def test_corrupt_file_reads_as_empty(self, tmp_path):
        path = tmp_path / "local.json"
        path.write_text("{not json", encoding="utf-8")

        assert JsonFileStorage(path).get("anything") is None

    def test_no_temp_files_left(self, tmp_path):
        storage = JsonFileStorage(tmp_path / "local.json")
        storage.set("a", "1")
        storage.set("b", "2")

        assert sorted(p.name for p in tmp_path.iterdir()) == ["local.json"]


class TestDownloadSink:
    def test_saves_under_suggested_name(self, tmp_path):
        sink = FileSystemDownloadSink(tmp_path / "downloads")

        path = sink.save("attendance-report-2026-03-01.xlsx", b"PK\x03\x04")

        assert path == tmp_path / "downloads" / "attendance-report-2026-03-01.xlsx"
        assert path.read_bytes() == b"PK\x03\x04"
        assert [p.name for p in path.parent.iterdir()] == [path.name]

    def test_name_cannot_escape_directory(self, tmp_path):
        sink = FileSystemDownloadSink(tmp_path / "downloads")

        path = sink.save("../../etc/report.csv", b"a,b")

        assert path.parent == tmp_path / "downloads"
        assert path.name == "report.csv"


class TestNavigator:
    def test_hard_navigation_counts_as_page_load(self):
        navigator = InMemoryNavigator("/dashboard")

        navigator.navigate("/dashboard/holidays")
        navigator.hard_navigate("/login")

        assert navigator.current_path() == "/login"
        assert navigator.page_loads == 1
        assert navigator.hard_navigations() == ["/login"]


class TestCredentials:
    async def test_token_restore_reads_local_storage(self):
        storage = InMemoryStorage()
        credentials = TokenCredentials(storage)
        identity = Identity(
            id=3, email="a@b.c", full_name="A B", role=Role.MANAGER, company_id=1
        )
        credentials.persist(identity, "jwt")

        async def _never_called():
            raise AssertionError("token mode restores locally")

        assert await credentials.restore(_never_called) == identity

    async def test_token_restore_ignores_unreadable_identity(self):
        storage = InMemoryStorage({"auth_token": "jwt", "user": "{broken"})

        async def _verify():
            return None

        assert await TokenCredentials(storage).restore(_verify) is None

    async def test_token_restore_without_token_is_anonymous(self):
        storage = InMemoryStorage({"user": '{"id": 1}'})

        async def _verify():
            return None

        assert await TokenCredentials(storage).restore(_verify) is None

    def test_token_clear_removes_both_keys(self):
        storage = InMemoryStorage({"auth_token": "jwt", "user": "{}", "other": "x"})

        TokenCredentials(storage).clear()

        assert storage.snapshot() == {"other": "x"}

    async def test_cookie_restore_delegates_to_verification(self):
        identity = Identity(
            id=3, email="a@b.c", full_name="A B", role=Role.MANAGER, company_id=1
        )

        async def _verify():
            return identity

        assert await CookieCredentials().restore(_verify) == identity
