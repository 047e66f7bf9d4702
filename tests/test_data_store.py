import json
import os

import pytest
import requests

from common.data_store import SQLiteStore, SupabaseStore


class FakeResponse:
    def __init__(self, status_code=200, payload=None, content=None):
        self.status_code = status_code
        if content is not None:
            self.content = content
        elif payload is not None:
            self.content = json.dumps(payload).encode("utf-8")
        else:
            self.content = b""
        self._payload = payload

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(f"{self.status_code} Error")

    def json(self):
        if self._payload is None:
            raise ValueError("not json")
        return self._payload


class FakeSession:
    def __init__(self, response=None, exc=None):
        self.response = response or FakeResponse(payload=[])
        self.exc = exc
        self.calls = []

    def request(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        if self.exc:
            raise self.exc
        return self.response


def _hosted(session, timeout=5):
    return SupabaseStore("https://example.supabase.co/", "anon-key", timeout=timeout, session=session)


# --- Hosted backend ---

def test_select_builds_postgrest_query():
    session = FakeSession(FakeResponse(payload=[{"id": "1"}]))
    result = _hosted(session).select("dropdown_options", filters={"category": "location"}, order="id", limit=1)

    assert result.ok
    assert result.data == [{"id": "1"}]
    method, url, kwargs = session.calls[0]
    assert method == "GET"
    assert url == "https://example.supabase.co/rest/v1/dropdown_options"
    assert kwargs["params"] == {"select": "*", "category": "eq.location", "order": "id", "limit": "1"}
    assert kwargs["headers"]["apikey"] == "anon-key"
    assert kwargs["headers"]["Authorization"] == "Bearer anon-key"
    assert kwargs["timeout"] == 5


def test_select_empty_body_is_empty_list():
    result = _hosted(FakeSession(FakeResponse(content=b""))).select("aircraft")
    assert result.ok
    assert result.data == []


def test_writes_ask_for_representation():
    session = FakeSession(FakeResponse(payload=[{"id": "9", "name": "A"}]))
    store = _hosted(session)

    assert store.insert("employees", [{"name": "A"}]).data == [{"id": "9", "name": "A"}]
    store.update("employees", {"name": "B"}, {"id": "9"})
    store.delete("employees", {"id": "9"})

    (m1, _, k1), (m2, _, k2), (m3, _, k3) = session.calls
    assert (m1, m2, m3) == ("POST", "PATCH", "DELETE")
    assert k1["json"] == [{"name": "A"}]
    assert k2["params"] == {"id": "eq.9"} and k2["json"] == {"name": "B"}
    assert k3["params"] == {"id": "eq.9"}
    for kwargs in (k1, k2, k3):
        assert kwargs["headers"]["Prefer"] == "return=representation"


def test_storage_paths():
    session = FakeSession(FakeResponse(payload={"Key": "aircraft-images/1.png"}))
    store = _hosted(session)

    assert store.upload("aircraft-images", "1.png", b"img", "image/png").ok
    store.remove("aircraft-images", ["1.png"])

    upload_call, remove_call = session.calls
    assert upload_call[1] == "https://example.supabase.co/storage/v1/object/aircraft-images/1.png"
    assert upload_call[2]["data"] == b"img"
    assert upload_call[2]["headers"]["Content-Type"] == "image/png"
    assert remove_call[0] == "DELETE"
    assert remove_call[2]["json"] == {"prefixes": ["1.png"]}
    assert store.public_url("aircraft-images", "1.png") == \
        "https://example.supabase.co/storage/v1/object/public/aircraft-images/1.png"


@pytest.mark.parametrize("exc,fragment", [
    (requests.exceptions.ConnectionError("refused"), "Could not connect"),
    (requests.exceptions.Timeout(), "timed out"),
    (requests.exceptions.RequestException("weird"), "unexpected request error"),
])
def test_transport_errors_become_results(exc, fragment):
    result = _hosted(FakeSession(exc=exc)).select("aircraft")
    assert not result.ok
    assert fragment in result.error


def test_bad_status_becomes_result():
    result = _hosted(FakeSession(FakeResponse(status_code=401, payload={"message": "no"}))).insert("aircraft", [{}])
    assert not result.ok
    assert "bad status" in result.error


def test_non_json_body_is_returned_raw():
    result = _hosted(FakeSession(FakeResponse(content=b"OK"))).remove("aircraft-images", ["x.png"])
    assert result.ok
    assert result.data == b"OK"


# --- Local backend ---

def test_sqlite_insert_select_keeps_nested_payload(sqlite_store):
    inserted = sqlite_store.insert("aircraft", [
        {"id": "a1", "type": "EC120B", "specifications": {"range": "710 km"}},
        {"type": "AS350"},
    ])
    assert inserted.ok
    assert inserted.data[0]["id"] == "a1"
    generated_id = inserted.data[1]["id"]
    assert generated_id

    rows = sqlite_store.select("aircraft").data
    assert [r["id"] for r in rows] == ["a1", generated_id]
    assert rows[0]["specifications"] == {"range": "710 km"}


def test_sqlite_filters_order_and_limit(sqlite_store):
    sqlite_store.insert("employees", [
        {"id": "2", "name": "B", "department": "Ops"},
        {"id": "1", "name": "A", "department": "Ops"},
        {"id": "3", "name": "C", "department": "Sales"},
    ])
    assert [r["id"] for r in sqlite_store.select("employees", order="id").data] == ["1", "2", "3"]
    assert [r["id"] for r in sqlite_store.select("employees", order="id.desc", limit=2).data] == ["3", "2"]
    assert [r["name"] for r in sqlite_store.select("employees", filters={"department": "Ops"}).data] == ["B", "A"]


def test_sqlite_orders_numeric_ids_numerically(sqlite_store):
    sqlite_store.insert("employees", [{"id": str(i), "name": f"E{i}"} for i in (10, 2, 1)])
    assert [r["id"] for r in sqlite_store.select("employees", order="id").data] == ["1", "2", "10"]
    assert [r["id"] for r in sqlite_store.select("employees", order="id.desc").data] == ["10", "2", "1"]


def test_sqlite_update_and_delete(sqlite_store):
    sqlite_store.insert("employees", [{"id": "1", "name": "A", "title": "Pilot"}])

    updated = sqlite_store.update("employees", {"title": "Chief Pilot", "id": "ignored"}, {"id": "1"})
    assert updated.data == [{"id": "1", "name": "A", "title": "Chief Pilot"}]

    deleted = sqlite_store.delete("employees", {"id": "1"})
    assert [r["id"] for r in deleted.data] == ["1"]
    assert sqlite_store.select("employees").data == []
    assert sqlite_store.delete("employees", {"id": "1"}).data == []


def test_sqlite_missing_table_is_an_error_result(tmp_path):
    store = SQLiteStore(str(tmp_path / "empty.db"), str(tmp_path / "files"))
    result = store.select("aircraft")
    assert not result.ok
    assert "no such table" in result.error


def test_sqlite_duplicate_id_is_an_error_result(sqlite_store):
    sqlite_store.insert("aircraft", [{"id": "a1"}])
    assert not sqlite_store.insert("aircraft", [{"id": "a1"}]).ok


def test_sqlite_files(sqlite_store):
    assert sqlite_store.upload("aircraft-images", "1.png", b"img").ok
    url = sqlite_store.public_url("aircraft-images", "1.png")
    with open(url, "rb") as f:
        assert f.read() == b"img"

    assert sqlite_store.remove("aircraft-images", ["1.png", "missing.png"]).data == ["1.png"]
    assert not os.path.exists(url)


def test_sqlite_files_cannot_escape_bucket(sqlite_store):
    assert not sqlite_store.upload("aircraft-images", "../../evil.png", b"x").ok
    assert not sqlite_store.remove("aircraft-images", ["../other/x.png"]).ok
