"""
common/data_store.py

The data-access layer behind the portal service.

===============================================================================
THE CONTRACT:
===============================================================================
Every call returns a `StoreResult(data, error)`. A store NEVER raises for a
backend failure (bad HTTP status, dropped connection, timeout, SQLite
error); it logs the failure and hands back a result with `error` set. The
portal service decides what the user sees (toast, fallback demo data).

Two backends implement the same interface:

- SupabaseStore: the hosted backend, spoken to over HTTP with `requests`
  (PostgREST under /rest/v1, object storage under /storage/v1).
- SQLiteStore:   a local file for demos and offline work. One table per
  collection holding a JSON payload (see portal_schema.py), plus a folder
  per storage bucket.

Filters are simple equality matches: {"category": "capability"}.
"""

import json
import logging
import os
import sqlite3
import uuid
from typing import Any, Dict, Iterable, List, Optional

import requests

logger = logging.getLogger(__name__)


class StoreResult:
    def __init__(self, data: Any = None, error: Optional[str] = None):
        self.data = data
        self.error = error

    @property
    def ok(self) -> bool:
        return self.error is None

    def __repr__(self):
        return f"StoreResult(data={self.data!r}, error={self.error!r})"


class DataStore:
    """Interface shared by every backend. `name` is shown in the sidebar."""

    name = "Unknown"

    def select(self, table: str, filters: Optional[Dict[str, Any]] = None,
               order: Optional[str] = None, limit: Optional[int] = None) -> StoreResult:
        raise NotImplementedError

    def insert(self, table: str, rows: List[dict]) -> StoreResult:
        raise NotImplementedError

    def update(self, table: str, values: dict, match: Dict[str, Any]) -> StoreResult:
        raise NotImplementedError

    def delete(self, table: str, match: Dict[str, Any]) -> StoreResult:
        raise NotImplementedError

    def upload(self, bucket: str, path: str, content: bytes,
               content_type: Optional[str] = None) -> StoreResult:
        raise NotImplementedError

    def public_url(self, bucket: str, path: str) -> str:
        raise NotImplementedError

    def remove(self, bucket: str, paths: List[str]) -> StoreResult:
        raise NotImplementedError


# --- [B1] Hosted backend ---------------------------------------------------------

class SupabaseStore(DataStore):
    """
    Talks to the hosted Postgres (PostgREST) and object storage over HTTP.
    `session` can be swapped for anything with a requests-style
    `request(method, url, **kwargs)`.
    """

    name = "Hosted"

    def __init__(self, url: str, api_key: str, timeout: float = 30, session=None):
        self.base_url = url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self.session = session or requests.Session()

    def _headers(self, extra: Optional[dict] = None) -> dict:
        headers = {
            "apikey": self.api_key,
            "Authorization": f"Bearer {self.api_key}",
        }
        if extra:
            headers.update(extra)
        return headers

    @staticmethod
    def _eq_params(match: Optional[Dict[str, Any]]) -> Dict[str, str]:
        return {column: f"eq.{value}" for column, value in (match or {}).items()}

    def _request(self, method: str, path: str, **kwargs) -> StoreResult:
        url = f"{self.base_url}{path}"
        kwargs.setdefault("timeout", self.timeout)
        try:
            response = self.session.request(method, url, **kwargs)
            # Raises for 4xx (bad filter, RLS denial) and 5xx
            response.raise_for_status()
        except requests.exceptions.HTTPError as e:
            logger.error("%s %s failed: %s", method, path, e)
            return StoreResult(error=f"The server returned a bad status. {e}")
        except requests.exceptions.ConnectionError as e:
            logger.error("%s %s could not connect: %s", method, path, e)
            return StoreResult(error=f"Could not connect to the server. {e}")
        except requests.exceptions.Timeout:
            logger.error("%s %s timed out after %ss", method, path, self.timeout)
            return StoreResult(error="The request timed out.")
        except requests.exceptions.RequestException as e:
            logger.error("%s %s failed: %s", method, path, e)
            return StoreResult(error=f"An unexpected request error occurred: {e}")

        if not response.content:
            return StoreResult(data=None)
        try:
            return StoreResult(data=response.json())
        except ValueError:
            return StoreResult(data=response.content)

    def select(self, table, filters=None, order=None, limit=None):
        params = {"select": "*"}
        params.update(self._eq_params(filters))
        if order:
            params["order"] = order
        if limit is not None:
            params["limit"] = str(limit)
        result = self._request("GET", f"/rest/v1/{table}", params=params, headers=self._headers())
        if result.ok and result.data is None:
            result.data = []
        return result

    def insert(self, table, rows):
        return self._request(
            "POST", f"/rest/v1/{table}",
            json=list(rows),
            headers=self._headers({"Prefer": "return=representation"}),
        )

    def update(self, table, values, match):
        return self._request(
            "PATCH", f"/rest/v1/{table}",
            params=self._eq_params(match),
            json=values,
            headers=self._headers({"Prefer": "return=representation"}),
        )

    def delete(self, table, match):
        return self._request(
            "DELETE", f"/rest/v1/{table}",
            params=self._eq_params(match),
            headers=self._headers({"Prefer": "return=representation"}),
        )

    def upload(self, bucket, path, content, content_type=None):
        return self._request(
            "POST", f"/storage/v1/object/{bucket}/{path}",
            data=content,
            headers=self._headers({"Content-Type": content_type or "application/octet-stream"}),
        )

    def public_url(self, bucket, path):
        return f"{self.base_url}/storage/v1/object/public/{bucket}/{path}"

    def remove(self, bucket, paths):
        return self._request(
            "DELETE", f"/storage/v1/object/{bucket}",
            json={"prefixes": list(paths)},
            headers=self._headers(),
        )


# --- [B2] Local backend ----------------------------------------------------------

def _sort_key(value):
    """Numbers (and numeric strings) sort numerically and ahead of text."""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return (0, value, "")
    text = "" if value is None else str(value)
    try:
        return (0, float(text), text)
    except ValueError:
        return (1, 0, text)


class SQLiteStore(DataStore):
    """
    Local SQLite store. Each collection is a table of (id, payload JSON).
    Run `python portal_schema.py` once to create the tables.
    """

    name = "Local"

    def __init__(self, db_file: str, files_root: str):
        self.db_file = db_file
        self.files_root = os.path.abspath(files_root)

    def _get_db_conn(self):
        conn = sqlite3.connect(self.db_file)
        conn.row_factory = sqlite3.Row
        return conn

    @staticmethod
    def _matches(payload: dict, filters: Optional[Dict[str, Any]]) -> bool:
        return all(str(payload.get(k)) == str(v) for k, v in (filters or {}).items())

    def _load(self, conn, table: str, filters=None) -> List[dict]:
        rows = conn.execute(f"SELECT id, payload FROM {table} ORDER BY rowid").fetchall()
        payloads = []
        for row in rows:
            payload = json.loads(row["payload"])
            payload["id"] = row["id"]
            if self._matches(payload, filters):
                payloads.append(payload)
        return payloads

    def select(self, table, filters=None, order=None, limit=None):
        conn = self._get_db_conn()
        try:
            payloads = self._load(conn, table, filters)
        except sqlite3.Error as e:
            logger.error("SELECT from %s failed: %s", table, e)
            return StoreResult(error=str(e))
        finally:
            conn.close()

        if order:
            column, _, direction = order.partition(".")
            payloads.sort(key=lambda p: _sort_key(p.get(column)), reverse=(direction == "desc"))
        if limit is not None:
            payloads = payloads[:limit]
        return StoreResult(data=payloads)

    def insert(self, table, rows):
        inserted = []
        conn = self._get_db_conn()
        try:
            with conn:
                for row in rows:
                    payload = dict(row)
                    record_id = str(payload.pop("id", None) or uuid.uuid4())
                    conn.execute(
                        f"INSERT INTO {table} (id, payload) VALUES (?, ?)",
                        (record_id, json.dumps(payload)),
                    )
                    inserted.append({"id": record_id, **payload})
        except sqlite3.Error as e:
            logger.error("INSERT into %s failed: %s", table, e)
            return StoreResult(error=str(e))
        finally:
            conn.close()
        return StoreResult(data=inserted)

    def update(self, table, values, match):
        updated = []
        conn = self._get_db_conn()
        try:
            with conn:
                for payload in self._load(conn, table, match):
                    record_id = payload.pop("id")
                    payload.update({k: v for k, v in values.items() if k != "id"})
                    conn.execute(
                        f"UPDATE {table} SET payload = ? WHERE id = ?",
                        (json.dumps(payload), record_id),
                    )
                    updated.append({"id": record_id, **payload})
        except sqlite3.Error as e:
            logger.error("UPDATE on %s failed: %s", table, e)
            return StoreResult(error=str(e))
        finally:
            conn.close()
        return StoreResult(data=updated)

    def delete(self, table, match):
        conn = self._get_db_conn()
        try:
            with conn:
                doomed = self._load(conn, table, match)
                conn.executemany(
                    f"DELETE FROM {table} WHERE id = ?",
                    [(p["id"],) for p in doomed],
                )
        except sqlite3.Error as e:
            logger.error("DELETE from %s failed: %s", table, e)
            return StoreResult(error=str(e))
        finally:
            conn.close()
        return StoreResult(data=doomed)

    # --- Files -----------------------------------------------------------------

    def _file_path(self, bucket: str, path: str) -> str:
        full_path = os.path.abspath(os.path.join(self.files_root, bucket, path))
        if not full_path.startswith(os.path.join(self.files_root, bucket) + os.sep):
            raise ValueError(f"Path '{path}' escapes bucket '{bucket}'")
        return full_path

    def upload(self, bucket, path, content, content_type=None):
        try:
            full_path = self._file_path(bucket, path)
            os.makedirs(os.path.dirname(full_path), exist_ok=True)
            with open(full_path, "wb") as f:
                f.write(content)
        except (OSError, ValueError) as e:
            logger.error("Upload of %s/%s failed: %s", bucket, path, e)
            return StoreResult(error=str(e))
        return StoreResult(data={"Key": f"{bucket}/{path}"})

    def public_url(self, bucket, path):
        return os.path.join(self.files_root, bucket, path)

    def remove(self, bucket, paths: Iterable[str]):
        removed = []
        try:
            for path in paths:
                full_path = self._file_path(bucket, path)
                if os.path.exists(full_path):
                    os.remove(full_path)
                    removed.append(path)
        except (OSError, ValueError) as e:
            logger.error("Removal from %s failed: %s", bucket, e)
            return StoreResult(error=str(e))
        return StoreResult(data=removed)
