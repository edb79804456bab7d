import json
import logging
import os
import sqlite3
import uuid
from typing import Protocol

import firebase_admin
import pandas as pd
from firebase_admin import credentials, firestore
from google.api_core.exceptions import GoogleAPIError

logger = logging.getLogger(__name__)

COLLECTION = "inventory"


class StoreError(Exception):
    """Any failed store operation: transport, permission, missing id or storage."""


class RecordStore(Protocol):
    def create_record(self, collection: str, data: dict) -> str: ...
    def list_records(self, collection: str) -> list[tuple[str, dict]]: ...
    def update_record(self, collection: str, record_id: str, data: dict) -> None: ...
    def delete_record(self, collection: str, record_id: str) -> None: ...


# --- Firestore ---
class FirestoreStore:
    def __init__(self, client):
        self.client = client

    @classmethod
    def from_settings(cls, settings):
        """Reuse the default Firebase app if one is already initialised,
        otherwise create it from a service-account key (or ADC)."""
        try:
            app = firebase_admin.get_app()
        except ValueError:
            key_file = settings.get("credentials")
            cred = credentials.Certificate(key_file) if key_file else credentials.ApplicationDefault()
            options = {"projectId": settings["project_id"]} if settings.get("project_id") else None
            app = firebase_admin.initialize_app(cred, options)
        return cls(firestore.client(app))

    def create_record(self, collection, data):
        try:
            _, ref = self.client.collection(collection).add(dict(data))
        except GoogleAPIError as e:
            raise StoreError(f"create in {collection} failed: {e}") from e
        logger.info("Created %s/%s", collection, ref.id)
        return ref.id

    def list_records(self, collection):
        try:
            return [(snap.id, snap.to_dict() or {}) for snap in self.client.collection(collection).stream()]
        except GoogleAPIError as e:
            raise StoreError(f"list of {collection} failed: {e}") from e

    def update_record(self, collection, record_id, data):
        try:
            self.client.collection(collection).document(record_id).update(dict(data))
        except GoogleAPIError as e:
            raise StoreError(f"update of {collection}/{record_id} failed: {e}") from e
        logger.info("Updated %s/%s", collection, record_id)

    def delete_record(self, collection, record_id):
        ref = self.client.collection(collection).document(record_id)
        try:
            # Firestore deletes of a missing document succeed silently
            if not ref.get().exists:
                raise StoreError(f"{collection}/{record_id} does not exist")
            ref.delete()
        except GoogleAPIError as e:
            raise StoreError(f"delete of {collection}/{record_id} failed: {e}") from e
        logger.info("Deleted %s/%s", collection, record_id)


# --- Local SQLite document table ---
class SQLiteStore:
    def __init__(self, db_path):
        self.db_path = str(db_path)
        folder = os.path.dirname(self.db_path)
        if folder:
            os.makedirs(folder, exist_ok=True)
        self._execute("""
            CREATE TABLE IF NOT EXISTS documents (
                id TEXT PRIMARY KEY,
                collection TEXT NOT NULL,
                data TEXT NOT NULL
            )
        """)

    def _connect(self):
        try:
            return sqlite3.connect(self.db_path)
        except sqlite3.Error as e:
            raise StoreError(str(e)) from e

    def _execute(self, sql, params=()):
        conn = self._connect()
        try:
            with conn:
                return conn.execute(sql, params).rowcount
        except sqlite3.Error as e:
            raise StoreError(str(e)) from e
        finally:
            conn.close()

    def create_record(self, collection, data):
        record_id = uuid.uuid4().hex
        self._execute(
            "INSERT INTO documents (id, collection, data) VALUES (?, ?, ?)",
            (record_id, collection, json.dumps(dict(data))),
        )
        logger.debug("Created %s/%s in %s", collection, record_id, self.db_path)
        return record_id

    def list_records(self, collection):
        conn = self._connect()
        try:
            df = pd.read_sql_query(
                "SELECT id, data FROM documents WHERE collection = ? ORDER BY rowid",
                conn, params=(collection,),
            )
        except (sqlite3.Error, pd.errors.DatabaseError) as e:
            raise StoreError(str(e)) from e
        finally:
            conn.close()
        return [(row.id, json.loads(row.data)) for row in df.itertuples(index=False)]

    def update_record(self, collection, record_id, data):
        conn = self._connect()
        try:
            with conn:
                row = conn.execute(
                    "SELECT data FROM documents WHERE collection = ? AND id = ?",
                    (collection, record_id),
                ).fetchone()
                if row is None:
                    raise StoreError(f"{collection}/{record_id} does not exist")
                merged = {**json.loads(row[0]), **dict(data)}
                conn.execute(
                    "UPDATE documents SET data = ? WHERE collection = ? AND id = ?",
                    (json.dumps(merged), collection, record_id),
                )
        except sqlite3.Error as e:
            raise StoreError(str(e)) from e
        finally:
            conn.close()
        logger.debug("Updated %s/%s in %s", collection, record_id, self.db_path)

    def delete_record(self, collection, record_id):
        deleted = self._execute(
            "DELETE FROM documents WHERE collection = ? AND id = ?",
            (collection, record_id),
        )
        if not deleted:
            raise StoreError(f"{collection}/{record_id} does not exist")
        logger.debug("Deleted %s/%s from %s", collection, record_id, self.db_path)


def open_store(settings):
    backend = settings.get("backend", "firestore")
    if backend == "firestore":
        return FirestoreStore.from_settings(settings)
    if backend == "sqlite":
        return SQLiteStore(settings.get("path") or "data/inventory.db")
    raise ValueError(f"Unknown store backend: {backend!r}")
