"""SchoolBoard — Cloud Firestore REST client.

Wraps the Firestore v1 REST API to read documents, run single-collection
structured queries, and batch-get documents by id.  Only the read
operations the dashboard needs are implemented.

Reference:
    https://firebase.google.com/docs/firestore/reference/rest

Notes:
    Firestore returns every field as a typed value (``{"stringValue": ..}``,
    ``{"integerValue": "3"}``, ...).  Documents handed back to callers are
    plain dicts with native Python values and the document id under
    ``"id"``; references come back as :class:`DocumentRef`.
"""

from __future__ import annotations

import base64
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

import httpx

from config import get_settings, get_logger

logger = get_logger(__name__)

_OPERATORS: dict[str, str] = {
    "==": "EQUAL",
    "!=": "NOT_EQUAL",
    "<": "LESS_THAN",
    "<=": "LESS_THAN_OR_EQUAL",
    ">": "GREATER_THAN",
    ">=": "GREATER_THAN_OR_EQUAL",
    "in": "IN",
    "not-in": "NOT_IN",
    "array-contains": "ARRAY_CONTAINS",
    "array-contains-any": "ARRAY_CONTAINS_ANY",
}

_DIRECTIONS: dict[str, str] = {
    "asc": "ASCENDING",
    "desc": "DESCENDING",
}

DOCUMENT_ID = "__name__"


class FirestoreError(Exception):
    """Raised when the Firestore API returns an unexpected response."""


@dataclass(frozen=True)
class DocumentRef:
    """A reference to a document, as a path relative to the database root.

    ``DocumentRef("users/abc")`` refers to document ``abc`` in ``users``.
    """

    path: str

    @property
    def id(self) -> str:
        return self.path.rstrip("/").rsplit("/", 1)[-1]

    @property
    def collection(self) -> str:
        parts = self.path.strip("/").split("/")
        return parts[-2] if len(parts) >= 2 else ""


def ref_id(value: Any) -> str:
    """Extract a document id from a reference, a path string, or a plain id."""
    if not value:
        return ""
    if isinstance(value, DocumentRef):
        return value.id
    if isinstance(value, str):
        return value.rstrip("/").rsplit("/", 1)[-1]
    if isinstance(value, dict):
        return str(value.get("id") or ref_id(value.get("path")))
    return ""


# ---------------------------------------------------------------------------
# Typed-value codec
# ---------------------------------------------------------------------------
def _parse_timestamp(raw: str) -> datetime:
    # Firestore emits RFC 3339 with up to nanosecond precision and a "Z".
    text = raw.replace("Z", "+00:00")
    if "." in text:
        head, tail = text.split(".", 1)
        frac, sep, offset = tail.partition("+")
        if not sep:
            frac, sep, offset = tail.partition("-")
        text = f"{head}.{frac[:6].ljust(6, '0')}{sep}{offset}"
    return datetime.fromisoformat(text)


def decode_value(value: dict[str, Any], root: str = "") -> Any:
    """Convert one Firestore typed value to a native Python value.

    *root* is the ``projects/.../documents`` prefix stripped from
    reference values.
    """
    if "nullValue" in value:
        return None
    if "stringValue" in value:
        return value["stringValue"]
    if "booleanValue" in value:
        return bool(value["booleanValue"])
    if "integerValue" in value:
        return int(value["integerValue"])
    if "doubleValue" in value:
        return float(value["doubleValue"])
    if "timestampValue" in value:
        return _parse_timestamp(value["timestampValue"])
    if "referenceValue" in value:
        path = value["referenceValue"]
        if root and path.startswith(root + "/"):
            path = path[len(root) + 1:]
        return DocumentRef(path)
    if "mapValue" in value:
        fields = value["mapValue"].get("fields", {})
        return {k: decode_value(v, root) for k, v in fields.items()}
    if "arrayValue" in value:
        return [decode_value(v, root) for v in value["arrayValue"].get("values", [])]
    if "geoPointValue" in value:
        point = value["geoPointValue"]
        return (point.get("latitude", 0.0), point.get("longitude", 0.0))
    if "bytesValue" in value:
        return base64.b64decode(value["bytesValue"])
    raise FirestoreError(f"Unsupported Firestore value: {list(value)[:1]}")


def encode_value(value: Any, root: str = "") -> dict[str, Any]:
    """Convert a native Python value to a Firestore typed value."""
    if value is None:
        return {"nullValue": None}
    if isinstance(value, bool):
        return {"booleanValue": value}
    if isinstance(value, int):
        return {"integerValue": str(value)}
    if isinstance(value, float):
        return {"doubleValue": value}
    if isinstance(value, str):
        return {"stringValue": value}
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        stamp = value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")
        return {"timestampValue": stamp}
    if isinstance(value, DocumentRef):
        return {"referenceValue": f"{root}/{value.path.strip('/')}"}
    if isinstance(value, (list, tuple, set)):
        return {"arrayValue": {"values": [encode_value(v, root) for v in value]}}
    if isinstance(value, dict):
        return {"mapValue": {"fields": {k: encode_value(v, root) for k, v in value.items()}}}
    raise FirestoreError(f"Cannot encode {type(value).__name__} as a Firestore value")


def decode_document(document: dict[str, Any], root: str = "") -> dict[str, Any]:
    """Flatten a Firestore document resource into ``{"id": ..., **fields}``."""
    fields = document.get("fields", {})
    data = {k: decode_value(v, root) for k, v in fields.items()}
    data["id"] = document.get("name", "").rsplit("/", 1)[-1]
    return data


# ---------------------------------------------------------------------------
# Client
# ---------------------------------------------------------------------------
class FirestoreClient:
    """Async read-only client for the Cloud Firestore REST API.

    Usage::

        async with FirestoreClient() as fs:
            results = await fs.query("testResults", [("studentId", "==", sid)])
    """

    def __init__(
        self,
        project_id: str | None = None,
        database: str | None = None,
        api_key: str | None = None,
        id_token: str | None = None,
        base_url: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        settings = get_settings()
        self._project_id = project_id or settings.firestore_project_id
        self._database = database or settings.firestore_database
        self._api_key = api_key if api_key is not None else settings.firestore_api_key
        self._id_token = id_token if id_token is not None else settings.firestore_id_token
        self._base_url = (base_url or settings.firestore_base_url).rstrip("/")
        self._timeout = httpx.Timeout(settings.request_timeout_seconds, connect=10.0)
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

        if not self._project_id:
            logger.warning("FIRESTORE_PROJECT_ID is not set; requests will fail")

    # ------------------------------------------------------------------
    # Context manager
    # ------------------------------------------------------------------
    async def __aenter__(self) -> FirestoreClient:
        self._ensure_client()
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.close()

    async def close(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    @property
    def root(self) -> str:
        """Resource name prefix of every document in the database."""
        return f"projects/{self._project_id}/databases/{self._database}/documents"

    def _ensure_client(self) -> httpx.AsyncClient:
        if self._client is None:
            headers = {"Content-Type": "application/json"}
            if self._id_token:
                headers["Authorization"] = f"Bearer {self._id_token}"
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                headers=headers,
                timeout=self._timeout,
                transport=self._transport,
            )
        return self._client

    def _params(self) -> dict[str, str]:
        return {"key": self._api_key} if self._api_key else {}

    async def _request(
        self,
        method: str,
        path: str,
        body: dict[str, Any] | None = None,
        allow_404: bool = False,
    ) -> Any:
        """Send one request and return the decoded JSON body."""
        client = self._ensure_client()
        logger.debug("%s %s", method, path)
        try:
            response = await client.request(method, f"/{path}", params=self._params(), json=body)
        except httpx.RequestError as exc:
            raise FirestoreError(f"Firestore request failed: {exc}") from exc

        if allow_404 and response.status_code == 404:
            return None
        if response.status_code != 200:
            raise FirestoreError(
                f"Firestore returned {response.status_code}: {response.text[:300]}"
            )
        return response.json()

    def _field_filter(self, collection: str, field: str, op: str, value: Any) -> dict[str, Any]:
        try:
            operator = _OPERATORS[op]
        except KeyError:
            raise FirestoreError(f"Unsupported filter operator: {op!r}") from None

        if field == DOCUMENT_ID:
            # Document-id filters compare references, not strings.
            if isinstance(value, (list, tuple, set)):
                value = [DocumentRef(f"{collection}/{v}") for v in value]
            else:
                value = DocumentRef(f"{collection}/{value}")

        return {
            "fieldFilter": {
                "field": {"fieldPath": field},
                "op": operator,
                "value": encode_value(value, self.root),
            }
        }

    # ------------------------------------------------------------------
    # Public methods
    # ------------------------------------------------------------------
    async def get_document(self, collection: str, doc_id: str) -> dict[str, Any] | None:
        """Fetch one document by id; ``None`` when it does not exist."""
        data = await self._request("GET", f"{self.root}/{collection}/{doc_id}", allow_404=True)
        if data is None:
            logger.debug("Document %s/%s not found", collection, doc_id)
            return None
        return decode_document(data, self.root)

    async def query(
        self,
        collection: str,
        filters: list[tuple[str, str, Any]] | None = None,
        order_by: list[tuple[str, str]] | None = None,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        """Run a structured query against a single collection.

        Parameters
        ----------
        collection:
            Collection id (e.g. ``"testResults"``).
        filters:
            ``(field, op, value)`` triples combined with AND.  Use
            ``"__name__"`` as the field to filter by document id.
        order_by:
            ``(field, "asc" | "desc")`` pairs.
        limit:
            Maximum number of documents.
        """
        structured: dict[str, Any] = {"from": [{"collectionId": collection}]}

        clauses = [self._field_filter(collection, *f) for f in (filters or [])]
        if len(clauses) == 1:
            structured["where"] = clauses[0]
        elif clauses:
            structured["where"] = {"compositeFilter": {"op": "AND", "filters": clauses}}

        if order_by:
            structured["orderBy"] = [
                {"field": {"fieldPath": field}, "direction": _DIRECTIONS[direction.lower()]}
                for field, direction in order_by
            ]
        if limit is not None:
            structured["limit"] = limit

        rows = await self._request(
            "POST", f"{self.root}:runQuery", body={"structuredQuery": structured}
        )
        documents = [
            decode_document(row["document"], self.root)
            for row in rows or []
            if "document" in row
        ]
        logger.info("Query %s (%d filters) returned %d documents",
                    collection, len(clauses), len(documents))
        return documents

    async def get_documents(self, collection: str, ids: list[str]) -> list[dict[str, Any]]:
        """Batch-get documents by id, skipping missing ones, in input order."""
        if not ids:
            return []
        names = [f"{self.root}/{collection}/{i}" for i in ids]
        rows = await self._request("POST", f"{self.root}:batchGet", body={"documents": names})

        found: dict[str, dict[str, Any]] = {}
        for row in rows or []:
            if "found" in row:
                doc = decode_document(row["found"], self.root)
                found[doc["id"]] = doc
        logger.info("Batch get %s: %d/%d found", collection, len(found), len(ids))
        return [found[i] for i in ids if i in found]
