"""
In-memory record client for testing and development.

Evaluates the same query vocabulary as the hosted backend (EqualTo,
ExactMatch with Include, Contains, OR/AND where-groups, ordering and
paging) against plain dicts held in memory. Data is lost when the process
ends.
"""

import copy
import threading
from typing import Any, Callable, Dict, List, Optional

from feedback_hub.client.base import RecordClient, RecordResponse
from feedback_hub.client.query import AND, CONTAINS, DESC, EQUAL_TO, EXACT_MATCH, OR


class QueryError(ValueError):
    """Raised internally when a query uses unsupported vocabulary."""


def _as_text(value: Any) -> str:
    return "" if value is None else str(value)


def _match(row: Dict[str, Any], field_name: str, operator: str, values: List[Any]) -> bool:
    actual = _as_text(row.get(field_name))
    wanted = [_as_text(v) for v in values]

    if operator in (EQUAL_TO, EXACT_MATCH):
        return actual in wanted
    if operator == CONTAINS:
        lowered = actual.lower()
        return any(w.lower() in lowered for w in wanted)

    raise QueryError(f"Unsupported operator: {operator}")


def _combine(operator: str, outcomes: List[bool]) -> bool:
    if operator == OR:
        return any(outcomes)
    if operator == AND:
        return all(outcomes)
    raise QueryError(f"Unsupported group operator: {operator}")


class InMemoryRecordClient(RecordClient):
    """
    RecordClient backed by per-table dicts keyed by integer Id.

    Ids are assigned sequentially per table starting at 1, the way the
    hosted backend numbers rows.
    """

    def __init__(self):
        self._tables: Dict[str, Dict[int, Dict[str, Any]]] = {}
        self._next_ids: Dict[str, int] = {}
        self._lock = threading.Lock()

    @property
    def name(self) -> str:
        return "memory"

    # =========================================================================
    # Helpers
    # =========================================================================

    def _table(self, table: str) -> Dict[int, Dict[str, Any]]:
        return self._tables.setdefault(table, {})

    def _allocate_id(self, table: str) -> int:
        next_id = self._next_ids.get(table, 1)
        self._next_ids[table] = next_id + 1
        return next_id

    @staticmethod
    def _project(row: Dict[str, Any], params: Dict[str, Any]) -> Dict[str, Any]:
        """Return only the requested fields (Id is always included)."""
        names = [f["field"]["Name"] for f in params.get("fields") or []]
        if not names:
            return copy.deepcopy(row)

        projected = {"Id": row["Id"]}
        for name in names:
            if name in row:
                projected[name] = copy.deepcopy(row[name])
        return projected

    @staticmethod
    def _where_predicate(params: Dict[str, Any]) -> Callable[[Dict[str, Any]], bool]:
        where = params.get("where") or []
        groups = params.get("whereGroups") or []

        def predicate(row: Dict[str, Any]) -> bool:
            for condition in where:
                matched = _match(row, condition["FieldName"], condition["Operator"], condition["Values"])
                if condition.get("Include") is False:
                    matched = not matched
                if not matched:
                    return False

            for group in groups:
                sub_outcomes = []
                for sub in group.get("subGroups", []):
                    outcomes = [
                        _match(row, c["fieldName"], c["operator"], c["values"])
                        for c in sub.get("conditions", [])
                    ]
                    sub_outcomes.append(_combine(sub.get("operator", OR), outcomes))
                if not _combine(group.get("operator", OR), sub_outcomes):
                    return False

            return True

        return predicate

    @staticmethod
    def _sort(rows: List[Dict[str, Any]], order_by: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        # Apply the least significant key first; sorted() is stable
        for directive in reversed(order_by):
            name = directive["fieldName"]
            rows = sorted(
                rows,
                key=lambda r: (r.get(name) is not None, r.get(name) if r.get(name) is not None else 0),
                reverse=directive.get("sorttype") == DESC,
            )
        return rows

    # =========================================================================
    # RecordClient Interface Implementation
    # =========================================================================

    def fetch_records(self, table: str, params: Dict[str, Any]) -> RecordResponse:
        try:
            predicate = self._where_predicate(params)
            with self._lock:
                rows = [r for r in self._table(table).values() if predicate(r)]
        except (QueryError, KeyError) as e:
            return RecordResponse.failure(f"Invalid query: {e}")

        rows = self._sort(rows, params.get("orderBy") or [])

        paging = params.get("pagingInfo")
        if paging:
            offset = paging.get("offset", 0)
            rows = rows[offset:offset + paging.get("limit", len(rows))]

        return RecordResponse(success=True, data=[self._project(r, params) for r in rows])

    def get_record_by_id(self, table: str, record_id: int, params: Dict[str, Any]) -> RecordResponse:
        with self._lock:
            row = self._table(table).get(int(record_id))
        if row is None:
            return RecordResponse(success=True, data=None)
        return RecordResponse(success=True, data=self._project(row, params))

    def create_record(self, table: str, params: Dict[str, Any]) -> RecordResponse:
        results = []
        with self._lock:
            for record in params.get("records", []):
                row = copy.deepcopy(record)
                row["Id"] = self._allocate_id(table)
                self._table(table)[row["Id"]] = row
                results.append({"success": True, "data": copy.deepcopy(row)})

        return RecordResponse(success=True, results=results)

    def update_record(self, table: str, params: Dict[str, Any]) -> RecordResponse:
        results = []
        with self._lock:
            rows = self._table(table)
            for record in params.get("records", []):
                record_id = record.get("Id")
                if record_id not in rows:
                    results.append({"success": False, "message": f"Record {record_id} not found"})
                    continue
                rows[record_id].update(copy.deepcopy(record))
                results.append({"success": True, "data": copy.deepcopy(rows[record_id])})

        return RecordResponse(success=True, results=results)

    def delete_record(self, table: str, params: Dict[str, Any]) -> RecordResponse:
        missing = []
        with self._lock:
            rows = self._table(table)
            for record_id in params.get("RecordIds", []):
                if rows.pop(record_id, None) is None:
                    missing.append(record_id)

        if missing:
            return RecordResponse.failure(f"Records not found: {missing}")
        return RecordResponse(success=True)

    # =========================================================================
    # Test helpers
    # =========================================================================

    def seed(self, table: str, rows: List[Dict[str, Any]]) -> List[int]:
        """Insert raw backend rows, returning their assigned ids."""
        response = self.create_record(table, {"records": rows})
        return [r["data"]["Id"] for r in response.results]

    def rows(self, table: str) -> List[Dict[str, Any]]:
        """Return copies of every row in a table."""
        with self._lock:
            return [copy.deepcopy(r) for r in self._table(table).values()]

    def get_row(self, table: str, record_id: int) -> Optional[Dict[str, Any]]:
        with self._lock:
            row = self._table(table).get(record_id)
        return copy.deepcopy(row) if row is not None else None

    def count(self, table: str) -> int:
        """Return number of stored rows in a table."""
        with self._lock:
            return len(self._table(table))

    def clear(self) -> None:
        """Drop all tables (for testing)."""
        with self._lock:
            self._tables.clear()
            self._next_ids.clear()
