"""
Base record client abstraction for Feedback Hub.

Defines the abstract interface that all record backends must implement.
This allows swapping between the hosted REST backend and the in-memory
client used for development and tests.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class RecordResponse:
    """
    Uniform response envelope returned by every client call.

    Attributes:
        success: Whether the call as a whole succeeded.
        data: Row dict (single-record reads) or list of row dicts (fetches).
        results: Per-record outcomes for create/update/delete, each a dict
            with "success", "data" and optionally "message".
        message: Backend-supplied error or status message.
    """
    success: bool
    data: Any = None
    results: List[Dict[str, Any]] = field(default_factory=list)
    message: str = ""

    @property
    def first_result(self) -> Optional[Dict[str, Any]]:
        """The first per-record result, or None if there are none."""
        return self.results[0] if self.results else None

    @classmethod
    def failure(cls, message: str) -> "RecordResponse":
        return cls(success=False, message=message)

    def __str__(self) -> str:
        return f"RecordResponse(success={self.success}, message={self.message!r})"


class RecordClient(ABC):
    """
    Abstract base class for record-storage backends.

    Tables are addressed by name (e.g., "feedback_post_c"). Rows are plain
    dicts with an integer "Id" plus backend columns. Implementations report
    failures through RecordResponse.success rather than raising.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """
        Return the name of this backend.

        Used for logging and debugging.
        """
        pass

    @abstractmethod
    def fetch_records(self, table: str, params: Dict[str, Any]) -> RecordResponse:
        """
        Fetch rows matching a query.

        Args:
            table: Table name.
            params: Query dict as produced by FetchParams.to_dict().

        Returns:
            RecordResponse with `data` set to a list of rows.
        """
        pass

    @abstractmethod
    def get_record_by_id(self, table: str, record_id: int, params: Dict[str, Any]) -> RecordResponse:
        """
        Fetch a single row by id.

        Returns:
            RecordResponse with `data` set to the row, or None if missing.
        """
        pass

    @abstractmethod
    def create_record(self, table: str, params: Dict[str, Any]) -> RecordResponse:
        """
        Create rows from params["records"].

        Returns:
            RecordResponse with one entry in `results` per record.
        """
        pass

    @abstractmethod
    def update_record(self, table: str, params: Dict[str, Any]) -> RecordResponse:
        """
        Update rows from params["records"]; each record carries its "Id".

        Returns:
            RecordResponse with one entry in `results` per record.
        """
        pass

    @abstractmethod
    def delete_record(self, table: str, params: Dict[str, Any]) -> RecordResponse:
        """Delete the rows listed in params["RecordIds"]."""
        pass

    def __str__(self) -> str:
        return f"RecordClient({self.name})"

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
