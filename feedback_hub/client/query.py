"""
Query vocabulary for the record backend.

Builds the parameter dictionaries accepted by RecordClient.fetch_records()
and RecordClient.get_record_by_id():

    {
        "fields": [{"field": {"Name": "title_c"}}, ...],
        "where": [{"FieldName": ..., "Operator": ..., "Values": [...]}],
        "whereGroups": [{"operator": "OR", "subGroups": [...]}],
        "orderBy": [{"fieldName": ..., "sorttype": "ASC"}],
        "pagingInfo": {"limit": 100, "offset": 0},
    }
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

# Condition operators understood by the backend
EQUAL_TO = "EqualTo"
EXACT_MATCH = "ExactMatch"
CONTAINS = "Contains"

# Group and sort keywords
OR = "OR"
AND = "AND"
ASC = "ASC"
DESC = "DESC"


@dataclass
class Condition:
    """
    A single field condition in a top-level `where` list.

    Attributes:
        field_name: Backend column name (e.g., "status_c").
        operator: One of EQUAL_TO, EXACT_MATCH, CONTAINS.
        values: Values to compare against.
        include: For EXACT_MATCH, whether matching rows are kept (True)
            or excluded (False). None omits the flag.
    """
    field_name: str
    operator: str
    values: List[Any]
    include: Optional[bool] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "FieldName": self.field_name,
            "Operator": self.operator,
            "Values": list(self.values),
        }
        if self.include is not None:
            data["Include"] = self.include
        return data


@dataclass
class GroupCondition:
    """A condition inside a where-group (lower-camel keys on the wire)."""
    field_name: str
    operator: str
    values: List[Any]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "fieldName": self.field_name,
            "operator": self.operator,
            "values": list(self.values),
        }


@dataclass
class SubGroup:
    """Conditions combined with a single boolean operator."""
    conditions: List[GroupCondition]
    operator: str = OR

    def to_dict(self) -> Dict[str, Any]:
        return {
            "conditions": [c.to_dict() for c in self.conditions],
            "operator": self.operator,
        }


@dataclass
class WhereGroup:
    """Sub-groups combined with a single boolean operator."""
    sub_groups: List[SubGroup]
    operator: str = OR

    def to_dict(self) -> Dict[str, Any]:
        return {
            "operator": self.operator,
            "subGroups": [g.to_dict() for g in self.sub_groups],
        }


@dataclass
class OrderBy:
    field_name: str
    direction: str = ASC

    def to_dict(self) -> Dict[str, Any]:
        return {"fieldName": self.field_name, "sorttype": self.direction}


@dataclass
class FetchParams:
    """
    Parameters for a record fetch.

    Empty `where_groups` and `order_by` are omitted from the wire format,
    and `limit=None` omits paging entirely.
    """
    fields: List[str] = field(default_factory=list)
    where: List[Condition] = field(default_factory=list)
    where_groups: List[WhereGroup] = field(default_factory=list)
    order_by: List[OrderBy] = field(default_factory=list)
    limit: Optional[int] = None
    offset: int = 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the backend's parameter dictionary."""
        params: Dict[str, Any] = {
            "fields": [{"field": {"Name": name}} for name in self.fields],
        }

        if self.where:
            params["where"] = [c.to_dict() for c in self.where]

        if self.where_groups:
            params["whereGroups"] = [g.to_dict() for g in self.where_groups]

        if self.order_by:
            params["orderBy"] = [o.to_dict() for o in self.order_by]

        if self.limit is not None:
            params["pagingInfo"] = {"limit": self.limit, "offset": self.offset}

        return params


def search_group(term: str, field_names: List[str]) -> WhereGroup:
    """
    Build an OR group matching `term` as a substring of any of the fields.

    Args:
        term: Free-text search term.
        field_names: Backend columns to search.

    Returns:
        WhereGroup with one OR sub-group of CONTAINS conditions.
    """
    conditions = [GroupCondition(name, CONTAINS, [term]) for name in field_names]
    return WhereGroup(sub_groups=[SubGroup(conditions=conditions, operator=OR)], operator=OR)
