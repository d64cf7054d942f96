"""Organizational Units Module.

Defines the OrgUnit dataclass and the UnitType taxonomy.

An OrgUnit is one node of a flattened organizational hierarchy:
- Scoped to a client (tenant) and a chart (hierarchy instance)
- Linked to its parent through ``pid`` (empty for a root)
- Classified by a primary UnitType plus an ordered tuple of tags

Units are frozen. State transitions build new collections, so earlier
snapshots keep referencing the same unchanged objects.
"""

import dataclasses
import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, Optional, Tuple, Union


class UnitType(str, Enum):
    """
    Closed set of organizational classifications.

    Values are the wire strings used in serialized units.
    """

    AREA = "area"
    BRANCH = "branch"
    BRAND = "brand"
    BUSINESS_UNIT = "businessUnit"
    CLIENT = "client"
    DEPARTMENT = "department"
    DEPARTMENT_GROUP = "departmentGroup"
    DISTRICT = "district"
    DIVISION = "division"
    GROUP = "group"
    HOME_DEPARTMENT = "homeDepartment"
    LINE_OF_BUSINESS = "lineOfBusiness"
    MARKET = "market"
    PRACTICE = "practice"
    PROGRAM = "program"
    REGION = "region"
    ROOT = "root"
    SECTOR = "sector"
    SEGMENT = "segment"
    SUB_DEPT = "subDept"
    SUB_GROUP = "subGroup"
    SUB_ROOT = "subRoot"
    TIER = "tier"
    WORK_UNIT = "workUnit"
    ZONE = "zone"

    def __str__(self) -> str:
        return self.value


# Fields rendered by OrgUnit.summary()
SUMMARY_FIELDS = ("id", "code", "name", "type")


def _coerce_type(value: Union[UnitType, str]) -> UnitType:
    # UnitType("bogus") raises ValueError with a readable message
    return value if isinstance(value, UnitType) else UnitType(value)


@dataclass(frozen=True)
class OrgUnit:
    """
    Represents one unit of an organizational chart.

    Attributes:
        id: Unique identifier, stable for the unit's lifetime.
        client_id: Tenant the unit belongs to.
        chart_id: Chart (hierarchy instance) the unit belongs to.
        pid: Parent unit id; empty string for a root.
        name: Human-readable label.
        code: Short code.
        type: Primary classification.
        tags: Ordered additional classifications.
        parent_relationship_id: Optional id of a separate parent
            relationship record. Not validated.

    Raises:
        TypeError: If ``id`` is not a string.
        ValueError: If ``type`` or a tag is not a known UnitType.
    """

    id: str
    client_id: str
    chart_id: str
    pid: str
    name: str
    code: str
    type: UnitType
    tags: Tuple[UnitType, ...] = field(default_factory=tuple)
    parent_relationship_id: Optional[str] = None

    def __post_init__(self):
        if not isinstance(self.id, str):
            raise TypeError(f"Unit id must be a string, got {type(self.id).__name__}")
        # Frozen dataclass: normalize through object.__setattr__
        object.__setattr__(self, "type", _coerce_type(self.type))
        object.__setattr__(
            self, "tags", tuple(_coerce_type(tag) for tag in self.tags)
        )

    @property
    def is_root(self) -> bool:
        """True when the unit has no parent."""
        return not self.pid

    def replace(self, **changes: Any) -> "OrgUnit":
        """
        Returns a copy of this unit with the given fields changed.

        Args:
            **changes: Field names mapped to their new values.

        Returns:
            OrgUnit: The modified copy.
        """
        return dataclasses.replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        """
        Converts the unit to a JSON-ready dictionary with camelCase keys.

        Returns:
            Dict[str, Any]: A dictionary containing all the unit's data.
        """
        return {
            "id": self.id,
            "clientId": self.client_id,
            "chartId": self.chart_id,
            "parentRelationshipId": self.parent_relationship_id,
            "pid": self.pid,
            "name": self.name,
            "code": self.code,
            "type": self.type.value,
            "tags": [tag.value for tag in self.tags],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "OrgUnit":
        """
        Creates an OrgUnit from a dictionary produced by ``to_dict``.

        The legacy ``parentUTURelationshipID`` key is accepted as an alias
        of ``parentRelationshipId``.

        Args:
            data: A dictionary containing unit data.

        Returns:
            OrgUnit: A new OrgUnit instance.

        Raises:
            KeyError: If a required key is missing.
            TypeError: If ``id`` is not a string.
            ValueError: If a type or tag is not a known UnitType.
        """
        relationship_id = data.get("parentRelationshipId")
        if relationship_id is None:
            relationship_id = data.get("parentUTURelationshipID")

        return cls(
            id=data["id"],
            client_id=data["clientId"],
            chart_id=data["chartId"],
            pid=data.get("pid") or "",
            name=data["name"],
            code=data["code"],
            type=data["type"],
            tags=data.get("tags", ()),
            parent_relationship_id=relationship_id,
        )

    def summary(self) -> Dict[str, str]:
        """Returns the id, code, name and type of the unit."""
        full = self.to_dict()
        return {key: full[key] for key in SUMMARY_FIELDS}

    def to_json(self, indent: int = 3) -> str:
        """
        Renders the unit as indented JSON.

        Args:
            indent: Indentation width.

        Returns:
            str: The JSON text.
        """
        return json.dumps(self.to_dict(), indent=indent)

    def __str__(self) -> str:
        return self.to_json()


def units_from_dicts(items: Iterable[Dict[str, Any]]) -> list:
    """
    Builds a list of OrgUnits from serialized dictionaries.

    Args:
        items: Iterable of dictionaries in ``OrgUnit.to_dict`` shape.

    Returns:
        list: The parsed units, in input order.

    Raises:
        TypeError: If an item is not a dictionary.
    """
    units = []
    for item in items:
        if not isinstance(item, dict):
            raise TypeError(f"Unit must be an object, got {type(item).__name__}")
        units.append(OrgUnit.from_dict(item))
    return units
