"""
Schema versioning for stored lesson snapshots.

The JSON file store wraps its tables in a versioned envelope so the
layout can evolve without breaking older files.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Any


class SchemaVersion(Enum):
    """
    Snapshot schema versions.

    Versions:
        V1_0: lessons, students and instructors tables keyed by name
    """

    V1_0 = "1.0"


CURRENT_VERSION = SchemaVersion.V1_0


@dataclass
class VersionedData:
    """
    Snapshot data with version information.

    Attributes:
        schema_version: Version identifier
        data: Tables, e.g. {"lessons": [...], "students": [...]}

    Examples:
        >>> envelope = VersionedData(
        ...     schema_version=CURRENT_VERSION.value,
        ...     data={"lessons": [], "students": [], "instructors": []}
        ... )
    """

    schema_version: str
    data: Dict[str, Any]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the on-disk dictionary format."""
        return {
            "schema_version": self.schema_version,
            "data": self.data
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> 'VersionedData':
        """
        Create instance from the on-disk dictionary.

        Files without a version are read as V1_0.
        """
        return cls(
            schema_version=d.get("schema_version", SchemaVersion.V1_0.value),
            data=d.get("data", {})
        )

    @property
    def version_enum(self) -> SchemaVersion:
        """
        Get schema version as enum.

        Raises:
            ValueError: If the version is not known
        """
        return SchemaVersion(self.schema_version)
