"""Generic resource descriptor handed to the import framework."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Resource:
    id: str
    name: str
    type: str
    provider: str
    depends_on: tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type,
            "provider": self.provider,
            "depends_on": list(self.depends_on),
        }


def new_simple_resource(
    resource_id: str,
    name: str,
    resource_type: str,
    provider: str,
    depends_on: list[str] | None = None,
) -> Resource:
    """Build a descriptor, freezing the dependency list."""
    return Resource(
        id=resource_id,
        name=name,
        type=resource_type,
        provider=provider,
        depends_on=tuple(depends_on or ()),
    )
