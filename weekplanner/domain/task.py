"""
Task: a unit of work that can be assigned to a timeslot.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Generic, TypeVar
from uuid import uuid4

T = TypeVar("T")


def _new_task_id() -> str:
    return uuid4().hex


@dataclass(frozen=True)
class Task(Generic[T]):
    """
    Identity-bearing wrapper around an arbitrary payload.

    Two tasks are the same task iff their ids match; the payload plays no
    part in equality or hashing.
    """
    data: T = field(compare=False)
    name: str = field(default="", compare=False)
    id: str = field(default_factory=_new_task_id)

    @classmethod
    def from_dict(cls, value: Dict[str, Any]) -> "Task[Any]":
        """Rebuild a task from a ``{"id": ..., "data": ...}`` record, keeping its id."""
        if "id" not in value:
            raise ValueError(f"Task record requires an 'id': {value!r}")
        return cls(data=value.get("data"), name=value.get("name", ""), id=str(value["id"]))

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name, "data": self.data}

    def __str__(self) -> str:
        return self.name or self.id
