"""The Pub/Sub topic a notification publishes to."""

from __future__ import annotations

from dataclasses import dataclass

_PREFIX = ["", "", "pubsub.googleapis.com", "projects"]


@dataclass(frozen=True)
class Topic:
    """A Pub/Sub topic within a project."""

    project_id: str
    topic: str

    def __str__(self) -> str:
        return f"//pubsub.googleapis.com/projects/{self.project_id}/topics/{self.topic}"

    @classmethod
    def parse(cls, value: str) -> "Topic":
        """Parse ``//pubsub.googleapis.com/projects/<project>/topics/<topic>``."""
        error = ValueError(f"Invalid topic: `{value}`")
        parts = value.split("/")
        if parts[:4] != _PREFIX:
            raise error
        rest = parts[4:]
        if len(rest) < 3 or rest[1] != "topics":
            raise error
        return cls(project_id=rest[0], topic=rest[2])

    def to_json(self) -> str:
        """The value as it appears in a JSON document."""
        return str(self)