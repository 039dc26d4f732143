from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class RoleKeywords:
    role: str
    must_have: tuple[str, ...]
    important: tuple[str, ...]
    nice_to_have: tuple[str, ...]

    def expected(self) -> tuple[str, ...]:
        return self.must_have + self.important


@dataclass(frozen=True)
class ActionVerbs:
    strong: tuple[str, ...]
    medium: tuple[str, ...]
    weak: tuple[str, ...]


class RoleKeywordProvider(Protocol):
    def available_roles(self) -> list[str]:
        """Return every role with a keyword profile, default role included."""

    def resolve_role(self, role: str) -> str:
        """Return the catalog role name that best matches `role`."""

    def keywords_for_role(self, role: str) -> RoleKeywords:
        """Return keyword tiers for the resolved role."""
