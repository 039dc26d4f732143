from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterable

from .provider import ActionVerbs, RoleKeywordProvider, RoleKeywords

DEFAULT_ROLE = "General"


def match_role_name(role: str, candidates: Iterable[str], default: str = DEFAULT_ROLE) -> str:
    """Exact, then case-insensitive, then substring match; unknown roles map to `default`."""
    names = list(candidates)
    wanted = (role or "").strip()
    if wanted in names:
        return wanted

    lowered = wanted.lower()
    if not lowered:
        return default
    for name in names:
        if name.lower() == lowered:
            return name
    for name in names:
        key = name.lower()
        if key in lowered or lowered in key:
            return name
    return default


class LocalRoleKeywordCatalog(RoleKeywordProvider):
    def __init__(
        self,
        keywords_path: str | Path | None = None,
        lexicon_path: str | Path | None = None,
    ) -> None:
        keywords_file = Path(keywords_path) if keywords_path else Path(__file__).with_name("role_keywords.json")
        lexicon_file = Path(lexicon_path) if lexicon_path else Path(__file__).with_name("resume_lexicon.json")
        self._roles = self._load_roles(keywords_file)
        if DEFAULT_ROLE not in self._roles:
            raise RuntimeError(f"Role keyword catalog '{keywords_file}' has no '{DEFAULT_ROLE}' profile.")
        self._lexicon = self._load_json(lexicon_file)
        verbs = self._lexicon.get("action_verbs", {})
        self._action_verbs = ActionVerbs(
            strong=tuple(verbs.get("strong", [])),
            medium=tuple(verbs.get("medium", [])),
            weak=tuple(verbs.get("weak", [])),
        )

    @staticmethod
    def _load_json(path: Path) -> dict[str, Any]:
        with path.open("r", encoding="utf-8") as handle:
            raw = json.load(handle)
        if not isinstance(raw, dict):
            raise RuntimeError(f"Expected a JSON object in '{path}'.")
        return raw

    @classmethod
    def _load_roles(cls, path: Path) -> dict[str, RoleKeywords]:
        raw = cls._load_json(path)
        roles: dict[str, RoleKeywords] = {}
        for name, tiers in raw.items():
            roles[str(name)] = RoleKeywords(
                role=str(name),
                must_have=tuple(str(item) for item in tiers.get("must_have", [])),
                important=tuple(str(item) for item in tiers.get("important", [])),
                nice_to_have=tuple(str(item) for item in tiers.get("nice_to_have", [])),
            )
        return roles

    def available_roles(self) -> list[str]:
        return list(self._roles)

    def is_role_supported(self, role: str) -> bool:
        lowered = (role or "").strip().lower()
        return any(name.lower() == lowered for name in self._roles)

    def resolve_role(self, role: str) -> str:
        return match_role_name(role, self._roles)

    def keywords_for_role(self, role: str) -> RoleKeywords:
        return self._roles[self.resolve_role(role)]

    @property
    def action_verbs(self) -> ActionVerbs:
        return self._action_verbs

    def word_list(self, name: str) -> tuple[str, ...]:
        return tuple(str(item) for item in self._lexicon.get(name, []))
