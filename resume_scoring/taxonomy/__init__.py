from functools import lru_cache

from .local_catalog import DEFAULT_ROLE, LocalRoleKeywordCatalog, match_role_name
from .provider import ActionVerbs, RoleKeywordProvider, RoleKeywords


@lru_cache(maxsize=1)
def get_default_catalog() -> LocalRoleKeywordCatalog:
    return LocalRoleKeywordCatalog()


__all__ = [
    "DEFAULT_ROLE",
    "ActionVerbs",
    "RoleKeywords",
    "RoleKeywordProvider",
    "LocalRoleKeywordCatalog",
    "match_role_name",
    "get_default_catalog",
]
