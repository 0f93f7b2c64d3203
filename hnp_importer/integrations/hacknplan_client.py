"""Hack'n'Plan API client for reading project catalogs (API key auth)."""

import logging
from typing import Any, Callable

import requests

from ..catalogs import (
    BoardEntry,
    CatalogKind,
    CategoryEntry,
    ImportanceLevelEntry,
    TagEntry,
    UserEntry,
)
from ..config import ImporterConfig
from ..errors import RemoteServiceError

logger = logging.getLogger(__name__)


def _field(item: dict, key: str, kind: CatalogKind) -> Any:
    if not isinstance(item, dict) or key not in item:
        raise RemoteServiceError(f"{kind} listing", f"entry is missing {key!r}: {item!r}")
    return item[key]


def _typed(item: dict, key: str, kind: CatalogKind, expected: type) -> Any:
    value = _field(item, key, kind)
    # bool is an int subclass; a true/false id is still malformed
    if not isinstance(value, expected) or (expected is int and isinstance(value, bool)):
        raise RemoteServiceError(
            f"{kind} listing",
            f"field {key!r} should be {expected.__name__}, got {value!r}",
        )
    return value


def _id(item: dict, key: str, kind: CatalogKind) -> int:
    return _typed(item, key, kind, int)


def _name(item: dict, key: str, kind: CatalogKind) -> str:
    return _typed(item, key, kind, str)


def parse_category(item: dict) -> CategoryEntry:
    kind = CatalogKind.CATEGORIES
    return CategoryEntry(id=_id(item, "categoryId", kind), name=_name(item, "name", kind))


def parse_tag(item: dict) -> TagEntry:
    kind = CatalogKind.TAGS
    return TagEntry(id=_id(item, "tagId", kind), name=_name(item, "name", kind))


def parse_user(item: dict) -> UserEntry:
    # Project users wrap the account: {"user": {"id", "name", "username"}, ...}
    kind = CatalogKind.USERS
    user = _typed(item, "user", kind, dict)
    return UserEntry(
        id=_id(user, "id", kind),
        display_name=_name(user, "name", kind),
        handle=_name(user, "username", kind),
    )


def parse_importance_level(item: dict) -> ImportanceLevelEntry:
    kind = CatalogKind.IMPORTANCE_LEVELS
    return ImportanceLevelEntry(
        id=_id(item, "importanceLevelId", kind),
        name=_name(item, "name", kind),
        is_default=_typed(item, "isDefault", kind, bool),
    )


def parse_board(item: dict) -> BoardEntry:
    kind = CatalogKind.BOARDS
    return BoardEntry(id=_id(item, "boardId", kind), name=_name(item, "name", kind))


PARSERS: dict[CatalogKind, Callable[[dict], Any]] = {
    CatalogKind.CATEGORIES: parse_category,
    CatalogKind.TAGS: parse_tag,
    CatalogKind.USERS: parse_user,
    CatalogKind.IMPORTANCE_LEVELS: parse_importance_level,
    CatalogKind.BOARDS: parse_board,
}


class HacknPlanClient:
    """Read-only access to one project's catalogs."""

    def __init__(self, config: ImporterConfig, session: requests.Session | None = None):
        self.config = config
        self.session = session or requests.Session()

    def hacknplan_get(self, endpoint: str) -> Any:
        """Make authenticated GET request to the project API."""
        url = f"{self.config.project_url}/{endpoint}"
        try:
            resp = self.session.get(
                url,
                headers={
                    "Authorization": f"ApiKey {self.config.api_key}",
                    "Accept": "application/json",
                },
                timeout=self.config.timeout,
            )
        except requests.RequestException as e:
            raise RemoteServiceError(f"GET {endpoint}", str(e)) from e

        if resp.status_code != 200:
            raise RemoteServiceError(f"GET {endpoint}", resp.text[:200], resp.status_code)

        try:
            return resp.json()
        except ValueError as e:
            raise RemoteServiceError(f"GET {endpoint}", f"invalid JSON: {e}") from e

    def fetch_all(self, kind: CatalogKind) -> list:
        """List one catalog, in API order."""
        data = self.hacknplan_get(kind.value)
        if not isinstance(data, list):
            raise RemoteServiceError(
                f"{kind} listing", f"expected a list, got {type(data).__name__}"
            )
        entries = [PARSERS[kind](item) for item in data]
        logger.debug(f"Fetched {len(entries)} {kind}")
        return entries


if __name__ == "__main__":
    # Test connection
    from ..config import load_config

    print("Testing Hack'n'Plan connection...")
    try:
        client = HacknPlanClient(load_config())
        for catalog in CatalogKind:
            print(f"✓ {catalog}: {len(client.fetch_all(catalog))}")
    except Exception as e:
        print(f"✗ Error: {e}")
