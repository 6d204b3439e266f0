"""Shared test fixtures"""

import os
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Set, Tuple

import pytest

from localpress.errors import NewsDataError, ProviderNotFoundError
from localpress.utils.config_manager import ConfigManager


# Fixed clock for ordering tests
REFERENCE_TIME = datetime(2024, 3, 10, 12, 0, 0, tzinfo=timezone.utc)


def _lookup(obj: Dict[str, Any], path: str) -> Any:
    current: Any = obj
    for part in path.split("."):
        if not isinstance(current, dict):
            return None
        current = current.get(part)
    return current


def _matches(obj: Dict[str, Any], query: Dict[str, Any]) -> bool:
    """Subset of Cosmic query semantics: equality, id-in-list, $or, $regex."""
    for key, expected in query.items():
        if key == "$or":
            if not any(_matches(obj, clause) for clause in expected):
                return False
            continue

        actual = _lookup(obj, key)
        if isinstance(expected, dict) and "$regex" in expected:
            flags = re.IGNORECASE if "i" in expected.get("$options", "") else 0
            if not isinstance(actual, str) or not re.search(expected["$regex"], actual, flags):
                return False
        elif isinstance(actual, list):
            ids = [item.get("id") if isinstance(item, dict) else item for item in actual]
            if expected not in ids:
                return False
        elif actual != expected:
            return False
    return True


class FakeCosmic:
    """In-memory stand-in for CosmicClient. Empty results raise ProviderNotFoundError like the API's 404."""

    def __init__(self) -> None:
        self.objects: Dict[str, List[Dict[str, Any]]] = {}
        self.errors: Dict[str, Exception] = {}
        self.calls: List[Tuple[str, str, Dict[str, Any]]] = []
        self.inserted: List[Dict[str, Any]] = []

    def add(self, type_slug: str, *objects: Dict[str, Any]) -> None:
        self.objects.setdefault(type_slug, []).extend(objects)

    async def find(
        self,
        type_slug: str,
        query: Optional[Dict[str, Any]] = None,
        props: Optional[List[str]] = None,
        depth: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> Dict[str, Any]:
        self.calls.append(("find", type_slug, {"query": query or {}, "depth": depth, "limit": limit}))
        if type_slug in self.errors:
            raise self.errors[type_slug]

        matches = [obj for obj in self.objects.get(type_slug, []) if _matches(obj, query or {})]
        if not matches:
            raise ProviderNotFoundError("not found", provider="cosmic", status=404)
        return {"objects": matches[:limit] if limit else matches, "total": len(matches)}

    async def find_one(
        self,
        type_slug: str,
        query: Optional[Dict[str, Any]] = None,
        props: Optional[List[str]] = None,
        depth: Optional[int] = None,
    ) -> Dict[str, Any]:
        response = await self.find(type_slug, query, props=props, depth=depth, limit=1)
        return {"object": response["objects"][0]}

    async def insert_one(self, type_slug: str, record: Dict[str, Any]) -> Dict[str, Any]:
        self.calls.append(("insert_one", type_slug, record))
        if type_slug in self.errors:
            raise self.errors[type_slug]
        obj = {"id": f"{type_slug}-{len(self.inserted) + 1}", "type": type_slug, **record}
        self.inserted.append(obj)
        self.add(type_slug, obj)
        return {"object": obj}


class FakeNewsData:
    """In-memory stand-in for NewsDataConnector."""

    default_country = "us"

    def __init__(self) -> None:
        self.results_by_query: Dict[Optional[str], List[Dict[str, Any]]] = {}
        self.default_results: List[Dict[str, Any]] = []
        self.failing: Set[Optional[str]] = set()
        self.fail_all = False
        self.calls: List[Dict[str, Any]] = []

    async def search_news_by_location(
        self,
        location: str,
        timeframe: str = "7",
        size: int = 10,
        category: Any = None,
    ) -> Dict[str, Any]:
        self.calls.append({"method": "location", "q": location, "timeframe": timeframe, "size": size, "category": category})
        return self._respond(location, size)

    async def fetch_news(self, size: Optional[int] = None, **params: Any) -> Dict[str, Any]:
        self.calls.append({"method": "news", "size": size, **params})
        return self._respond(params.get("q"), size)

    def _respond(self, query: Optional[str], size: Optional[int]) -> Dict[str, Any]:
        if self.fail_all or query in self.failing:
            raise NewsDataError("NewsData API error: 500 Internal Server Error", status=500)
        results = list(self.results_by_query.get(query, self.default_results))
        if size:
            results = results[:size]
        return {"status": "success", "totalResults": len(results), "results": results}


@pytest.fixture
def reference_time() -> datetime:
    return REFERENCE_TIME


@pytest.fixture
def config_dir() -> str:
    return str(Path(__file__).parent.parent / "config")


@pytest.fixture
def config_manager(config_dir: str) -> ConfigManager:
    return ConfigManager(config_dir=config_dir)


@pytest.fixture
def fake_cms() -> FakeCosmic:
    return FakeCosmic()


@pytest.fixture
def fake_newsdata() -> FakeNewsData:
    return FakeNewsData()


@pytest.fixture(autouse=True)
def _clear_localpress_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer environment overrides out of the tests."""
    for key in list(os.environ):
        if key.startswith("LOCALPRESS_"):
            monkeypatch.delenv(key, raising=False)
