"""Cosmic CMS client - bucket object queries over the REST API"""

import json
import os
from typing import Any, Dict, List, Optional

import httpx

from localpress.errors import ConfigurationError, ProviderNotFoundError, ProviderTransportError
from localpress.utils.logger import get_logger

logger = get_logger(__name__)

COSMIC_API_BASE_URL = "https://api.cosmicjs.com/v3"
DEFAULT_PROPS = ("id", "title", "slug", "metadata", "created_at", "modified_at")
PROVIDER = "cosmic"


class CosmicClient:
    """
    Minimal async client for a Cosmic bucket.

    Cosmic reports "no matching objects" as HTTP 404; this client raises
    ProviderNotFoundError for it so callers can map it to an empty result.
    Every other failure is a ProviderTransportError.

    Usage:
        client = CosmicClient()  # reads COSMIC_BUCKET_SLUG / COSMIC_READ_KEY
        response = await client.find("zip-code-areas", {"metadata.zip_code": "90210"}, limit=1)
        areas = response["objects"]

    Environment:
        COSMIC_BUCKET_SLUG, COSMIC_READ_KEY, COSMIC_WRITE_KEY (writes only)
    """

    def __init__(
        self,
        bucket_slug: Optional[str] = None,
        read_key: Optional[str] = None,
        write_key: Optional[str] = None,
        base_url: str = COSMIC_API_BASE_URL,
        timeout: float = 15.0,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        """
        Args:
            bucket_slug: Bucket slug (None reads COSMIC_BUCKET_SLUG).
            read_key: Read key (None reads COSMIC_READ_KEY).
            write_key: Write key (None reads COSMIC_WRITE_KEY). Only needed for insert_one.
            base_url: API root.
            timeout: Per-request timeout when the client opens its own connections.
            http_client: Shared AsyncClient. None opens one per request.
        """
        self._bucket_slug = bucket_slug or os.environ.get("COSMIC_BUCKET_SLUG", "")
        self._read_key = read_key or os.environ.get("COSMIC_READ_KEY", "")
        self._write_key = write_key or os.environ.get("COSMIC_WRITE_KEY", "")

        if not self._bucket_slug or not self._read_key:
            raise ConfigurationError(
                "COSMIC_BUCKET_SLUG and COSMIC_READ_KEY environment variables are required"
            )

        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._http = http_client

    @property
    def objects_url(self) -> str:
        return f"{self._base_url}/buckets/{self._bucket_slug}/objects"

    async def find(
        self,
        type_slug: str,
        query: Optional[Dict[str, Any]] = None,
        props: Optional[List[str]] = None,
        depth: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> Dict[str, Any]:
        """
        Structured query.

        Returns:
            {"objects": [...], "total": n}
        """
        params = self._query_params(type_slug, query, props, depth, limit)
        data = await self._request("GET", self.objects_url, params=params)
        objects = data.get("objects")
        if not isinstance(objects, list):
            raise ProviderTransportError("Malformed Cosmic response: missing objects", provider=PROVIDER)
        return {"objects": objects, "total": data.get("total", len(objects))}

    async def find_one(
        self,
        type_slug: str,
        query: Optional[Dict[str, Any]] = None,
        props: Optional[List[str]] = None,
        depth: Optional[int] = None,
    ) -> Dict[str, Any]:
        """
        Single-object lookup.

        Returns:
            {"object": {...}}

        Raises:
            ProviderNotFoundError: Nothing matched.
        """
        response = await self.find(type_slug, query, props=props, depth=depth, limit=1)
        if not response["objects"]:
            raise ProviderNotFoundError(f"No {type_slug} object matched", provider=PROVIDER, status=404)
        return {"object": response["objects"][0]}

    async def insert_one(self, type_slug: str, record: Dict[str, Any]) -> Dict[str, Any]:
        """
        Create an object.

        Returns:
            {"object": {...}}
        """
        if not self._write_key:
            raise ConfigurationError("COSMIC_WRITE_KEY environment variable is required for writes")

        payload = {"type": type_slug, **record}
        headers = {"Authorization": f"Bearer {self._write_key}"}
        data = await self._request("POST", self.objects_url, json=payload, headers=headers)
        obj = data.get("object")
        if not isinstance(obj, dict):
            raise ProviderTransportError("Malformed Cosmic response: missing object", provider=PROVIDER)
        return {"object": obj}

    def _query_params(
        self,
        type_slug: str,
        query: Optional[Dict[str, Any]],
        props: Optional[List[str]],
        depth: Optional[int],
        limit: Optional[int],
    ) -> Dict[str, Any]:
        full_query = {"type": type_slug, **(query or {})}
        params: Dict[str, Any] = {
            "query": json.dumps(full_query, separators=(",", ":")),
            "props": ",".join(props or DEFAULT_PROPS),
            "read_key": self._read_key,
        }
        if depth is not None:
            params["depth"] = depth
        if limit is not None:
            params["limit"] = limit
        return params

    async def _request(self, method: str, url: str, **kwargs: Any) -> Dict[str, Any]:
        try:
            response = await self._send(method, url, **kwargs)
        except httpx.HTTPError as e:
            logger.error("Cosmic request failed: %s %s - %s", method, url, e)
            raise ProviderTransportError(f"Cosmic request failed: {e}", provider=PROVIDER) from e

        if response.status_code == 404:
            raise ProviderNotFoundError("Cosmic returned no results", provider=PROVIDER, status=404)
        if not response.is_success:
            raise ProviderTransportError(
                f"Cosmic API error: {response.status_code} {response.reason_phrase}",
                provider=PROVIDER,
                status=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise ProviderTransportError("Malformed Cosmic response: invalid JSON", provider=PROVIDER) from e
        if not isinstance(data, dict):
            raise ProviderTransportError("Malformed Cosmic response: expected an object", provider=PROVIDER)
        return data

    async def _send(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        if self._http is not None:
            return await self._http.request(method, url, **kwargs)
        async with httpx.AsyncClient(
            timeout=self._timeout,
            headers={"Accept": "application/json", "User-Agent": "LocalPress/1.0"},
        ) as client:
            return await client.request(method, url, **kwargs)
