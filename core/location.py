"""Geo-IP location lookups with a Redis cache."""

import ipaddress
import json
import logging
from typing import Any
from urllib.parse import urlencode

import httpx
import redis.asyncio as redis

from core.config import settings
from core.metrics import geoip_lookups_total
from core.redis import get_redis
from domain.user import Location

logger = logging.getLogger(__name__)

# Length of time to keep geo-IP responses for
CACHE_TTL_SECONDS = 24 * 60 * 60


class LocationError(Exception):
    """Raised when the geo-IP service cannot resolve an address."""


def _usable_ip(source_ip: str | None) -> str:
    """Return the IP to query, empty lets the service use the caller's real address."""
    if not source_ip:
        return ""
    try:
        ip = ipaddress.ip_address(source_ip)
    except ValueError:
        logger.warning(f"Could not parse ip: {source_ip}")
        return ""
    if ip.is_loopback or ip.is_unspecified:
        logger.warning(f"Ignoring non-routable ip: {source_ip}")
        return ""
    return str(ip)


class LocationResolver:
    """Resolves IP addresses to a longitude/latitude point."""

    def __init__(
        self,
        endpoint: str,
        api_key: str,
        cache: redis.Redis,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.endpoint = endpoint.rstrip("/")
        self.api_key = api_key
        self.cache = cache
        self.client = client or httpx.AsyncClient(timeout=10.0)

    async def close(self) -> None:
        """Close the HTTP client."""
        await self.client.aclose()

    def url_for(self, source_ip: str | None) -> str:
        query = urlencode({"access_key": self.api_key, "output": "json"})
        return f"{self.endpoint}/{_usable_ip(source_ip)}?{query}"

    async def by_ip(self, source_ip: str | None) -> Location:
        """
        Look up the location of an IP address.

        Responses are cached for 24 hours, keyed by the full request URL.

        Args:
            source_ip: Client IP address, loopback or invalid values fall back
                to the address the service sees

        Returns:
            Location of the address

        Raises:
            LocationError: If the service reports an error
            httpx.HTTPError: If the request fails
        """
        url = self.url_for(source_ip)

        cached = await self._cache_get(url)
        if cached is not None:
            geoip_lookups_total.labels(source="cache").inc()
            return cached

        geoip_lookups_total.labels(source="remote").inc()
        response = await self.client.get(
            url,
            headers={"Accept": "application/json", "Content-Type": "application/json"},
        )
        try:
            data = response.json()
        except ValueError as e:
            logger.error(f"Decoding geoip response failed: status={response.status_code}")
            raise LocationError(f"decoding geoip response: {e}") from e

        error = data.get("error") if isinstance(data, dict) else None
        if error:
            info = error.get("info") or "unknown geoip error"
            logger.error(f"GeoIP request failed: type={error.get('type')}, code={error.get('code')}, info={info}")
            raise LocationError(info)

        try:
            location = Location(lon=float(data["longitude"]), lat=float(data["latitude"]))
        except (KeyError, TypeError, ValueError) as e:
            raise LocationError(f"invalid geoip response: {e}") from e

        await self._cache_set(url, {"latitude": location.lat, "longitude": location.lon})
        return location

    async def _cache_get(self, key: str) -> Location | None:
        try:
            raw = await self.cache.get(key)
        except redis.RedisError as e:
            logger.error(f"Getting geoip data from cache failed: {e}")
            return None
        if not raw:
            return None
        try:
            data = json.loads(raw)
            return Location(lon=float(data["longitude"]), lat=float(data["latitude"]))
        except (ValueError, KeyError, TypeError):
            logger.warning("Discarding invalid cached geoip data")
            return None

    async def _cache_set(self, key: str, value: dict[str, Any]) -> None:
        try:
            await self.cache.setex(key, CACHE_TTL_SECONDS, json.dumps(value))
        except redis.RedisError as e:
            logger.warning(f"Setting geoip data in cache failed: {e}")


_resolver: LocationResolver | None = None


async def get_location_resolver() -> LocationResolver:
    """Get the shared location resolver."""
    global _resolver
    if _resolver is None:
        _resolver = LocationResolver(
            endpoint=settings.geoip_endpoint,
            api_key=settings.geoip_api_key,
            cache=await get_redis(),
        )
    return _resolver


async def close_location_resolver() -> None:
    global _resolver
    if _resolver:
        await _resolver.close()
        _resolver = None
