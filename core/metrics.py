"""Prometheus metrics for monitoring."""

from prometheus_client import Counter, Histogram

# Response time metrics
api_request_duration = Histogram(
    "api_request_duration_seconds", "API request duration in seconds", ["method", "endpoint", "status"]
)

# User metrics
users_created_total = Counter("users_created_total", "Total number of users created")

logins_total = Counter("logins_total", "Total number of login attempts", ["status"])

# Swipe metrics
swipes_total = Counter("swipes_total", "Total number of swipes recorded", ["preference"])

matches_created_total = Counter("matches_created_total", "Total number of swipes that completed a match")

# Discover metrics
discover_results = Histogram(
    "discover_results", "Number of candidates returned by discover", buckets=(0, 1, 5, 10, 25, 50, 100)
)

# GeoIP metrics
geoip_lookups_total = Counter("geoip_lookups_total", "Total number of geoip lookups", ["source"])
