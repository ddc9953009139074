"""Root pytest configuration.

Settings are read from the environment when the application modules are
imported, so test defaults are put in place before anything else loads.

Integration tests start a PostGIS container and are auto-skipped unless
enabled:

    RUN_INTEGRATION=1    Run @pytest.mark.integration tests
    --run-integration    Same, as a pytest option
"""

import os

import pytest

TEST_ENV = {
    "DATABASE_USER": "postgres",
    "DATABASE_PASSWORD": "postgres",
    "DATABASE_HOST": "localhost:5432",
    "DATABASE_NAME": "swipe_match_test",
    "CACHE_HOST": "localhost:6379",
    "JWT_SECRET": "test-secret-key-that-is-long-enough-for-hs256",
    "JWT_DURATION": "PT6H",
    "DOMAIN_NAME": "swipe-match.test",
    "GEOIP_ENDPOINT": "http://geoip.test/api",
    "GEOIP_API_KEY": "test-geoip-key",
    "LOG_LEVEL": "DEBUG",
}

for key, value in TEST_ENV.items():
    os.environ.setdefault(key, value)


def pytest_addoption(parser):
    """Add custom command line options."""
    parser.addoption(
        "--run-integration",
        action="store_true",
        default=False,
        help="Run tests marked with @pytest.mark.integration",
    )


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: Tests that need a PostGIS database (auto-skipped)",
    )


def pytest_collection_modifyitems(config, items):
    """Auto-skip integration tests unless explicitly enabled."""
    run_integration = config.getoption("--run-integration") or os.environ.get(
        "RUN_INTEGRATION",
        "",
    ).lower() in ("1", "true", "yes")

    if run_integration:
        return

    skip_integration = pytest.mark.skip(
        reason="Integration test - run with --run-integration or RUN_INTEGRATION=1",
    )
    for item in items:
        if "integration" in {mark.name for mark in item.iter_markers()}:
            item.add_marker(skip_integration)
