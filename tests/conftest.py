"""
Shared pytest fixtures for all tests.

This module provides fake transports, sample DonorPerfect XML bodies and
an isolated settings environment.
"""

from collections.abc import Callable, Generator
from unittest.mock import MagicMock

import pytest

from donorperfect.clients.transport import Transport
from donorperfect.config.settings import get_settings

# ============================================================================
# SAMPLE RESPONSES
# ============================================================================

XML_EMPTY = '<?xml version="1.0" ?><result></result>'

XML_SCALAR = '<?xml version="1.0" ?><result><record><field name="" id="" value="147"/></record></result>'

XML_SINGLE_RECORD = (
    '<?xml version="1.0" ?><result><record>'
    '<field name="donor_id" id="donor_id" value="147"/>'
    '<field name="FIRST_NAME" id="FIRST_NAME" value="Mary"/>'
    '<field name="last_name" id="last_name" value="O`Brien"/>'
    "</record></result>"
)

XML_ERROR = '<?xml version="1.0" ?><result><error>Invalid API key</error></result>'

XML_FALSE_FIELD = '<?xml version="1.0" ?><result><field name="success" value="false" reason="Login failed"/></result>'


def rows_xml(count: int, start: int = 1) -> str:
    """Build a multi-record body with ``count`` donor rows."""
    if count == 1:
        # A single record is decoded as a flat record
        return (
            '<?xml version="1.0" ?><result><record>'
            f'<field name="donor_id" id="donor_id" value="{start}"/>'
            "</record></result>"
        )
    records = "".join(
        f'<record><field name="donor_id" id="donor_id" value="{start + i}"/></record>' for i in range(count)
    )
    return f'<?xml version="1.0" ?><result>{records}</result>'


# ============================================================================
# TRANSPORT FIXTURES
# ============================================================================


@pytest.fixture
def make_transport() -> Callable[..., MagicMock]:
    """Create a mock transport returning the given bodies in order."""

    def _make(*bodies: str) -> MagicMock:
        transport = MagicMock(spec=Transport)
        transport.get.side_effect = list(bodies)
        return transport

    return _make


@pytest.fixture
def sample_xml() -> dict[str, str]:
    """Sample response bodies keyed by shape."""
    return {
        "empty": XML_EMPTY,
        "scalar": XML_SCALAR,
        "record": XML_SINGLE_RECORD,
        "error": XML_ERROR,
        "false_field": XML_FALSE_FIELD,
    }


@pytest.fixture
def page_bodies() -> Callable[[list[int]], list[str]]:
    """Build consecutive page bodies from a list of page sizes."""

    def _pages(sizes: list[int]) -> list[str]:
        bodies = []
        start = 1
        for size in sizes:
            bodies.append(rows_xml(size, start) if size else XML_EMPTY)
            start += size
        return bodies

    return _pages


# ============================================================================
# SETTINGS FIXTURES
# ============================================================================


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> Generator[pytest.MonkeyPatch, None, None]:
    """Remove DonorPerfect variables and any local .env from the settings sources."""
    for name in (
        "DONORPERFECT_BASE_URL",
        "DONORPERFECT_API_KEY",
        "DONORPERFECT_LOGIN",
        "DONORPERFECT_PASS",
        "DONORPERFECT_APP_NAME",
        "DONORPERFECT_TIMEOUT",
        "DONORPERFECT_PAGE_SIZE",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield monkeypatch
    get_settings.cache_clear()
