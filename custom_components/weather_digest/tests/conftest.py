import pytest

from homeassistant.util import dt as dt_util


@pytest.fixture(autouse=True)
def utc_time_zone():
    """Run every test with the process time zone pinned to UTC."""
    original = dt_util.DEFAULT_TIME_ZONE
    dt_util.set_default_time_zone(dt_util.UTC)
    yield
    dt_util.set_default_time_zone(original)
