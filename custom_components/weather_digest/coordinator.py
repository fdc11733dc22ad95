# Refresh-cycle owner: one aggregation pass per tick, published as an immutable result

import asyncio
from datetime import timedelta
import async_timeout
import logging
from typing import Any, Optional, Protocol, Sequence

from homeassistant.helpers.update_coordinator import DataUpdateCoordinator, UpdateFailed

from .aggregator import AggregationResult, aggregate, observations_from_rows
from .const import DEFAULT_NAME, DEFAULT_UPDATE_INTERVAL, UPDATE_TIMEOUT
from . import time_parser

_LOGGER = logging.getLogger(__name__)


class ObservationSource(Protocol):
    """Fetch collaborator: hands over an already-extracted, ordered feed."""

    async def async_get_observations(self) -> Sequence[Any]: ...


class DigestCoordinator(DataUpdateCoordinator):
    def __init__(
        self,
        hass,
        source: ObservationSource,
        update_interval: int = DEFAULT_UPDATE_INTERVAL,
        name: str = DEFAULT_NAME,
    ):
        """
        - source: object providing async_get_observations(); rows may be Observation
          instances or mappings using the keys in OBSERVATION_KEY_MAP.
        - update_interval: seconds between scheduled passes.
        """
        super().__init__(
            hass,
            _LOGGER,
            name=name,
            update_interval=timedelta(seconds=update_interval),
        )
        self.source = source
        self._refresh_lock = asyncio.Lock()

    async def _async_update_data(self) -> AggregationResult:
        """Fetch the feed and run one aggregation pass.

        An empty feed keeps the previously published result; with nothing
        published yet it surfaces as UpdateFailed.
        """
        async with self._refresh_lock:
            try:
                async with async_timeout.timeout(UPDATE_TIMEOUT):
                    rows = await self.source.async_get_observations()
            except Exception as exc:
                _LOGGER.exception("Observation source failed for %s", self.name)
                raise UpdateFailed(f"Observation source failed: {exc}") from exc

            observations = observations_from_rows(rows or [])
            today = time_parser.today()
            result = aggregate(observations, today=today)

            if result.is_empty:
                previous: Optional[AggregationResult] = self.data
                if previous is not None:
                    _LOGGER.warning(
                        "No usable observations in feed of %d row(s) for %s; keeping previous result",
                        len(observations),
                        today,
                    )
                    return previous
                _LOGGER.warning("No usable observations in feed of %d row(s) for %s", len(observations), today)
                raise UpdateFailed("Observation feed contained no usable observations")

            _LOGGER.debug(
                "Published %d daily summaries; current=%s",
                len(result.daily),
                result.snapshot,
            )
            return result
