"""Sky-condition severity classes.

Symbol codes from the feed (``partlycloudy_day``, ``lightrainshowers``,
``heavysnowandthunder`` ...) are reduced to six ordinal classes. The order
doubles as the tie-break when a day holds several codes: the more severe
class always wins.
"""
from __future__ import annotations

from enum import IntEnum
from typing import Any, Iterable

from homeassistant.components.weather import (
    ATTR_CONDITION_CLOUDY,
    ATTR_CONDITION_FOG,
    ATTR_CONDITION_LIGHTNING,
    ATTR_CONDITION_RAINY,
    ATTR_CONDITION_SNOWY,
    ATTR_CONDITION_SUNNY,
)

from .const import CONDITION_KEYWORDS


class Condition(IntEnum):
    CLEAR = 0
    CLOUDY = 1
    RAIN = 2
    SNOW = 3
    FOG = 4
    THUNDER = 5

    @property
    def ha_condition(self) -> str:
        """Home Assistant weather condition string for this class."""
        return _HA_CONDITIONS[self]


_HA_CONDITIONS = {
    Condition.CLEAR: ATTR_CONDITION_SUNNY,
    Condition.CLOUDY: ATTR_CONDITION_CLOUDY,
    Condition.RAIN: ATTR_CONDITION_RAINY,
    Condition.SNOW: ATTR_CONDITION_SNOWY,
    Condition.FOG: ATTR_CONDITION_FOG,
    Condition.THUNDER: ATTR_CONDITION_LIGHTNING,
}


def classify(sky_code: Any) -> Condition:
    """Map a sky-condition code to its severity class. Never raises."""
    if not sky_code:
        return Condition.CLEAR
    code = str(sky_code).lower()
    for severity, keywords in CONDITION_KEYWORDS:
        if any(k in code for k in keywords):
            return Condition(severity)
    return Condition.CLEAR


def worst_condition(sky_codes: Iterable[Any]) -> Condition:
    """Most severe class among sky_codes; CLEAR when there are none."""
    return max((classify(c) for c in sky_codes), default=Condition.CLEAR)
