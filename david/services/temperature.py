# david/services/temperature.py
"""
Simulated "thermal" reading for the camera temperature check.

There is no sensor behind this: the value is a random draw around normal
body temperature, bucketed into low / normal / elevated / fever.
"""
from __future__ import annotations

import logging
import random
from dataclasses import dataclass, asdict
from enum import Enum
from typing import Dict, Optional

logger = logging.getLogger("david.temperature")

BASE_TEMP_C = 36.8
# full width of the draw around BASE_TEMP_C -> [35.8, 37.8)
SPREAD_C = 2.0

LOW_BELOW_C = 36.1
NORMAL_MAX_C = 37.5
ELEVATED_MAX_C = 38.5


class TemperatureStatus(str, Enum):
    LOW = "low"
    NORMAL = "normal"
    ELEVATED = "elevated"
    FEVER = "fever"


GUIDANCE: Dict[TemperatureStatus, str] = {
    TemperatureStatus.LOW: "Your temperature is below normal. Stay warm and monitor your health.",
    TemperatureStatus.NORMAL: "Your temperature is normal. Continue monitoring your health.",
    TemperatureStatus.ELEVATED: "Your temperature is slightly elevated. Rest, stay hydrated, and monitor symptoms.",
    TemperatureStatus.FEVER: "You have a fever. Consult a healthcare professional if symptoms persist.",
}


@dataclass(frozen=True)
class TemperatureReading:
    value: float
    status: TemperatureStatus
    guidance: str

    def to_dict(self) -> Dict:
        d = asdict(self)
        d["status"] = self.status.value
        return d


def status_for(value: float) -> TemperatureStatus:
    if value < LOW_BELOW_C:
        return TemperatureStatus.LOW
    if value <= NORMAL_MAX_C:
        return TemperatureStatus.NORMAL
    if value <= ELEVATED_MAX_C:
        return TemperatureStatus.ELEVATED
    return TemperatureStatus.FEVER


def classify_temperature(value: float) -> TemperatureReading:
    status = status_for(value)
    return TemperatureReading(value=value, status=status, guidance=GUIDANCE[status])


def simulate_temperature(rng: Optional[random.Random] = None) -> float:
    """Draw a value near body temperature, rounded to 0.1 °C."""
    rng = rng or random
    raw = BASE_TEMP_C + (rng.random() - 0.5) * SPREAD_C
    return round(raw, 1)


def take_reading(rng: Optional[random.Random] = None) -> TemperatureReading:
    reading = classify_temperature(simulate_temperature(rng))
    logger.info("temperature reading value=%.1f status=%s", reading.value, reading.status.value)
    return reading


def format_reading(reading: TemperatureReading) -> str:
    """Chat-ready summary of a reading."""
    return (
        "Temperature Check Result:\n"
        f"Temperature: {reading.value:.1f}°C\n"
        f"Status: {reading.status.value.upper()}\n"
        f"Guidance: {reading.guidance}"
    )
