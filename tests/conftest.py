"""Pytest configuration and shared fixtures."""

from pathlib import Path

import pytest

from lpoweather.config.settings import Quantity
from lpoweather.merging.merger import RawSource

READINGS: list[tuple[str, str, str, str, str]] = [
    ("2015_02_03", "00:01:52", "38.86", "30.07", "3.00"),
    ("2015_02_03", "00:06:52", "39.00", "29.91", "5.00"),
    ("2015_02_03", "00:11:52", "37.50", "30.12", "1.00"),
]


def feed_bytes(
    readings: list[tuple[str, str, str, str, str]],
    column: int,
    terminator: str = "\r\n",
) -> bytes:
    """Build a feed page carrying one value column of the readings."""
    lines = [f"{day} {time} {values[column]}" for day, time, *values in readings]
    return "".join(line + terminator for line in lines).encode("ascii")


def make_sources(
    readings: list[tuple[str, str, str, str, str]],
    terminator: str = "\r\n",
) -> tuple[RawSource, RawSource, RawSource]:
    """Build the three aligned feeds for a list of readings."""
    air, pressure, wind = (
        RawSource(quantity=quantity, content=feed_bytes(readings, i, terminator))
        for i, quantity in enumerate(Quantity)
    )
    return air, pressure, wind


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def readings() -> list[tuple[str, str, str, str, str]]:
    """Three hand-made readings (date, time, air, pressure, wind)."""
    return list(READINGS)


@pytest.fixture
def sources(
    readings: list[tuple[str, str, str, str, str]],
) -> tuple[RawSource, RawSource, RawSource]:
    """Aligned air, pressure and wind feeds for the readings."""
    return make_sources(readings)


@pytest.fixture
def interchange_text() -> str:
    """Merged rows for the readings, as produced by the fetch command."""
    return "".join(
        f"{day} {time} {air} {pressure} {wind}\n"
        for day, time, air, pressure, wind in READINGS
    )
