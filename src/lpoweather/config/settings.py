"""
Typed configuration models using Pydantic.

The defaults describe the Lake Pend Oreille weather station feeds; a YAML
file only needs to list the values that differ.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Quantity(str, Enum):
    """Physical quantity measured by one feed, in interchange column order."""

    AIR_TEMPERATURE = "air_temperature"
    BAROMETRIC_PRESSURE = "barometric_pressure"
    WIND_SPEED = "wind_speed"

    @property
    def label(self) -> str:
        """Human-readable name used in tabular summaries."""
        return _LABELS[self]

    @property
    def json_key(self) -> str:
        """Key used in JSON summaries."""
        return _JSON_KEYS[self]


_LABELS = {
    Quantity.AIR_TEMPERATURE: "Air Temperature",
    Quantity.BAROMETRIC_PRESSURE: "Barometric Pressure",
    Quantity.WIND_SPEED: "Wind Speed",
}

_JSON_KEYS = {
    Quantity.AIR_TEMPERATURE: "airTemperature",
    Quantity.BAROMETRIC_PRESSURE: "barometricPressure",
    Quantity.WIND_SPEED: "windSpeed",
}


def _default_paths() -> dict[Quantity, str]:
    return {
        Quantity.AIR_TEMPERATURE: "Air_Temp",
        Quantity.BAROMETRIC_PRESSURE: "Barometric_Press",
        Quantity.WIND_SPEED: "Wind_Speed",
    }


class FetchConfig(BaseModel):
    """Where and how the daily feeds are retrieved."""

    model_config = ConfigDict(frozen=True)

    base_url: str = Field(
        default="http://lpo.dt.navy.mil/data/DM",
        description="Feed root; pages live under {base_url}/{YYYY}/{YYYY_MM_DD}/",
    )
    paths: dict[Quantity, str] = Field(
        default_factory=_default_paths,
        description="Page name per quantity",
    )
    timeout: float = Field(default=30.0, gt=0, description="Request timeout (s)")
    user_agent: str = Field(default="lpoweather/0.1")
    error_marker: str = Field(
        default="error.html",
        description="Text whose presence marks an upstream error page",
    )

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize the base URL so paths can be joined with '/'."""
        if not v:
            msg = "base_url cannot be empty"
            raise ValueError(msg)
        return v.rstrip("/")

    @field_validator("paths")
    @classmethod
    def validate_paths(cls, v: dict[Quantity, str]) -> dict[Quantity, str]:
        """Every quantity needs a page, and user entries override defaults."""
        merged = {**_default_paths(), **v}
        empty = [q.value for q, path in merged.items() if not path]
        if empty:
            msg = f"Empty page path for: {', '.join(empty)}"
            raise ValueError(msg)
        return merged

    def path_for(self, quantity: Quantity) -> str:
        """Page name for a quantity."""
        return self.paths[quantity]


class LoggingConfig(BaseModel):
    """Logging configuration."""

    model_config = ConfigDict(frozen=True)

    level: str = Field(default="WARNING")
    json_output: bool = Field(default=False)

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Accept standard log level names in any case."""
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            msg = f"Unknown log level: {v!r}"
            raise ValueError(msg)
        return level


class AppConfig(BaseModel):
    """Complete application configuration."""

    model_config = ConfigDict(frozen=True)

    fetch: FetchConfig = Field(default_factory=FetchConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
