"""
lpoweather: Lake Pend Oreille weather station readings.

This package fetches the air temperature, barometric pressure and wind speed
feeds for a day, merges them into one row-oriented dataset, and summarizes
the dataset with mean and median per quantity.
"""

from importlib.metadata import version

__version__ = version("lpoweather")

__all__ = ["__version__"]
