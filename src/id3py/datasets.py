# -*- coding: utf-8 -*-
"""Small built-in sample datasets."""

from __future__ import annotations

import pandas as pd

from .dataset import Dataset

WEATHER_ATTRIBUTES = ["Outlook", "Temperature", "Humidity", "Wind"]

_WEATHER_ROWS = [
    ["sunny", "hot", "high", "weak", "no"],
    ["sunny", "hot", "high", "strong", "no"],
    ["overcast", "hot", "high", "weak", "yes"],
    ["rain", "mild", "high", "weak", "yes"],
    ["rain", "cool", "normal", "weak", "yes"],
    ["rain", "cool", "normal", "strong", "no"],
    ["overcast", "cool", "normal", "strong", "yes"],
    ["sunny", "mild", "high", "weak", "no"],
]


def load_weather(as_frame: bool = False):
    """
    Load the 8-row "play tennis" weather sample.

    Parameters
    ----------
    as_frame : bool, default=False
        If True return a pandas DataFrame with a ``Play`` label column,
        otherwise a :class:`~id3py.dataset.Dataset` whose label is the last
        column.
    """
    if as_frame:
        return pd.DataFrame(_WEATHER_ROWS, columns=WEATHER_ATTRIBUTES + ["Play"])
    return Dataset(_WEATHER_ROWS, list(WEATHER_ATTRIBUTES), len(WEATHER_ATTRIBUTES))
