# -*- coding: utf-8 -*-
"""
id3py.dataset
=============

Read-only views over a categorical table.  A :class:`Dataset` holds the rows
of the table (as a 2-D numpy object array), the names of the non-label
columns and the index of the label column.  Filtering a view on an attribute
value yields a new, narrower view that shares the same attribute names.
"""

from __future__ import annotations
from collections import Counter

import numpy as np


class Dataset:
    """Immutable view over rows of categorical tokens.

    Parameters
    ----------
    data : array-like of shape (n_rows, n_columns)
        Rectangular table of categorical tokens.  The label is one of the
        columns.
    attribute_names : list[str]
        Names of the non-label columns, in column order.  The list object is
        shared, not copied, by every view derived through :meth:`filter`.
    label_index : int
        Column index of the label.

    Raises
    ------
    ValueError
        If the rows are ragged, ``label_index`` is out of range, the number
        of attribute names does not match the number of non-label columns or
        a name is repeated.
    """

    def __init__(self, data, attribute_names, label_index: int):
        rows = _as_table(data)
        n_columns = rows.shape[1]
        label_index = int(label_index)
        if not 0 <= label_index < n_columns:
            raise ValueError(
                f"label_index {label_index} out of range for {n_columns} columns")
        if len(attribute_names) != n_columns - 1:
            raise ValueError(
                f"expected {n_columns - 1} attribute names, got {len(attribute_names)}")
        if len(set(attribute_names)) != len(attribute_names):
            raise ValueError(f"duplicate attribute names: {list(attribute_names)}")
        self._data = rows
        self._data.flags.writeable = False
        self.attribute_names = attribute_names
        self.label_index = label_index

    @classmethod
    def from_frame(cls, df, label: str) -> "Dataset":
        """Build a view from a pandas DataFrame, using column ``label`` as label."""
        columns = [str(c) for c in df.columns]
        label = str(label)
        if label not in columns:
            raise ValueError(f"label column {label!r} not found in frame")
        label_index = columns.index(label)
        names = [c for c in columns if c != label]
        return cls(df.to_numpy(dtype=object), names, label_index)

    @property
    def data(self) -> np.ndarray:
        return self._data

    @property
    def n_columns(self) -> int:
        return self._data.shape[1]

    @property
    def labels(self) -> np.ndarray:
        return self._data[:, self.label_index]

    def __len__(self) -> int:
        return self._data.shape[0]

    def __repr__(self) -> str:
        return (f"Dataset(n_rows={len(self)}, attributes={list(self.attribute_names)}, "
                f"label_index={self.label_index})")

    def attribute_indices(self) -> list[int]:
        """Column indices of every non-label column, ascending."""
        return [i for i in range(self.n_columns) if i != self.label_index]

    def attribute_name(self, attr_index: int) -> str:
        """Name of the non-label column at ``attr_index``."""
        self._check_column(attr_index)
        if attr_index == self.label_index:
            raise ValueError(f"column {attr_index} is the label column")
        pos = attr_index if attr_index < self.label_index else attr_index - 1
        return self.attribute_names[pos]

    def unique_values(self, attr_index: int) -> list:
        """Distinct tokens appearing in column ``attr_index``, sorted."""
        self._check_column(attr_index)
        return sort_tokens(set(self._data[:, attr_index].tolist()))

    def class_counts(self) -> dict:
        """Mapping label -> number of rows, keys in ascending label order."""
        counts = Counter(self.labels.tolist())
        return {label: counts[label] for label in sort_tokens(counts)}

    def filter(self, attr_index: int, value) -> "Dataset":
        """Rows whose column ``attr_index`` equals ``value``, order preserved."""
        self._check_column(attr_index)
        mask = np.asarray(self._data[:, attr_index] == value, dtype=bool)
        view = Dataset.__new__(Dataset)
        view._data = self._data[mask]
        view._data.flags.writeable = False
        view.attribute_names = self.attribute_names
        view.label_index = self.label_index
        return view

    def _check_column(self, attr_index: int):
        if not 0 <= attr_index < self.n_columns:
            raise IndexError(
                f"column index {attr_index} out of range for {self.n_columns} columns")


def _as_table(data) -> np.ndarray:
    # np.asarray on ragged lists yields a 1-D array of lists; check lengths first
    rows = [list(r) for r in data]
    if not rows:
        raise ValueError("dataset must contain at least one row")
    width = len(rows[0])
    for i, r in enumerate(rows):
        if len(r) != width:
            raise ValueError(f"row {i} has {len(r)} columns, expected {width}")
    table = np.empty((len(rows), width), dtype=object)
    for i, r in enumerate(rows):
        table[i, :] = r
    return table


def sort_tokens(tokens) -> list:
    """Sort tokens ascending; mixed types are grouped by type name first."""
    return sorted(tokens, key=lambda t: (type(t).__name__, t))
