# kdknn/dataset.py
import numpy as np

from .errors import DuplicateLabel, PointNotFound, WrongPointSize, SchemaError
from .schema import check_json, DATASET_SCHEMA


class LabeledDataset:
    """
    Ordered mapping of string identifiers to fixed length float vectors.

    `dims` is 0 while the dataset is empty and unset; the first `add` fixes it.
    Vectors are copied on the way in and on the way out, so no two datasets
    ever share storage.
    """

    def __init__(self, dims=0):
        self._dims = int(dims)
        self._ids = []
        self._rows = []
        self._index = {}

    # ---------- queries ----------
    @property
    def dims(self):
        return self._dims

    @property
    def size(self):
        return len(self._ids)

    def __len__(self):
        return len(self._ids)

    def __contains__(self, identifier):
        return identifier in self._index

    def __iter__(self):
        for identifier, row in zip(self._ids, self._rows):
            yield identifier, row.copy()

    @property
    def ids(self):
        return list(self._ids)

    @property
    def data(self):
        if not self._rows:
            return np.empty((0, self._dims))
        return np.vstack(self._rows)

    # ---------- mutation ----------
    def _as_point(self, vector):
        point = np.array(vector, dtype=float)
        if point.ndim != 1:
            raise WrongPointSize(f"Point must be one dimensional, got shape {point.shape}")
        if self._ids and point.size != self._dims:
            raise WrongPointSize(f"Expected {self._dims} values, got {point.size}")
        return point

    def add(self, identifier, vector):
        if identifier in self._index:
            raise DuplicateLabel(f"Label already in dataset: {identifier}")
        point = self._as_point(vector)
        if point.size == 0:
            raise WrongPointSize("Point has no values")
        if not self._ids:
            self._dims = point.size
        self._index[identifier] = len(self._ids)
        self._ids.append(identifier)
        self._rows.append(point)

    def get(self, identifier, out):
        """Copy the vector for `identifier` into `out`. Returns False if absent."""
        pos = self._index.get(identifier)
        if pos is None:
            return False
        if len(out) != self._dims:
            raise WrongPointSize(f"Output holds {len(out)} values, need {self._dims}")
        out[:] = self._rows[pos]
        return True

    def update(self, identifier, vector):
        pos = self._index.get(identifier)
        if pos is None:
            raise PointNotFound(f"Point not found: {identifier}")
        self._rows[pos] = self._as_point(vector)

    def remove(self, identifier):
        pos = self._index.pop(identifier, None)
        if pos is None:
            raise PointNotFound(f"Point not found: {identifier}")
        del self._ids[pos]
        del self._rows[pos]
        for later in self._ids[pos:]:
            self._index[later] -= 1

    def clear(self):
        self._dims = 0
        self._ids = []
        self._rows = []
        self._index = {}

    def copy(self):
        other = LabeledDataset(self._dims)
        other._ids = list(self._ids)
        other._rows = [row.copy() for row in self._rows]
        other._index = dict(self._index)
        return other

    # ---------- persistence ----------
    def to_dict(self):
        return {
            "cols": self._dims,
            "data": {i: row.tolist() for i, row in zip(self._ids, self._rows)},
        }

    @classmethod
    def from_dict(cls, record):
        check_json(record, DATASET_SCHEMA)
        cols, points = record["cols"], record["data"]
        if not points:
            return cls()
        if cols == 0:
            raise SchemaError("cols is 0 but the dataset holds points")
        ds = cls(int(cols))
        for identifier, values in points.items():
            if len(values) != cols:
                raise SchemaError(f"data/{identifier}: holds {len(values)} values, cols is {cols}")
            if not np.isfinite(values).all():
                raise SchemaError(f"data/{identifier}: holds non finite values")
            ds.add(identifier, values)
        return ds

    def print(self, edge=3):
        """Short text summary: shape, then the first and last `edge` rows."""
        lines = [f"rows: {self.size} cols: {self._dims}"]
        width = max((len(i) for i in self._ids), default=0)
        shown = list(range(self.size))
        if self.size > 2 * edge:
            shown = shown[:edge] + [None] + shown[-edge:]
        for pos in shown:
            if pos is None:
                lines.append("...")
                continue
            vec = np.array2string(self._rows[pos], precision=4, threshold=7, edgeitems=3)
            lines.append(f"{self._ids[pos]:<{width}}  {vec}")
        return "\n".join(lines)

    def __repr__(self):
        return f"LabeledDataset(rows={self.size}, cols={self._dims})"

    def __eq__(self, other):
        if not isinstance(other, LabeledDataset):
            return NotImplemented
        return (self._dims == other._dims and self._ids == other._ids
                and all(np.array_equal(a, b) for a, b in zip(self._rows, other._rows)))
