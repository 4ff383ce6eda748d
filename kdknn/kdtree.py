# kdknn/kdtree.py
from heapq import heappush, heapreplace

import numpy as np

from .dataset import LabeledDataset
from .errors import SchemaError
from .schema import check_json, TREE_SCHEMA

LEAF = -1


class KDTree:
    """
    Exact k-d tree over a snapshot of a LabeledDataset.

    Nodes live in flat arena lists addressed by position; node 0 is the root.
    Internal nodes split on the axis of greatest spread (lowest axis on ties)
    at the median of the points ordered by (coordinate, insertion order).
    Each leaf holds exactly one point, referenced by its row in the snapshot.
    """

    def __init__(self, dataset=None):
        self.clear()
        if dataset is not None and dataset.size:
            self._ids = dataset.ids
            self._data = dataset.data
            self._dims = dataset.dims
            self._build(np.arange(len(self._ids)))

    def clear(self):
        self._ids = []
        self._data = np.empty((0, 0))
        self._dims = 0
        self._axis, self._split = [], []
        self._left, self._right, self._point = [], [], []

    @property
    def size(self):
        return len(self._ids)

    @property
    def dims(self):
        return self._dims

    @property
    def initialized(self):
        return self.size > 0

    @property
    def ids(self):
        return list(self._ids)

    def _new_node(self):
        self._axis.append(LEAF)
        self._split.append(0.0)
        self._left.append(LEAF)
        self._right.append(LEAF)
        self._point.append(LEAF)
        return len(self._axis) - 1

    def _build(self, rows):
        node = self._new_node()
        if len(rows) == 1:
            self._point[node] = int(rows[0])
            return node
        pts = self._data[rows]
        axis = int(np.argmax(pts.max(axis=0) - pts.min(axis=0)))
        order = rows[np.lexsort((rows, pts[:, axis]))]
        mid = len(order) // 2
        self._axis[node] = axis
        self._split[node] = float(self._data[order[mid], axis])
        self._left[node] = self._build(order[:mid])
        self._right[node] = self._build(order[mid:])
        return node

    def k_nearest(self, point, k):
        """
        Return the `k` closest points as (identifier, distance) pairs, nearest
        first. Equidistant points keep their insertion order.
        Requires 1 <= k <= size; callers validate.
        """
        point = np.asarray(point, dtype=float)
        # max-heap on (squared distance, row) via negated entries
        heap = []

        def visit(node):
            axis = self._axis[node]
            if axis == LEAF:
                row = self._point[node]
                diff = self._data[row] - point
                entry = (-float(diff @ diff), -row)
                if len(heap) < k:
                    heappush(heap, entry)
                elif entry > heap[0]:
                    heapreplace(heap, entry)
                return
            delta = point[axis] - self._split[node]
            if delta < 0:
                near, far = self._left[node], self._right[node]
            else:
                near, far = self._right[node], self._left[node]
            visit(near)
            # equality still visits: an earlier point may tie the k-th best
            if len(heap) < k or delta * delta <= -heap[0][0]:
                visit(far)

        visit(0)
        best = sorted((-d2, -row) for d2, row in heap)
        return [(self._ids[row], float(np.sqrt(d2))) for d2, row in best]

    # ---------- persistence ----------
    def _nodes(self):
        return [
            [a, s, l, r, p]
            for a, s, l, r, p in zip(self._axis, self._split, self._left, self._right, self._point)
        ]

    def to_dict(self):
        nodes = self._nodes()
        data = {i: row.tolist() for i, row in zip(self._ids, self._data)}
        return {"cols": self._dims, "nodes": nodes, "data": {"cols": self._dims, "data": data}}

    @classmethod
    def from_dict(cls, record):
        """
        Rebuild the tree from the record's data and accept the record only
        when its nodes are exactly the ones the build produces.
        """
        check_json(record, TREE_SCHEMA)
        data = LabeledDataset.from_dict(record["data"])
        if data.dims != record["cols"]:
            raise SchemaError(f"tree cols {record['cols']} does not match data cols {data.dims}")
        tree = cls(data)
        if tree._nodes() != record["nodes"]:
            raise SchemaError("tree nodes do not match a build of the tree data")
        return tree
