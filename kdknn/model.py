# kdknn/model.py
import logging

from .buffers import check_buffer
from .dataset import LabeledDataset
from .errors import (
    EmptyDataSet, NoDataFitted, NoDataSet, NotEnoughData, SchemaError,
    SizesDontMatch, SmallK, WrongPointSize,
)
from .io import read_json, write_json
from .kdtree import KDTree
from .knn import KNNRegressor
from .schema import check_json, MODEL_SCHEMA

log = logging.getLogger(__name__)


class KNNRegressorModel:
    """
    A KDTree over the feature points plus the 1-column target dataset that
    holds one value per identifier.

    The model is either uninitialized (empty tree) or fitted; `fit` and `load`
    build the new state completely before swapping it in. There is no
    internal locking: callers serialize `fit`, `load` and `clear` against
    every other call, while concurrent reads of a fitted model are safe.
    """

    def __init__(self):
        self._tree = KDTree()
        self._target = LabeledDataset(1)
        self._regressor = KNNRegressor()

    @property
    def size(self):
        return self._target.size

    @property
    def dims(self):
        return self._tree.dims

    cols = dims

    @property
    def initialized(self):
        return self._tree.initialized

    @property
    def tree(self):
        return self._tree

    @property
    def target(self):
        return self._target

    def clear(self):
        self._tree = KDTree()
        self._target = LabeledDataset(1)

    @staticmethod
    def _check_pair(tree, target):
        if target.dims != 1:
            raise WrongPointSize(f"Targets must hold 1 value per point, got {target.dims}")
        if tree.size != target.size:
            raise SizesDontMatch(f"{tree.size} points but {target.size} targets")
        if set(tree.ids) != set(target.ids):
            raise SizesDontMatch("Point and target identifiers differ")

    def fit(self, source, target):
        if source is None or target is None:
            raise NoDataSet()
        if not source.size or not target.size:
            raise EmptyDataSet()
        if source.size != target.size:
            raise SizesDontMatch(f"{source.size} points but {target.size} targets")
        tree = KDTree(source)
        target = target.copy()
        self._check_pair(tree, target)
        self._tree, self._target = tree, target
        log.debug("fitted %d points of %d cols", tree.size, tree.dims)
        return self

    def _check_query(self, k):
        if k < 1:
            raise SmallK(f"k must be at least 1, got {k}")
        if not self.initialized:
            raise NoDataFitted()
        if k > self._tree.size:
            raise NotEnoughData(f"k={k} but only {self._tree.size} points fitted")

    def predict_point(self, point, k=3, weighted=True):
        self._check_query(k)
        point = check_buffer(point, self._tree.dims)
        return self._regressor.predict(self._tree, self._target, point, k, weighted)

    def predict(self, source, k=3, weighted=True):
        """Predict every point of `source`; returns a new 1-column dataset."""
        if source is None:
            raise NoDataSet()
        if not source.size:
            raise EmptyDataSet()
        self._check_query(k)
        if source.dims != self._tree.dims:
            raise WrongPointSize(f"Source has {source.dims} cols, model expects {self._tree.dims}")
        result = LabeledDataset(1)
        for identifier, point in source:
            result.add(identifier, [self._regressor.predict(self._tree, self._target, point, k, weighted)])
        log.debug("predicted %d points with k=%d weighted=%s", result.size, k, weighted)
        return result

    # ---------- persistence ----------
    def dump(self):
        if not self.initialized:
            raise NoDataFitted()
        return {"tree": self._tree.to_dict(), "target": self._target.to_dict()}

    def load(self, record):
        check_json(record, MODEL_SCHEMA)
        tree = KDTree.from_dict(record["tree"])
        target = LabeledDataset.from_dict(record["target"])
        if not tree.initialized:
            raise SchemaError("model record holds no fitted points")
        try:
            self._check_pair(tree, target)
        except (WrongPointSize, SizesDontMatch) as exc:
            raise SchemaError(str(exc.args[0])) from exc
        self._tree, self._target = tree, target
        log.debug("loaded %d points of %d cols", tree.size, tree.dims)
        return self

    def write(self, path):
        write_json(path, self.dump())

    def read(self, path):
        return self.load(read_json(path))

    def __repr__(self):
        return f"KNNRegressorModel(size={self.size}, cols={self.dims})"
