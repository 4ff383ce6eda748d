# kdknn/client.py
from dataclasses import dataclass

import numpy as np

from .buffers import check_buffer
from .dataset import LabeledDataset
from .errors import EmptyDataSet, NoDataSet, PointNotFound, SmallK
from .io import read_json, write_json
from .model import KNNRegressorModel


class DataSetClient:
    """Message style front end over one LabeledDataset."""

    def __init__(self, name="dataset"):
        self.name = name
        self._dataset = LabeledDataset()

    def add_point(self, identifier, data):
        self._dataset.add(identifier, check_buffer(data))

    def get_point(self, identifier):
        out = np.empty(self._dataset.dims)
        if not self._dataset.get(identifier, out):
            raise PointNotFound(f"Point not found: {identifier}")
        return out

    def update_point(self, identifier, data):
        buf = check_buffer(data)
        if identifier not in self._dataset:
            raise PointNotFound(f"Point not found: {identifier}")
        self._dataset.update(identifier, buf)

    def delete_point(self, identifier):
        self._dataset.remove(identifier)

    def clear(self):
        self._dataset.clear()

    def size(self):
        return self._dataset.size

    def cols(self):
        return self._dataset.dims

    def print(self):
        return self._dataset.print()

    def get_dataset(self):
        return self._dataset.copy()

    def set_dataset(self, dataset):
        self._dataset = dataset.copy()

    def dump(self):
        return self._dataset.to_dict()

    def load(self, record):
        self._dataset = LabeledDataset.from_dict(record)

    def write(self, path):
        write_json(path, self.dump())

    def read(self, path):
        self.load(read_json(path))


@dataclass
class RegressorParams:
    num_neighbours: int = 3
    weight: bool = True

    def __post_init__(self):
        if self.num_neighbours < 1:
            raise SmallK(f"num_neighbours must be at least 1, got {self.num_neighbours}")


class KNNRegressorClient:
    """
    Message style front end over a KNNRegressorModel. Dataset arguments are
    DataSetClient references; a None reference reports NoDataSet.
    """

    def __init__(self, params=None):
        self.params = params or RegressorParams()
        self.model = KNNRegressorModel()

    def fit(self, source, target):
        if source is None or target is None:
            raise NoDataSet()
        self.model.fit(source.get_dataset(), target.get_dataset())

    def predict_point(self, data):
        return self.model.predict_point(data, self.params.num_neighbours, self.params.weight)

    def predict(self, source, dest):
        if source is None:
            raise NoDataSet()
        dataset = source.get_dataset()
        if not dataset.size:
            raise EmptyDataSet()
        if dest is None:
            raise NoDataSet()
        result = self.model.predict(dataset, self.params.num_neighbours, self.params.weight)
        dest.set_dataset(result)

    def clear(self):
        self.model.clear()

    def size(self):
        return self.model.size

    def cols(self):
        return self.model.dims

    def dump(self):
        return self.model.dump()

    def load(self, record):
        self.model.load(record)

    def write(self, path):
        self.model.write(path)

    def read(self, path):
        self.model.read(path)
