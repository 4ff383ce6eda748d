import numpy as np
import pytest

from kdknn.dataset import LabeledDataset


@pytest.fixture
def triangle():
    """Three points with one scalar target each: a=1, b=2, c=3."""
    source = LabeledDataset()
    source.add("a", [0.0, 0.0])
    source.add("b", [10.0, 0.0])
    source.add("c", [0.0, 10.0])
    target = LabeledDataset()
    for identifier, value in (("a", 1.0), ("b", 2.0), ("c", 3.0)):
        target.add(identifier, [value])
    return source, target


@pytest.fixture
def cloud():
    rng = np.random.default_rng(7)
    X = rng.normal(size=(200, 3))
    y = X @ np.array([1.5, -2.0, 0.5]) + rng.normal(scale=0.1, size=200)
    return X, y
