import numpy as np
import pandas as pd
import pytest

from kdknn.errors import DuplicateLabel
from kdknn.io import dataset_from_array, dataset_from_frame, frame_from_dataset


def test_frame_with_id_column():
    df = pd.DataFrame({"name": ["x", "y"], "f1": [1.0, 2.0], "f2": [3, 4], "tag": ["u", "v"]})
    ds = dataset_from_frame(df, id_column="name")
    assert ds.ids == ["x", "y"]
    np.testing.assert_array_equal(ds.data, [[1.0, 3.0], [2.0, 4.0]])


def test_frame_index_and_columns():
    df = pd.DataFrame({"f1": [1.0, 2.0], "f2": [3.0, 4.0]}, index=[10, 20])
    ds = dataset_from_frame(df, columns=["f2"])
    assert ds.ids == ["10", "20"] and ds.dims == 1


def test_duplicate_ids_rejected():
    df = pd.DataFrame({"name": ["x", "x"], "f1": [1.0, 2.0]})
    with pytest.raises(DuplicateLabel):
        dataset_from_frame(df, id_column="name")


def test_frame_from_dataset():
    ds = dataset_from_array(np.array([[1.0, 2.0], [3.0, 4.0]]))
    df = frame_from_dataset(ds, columns=["a", "b"])
    assert list(df.index) == ["p0", "p1"]
    assert df.loc["p1", "b"] == 4.0
