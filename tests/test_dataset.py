import numpy as np
import pytest

from kdknn.dataset import LabeledDataset
from kdknn.errors import DuplicateLabel, PointNotFound, SchemaError, WrongPointSize


def test_first_add_fixes_dims():
    ds = LabeledDataset()
    assert ds.dims == 0 and ds.size == 0
    ds.add("x", [1.0, 2.0, 3.0])
    assert ds.dims == 3
    with pytest.raises(WrongPointSize):
        ds.add("y", [1.0, 2.0])
    assert ds.size == 1


def test_duplicate_label_keeps_size():
    ds = LabeledDataset()
    ds.add("x", [1.0])
    with pytest.raises(DuplicateLabel):
        ds.add("x", [2.0])
    assert ds.size == 1
    out = np.empty(1)
    assert ds.get("x", out) and out[0] == 1.0


def test_get_reports_absence_without_raising():
    ds = LabeledDataset()
    ds.add("x", [4.0, 5.0])
    out = np.zeros(2)
    assert ds.get("missing", out) is False
    assert ds.get("x", out) is True
    np.testing.assert_array_equal(out, [4.0, 5.0])


def test_update_keeps_order():
    ds = LabeledDataset()
    for i in range(3):
        ds.add(f"p{i}", [float(i)])
    ds.update("p1", [9.0])
    assert ds.ids == ["p0", "p1", "p2"]
    np.testing.assert_array_equal(ds.data[:, 0], [0.0, 9.0, 2.0])
    with pytest.raises(PointNotFound):
        ds.update("nope", [1.0])
    with pytest.raises(WrongPointSize):
        ds.update("p1", [1.0, 2.0])


def test_remove_keeps_other_identities():
    ds = LabeledDataset()
    for i in range(4):
        ds.add(f"p{i}", [float(i)])
    ds.remove("p1")
    assert ds.ids == ["p0", "p2", "p3"]
    out = np.empty(1)
    assert ds.get("p3", out) and out[0] == 3.0
    with pytest.raises(PointNotFound):
        ds.remove("p1")


def test_clear_resets_dims():
    ds = LabeledDataset()
    ds.add("x", [1.0, 2.0])
    ds.clear()
    assert ds.size == 0 and ds.dims == 0
    ds.add("y", [1.0, 2.0, 3.0])
    assert ds.dims == 3


def test_storage_is_not_shared():
    ds = LabeledDataset()
    vec = np.array([1.0, 2.0])
    ds.add("x", vec)
    vec[0] = 100.0
    copy = ds.copy()
    copy.update("x", [7.0, 7.0])
    out = np.empty(2)
    ds.get("x", out)
    np.testing.assert_array_equal(out, [1.0, 2.0])


def test_dict_round_trip_preserves_order():
    ds = LabeledDataset()
    for name in ("zeta", "alpha", "mid"):
        ds.add(name, [len(name), 0.5])
    again = LabeledDataset.from_dict(ds.to_dict())
    assert again == ds
    assert again.ids == ["zeta", "alpha", "mid"]


@pytest.mark.parametrize("record", [
    [],
    {"cols": 2},
    {"cols": "2", "data": {}},
    {"cols": 2, "data": {"a": [1.0]}},
    {"cols": 1, "data": {"a": ["x"]}},
    {"cols": 0, "data": {"a": []}},
    {"cols": 2, "data": {"a": [None, 1.0]}},
    {"cols": 1, "data": {"a": ["1.5"]}},
    {"cols": 2, "data": {"a": [[1.0], [2.0]]}},
    {"cols": 1, "data": {"a": [True]}},
    {"cols": 1, "data": {"a": [float("nan")]}},
    {"cols": 1.5, "data": {}},
    {"cols": -1, "data": {}},
    {"cols": 10 ** 400, "data": {"a": [1.0]}},
])
def test_from_dict_rejects_malformed(record):
    with pytest.raises(SchemaError):
        LabeledDataset.from_dict(record)


def test_print_summarises_long_datasets():
    ds = LabeledDataset()
    for i in range(10):
        ds.add(f"p{i}", [float(i), 0.0])
    text = ds.print()
    assert text.splitlines()[0] == "rows: 10 cols: 2"
    assert "..." in text
    assert "p0" in text and "p9" in text and "p5" not in text


def test_loaded_empty_dataset_is_unset():
    ds = LabeledDataset.from_dict({"cols": 2, "data": {}})
    assert ds.dims == 0
    ds.add("x", [1.0, 2.0, 3.0])
    assert ds.dims == 3
