# kdknn/io.py
import json
from pathlib import Path

import numpy as np
import pandas as pd

from .dataset import LabeledDataset
from .errors import FileError, SchemaError


def write_json(path, record):
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(record, indent=2))
    except OSError as exc:
        raise FileError(f"{path}: {exc}") from exc


def read_json(path):
    try:
        text = Path(path).read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise SchemaError(f"{path}: not UTF-8 text: {exc}") from exc
    except OSError as exc:
        raise FileError(f"{path}: {exc}") from exc
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise SchemaError(f"{path}: {exc}") from exc


def dataset_from_frame(df, id_column=None, columns=None):
    """
    Build a LabeledDataset from the numeric columns of `df` (or `columns`).
    Identifiers come from `id_column` when given, otherwise from the index.
    """
    if id_column is not None:
        ids = df[id_column].astype(str).tolist()
        df = df.drop(columns=[id_column])
    else:
        ids = df.index.astype(str).tolist()
    if columns is None:
        values = df.select_dtypes(include="number").to_numpy(dtype=float)
    else:
        values = df[list(columns)].to_numpy(dtype=float)
    ds = LabeledDataset()
    for identifier, row in zip(ids, values):
        ds.add(identifier, row)
    return ds


def frame_from_dataset(ds, columns=None):
    if columns is None:
        columns = [f"col{i}" for i in range(ds.dims)]
    return pd.DataFrame(ds.data, index=pd.Index(ds.ids, name="id"), columns=columns)


def dataset_from_array(X, prefix="p"):
    X = np.asarray(X, dtype=float)
    if X.ndim == 1:
        X = X[:, None]
    ds = LabeledDataset()
    for i, row in enumerate(X):
        ds.add(f"{prefix}{i}", row)
    return ds
