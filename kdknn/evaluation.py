# kdknn/evaluation.py
from pathlib import Path

import numpy as np

from .io import dataset_from_array
from .model import KNNRegressorModel

# ---------- splits & scaling ----------
def train_val_test_split(X, y, val_size=0.15, test_size=0.15, random_state=42):
    """Shuffle once, then cut into train / val / test (X parts first, then y parts)."""
    n = len(X)
    idx = np.random.default_rng(random_state).permutation(n)
    n_val, n_test = int(val_size * n), int(test_size * n)
    cuts = [n - n_val - n_test, n - n_test]
    X_parts = np.split(X[idx], cuts)
    y_parts = np.split(y[idx], cuts)
    return (*X_parts, *y_parts)

def fit_standardizer(X_train):
    sigma = X_train.std(axis=0)
    return X_train.mean(axis=0), np.where(sigma == 0.0, 1.0, sigma)

def apply_standardizer(X, mu, sigma):
    return (X - mu) / sigma

# ---------- metrics ----------
def mae(y, yhat):
    return float(np.abs(y - yhat).mean())

def rmse(y, yhat):
    return float(np.sqrt(((y - yhat) ** 2).mean()))

def r2(y, yhat):
    return float(1.0 - ((y - yhat) ** 2).sum() / ((y - y.mean()) ** 2).sum())

def report(prefix, tag, y, yhat):
    print(f"{prefix} {tag} RMSE: {rmse(y, yhat):,.2f}")
    print(f"{prefix} {tag} MAE : {mae(y, yhat):,.2f}")
    print(f"{prefix} {tag} R^2 : {r2(y, yhat):,.4f}")

def search_k(k_grid, score):
    """Print and return the k with the lowest `score(k)` (validation MAE)."""
    best = {"k": None, "mae": float("inf")}
    for k in k_grid:
        value = score(k)
        print(f"k={k:>2} | val MAE={value:,.2f}")
        if value < best["mae"]:
            best = {"k": k, "mae": value}
    print(f"\nBest k: {best['k']}")
    return best

def parse_grid(grid_str):
    return [int(x) for x in grid_str.split(",") if x.strip()]

def results_dir(root=None):
    d = Path(root) if root else Path.cwd() / "results"
    d.mkdir(parents=True, exist_ok=True)
    return d

# ---------- model helpers ----------
def fit_arrays(X, y):
    """Fit a KNNRegressorModel from a feature matrix and a target vector."""
    model = KNNRegressorModel()
    model.fit(dataset_from_array(X), dataset_from_array(y))
    return model

def predict_array(model, X, k, weighted):
    preds = model.predict(dataset_from_array(X), k=k, weighted=weighted)
    return preds.data[:, 0]

# ---------- simple CV ----------
def kfold_indices(n, k=5, seed=42):
    return np.array_split(np.random.default_rng(seed).permutation(n), k)

def cross_val_mse(X, y, model_k, weighted=False, cv=5, seed=42):
    """Mean and std of train / validation MSE over `cv` folds of kdknn models."""
    folds = kfold_indices(len(X), k=cv, seed=seed)
    mse = np.empty((cv, 2))
    for i, val_idx in enumerate(folds):
        train_idx = np.concatenate(folds[:i] + folds[i + 1:])
        model = fit_arrays(X[train_idx], y[train_idx])
        for j, idx in enumerate((train_idx, val_idx)):
            yhat = predict_array(model, X[idx], model_k, weighted)
            mse[i, j] = np.mean((y[idx] - yhat) ** 2)
    return mse[:, 0].mean(), mse[:, 0].std(), mse[:, 1].mean(), mse[:, 1].std()
