# kdknn/framework_knn.py
import argparse
import sys

import numpy as np
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

from sklearn.neighbors import KNeighborsRegressor
from sklearn.model_selection import validation_curve, KFold
from sklearn.dummy import DummyRegressor

from .evaluation import mae, parse_grid, report, results_dir, search_k


def sklearn_model(k, weighted):
    return KNeighborsRegressor(
        n_neighbors=k, weights="distance" if weighted else "uniform", algorithm="kd_tree"
    )


def baseline_predict(X_train, y_train, X, k, weighted=False):
    """Reference predictions from scikit-learn on the same data and k."""
    return sklearn_model(k, weighted).fit(X_train, y_train).predict(X)


def dummy_mse(X, y, cv, strategy):
    scores = []
    for tr_idx, te_idx in cv.split(X):
        dummy = DummyRegressor(strategy=strategy).fit(X[tr_idx], y[tr_idx])
        scores.append(np.mean((y[te_idx] - dummy.predict(X[te_idx])) ** 2))
    return float(np.mean(scores))


def main(argv=None):
    ap = argparse.ArgumentParser(description="scikit-learn k-NN baseline")
    ap.add_argument("--splits", required=True, help="Path to standardized splits .npz from run.py")
    ap.add_argument("--mode", required=True, choices=["fixed", "grid"])
    ap.add_argument("--k", type=int, help="k for mode=fixed")
    ap.add_argument("--k-grid", type=str, help="comma-separated ks for mode=grid (e.g., 1,3,5,7)")
    ap.add_argument("--weighted", action="store_true")
    ap.add_argument("--seed", type=int, default=42)
    ap.add_argument("--cv", type=int, default=5, help="CV folds for curves (default: 5)")
    ap.add_argument("--outdir", type=str, default="results")
    args = ap.parse_args(argv)

    if args.mode == "fixed" and args.k is None:
        ap.error("--k is required when --mode fixed")
    if args.mode == "grid" and not args.k_grid:
        ap.error("--k-grid is required when --mode grid")

    data = np.load(args.splits, allow_pickle=False)
    X_train = data["X_train"]; y_train = data["y_train"]
    X_val   = data["X_val"];   y_val   = data["y_val"]
    X_test  = data["X_test"];  y_test  = data["y_test"]

    if args.mode == "fixed":
        k = int(args.k)
        model = sklearn_model(k, args.weighted).fit(X_train, y_train)
        print(f"k={k:>2} | val MAE={mae(y_val, model.predict(X_val)):,.2f}")
        report("[Sklearn]", "Test", y_test, model.predict(X_test))
        return 0

    k_grid = parse_grid(args.k_grid)
    best = search_k(k_grid, lambda k: mae(y_val, baseline_predict(X_train, y_train, X_val, k, args.weighted)))
    report("[Sklearn]", "Test", y_test,
           baseline_predict(X_train, y_train, X_test, best["k"], args.weighted))

    # ---- Validation curve (MSE vs k) using CV on train+val ----
    X_tv = np.vstack([X_train, X_val])
    y_tv = np.concatenate([y_train, y_val])
    cv = KFold(n_splits=args.cv, shuffle=True, random_state=args.seed)
    param_range = np.array(k_grid, dtype=int)
    # scoring is neg MSE -> flip sign to MSE+
    tr_scores, va_scores = validation_curve(
        estimator=sklearn_model(1, args.weighted),
        X=X_tv, y=y_tv,
        param_name="n_neighbors",
        param_range=param_range,
        cv=cv,
        scoring="neg_mean_squared_error",
    )
    train_mean = -np.mean(tr_scores, axis=1)
    train_std  =  np.std(tr_scores,  axis=1)
    val_mean   = -np.mean(va_scores, axis=1)
    val_std    =  np.std(va_scores,  axis=1)

    plt.figure()
    plt.plot(param_range, train_mean, label="Train")
    plt.fill_between(param_range, train_mean-train_std, train_mean+train_std, alpha=0.2)
    plt.plot(param_range, val_mean, label="Validation")
    plt.fill_between(param_range, val_mean-val_std, val_mean+val_std, alpha=0.2)
    plt.axhline(y=dummy_mse(X_tv, y_tv, cv, "mean"), linestyle="--", label="Dummy (mean)")
    plt.axhline(y=dummy_mse(X_tv, y_tv, cv, "median"), linestyle="--", label="Dummy (median)")
    plt.xlabel("Number of neighbours (k)")
    plt.ylabel("MSE")
    plt.title("Validation curve - sklearn KNN (MSE vs k)")
    plt.grid(True, alpha=0.3)
    plt.legend()
    plt.tight_layout()

    out_path = results_dir(args.outdir) / "validationCurve_sklearn_grid.png"
    plt.savefig(out_path, dpi=150)
    plt.close()
    print(f"[Sklearn] Saved validation curve → {out_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
