# kdknn/run_knn.py
import argparse
import sys

import numpy as np
import pandas as pd
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

from .errors import KNNError
from .evaluation import (
    cross_val_mse, fit_arrays, mae, parse_grid, predict_array, report, results_dir, search_k,
)
from .io import dataset_from_array
from .model import KNNRegressorModel


def load_splits(path):
    data = np.load(path, allow_pickle=False)
    return {key: data[key] for key in data.files}


def run_fixed(s, k, weighted, model_out):
    model = fit_arrays(s["X_train"], s["y_train"])
    val_pred = predict_array(model, s["X_val"], k, weighted)
    print(f"k={k:>2} | val MAE={mae(s['y_val'], val_pred):,.2f}")
    report("[kdknn]", "Test", s["y_test"], predict_array(model, s["X_test"], k, weighted))
    model.write(model_out)
    print(f"[kdknn] Saved model → {model_out}")


def run_grid(s, k_grid, weighted, cv, seed, outdir):
    model = fit_arrays(s["X_train"], s["y_train"])
    best = search_k(k_grid, lambda k: mae(s["y_val"], predict_array(model, s["X_val"], k, weighted)))
    report("[kdknn]", "Test", s["y_test"], predict_array(model, s["X_test"], best["k"], weighted))

    # ---- Validation curve on train+val ----
    X_tv = np.vstack([s["X_train"], s["X_val"]])
    y_tv = np.concatenate([s["y_train"], s["y_val"]])
    tr_mean, tr_std, va_mean, va_std = [], [], [], []
    for k in k_grid:
        m_tr, s_tr, m_va, s_va = cross_val_mse(X_tv, y_tv, model_k=k, weighted=weighted, cv=cv, seed=seed)
        tr_mean.append(m_tr); tr_std.append(s_tr)
        va_mean.append(m_va); va_std.append(s_va)
    tr_mean, tr_std = np.array(tr_mean), np.array(tr_std)
    va_mean, va_std = np.array(va_mean), np.array(va_std)

    plt.figure()
    plt.plot(k_grid, tr_mean, label="Train (kdknn)")
    plt.fill_between(k_grid, tr_mean - tr_std, tr_mean + tr_std, alpha=0.2)
    plt.plot(k_grid, va_mean, label="Validation (kdknn)")
    plt.fill_between(k_grid, va_mean - va_std, va_mean + va_std, alpha=0.2)
    plt.xlabel("Number of neighbours (k)")
    plt.ylabel("MSE")
    plt.title(f"Validation curve - kdknn ({'distance' if weighted else 'uniform'} weights)")
    plt.grid(True, alpha=0.3)
    plt.legend()
    out_path = results_dir(outdir) / "validationCurve_kdknn_grid.png"
    plt.tight_layout(); plt.savefig(out_path, dpi=150); plt.close()
    print(f"[kdknn] Saved validation curve → {out_path}")
    return best


def run_predict(s, model_in, predict_csv, k, weighted, outdir):
    model = KNNRegressorModel().read(model_in)
    df = pd.read_csv(predict_csv)
    X_new = df.select_dtypes(include="number").to_numpy(dtype=float)
    if "mu" in s:
        X_new = (X_new - s["mu"]) / s["sigma"]
    preds = model.predict(dataset_from_array(X_new, prefix="row"), k=k, weighted=weighted)
    out = results_dir(outdir) / "predictions_kdknn.csv"
    pd.DataFrame({"prediction": preds.data[:, 0]}).to_csv(out, index=False)
    print(f"[kdknn] Saved predictions → {out}")
    return out


def main(argv=None):
    ap = argparse.ArgumentParser(description="k-d tree k-NN regression runner")
    ap.add_argument("--splits", type=str, help="Path to standardized splits .npz from run.py")
    ap.add_argument("--mode", required=True, choices=["fixed", "grid", "predict"])
    ap.add_argument("--k", type=int, help="k for mode=fixed and mode=predict")
    ap.add_argument("--k-grid", type=str, help="comma-separated ks for mode=grid (e.g., 1,3,5,7)")
    ap.add_argument("--weighted", action="store_true", help="weight neighbours by inverse distance")
    ap.add_argument("--seed", type=int, default=42)
    ap.add_argument("--cv", type=int, default=5)
    ap.add_argument("--model", type=str, default="results/kdknn_model.json",
                    help="model JSON written by mode=fixed, read by mode=predict")
    ap.add_argument("--predict-csv", type=str, help="Feature-only CSV for predictions (predict mode)")
    ap.add_argument("--outdir", type=str, default="results")
    args = ap.parse_args(argv)

    if args.mode in ("fixed", "predict") and args.k is None:
        ap.error(f"--k is required for --mode {args.mode}")
    if args.mode == "grid" and not args.k_grid:
        ap.error("--k-grid is required when --mode grid")
    if args.mode == "predict" and not args.predict_csv:
        ap.error("--predict-csv is required for --mode predict")
    if args.mode != "predict" and not args.splits:
        ap.error("Provide --splits (produced by run.py)")

    splits = load_splits(args.splits) if args.splits else {}
    try:
        if args.mode == "fixed":
            run_fixed(splits, args.k, args.weighted, args.model)
        elif args.mode == "grid":
            run_grid(splits, parse_grid(args.k_grid), args.weighted, args.cv, args.seed, args.outdir)
        else:
            run_predict(splits, args.model, args.predict_csv, args.k, args.weighted, args.outdir)
    except KNNError as exc:
        print(f"[kdknn] {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
