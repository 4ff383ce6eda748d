# run.py
import argparse
import subprocess
import sys
from pathlib import Path

import numpy as np
import pandas as pd

from kdknn.evaluation import apply_standardizer, fit_standardizer, train_val_test_split


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--csv", required=True, help="Path to a CSV holding features and the target column")
    ap.add_argument("--target", required=True, help="Name of the target column")
    ap.add_argument("--mode", required=True, choices=["fixed", "grid"])
    ap.add_argument("--k", type=int, help="k for mode=fixed")
    ap.add_argument("--k-grid", type=str, help="comma-separated ks for mode=grid (e.g., 1,3,5,7)")
    ap.add_argument("--weighted", action="store_true", help="weight neighbours by inverse distance")
    ap.add_argument("--val-size", type=float, default=0.15)
    ap.add_argument("--test-size", type=float, default=0.15)
    ap.add_argument("--seed", type=int, default=42)
    ap.add_argument("--outdir", type=str, default="data/processed")
    args = ap.parse_args()

    if args.mode == "fixed" and args.k is None:
        ap.error("--k is required when --mode fixed")
    if args.mode == "grid" and not args.k_grid:
        ap.error("--k-grid is required when --mode grid (e.g., 1,3,5,7,9)")

    outdir = Path(args.outdir)
    outdir.mkdir(parents=True, exist_ok=True)

    # ---- Load and prepare features/target (numeric-only)
    df = pd.read_csv(args.csv).dropna()
    y = df[args.target].to_numpy(dtype=float)
    X = df.drop(columns=[args.target]).select_dtypes(include="number").to_numpy(dtype=float)

    X_train, X_val, X_test, y_train, y_val, y_test = train_val_test_split(
        X, y, val_size=args.val_size, test_size=args.test_size, random_state=args.seed
    )

    # ---- Standardize with train stats only
    mu, sigma = fit_standardizer(X_train)
    splits_path = outdir / "splits_standardized.npz"
    np.savez(
        splits_path,
        X_train=apply_standardizer(X_train, mu, sigma), y_train=y_train,
        X_val=apply_standardizer(X_val, mu, sigma),     y_val=y_val,
        X_test=apply_standardizer(X_test, mu, sigma),   y_test=y_test,
        mu=mu, sigma=sigma
    )

    shared = ["--splits", str(splits_path), "--mode", args.mode, "--seed", str(args.seed)]
    shared += ["--k", str(args.k)] if args.mode == "fixed" else ["--k-grid", args.k_grid]
    if args.weighted:
        shared.append("--weighted")

    for label, module in (("kdknn", "kdknn.run_knn"), ("sklearn baseline", "kdknn.framework_knn")):
        print(f"\n[run.py] Running {label}...")
        ret = subprocess.call([sys.executable, "-m", module] + shared)
        if ret != 0:
            sys.exit(ret)

if __name__ == "__main__":
    main()
