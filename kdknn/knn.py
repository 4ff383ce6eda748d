# kdknn/knn.py
import numpy as np

# keeps weights finite when the query sits exactly on a stored point
EPSILON = 1e-6


class KNNRegressor:
    """Stateless k-NN regression over a fitted KDTree and its target dataset."""

    def predict(self, tree, targets, point, k, weighted=False):
        nearest = tree.k_nearest(point, k)
        values = np.empty(k)
        out = np.empty(1)
        for i, (identifier, _) in enumerate(nearest):
            targets.get(identifier, out)
            values[i] = out[0]
        if not weighted:
            return float(np.mean(values))
        distances = np.array([d for _, d in nearest])
        weights = 1.0 / (distances + EPSILON)
        weights /= weights.sum()
        return float(weights @ values)
