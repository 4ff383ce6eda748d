from .dataset import LabeledDataset
from .kdtree import KDTree
from .knn import KNNRegressor
from .model import KNNRegressorModel
from .client import DataSetClient, KNNRegressorClient, RegressorParams
from .errors import KNNError
