# kdknn/buffers.py
import numpy as np

from .errors import NoBuffer, InvalidBuffer, EmptyBuffer, WrongPointSize


def check_buffer(data, dims=None):
    """Turn a caller supplied buffer into a 1-D float array, or raise."""
    if data is None:
        raise NoBuffer()
    try:
        buf = np.asarray(data, dtype=float)
    except (TypeError, ValueError) as exc:
        raise InvalidBuffer(f"Buffer is not numeric: {exc}") from exc
    if buf.ndim != 1:
        raise InvalidBuffer(f"Buffer must be one dimensional, got shape {buf.shape}")
    if buf.size == 0:
        raise EmptyBuffer()
    if dims is not None and buf.size != dims:
        raise WrongPointSize(f"Expected {dims} values, got {buf.size}")
    return buf
