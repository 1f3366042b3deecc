"""Vector similarity helpers."""
from typing import Sequence
import numpy as np

from docqa.errors import DegenerateVector, InvalidInput


def _as_vector(values: Sequence[float], name: str) -> np.ndarray:
    if values is None:
        raise InvalidInput(f"Invalid input: {name} must be a non-empty vector")
    vector = np.asarray(values, dtype=np.float64)
    if vector.ndim != 1 or vector.size == 0:
        raise InvalidInput(f"Invalid input: {name} must be a non-empty vector")
    return vector


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """Cosine of the angle between two vectors.

    Args:
        a: First vector
        b: Second vector of the same length

    Returns:
        dot(a, b) / (|a| * |b|), in [-1, 1]

    Raises:
        InvalidInput: If either vector is empty or the lengths differ
        DegenerateVector: If either vector has zero magnitude
    """
    vec_a = _as_vector(a, "a")
    vec_b = _as_vector(b, "b")

    if vec_a.shape != vec_b.shape:
        raise InvalidInput(
            f"Vectors must have the same length ({vec_a.size} != {vec_b.size})"
        )

    mag_a = np.linalg.norm(vec_a)
    mag_b = np.linalg.norm(vec_b)

    if mag_a == 0 or mag_b == 0:
        raise DegenerateVector("Invalid vectors: magnitude cannot be zero")

    return float(np.dot(vec_a, vec_b) / (mag_a * mag_b))
