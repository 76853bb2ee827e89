"""
Dense matrix and vector primitives backed by numpy.

Only the operations the trust computation needs: transpose, matrix-vector
multiply, scalar multiply and element-wise add. Instances are immutable (the
underlying arrays are marked read-only); every operation returns a new object.
Dimension mismatches raise ContractViolation.
"""

from __future__ import annotations

from typing import Iterable, Iterator, Sequence

import numpy as np

from trustfeed.core.exceptions import ContractViolation


def _frozen(arr: np.ndarray) -> np.ndarray:
    arr.setflags(write=False)
    return arr


class Vector:
    """1-D float64 vector."""

    __slots__ = ("_data",)

    def __init__(self, data: Iterable[float] | np.ndarray) -> None:
        if not isinstance(data, (np.ndarray, list, tuple)):
            data = list(data)
        arr = np.array(data, dtype=np.float64)
        if arr.ndim != 1:
            raise ContractViolation(f"Vector expects 1-D data, got shape {arr.shape}")
        self._data = _frozen(arr)

    @classmethod
    def zeros(cls, size: int) -> "Vector":
        return cls(np.zeros(size, dtype=np.float64))

    @classmethod
    def one_hot(cls, size: int, index: int) -> "Vector":
        if not 0 <= index < size:
            raise ContractViolation(f"index {index} out of range for size {size}")
        arr = np.zeros(size, dtype=np.float64)
        arr[index] = 1.0
        return cls(arr)

    @property
    def data(self) -> np.ndarray:
        return self._data

    def __len__(self) -> int:
        return int(self._data.shape[0])

    def __getitem__(self, index: int) -> float:
        return float(self._data[index])

    def __iter__(self) -> Iterator[float]:
        return iter(self._data.tolist())

    def __repr__(self) -> str:
        return f"Vector({self._data.tolist()!r})"

    def tolist(self) -> list[float]:
        return self._data.tolist()

    def sum(self) -> float:
        return float(self._data.sum())

    def scale(self, factor: float) -> "Vector":
        return Vector(self._data * factor)

    def add(self, other: "Vector") -> "Vector":
        if len(self) != len(other):
            raise ContractViolation(f"cannot add vectors of length {len(self)} and {len(other)}")
        return Vector(self._data + other.data)

    def l1_distance(self, other: "Vector") -> float:
        if len(self) != len(other):
            raise ContractViolation(f"cannot compare vectors of length {len(self)} and {len(other)}")
        return float(np.abs(self._data - other.data).sum())


class Matrix:
    """2-D float64 matrix; row i is indexed first."""

    __slots__ = ("_data",)

    def __init__(self, data: Sequence[Sequence[float]] | np.ndarray) -> None:
        arr = np.array(data, dtype=np.float64)
        if arr.ndim != 2:
            raise ContractViolation(f"Matrix expects 2-D data, got shape {arr.shape}")
        self._data = _frozen(arr)

    @classmethod
    def zeros(cls, rows: int, cols: int) -> "Matrix":
        return cls(np.zeros((rows, cols), dtype=np.float64))

    @property
    def data(self) -> np.ndarray:
        return self._data

    @property
    def shape(self) -> tuple[int, int]:
        return int(self._data.shape[0]), int(self._data.shape[1])

    @property
    def rows(self) -> int:
        return self.shape[0]

    @property
    def cols(self) -> int:
        return self.shape[1]

    @property
    def is_square(self) -> bool:
        return self.rows == self.cols

    def __getitem__(self, index: tuple[int, int]) -> float:
        return float(self._data[index])

    def __repr__(self) -> str:
        return f"Matrix({self._data.tolist()!r})"

    def row(self, i: int) -> Vector:
        return Vector(self._data[i])

    def row_sums(self) -> Vector:
        return Vector(self._data.sum(axis=1))

    def diagonal(self) -> Vector:
        return Vector(np.diagonal(self._data))

    def tolist(self) -> list[list[float]]:
        return self._data.tolist()

    def transpose(self) -> "Matrix":
        return Matrix(self._data.T.copy())

    def mul_vec(self, vector: Vector) -> Vector:
        """Matrix-vector product; vector length must equal the column count."""
        if self.cols != len(vector):
            raise ContractViolation(
                f"cannot multiply {self.rows}x{self.cols} matrix by vector of length {len(vector)}"
            )
        return Vector(self._data @ vector.data)
