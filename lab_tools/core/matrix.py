"""
Small integer matrix arithmetic.

Matrices are immutable and bounded to ``max_dimension`` on each axis.
Every operation returns a new Matrix and never mutates its inputs.
"""

import logging
from dataclasses import dataclass
from typing import List, Sequence, Tuple

logger = logging.getLogger(__name__)

MAX_DIMENSION = 10


class MatrixShapeError(ValueError):
    """Raised when a matrix cannot be built from the given values."""


class DimensionMismatchError(ValueError):
    """Raised when two matrices have incompatible shapes for an operation."""

    def __init__(self, operation: str, left: Tuple[int, int], right: Tuple[int, int]):
        super().__init__(
            f"Cannot {operation} a {left[0]}x{left[1]} matrix "
            f"with a {right[0]}x{right[1]} matrix"
        )
        self.operation = operation
        self.left = left
        self.right = right


@dataclass(frozen=True)
class Matrix:
    """A rectangular grid of integers."""
    values: Tuple[Tuple[int, ...], ...]

    def __post_init__(self):
        """Validate the grid is non-empty and rectangular."""
        if not self.values or not self.values[0]:
            raise MatrixShapeError("Matrix must have at least one row and one column")
        width = len(self.values[0])
        for i, row in enumerate(self.values):
            if len(row) != width:
                raise MatrixShapeError(
                    f"Row {i} has {len(row)} columns, expected {width}"
                )
            for j, value in enumerate(row):
                if isinstance(value, bool) or not isinstance(value, int):
                    raise MatrixShapeError(f"Element [{i}][{j}] is not an integer: {value!r}")

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]], max_dimension: int = MAX_DIMENSION) -> "Matrix":
        """Build a matrix from nested sequences, enforcing the size limit.

        Raises:
            MatrixShapeError: If the rows are empty, ragged, non-integer,
                or exceed max_dimension on either axis
        """
        matrix = cls(tuple(tuple(row) for row in rows))
        if matrix.rows > max_dimension or matrix.cols > max_dimension:
            raise MatrixShapeError(
                f"Matrix is {matrix.rows}x{matrix.cols}; "
                f"each dimension must be between 1 and {max_dimension}"
            )
        return matrix

    @property
    def rows(self) -> int:
        return len(self.values)

    @property
    def cols(self) -> int:
        return len(self.values[0])

    @property
    def shape(self) -> Tuple[int, int]:
        return (self.rows, self.cols)

    def to_lists(self) -> List[List[int]]:
        return [list(row) for row in self.values]

    def __getitem__(self, index: Tuple[int, int]) -> int:
        i, j = index
        return self.values[i][j]


def add(a: Matrix, b: Matrix) -> Matrix:
    """Element-wise sum of two matrices of identical shape.

    Raises:
        DimensionMismatchError: If the shapes differ
    """
    if a.shape != b.shape:
        logger.warning("Rejected addition of %s and %s", a.shape, b.shape)
        raise DimensionMismatchError("add", a.shape, b.shape)

    return Matrix(tuple(
        tuple(a[i, j] + b[i, j] for j in range(a.cols))
        for i in range(a.rows)
    ))


def multiply(a: Matrix, b: Matrix) -> Matrix:
    """Standard matrix product.

    Raises:
        DimensionMismatchError: If the columns of a differ from the rows of b
    """
    if a.cols != b.rows:
        logger.warning("Rejected multiplication of %s by %s", a.shape, b.shape)
        raise DimensionMismatchError("multiply", a.shape, b.shape)

    result = [[0] * b.cols for _ in range(a.rows)]
    for i in range(a.rows):
        for j in range(b.cols):
            for k in range(a.cols):
                result[i][j] += a[i, k] * b[k, j]

    return Matrix(tuple(tuple(row) for row in result))


def transpose(a: Matrix) -> Matrix:
    """Return the matrix with rows and columns swapped."""
    return Matrix(tuple(
        tuple(a[i, j] for i in range(a.rows))
        for j in range(a.cols)
    ))
