"""Exact integer arithmetic for elements of the modular group SL(2,Z)

Copyright 2024 The modgroup Authors

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

    http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.

Matrices in SL(2,Z) are represented by 2×2 numpy arrays with dtype=object, whose entries are python
integers.  Object arrays keep arithmetic exact (python integers have arbitrary precision), while
still supporting matrix multiplication with the @ operator.
"""

from __future__ import annotations

import numbers
from collections.abc import Sequence

import numpy as np
import numpy.typing as npt
import sympy
from sympy.ntheory.modular import crt

Matrix = npt.NDArray[np.object_]
MatrixLike = npt.NDArray[np.int_] | npt.NDArray[np.object_] | Sequence[Sequence[int]]


def build_matrix(aa: int, bb: int, cc: int, dd: int) -> Matrix:
    """Build the (exact) 2×2 integer matrix [[aa, bb], [cc, dd]]."""
    return np.array([[aa, bb], [cc, dd]], dtype=object)


IDENTITY = build_matrix(1, 0, 0, 1)
MINUS_IDENTITY = build_matrix(-1, 0, 0, -1)
S_MATRIX = build_matrix(0, -1, 1, 0)
T_MATRIX = build_matrix(1, 1, 0, 1)


def determinant(matrix: Matrix) -> int:
    """Determinant of a 2×2 matrix."""
    return matrix[0, 0] * matrix[1, 1] - matrix[0, 1] * matrix[1, 0]


def as_sl2z(matrix: MatrixLike) -> Matrix:
    """Convert a matrix into an exact member of SL(2,Z), or raise a ValueError if we cannot."""
    array = np.array(matrix, dtype=object)
    if array.shape != (2, 2):
        raise ValueError(f"Members of SL(2,Z) must be 2×2 matrices (provided shape: {array.shape})")
    if not all(isinstance(entry, numbers.Integral) for entry in array.ravel()):
        raise ValueError(f"Members of SL(2,Z) must have integer entries:\n{array}")
    array = build_matrix(*map(int, array.ravel()))
    if (det := determinant(array)) != 1:
        raise ValueError(f"Matrix is not in SL(2,Z) (its determinant is {det}):\n{array}")
    return array


def to_tuple(matrix: Matrix) -> tuple[int, int, int, int]:
    """Flatten a 2×2 matrix into a hashable tuple (aa, bb, cc, dd)."""
    aa, bb, cc, dd = (int(entry) for entry in np.asarray(matrix).ravel())
    return aa, bb, cc, dd


def inverse(matrix: Matrix) -> Matrix:
    """Inverse of a member of SL(2,Z)."""
    (aa, bb), (cc, dd) = matrix.tolist()
    return build_matrix(dd, -bb, -cc, aa)


def s_power(exponent: int) -> Matrix:
    """The matrix S^exponent, where S = [[0, -1], [1, 0]] has order 4."""
    return [IDENTITY, S_MATRIX, MINUS_IDENTITY, -S_MATRIX][exponent % 4].copy()


def t_power(exponent: int) -> Matrix:
    """The matrix T^exponent = [[1, exponent], [0, 1]]."""
    return build_matrix(1, exponent, 0, 1)


def truncated_quotient(dividend: int, divisor: int) -> int:
    """Integer quotient dividend / divisor, rounded toward zero (rather than toward -infinity)."""
    quotient = abs(dividend) // abs(divisor)
    return -quotient if (dividend < 0) != (divisor < 0) else quotient


def get_conjugator(numerator: int, denominator: int) -> Matrix:
    """Find a matrix g in SL(2,Z) that maps the cusp ∞ to numerator / denominator.

    The numerator and denominator must be coprime.  Their Bézout coefficients (xx, yy), which
    satisfy xx * numerator + yy * denominator = 1, complete the first column (numerator,
    denominator) of g.
    """
    xx, yy, gcd = sympy.gcdex(numerator, denominator)
    if int(gcd) != 1:
        raise ValueError(f"Cannot build a conjugator for {numerator}/{denominator}: not coprime")
    return build_matrix(numerator, -int(yy), denominator, int(xx))


def mod_inverse(value: int, modulus: int) -> int:
    """Inverse of a value modulo a given modulus, or raise a ValueError if there is none."""
    return int(sympy.mod_inverse(value, modulus))


def get_crt_idempotents(modulus_a: int, modulus_b: int) -> tuple[int, int]:
    """Chinese-remainder idempotents of Z/(modulus_a * modulus_b), for coprime moduli.

    Returns (cc, dd), where
    - cc = 0 mod modulus_a and cc = 1 mod modulus_b, and
    - dd = 1 mod modulus_a and dd = 0 mod modulus_b.
    """
    solution_c = crt([modulus_a, modulus_b], [0, 1])
    solution_d = crt([modulus_a, modulus_b], [1, 0])
    if solution_c is None or solution_d is None:
        raise ValueError(f"Moduli {modulus_a} and {modulus_b} are not coprime")
    return int(solution_c[0]), int(solution_d[0])
