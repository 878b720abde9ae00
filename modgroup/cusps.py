"""Cusps of subgroups of the modular group: points of the projective line Q ∪ {∞}

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
"""

from __future__ import annotations

import fractions

import sympy

from modgroup import math
from modgroup.math import Matrix, MatrixLike

INFINITY_NAMES = ("oo", "inf", "infinity", "∞")


class Cusp:
    """A point of the projective line P^1(Q) = Q ∪ {∞}, at which a modular subgroup may have a cusp.

    A Cusp is either finite, in which case it is a fraction numerator/denominator in lowest terms
    with a positive denominator, or it is the point at infinity, in which case its denominator is
    zero.

    Two Cusps compare equal if they are literally the same point of P^1(Q).  Whether two cusps are
    equivalent with respect to a subgroup G of SL(2,Z) is a different question, answered by
    G.cusps_equivalent.
    """

    _numerator: int
    _denominator: int

    def __init__(self, numerator: int, denominator: int = 1) -> None:
        if denominator == 0:
            if numerator == 0:
                raise ValueError("The cusp 0/0 is undefined")
            self._numerator, self._denominator = 1, 0
        else:
            value = sympy.Rational(numerator, denominator)
            self._numerator, self._denominator = int(value.p), int(value.q)

    @staticmethod
    def infinity() -> Cusp:
        """The cusp at infinity."""
        return Cusp(1, 0)

    @staticmethod
    def build(value: CuspLike) -> Cusp:
        """Build a Cusp from a rational number or a representation of infinity."""
        if isinstance(value, Cusp):
            return value
        if isinstance(value, str) and value.strip().lower() in INFINITY_NAMES:
            return Cusp.infinity()
        if isinstance(value, sympy.Basic) and value in (sympy.oo, -sympy.oo, sympy.zoo):
            return Cusp.infinity()
        if isinstance(value, float) or (isinstance(value, sympy.Basic) and not value.is_Rational):
            raise ValueError(f"Cusps must be rational numbers or infinity (provided: {value})")
        if isinstance(value, fractions.Fraction):
            return Cusp(value.numerator, value.denominator)
        try:
            rational = sympy.Rational(value)
        except (TypeError, ValueError) as error:
            raise ValueError(f"Cannot interpret {value!r} as a cusp") from error
        return Cusp(int(rational.p), int(rational.q))

    @staticmethod
    def from_matrix(matrix: MatrixLike) -> Cusp:
        """The image g(∞) = aa/cc of the cusp ∞ under a matrix g = [[aa, bb], [cc, dd]]."""
        (aa, _), (cc, _) = math.as_sl2z(matrix).tolist()
        return Cusp(aa, cc)

    @property
    def is_infinity(self) -> bool:
        """Is this the cusp at infinity?"""
        return self._denominator == 0

    @property
    def numerator(self) -> int:
        """Numerator of this cusp (1 for the cusp at infinity)."""
        return self._numerator

    @property
    def denominator(self) -> int:
        """Denominator of this cusp (0 for the cusp at infinity)."""
        return self._denominator

    @property
    def value(self) -> sympy.Rational | sympy.core.numbers.Infinity:
        """The value of this cusp as a SymPy number."""
        if self.is_infinity:
            return sympy.oo
        return sympy.Rational(self._numerator, self._denominator)

    def conjugator(self) -> Matrix:
        """A matrix g in SL(2,Z) that maps ∞ to this cusp, so that g(∞) = self.

        The conjugator of ∞ is the identity matrix.
        """
        if self.is_infinity:
            return math.IDENTITY.copy()
        return math.get_conjugator(self._numerator, self._denominator)

    def act(self, matrix: MatrixLike) -> Cusp:
        """Image of this cusp under the Möbius transformation z -> (aa z + bb) / (cc z + dd)."""
        (aa, bb), (cc, dd) = math.as_sl2z(matrix).tolist()
        numerator = aa * self._numerator + bb * self._denominator
        denominator = cc * self._numerator + dd * self._denominator
        return Cusp(numerator, denominator)

    def __eq__(self, other: object) -> bool:
        return (
            isinstance(other, Cusp)
            and self._numerator == other._numerator
            and self._denominator == other._denominator
        )

    def __hash__(self) -> int:
        return hash((self._numerator, self._denominator))

    def __repr__(self) -> str:
        if self.is_infinity:
            return "Cusp.infinity()"
        return f"Cusp({self._numerator}, {self._denominator})"

    def __str__(self) -> str:
        if self.is_infinity:
            return "Infinity"
        if self._denominator == 1:
            return str(self._numerator)
        return f"{self._numerator}/{self._denominator}"


CuspLike = Cusp | int | fractions.Fraction | sympy.Rational | sympy.core.numbers.Infinity | str
