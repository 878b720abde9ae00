"""Unit tests for cusps.py

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

import numpy as np
import pytest
import sympy

from modgroup import math
from modgroup.cusps import Cusp


def test_construction() -> None:
    """Cusps are reduced fractions or infinity."""
    cusp = Cusp(4, -6)
    assert (cusp.numerator, cusp.denominator) == (-2, 3)
    assert not cusp.is_infinity
    assert cusp.value == sympy.Rational(-2, 3)
    assert str(cusp) == "-2/3"
    assert repr(cusp) == "Cusp(-2, 3)"
    assert str(Cusp(5)) == "5"

    infinity = Cusp.infinity()
    assert infinity.is_infinity
    assert infinity == Cusp(-7, 0)
    assert infinity.value == sympy.oo
    assert str(infinity) == "Infinity"
    assert repr(infinity) == "Cusp.infinity()"

    with pytest.raises(ValueError, match="undefined"):
        Cusp(0, 0)


def test_build() -> None:
    """Build cusps from numbers and names."""
    assert Cusp.build(3) == Cusp(3, 1)
    assert Cusp.build(fractions.Fraction(2, 4)) == Cusp(1, 2)
    assert Cusp.build(sympy.Rational(-1, 3)) == Cusp(-1, 3)
    assert Cusp.build("1/5") == Cusp(1, 5)
    assert Cusp.build(sympy.oo) == Cusp.infinity()
    assert Cusp.build("oo") == Cusp.build("Infinity") == Cusp.infinity()

    cusp = Cusp(1, 2)
    assert Cusp.build(cusp) is cusp

    with pytest.raises(ValueError, match="rational"):
        Cusp.build(0.5)
    with pytest.raises(ValueError, match="rational"):
        Cusp.build(sympy.sqrt(2))
    with pytest.raises(ValueError, match="Cannot interpret"):
        Cusp.build("not a number")


def test_equality() -> None:
    """Raw equality compares points of the projective line."""
    assert Cusp(1, 2) == Cusp(2, 4)
    assert Cusp(1, 2) != Cusp(1, 3)
    assert Cusp(1, 2) != Cusp.infinity()
    assert Cusp(1, 2) != fractions.Fraction(1, 2)
    assert len({Cusp(1, 2), Cusp(-2, -4), Cusp.infinity(), Cusp(1, 0)}) == 2


def test_matrix_action() -> None:
    """Möbius transformations of cusps."""
    assert Cusp.infinity().act(math.S_MATRIX) == Cusp(0)
    assert Cusp(0).act(math.S_MATRIX) == Cusp.infinity()
    assert Cusp(1, 2).act(math.T_MATRIX) == Cusp(3, 2)
    assert Cusp(-1).act([[1, 0], [1, 1]]) == Cusp.infinity()
    assert Cusp.from_matrix([[2, 1], [3, 2]]) == Cusp(2, 3)
    assert Cusp.from_matrix(math.T_MATRIX) == Cusp.infinity()

    with pytest.raises(ValueError, match="not in SL"):
        Cusp(1).act([[1, 1], [1, 1]])


@pytest.mark.parametrize("cusp", [Cusp.infinity(), Cusp(0), Cusp(1, 3), Cusp(-5, 7), Cusp(9, 4)])
def test_conjugator(cusp: Cusp) -> None:
    """Conjugators map the cusp at infinity to a given cusp."""
    conjugator = cusp.conjugator()
    assert math.determinant(conjugator) == 1
    assert Cusp.infinity().act(conjugator) == cusp
    assert Cusp.from_matrix(conjugator) == cusp
    if cusp.is_infinity:
        assert np.array_equal(conjugator, math.IDENTITY)
