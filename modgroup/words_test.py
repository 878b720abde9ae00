"""Unit tests for words.py

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

import numpy as np
import numpy.typing as npt
import pytest
import sympy.combinatorics as comb

from modgroup import math, words
from modgroup.words import FREE_GROUP, S, T


def test_presentation() -> None:
    """The defining relations of SL(2,Z) hold for the matrices S and T."""
    for relator in words.RELATORS:
        assert np.array_equal(words.word_to_matrix(relator), math.IDENTITY)
    assert list(words.PRESENTATION.generators) == [S, T]


def test_word_to_matrix() -> None:
    """Evaluate words as matrices."""
    assert np.array_equal(words.word_to_matrix(FREE_GROUP.identity), math.IDENTITY)
    assert np.array_equal(words.word_to_matrix(S), math.S_MATRIX)
    assert np.array_equal(words.word_to_matrix(T**-3), math.t_power(-3))
    assert np.array_equal(words.word_to_matrix(S * T), math.S_MATRIX @ math.T_MATRIX)
    assert np.array_equal(words.word_to_matrix(S**2), math.MINUS_IDENTITY)


def test_st_decomposition() -> None:
    """Decompose matrices into words in S and T."""
    assert words.st_decomposition(math.T_MATRIX) == T
    assert words.st_decomposition(math.S_MATRIX) == S
    assert words.st_decomposition(math.IDENTITY) == FREE_GROUP.identity
    assert words.st_decomposition(math.MINUS_IDENTITY) == S**2
    assert words.st_decomposition([[1, 0], [2, 1]]) == S * T**-2 * S**-1

    # quotients are rounded toward zero
    assert words.st_decomposition([[-1, 0], [3, -1]]) == S**-1 * T**3 * S**-1

    assert words.to_word(T) == T
    assert words.to_word([[1, 5], [0, 1]]) == T**5


@pytest.mark.parametrize(
    "matrix",
    [
        [[2, 1], [1, 1]],
        [[-1, 0], [0, -1]],
        [[1, -7], [0, 1]],
        [[-1, 4], [0, -1]],
        [[5, 2], [12, 5]],
        [[13, -8], [-21, 13]],
        [[0, 1], [-1, -9]],
        [[-34, 55], [55, -89]],
        [[2**40 + 1, 2**40], [1, 1]],
        [[1, 0], [2**60, 1]],
    ],
)
def test_decomposition_round_trip(matrix: list[list[int]]) -> None:
    """Evaluating the syllables of a matrix reproduces the matrix exactly."""
    syllables = words.get_syllables(matrix)
    assert np.array_equal(words.syllables_to_matrix(syllables), np.array(matrix, dtype=object))
    if all(abs(exponent) <= words.MAX_WORD_EXPONENT for _, exponent in syllables):
        word = words.st_decomposition(matrix)
        assert words.word_to_syllables(word) == syllables
        assert np.array_equal(words.word_to_matrix(word), np.array(matrix, dtype=object))


def test_syllables() -> None:
    """Syllables carry arbitrarily large exponents that free group words cannot hold."""
    assert words.get_syllables(math.IDENTITY) == []
    assert words.get_syllables(math.MINUS_IDENTITY) == [("S", 2)]
    assert words.get_syllables([[1, 0], [2, 1]]) == [("S", 1), ("T", -2), ("S", -1)]
    assert words.get_syllables([[1, 2**40], [0, 1]]) == [("T", 2**40)]
    assert words.get_syllables([[1, 0], [2**40, 1]]) == [("S", 1), ("T", -(2**40)), ("S", -1)]
    assert words.to_syllables(S * T**-3) == [("S", 1), ("T", -3)]
    assert words.to_syllables([[-1, -7], [0, -1]]) == [("S", 2), ("T", 7)]
    assert words.syllables_to_word([("S", 1), ("T", 2), ("T", -2), ("S", 1)]) == S**2

    exponent = words.MAX_WORD_EXPONENT
    assert words.st_decomposition([[1, exponent], [0, 1]]) == T**exponent
    with pytest.raises(ValueError, match="too large"):
        words.st_decomposition([[1, 2**40], [0, 1]])
    with pytest.raises(ValueError, match="too large"):
        words.to_word([[2**40 + 1, 2**40], [1, 1]])


def test_random_round_trip() -> None:
    """Round trips for products of random powers of S and T."""
    rng = np.random.default_rng(0)
    for _ in range(20):
        matrix: npt.NDArray[np.object_] = math.IDENTITY
        for s_exp, t_exp in rng.integers(-6, 7, size=(5, 2)):
            matrix = matrix @ math.s_power(int(s_exp)) @ math.t_power(int(t_exp))
        word = words.st_decomposition(matrix)
        assert np.array_equal(words.word_to_matrix(word), matrix)


def test_invalid_matrices() -> None:
    """Only members of SL(2,Z) can be decomposed."""
    with pytest.raises(ValueError, match="not in SL"):
        words.st_decomposition([[2, 0], [0, 2]])
    with pytest.raises(ValueError, match="integer entries"):
        words.st_decomposition([[1, 0.5], [0, 1]])
    with pytest.raises(ValueError, match="2×2"):
        words.st_decomposition([[1, 0, 0], [0, 1, 0], [0, 0, 1]])


def test_word_to_permutation() -> None:
    """Words act on cosets by composing permutations from left to right."""
    s = comb.Permutation([1, 0, 3, 2])
    t = comb.Permutation([0, 2, 3, 1])
    assert words.word_to_permutation(FREE_GROUP.identity, s, t).is_Identity
    assert words.word_to_permutation(S * T, s, t) == s * t
    assert words.word_to_permutation(S * T, s, t).array_form[0] == t.array_form[s.array_form[0]]
    assert words.word_to_permutation(T**-2 * S, s, t) == t**-2 * s
    for relator in words.RELATORS:
        assert words.word_to_permutation(relator, s, t).is_Identity

    assert words.syllables_to_permutation([("T", 2**40)], s, t) == t
    assert words.syllables_to_permutation([("S", -(2**40) - 1), ("T", 3)], s, t) == s
