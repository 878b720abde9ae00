"""Words in the generators S and T of the modular group SL(2,Z)

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

The modular group SL(2,Z) is finitely presented as ⟨S, T | S^4, (S^3 T)^3, S^2 T S^-2 T^-1⟩, where
S = [[0, -1], [1, 0]] and T = [[1, 1], [0, 1]].  Words in S and T are represented by members of a
SymPy free group, and the presentation itself is a module-level constant.  Matrices with large
entries need large powers of T, so membership tests work with syllables (letter, exponent) instead.
"""

from __future__ import annotations

import functools
import operator
from collections.abc import Sequence

import sympy.combinatorics as comb
from sympy.combinatorics.fp_groups import FpGroup
from sympy.combinatorics.free_groups import FreeGroupElement, free_group

from modgroup import math
from modgroup.math import Matrix, MatrixLike

FREE_GROUP, S, T = free_group("S, T")
RELATORS = (S**4, (S**3 * T) ** 3, S**2 * T * S**-2 * T**-1)
PRESENTATION = FpGroup(FREE_GROUP, list(RELATORS))

Word = FreeGroupElement

_MATRIX_POWERS = {"S": math.s_power, "T": math.t_power}

# SymPy stores a free-group word letter by letter, so larger exponents do not fit in a Word
MAX_WORD_EXPONENT = 2**20

Syllable = tuple[str, int]


def get_syllables(matrix: MatrixLike) -> list[Syllable]:
    """Decompose a member of SL(2,Z) into syllables (letter, exponent) of a word in S and T.

    The decomposition runs the Euclidean algorithm on the bottom row (cc, dd) of the matrix M.
    While cc != 0, write M = M' S^-1 T^k with k = dd / cc (rounded toward zero), so that
    M' = M T^-k S has bottom row (dd - k * cc, -cc).  Once cc = 0, the matrix M = ±T^bb is a
    signed power of T.

    Exponents are plain Python integers, so entries of any size are supported.
    """
    (aa, bb), (cc, dd) = math.as_sl2z(matrix).tolist()
    syllables: list[Syllable] = []
    while cc != 0:
        quotient = math.truncated_quotient(dd, cc)
        syllables = [("S", -1), ("T", quotient)] + syllables
        aa, bb, cc, dd = bb - quotient * aa, -aa, dd - quotient * cc, -cc

    # the determinant is 1, so aa = dd = ±1
    prefix = [("T", bb)] if aa == 1 else [("S", 2), ("T", -bb)]

    # merge neighboring powers of the same letter, as in a reduced word
    reduced: list[Syllable] = []
    for letter, exponent in prefix + syllables:
        if reduced and reduced[-1][0] == letter:
            exponent += reduced.pop()[1]
        if exponent != 0:
            reduced.append((letter, exponent))
    return reduced


def st_decomposition(matrix: MatrixLike) -> Word:
    """Decompose a member of SL(2,Z) into a word in the generators S and T.

    Raises a ValueError if the word needs a power of S or T larger than MAX_WORD_EXPONENT, in
    which case get_syllables should be used instead.
    """
    syllables = get_syllables(matrix)
    if any(abs(exponent) > MAX_WORD_EXPONENT for _, exponent in syllables):
        raise ValueError(
            f"Matrix {math.to_tuple(math.as_sl2z(matrix))} has a word with exponents too large"
            " for a free group word (try get_syllables instead)"
        )
    return syllables_to_word(syllables)


def word_to_syllables(word: Word) -> list[Syllable]:
    """Split a word in S and T into its syllables (letter, exponent)."""
    return [(str(symbol), exponent) for symbol, exponent in word.array_form]


def syllables_to_word(syllables: Sequence[Syllable]) -> Word:
    """Collect syllables (letter, exponent) into a word in S and T."""
    letters = {"S": S, "T": T}
    return functools.reduce(
        operator.mul,
        [letters[letter] ** exponent for letter, exponent in syllables],
        FREE_GROUP.identity,
    )


def syllables_to_matrix(syllables: Sequence[Syllable]) -> Matrix:
    """Evaluate syllables (letter, exponent) of a word in S and T as a member of SL(2,Z)."""
    return functools.reduce(
        operator.matmul,
        [_MATRIX_POWERS[letter](exponent) for letter, exponent in syllables],
        math.IDENTITY,
    )


def syllables_to_permutation(
    syllables: Sequence[Syllable], s: comb.Permutation, t: comb.Permutation
) -> comb.Permutation:
    """Evaluate syllables (letter, exponent) as a permutation, given the images s and t of S and T.

    Permutations act on the right, so the word S T maps to the permutation s * t, which first
    applies s and then applies t.  Powers of permutations take logarithmic time in the exponent.
    """
    actions = {"S": s, "T": t}
    return functools.reduce(
        operator.mul,
        [actions[letter] ** exponent for letter, exponent in syllables],
        comb.Permutation(list(range(s.size))),
    )


def word_to_matrix(word: Word) -> Matrix:
    """Evaluate a word in S and T as a member of SL(2,Z)."""
    return syllables_to_matrix(word_to_syllables(word))


def word_to_permutation(word: Word, s: comb.Permutation, t: comb.Permutation) -> comb.Permutation:
    """Evaluate a word in S and T as a permutation, given the images s and t of S and T."""
    return syllables_to_permutation(word_to_syllables(word), s, t)


def to_word(element: Word | MatrixLike) -> Word:
    """Convert a word or a member of SL(2,Z) into a word."""
    if isinstance(element, FreeGroupElement):
        return element
    return st_decomposition(element)


def to_syllables(element: Word | MatrixLike) -> list[Syllable]:
    """Convert a word or a member of SL(2,Z) into syllables (letter, exponent)."""
    if isinstance(element, FreeGroupElement):
        return word_to_syllables(element)
    return get_syllables(element)
