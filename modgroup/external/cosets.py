"""Coset enumeration and coset representatives for subgroups of SL(2,Z), backed by SymPy

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

This module bridges the permutation representation of modular subgroups and the general-purpose
machinery of sympy.combinatorics:
- coset enumeration (Todd-Coxeter) builds the coset action of S and T from subgroup generators,
- Schreier vectors of permutation groups provide one representative word for every coset, and
- Schreier's lemma turns a coset table and its representatives into subgroup generators.
"""

from __future__ import annotations

from collections.abc import Sequence

import sympy.combinatorics as comb

import modgroup.cache
from modgroup.words import FREE_GROUP, PRESENTATION, S, T, Word

CACHE_NAME = "modgroup_coset_actions"
DEFAULT_MAX_COSETS = 2**20

CosetTable = list[list[int]]


class CosetEnumerationError(RuntimeError):
    """Coset enumeration defined more cosets than allowed.

    This failure is expected if the enumerated subgroup has infinite index, but it may also indicate
    that a subgroup of large (finite) index requires a larger bound on the number of cosets.
    """

    def __init__(self, max_cosets: int) -> None:
        self.max_cosets = max_cosets
        super().__init__(
            f"Coset enumeration exceeded the maximum of {max_cosets} cosets.  The subgroup may have"
            " infinite index; if not, retry with a larger value of max_cosets."
        )


def _get_words_key(words: Sequence[Word], *_: object, **__: object) -> tuple[str, ...]:
    """Hashable cache key for a list of words."""
    return tuple(str(word) for word in words)


@modgroup.cache.use_disk_cache(CACHE_NAME, key_func=_get_words_key)
def get_coset_action(
    words: Sequence[Word], max_cosets: int | None = None
) -> tuple[list[int], list[int]]:
    """Enumerate the right cosets of the subgroup of SL(2,Z) generated by the given words.

    Returns the array forms of the permutations by which S and T act on cosets, with coset 0 being
    the subgroup itself.

    WARNING: coset enumeration terminates only if the subgroup has finite index.  Enumeration is
    therefore aborted, raising a CosetEnumerationError, after defining more than max_cosets cosets.
    """
    max_cosets = max_cosets or DEFAULT_MAX_COSETS
    try:
        table = PRESENTATION.coset_enumeration(list(words), max_cosets=max_cosets)
    except ValueError as error:
        if "coset enumeration has defined more than" in str(error):
            raise CosetEnumerationError(max_cosets) from error
        raise

    table.compress()
    table.standardize()
    col_s, col_t = table.A_dict[S], table.A_dict[T]
    return [row[col_s] for row in table.table], [row[col_t] for row in table.table]


def get_coset_table(s: comb.Permutation, t: comb.Permutation) -> CosetTable:
    """Coset table with rows for the action of s, s^-1, t, and t^-1 (in that order)."""
    return [list(s.array_form), list((~s).array_form), list(t.array_form), list((~t).array_form)]


def get_coset_representatives(s: comb.Permutation, t: comb.Permutation) -> list[Word]:
    """Words in S and T that represent the right cosets acted upon by the permutations s and t.

    The word for coset number k maps coset 0 (the subgroup itself) to coset k, and coset 0 is
    represented by the empty word.  Words are read off from a Schreier vector, which records the
    generator that first reached each coset in a breadth-first search from coset 0.
    """
    group = comb.PermutationGroup(s, t)
    generators = group.generators
    letters = [S if generator == s else T for generator in generators]
    inverse_forms = [(~generator).array_form for generator in generators]
    schreier_vector = group.schreier_vector(0)
    if None in schreier_vector:
        raise ValueError("Cannot find coset representatives: s and t do not act transitively")

    representatives = []
    for coset in range(group.degree):
        word = FREE_GROUP.identity
        while (gen_index := schreier_vector[coset]) != -1:
            word = letters[gen_index] * word
            coset = inverse_forms[gen_index][coset]
        representatives.append(word)
    return representatives


def get_schreier_generators(table: CosetTable) -> list[Word]:
    """Generators of a subgroup of SL(2,Z), given a coset table for the subgroup.

    The coset table must have four rows, respectively describing the action of S, S^-1, T, and T^-1
    on cosets.  If w(k) is the representative of coset k, then by Schreier's lemma the subgroup is
    generated by the words w(k) X w(k^X)^-1, where X is S or T and k^X is the image of coset k under
    X.  Trivial and repeated words are dropped, but the remaining generators may still be redundant.
    """
    if len(table) != 4 or len({len(row) for row in table}) != 1:
        raise ValueError("A coset table must have four rows of equal length (for S, S^-1, T, T^-1)")
    s, t = comb.Permutation(table[0]), comb.Permutation(table[2])
    if table[1] != list((~s).array_form) or table[3] != list((~t).array_form):
        raise ValueError("Rows of the coset table are inconsistent with the actions of S and T")

    representatives = get_coset_representatives(s, t)
    generators: list[Word] = []
    for coset, representative in enumerate(representatives):
        for letter, action in [(S, s), (T, t)]:
            image = action.array_form[coset]
            word = representative * letter * representatives[image] ** -1
            if not word.is_identity and word not in generators:
                generators.append(word)
    return generators
