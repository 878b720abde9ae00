"""Finite-index subgroups of the modular group SL(2,Z)

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

A subgroup G of SL(2,Z) with finite index n is represented by the permutations s and t by which the
generators S = [[0, -1], [1, 0]] and T = [[1, 1], [0, 1]] act (from the right) on the n right cosets
of G.  Cosets are labeled 0, 1, ..., n - 1, and coset 0 is G itself, so a matrix A is a member of G
if and only if the permutation that A induces on cosets fixes coset 0.

Conversely, a pair of permutations (s, t) defines a finite-index subgroup of SL(2,Z) if and only if
(a) s and t satisfy the defining relations of SL(2,Z), namely s^4 = (s^3 t)^3 = s^2 t s^-2 t^-1 = 1,
and (b) the group generated by s and t acts transitively on {0, 1, ..., n - 1}.

Everything else about the subgroup (cusps, cusp widths, level, congruence, genus, and generators) is
computed from (s, t), and computed at most once per subgroup.

References:
- https://en.wikipedia.org/wiki/Modular_group
- Kiming, Schütt, Verrill, https://arxiv.org/abs/0905.4798 (congruence subgroups and permutations)
- Hsu, https://doi.org/10.1090/S0002-9939-96-03496-X (identifying congruence subgroups)
"""

from __future__ import annotations

import functools
import math
import warnings
from collections.abc import Sequence

import sympy
import sympy.combinatorics as comb

from modgroup import external
from modgroup.cusps import Cusp, CuspLike
from modgroup.math import (
    Matrix,
    MatrixLike,
    as_sl2z,
    get_crt_idempotents,
    inverse,
    mod_inverse,
    t_power,
)
from modgroup.words import (
    Word,
    syllables_to_permutation,
    to_syllables,
    to_word,
    word_to_matrix,
)

PermutationLike = comb.Permutation | Sequence[int] | Sequence[Sequence[int]]


class SearchExhaustedError(RuntimeError):
    """A search that is guaranteed to succeed for valid subgroup data came up empty."""


################################################################################
# permutation helpers


def to_permutation(perm: PermutationLike) -> comb.Permutation:
    """Convert an array form, a list of cycles, or a SymPy Permutation into a SymPy Permutation."""
    if isinstance(perm, comb.Permutation):
        return perm
    if _is_cyclic_form(perm):
        return comb.Permutation([list(cycle) for cycle in perm])
    return comb.Permutation(list(perm))


def _is_cyclic_form(perm: Sequence[int] | Sequence[Sequence[int]]) -> bool:
    return len(perm) > 0 and all(isinstance(cycle, Sequence) for cycle in perm)


def _resize(perm: comb.Permutation, size: int) -> comb.Permutation:
    """Restrict or extend a permutation to act on {0, 1, ..., size - 1}.

    Points that are dropped by a restriction must be fixed by the permutation.
    """
    array_form = list(perm.array_form)
    if len(array_form) >= size:
        return comb.Permutation(array_form[:size])
    return comb.Permutation(array_form + list(range(len(array_form), size)))


def get_index(s: PermutationLike, t: PermutationLike) -> int:
    """Index of the subgroup defined by the permutations s and t.

    The index is one more than the largest point moved by s or t (and hence by their inverses), or 1
    if both s and t are trivial.
    """
    moved_points = to_permutation(s).support() + to_permutation(t).support()
    return max(moved_points, default=0) + 1


def get_relation_violation(s: comb.Permutation, t: comb.Permutation) -> str | None:
    """Identify a reason why s and t fail to define a coset action of SL(2,Z), if there is one.

    The permutations s and t must act on the same number of points.
    """
    if s.size != t.size:
        raise ValueError(f"Permutations act on different numbers of points: {s.size} != {t.size}")
    if not (s**4).is_Identity:
        return "s^4 != 1"
    if not ((s**3 * t) ** 3).is_Identity:
        return "(s^3 t)^3 != 1"
    if not (s**2 * t * s**-2 * t**-1).is_Identity:
        return "s^2 t s^-2 t^-1 != 1"
    if not comb.PermutationGroup(s, t).is_transitive():
        return "s and t do not act transitively"
    return None


def defines_coset_action(s: PermutationLike, t: PermutationLike) -> bool:
    """Do the permutations s and t define the action of SL(2,Z) on the cosets of a subgroup?"""
    index = get_index(s, t)
    s, t = _resize(to_permutation(s), index), _resize(to_permutation(t), index)
    return get_relation_violation(s, t) is None


################################################################################
# modular subgroups


class ModularSubgroup:
    """A finite-index subgroup of SL(2,Z), defined by the action of S and T on its right cosets.

    A ModularSubgroup is immutable.  The matrices that generate it may be provided at construction,
    in which case they are kept as the generators of the subgroup; otherwise generators are computed
    (once) when they are first needed.
    """

    _s: comb.Permutation
    _t: comb.Permutation
    _name: str | None
    _generators: tuple[Matrix, ...] | None

    def __init__(
        self,
        s: PermutationLike,
        t: PermutationLike,
        *,
        generators: Sequence[MatrixLike] | None = None,
        name: str | None = None,
    ) -> None:
        index = get_index(s, t)
        self._s = _resize(to_permutation(s), index)
        self._t = _resize(to_permutation(t), index)
        if (violation := get_relation_violation(self._s, self._t)) is not None:
            raise ValueError(f"Permutations do not define a subgroup of SL(2,Z): {violation}")
        self._name = name
        self._generators = None
        if generators is not None:
            self._generators = tuple(as_sl2z(matrix) for matrix in generators)

    @staticmethod
    def from_generators(
        *elements: Word | MatrixLike, max_cosets: int | None = None, name: str | None = None
    ) -> ModularSubgroup:
        """Construct the subgroup of SL(2,Z) that is generated by the given matrices (or words).

        The action of S and T on cosets is found by coset enumeration, which only terminates if the
        generated subgroup has finite index.  If enumeration defines more than max_cosets cosets, it
        is aborted with a CosetEnumerationError.
        """
        generators: list[Matrix] = []
        words: list[Word] = []
        for element in elements:
            word = to_word(element)
            generators.append(word_to_matrix(word))
            if word.is_identity:
                warnings.warn("The identity matrix is a redundant generator of any subgroup")
                continue
            words.append(word)
        s_action, t_action = external.cosets.get_coset_action(words, max_cosets=max_cosets)
        return ModularSubgroup(s_action, t_action, generators=generators, name=name)

    @property
    def s_action(self) -> comb.Permutation:
        """The permutation by which S = [[0, -1], [1, 0]] acts on the cosets of this subgroup."""
        return self._s

    @property
    def t_action(self) -> comb.Permutation:
        """The permutation by which T = [[1, 1], [0, 1]] acts on the cosets of this subgroup."""
        return self._t

    @property
    def name(self) -> str:
        """A name for this subgroup, which is not required to uniquely identify the subgroup."""
        return self._name or f"{type(self).__name__}"

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"ModularSubgroup({self._s.array_form}, {self._t.array_form})"

    @functools.cached_property
    def _canonical_form(self) -> tuple[tuple[int, ...], tuple[int, ...]]:
        """The coset action with cosets relabeled in breadth-first order, starting from coset 0.

        Two subgroups are equal if and only if their canonical forms are equal.
        """
        labels = {0: 0}
        queue = [0]
        for coset in queue:
            for perm in [self._s, self._t]:
                image = perm.array_form[coset]
                if image not in labels:
                    labels[image] = len(labels)
                    queue.append(image)
        s_form = tuple(labels[self._s.array_form[coset]] for coset in queue)
        t_form = tuple(labels[self._t.array_form[coset]] for coset in queue)
        return s_form, t_form

    def __eq__(self, other: object) -> bool:
        return isinstance(other, ModularSubgroup) and self._canonical_form == other._canonical_form

    def __hash__(self) -> int:
        return hash(self._canonical_form)

    @property
    def index(self) -> int:
        """Index of this subgroup in SL(2,Z), or the number of its right cosets."""
        return self._s.size

    @functools.cached_property
    def coset_table(self) -> list[list[int]]:
        """Coset table with rows for the action of S, S^-1, T, and T^-1 on cosets."""
        return external.cosets.get_coset_table(self._s, self._t)

    ############################################################################
    # membership

    def act(self, element: Word | MatrixLike) -> comb.Permutation:
        """The permutation by which a word or matrix acts on the cosets of this subgroup."""
        return syllables_to_permutation(to_syllables(element), self._s, self._t)

    def is_element(self, element: Word | MatrixLike) -> bool:
        """Is the given matrix (or word in S and T) a member of this subgroup?

        A matrix is a member if and only if it maps coset 0 (the subgroup itself) to itself.  The
        identity matrix, whose word is empty, is therefore a member of every subgroup (not only of
        SL(2,Z), where s and t are both trivial).
        """
        return self.act(element).array_form[0] == 0

    def __contains__(self, element: Word | MatrixLike) -> bool:
        return self.is_element(element)

    @functools.cached_property
    def contains_minus_identity(self) -> bool:
        """Is -I = S^2 a member of this subgroup?"""
        return (self._s**2).array_form[0] == 0

    @property
    def is_even(self) -> bool:
        """Is this subgroup even, which is to say that it contains -I?"""
        return self.contains_minus_identity

    ############################################################################
    # generators

    @property
    def generators(self) -> tuple[Matrix, ...]:
        """Matrices that generate this subgroup.

        If this subgroup was not constructed from generators, generators are found using Schreier's
        lemma, which may produce a redundant generating set.
        """
        if self._generators is None:
            self._generators = tuple(self.find_generators())
        return self._generators

    def find_generators(self) -> list[Matrix]:
        """Compute a (possibly redundant) generating set for this subgroup from its coset table."""
        words = external.cosets.get_schreier_generators(self.coset_table)
        return [word_to_matrix(word) for word in words]

    ############################################################################
    # cusps

    @functools.cached_property
    def coset_representatives(self) -> tuple[Matrix, ...]:
        """One matrix g_k in SL(2,Z) for each coset k, such that the coset G g_k is coset k.

        The representative of coset 0 is the identity matrix.
        """
        words = external.cosets.get_coset_representatives(self._s, self._t)
        return tuple(word_to_matrix(word) for word in words)

    @functools.cached_property
    def cusps_redundant(self) -> tuple[Cusp, ...]:
        """The cusps g_k(∞) for all coset representatives g_k, in the order of the cosets.

        Every cusp of this subgroup is equivalent to at least one cusp in this list.
        """
        return tuple(Cusp.from_matrix(matrix) for matrix in self.coset_representatives)

    @functools.cached_property
    def cusps(self) -> tuple[Cusp, ...]:
        """Pairwise inequivalent representatives of all cusps of this subgroup, starting with ∞."""
        cusps: list[Cusp] = []
        for cusp in self.cusps_redundant:
            if not any(self.cusps_equivalent(cusp, known_cusp) for known_cusp in cusps):
                cusps.append(cusp)
        return tuple(cusps)

    def cusp_width(self, cusp: CuspLike) -> int:
        """Width of a cusp c: the least k > 0 for which ±g T^k g^-1 is in this subgroup if g(∞) = c.

        The width of a cusp never exceeds the index of the subgroup.
        """
        cusp = Cusp.build(cusp)
        if cusp not in self._cusp_widths:
            self._cusp_widths[cusp] = self._find_cusp_width(cusp)
        return self._cusp_widths[cusp]

    @functools.cached_property
    def _cusp_widths(self) -> dict[Cusp, int]:
        return {}

    def _find_cusp_width(self, cusp: Cusp) -> int:
        conjugator = cusp.conjugator()
        conjugator_inv = inverse(conjugator)
        for width in range(1, self.index + 2):
            element = conjugator @ t_power(width) @ conjugator_inv
            if self.is_element(element) or self.is_element(-element):
                return width
        raise SearchExhaustedError(
            f"No width found for cusp {cusp} of a subgroup with index {self.index}"
        )

    def cusps_equivalent(self, cusp_a: CuspLike, cusp_b: CuspLike) -> bool:
        """Are two cusps equivalent under the action of this subgroup?

        Cusps a and b are equivalent if some member of this subgroup maps a to b.  If g_a and g_b
        respectively map ∞ to a and b, then all matrices that map a to b have the form
        ±g_b T^k g_a^-1, and it suffices to search over k < index.
        """
        cusp_a, cusp_b = Cusp.build(cusp_a), Cusp.build(cusp_b)
        if cusp_a.is_infinity and cusp_b.is_infinity:
            return True
        if cusp_a.is_infinity:
            cusp_a, cusp_b = cusp_b, cusp_a

        conjugator_a_inv = inverse(cusp_a.conjugator())
        conjugator_b = cusp_b.conjugator()
        signs = [1] if self.contains_minus_identity else [1, -1]
        for power in range(self.index):
            element = conjugator_b @ t_power(power) @ conjugator_a_inv
            if any(self.is_element(sign * element) for sign in signs):
                return True
        return False

    ############################################################################
    # level, congruence, and genus

    @functools.cached_property
    def generalized_level(self) -> int:
        """Least common multiple of the widths of all cusps of this subgroup."""
        return math.lcm(*[self.cusp_width(cusp) for cusp in set(self.cusps_redundant)])

    @functools.cached_property
    def is_congruence(self) -> bool:
        """Is this a congruence subgroup, which contains the kernel of reduction modulo some N?

        Decided by checking relations in the group generated by s and t, following Hsu's version of
        Wohlfahrt's criterion.  Here r = s^2 t s^-1 t is the action of [[1, 0], [1, 1]], and N is
        the generalized level, doubled if -I is not in this subgroup.  Writing N = e m with e a
        power of two and m odd, the relations to check depend on whether m = 1, e = 1, or neither.
        """
        if self.index == 1:
            return True

        ss, tt = self._s, self._t
        rr = ss**2 * tt * ss**-1 * tt
        level = self.generalized_level * (1 if self.contains_minus_identity else 2)
        even_part = 2 ** sympy.multiplicity(2, level)
        odd_part = level // even_part

        if even_part == 1:
            half = mod_inverse(2, level)
            return ((rr**2 * tt**-half) ** 3).is_Identity

        if odd_part == 1:
            fifth = mod_inverse(5, level)
            qq = tt**20 * rr**fifth * tt**-4 * ~rr
            uu = tt * ~rr * tt
            relations = [
                ~uu * qq * uu * qq,
                ~qq * rr * qq * rr**-25,
                uu**2 * (qq * rr**5 * uu) ** -3,
                uu**4,
            ]
            return all(relation.is_Identity for relation in relations)

        half = mod_inverse(2, odd_part)
        fifth = mod_inverse(5, even_part)
        cc, dd = get_crt_idempotents(even_part, odd_part)
        aa, bb = tt**cc, rr**cc
        pp, qq = tt**dd, rr**dd
        ww = pp**20 * qq**fifth * pp**-4 * ~qq
        relations = [
            ~aa * ~qq * aa * qq,
            (aa * ~bb * aa) ** 4,
            (aa * ~bb * aa) ** 2 * (~aa * bb) ** 3,
            (aa * ~bb * aa) ** 2 * (bb * bb * aa**-half) ** -3,
            (~pp * qq * ~pp) * ww * (pp * ~qq * pp) * ww,
            ~ww * qq * ww * qq**-25,
            (pp * ~qq * pp) ** 2 * (ww * qq**5 * pp * ~qq * pp) ** -3,
        ]
        return all(relation.is_Identity for relation in relations)

    @functools.cached_property
    def genus(self) -> int:
        """Genus of the modular curve of this subgroup.

        The genus is g = 1 + μ/12 - e2/4 - e3/3 - c/2, where μ is the index of the image of this
        subgroup in PSL(2,Z), c is the number of cusps, and e2 and e3 are the numbers of elliptic
        points of orders 2 and 3.  Elliptic points are counted by cosets that are fixed by s and by
        s^-1 t, which respectively represent matrices of order 4 and 3 (or 2 and 3 in PSL(2,Z)).
        """
        order_3_fixed_points = self.index - len((~self._s * self._t).support())
        if self.contains_minus_identity:
            psl_index = self.index
            num_order_2 = self.index - len(self._s.support())
            num_order_3 = order_3_fixed_points
        else:
            psl_index = self.index // 2
            num_order_2 = 0
            num_order_3 = order_3_fixed_points // 2
        return 1 + (psl_index - 3 * num_order_2 - 4 * num_order_3 - 6 * len(self.cusps)) // 12
