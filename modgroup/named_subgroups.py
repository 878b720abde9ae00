"""Named congruence subgroups of SL(2,Z)

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

Each congruence subgroup G of level N is the stabilizer of a point x in a set on which SL(2,Z) acts
(from the right) through its reduction modulo N.  The right cosets of G are then in one-to-one
correspondence with the orbit of x, and the actions of S and T on cosets are their actions on the
orbit.  Specifically,
- Gamma(N) stabilizes the identity matrix mod N,
- Gamma1(N) and GammaUpper1(N) stabilize the row vectors (0, 1) and (1, 0) mod N, and
- Gamma0(N) and GammaUpper0(N) stabilize the same vectors up to multiplication by units mod N.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Hashable
from typing import TypeVar

from modgroup.subgroups import ModularSubgroup

Vector = tuple[int, int]
MatrixEntries = tuple[int, int, int, int]
Point = TypeVar("Point", bound=Hashable)


def get_orbit_action(
    start: Point,
    act_s: Callable[[Point], Point],
    act_t: Callable[[Point], Point],
) -> tuple[list[int], list[int]]:
    """Permutations by which S and T act on the orbit of a starting point.

    Points are labeled in the order in which they are found by a breadth-first search from the
    starting point, which gets label 0.
    """
    labels = {start: 0}
    points = [start]
    for point in points:
        for action in [act_s, act_t]:
            image = action(point)
            if image not in labels:
                labels[image] = len(labels)
                points.append(image)
    s_action = [labels[act_s(point)] for point in points]
    t_action = [labels[act_t(point)] for point in points]
    return s_action, t_action


def _validate_level(level: int) -> None:
    if not isinstance(level, int) or level < 1:
        raise ValueError(f"The level of a congruence subgroup must be a positive integer: {level}")


def _get_units(level: int) -> list[int]:
    """Units of the ring Z/level."""
    return [value for value in range(level) if math.gcd(value, level) == 1]


def _get_vector_actions(
    level: int, projective: bool
) -> tuple[Callable[[Vector], Vector], Callable[[Vector], Vector]]:
    """Right action of S and T on row vectors mod level, optionally up to multiplication by units.

    Row vectors transform as (x, y) S = (y, -x) and (x, y) T = (x, x + y).
    """
    units = _get_units(level) if projective else [1]

    def normalize(vector: Vector) -> Vector:
        return min(((unit * vector[0]) % level, (unit * vector[1]) % level) for unit in units)

    def act_s(vector: Vector) -> Vector:
        return normalize((vector[1], -vector[0]))

    def act_t(vector: Vector) -> Vector:
        return normalize((vector[0], vector[0] + vector[1]))

    return act_s, act_t


class SL2Z(ModularSubgroup):
    """The full modular group SL(2,Z), with index 1."""

    def __init__(self) -> None:
        super().__init__([0], [0], name="SL(2,Z)")


class _ModularSubgroupOfLevel(ModularSubgroup):
    """A congruence subgroup with a known level, defined as the stabilizer of a row vector."""

    _level: int

    def __init__(self, level: int, start: Vector, projective: bool, name: str) -> None:
        _validate_level(level)
        self._level = level
        start = (start[0] % level, start[1] % level)
        s_action, t_action = get_orbit_action(start, *_get_vector_actions(level, projective))
        super().__init__(s_action, t_action, name=name)

    @property
    def level(self) -> int:
        """The level N of this congruence subgroup, which contains the kernel of reduction mod N."""
        return self._level


class Gamma0(_ModularSubgroupOfLevel):
    """Matrices in SL(2,Z) that are upper triangular modulo N."""

    def __init__(self, level: int) -> None:
        super().__init__(level, (0, 1), projective=True, name=f"Gamma0({level})")


class Gamma1(_ModularSubgroupOfLevel):
    """Matrices in SL(2,Z) that are upper unitriangular modulo N, i.e., [[1, *], [0, 1]] mod N."""

    def __init__(self, level: int) -> None:
        super().__init__(level, (0, 1), projective=False, name=f"Gamma1({level})")


class GammaUpper0(_ModularSubgroupOfLevel):
    """Matrices in SL(2,Z) that are lower triangular modulo N."""

    def __init__(self, level: int) -> None:
        super().__init__(level, (1, 0), projective=True, name=f"GammaUpper0({level})")


class GammaUpper1(_ModularSubgroupOfLevel):
    """Matrices in SL(2,Z) that are lower unitriangular modulo N, i.e., [[1, 0], [*, 1]] mod N."""

    def __init__(self, level: int) -> None:
        super().__init__(level, (1, 0), projective=False, name=f"GammaUpper1({level})")


class Gamma(ModularSubgroup):
    """Principal congruence subgroup: the kernel of reduction modulo N."""

    _level: int

    def __init__(self, level: int) -> None:
        _validate_level(level)
        self._level = level

        def act_s(matrix: MatrixEntries) -> MatrixEntries:
            aa, bb, cc, dd = matrix
            return bb % level, -aa % level, dd % level, -cc % level

        def act_t(matrix: MatrixEntries) -> MatrixEntries:
            aa, bb, cc, dd = matrix
            return aa, (aa + bb) % level, cc, (cc + dd) % level

        identity = (1 % level, 0, 0, 1 % level)
        s_action, t_action = get_orbit_action(identity, act_s, act_t)
        super().__init__(s_action, t_action, name=f"Gamma({level})")

    @property
    def level(self) -> int:
        """The level N of this subgroup, which is the kernel of reduction mod N."""
        return self._level


class ThetaGroup(ModularSubgroup):
    """The theta group: matrices congruent to I or S modulo 2, generated by S and T^2."""

    def __init__(self) -> None:
        super().__init__([0, 2, 1], [1, 0, 2], name="ThetaGroup")
