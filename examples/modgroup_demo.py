#!/usr/bin/env python3
"""Print the invariants of a few finite-index subgroups of SL(2,Z)."""

import modgroup


def describe(group: modgroup.ModularSubgroup) -> str:
    """Summarize a subgroup in one line."""
    cusps = ", ".join(f"{cusp} (width {group.cusp_width(cusp)})" for cusp in group.cusps)
    return (
        f"{group.name}: index {group.index}, genus {group.genus},"
        f" level {group.generalized_level}, congruence: {group.is_congruence}, cusps: {cusps}"
    )


if __name__ == "__main__":
    groups = [
        modgroup.SL2Z(),
        modgroup.ThetaGroup(),
        modgroup.Gamma0(11),
        modgroup.Gamma1(5),
        modgroup.Gamma(3),
        modgroup.ModularSubgroup.from_generators(
            [[1, 1], [0, 1]], [[1, 0], [-2, 1]], [[-1, 0], [0, -1]], name="Gamma0(2)"
        ),
        modgroup.ModularSubgroup(
            [1, 0, 3, 2, 5, 4, 6], [0, 2, 6, 1, 5, 3, 4], name="non-congruence subgroup of index 7"
        ),
    ]
    for group in groups:
        print(describe(group))

    matrix = [[5, 2], [12, 5]]
    print(f"{matrix} = {modgroup.st_decomposition(matrix)}")
    print(f"{matrix} in Gamma0(4): {matrix in modgroup.Gamma0(4)}")
