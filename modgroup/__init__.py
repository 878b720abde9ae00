import importlib.metadata

from . import cache, cusps, external, math, named_subgroups, subgroups, words
from .cusps import Cusp
from .named_subgroups import SL2Z, Gamma, Gamma0, Gamma1, GammaUpper0, GammaUpper1, ThetaGroup
from .subgroups import ModularSubgroup, SearchExhaustedError
from .words import st_decomposition

__version__ = importlib.metadata.version("modgroup")

__all__ = [
    "__version__",
    "cache",
    "cusps",
    "external",
    "math",
    "named_subgroups",
    "subgroups",
    "words",
    "Cusp",
    "Gamma",
    "Gamma0",
    "Gamma1",
    "GammaUpper0",
    "GammaUpper1",
    "ModularSubgroup",
    "SearchExhaustedError",
    "SL2Z",
    "ThetaGroup",
    "st_decomposition",
]
