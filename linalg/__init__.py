"""Row reduction and determinants for dense matrices."""

from .cofactor import det_cofactor
from .gaussian import det, explicit_reduce, implicit_reduce
from .numeric import Field, Ring

__all__ = ["Field", "Ring", "det", "det_cofactor", "explicit_reduce", "implicit_reduce"]
