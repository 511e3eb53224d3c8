"""Value types shared by stores and observers."""

from pytriple.models.result import Failure, Result, Success
from pytriple.models.triple import DispatchedTriple, Triple, TripleEvent

__all__ = [
    "DispatchedTriple",
    "Failure",
    "Result",
    "Success",
    "Triple",
    "TripleEvent",
]
