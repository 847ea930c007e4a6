from .restorer import restore_placeholders
from .rules import RULES, AdjacencyRule, Occurrence, Rewrite

__all__ = ["restore_placeholders", "RULES", "AdjacencyRule", "Occurrence", "Rewrite"]
