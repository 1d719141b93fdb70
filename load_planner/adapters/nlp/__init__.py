"""NLP adapters - Implementations of the extraction port.

Available implementations:
- RuleBasedLoadExtractor: Ordered regex rules with deterministic confidence
"""

from .rule_based import RuleBasedLoadExtractor

__all__ = ["RuleBasedLoadExtractor"]
