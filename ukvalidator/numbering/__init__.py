"""UK numbering-plan classification core.

Three pure pieces, leaf first:

- :mod:`ukvalidator.numbering.normalizer` turns loosely formatted input
  into a canonical national-format digit string.
- :mod:`ukvalidator.numbering.index` builds a digit trie over the
  allocation rules.
- :mod:`ukvalidator.numbering.classifier` walks the trie and decides
  VALID / TOO_SHORT / INVALID.

Nothing in this package performs I/O or raises for any string input.
"""
from ukvalidator.numbering.classifier import ClassificationResult, NumberClass, classify_uk_number
from ukvalidator.numbering.index import PrefixIndex, build_index
from ukvalidator.numbering.normalizer import normalize_uk_national
from ukvalidator.numbering.rule import PrefixRule
from ukvalidator.numbering.status import DeadStatusPolicy, get_policy

__all__ = [
    "ClassificationResult",
    "DeadStatusPolicy",
    "NumberClass",
    "PrefixIndex",
    "PrefixRule",
    "build_index",
    "classify_uk_number",
    "get_policy",
    "normalize_uk_national",
]
