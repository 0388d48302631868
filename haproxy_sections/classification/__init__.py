# ==============================================
# CLASSIFICATION
# ==============================================
#
# This package turns raw config lines into a ConfigDocument.
#
# Modules:
# --------
# - section.py     → Section keywords, classifier state and options
# - classifier.py  → SectionClassifier: the single-pass line sorter
#
# ==============================================

from .section import (
    SectionType,
    HeaderMatch,
    MissingName,
    ClassifierState,
    ClassifierOptions,
)
from .classifier import SectionClassifier

__all__ = [
    "SectionType",
    "HeaderMatch",
    "MissingName",
    "ClassifierState",
    "ClassifierOptions",
    "SectionClassifier",
]
