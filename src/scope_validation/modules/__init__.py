"""
Validation modules for the Scope Validation Engine.
"""

from .companion import CompanionValidator, validate_companions_post_auto_add
from .coverage import CoverageTypeValidator
from .damage import DamageCoverageValidator
from .duplicate import DuplicateItemValidator
from .quantity import QuantityValidator
from .trade_sequence import TradeSequenceValidator
from .water_classification import WaterClassificationValidator

__all__ = [
    "CompanionValidator",
    "CoverageTypeValidator",
    "DamageCoverageValidator",
    "DuplicateItemValidator",
    "QuantityValidator",
    "TradeSequenceValidator",
    "WaterClassificationValidator",
    "validate_companions_post_auto_add",
]
