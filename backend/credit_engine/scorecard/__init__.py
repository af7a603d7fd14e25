"""Package init for scorecard module."""

from credit_engine.scorecard.credit_config import DEFAULT_POLICY, CreditPolicy
from credit_engine.scorecard.values import (
    CreditComponents,
    CreditWeights,
    KeyResult,
    validate_multiplier,
)
from credit_engine.scorecard.calculators import (
    build_key_results,
    calc_cc,
    calc_cc_from_activity,
    calc_ec,
    calc_oc,
)
from credit_engine.scorecard.composer import CreditScoreComposer, ScoreBreakdown

__all__ = [
    'DEFAULT_POLICY',
    'CreditPolicy',
    'CreditComponents',
    'CreditWeights',
    'KeyResult',
    'validate_multiplier',
    'build_key_results',
    'calc_cc',
    'calc_cc_from_activity',
    'calc_ec',
    'calc_oc',
    'CreditScoreComposer',
    'ScoreBreakdown',
]
