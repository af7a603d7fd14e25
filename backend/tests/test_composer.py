"""Unit tests for the weekly credit score composer."""
import itertools

import pytest

from credit_engine.errors import ValidationError
from credit_engine.scorecard.composer import CreditScoreComposer, earns_check_mark
from credit_engine.scorecard.values import CreditWeights


class StubWeights:
    def __init__(self, weights=None):
        self.weights = weights or CreditWeights(ec=40, oc=50, cc=10)
        self.calls = []

    def resolve_weights(self, team_id=None):
        self.calls.append(team_id)
        return self.weights


class StubMultiplier:
    def __init__(self, multiplier=1.0):
        self.multiplier = multiplier

    def resolve_multiplier(self, user_id):
        return self.multiplier


class TestComposeScore:
    """Scenarios and properties of compose_score."""

    def setup_method(self):
        self.weights = StubWeights()
        self.multiplier = StubMultiplier()
        self.composer = CreditScoreComposer(self.weights, self.multiplier)

    def test_default_team_full_week(self):
        breakdown = self.composer.compose_score(1.0, 1.0, 0.8, "u-1", None, hours_worked=40)

        assert breakdown.base_score == 0.98
        assert breakdown.multiplier == 1.0
        assert breakdown.final_score == 0.98
        assert breakdown.check_mark is True
        assert breakdown.weights.as_dict() == {"EC": 40, "OC": 50, "CC": 10}

    def test_custom_weights_with_multiplier(self):
        self.weights.weights = CreditWeights(ec=0, oc=100, cc=0)
        self.multiplier.multiplier = 1.5

        breakdown = self.composer.compose_score(0.2, 0.6, 0.3, "u-1", "t-1", hours_worked=5)

        assert breakdown.base_score == 0.6
        assert breakdown.final_score == 0.9
        assert breakdown.check_mark is False

    def test_final_score_clamped_to_one(self):
        self.multiplier.multiplier = 2.0
        breakdown = self.composer.compose_score(1.0, 0.8, 1.0, "u-1", None, hours_worked=40)
        assert breakdown.base_score == 0.9
        assert breakdown.final_score == 1.0

    def test_team_id_passed_to_resolver(self):
        self.composer.compose_score(0.5, 0.5, 0.5, "u-1", "t-42", hours_worked=10)
        assert self.weights.calls == ["t-42"]

    def test_weights_not_summing_to_100_rejected(self):
        self.weights.weights = CreditWeights(ec=50, oc=50, cc=10)
        with pytest.raises(ValidationError, match="110"):
            self.composer.compose_score(1.0, 1.0, 1.0, "u-1", "t-1", hours_worked=40)

    def test_component_out_of_range_rejected(self):
        with pytest.raises(ValidationError):
            self.composer.compose_score(1.1, 1.0, 1.0, "u-1", None, hours_worked=40)

    def test_deterministic(self):
        first = self.composer.compose_score(0.8, 0.6, 0.4, "u-1", None, hours_worked=18)
        second = self.composer.compose_score(0.8, 0.6, 0.4, "u-1", None, hours_worked=18)
        assert first == second

    def test_final_score_always_in_unit_interval(self):
        grid = [0.0, 0.5, 1.0]
        splits = [CreditWeights(40, 50, 10), CreditWeights(0, 100, 0), CreditWeights(34, 33, 33)]
        for ec, oc, cc, weights, multiplier in itertools.product(grid, grid, grid, splits, [0.5, 1.0, 2.0]):
            self.weights.weights = weights
            self.multiplier.multiplier = multiplier
            breakdown = self.composer.compose_score(ec, oc, cc, "u-1", None, hours_worked=20)
            assert 0.0 <= breakdown.final_score <= 1.0

    def test_to_dict(self):
        breakdown = self.composer.compose_score(1.0, 1.0, 0.8, "u-1", None, hours_worked=40)
        assert breakdown.to_dict() == {
            "base_score": 0.98,
            "final_score": 0.98,
            "multiplier": 1.0,
            "weights": {"EC": 40, "OC": 50, "CC": 10},
            "check_mark": True,
        }


class TestCheckMark:
    """Check mark depends only on hours and raw OC."""

    @pytest.mark.parametrize("hours,oc,expected", [
        (20, 1.0, True),
        (45, 1.0, True),
        (19.9, 1.0, False),
        (40, 0.99, False),
        (0, 0.0, False),
    ])
    def test_rule(self, hours, oc, expected):
        assert earns_check_mark(hours, oc) is expected

    def test_independent_of_weights_and_multiplier(self):
        composer = CreditScoreComposer(StubWeights(CreditWeights(100, 0, 0)), StubMultiplier(0.5))
        breakdown = composer.compose_score(0.0, 1.0, 0.0, "u-1", None, hours_worked=20)
        assert breakdown.final_score == 0.0
        assert breakdown.check_mark is True
