"""Tests for team credit weight resolution and saving."""
import pytest

from credit_engine.cache import team_weights_key
from credit_engine.errors import NotFoundError, PermissionDeniedError, ValidationError
from credit_engine.models.models import TeamCreditConfig
from credit_engine.scorecard.values import CreditWeights
from credit_engine.services.access_service import AccessService
from credit_engine.services.weight_config_service import WeightConfigService

DEFAULT = {"EC": 40, "OC": 50, "CC": 10}


def test_unknown_team_resolves_to_default(db, cache):
    svc = WeightConfigService(db, cache=cache)
    assert svc.resolve_weights("t-does-not-exist").as_dict() == DEFAULT


def test_no_team_resolves_to_default(db, cache):
    svc = WeightConfigService(db, cache=cache)
    assert svc.resolve_weights(None).as_dict() == DEFAULT


def test_lead_saves_own_team(directory, cache):
    svc = WeightConfigService(directory, cache=cache)
    lead = AccessService(directory).get_actor("u-lead-a")

    config = svc.save_weights("t-alpha", 30, 60, 10, lead)

    assert config.updated_by == "u-lead-a"
    assert svc.resolve_weights("t-alpha").as_dict() == {"EC": 30, "OC": 60, "CC": 10}


def test_owner_saves_any_team(directory, cache):
    svc = WeightConfigService(directory, cache=cache)
    owner = AccessService(directory).get_actor("u-owner")

    svc.save_weights("t-beta", 0, 100, 0, owner)

    assert svc.resolve_weights("t-beta") == CreditWeights(ec=0, oc=100, cc=0)


def test_rejected_save_leaves_prior_config(directory, cache):
    svc = WeightConfigService(directory, cache=cache)
    lead = AccessService(directory).get_actor("u-lead-a")
    svc.save_weights("t-alpha", 30, 60, 10, lead)

    with pytest.raises(ValidationError, match="110"):
        svc.save_weights("t-alpha", 50, 50, 10, lead)

    assert svc.resolve_weights("t-alpha").as_dict() == {"EC": 30, "OC": 60, "CC": 10}
    stored = directory.query(TeamCreditConfig).filter(TeamCreditConfig.team_id == "t-alpha").one()
    assert stored.to_weights_dict() == {"EC": 30, "OC": 60, "CC": 10}


def test_rejected_first_save_leaves_absence(directory, cache):
    svc = WeightConfigService(directory, cache=cache)
    owner = AccessService(directory).get_actor("u-owner")

    with pytest.raises(ValidationError):
        svc.save_weights("t-alpha", 50, 50, 10, owner)

    assert svc.get_config("t-alpha") is None
    assert svc.resolve_weights("t-alpha").as_dict() == DEFAULT


def test_non_lead_admin_denied(directory, cache):
    svc = WeightConfigService(directory, cache=cache)
    admin = AccessService(directory).get_actor("u-admin-a2")

    with pytest.raises(PermissionDeniedError):
        svc.save_weights("t-alpha", 30, 60, 10, admin)
    assert svc.get_config("t-alpha") is None


def test_lead_of_other_team_denied(directory, cache):
    svc = WeightConfigService(directory, cache=cache)
    other_lead = AccessService(directory).get_actor("u-lead-b")

    with pytest.raises(PermissionDeniedError):
        svc.save_weights("t-alpha", 30, 60, 10, other_lead)


def test_unknown_team_save_not_found(directory, cache):
    svc = WeightConfigService(directory, cache=cache)
    owner = AccessService(directory).get_actor("u-owner")

    with pytest.raises(NotFoundError):
        svc.save_weights("t-ghost", 40, 50, 10, owner)


def test_save_invalidates_cached_weights(directory, cache):
    svc = WeightConfigService(directory, cache=cache)
    owner = AccessService(directory).get_actor("u-owner")

    assert svc.resolve_weights("t-alpha").as_dict() == DEFAULT
    assert cache.get(team_weights_key("t-alpha")) is not None

    svc.save_weights("t-alpha", 20, 70, 10, owner)

    assert cache.get(team_weights_key("t-alpha")) is None
    assert svc.resolve_weights("t-alpha").as_dict() == {"EC": 20, "OC": 70, "CC": 10}


def test_second_save_replaces_first(directory, cache):
    svc = WeightConfigService(directory, cache=cache)
    owner = AccessService(directory).get_actor("u-owner")

    svc.save_weights("t-alpha", 20, 70, 10, owner)
    svc.save_weights("t-alpha", 34, 33, 33, owner)

    assert directory.query(TeamCreditConfig).count() == 1
    assert svc.resolve_weights("t-alpha").as_dict() == {"EC": 34, "OC": 33, "CC": 33}
