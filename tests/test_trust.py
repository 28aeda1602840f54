import math

import pytest

from ledgerpallets.chain import BadOrigin, Chain
from ledgerpallets.trust import (
    TrustScorePallet,
    TrustScoreUpdated,
    ValidationFailed,
    ValidationSuccessful,
    ValidatorAdded,
    ValidatorNotFound,
    ValidatorRemoved,
    decrease_fn,
    increase_fn,
)


@pytest.fixture
def chain():
    return Chain(3)


@pytest.fixture
def pallet(chain):
    return TrustScorePallet(chain)


def _flag(pallet, validator):
    for _ in range(1000):
        pallet.update_trust_score("root", validator, False)
        if pallet.trust_scores(validator).flagged_for_removal:
            break


def test_increase_fn_at_zero():
    assert increase_fn(0.0) == pytest.approx(0.0005, rel=1e-6)


def test_decrease_fn_at_zero():
    assert decrease_fn(0.0) == 0.0


def test_decrease_fn_singular_point():
    assert decrease_fn(0.4) == -math.inf


def test_increase_fn_grows_with_score():
    assert increase_fn(0.9) > increase_fn(0.5) > increase_fn(0.1)


def test_storage_defaults(pallet):
    assert pallet.average_trust_score == 0.5
    assert pallet.min_validation_trust == 0.4


def test_initialize_validator(pallet, chain):
    pallet.initialize_validator("root", "v1")
    data = pallet.trust_scores("v1")
    assert data.trust_score == 0.5
    assert data.successful_validations == 0
    assert data.last_updated == 3
    assert pallet.validator_list() == ["v1"]
    assert chain.take_events() == [ValidatorAdded("v1")]


def test_initialize_requires_signed(pallet):
    with pytest.raises(BadOrigin):
        pallet.initialize_validator(None, "v1")


def test_successful_vote_raises_score(pallet, chain):
    pallet.initialize_validator("root", "v1")
    chain.take_events()
    chain.advance(4)
    pallet.update_trust_score("root", "v1", True)
    data = pallet.trust_scores("v1")
    assert data.trust_score > 0.5
    assert data.trust_score == pytest.approx(0.5 + increase_fn(0.5), rel=1e-6)
    assert data.successful_validations == 1
    assert data.last_updated == 7
    assert chain.take_events() == [
        ValidationSuccessful("v1", data.trust_score),
        TrustScoreUpdated("v1", data.trust_score),
    ]


def test_failed_vote_lowers_score(pallet, chain):
    pallet.initialize_validator("root", "v1")
    chain.take_events()
    pallet.update_trust_score("root", "v1", False)
    data = pallet.trust_scores("v1")
    assert data.trust_score < 0.5
    assert data.failed_validations == 1
    assert chain.take_events() == [
        ValidationFailed("v1", data.trust_score),
        TrustScoreUpdated("v1", data.trust_score),
    ]


def test_score_never_exceeds_one(pallet):
    pallet.initialize_validator("root", "v1")
    for _ in range(2000):
        pallet.update_trust_score("root", "v1", True)
    assert pallet.get_trust_score("v1") == 1.0


def test_unknown_validator(pallet):
    with pytest.raises(ValidatorNotFound):
        pallet.update_trust_score("root", "ghost", True)


def test_repeated_failures_flag_validator(pallet, chain):
    pallet.initialize_validator("root", "v1")
    _flag(pallet, "v1")
    data = pallet.trust_scores("v1")
    assert data.flagged_for_removal
    assert data.trust_score < 0.1
    assert ValidatorRemoved("v1") in chain.take_events()


def test_flagged_validator_is_frozen(pallet, chain):
    pallet.initialize_validator("root", "v1")
    _flag(pallet, "v1")
    before = pallet.trust_scores("v1")
    chain.take_events()
    pallet.update_trust_score("root", "v1", True)
    assert pallet.trust_scores("v1") == before
    assert chain.take_events() == []


def test_cleanup_removes_flagged_only(pallet, chain):
    pallet.initialize_validator("root", "v1")
    pallet.initialize_validator("root", "v2")
    _flag(pallet, "v1")
    chain.take_events()
    pallet.cleanup_validators("root")
    assert pallet.trust_scores("v1") is None
    assert pallet.validator_list() == ["v2"]
    assert chain.take_events() == [ValidatorRemoved("v1")]


def test_cleanup_with_duplicate_entries_removes_once(pallet, chain):
    pallet.initialize_validator("root", "v1")
    pallet.initialize_validator("root", "v1")
    assert pallet.validator_list() == ["v1", "v1"]
    _flag(pallet, "v1")
    chain.take_events()
    pallet.cleanup_validators("root")
    assert pallet.validator_list() == []
    assert chain.take_events() == [ValidatorRemoved("v1")]


def test_validators_sorted_by_trust(pallet):
    for name in ("a", "b", "c"):
        pallet.initialize_validator("root", name)
    pallet.update_trust_score("root", "b", True)
    pallet.update_trust_score("root", "c", False)
    ranking = pallet.get_validators_by_trust()
    assert [name for name, _ in ranking] == ["b", "a", "c"]
    scores = [score for _, score in ranking]
    assert scores == sorted(scores, reverse=True)


def test_get_trust_score_missing(pallet):
    assert pallet.get_trust_score("ghost") is None
    assert pallet.get_validators_by_trust() == []