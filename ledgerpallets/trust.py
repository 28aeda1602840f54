"""Trust scoring for validator nodes."""

from __future__ import annotations

import dataclasses
import math
import struct
from dataclasses import dataclass
from typing import Any, Hashable

from .chain import Chain, ensure_signed

_U32_MAX = 2**32 - 1
INITIAL_TRUST_SCORE = 0.5
REMOVAL_THRESHOLD = 0.1


def _f32(value: float) -> float:
    """Round ``value`` to single precision."""
    try:
        return struct.unpack("f", struct.pack("f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


_E = _f32(math.e)


def increase_fn(trust_score: float) -> float:
    """Score gained after a vote that matched consensus."""
    growth = _f32(math.pow(_E, _f32(2.5 * trust_score))) if trust_score != math.inf else math.inf
    return _f32(0.001 * _f32(0.5 * growth))


def decrease_fn(trust_score: float) -> float:
    """Score lost after a vote that missed consensus."""
    denominator = _f32(1.0 - _f32(2.5 * trust_score))
    if denominator == 0.0:
        inverse = math.copysign(math.inf, denominator)
    else:
        inverse = _f32(1.0 / denominator)
    return _f32(0.001 * _f32(1.0 - inverse))


@dataclass
class NodeTrustData:
    validator: Any
    trust_score: float = INITIAL_TRUST_SCORE
    successful_validations: int = 0
    failed_validations: int = 0
    last_updated: int = 0
    flagged_for_removal: bool = False


class TrustError(Exception):
    """Base class for trust pallet errors."""


class ValidatorNotFound(TrustError):
    pass


class TrustScoreTooLow(TrustError):
    pass


class InvalidTrustScore(TrustError):
    pass


@dataclass(frozen=True)
class TrustScoreUpdated:
    validator: Any
    score: float


@dataclass(frozen=True)
class ValidatorAdded:
    validator: Any


@dataclass(frozen=True)
class ValidatorRemoved:
    validator: Any


@dataclass(frozen=True)
class ValidationSuccessful:
    validator: Any
    score: float


@dataclass(frozen=True)
class ValidationFailed:
    validator: Any
    score: float


class TrustScorePallet:
    """Keeps trust scores for validators and removes flagged ones."""

    def __init__(
        self,
        chain: Chain,
        max_trust_score: float = 1.0,
        min_trust_score: float = REMOVAL_THRESHOLD,
        success_reward: float = 0.001,
        failure_penalty: float = 0.001,
    ) -> None:
        self.chain = chain
        self.max_trust_score = max_trust_score
        self.min_trust_score = min_trust_score
        self.success_reward = success_reward
        self.failure_penalty = failure_penalty
        self.average_trust_score = 0.5
        self.min_validation_trust = 0.4
        self._scores: dict[Hashable, NodeTrustData] = {}
        self._validators: list[Hashable] = []

    def _now(self) -> int:
        return min(self.chain.block_number, _U32_MAX)

    def trust_scores(self, validator: Hashable) -> NodeTrustData | None:
        data = self._scores.get(validator)
        return dataclasses.replace(data) if data is not None else None

    def validator_list(self) -> list[Hashable]:
        return list(self._validators)

    def initialize_validator(self, origin, validator) -> None:
        ensure_signed(origin)
        self._scores[validator] = NodeTrustData(validator=validator, last_updated=self._now())
        self._validators.append(validator)
        self.chain.deposit_event(ValidatorAdded(validator))

    def update_trust_score(self, origin, validator, vote_matched: bool) -> None:
        ensure_signed(origin)
        data = self._scores.get(validator)
        if data is None:
            raise ValidatorNotFound(validator)
        if data.flagged_for_removal:
            return

        if vote_matched:
            data.trust_score = min(_f32(data.trust_score + increase_fn(data.trust_score)), 1.0)
            data.successful_validations += 1
        else:
            data.trust_score = max(_f32(data.trust_score - decrease_fn(data.trust_score)), 0.0)
            data.failed_validations += 1
            if data.trust_score < REMOVAL_THRESHOLD:
                data.flagged_for_removal = True
                self.chain.deposit_event(ValidatorRemoved(validator))

        data.last_updated = self._now()
        outcome = ValidationSuccessful if vote_matched else ValidationFailed
        self.chain.deposit_event(outcome(validator, data.trust_score))
        self.chain.deposit_event(TrustScoreUpdated(validator, data.trust_score))

    def cleanup_validators(self, origin) -> None:
        """Drop every validator that has been flagged for removal."""
        ensure_signed(origin)
        flagged = [v for v in self._validators if self._is_flagged(v)]
        for validator in flagged:
            self._remove_validator(validator)

    def _is_flagged(self, validator: Hashable) -> bool:
        data = self._scores.get(validator)
        return data is not None and data.flagged_for_removal

    def _remove_validator(self, validator: Hashable) -> None:
        if not self._is_flagged(validator):
            return
        del self._scores[validator]
        self._validators = [v for v in self._validators if v != validator]
        self.chain.deposit_event(ValidatorRemoved(validator))

    def get_trust_score(self, validator: Hashable) -> float | None:
        data = self._scores.get(validator)
        return data.trust_score if data is not None else None

    def get_validators_by_trust(self) -> list[tuple[Hashable, float]]:
        """Validators with their scores, highest score first."""
        scored = [
            (validator, score)
            for validator in self._validators
            if (score := self.get_trust_score(validator)) is not None
        ]
        return sorted(scored, key=lambda pair: pair[1], reverse=True)