"""Capture mechanics.

Four independent shake trials at a probability derived from the target's HP,
status and the ball's rate. The exponent (0.1875) and the 16-bit modulus are
fixed constants of the formula.
"""
from __future__ import annotations
import math
from dataclasses import dataclass, field
from typing import List, Optional

from tilemon.battle import messages
from tilemon.battle.models import Combatant
from tilemon.battle.rng import RandomSource, resolve
from tilemon.core.logging import logger
from tilemon.core.types import StatusId

# Ball modifiers (subset)
BALL_RATES = {
    'poke-ball': 1.0,
    'great-ball': 1.5,
    'ultra-ball': 2.0,
}

STATUS_BONUS = {
    StatusId.SLEEP: 2.0,
    StatusId.PARALYZE: 1.5,
    StatusId.BURN: 1.5,
    StatusId.POISON: 1.5,
}

CATCH_VALUE_MAX = 255
SHAKE_MODULUS = 65536
SHAKE_EXPONENT = 0.1875
SHAKE_TRIALS = 4


@dataclass
class CaptureResult:
    caught: bool
    shake_count: int
    messages: List[str] = field(default_factory=list)


def catch_value(target: Combatant, ball_rate: float) -> int:
    max_hp = target.max_hp
    hp_factor = (3 * max_hp - 2 * target.current_hp) / (3 * max_hp)
    bonus = STATUS_BONUS.get(target.status, 1.0)
    return min(CATCH_VALUE_MAX, math.floor(CATCH_VALUE_MAX * hp_factor * ball_rate * bonus))


def shake_probability(value: int) -> int:
    """Per-trial success threshold out of 65536."""
    if value <= 0:
        return 0
    return math.floor(SHAKE_MODULUS / (CATCH_VALUE_MAX / value) ** SHAKE_EXPONENT)


def attempt_catch(target: Combatant, ball_rate: float, rng: Optional[RandomSource] = None) -> CaptureResult:
    rng = resolve(rng)
    value = catch_value(target, ball_rate)
    threshold = shake_probability(value)
    shakes = 0
    for _ in range(SHAKE_TRIALS):
        if rng.random() * SHAKE_MODULUS < threshold:
            shakes += 1
        else:
            break
    caught = shakes >= SHAKE_TRIALS
    out = [messages.caught(target.name)] if caught else [messages.CATCH_MESSAGES[shakes]]
    logger.debug("CatchAttempt", target=target.name, catch_value=value, shakes=shakes, caught=caught)
    return CaptureResult(caught=caught, shake_count=shakes, messages=out)


__all__ = ["attempt_catch", "catch_value", "shake_probability", "CaptureResult", "BALL_RATES"]
