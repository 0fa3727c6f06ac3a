"""Battle text. The message log is the only narration channel."""
from __future__ import annotations

from tilemon.core.types import StatKey, StatusId, stat_label

NO_EFFECT = "It doesn't affect the target..."
CRITICAL_HIT = "A critical hit!"
SUPER_EFFECTIVE = "It's super effective!"
NOT_VERY_EFFECTIVE = "It's not very effective..."

_STATUS_INFLICTED = {
    StatusId.PARALYZE: "{name} is paralyzed!",
    StatusId.BURN: "{name} was burned!",
    StatusId.POISON: "{name} was poisoned!",
    StatusId.SLEEP: "{name} fell asleep!",
}

CATCH_MESSAGES = (
    "Oh no! The Pokemon broke free!",
    "Aww! It appeared to be caught!",
    "Aargh! Almost had it!",
    "Shoot! It was so close, too!",
)


def stage_message(name: str, stat: StatKey, delta: int) -> str:
    """Text keyed to the stage change that was actually applied."""
    label = f"{name}'s {stat_label(stat)}"
    if delta == 0:
        return f"{label} won't go further!"
    if delta == 1:
        return f"{label} rose!"
    if delta == 2:
        return f"{label} rose sharply!"
    if delta == -1:
        return f"{label} fell!"
    if delta == -2:
        return f"{label} harshly fell!"
    return f"{label} changed!"


def status_inflicted(name: str, status: StatusId) -> str:
    return _STATUS_INFLICTED[status].format(name=name)


def already_affected(name: str) -> str:
    return f"{name} is already affected!"


def missed(name: str) -> str:
    return f"{name}'s attack missed!"


def fast_asleep(name: str) -> str:
    return f"{name} is fast asleep!"


def woke_up(name: str) -> str:
    return f"{name} woke up!"


def fully_paralyzed(name: str) -> str:
    return f"{name} is paralyzed! It can't move!"


def caught(name: str) -> str:
    return f"Gotcha! {name} was caught!"
