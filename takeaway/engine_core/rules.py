"""
Game Rules - The fixed parameters of a takeaway game.

Rules are chosen once, when an engine is constructed, and never change
during a game. The optimal-play modulus follows from them.
"""

from __future__ import annotations
from dataclasses import dataclass


STARTING_TOTAL = 12
MAX_TAKEN = 3

# Narration names the agent's moves by ordinal, so max_taken is bounded by this table
ORDINALS = (
    "first", "second", "third", "fourth", "fifth",
    "sixth", "seventh", "eighth", "ninth", "tenth",
)


class RulesValidationError(Exception):
    """Raised when a set of game rules is not playable."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__(f"Rules validation failed with {len(errors)} error(s): {'; '.join(errors)}")


@dataclass(frozen=True)
class GameRules:
    """
    Parameters of a game.

    starting_total: tokens in the pool at the start
    max_taken: most tokens a side may remove in one turn
    """
    starting_total: int = STARTING_TOTAL
    max_taken: int = MAX_TAKEN

    def __post_init__(self):
        errors = validate_rules(self.starting_total, self.max_taken)
        if errors:
            raise RulesValidationError(errors)

    @property
    def modulus(self) -> int:
        """Pools that are a multiple of this are lost by the side to move."""
        return self.max_taken + 1


def validate_rules(starting_total: int, max_taken: int) -> list[str]:
    """Return a list of problems with the given parameters (empty if valid)."""
    errors: list[str] = []

    if not isinstance(starting_total, int) or isinstance(starting_total, bool):
        errors.append("starting_total must be an integer")
    elif starting_total < 1:
        errors.append("starting_total must be >= 1")

    if not isinstance(max_taken, int) or isinstance(max_taken, bool):
        errors.append("max_taken must be an integer")
    elif max_taken < 1:
        errors.append("max_taken must be >= 1")
    elif max_taken > len(ORDINALS):
        errors.append(f"max_taken must be <= {len(ORDINALS)}")

    return errors
