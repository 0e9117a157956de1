"""Dice state of the turn that is being played"""

import random
from dataclasses import dataclass
from typing import Callable

DICE_FACES = (1, 2, 3, 4, 5, 6)
# A pawn can only leave the initial zone with one of these results
ENTRY_ROLLS = (1, 6)
BONUS_ROLL = 6
# Rolling a 6 grants another roll, but never more than this many rolls in one turn
MAX_ROLLS_PER_TURN = 3

DiceRoller = Callable[[], int]


def roll_die() -> int:
    return random.randint(DICE_FACES[0], DICE_FACES[-1])


@dataclass
class Dice:
    count: int = 0
    result: int = 1
    able_to_roll: bool = False
    roll_animation: bool = False

    def roll(self, roller: DiceRoller = roll_die) -> int:
        """Draw a new result. Rolling again has to wait until the turn moves on."""
        self.able_to_roll = False
        self.roll_animation = True
        self.result = roller()
        self.count += 1
        return self.result

    def grants_another_roll(self) -> bool:
        return self.result == BONUS_ROLL and self.count < MAX_ROLLS_PER_TURN

    def reset_count(self) -> None:
        self.count = 0
