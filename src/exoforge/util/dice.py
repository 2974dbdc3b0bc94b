"""
Seeded dice rolling.

Every decision in a generation run gets its own generator, built from the run
seed and a label naming the decision. Nothing is shared between decisions, so
any value can be reproduced on its own and generation order does not matter.
"""

from __future__ import annotations

import hashlib
from typing import Any, Optional, Sequence

import numpy as np

from exoforge.exceptions import InvalidInputError


def label_to_u64(seed: str, label: str) -> int:
    digest = hashlib.blake2b(f"{seed}|{label}".encode("utf-8"), digest_size=8)
    return int.from_bytes(digest.digest(), "little")


def rng(seed: str, label: str) -> np.random.Generator:
    """
    Build a fresh generator for one decision point
    Args:
        seed (str):
            Seed of the whole generation run
        label (str):
            Name of the decision, e.g. "sys_0,0,0_0_str_1_bdy4_hydr"
    Returns:
        np.random.Generator:
            Generator that only depends on (seed, label)
    """
    return np.random.default_rng(np.uint64(label_to_u64(seed, label)))


class WeightedResult:
    def __init__(self, value: Any, weight: float) -> None:
        self.value = value
        self.weight = max(weight, 0)

    def __repr__(self):
        return f"WeightedResult({self.value!r}, {self.weight})"


class SimpleRoll:
    """
    Pick a result with a probability proportional to its weight
    """

    def __repr__(self):
        return "SimpleRoll()"


class PreparedRoll:
    """
    Roll dice and read the clamped total as a position along the cumulative
    weights, so results in the middle of the list come up most often
    """

    def __init__(self, dice: int, sides: int, modifier: int = 0) -> None:
        self.dice = dice
        self.sides = sides
        self.modifier = modifier

    def __repr__(self):
        return f"PreparedRoll({self.dice}, {self.sides}, {self.modifier})"


class RollToProcess:
    def __init__(self, results: Sequence[WeightedResult], method=None) -> None:
        self.results = list(results)
        self.method = method if method is not None else SimpleRoll()

    @classmethod
    def from_weights(cls, weights, method=None):
        """
        Build from a {value: weight} mapping or a list of (value, weight)
        pairs, keeping their order
        """
        items = weights.items() if isinstance(weights, dict) else weights
        return cls([WeightedResult(value, weight) for value, weight in items], method)

    @property
    def total_weight(self):
        return sum(result.weight for result in self.results)


class SeededDiceRoller:
    """
    Dice roller bound to one (seed, label) pair
    """

    def __init__(self, seed: str, label: str) -> None:
        self.seed = seed
        self.label = label
        self._rng = rng(seed, label)

    def __repr__(self):
        return f"{type(self).__name__} object\n{self.label}"

    def roll(self, dice: int, sides: int, modifier: int = 0) -> int:
        """
        Sum of `dice` throws of a `sides` sided die, plus `modifier`
        """
        if sides < 1:
            raise InvalidInputError(f"Cannot roll a die with {sides} sides")
        if dice < 0:
            raise InvalidInputError(f"Cannot roll {dice} dice")
        if dice == 0:
            return int(modifier)
        throws = self._rng.integers(1, sides + 1, size=dice)
        return int(throws.sum()) + int(modifier)

    def gen_range(self, low: float, high: float) -> float:
        if not high > low:
            raise InvalidInputError(f"Empty range [{low}, {high})")
        return float(self._rng.uniform(low, high))

    def get_result(self, roll_to_process: RollToProcess) -> Optional[Any]:
        """
        Pick one of the weighted results
        Args:
            roll_to_process (RollToProcess):
                Results, their weights and the method to pick with
        Returns:
            Any:
                The picked value, None when every weight is zero
        """
        total = roll_to_process.total_weight
        if total <= 0:
            return None

        method = roll_to_process.method
        if isinstance(method, PreparedRoll):
            lowest = method.dice
            highest = method.dice * method.sides
            rolled = self.roll(method.dice, method.sides, method.modifier)
            rolled = min(max(rolled, lowest), highest)
            if highest == lowest:
                position = 0.0
            else:
                # Maps the highest total just under the end of the last weight
                position = (rolled - lowest) / (highest - lowest) * total
                position = min(position, np.nextafter(total, 0))
        else:
            position = self._rng.random() * total

        cumulative = 0.0
        for result in roll_to_process.results:
            cumulative += result.weight
            if result.weight > 0 and position < cumulative:
                return result.value
        return [r for r in roll_to_process.results if r.weight > 0][-1].value


class GenerationContext:
    """
    Position of a star inside the generation run, used to build decision
    labels
    """

    def __init__(self, seed: str, coord=(0, 0, 0), system_index: int = 0, star_id: int = 0) -> None:
        self.seed = seed
        self.coord = coord
        self.system_index = system_index
        self.star_id = star_id

    def __repr__(self):
        return f"{type(self).__name__}({self.label('')})"

    @property
    def coord_str(self):
        if isinstance(self.coord, (tuple, list)):
            return ",".join(str(c) for c in self.coord)
        return str(self.coord)

    def label(self, suffix: str) -> str:
        return f"sys_{self.coord_str}_{self.system_index}_str_{self.star_id}{suffix}"

    def roller(self, suffix: str) -> SeededDiceRoller:
        return SeededDiceRoller(self.seed, self.label(suffix))

    def for_star(self, star_id: int) -> "GenerationContext":
        return GenerationContext(self.seed, self.coord, self.system_index, star_id)
