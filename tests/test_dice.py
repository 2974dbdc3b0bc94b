import pytest

from exoforge.exceptions import InvalidInputError
from exoforge.util.dice import (
    GenerationContext,
    PreparedRoll,
    RollToProcess,
    SeededDiceRoller,
    rng,
)


class TestRng:
    """Generators built from a seed and a label."""

    def test_same_label_same_draws(self):
        assert rng("seed", "label").random() == rng("seed", "label").random()

    def test_labels_are_independent(self):
        draws = {rng("seed", f"label{i}").random() for i in range(20)}
        assert len(draws) == 20

    def test_seed_changes_draws(self):
        assert rng("a", "label").random() != rng("b", "label").random()


class TestSeededDiceRoller:
    """Dice, ranges and weighted picks."""

    def test_roll_bounds(self):
        roller = SeededDiceRoller("seed", "bounds")
        for _ in range(200):
            assert 3 <= roller.roll(3, 6) <= 18

    def test_roll_modifier(self):
        roller = SeededDiceRoller("seed", "modifier")
        for _ in range(100):
            assert -4 <= roller.roll(1, 6, -5) <= 1

    def test_zero_dice_is_modifier(self):
        assert SeededDiceRoller("seed", "zero").roll(0, 6, 4) == 4

    def test_invalid_dice(self):
        roller = SeededDiceRoller("seed", "invalid")
        with pytest.raises(InvalidInputError):
            roller.roll(1, 0)
        with pytest.raises(InvalidInputError):
            roller.roll(-1, 6)

    def test_gen_range(self):
        roller = SeededDiceRoller("seed", "range")
        for _ in range(100):
            assert 1.5 <= roller.gen_range(1.5, 2.0) < 2.0

    def test_empty_range(self):
        with pytest.raises(InvalidInputError):
            SeededDiceRoller("seed", "range").gen_range(2.0, 2.0)

    def test_invalid_input_is_value_error(self):
        with pytest.raises(ValueError):
            SeededDiceRoller("seed", "range").gen_range(3.0, 1.0)

    def test_all_zero_weights(self):
        roller = SeededDiceRoller("seed", "weights")
        assert roller.get_result(RollToProcess.from_weights({"a": 0, "b": 0})) is None

    def test_single_weight_always_wins(self):
        roller = SeededDiceRoller("seed", "weights")
        roll = RollToProcess.from_weights([("a", 0), ("b", 3), ("c", 0)])
        assert all(roller.get_result(roll) == "b" for _ in range(50))

    def test_prepared_roll_extremes(self):
        roller = SeededDiceRoller("seed", "prepared")
        weights = [("low", 1), ("mid", 4), ("high", 1)]
        # Modifiers push the clamped total to either end of the weights
        assert roller.get_result(RollToProcess.from_weights(weights, PreparedRoll(2, 6, -20))) == "low"
        assert roller.get_result(RollToProcess.from_weights(weights, PreparedRoll(2, 6, 20))) == "high"

    def test_replay(self):
        first = SeededDiceRoller("seed", "replay")
        second = SeededDiceRoller("seed", "replay")
        assert [first.roll(1, 100) for _ in range(10)] == [second.roll(1, 100) for _ in range(10)]


class TestGenerationContext:
    """Decision labels."""

    def test_label(self):
        context = GenerationContext("seed", (1, -2, 3), 4, 5)
        assert context.label("_bdy7_hydr") == "sys_1,-2,3_4_str_5_bdy7_hydr"

    def test_for_star(self):
        context = GenerationContext("seed", (0, 0, 0), 2).for_star(3)
        assert context.label("") == "sys_0,0,0_2_str_3"
        assert context.seed == "seed"
