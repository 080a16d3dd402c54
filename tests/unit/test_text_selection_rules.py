import random
import sys
from pathlib import Path
import unittest

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from dungeon_text.application.services.text_cooldown_state import TextCooldownState
from dungeon_text.application.services.text_selection_rules import can_use_line, select_weighted_match
from dungeon_text.domain.models.text_line import TextLine
from dungeon_text.domain.models.text_observation import TextObservation


class _ScriptedRng:
    def __init__(self, rolls):
        self.rolls = list(rolls)
        self.calls: list[int] = []

    def randrange(self, stop: int) -> int:
        self.calls.append(stop)
        return self.rolls.pop(0)


def _line(line_id: str, weight: int = 1, cooldown_turns: int = 0, text: str = "Text", **conditions) -> TextLine:
    line = TextLine(id=line_id, weight=weight, cooldown_turns=cooldown_turns, text=text, **conditions)
    line.build_condition_cache()
    return line


class SelectWeightedMatchTests(unittest.TestCase):
    def test_rolls_map_to_cumulative_weight_buckets(self) -> None:
        pool = [_line("A", weight=1), _line("B", weight=3)]
        expected = {0: "A", 1: "B", 2: "B", 3: "B"}
        for roll, line_id in expected.items():
            with self.subTest(roll=roll):
                rng = _ScriptedRng([roll])
                picked = select_weighted_match(pool, TextObservation(), TextCooldownState(), rng)
                self.assertEqual(line_id, picked.id)
                self.assertEqual([4], rng.calls)

    def test_empty_pool_returns_none_without_drawing(self) -> None:
        rng = _ScriptedRng([])
        self.assertIsNone(select_weighted_match([], TextObservation(), TextCooldownState(), rng))
        self.assertEqual([], rng.calls)

    def test_ineligible_lines_are_filtered_before_drawing(self) -> None:
        pool = [
            _line("zero_weight", weight=0),
            _line("negative_cooldown", cooldown_turns=-1),
            _line("blank_text", text="  "),
            _line("", weight=5),
            None,
            _line("no_match", mental="90-100"),
            _line("eligible", weight=2),
        ]
        rng = _ScriptedRng([1])
        picked = select_weighted_match(pool, TextObservation(mental_state=10), TextCooldownState(), rng)
        self.assertEqual("eligible", picked.id)
        self.assertEqual([2], rng.calls)

    def test_lines_on_cooldown_are_skipped(self) -> None:
        cooling = _line("cooling", weight=10, cooldown_turns=2)
        ready = _line("ready", weight=1)
        state = TextCooldownState()
        state.apply(cooling)

        picked = select_weighted_match([cooling, ready], TextObservation(), state, _ScriptedRng([0]))

        self.assertEqual("ready", picked.id)

    def test_nothing_eligible_returns_none(self) -> None:
        cooling = _line("cooling", cooldown_turns=2)
        state = TextCooldownState()
        state.apply(cooling)
        self.assertIsNone(select_weighted_match([cooling], TextObservation(), state, _ScriptedRng([])))

    def test_missing_arguments_raise(self) -> None:
        with self.assertRaises(ValueError):
            select_weighted_match(None, TextObservation(), TextCooldownState(), random.Random(1))
        with self.assertRaises(ValueError):
            select_weighted_match([], TextObservation(), None, random.Random(1))
        with self.assertRaises(ValueError):
            select_weighted_match([], TextObservation(), TextCooldownState(), None)

    def test_selection_frequency_follows_weights(self) -> None:
        pool = [_line("A", weight=1), _line("B", weight=3)]
        rng = random.Random(20240611)
        state = TextCooldownState()
        trials = 20_000
        hits = sum(1 for _ in range(trials) if select_weighted_match(pool, TextObservation(), state, rng).id == "A")
        self.assertAlmostEqual(0.25, hits / trials, delta=0.02)

    def test_same_seed_replays_same_sequence(self) -> None:
        pool = [_line("A", weight=2), _line("B", weight=5), _line("C", weight=3)]

        def _draws(seed: int) -> list[str]:
            rng = random.Random(seed)
            return [select_weighted_match(pool, TextObservation(), TextCooldownState(), rng).id for _ in range(25)]

        self.assertEqual(_draws(9), _draws(9))


class CanUseLineTests(unittest.TestCase):
    def test_usable_line(self) -> None:
        self.assertTrue(can_use_line(TextLine(id="ok", weight=1, cooldown_turns=0, text="Text")))

    def test_unusable_lines(self) -> None:
        self.assertFalse(can_use_line(None))
        self.assertFalse(can_use_line(TextLine(id=" ", weight=1, cooldown_turns=0, text="Text")))
        self.assertFalse(can_use_line(TextLine(id="x", weight=-1, cooldown_turns=0, text="Text")))


if __name__ == "__main__":
    unittest.main()
