"""
Test cases for the game state machine and its controller.
"""
import random
import unittest
import sys
from pathlib import Path
from unittest import mock

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from signgame import game
from signgame.game import GameController, PRACTICE_LETTERS, ROUND_SECONDS
from signgame.observer_mock import MockObserver
from signgame.types import NO_MATCH, GameObserverProto, GamePhase, GameState


class TestTransitions(unittest.TestCase):
    """Test the pure transition functions."""

    def setUp(self):
        self.rng = random.Random(1234)
        self.idle = game.initial_state()

    def test_initial_state(self):
        self.assertEqual(self.idle.phase, GamePhase.IDLE)
        self.assertIsNone(self.idle.target_letter)
        self.assertEqual(self.idle.score, 0)
        self.assertEqual(self.idle.time_left, ROUND_SECONDS)

    def test_start(self):
        """Test that start() activates the game with a practice target and a full timer."""
        for _ in range(50):
            state = game.start(self.idle, self.rng)
            self.assertEqual(state.phase, GamePhase.ACTIVE)
            self.assertEqual(state.time_left, 10)
            self.assertIn(state.target_letter, PRACTICE_LETTERS)
            self.assertEqual(len(PRACTICE_LETTERS), 6)

    def test_start_is_noop_outside_idle(self):
        active = game.start(self.idle, self.rng)
        self.assertIs(game.start(active, self.rng), active)

    def test_tick_counts_down_to_over(self):
        """Test that the timer never increases and the game ends exactly at zero."""
        state = game.start(self.idle, self.rng)
        previous = state.time_left
        for expected in range(9, 0, -1):
            state = game.tick(state)
            self.assertEqual(state.time_left, expected)
            self.assertLessEqual(state.time_left, previous)
            self.assertEqual(state.phase, GamePhase.ACTIVE)
            previous = state.time_left

        state = game.tick(state)
        self.assertEqual(state.time_left, 0)
        self.assertEqual(state.phase, GamePhase.OVER)
        self.assertIsNone(state.target_letter)

    def test_ticks_ignored_when_not_active(self):
        self.assertIs(game.tick(self.idle), self.idle)
        over = GameState(phase=GamePhase.OVER, target_letter=None, score=3, time_left=0)
        self.assertIs(game.tick(over), over)

    def test_match_scores_and_refills_timer(self):
        state = game.start(self.idle, self.rng)
        state = game.tick(game.tick(state))
        target = state.target_letter

        state = game.on_detected(state, target, self.rng)

        self.assertEqual(state.score, 1)
        self.assertEqual(state.time_left, 10)
        self.assertIn(state.target_letter, PRACTICE_LETTERS)
        self.assertEqual(state.detected_letter, target)

    def test_mismatch_changes_nothing(self):
        """A wrong letter leaves score, timer and target alone."""
        state = game.tick(game.start(self.idle, self.rng))
        wrong = next(letter for letter in PRACTICE_LETTERS if letter != state.target_letter)

        after = game.on_detected(state, wrong, self.rng)

        self.assertEqual(after.score, state.score)
        self.assertEqual(after.time_left, state.time_left)
        self.assertEqual(after.target_letter, state.target_letter)
        self.assertEqual(after.phase, GamePhase.ACTIVE)

    def test_no_match_changes_nothing(self):
        state = game.start(self.idle, self.rng)
        self.assertIs(game.on_detected(state, NO_MATCH, self.rng), state)

    def test_detection_ignored_when_over(self):
        over = GameState(phase=GamePhase.OVER, target_letter=None, score=2, time_left=0)
        self.assertIs(game.on_detected(over, "A", self.rng), over)

    def test_reset(self):
        over = GameState(phase=GamePhase.OVER, target_letter=None, score=4, time_left=0)
        state = game.reset(over)
        self.assertEqual(state.phase, GamePhase.IDLE)
        self.assertEqual(state.score, 0)
        self.assertEqual(state.time_left, ROUND_SECONDS)

    def test_custom_letters_and_round(self):
        state = game.start(self.idle, self.rng, letters="C", round_seconds=3)
        self.assertEqual(state.target_letter, "C")
        self.assertEqual(state.time_left, 3)
        state = game.on_detected(state, "C", self.rng, letters="C", round_seconds=3)
        self.assertEqual(state.score, 1)
        self.assertEqual(state.target_letter, "C")


class TestGameController(unittest.TestCase):
    """Test the controller scenarios."""

    def setUp(self):
        self.controller = GameController(rng=random.Random(99))
        self.observer = MockObserver()
        self.controller.subscribe(self.observer)

    def test_forced_target_match(self):
        """start -> target A -> detect A: score 1, timer 10, new target."""
        self.controller.start()
        self.controller.force_target("A")
        self.controller.tick()
        self.controller.tick()

        state = self.controller.on_detected("A")

        self.assertEqual(state.score, 1)
        self.assertEqual(state.time_left, 10)
        self.assertIn(state.target_letter, PRACTICE_LETTERS)
        self.assertEqual(state.phase, GamePhase.ACTIVE)

    def test_ten_ticks_end_game(self):
        """start -> 10 ticks with no detection: game over, score 0."""
        self.controller.start()
        for _ in range(10):
            self.controller.tick()

        self.assertEqual(self.controller.state.phase, GamePhase.OVER)
        self.assertEqual(self.controller.state.score, 0)
        self.assertEqual(self.controller.state.time_left, 0)

        # Terminal: further ticks and detections do nothing
        self.controller.tick()
        self.controller.on_detected("A")
        self.assertEqual(self.controller.state.phase, GamePhase.OVER)
        self.assertEqual(self.controller.state.score, 0)

    def test_held_sign_keeps_scoring(self):
        """Every frame showing the target scores again."""
        self.controller.start()
        for expected in range(1, 4):
            self.controller.force_target("B")
            self.controller.on_detected("B")
            self.assertEqual(self.controller.state.score, expected)

    def test_reset_then_fresh_game(self):
        self.controller.start()
        self.controller.force_target("E")
        self.controller.on_detected("E")
        for _ in range(10):
            self.controller.tick()
        self.assertEqual(self.controller.state.phase, GamePhase.OVER)

        self.controller.reset()
        self.assertEqual(self.controller.state.phase, GamePhase.IDLE)
        self.assertEqual(self.controller.state.score, 0)

        state = self.controller.start()
        self.assertEqual(state.phase, GamePhase.ACTIVE)
        self.assertEqual(state.score, 0)
        self.assertEqual(state.time_left, 10)

    def test_commands_ignored_in_idle(self):
        self.controller.tick()
        self.controller.on_detected("A")
        self.assertEqual(self.controller.state, game.initial_state())
        self.assertEqual(self.observer.update_count, 0)

    def test_reset_logged_only_on_change(self):
        """Resetting an idle game is silent; resetting a live one logs."""
        with mock.patch.object(game.logger, "info") as log_info:
            self.controller.reset()
            log_info.assert_not_called()

            self.controller.start()
            log_info.reset_mock()
            self.controller.reset()
            log_info.assert_called_once_with("🔄 Game reset")

        self.assertEqual(self.observer.update_count, 2)

    def test_force_target_requires_active(self):
        with self.assertRaises(ValueError):
            self.controller.force_target("A")

    def test_observer_notified_on_change(self):
        self.assertIsInstance(self.observer, GameObserverProto)
        self.controller.start()
        self.controller.tick()
        self.assertEqual(self.observer.update_count, 2)
        self.assertEqual(self.observer.last, self.controller.state)

        self.controller.unsubscribe(self.observer)
        self.controller.tick()
        self.assertEqual(self.observer.update_count, 2)

    def test_rejects_empty_letters(self):
        with self.assertRaises(ValueError):
            GameController(letters="")


if __name__ == '__main__':
    unittest.main()
