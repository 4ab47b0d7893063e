import math
import random
import unittest

from crossfill.core.constants import BLANK, SolveStatus
from crossfill.engine.solver import (
    CandidateScore,
    ConflictedScanStrategy,
    CrosswordSolver,
    RecentCrossingStrategy,
    SolverConfig,
)
from crossfill.engine.validator import GridValidator

from helpers import CORNER, PLUS, RING, SQUARE, FixedRandom, build_puzzle

SCENARIO_C_WORDS = ["CAT", "ARC", "DOG", "ACE"]
SQUARE_WORDS = ["BAT", "ARE", "TEN", "CAT", "ONE", "ART", "TOE", "BAN", "ATE", "RAN", "EAT", "NET"]


def quiet_config(**overrides) -> SolverConfig:
    return SolverConfig(refresh_rate=0, **overrides)


class CandidateScoreTests(unittest.TestCase):
    def test_score_is_product_of_log_domain_sizes(self) -> None:
        candidate = CandidateScore.build("CAT", [(4, ["CAT", "COT"]), (7, ["TEN"])])
        self.assertAlmostEqual(candidate.score, math.log(3) * math.log(2))
        self.assertEqual(candidate.crossings, ((4, ("CAT", "COT")), (7, ("TEN",))))

    def test_no_crossings_scores_one(self) -> None:
        self.assertEqual(CandidateScore.build("CAT", []).score, 1.0)

    def test_empty_crossing_domain_scores_zero(self) -> None:
        self.assertEqual(CandidateScore.build("CAT", [(4, ["CAT"]), (7, [])]).score, 0.0)


class EndToEndTests(unittest.TestCase):
    def test_single_row_solves_to_a_dictionary_word(self) -> None:
        for seed in range(5):
            puzzle = build_puzzle(["---"], ["CAT", "DOG"])
            solver = CrosswordSolver(puzzle, quiet_config(seed=seed))
            self.assertTrue(solver.solve(refresh_rate=0))
            self.assertIn(solver.render()[0], {"CAT", "DOG"})
            self.assertEqual(solver.check(), [])
            self.assertEqual(solver.status, SolveStatus.SOLVED)

    def test_injected_random_source_pins_the_choice(self) -> None:
        for index, expected in ((0, "CAT"), (1, "DOG")):
            puzzle = build_puzzle(["---"], ["CAT", "DOG"])
            solver = CrosswordSolver(puzzle, quiet_config(), rng=FixedRandom([index]))
            self.assertTrue(solver.solve())
            self.assertEqual(solver.render(), [expected])

    def test_unfillable_ring_fails(self) -> None:
        for seed in range(10):
            puzzle = build_puzzle(RING, ["CAT", "DOG"])
            solver = CrosswordSolver(puzzle, quiet_config(seed=seed))
            self.assertFalse(solver.solve())
            self.assertEqual(solver.status, SolveStatus.FAILED)
            self.assertLessEqual(solver.step, 10)
            self.assertTrue(solver.worklist)

    def test_crossing_slots_share_middle_letter(self) -> None:
        for seed in range(10):
            puzzle = build_puzzle(PLUS, SCENARIO_C_WORDS)
            solver = CrosswordSolver(puzzle, quiet_config(seed=seed))
            self.assertTrue(solver.solve())
            across, down = puzzle.slot(1), puzzle.slot(4)
            self.assertEqual(across.word[1], down.word[1])
            self.assertEqual(puzzle.grid.cell(1, 1).fill_count, 2)
            self.assertEqual(solver.check(), [])
            self.assertEqual(solver.step, 3)

    def test_crossing_slots_share_first_letter(self) -> None:
        for seed in range(10):
            puzzle = build_puzzle(CORNER, SCENARIO_C_WORDS)
            solver = CrosswordSolver(puzzle, quiet_config(seed=seed))
            self.assertTrue(solver.solve())
            across, down = puzzle.slot(0), puzzle.slot(3)
            self.assertEqual(across.word[0], down.word[0])
            self.assertIn(across.word, SCENARIO_C_WORDS)
            self.assertIn(down.word, SCENARIO_C_WORDS)
            GridValidator(puzzle.dictionary).assert_valid(puzzle)

    def test_solve_is_idempotent_once_finished(self) -> None:
        puzzle = build_puzzle(["---"], ["CAT"])
        solver = CrosswordSolver(puzzle, quiet_config())
        self.assertTrue(solver.solve())
        step = solver.step
        self.assertTrue(solver.solve())
        self.assertEqual(solver.step, step)

    def test_step_limit_stops_the_attempt(self) -> None:
        puzzle = build_puzzle(PLUS, SCENARIO_C_WORDS)
        solver = CrosswordSolver(puzzle, quiet_config(max_steps=1, seed=3))
        self.assertFalse(solver.solve())
        self.assertEqual(solver.status, SolveStatus.STEP_LIMIT)
        self.assertEqual(solver.fills, 1)

    def test_progress_is_logged_at_refresh_rate(self) -> None:
        puzzle = build_puzzle(["---"], ["CAT"])
        solver = CrosswordSolver(puzzle, quiet_config())
        with self.assertLogs("crossfill.engine.solver", level="INFO") as logs:
            self.assertTrue(solver.solve(refresh_rate=1))
        self.assertIn("Step 1, 1 slots queued", logs.output[0])
        self.assertIn("Solved after 1 steps", logs.output[-1])


class HeuristicTests(unittest.TestCase):
    def test_select_prefers_smallest_domain_then_earliest(self) -> None:
        puzzle = build_puzzle(RING, ["CAT", "DOG"])
        solver = CrosswordSolver(puzzle, quiet_config())
        self.assertIs(solver.select_slot(), puzzle.slot(0))
        puzzle.slot(7).update_options(["CAT"])
        self.assertIs(solver.select_slot(), puzzle.slot(7))

    def test_sampling_is_bounded_by_pool_length(self) -> None:
        puzzle = build_puzzle(["---"], ["CAT"])
        rng = FixedRandom([0, 5, 5, 9, 17])
        solver = CrosswordSolver(puzzle, quiet_config(max_word_pool_length=3), rng=rng)
        self.assertEqual(solver.sample_indices(40), [5, 0])
        self.assertEqual(rng.calls, 3)
        self.assertEqual(solver.sample_indices(2), [1])

    def test_choose_word_prefers_roomier_crossings(self) -> None:
        puzzle = build_puzzle(CORNER, ["ACE", "ARC", "CAT", "DOG"])
        solver = CrosswordSolver(puzzle, quiet_config(), rng=FixedRandom([0, 2]))
        choice = solver.choose_word(puzzle.slot(0))
        self.assertEqual(choice.word, "ACE")
        self.assertEqual(choice.crossings, ((3, ("ACE", "ARC")),))

    def test_choose_word_on_empty_domain(self) -> None:
        puzzle = build_puzzle(["---"], ["DOGS"])
        solver = CrosswordSolver(puzzle, quiet_config())
        self.assertIsNone(solver.choose_word(puzzle.slot(0)))


class BackjumpTests(unittest.TestCase):
    def setUp(self) -> None:
        self.puzzle = build_puzzle(RING, ["CAT", "DOG"])
        self.solver = CrosswordSolver(self.puzzle, quiet_config(), rng=FixedRandom([0]))

    def test_backjump_unwinds_most_recent_crossing(self) -> None:
        top = self.puzzle.slot(0)
        self.solver._commit(top, self.solver.choose_word(top))
        self.assertEqual(top.word, "CAT")
        self.assertEqual(self.puzzle.slot(4).options, ["CAT"])
        self.assertEqual(self.puzzle.slot(7).options, [])

        dead_end = self.solver.select_slot()
        self.assertIs(dead_end, self.puzzle.slot(7))
        self.assertIsNone(self.solver.choose_word(dead_end))

        undone = self.solver.backjump(dead_end)
        self.assertEqual(undone, [top])
        self.assertEqual(top.stamp, 0)
        self.assertEqual(top.options, [])
        self.assertEqual(self.puzzle.slot(4).options, ["CAT", "DOG"])
        self.assertEqual(self.puzzle.slot(7).options, ["CAT", "DOG"])
        self.assertTrue(self.puzzle.grid.is_empty())
        self.assertTrue(self.puzzle.grid.cell(2, 2).conflicted)
        self.assertEqual(self.solver.backjumps, 1)

        self.solver.worklist = undone + self.solver.worklist
        self.assertIsNone(self.solver.backjump(top))
        self.assertEqual(top.options, ["CAT", "DOG"])

    def test_recent_crossing_strategy_needs_a_filled_neighbour(self) -> None:
        strategy = RecentCrossingStrategy()
        dead_end = self.puzzle.slot(7)
        self.assertIsNone(strategy.find_target(self.puzzle, dead_end))
        self.puzzle.slot(3).fill("CAT", 4)
        self.puzzle.slot(0).fill("DOG", 2)
        self.assertIs(strategy.find_target(self.puzzle, dead_end), self.puzzle.slot(3))

    def test_conflicted_scan_picks_latest_conflicted_slot(self) -> None:
        strategy = ConflictedScanStrategy()
        self.puzzle.slot(0).fill("CAT", 2)
        self.puzzle.slot(3).fill("DOG", 5)
        dead_end = self.puzzle.slot(7)
        dead_end.update_options([])
        self.puzzle.slot(4).mark_conflicted()

        self.assertIs(strategy.find_target(self.puzzle, dead_end), self.puzzle.slot(3))
        self.assertEqual(dead_end.options, [])

    def test_conflicted_scan_restores_dead_end_domain(self) -> None:
        strategy = ConflictedScanStrategy()
        dead_end = self.puzzle.slot(0)
        dead_end.update_options([])
        dead_end.mark_conflicted()
        self.assertIsNone(strategy.find_target(self.puzzle, dead_end))
        self.assertEqual(dead_end.options, ["CAT", "DOG"])

    def test_conflict_set_follows_later_crossings(self) -> None:
        puzzle = build_puzzle(SQUARE, SQUARE_WORDS)
        solver = CrosswordSolver(puzzle, quiet_config())
        puzzle.slot(3).fill("BAT", 1)
        puzzle.slot(1).fill("ARE", 2)
        puzzle.slot(5).fill("TEN", 3)
        puzzle.slot(0).fill("BAT", 4)

        self.assertEqual({slot.id for slot in solver.conflict_set(puzzle.slot(1))}, {5, 0})
        self.assertEqual({slot.id for slot in solver.conflict_set(puzzle.slot(3))}, {1, 5, 0})
        self.assertEqual(solver.conflict_set(puzzle.slot(0)), [])


class InvariantTests(unittest.TestCase):
    """Checks the grid and domain invariants after every solver step."""

    def assert_invariants(self, solver: CrosswordSolver) -> None:
        puzzle = solver.puzzle
        for r, c, cell in puzzle.grid.iter_cells():
            if cell.is_black():
                continue
            claims = sum(1 for slot_id in (cell.h_slot, cell.v_slot) if puzzle.slot(slot_id).filled)
            self.assertEqual(cell.fill_count, claims, (r, c))
            self.assertEqual(cell.letter == BLANK, cell.fill_count == 0, (r, c))

        for slot in solver.worklist:
            self.assertFalse(slot.filled)
            mask = slot.letters
            for option in slot.options:
                for letter, fixed in zip(option, mask):
                    if fixed != BLANK:
                        self.assertEqual(letter, fixed, (slot.id, option, mask))

    def run_checked(self, solver: CrosswordSolver) -> bool:
        commit, backjump = solver._commit, solver.backjump

        def checked_commit(slot, choice):
            commit(slot, choice)
            self.assert_invariants(solver)

        def checked_backjump(slot):
            undone = backjump(slot)
            self.assert_invariants(solver)
            for requeued in undone or []:
                self.assertEqual(requeued.stamp, 0)
            return undone

        solver._commit = checked_commit
        solver.backjump = checked_backjump
        return solver.solve()

    def test_invariants_hold_on_word_square(self) -> None:
        for seed in range(8):
            puzzle = build_puzzle(SQUARE, SQUARE_WORDS)
            solver = CrosswordSolver(puzzle, quiet_config(seed=seed, max_steps=400))
            solved = self.run_checked(solver)
            self.assertLessEqual(solver.step, 401)
            if solved:
                self.assertEqual(solver.check(), [])
                GridValidator(puzzle.dictionary).assert_valid(puzzle)

    def test_invariants_hold_on_ring(self) -> None:
        words = ["CAT", "TOE", "EGG", "COG", "GET", "TAG", "DOT"]
        for seed in range(8):
            puzzle = build_puzzle(RING, words)
            solver = CrosswordSolver(puzzle, quiet_config(seed=seed, max_steps=400))
            self.run_checked(solver)
            self.assertLessEqual(solver.step, 401)

    def test_random_source_defaults_to_seeded_random(self) -> None:
        puzzle = build_puzzle(["---"], ["CAT"])
        solver = CrosswordSolver(puzzle, quiet_config(seed=7))
        self.assertIsInstance(solver.rng, random.Random)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
