from crossfill.data.dictionary import WordDictionary
from crossfill.engine.puzzle import Puzzle

# Three-letter rows with a black centre: four searchable slots in a ring.
RING = ["---", "-#-", "---"]
# Two three-letter slots crossing in the middle cell.
PLUS = ["#-#", "---", "#-#"]
# Two three-letter slots sharing their first cell.
CORNER = ["---", "-##", "-##"]
SQUARE = ["---", "---", "---"]


class FixedRandom:
    """Deterministic stand-in for ``random.Random`` cycling through values."""

    def __init__(self, values) -> None:
        self.values = list(values)
        self.calls = 0

    def randrange(self, stop: int) -> int:
        value = self.values[self.calls % len(self.values)] % stop
        self.calls += 1
        return value


def build_puzzle(rows, words) -> Puzzle:
    return Puzzle(rows, WordDictionary.from_words(words))
