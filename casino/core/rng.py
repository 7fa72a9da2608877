import secrets
from typing import Sequence


class TrueRNG:
    """
    A wrapper around Python's `secrets` module to provide cryptographically strong
    random numbers, suitable for casino game logic.
    All outcome generators draw through the module-level `rng` so tests can patch it.
    """

    PRECISION = 10**12

    @staticmethod
    def random_float() -> float:
        """Returns a random float in the range [0.0, 1.0)."""
        # secrets.randbelow(n) returns [0, n). We use a large integer range to approximate a float.
        return secrets.randbelow(TrueRNG.PRECISION) / TrueRNG.PRECISION

    @staticmethod
    def random_int(min_val: int, max_val: int) -> int:
        """Returns a random integer in the range [min_val, max_val] (inclusive)."""
        if min_val > max_val:
            raise ValueError("min_val must be less than or equal to max_val")
        return min_val + secrets.randbelow(max_val - min_val + 1)

    @staticmethod
    def random_choice(options: Sequence):
        """Returns a random element from a non-empty sequence."""
        if not options:
            raise IndexError("Cannot choose from an empty sequence")
        return options[secrets.randbelow(len(options))]

    def weighted_index(self, weights: Sequence[float]) -> int:
        """
        Pick an index with probability proportional to its weight.
        Falls through to the last index if float rounding leaves a remainder.
        """
        total = sum(weights)
        remaining = self.random_float() * total
        for index, weight in enumerate(weights):
            remaining -= weight
            if remaining < 0:
                return index
        return len(weights) - 1

    @staticmethod
    def shuffle(items: Sequence) -> list:
        """Returns a new list shuffled with Fisher-Yates; the input is left untouched."""
        shuffled = list(items)
        for i in range(len(shuffled) - 1, 0, -1):
            j = secrets.randbelow(i + 1)
            shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
        return shuffled


rng = TrueRNG()
