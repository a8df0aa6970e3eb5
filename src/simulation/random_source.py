"""
Deterministic Random Source

Linear congruential generator with exact 64-bit wraparound arithmetic.
Python integers are unbounded, so every step masks the state back to 64 bits;
this keeps sequences identical to any implementation using native uint64.
"""

UINT64_MASK = (1 << 64) - 1

# Seed used for the reference report build
DEFAULT_SEED = 0xC0FFEE


class SeededRNG:
    """
    Stateful pseudorandom generator seeded once per simulation run.

    The sequence depends only on the seed and the number of calls made so
    far, so callers must consume values in a fixed order.
    """

    MULTIPLIER = 6364136223846793005
    INCREMENT = 1

    def __init__(self, seed: int = DEFAULT_SEED):
        self.state = seed & UINT64_MASK

    def next(self) -> int:
        """Advance the state and return it as an unsigned 64-bit integer."""
        self.state = (self.state * self.MULTIPLIER + self.INCREMENT) & UINT64_MASK
        return self.state

    def next_unit(self) -> float:
        """Return a float in [0, 1) built from the top 53 bits of the next state."""
        return (self.next() >> 11) / float(1 << 53)
