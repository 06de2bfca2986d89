"""
Alea pseudo-random stream used for every crater draw.

Based on Johannes Baagøe's Alea algorithm. The stream is a plain value that
the generator creates from the world seed and passes along explicitly, so a
fixed seed always reproduces the same sequence of crater sizes, placements
and depths.
"""

from typing import Union


def _uint32(n):
    """Convert to unsigned 32-bit integer."""
    return int(n) & 0xFFFFFFFF


class AleaPRNG:
    """
    Seeded Alea generator producing floats in [0, 1).

    The seed is hashed through Alea's mash function as a string, so the
    integers ``42`` and the string ``"42"`` give the same stream.
    """

    def __init__(self, seed: Union[int, str]):
        """Initialize with a seed number or string."""
        # Number of values drawn so far, handy when auditing draw order
        self.call_count = 0

        mash_n = 0xEFC8249D  # 4022871197

        def mash(data):
            nonlocal mash_n
            data = str(data)
            for char in data:
                mash_n = mash_n + ord(char)
                h = 0.02519603282416938 * mash_n
                mash_n = _uint32(h)
                h -= mash_n
                h *= mash_n
                mash_n = _uint32(h)
                h -= mash_n
                mash_n += h * 0x100000000  # 2^32
            return _uint32(mash_n) * 2.3283064365386963e-10  # 2^-32

        self.s0 = mash(" ")
        self.s1 = mash(" ")
        self.s2 = mash(" ")
        self.c = 1

        self.s0 -= mash(seed)
        if self.s0 < 0:
            self.s0 += 1
        self.s1 -= mash(seed)
        if self.s1 < 0:
            self.s1 += 1
        self.s2 -= mash(seed)
        if self.s2 < 0:
            self.s2 += 1

    def random(self) -> float:
        """Generate next random number in [0, 1)."""
        self.call_count += 1
        t = 2091639 * self.s0 + self.c * 2.3283064365386963e-10  # 2^-32
        self.s0 = self.s1
        self.s1 = self.s2
        self.c = int(t)
        self.s2 = t - self.c
        return self.s2

    def uniform(self, low: float, high: float) -> float:
        """Draw a float uniformly from [low, high)."""
        return low + self.random() * (high - low)
