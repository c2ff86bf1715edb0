from dataclasses import dataclass
import math

MASK64 = 0xFFFFFFFFFFFFFFFF
U64_MAX = MASK64

# Fixed non-zero starting state; seed() mixes into it.
DEFAULT_S0 = 0x9E3779B97F4A7C15
DEFAULT_S1 = 0xBF58476D1CE4E5B9

WARMUP_DRAWS = 64


def rotl64(x: int, k: int) -> int:
    return ((x << k) | (x >> (64 - k))) & MASK64


@dataclass
class Xoroshiro128Plus:
    """
    xoroshiro128+ generator. One instance per generation task; nothing in
    keygrid keeps a process-wide generator.
    """
    s0: int = DEFAULT_S0
    s1: int = DEFAULT_S1

    @classmethod
    def from_seed(cls, a: int, b: int) -> "Xoroshiro128Plus":
        rng = cls()
        rng.seed(a, b)
        return rng

    def next_u64(self) -> int:
        s0, s1 = self.s0, self.s1
        result = (s0 + s1) & MASK64
        s1 ^= s0
        self.s0 = rotl64(s0, 55) ^ s1 ^ ((s1 << 14) & MASK64)
        self.s1 = rotl64(s1, 36)
        return result

    def seed(self, a: int, b: int) -> None:
        # XOR into the current state, then discard the warm-up draws.
        self.s0 ^= a & MASK64
        self.s1 ^= b & MASK64
        for _ in range(WARMUP_DRAWS):
            self.next_u64()

    def next_float(self) -> float:
        """Uniform float in [0, 1] (both ends reachable)."""
        return self.next_u64() / U64_MAX

    def next_int_range(self, low: int, high: int) -> int:
        """Integer in [low, high], inclusive on both ends."""
        span = abs(high - low) + 1
        # next_float() can return exactly 1.0
        return min(math.floor(self.next_float() * span) + low, low + span - 1)

    def chance(self, p: float) -> bool:
        return self.next_float() <= p

