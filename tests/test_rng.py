from keygrid.rng import MASK64, Xoroshiro128Plus, rotl64


def test_rotl64_wraps():
    assert rotl64(1, 55) == 1 << 55
    assert rotl64(1 << 63, 1) == 1
    assert rotl64(MASK64, 13) == MASK64


def test_xoroshiro_recurrence_from_known_state():
    rng = Xoroshiro128Plus(s0=1, s1=2)
    assert rng.next_u64() == 3
    # s1 ^= s0 -> 3; s0 = rotl(1,55) ^ 3 ^ (3 << 14); s1 = rotl(3,36)
    assert (rng.s0, rng.s1) == ((1 << 55) ^ 3 ^ (3 << 14), 3 << 36)
    assert rng.next_u64() == (1 << 55) + 49155 + (3 << 36)


def test_output_stays_64_bit():
    rng = Xoroshiro128Plus(s0=MASK64, s1=MASK64)
    for _ in range(100):
        assert 0 <= rng.next_u64() <= MASK64


def test_same_seed_same_stream():
    a = Xoroshiro128Plus.from_seed(1, 1)
    b = Xoroshiro128Plus.from_seed(1, 1)
    assert [a.next_u64() for _ in range(20)] == [b.next_u64() for _ in range(20)]


def test_seed_xors_into_state_and_warms_up():
    a = Xoroshiro128Plus.from_seed(1, 1)
    b = Xoroshiro128Plus.from_seed(1, 2)
    assert [a.next_u64() for _ in range(5)] != [b.next_u64() for _ in range(5)]

    c = Xoroshiro128Plus(s0=5, s1=7)
    c.seed(0, 0)
    d = Xoroshiro128Plus(s0=5, s1=7)
    for _ in range(64):
        d.next_u64()
    assert (c.s0, c.s1) == (d.s0, d.s1)


def test_int_range_inclusive_both_ends():
    rng = Xoroshiro128Plus.from_seed(3, 4)
    seen = {rng.next_int_range(1, 20) for _ in range(2000)}
    assert seen == set(range(1, 21))


def test_int_range_when_float_hits_one():
    rng = Xoroshiro128Plus.from_seed(1, 1)
    rng.next_float = lambda: 1.0
    assert rng.next_int_range(3, 5) == 5
    rng.next_float = lambda: 0.0
    assert rng.next_int_range(3, 5) == 3


def test_float_and_chance():
    rng = Xoroshiro128Plus.from_seed(9, 9)
    for _ in range(200):
        assert 0.0 <= rng.next_float() <= 1.0
    assert all(rng.chance(1.0) for _ in range(100))
    assert not any(rng.chance(0.0) for _ in range(100))
