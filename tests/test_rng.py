"""Tests for rng.py - seeds and the deterministic RNG context."""

import pytest

from sketches.errors import InvalidParameterError
from sketches.rng import SEED_MAX, RngContext, Seed


class TestSeed:
    def test_parse_decimal(self):
        assert Seed.parse("42").value == 42

    def test_parse_hex(self):
        assert Seed.parse("0x10").value == 16
        assert Seed.parse(" 0XfF ").value == 255

    @pytest.mark.parametrize("text", ["-1", "abc", "", "0xzz", str(2 ** 64)])
    def test_parse_invalid(self, text):
        with pytest.raises(InvalidParameterError):
            Seed.parse(text)

    def test_default_is_timestamp(self):
        assert Seed().value > 1_600_000_000

    def test_str(self):
        assert str(Seed(7)) == "7"


class TestRngContext:
    def test_same_seed_same_sequence(self):
        a, b = RngContext(5), RngContext(5)
        assert [a.integer(0, 1000) for _ in range(10)] == [b.integer(0, 1000) for _ in range(10)]

    def test_seed_object_accepted(self):
        assert RngContext(Seed(5)).integer(0, 1000) == RngContext(5).integer(0, 1000)

    def test_restart(self):
        rng = RngContext(11)
        first = [rng.uniform() for _ in range(5)]
        rng.restart()
        assert [rng.uniform() for _ in range(5)] == first

    def test_integer_half_open(self):
        rng = RngContext(2)
        values = {rng.integer(3, 6) for _ in range(200)}
        assert values == {3, 4, 5}

    def test_empty_range(self):
        with pytest.raises(InvalidParameterError):
            RngContext(1).integer(5, 5)

    def test_chance_extremes(self):
        rng = RngContext(1)
        assert not any(rng.chance(0.0) for _ in range(50))
        assert all(rng.chance(1.0) for _ in range(50))

    def test_pick(self):
        rng = RngContext(1)
        assert {rng.pick("a", "b") for _ in range(50)} == {"a", "b"}

    def test_next_seed(self):
        a = [RngContext(8).next_seed() for _ in range(2)]
        assert a[0] == a[1]
        assert 0 <= a[0] < SEED_MAX

    def test_child_seeds_differ(self):
        rng = RngContext(8)
        seeds = [rng.next_seed() for _ in range(10)]
        assert len(set(seeds)) == 10

    def test_seed_out_of_range(self):
        with pytest.raises(InvalidParameterError):
            RngContext(-1)
