import random
from collections import Counter

import pytest

from burako.logic.rng import SEED_BYTES, create_rng, generate_seed, shuffle_in_place, validate_seed_hex
from burako.tests.helpers import FIXED_SEED


class TestSeedValidation:
    def test_generated_seed_is_valid(self):
        seed = generate_seed()
        assert len(seed) == SEED_BYTES * 2
        validate_seed_hex(seed)

    def test_wrong_length(self):
        with pytest.raises(ValueError, match="exactly 64"):
            validate_seed_hex("ab")

    def test_non_hex(self):
        with pytest.raises(ValueError, match="invalid hex"):
            validate_seed_hex("zz" * SEED_BYTES)

    def test_non_string(self):
        with pytest.raises(TypeError):
            validate_seed_hex(1234)


class TestCreateRng:
    def test_seeded_streams_repeat(self):
        assert create_rng(FIXED_SEED).random() == create_rng(FIXED_SEED).random()

    def test_unseeded_streams_differ(self):
        assert create_rng().random() != create_rng().random()


class TestShuffleInPlace:
    def test_keeps_all_items(self):
        items = list(range(50))
        shuffle_in_place(items, random.Random(3))
        assert sorted(items) == list(range(50))

    def test_empty_and_single(self):
        empty: list[int] = []
        single = [1]
        shuffle_in_place(empty, random.Random(3))
        shuffle_in_place(single, random.Random(3))
        assert empty == []
        assert single == [1]

    def test_first_position_is_roughly_uniform(self):
        rng = random.Random(11)
        counts: Counter[int] = Counter()
        for _ in range(4000):
            items = [0, 1, 2, 3]
            shuffle_in_place(items, rng)
            counts[items[0]] += 1
        # each value should land first about 1000 times
        assert all(800 < counts[v] < 1200 for v in range(4))
