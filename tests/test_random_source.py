import numpy as np
import pytest

from bsp_levelgen.generators.random_source import MODULUS, DeterministicRandom


def test_known_state_sequence():
    rng = DeterministicRandom(12345)
    states = []
    for _ in range(3):
        rng.next()
        states.append(rng.state)
    assert states == [207482415, 1790989824, 2035175616]


def test_next_values_match_state():
    rng = DeterministicRandom(12345)
    assert rng.next() == (207482415 - 1) / (MODULUS - 1)
    assert rng.next() == pytest.approx(0.8339946273099581)


def test_zero_seed_is_remapped():
    rng = DeterministicRandom(0)
    assert rng.state == 2147483646
    rng.next()
    assert rng.state == 2147466840


def test_negative_seed_keeps_sign_before_remap():
    assert DeterministicRandom(-5).state == 2147483641


def test_seed_equal_to_modulus_behaves_like_zero():
    assert DeterministicRandom(MODULUS).state == DeterministicRandom(0).state


def test_default_seed():
    assert DeterministicRandom().state == 12345


def test_same_seed_same_stream():
    a = DeterministicRandom(987)
    b = DeterministicRandom(987)
    assert [a.next() for _ in range(50)] == [b.next() for _ in range(50)]


def test_different_seeds_differ():
    a = DeterministicRandom(1)
    b = DeterministicRandom(2)
    assert [a.next() for _ in range(5)] != [b.next() for _ in range(5)]


def test_next_in_unit_interval():
    rng = DeterministicRandom(31337)
    for _ in range(2000):
        value = rng.next()
        assert 0.0 <= value < 1.0


def test_range_known_values():
    rng = DeterministicRandom(42)
    assert [rng.range(1, 10) for _ in range(5)] == [1, 6, 8, 3, 4]


def test_range_is_inclusive_and_bounded():
    rng = DeterministicRandom(7)
    seen = {rng.range(3, 6) for _ in range(500)}
    assert seen == {3, 4, 5, 6}


def test_range_single_value():
    rng = DeterministicRandom(7)
    assert rng.range(9, 9) == 9


def test_range_uses_exactly_one_draw():
    a = DeterministicRandom(99)
    b = DeterministicRandom(99)
    a.range(0, 100)
    b.next()
    assert a.state == b.state


def test_choice():
    rng = DeterministicRandom(5)
    items = ['a', 'b', 'c']
    for _ in range(20):
        assert rng.choice(items) in items


def test_choice_empty_raises():
    with pytest.raises(IndexError):
        DeterministicRandom(5).choice([])


@pytest.mark.parametrize("seed", [1.9, "12345", True, None])
def test_non_integer_seed_rejected(seed):
    with pytest.raises(TypeError):
        DeterministicRandom(seed)


def test_numpy_integer_seed_accepted():
    assert DeterministicRandom(np.int64(12345)).state == 12345
