from __future__ import annotations

from mask_scatter.rng import RandomStream


def test_same_seed_same_sequence():
    a = RandomStream(42)
    b = RandomStream(42)
    assert [a() for _ in range(20)] == [b() for _ in range(20)]


def test_string_seeds_are_reproducible():
    a = RandomStream("hello.")
    b = RandomStream("hello.")
    assert a() == b()
    assert RandomStream("hello.")() != RandomStream("world.")()


def test_values_in_unit_interval_and_counted():
    rng = RandomStream(0)
    values = [rng() for _ in range(1000)]
    assert all(0.0 <= v < 1.0 for v in values)
    assert rng.draws == 1000
    assert "draws=1000" in repr(rng)


def test_unseeded_stream_warns(caplog):
    with caplog.at_level("WARNING"):
        RandomStream()
    assert "not be reproducible" in caplog.text
