"""Tests for cost_scaling module."""
import math

import pytest
from hypothesis import given
from hypothesis import strategies as st

from idleforge.cost_scaling import CostScaling


def test_exponential():
    cs = CostScaling.exponential(2.0)
    assert cs.compute(100.0, 0) == 100.0
    assert cs.compute(100.0, 1) == 200.0
    assert cs.compute(100.0, 3) == 800.0


def test_exponential_default_rate():
    cs = CostScaling.exponential()
    assert cs.compute(100.0, 1) == pytest.approx(115.0)


def test_price_rounds_up():
    cs = CostScaling.exponential()
    assert cs.price(15, 0) == 15
    assert cs.price(15, 1) == 18  # 17.25
    assert cs.price(10, 2) == 14  # 13.225


def test_price_applies_cost_multiplier():
    cs = CostScaling.exponential()
    assert cs.price(100, 0, cost_mul=0.5) == 50
    assert cs.price(15, 0, cost_mul=0.5) == 8  # 7.5


def test_custom():
    cs = CostScaling.custom(lambda base, count: base * (count + 1) ** 2)
    assert cs.compute(10.0, 0) == 10.0
    assert cs.compute(10.0, 2) == 90.0


@given(
    base=st.floats(min_value=1, max_value=1e6),
    owned=st.integers(min_value=0, max_value=150),
    cost_mul=st.sampled_from([1.0, 0.95, 0.9025, 0.5]),
)
def test_price_never_decreases_with_owned_count(base, owned, cost_mul):
    cs = CostScaling.exponential(1.15)
    assert cs.price(base, owned + 1, cost_mul) >= cs.price(base, owned, cost_mul)


@given(base=st.floats(min_value=1, max_value=1e6), owned=st.integers(0, 150))
def test_raw_growth_is_fifteen_percent(base, owned):
    cs = CostScaling.exponential(1.15)
    assert cs.compute(base, owned + 1) == pytest.approx(cs.compute(base, owned) * 1.15)
    assert cs.price(base, owned) == math.ceil(cs.compute(base, owned))
