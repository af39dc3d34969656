import math

import pytest

from typebounce.design.spring import DampedSpring


def test_derived_quantities_unit_response():
    s = DampedSpring(frequency_response=1.0, damping_ratio=0.5)
    assert s.mass == 1.0
    assert s.stiffness == pytest.approx((2 * math.pi) ** 2)
    assert s.damping_coefficient == pytest.approx(2 * math.pi)
    assert s.undamped_natural_frequency == pytest.approx(2 * math.pi)
    assert s.damped_natural_frequency == pytest.approx(2 * math.pi * math.sqrt(0.75))
    assert s.decay_constant == pytest.approx(math.pi)


def test_initial_position_preserved_underdamped():
    for ratio in (0.0, 0.1, 0.3, 0.7, 0.99):
        s = DampedSpring(frequency_response=6.0, damping_ratio=ratio)
        assert s.calculate_position(0, initial_position=1.0) == 1.0
        assert s.calculate_position(0, initial_position=-2.5) == -2.5


def test_initial_position_preserved_critical_and_overdamped():
    assert DampedSpring(6.0, 1.0).calculate_position(0, 1.0) == 1.0
    assert DampedSpring(6.0, 2.0).calculate_position(0, 1.0) == pytest.approx(1.0)
    assert DampedSpring(6.0, 5.0).calculate_position(0, 3.0) == pytest.approx(3.0)


def test_undamped_returns_after_one_period():
    s = DampedSpring(frequency_response=6.0, damping_ratio=0.0)
    assert s.calculate_position(6.0, 1.0) == pytest.approx(1.0)
    assert s.calculate_position(3.0, 1.0) == pytest.approx(-1.0)


def test_underdamped_decays_and_crosses_rest():
    s = DampedSpring(frequency_response=6.0, damping_ratio=0.3)
    assert s.calculate_position(3.0, 1.0) < 0.0
    assert abs(s.calculate_position(12.0, 1.0)) < 0.05


def test_critically_damped_is_finite_and_monotonic():
    s = DampedSpring(frequency_response=6.0, damping_ratio=1.0)
    assert s.damped_natural_frequency == 0.0
    values = [s.calculate_position(t, 1.0) for t in range(0, 13)]
    assert all(math.isfinite(v) for v in values)
    assert all(a >= b for a, b in zip(values, values[1:]))
    assert values[-1] > 0.0


def test_overdamped_matches_hyperbolic_form():
    s = DampedSpring(frequency_response=6.0, damping_ratio=2.0)
    a = s.decay_constant
    b = s.damped_natural_frequency
    c = a / b
    for t in (0.5, 2.0, 7.0):
        expected = math.exp(-a * t) * (math.cosh(b * t) + c * math.sinh(b * t))
        assert s.calculate_position(t, 1.0) == pytest.approx(expected)


def test_overdamped_large_time_does_not_overflow():
    s = DampedSpring(frequency_response=0.01, damping_ratio=50.0)
    value = s.calculate_position(1000.0, 1.0)
    assert math.isfinite(value)
    assert 0.0 <= value <= 1.0


def test_huge_response_degenerates_to_rest_position():
    s = DampedSpring(frequency_response=1e300, damping_ratio=0.3)
    assert s.damped_natural_frequency == 0.0
    assert s.calculate_position(5.0, 1.0) == 1.0


def test_initial_velocity_contributes():
    s = DampedSpring(frequency_response=6.0, damping_ratio=0.3)
    assert s.calculate_position(0.5, 0.0, initial_velocity=1.0) > 0.0


def test_validation_errors():
    with pytest.raises(ValueError):
        DampedSpring(frequency_response=0.0)
    with pytest.raises(ValueError):
        DampedSpring(frequency_response=-1.0)
    with pytest.raises(ValueError):
        DampedSpring(frequency_response=float("nan"))
    with pytest.raises(ValueError):
        DampedSpring(frequency_response=float("inf"))
    with pytest.raises(ValueError):
        DampedSpring(frequency_response=1.0, damping_ratio=float("nan"))
    with pytest.raises(ValueError):
        DampedSpring(frequency_response=1.0, damping_ratio=float("inf"))
    with pytest.raises(ValueError):
        DampedSpring(frequency_response=1.0, damping_ratio=-0.1)
    with pytest.raises(ValueError):
        DampedSpring(frequency_response=1.0, mass=0.0)
