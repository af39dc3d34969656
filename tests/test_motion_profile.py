import pytest

from typebounce.design.motion_profile import (
    LinearMotion,
    SpringMotion,
    displacement_at,
    frame_counts,
    parse_motion_profile,
)

FRAME = 1.0 / 60.0


def test_linear_scenario_offsets():
    profile = LinearMotion(duration=0.2)
    assert displacement_at(profile, 0.0, 10.0, FRAME) == -10.0
    assert displacement_at(profile, 0.1, 10.0, FRAME) == -5.0
    assert displacement_at(profile, 0.2, 10.0, FRAME) == 0.0


def test_linear_is_monotonic_and_settles():
    profile = LinearMotion(duration=0.2)
    samples = [displacement_at(profile, i * 0.01, 10.0, FRAME) for i in range(0, 21)]
    assert all(a <= b for a, b in zip(samples, samples[1:]))
    assert all(-10.0 <= s <= 0.0 for s in samples)
    for t in (0.21, 0.5, 10.0):
        assert displacement_at(profile, t, 10.0, FRAME) == 0.0


def test_linear_negative_elapsed_clamped():
    assert displacement_at(LinearMotion(0.2), -1.0, 10.0, FRAME) == -10.0


def test_spring_duration_is_twice_response():
    assert SpringMotion(0.3, 0.1).duration == pytest.approx(0.2)
    assert SpringMotion(0.5, 0.25).duration == pytest.approx(0.5)


def test_spring_frame_counts():
    profile = SpringMotion(damping_ratio=0.3, response_time=0.1)
    assert frame_counts(profile, 0.0, FRAME) == (12, 0)
    assert frame_counts(profile, 0.1, FRAME) == (12, 6)
    assert frame_counts(profile, 0.2, FRAME) == (12, 12)
    assert frame_counts(profile, 0.1, 1.0 / 120.0) == (24, 12)


def test_frame_counts_with_invalid_interval():
    assert frame_counts(SpringMotion(), 0.1, 0.0) == (0, 0)


def test_spring_scenario_bounded_and_decays():
    profile = SpringMotion(damping_ratio=0.3, response_time=0.1)
    offsets = [displacement_at(profile, frame * FRAME, 10.0, FRAME) for frame in range(0, 13)]
    assert offsets[0] == -10.0
    assert all(-10.0 <= o <= 0.0 for o in offsets)
    # swing past rest is suppressed, not mirrored
    assert offsets[3] == 0.0
    assert abs(offsets[12]) <= 0.5


def test_spring_overdamped_and_critical_stay_bounded():
    for ratio in (1.0, 1.5, 4.0):
        profile = SpringMotion(damping_ratio=ratio, response_time=0.1)
        offsets = [displacement_at(profile, f * FRAME, 10.0, FRAME) for f in range(0, 13)]
        assert offsets[0] == pytest.approx(-10.0)
        assert all(-10.0 - 1e-9 <= o <= 0.0 for o in offsets)


def test_spring_shorter_than_one_frame_is_settled():
    profile = SpringMotion(damping_ratio=0.3, response_time=0.001)
    assert displacement_at(profile, 0.0, 10.0, FRAME) == 0.0


def test_unknown_profile_type_rejected():
    with pytest.raises(TypeError):
        displacement_at(object(), 0.0, 10.0, FRAME)  # type: ignore[arg-type]


def test_profile_validation():
    with pytest.raises(ValueError):
        LinearMotion(duration=float("inf"))
    with pytest.raises(ValueError):
        SpringMotion(damping_ratio=float("nan"), response_time=0.1)
    with pytest.raises(ValueError):
        LinearMotion(duration=0)
    with pytest.raises(ValueError):
        SpringMotion(damping_ratio=-0.5, response_time=0.1)
    with pytest.raises(ValueError):
        SpringMotion(damping_ratio=0.3, response_time=0)


def test_parse_motion_profile():
    assert parse_motion_profile("linear(0.2)") == LinearMotion(0.2)
    assert parse_motion_profile(" Spring( 0.3 , 0.1 ) ") == SpringMotion(0.3, 0.1)


@pytest.mark.parametrize(
    "text",
    [
        "linear",
        "linear(0.2",
        "linear(0.2, 0.3)",
        "spring(0.3)",
        "spring(a, b)",
        "bounce(1)",
        "linear(-1)",
        "linear(inf)",
        "linear(nan)",
        "spring(nan, 0.1)",
        "spring(0.3, inf)",
        "spring(inf, 0.1)",
    ],
)
def test_parse_motion_profile_rejects(text):
    with pytest.raises(ValueError):
        parse_motion_profile(text)
