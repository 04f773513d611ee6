import pytest

from src.fieldplan.services.planner.snap import minutes_to_hm, parse_hm, snap_to_grid


def test_snaps_to_nearest_boundary_within_gap():
    # earliest 540, latest 555, raw 557 rounds to 555
    assert snap_to_grid(557, 45, 530, 600) == 555


def test_returns_none_when_gap_too_small():
    # earliest 585 > latest 555
    assert snap_to_grid(580, 45, 580, 600) is None


def test_clamps_to_earliest_start():
    assert snap_to_grid(530, 45, 540, 660) == 540


def test_clamps_to_latest_start():
    assert snap_to_grid(620, 45, 540, 660) == 615


def test_gap_fitting_exactly_one_slot():
    assert snap_to_grid(540, 45, 540, 585) == 540
    assert snap_to_grid(490, 45, 480, 525) == 480


def test_gap_start_off_grid():
    assert snap_to_grid(545, 30, 533, 600) == 540


def test_zero_width_gap_rejects_item():
    assert snap_to_grid(600, 15, 600, 600) is None


def test_ties_round_half_to_even():
    # 532.5 / 15 == 35.5 -> 36, 547.5 / 15 == 36.5 -> 36
    assert snap_to_grid(532.5, 15, 0, 1440) == 540
    assert snap_to_grid(547.5, 15, 0, 1440) == 540


def test_fractional_inputs():
    assert snap_to_grid(601.2, 30.5, 590.5, 700) == 600


def test_custom_grid_size():
    assert snap_to_grid(557, 45, 530, 600, grid_minutes=5) == 555
    assert snap_to_grid(551, 30, 530, 600, grid_minutes=10) == 550


@pytest.mark.parametrize(
    ("minutes", "expected"),
    [(0, "00:00"), (555, "09:15"), (1439, "23:59"), (2000, "23:59"), (-5, "00:00")],
)
def test_minutes_to_hm(minutes, expected):
    assert minutes_to_hm(minutes) == expected


def test_parse_hm():
    assert parse_hm("09:15") == 555
    assert parse_hm(" 00:00 ") == 0


@pytest.mark.parametrize("value", ["9", "25:00", "10:60", "ab:cd", "1:2:3"])
def test_parse_hm_rejects_bad_input(value):
    with pytest.raises(ValueError):
        parse_hm(value)
