# tests/test_progression.py
from __future__ import annotations

from datetime import date

import pytest

from core.models import FOREVER, FoodDescriptor
from core.progression import ProgressionCalculator, annotate, parse_magnitude


def _food(**kw) -> FoodDescriptor:
    base = dict(name="Peanut", frequency="Every day", start_date=date(2025, 1, 1))
    base.update(kw)
    return FoodDescriptor(**base)


def _calc(**kw) -> ProgressionCalculator:
    return ProgressionCalculator(_food(**kw))


BUILDUP = dict(
    starting_amount="1 teaspoon",
    target_amount="3 teaspoon",
    progression_type="buildup",
    progression_duration=14,
)


# ── amount: linear curves ───────────────────────────────────────────
@pytest.mark.parametrize("n, expected", [(0, "1.00 teaspoon"), (2, "2.00 teaspoon"), (4, "3.00 teaspoon")])
def test_buildup(n, expected):
    assert _calc(**BUILDUP).amount_at(n, 5) == expected


def test_reduction():
    c = _calc(starting_amount="3 mg", target_amount="1 mg", progression_type="reduction", progression_duration=7)
    assert c.amount_at(0, 3) == "3.00 mg"
    assert c.amount_at(1, 3) == "2.00 mg"
    assert c.amount_at(2, 3) == "1.00 mg"


def test_progress_caps_at_target():
    assert _calc(**BUILDUP).amount_at(9, 5) == "3.00 teaspoon"


def test_single_occurrence_stays_at_start():
    assert _calc(**BUILDUP).amount_at(0, 1) == "1.00 teaspoon"


def test_forever_duration_still_progresses():
    c = _calc(**{**BUILDUP, "progression_duration": FOREVER})
    assert c.amount_at(4, 5) == "3.00 teaspoon"


# ── amount: custom curve ────────────────────────────────────────────
CUSTOM = dict(
    starting_amount="0 g",
    target_amount="10 g",
    progression_type="custom",
    progression_duration=30,
)


@pytest.mark.parametrize("n", [34, 40, 50, 60, 66])
def test_custom_plateau_holds_midpoint(n):
    assert _calc(**CUSTOM).amount_at(n, 101) == "5.00 g"


def test_custom_ramps():
    c = _calc(**CUSTOM)
    assert c.amount_at(0, 101) == "0.00 g"
    assert c.amount_at(10, 101) == "1.52 g"      # 10 * 0.5 * (0.1 / 0.33)
    assert c.amount_at(100, 101) == "10.00 g"


def test_custom_final_third_climbs_above_midpoint():
    c = _calc(**CUSTOM)
    assert float(c.amount_at(80, 101).split()[0]) > 5


# ── amount: passthrough ─────────────────────────────────────────────
def test_static_returns_starting_amount_unchanged():
    c = _calc(**{**BUILDUP, "progression_type": "static"})
    assert {c.amount_at(n, 10) for n in range(10)} == {"1 teaspoon"}


@pytest.mark.parametrize("missing", ["target_amount", "progression_type", "progression_duration"])
def test_partial_fields_mean_no_progression(missing):
    c = _calc(**{**BUILDUP, missing: None})
    assert c.amount_at(3, 5) == "1 teaspoon"


def test_no_amount_at_all_is_none():
    assert _calc().amount_at(0, 5) is None


# ── amount: defensive parsing ───────────────────────────────────────
def test_unit_suffix_is_kept_verbatim():
    c = _calc(**{**BUILDUP, "starting_amount": "0.5 tsp (mixed in yogurt)"})
    assert c.amount_at(0, 3) == "0.50 tsp (mixed in yogurt)"


def test_non_numeric_target_counts_as_one():
    c = _calc(**{**BUILDUP, "starting_amount": "3 tsp", "target_amount": "a pinch"})
    assert c.amount_at(2, 3) == "1.00 tsp"


def test_non_numeric_start_is_passed_through():
    c = _calc(**{**BUILDUP, "starting_amount": "a pinch"})
    assert c.amount_at(2, 3) == "a pinch"


def test_unknown_progression_type_holds_start():
    c = _calc(**{**BUILDUP, "progression_type": "exponential"})
    assert c.amount_at(4, 5) == "1.00 teaspoon"


def test_half_values_round_up():
    c = _calc(**{**BUILDUP, "starting_amount": "0.125 g", "target_amount": "0.125 g"})
    assert c.amount_at(1, 2) == "0.13 g"


def test_huge_amounts_do_not_raise():
    c = _calc(**{**BUILDUP, "starting_amount": "1000000000000000000000000000 mg", "target_amount": "1 mg"})
    out = c.amount_at(0, 3)
    assert out.startswith("10000000000000000")
    assert out.endswith(".00 mg")


def test_overflowing_amount_does_not_raise():
    c = _calc(**{**BUILDUP, "starting_amount": "1" * 400 + " mg", "target_amount": "1 mg"})
    out = c.amount_at(1, 3)
    assert out.endswith(" mg")
    assert not out[0].isdigit()


@pytest.mark.parametrize(
    "text, value",
    [("2", 2.0), ("0.5 cup", 0.5), (".5 cup", 0.5), ("1.2.3 g", 1.2), (". g", 1.0), ("cup", 1.0)],
)
def test_parse_magnitude(text, value):
    assert parse_magnitude(text) == value


# ── time progression ────────────────────────────────────────────────
LATER = dict(start_time="23:30", time_progression="later", time_progression_amount=60)


def test_later_wraps_past_midnight():
    c = _calc(**LATER)
    assert c.time_at(0) == "23:30"
    assert c.time_at(1) == "00:30"


def test_earlier_wraps_before_midnight():
    c = _calc(start_time="00:15", time_progression="earlier", time_progression_amount=30)
    assert c.time_at(1) == "23:45"
    assert c.time_at(2) == "23:15"


def test_many_wraps():
    c = _calc(start_time="08:00", time_progression="later", time_progression_amount=180)
    assert c.time_at(16) == "08:00"      # 48h later


def test_static_time_is_unchanged():
    c = _calc(**{**LATER, "time_progression": "static"})
    assert c.time_at(5) == "23:30"


def test_missing_time_fields():
    assert _calc().time_at(3) is None
    assert _calc(start_time="07:00").time_at(3) == "07:00"
    assert _calc(**{**LATER, "time_progression_amount": None}).time_at(3) == "23:30"


def test_unparseable_time_is_passed_through():
    assert _calc(**{**LATER, "start_time": "noon"}).time_at(2) == "noon"


def test_unknown_direction_only_normalises():
    c = _calc(start_time="8:05", time_progression="sideways", time_progression_amount=30)
    assert c.time_at(3) == "08:05"


# ── annotate ────────────────────────────────────────────────────────
def test_annotate_numbers_and_values():
    food = _food(id=7, **BUILDUP, start_time="08:00", time_progression="later", time_progression_amount=30)
    days = [date(2025, 1, d) for d in (1, 3, 5, 7, 9)]
    out = annotate(days, food)

    assert [o.occurrence_number for o in out] == [0, 1, 2, 3, 4]
    assert [o.date for o in out] == days
    assert {o.food_id for o in out} == {7}
    assert out[2].calculated_amount == "2.00 teaspoon"
    assert [o.calculated_time for o in out] == ["08:00", "08:30", "09:00", "09:30", "10:00"]


def test_annotate_without_progression_gives_nulls():
    out = annotate([date(2025, 1, 1)], _food())
    assert out[0].calculated_amount is None
    assert out[0].calculated_time is None


def test_annotate_empty():
    assert annotate([], _food(**BUILDUP)) == []


def test_annotate_is_repeatable():
    food = _food(id=7, **BUILDUP, start_time="08:00", time_progression="earlier", time_progression_amount=15)
    days = [date(2025, 1, d) for d in range(1, 11)]
    assert annotate(days, food) == annotate(days, food)
