"""Tests for BMI, BMR, daily calorie and advice formulas."""

import pytest

from fitbot.domain.health import (
    ACTIVITY_LEVELS,
    bmi,
    bmi_category,
    bmr,
    daily_calories,
    nutrition_advice,
    round_half_up,
)
from tests.conftest import complete_profile


def test_bmi_rounds_to_one_decimal() -> None:
    assert bmi(70, 175) == 22.9


@pytest.mark.parametrize(
    ("value", "category"),
    [
        (18.4, "underweight"),
        (18.5, "normal"),
        (24.9, "normal"),
        (25.0, "overweight"),
        (29.9, "overweight"),
        (30.0, "obese"),
        (45.2, "obese"),
    ],
)
def test_bmi_category_uses_half_open_ranges(value: float, category: str) -> None:
    assert bmi_category(value) == category


def test_bmi_category_falls_back_to_normal_outside_ranges() -> None:
    assert bmi_category(-1) == "normal"


def test_bmr_depends_on_gender() -> None:
    assert bmr(70, 175, 30, "male") == 1648.75
    assert bmr(70, 175, 30, "MALE") == 1648.75
    assert bmr(70, 175, 30, "female") == 1482.75


def test_daily_calories_applies_multiplier() -> None:
    assert daily_calories(1500, "moderatelyActive") == 2325
    assert daily_calories(1500, "bogus") == 1800
    assert daily_calories(1500, None) == 1800


def test_activity_table_is_fixed() -> None:
    assert {name: level.multiplier for name, level in ACTIVITY_LEVELS.items()} == {
        "sedentary": 1.2,
        "lightlyActive": 1.375,
        "moderatelyActive": 1.55,
        "veryActive": 1.725,
        "extremelyActive": 1.9,
    }


def test_round_half_up_rounds_halves_away_from_zero() -> None:
    assert round_half_up(2.5) == 3
    assert round_half_up(0.125, 2) == 0.13
    assert round_half_up(107.80000000000001) == 108


def test_nutrition_advice_splits_macros() -> None:
    advice = nutrition_advice(complete_profile())

    assert advice.bmi == 22.9
    assert advice.daily_calories == 2556
    assert advice.bmi_category == "normal"
    assert advice.protein_g == 112
    assert advice.fat_calories == 639
    assert advice.fat_g == 71
    assert advice.carb_calories == 1469
    assert advice.carbs_g == 367
    assert advice.recommendations[0] == "Protein: 112g per day (448 calories)"
    assert len(advice.recommendations) == 5


def test_nutrition_advice_adds_activity_tips() -> None:
    sedentary = nutrition_advice(complete_profile(activity_level="sedentary"))
    very_active = nutrition_advice(complete_profile(activity_level="veryActive"))

    assert "Start with 10-15 minutes of daily walking" in sedentary.recommendations
    assert (
        "Ensure adequate recovery with proper sleep and nutrition"
        in very_active.recommendations
    )
    assert len(sedentary.recommendations) == 7
