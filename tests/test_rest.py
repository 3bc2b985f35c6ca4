import pytest

from gymlog.core.enums import ExerciseType
from gymlog.services.rest import format_seconds, suggest_rest_seconds


@pytest.mark.parametrize(
    "exercise_type,expected",
    [
        (ExerciseType.COMPOUND, 150),
        (ExerciseType.ISOLATION, 90),
        (ExerciseType.CARDIO, 120),
        (ExerciseType.OTHER, 120),
        (None, 120),
    ],
)
def test_rest_by_type(exercise_type, expected):
    assert suggest_rest_seconds(exercise_type, had_missed_reps=False) == expected


@pytest.mark.parametrize("exercise_type", list(ExerciseType))
def test_missed_reps_always_rest_longest(exercise_type):
    assert suggest_rest_seconds(exercise_type, had_missed_reps=True) == 180


def test_format_seconds():
    assert format_seconds(0) == "0:00"
    assert format_seconds(90) == "1:30"
    assert format_seconds(185.7) == "3:05"
    assert format_seconds(-4) == "0:00"
