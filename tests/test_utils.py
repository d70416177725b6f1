"""Tests for utility functions."""

import pytest

from gym_logbook.models.exercise import DEFAULT_EXERCISES, ExerciseCategory
from gym_logbook.utils.exercise_utils import (
    KeywordClassifier,
    asset_for_exercise,
    assets_for_category,
    classify,
    normalize_exercise_name,
)


class TestNormalizeExerciseName:
    """Tests for normalize_exercise_name function."""

    def test_lowercase_and_strip(self):
        assert normalize_exercise_name("  Bench Press  ") == "bench press"

    def test_abbreviation_expansion(self):
        assert normalize_exercise_name("DB") == "dumbbell"
        assert normalize_exercise_name("RDL") == "romanian deadlift"

    def test_inline_abbreviation(self):
        assert normalize_exercise_name("DB Row") == "dumbbell row"

    def test_hyphens_and_whitespace(self):
        assert normalize_exercise_name("Pull-Up") == "pull up"
        assert normalize_exercise_name("Bench   Press") == "bench press"


class TestClassify:
    """Tests for the keyword category classifier."""

    @pytest.mark.parametrize("name,expected", [
        ("Barbell Squat", ExerciseCategory.LEG),
        ("Romanian Deadlift", ExerciseCategory.LEG),
        ("Hammer Curl", ExerciseCategory.ARM),
        ("Tricep Dips", ExerciseCategory.ARM),
        ("Lateral Raise", ExerciseCategory.SHOULDER),
        ("Incline Bench Press", ExerciseCategory.CHEST),
        ("Seated Cable Row", ExerciseCategory.BACK),
        ("Pull-Up", ExerciseCategory.BACK),
    ])
    def test_known_names(self, name, expected):
        assert classify(name) == expected

    def test_unknown_name(self):
        assert classify("Plank") is None

    def test_default_library_classifies_consistently(self):
        for exercise in DEFAULT_EXERCISES:
            assert classify(exercise.name) == exercise.category, exercise.name

    def test_custom_classifier(self):
        custom = KeywordClassifier([(ExerciseCategory.ARM, ("plank",))])
        assert classify("Plank", custom) == ExerciseCategory.ARM


class TestAssets:
    """Tests for bundled image lookup."""

    def test_exact_match(self):
        assert asset_for_exercise("Bench Press") == "/assets/chest/barbell-bench-press.gif"

    def test_partial_match(self):
        assert asset_for_exercise("Seated Machine Row") == "/assets/back/machine-rowing.gif"

    def test_no_match(self):
        assert asset_for_exercise("Plank") is None
        assert asset_for_exercise("   ") is None

    def test_assets_for_category(self):
        paths = assets_for_category(ExerciseCategory.LEG)
        assert paths
        assert all("/leg/" in p for p in paths)
