import math

import pytest

from models.schemas.cv import EducationEntry
from services.gpa import format_gpa, normalize_gpa, pick_display_gpa


@pytest.mark.parametrize(
    "raw, expected",
    [
        (3.7, "3.70"),
        (92, "3.68"),
        ("3.5", "3.50"),
        (" 88 ", "3.52"),
        (4, "4.00"),
        (8.5, "4.00"),  # 0-10 scale values clamp rather than rescale
        (10, "4.00"),
        (100, "4.00"),
    ],
)
def test_normalize_and_format(raw, expected):
    assert format_gpa(normalize_gpa(raw)) == expected


@pytest.mark.parametrize("raw", [150, 100.01, 0, -1, "abc", "", None, True, float("nan"), float("inf"), [3.5]])
def test_unusable_values_are_not_available(raw):
    assert normalize_gpa(raw) is None
    assert format_gpa(normalize_gpa(raw)) == "N/A"


def test_normalized_value_always_in_range():
    for raw in [0.01, 1, 3.99, 4.01, 9.99, 10.5, 50, 99.9]:
        gpa = normalize_gpa(raw)
        assert gpa is not None and 0 <= gpa <= 4 and not math.isnan(gpa)


class TestPickDisplayGPA:
    def test_first_usable_entry_wins(self):
        education = [
            EducationEntry(degree="MSc", gpa=None),
            EducationEntry(degree="BSc", gpa=92),
            EducationEntry(degree="Diploma", gpa=3.1),
        ]
        assert pick_display_gpa(education) == "3.68"

    def test_no_education(self):
        assert pick_display_gpa([]) == "N/A"

    def test_all_unusable(self):
        assert pick_display_gpa([EducationEntry(gpa="n/a"), EducationEntry(gpa=150)]) == "N/A"
