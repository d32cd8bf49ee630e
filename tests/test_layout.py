from collections import Counter

import pytest

from dentchart.core.layout import (
    ADULT_LAYOUT,
    CHILD_LAYOUT,
    Jaw,
    Quadrant,
    Side,
    is_right_side,
    is_upper_tooth,
    jaw_of,
    quadrant_of,
    side_of,
    surface_at,
    surface_label,
    surface_regions,
)
from dentchart.core.schemas.dental import ADULT_TEETH, CHILD_TEETH, ToothSurface


def test_adult_layout_partitions_into_four_rows_of_eight() -> None:
    quadrants = [
        ADULT_LAYOUT.upper_right,
        ADULT_LAYOUT.upper_left,
        ADULT_LAYOUT.lower_right,
        ADULT_LAYOUT.lower_left,
    ]
    assert [len(quadrant) for quadrant in quadrants] == [8, 8, 8, 8]
    assert sorted(ADULT_LAYOUT.teeth()) == list(ADULT_TEETH)


def test_child_layout_partitions_into_four_rows_of_five() -> None:
    quadrants = [
        CHILD_LAYOUT.upper_right,
        CHILD_LAYOUT.upper_left,
        CHILD_LAYOUT.lower_right,
        CHILD_LAYOUT.lower_left,
    ]
    assert [len(quadrant) for quadrant in quadrants] == [5, 5, 5, 5]
    assert sorted(CHILD_LAYOUT.teeth()) == sorted(CHILD_TEETH)


def test_rows_place_patient_right_before_midline() -> None:
    rows = list(ADULT_LAYOUT.rows())
    assert rows[0] == (Jaw.UPPER, (1, 2, 3, 4, 5, 6, 7, 8), (9, 10, 11, 12, 13, 14, 15, 16))
    assert rows[1][1] == (32, 31, 30, 29, 28, 27, 26, 25)
    assert rows[1][2] == (24, 23, 22, 21, 20, 19, 18, 17)


def test_jaw_and_side_predicates() -> None:
    assert is_upper_tooth(8) and is_right_side(8)
    assert is_upper_tooth(9) and not is_right_side(9)
    assert not is_upper_tooth(17) and not is_right_side(17)
    assert not is_upper_tooth(25) and is_right_side(25)
    assert jaw_of(71, is_child=True) is Jaw.LOWER
    assert side_of(71, is_child=True) is Side.LEFT
    assert side_of(81, is_child=True) is Side.RIGHT
    assert jaw_of(55, is_child=True) is Jaw.UPPER


def test_each_tooth_has_five_distinct_surface_regions() -> None:
    for tooth in ADULT_TEETH:
        surfaces = [region.surface for region in surface_regions(tooth)]
        assert len(surfaces) == 5
        assert len(set(surfaces)) == 5


def test_mesial_faces_the_midline() -> None:
    assert surface_at(8, False, 0.9, 0.5) is ToothSurface.MESIAL
    assert surface_at(8, False, 0.1, 0.5) is ToothSurface.DISTAL
    assert surface_at(9, False, 0.1, 0.5) is ToothSurface.MESIAL
    assert surface_at(9, False, 0.9, 0.5) is ToothSurface.DISTAL


def test_bite_strip_faces_the_occlusal_plane() -> None:
    assert surface_at(8, False, 0.5, 0.9) is ToothSurface.OCCLUSAL
    assert surface_at(8, False, 0.5, 0.1) is ToothSurface.LINGUAL
    assert surface_at(3, False, 0.5, 0.9) is ToothSurface.OCCLUSAL
    assert surface_at(30, False, 0.5, 0.1) is ToothSurface.OCCLUSAL
    assert surface_at(30, False, 0.5, 0.9) is ToothSurface.LINGUAL
    assert surface_at(24, False, 0.5, 0.1) is ToothSurface.OCCLUSAL


def test_center_is_buccal_and_corners_are_empty() -> None:
    assert surface_at(14, False, 0.5, 0.5) is ToothSurface.BUCCAL
    assert surface_at(14, False, 0.0, 0.0) is None


def test_upper_lingual_label_mentions_palatal() -> None:
    assert surface_label(ToothSurface.LINGUAL, 3) == "Lingual surface (palatal)"
    assert surface_label(ToothSurface.LINGUAL, 30) == "Lingual surface"


def test_anterior_bite_label_names_the_incisal_edge() -> None:
    assert surface_label(ToothSurface.OCCLUSAL, 8) == "Incisal edge (occlusal)"
    assert surface_label(ToothSurface.OCCLUSAL, 3) == surface_label(ToothSurface.OCCLUSAL, 30)
    assert "Incisal" not in surface_label(ToothSurface.OCCLUSAL, 3)


@pytest.mark.parametrize(
    ("teeth", "is_child", "bucket_size"),
    [(ADULT_TEETH, False, 8), (CHILD_TEETH, True, 5)],
)
def test_quadrant_of_splits_dentition_evenly(teeth, is_child, bucket_size) -> None:
    counts = Counter(quadrant_of(tooth, is_child) for tooth in teeth)
    assert set(counts) == set(Quadrant)
    assert sorted(counts.values()) == [bucket_size] * 4


@pytest.mark.parametrize(("layout", "is_child"), [(ADULT_LAYOUT, False), (CHILD_LAYOUT, True)])
def test_layout_buckets_agree_with_predicates(layout, is_child) -> None:
    expected = {
        "upper_right": (True, True, Quadrant.UPPER_RIGHT),
        "upper_left": (True, False, Quadrant.UPPER_LEFT),
        "lower_right": (False, True, Quadrant.LOWER_RIGHT),
        "lower_left": (False, False, Quadrant.LOWER_LEFT),
    }
    for bucket, (upper, right, quadrant) in expected.items():
        for tooth in getattr(layout, bucket):
            assert is_upper_tooth(tooth, is_child) is upper, (bucket, tooth)
            assert is_right_side(tooth, is_child) is right, (bucket, tooth)
            assert quadrant_of(tooth, is_child) is quadrant, (bucket, tooth)
