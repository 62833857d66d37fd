import pytest

from cf_heatmap.services.activity_index import Problem
from cf_heatmap.services.rating import DEFAULT_SCALE
from cf_heatmap.services.rating import NO_ACTIVITY_COLOR
from cf_heatmap.services.rating import RGBA
from cf_heatmap.services.rating import RatingBand
from cf_heatmap.services.rating import RatingScale


def problem(rating: int, name: str = "A") -> Problem:
    return Problem(name=name, rating=rating, link="https://codeforces.com/")


def test_parse_css_colors() -> None:
    assert RGBA.parse("rgba(170,0,0,0.9)") == RGBA(170, 0, 0, 0.9)
    assert RGBA.parse("rgb(255, 0, 0)") == RGBA(255, 0, 0, 1.0)
    assert RGBA.parse("#ebedf0") == RGBA(235, 237, 240, 1.0)


def test_parse_rejects_unknown_color_format() -> None:
    with pytest.raises(ValueError):
        RGBA.parse("red")


def test_to_css_renders_rgba() -> None:
    assert RGBA(119, 221, 187, 0.9).to_css() == "rgba(119, 221, 187, 0.9)"


def test_empty_day_uses_neutral_color() -> None:
    assert DEFAULT_SCALE.classify([]) == NO_ACTIVITY_COLOR


def test_hardest_problem_selects_band() -> None:
    color = DEFAULT_SCALE.classify([problem(800, "A"), problem(2450, "B"), problem(0, "C")])

    assert color == RGBA(255, 100, 100, 0.9)


def test_band_boundaries_are_inclusive_lower_bounds() -> None:
    assert DEFAULT_SCALE.band_for(1399).min_rating == 1200
    assert DEFAULT_SCALE.band_for(1400).min_rating == 1400
    assert DEFAULT_SCALE.band_for(1599).min_rating == 1400
    assert DEFAULT_SCALE.band_for(0).min_rating == 0
    assert DEFAULT_SCALE.band_for(3500).min_rating == 3000


def test_classified_alpha_is_normalized() -> None:
    # The 2600 band is stored as an opaque rgb() color.
    assert DEFAULT_SCALE.band_for(2700).color.alpha == 1.0
    assert DEFAULT_SCALE.classify([problem(2700)]) == RGBA(255, 0, 0, 0.9)


def test_classification_is_monotonic() -> None:
    previous = DEFAULT_SCALE.band_for(0).min_rating
    for rating in range(0, 3600, 25):
        current = DEFAULT_SCALE.band_for(rating).min_rating
        assert current >= previous
        previous = current


def test_scale_rejects_unsorted_bands() -> None:
    with pytest.raises(ValueError, match="descending"):
        RatingScale(
            [
                RatingBand(1200, NO_ACTIVITY_COLOR),
                RatingBand(1400, NO_ACTIVITY_COLOR),
                RatingBand(0, NO_ACTIVITY_COLOR),
            ]
        )


def test_scale_rejects_duplicate_thresholds() -> None:
    with pytest.raises(ValueError):
        RatingScale([RatingBand(0, NO_ACTIVITY_COLOR), RatingBand(0, NO_ACTIVITY_COLOR)])


def test_scale_requires_zero_floor() -> None:
    with pytest.raises(ValueError, match="start at 0"):
        RatingScale([RatingBand(1400, NO_ACTIVITY_COLOR), RatingBand(800, NO_ACTIVITY_COLOR)])


def test_scale_requires_bands() -> None:
    with pytest.raises(ValueError):
        RatingScale([])
