import re
from collections.abc import Iterable
from collections.abc import Sequence
from dataclasses import dataclass
from dataclasses import replace
from typing import Protocol


ACTIVE_OPACITY = 0.9

_RGB_PATTERN = re.compile(
    r"^rgba?\(\s*(\d{1,3})\s*,\s*(\d{1,3})\s*,\s*(\d{1,3})\s*(?:,\s*([0-9]*\.?[0-9]+)\s*)?\)$"
)
_HEX_PATTERN = re.compile(r"^#([0-9a-fA-F]{6})$")


class Rated(Protocol):
    rating: int


@dataclass(frozen=True)
class RGBA:
    """Display color with channels 0..255 and alpha 0..1."""

    red: int
    green: int
    blue: int
    alpha: float = 1.0

    @classmethod
    def parse(cls, value: str) -> "RGBA":
        """Parse a CSS `rgb(...)`, `rgba(...)` or `#rrggbb` color."""

        raw = value.strip()
        match = _RGB_PATTERN.match(raw)
        if match:
            red, green, blue, alpha = match.groups()
            return cls(
                int(red),
                int(green),
                int(blue),
                float(alpha) if alpha is not None else 1.0,
            )

        match = _HEX_PATTERN.match(raw)
        if match:
            digits = match.group(1)
            return cls(int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))

        raise ValueError(f"unsupported color value: {value!r}")

    def with_alpha(self, alpha: float) -> "RGBA":
        return replace(self, alpha=alpha)

    def to_css(self) -> str:
        return f"rgba({self.red}, {self.green}, {self.blue}, {self.alpha:g})"


NO_ACTIVITY_COLOR = RGBA.parse("#ebedf0")


@dataclass(frozen=True)
class RatingBand:
    min_rating: int
    color: RGBA


class RatingScale:
    """Ordered rating bands mapping a day's hardest problem to a color.

    Bands must be given from the highest threshold down and end with a
    band starting at 0, so every non-negative rating lands in exactly one
    band. Selection is "first band whose threshold is <= rating".
    """

    def __init__(self, bands: Iterable[RatingBand]) -> None:
        self._bands: tuple[RatingBand, ...] = tuple(bands)
        if not self._bands:
            raise ValueError("rating scale needs at least one band")

        for higher, lower in zip(self._bands, self._bands[1:]):
            if higher.min_rating <= lower.min_rating:
                raise ValueError("rating bands must be sorted by min_rating descending")

        if self._bands[-1].min_rating != 0:
            raise ValueError("lowest rating band must start at 0")

    @classmethod
    def from_css(cls, table: Iterable[tuple[int, str]]) -> "RatingScale":
        return cls(RatingBand(min_rating, RGBA.parse(color)) for min_rating, color in table)

    @property
    def bands(self) -> tuple[RatingBand, ...]:
        return self._bands

    def band_for(self, rating: int) -> RatingBand:
        for band in self._bands:
            if band.min_rating <= rating:
                return band
        # Negative ratings never occur in built indexes; clamp to the floor.
        return self._bands[-1]

    def classify(self, problems: Sequence[Rated]) -> RGBA:
        """Color for a day: neutral when empty, else the hardest problem's band."""

        if not problems:
            return NO_ACTIVITY_COLOR

        max_rating = max(problem.rating for problem in problems)
        return self.band_for(max_rating).color.with_alpha(ACTIVE_OPACITY)


# Codeforces rank colors; alpha is normalized on classification.
CODEFORCES_RATING_COLORS: tuple[tuple[int, str], ...] = (
    (3000, "rgba(170,0,0,0.9)"),
    (2600, "rgb(255, 0, 0)"),
    (2400, "rgba(255, 100, 100, 0.9)"),
    (2300, "rgba(255,187,85,0.9)"),
    (2100, "rgba(255,204,136,0.9)"),
    (1900, "rgba(255, 85, 255, 0.9)"),
    (1600, "rgba(170,170,255,0.9)"),
    (1400, "rgba(119,221,187,0.9)"),
    (1200, "rgba(119,255,119,0.9)"),
    (0, "rgba(204,204,204,0.9)"),
)

DEFAULT_SCALE = RatingScale.from_css(CODEFORCES_RATING_COLORS)
