"""Vehicle class for identification and current odometer state."""

from datetime import date
from typing import Optional


class Vehicle:
    """Vehicle identification and current odometer reading."""

    def __init__(
        self,
        id: str,
        make: str,
        model: str,
        year: Optional[int] = None,
        trim: Optional[str] = None,
        current_odometer: Optional[float] = None,
        odometer_unit: Optional[str] = None,
        fuel_type: Optional[str] = None,
        nickname: Optional[str] = None,
    ):
        self.id = id
        self.make = make
        self.model = model
        self.year = year
        self.trim = trim
        self.current_odometer = current_odometer
        self.odometer_unit = odometer_unit or "miles"
        self.fuel_type = fuel_type
        self.nickname = nickname

    @property
    def name(self) -> str:
        """Human-readable vehicle name."""
        base = f"{self.make} {self.model}"
        if self.year:
            base = f"{self.year} {base}"
        return f"{base} {self.trim}" if self.trim else base

    @property
    def current_distance(self) -> float:
        """Current odometer, zero when never recorded."""
        return self.current_odometer or 0

    def age_years(self, as_of: date) -> int:
        """Model-year age at the given date; zero when the year is unknown."""
        if not self.year:
            return 0
        return max(0, as_of.year - self.year)
