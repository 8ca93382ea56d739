"""ServiceRecord class for maintenance performed on a vehicle."""

from typing import Iterable, Optional


class ServiceRecord:
    """A record of maintenance performed."""

    def __init__(
        self,
        vehicle_id: str,
        category: Optional[str],
        service_date: str,
        odometer: Optional[float] = None,
        cost: Optional[float] = None,
        provider: Optional[str] = None,
        is_diy: bool = False,
        notes: Optional[str] = None,
    ):
        self.vehicle_id = vehicle_id
        self.category = category
        self.service_date = service_date
        self.odometer = odometer
        self.cost = cost
        self.provider = provider
        self.is_diy = bool(is_diy)
        self.notes = notes

    def matches(self, keywords: Iterable[str]) -> bool:
        """Case-insensitive substring match of any keyword in the category."""
        if not self.category:
            return False
        name = self.category.lower()
        return any(keyword.lower() in name for keyword in keywords)
