"""Vehicle class used to resolve schedule vehicle ids for display."""


class Vehicle:
    """Vehicle identification referenced by maintenance schedules."""

    STATUSES = ("active", "maintenance", "inactive")

    def __init__(
        self,
        id: str,
        plate: str,
        brand: str,
        model: str,
        status: str = "active",
    ):
        self.id = id
        self.plate = plate
        self.brand = brand
        self.model = model
        self.status = status

    @property
    def label(self) -> str:
        """Display label: plate followed by brand and model."""
        return f"{self.plate} - {self.brand} {self.model}"
