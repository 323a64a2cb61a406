"""City domain entity."""

from dataclasses import dataclass

# Open-Meteo geocoding reports coordinates with 4 decimals
COORDINATE_PRECISION = 4


@dataclass(frozen=True, eq=False)
class City:
    """A geocoded place returned by city search.

    Two cities can share a name, so identity is the rounded coordinate
    pair rather than the name.

    Attributes:
        name: Display name of the place
        latitude: Latitude in decimal degrees
        longitude: Longitude in decimal degrees
        country: Country name, if the provider knows it
        region: First-level administrative area (state, county, ...)
    """

    name: str
    latitude: float
    longitude: float
    country: str | None = None
    region: str | None = None

    @property
    def identity(self) -> tuple[float, float]:
        return (
            round(self.latitude, COORDINATE_PRECISION),
            round(self.longitude, COORDINATE_PRECISION),
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, City):
            return NotImplemented
        return self.identity == other.identity

    def __hash__(self) -> int:
        return hash(self.identity)
