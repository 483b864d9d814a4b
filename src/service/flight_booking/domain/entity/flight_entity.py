import attrs


@attrs.frozen
class FlightEntity:
    """Read-only flight reference data."""

    fid: int
    day_of_month: int
    carrier_id: str
    flight_num: str
    origin_city: str
    dest_city: str
    duration_minutes: int
    capacity: int
    price: int
    canceled: bool = False
