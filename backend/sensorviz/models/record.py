"""
Sensor record model.

One record is one row of a sensor log: a timestamp, a GPS fix and the
inertial channels sampled at that instant. All numeric fields are always
finite numbers; missing or malformed source cells are zero-filled before a
record is built.
"""

from dataclasses import asdict, dataclass


# Column names recognized in the CSV header (exact, case-sensitive)
TIMESTAMP_FIELD = "timestamp"
FLOAT_FIELDS = (
    "lat",
    "lon",
    "alt",
    "accX",
    "accY",
    "accZ",
    "gyroX",
    "gyroY",
    "gyroZ",
    "pitch",
    "roll",
)
INT_FIELDS = ("sats",)
RECORD_FIELDS = (
    TIMESTAMP_FIELD,
    "lat",
    "lon",
    "alt",
    "sats",
    "accX",
    "accY",
    "accZ",
    "gyroX",
    "gyroY",
    "gyroZ",
    "pitch",
    "roll",
)

ACCELEROMETER_CHANNELS = ("accX", "accY", "accZ")
GYROSCOPE_CHANNELS = ("gyroX", "gyroY", "gyroZ")


@dataclass(frozen=True)
class SensorRecord:
    """A single sensor sample."""

    timestamp: str

    # GPS fix (degrees, meters). (0, 0) means "no fix".
    lat: float = 0.0
    lon: float = 0.0
    alt: float = 0.0
    sats: int = 0

    # Accelerometer
    accX: float = 0.0
    accY: float = 0.0
    accZ: float = 0.0

    # Gyroscope
    gyroX: float = 0.0
    gyroY: float = 0.0
    gyroZ: float = 0.0

    # Attitude (degrees)
    pitch: float = 0.0
    roll: float = 0.0

    @property
    def has_fix(self) -> bool:
        """True when both coordinates are non-zero."""
        return self.lat != 0 and self.lon != 0

    @property
    def coordinate(self) -> tuple[float, float]:
        return (self.lat, self.lon)

    def to_dict(self) -> dict:
        return asdict(self)
