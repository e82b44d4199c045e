"""
Chart view adapter.

Builds the two time-series panels (accelerometer, gyroscope) keyed by
timestamp, and turns chart clicks into selection writes.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional, Sequence

from sensorviz.models.record import (
    ACCELEROMETER_CHANNELS,
    GYROSCOPE_CHANNELS,
    SensorRecord,
)
from sensorviz.services.selection import SelectionCoordinator
from sensorviz.utils.timestamps import format_time_of_day


logger = logging.getLogger(__name__)

# channel -> (display name, line color)
CHANNEL_STYLES = {
    "accX": ("AccX", "#ef4444"),
    "accY": ("AccY", "#22c55e"),
    "accZ": ("AccZ", "#3b82f6"),
    "gyroX": ("GyroX", "#f97316"),
    "gyroY": ("GyroY", "#8b5cf6"),
    "gyroZ": ("GyroZ", "#06b6d4"),
}
SELECTION_COLOR = "#8b5cf6"

PANELS = (
    ("accelerometer", "Accelerometer Data", ACCELEROMETER_CHANNELS),
    ("gyroscope", "Gyroscope Data", GYROSCOPE_CHANNELS),
)


@dataclass
class ChartSeries:
    key: str
    name: str
    color: str
    values: list[float]


@dataclass
class ChartPanel:
    id: str
    title: str
    series: list[ChartSeries] = field(default_factory=list)


@dataclass
class ChartView:
    """Everything a line-chart widget needs to draw both panels."""

    timestamps: list[str]
    tick_labels: list[str]
    panels: list[ChartPanel]
    selected_timestamp: Optional[str] = None
    selected_index: Optional[int] = None
    selection_color: str = SELECTION_COLOR


class ChartAdapter:
    """Bridges the chart widgets and the shared selection."""

    def __init__(self, selection: SelectionCoordinator):
        self._selection = selection

    def build(self, records: Sequence[SensorRecord]) -> ChartView:
        timestamps = [record.timestamp for record in records]
        panels = [
            ChartPanel(
                id=panel_id,
                title=title,
                series=[
                    ChartSeries(
                        key=channel,
                        name=CHANNEL_STYLES[channel][0],
                        color=CHANNEL_STYLES[channel][1],
                        values=[getattr(record, channel) for record in records],
                    )
                    for channel in channels
                ],
            )
            for panel_id, title, channels in PANELS
        ]

        selected = self._selection.current()
        return ChartView(
            timestamps=timestamps,
            tick_labels=[format_time_of_day(ts) for ts in timestamps],
            panels=panels,
            selected_timestamp=selected,
            selected_index=_index_of(timestamps, selected),
        )

    def handle_click(self, active_label: Optional[str]) -> bool:
        """
        Handle a click on either chart.

        The widget reports the x-axis label under the cursor; clicks outside
        any point carry no label and are ignored. Returns True when the
        click was written to the selection.
        """
        if not active_label:
            logger.debug("Chart click without an active label ignored")
            return False
        self._selection.select(active_label)
        return True


def _index_of(timestamps: list[str], selected: Optional[str]) -> Optional[int]:
    if selected is None:
        return None
    try:
        return timestamps.index(selected)
    except ValueError:
        return None
