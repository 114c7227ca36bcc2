"""
GPX 1.1 serializer.

Renders synthesized points into a track-exchange document:

    <gpx version="1.1" ...>
      <metadata>name, desc, time</metadata>
      <trk>
        <name/><type/>
        <trkseg>
          <trkpt lat="..." lon="..."><ele/><time/></trkpt>
        </trkseg>
      </trk>
    </gpx>

Text fields are escaped for & < > " '.
"""

from datetime import datetime, timezone
from typing import Optional, Sequence, Union
from xml.sax.saxutils import escape

from gpx_synth.config import settings
from gpx_synth.shared.constants import ActivityType
from gpx_synth.shared.track_types import RoutePoint

GPX_NAMESPACE = "http://www.topografix.com/GPX/1/1"
XSI_NAMESPACE = "http://www.w3.org/2001/XMLSchema-instance"
GPX_SCHEMA_LOCATION = f"{GPX_NAMESPACE} http://www.topografix.com/GPX/1/1/gpx.xsd"

STANDARD_PRECISION = 6
REALISTIC_PRECISION = 7

_QUOTE_ENTITIES = {'"': "&quot;", "'": "&apos;"}


def escape_xml(text: str) -> str:
    """Escape the five XML metacharacters."""
    return escape(text, _QUOTE_ENTITIES)


def format_gpx_time(value: datetime) -> str:
    """ISO-8601 UTC with millisecond precision: 2024-01-01T10:00:00.000Z"""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return value.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class GPXSerializer:
    """
    Builds GPX documents from RoutePoint sequences.

    Example usage:
        serializer = GPXSerializer(coordinate_precision=7)
        document = serializer.serialize(points, "Morning Run", "Easy loop", ActivityType.RUN)
    """

    def __init__(
        self,
        creator: Optional[str] = None,
        coordinate_precision: int = STANDARD_PRECISION
    ):
        self.creator = creator or settings.gpx_creator
        self.coordinate_precision = coordinate_precision

    def serialize(
        self,
        points: Sequence[RoutePoint],
        name: str,
        description: str = "",
        activity_type: Union[ActivityType, str] = ActivityType.RUN,
        generated_at: Optional[datetime] = None,
    ) -> str:
        """
        Render a complete GPX document.

        Args:
            points: Track points, possibly empty
            name: Track and metadata name
            description: Metadata description
            activity_type: Written into <trk><type>
            generated_at: Metadata time when points carry none (default: now)

        Returns:
            GPX document string
        """
        activity = activity_type.value if isinstance(activity_type, ActivityType) else str(activity_type)
        metadata_time = self._metadata_time(points, generated_at)

        lines = [
            '<?xml version="1.0" encoding="UTF-8"?>',
            f'<gpx version="1.1" creator="{escape_xml(self.creator)}" '
            f'xmlns="{GPX_NAMESPACE}" xmlns:xsi="{XSI_NAMESPACE}" '
            f'xsi:schemaLocation="{GPX_SCHEMA_LOCATION}">',
            '  <metadata>',
            f'    <name>{escape_xml(name)}</name>',
            f'    <desc>{escape_xml(description)}</desc>',
            f'    <time>{format_gpx_time(metadata_time)}</time>',
            '  </metadata>',
            '  <trk>',
            f'    <name>{escape_xml(name)}</name>',
            f'    <type>{escape_xml(activity)}</type>',
            '    <trkseg>',
        ]
        for point in points:
            lines.extend(self._track_point(point))
        lines.extend([
            '    </trkseg>',
            '  </trk>',
            '</gpx>',
        ])
        return "\n".join(lines) + "\n"

    def _track_point(self, point: RoutePoint) -> list[str]:
        precision = self.coordinate_precision
        lines = [f'      <trkpt lat="{point.lat:.{precision}f}" lon="{point.lon:.{precision}f}">']
        # GPX 1.1 schema order: ele before time
        if point.elevation_m is not None:
            lines.append(f'        <ele>{point.elevation_m:.1f}</ele>')
        if point.time is not None:
            lines.append(f'        <time>{format_gpx_time(point.time)}</time>')
        lines.append('      </trkpt>')
        return lines

    @staticmethod
    def _metadata_time(
        points: Sequence[RoutePoint],
        generated_at: Optional[datetime]
    ) -> datetime:
        if points and points[0].time is not None:
            return points[0].time
        return generated_at or datetime.now(timezone.utc)


def serialize_track(
    points: Sequence[RoutePoint],
    name: str,
    description: str = "",
    activity_type: Union[ActivityType, str] = ActivityType.RUN,
) -> str:
    """Shortcut for GPXSerializer().serialize()."""
    return GPXSerializer().serialize(points, name, description, activity_type)
