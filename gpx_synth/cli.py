"""
CLI interface for track generation.

Usage:
    gpx-synth generate route.gpx --name "Morning Run" --speed 12
    gpx-synth generate route.geojson --name "Hill Ride" --activity Bike \
        --pace 2.5 --elevation real --realistic --seed 7
    gpx-synth preview route.gpx --speed 10
"""

import asyncio
import logging
import sys
from pathlib import Path

import click
from pydantic import ValidationError

from gpx_synth.config import settings
from gpx_synth.features.gpx import RouteFileReader
from gpx_synth.features.synthesis import GenerationOptions, TrackGenerationService
from gpx_synth.shared.constants import (
    ActivityType,
    ElevationPolicy,
    ElevationSource,
    TerrainProfile,
)
from gpx_synth.shared.errors import GpxSynthError
from gpx_synth.shared.formatters import format_distance_km, format_pace

logger = logging.getLogger(__name__)

GENERATION_FAILED = "Generation failed"


def _setup_logging():
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stdout),
        ]
    )


def _fail(error: Exception):
    """Single generic failure signal; details go to the log."""
    logger.error(f"{GENERATION_FAILED}: {error}")
    raise click.ClickException(GENERATION_FAILED)


@click.group()
def cli():
    """Synthetic GPS track generator."""
    _setup_logging()


def _common_options(func):
    """Options shared by generate and preview."""
    decorators = [
        click.argument("route_file", type=click.Path(exists=True, dir_okay=False, path_type=Path)),
        click.option("--name", default="Activity", show_default=True, help="Track name"),
        click.option(
            "--activity",
            default=ActivityType.RUN.value,
            show_default=True,
            type=click.Choice([a.value for a in ActivityType]),
            help="Activity type",
        ),
        click.option("--speed", type=float, default=None, help="Average speed in km/h"),
        click.option("--pace", type=float, default=None, help="Average pace in min/km"),
    ]
    for decorator in reversed(decorators):
        func = decorator(func)
    return func


@cli.command()
@_common_options
@click.option("--description", default=None, help="Track description")
@click.option(
    "--start",
    type=click.DateTime(formats=["%Y-%m-%dT%H:%M:%S", "%Y-%m-%d %H:%M:%S", "%Y-%m-%d"]),
    default=None,
    help="Start time, UTC (default: now)",
)
@click.option(
    "--elevation",
    "elevation_policy",
    default=ElevationPolicy.NONE.value,
    show_default=True,
    type=click.Choice([p.value for p in ElevationPolicy]),
    help="Elevation policy",
)
@click.option(
    "--terrain",
    default=TerrainProfile.FLAT.value,
    show_default=True,
    type=click.Choice([t.value for t in TerrainProfile]),
    help="Terrain for simulated_profile elevation",
)
@click.option("--gain", type=float, default=None, help="Total elevation gain in meters")
@click.option("--realistic/--standard", default=False, help="Realistic timing path")
@click.option("--noise/--no-noise", default=True, show_default=True, help="Random speed variation")
@click.option("--variation", type=float, default=None, help="Speed variation factor (0-0.5)")
@click.option("--sampling-rate", type=float, default=None, help="Minimum seconds between points")
@click.option("--pause", type=float, default=0, show_default=True, help="Pause duration in seconds")
@click.option("--seed", type=int, default=None, help="Random seed for reproducible output")
@click.option(
    "--output", "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Output file (default: derived from --name)",
)
def generate(
    route_file, name, activity, speed, pace, description, start,
    elevation_policy, terrain, gain, realistic, noise, variation,
    sampling_rate, pause, seed, output
):
    """Generate a timestamped GPX track for ROUTE_FILE."""
    try:
        coordinates = RouteFileReader.read(route_file)
        fields = dict(
            name=name,
            description=description,
            activity_type=activity,
            average_speed_kmh=speed,
            average_pace_min_per_km=pace,
            elevation_policy=elevation_policy,
            terrain_profile=terrain,
            elevation_gain_m=gain,
            realistic_timing=realistic,
            add_noise=noise,
            pause_duration_s=pause,
            seed=seed,
        )
        if start is not None:
            fields["start_time"] = start
        if variation is not None:
            fields["speed_variation"] = variation
        if sampling_rate is not None:
            fields["sampling_rate_s"] = sampling_rate
        options = GenerationOptions(**fields)
    except (ValidationError, GpxSynthError) as e:
        _fail(e)

    track = asyncio.run(TrackGenerationService().generate(coordinates, options))

    output_path = output or Path(track.filename)
    output_path.write_text(track.gpx, encoding="utf-8")

    summary = track.summary
    click.echo(f"Saved: {output_path}")
    click.echo(
        f"Points: {summary.point_count} | "
        f"Distance: {format_distance_km(summary.distance_km)} | "
        f"Duration: {summary.duration_formatted}"
    )
    if track.elevation_source is not ElevationSource.NONE:
        click.echo(
            f"Elevation ({track.elevation_source.value}): "
            f"+{summary.elevation_gain_m:.0f} m / -{summary.elevation_loss_m:.0f} m"
        )
    for warning in track.warnings:
        click.echo(f"Note: {warning}")


@cli.command()
@_common_options
def preview(route_file, name, activity, speed, pace):
    """Estimate distance and duration for ROUTE_FILE without generating."""
    try:
        coordinates = RouteFileReader.read(route_file)
        options = GenerationOptions(
            name=name,
            activity_type=activity,
            average_speed_kmh=speed,
            average_pace_min_per_km=pace,
        )
    except (ValidationError, GpxSynthError) as e:
        _fail(e)

    result = TrackGenerationService.preview(coordinates, options)
    click.echo(f"Distance: {result.distance_km:.2f} km")
    click.echo(f"Duration: {result.estimated_duration_formatted}")
    click.echo(f"Speed: {result.average_speed_kmh:.1f} km/h")
    click.echo(f"Pace: {format_pace(result.average_pace_min_km)}")


if __name__ == "__main__":
    cli()
