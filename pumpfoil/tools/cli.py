"""
CLI interface for run detection.

Usage:
    python -m pumpfoil.tools.cli detect session.gpx
    python -m pumpfoil.tools.cli detect streams.json --threshold 9 --output json
"""

import json
import logging
from pathlib import Path

import click

from pumpfoil.config import settings
from pumpfoil.shared.constants import (
    RUN_DURATION_RANGE_S,
    SMOOTHING_WINDOW_RANGE,
    SPEED_THRESHOLD_RANGE_KMH,
    STOP_DURATION_RANGE_S,
)
from pumpfoil.features.detection import DetectionConfig, DetectionError, RunDetectionEngine
from pumpfoil.features.samples import samples_from_gpx, samples_from_strava_streams
from .report import ReportGenerator


def _load_samples(path: Path):
    """Read samples from a GPX track or a Strava streams JSON file."""
    if path.suffix.lower() == ".gpx":
        return samples_from_gpx(path.read_bytes())
    if path.suffix.lower() == ".json":
        return samples_from_strava_streams(json.loads(path.read_text(encoding="utf-8")))
    raise click.BadParameter(f"Unsupported file type: {path.suffix} (use .gpx or .json)")


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose):
    """Pump-foil run detection tools."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else getattr(logging, settings.log_level),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )


@cli.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--threshold", default=None, type=float, help="Min pumping speed, km/h")
@click.option("--min-run", default=None, type=float, help="Min run duration, seconds")
@click.option("--min-stop", default=None, type=float, help="Min stop duration, seconds")
@click.option("--window", default=None, type=int, help="Smoothing window, samples")
@click.option(
    "--output",
    default="console",
    type=click.Choice(["console", "json"]),
    help="Output format"
)
@click.option("--output-file", default=None, type=click.Path(path_type=Path),
              help="Write JSON report to this file")
def detect(file, threshold, min_run, min_stop, window, output, output_file):
    """
    Detect pumping runs in a recorded session.

    FILE is a GPX track or a Strava streams JSON payload.
    """
    defaults = settings.detection_config()
    config = DetectionConfig(
        min_speed_threshold=threshold if threshold is not None else defaults.min_speed_threshold,
        min_run_duration=min_run if min_run is not None else defaults.min_run_duration,
        min_stop_duration=min_stop if min_stop is not None else defaults.min_stop_duration,
        speed_smoothing_window=window if window is not None else defaults.speed_smoothing_window,
    )

    try:
        samples = _load_samples(file)
    except ValueError as e:
        raise click.ClickException(str(e))

    try:
        result = RunDetectionEngine().detect(samples, config, session_id=file.stem)
    except DetectionError as e:
        raise click.ClickException(str(e))

    generator = ReportGenerator()

    if output == "console":
        click.echo(generator.generate_console(result, source=file.name))
    else:
        click.echo(generator.generate_json(result))

    if output_file is not None:
        generator.save_json(result, output_file)
        click.echo(f"JSON saved: {output_file}")


@cli.command()
def defaults():
    """Show default detection parameters and recommended ranges."""
    config = settings.detection_config()
    rows = [
        ("min_speed_threshold", config.min_speed_threshold, "km/h", SPEED_THRESHOLD_RANGE_KMH),
        ("min_run_duration", config.min_run_duration, "s", RUN_DURATION_RANGE_S),
        ("min_stop_duration", config.min_stop_duration, "s", STOP_DURATION_RANGE_S),
        ("speed_smoothing_window", config.speed_smoothing_window, "", SMOOTHING_WINDOW_RANGE),
    ]
    for name, value, unit, (low, high, step) in rows:
        shown = f"{value} {unit}".strip()
        click.echo(f"{name + ':':<24}{shown:<12}(range {low}-{high}, step {step})")


if __name__ == "__main__":
    cli()
