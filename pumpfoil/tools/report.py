"""
Report generators for detection results.

Formats results for console and JSON output.
"""

import json
from pathlib import Path

from pumpfoil.features.detection import DetectionResult, longest_run
from pumpfoil.features.detection.schemas import DetectionResponse
from pumpfoil.shared.formatters import (
    format_distance,
    format_duration,
    format_heartrate,
    format_speed,
)


class ReportGenerator:
    """Generate reports in various formats."""

    def generate_console(self, result: DetectionResult, source: str = "") -> str:
        """Generate ASCII report for console output."""

        stats = result.stats
        config = result.config

        lines = [
            "",
            "=" * 70,
            "                      PUMP SESSION REPORT",
            "=" * 70,
            "",
        ]
        if source:
            lines.append(f"Source:         {source}")
        lines.extend([
            f"Settings:       threshold={config.min_speed_threshold} km/h, "
            f"min_run={config.min_run_duration}s, min_stop={config.min_stop_duration}s, "
            f"window={config.speed_smoothing_window}",
            f"Session:        {format_duration(stats.session_duration)}",
            "",
        ])

        if stats.number_of_runs == 0:
            lines.extend([
                "No runs detected.",
                "",
            ])
            return "\n".join(lines)

        ratio = ""
        if stats.pumping_ratio is not None:
            ratio = f" ({stats.pumping_ratio * 100:.0f}% of session)"

        lines.extend([
            f"Runs:           {stats.number_of_runs}",
            f"Pumping time:   {format_duration(stats.total_pumping_time)}{ratio}",
            f"Distance:       {format_distance(stats.total_pumping_distance)}",
            f"Max speed:      {format_speed(stats.best_max_speed)}",
            f"Best avg speed: {format_speed(stats.best_average_speed)}",
            f"Avg run:        {format_duration(stats.average_run_duration)} / "
            f"{format_distance(stats.average_run_distance)}",
            f"Longest run:    {format_duration(stats.longest_run_duration)} / "
            f"{format_distance(stats.longest_run_distance)}",
        ])
        if stats.average_heartrate is not None:
            lines.append(
                f"Heart rate:     {format_heartrate(stats.average_heartrate)} "
                f"(max {format_heartrate(stats.max_heartrate)})"
            )

        # Runs table
        lines.extend([
            "",
            "-" * 70,
            f"{'#':>3} | {'Start':>7} | {'Time':>7} | {'Dist':>8} | {'Avg':>10} | {'Max':>10} | HR",
            "-" * 70,
        ])

        longest = longest_run(result.runs)
        for run in result.runs:
            marker = " *" if longest is not None and run.id == longest.id else ""
            lines.append(
                f"{run.number:>3} | {format_duration(run.start_time):>7} | "
                f"{format_duration(run.duration):>7} | {format_distance(run.distance):>8} | "
                f"{format_speed(run.average_speed):>10} | {format_speed(run.max_speed):>10} | "
                f"{format_heartrate(run.average_heartrate)}{marker}"
            )

        lines.extend([
            "-" * 70,
            "* longest run",
            "",
        ])

        return "\n".join(lines)

    def generate_json(self, result: DetectionResult) -> str:
        """Generate JSON report (same shape as the API response)."""
        payload = DetectionResponse.from_result(result).model_dump(mode="json")
        return json.dumps(payload, indent=2, ensure_ascii=False)

    def save_json(self, result: DetectionResult, path: Path) -> None:
        """Save JSON report to file."""
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.generate_json(result), encoding="utf-8")
