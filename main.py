import argparse
import json
import logging
import sys
from pathlib import Path

from route_elevation.config import get_config
from route_elevation.elevation_analysis import analyze_gpx_files
from route_elevation.logger import set_log_level

config = get_config()

parser = argparse.ArgumentParser(description="Route Elevation - Höhenprofil pro Kilometer")
parser.add_argument("gpx_files", nargs="*", type=Path, help="GPX-Dateien (Default: alle in --gpx-dir)")
parser.add_argument("--gpx-dir", type=Path, default=config.directories.gpx)
parser.add_argument("--segment-length", type=float, default=config.analysis.segment_length_m, help="in Metern")
parser.add_argument("--threshold", type=float, default=config.analysis.min_elevation_diff, help="in Metern")
parser.add_argument("--no-smoothing", action="store_true", default=not config.analysis.use_smoothing)
parser.add_argument(
    "--smoothing-window", type=int, default=config.analysis.smoothing_window, help="Fenstergröße in Punkten"
)
parser.add_argument("--output", type=Path, default=config.directories.output / "elevation.json")
parser.add_argument("--debug", action="store_true", help="Debug-Ausgaben in die Log-Datei schreiben")


def collect_gpx_files(args: argparse.Namespace) -> list[Path]:
    """Bestimmt die zu analysierenden GPX-Dateien."""
    if args.gpx_files:
        return args.gpx_files

    if not args.gpx_dir.exists():
        raise FileNotFoundError(f"GPX-Verzeichnis nicht gefunden: {args.gpx_dir}")

    gpx_files = sorted(args.gpx_dir.glob("*.gpx"))
    if not gpx_files:
        raise ValueError(f"Keine GPX-Dateien in {args.gpx_dir} gefunden")

    return gpx_files


if __name__ == "__main__":
    args = parser.parse_args()

    if args.debug:
        set_log_level(logging.DEBUG)

    results = analyze_gpx_files(
        collect_gpx_files(args),
        segment_length_m=args.segment_length,
        min_elevation_diff=args.threshold,
        use_smoothing=not args.no_smoothing,
        smoothing_window=args.smoothing_window,
    )

    for result in results:
        if result.ok:
            print(
                f"{result.filename}: {result.total_distance_km} km, "
                f"+{result.total_elevation_gain} m / -{result.total_elevation_loss} m, "
                f"{len(result.km_segments)} Abschnitte"
            )
        else:
            print(f"{result.filename}: ❌ {result.error}")

    # JSON speichern mit UTF-8 Encoding
    args.output.parent.mkdir(parents=True, exist_ok=True)
    args.output.write_text(
        json.dumps([r.model_dump() for r in results], indent=2, ensure_ascii=False), encoding="utf-8"
    )

    sys.exit(0 if all(r.ok for r in results) else 1)
