"""Skin tone CLI: analyze photos and print MST results."""

import argparse
import sys


def main() -> None:
    """CLI entry point for skin tone analysis."""
    parser = argparse.ArgumentParser(description="MST skin tone analyzer")
    parser.add_argument("--log-level", default=None, help="Logging level (default: LOG_LEVEL)")
    subparsers = parser.add_subparsers(dest="command")

    # analyze
    an_parser = subparsers.add_parser("analyze", help="Analyze a single photo")
    an_parser.add_argument("path", help="Image file (max 5MB)")
    an_parser.add_argument("--device", default=None, help="Device: cpu or cuda (default: DEVICE)")
    an_parser.add_argument(
        "--no-upload", action="store_true", help="Do not upload images to object storage"
    )
    an_parser.add_argument(
        "--no-face-detection", action="store_true", help="Classify the full frame"
    )
    an_parser.add_argument("--json", action="store_true", help="Print the result record as JSON")

    # batch
    batch_parser = subparsers.add_parser("batch", help="Analyze every image in a directory")
    batch_parser.add_argument("directory", help="Directory containing images")
    batch_parser.add_argument("--device", default=None, help="Device: cpu or cuda (default: DEVICE)")
    batch_parser.add_argument(
        "--limit", type=int, default=None, help="Max number of images to analyze (default: all)"
    )
    batch_parser.add_argument(
        "--no-upload", action="store_true", help="Do not upload images to object storage"
    )

    # scale
    subparsers.add_parser("scale", help="Show the Monk Skin Tone scale")

    args = parser.parse_args()

    if args.command is None:
        parser.print_help()
        return

    from skin_tone_analyzer.logging_config import setup_logging

    setup_logging(args.log_level)

    if args.command == "analyze":
        _cmd_analyze(args)
    elif args.command == "batch":
        _cmd_batch(args)
    elif args.command == "scale":
        _cmd_scale()


def _cmd_analyze(args: argparse.Namespace) -> None:
    """Analyze one photo and print the result."""
    import json

    from rich.console import Console

    from skin_tone_analyzer.analyzer.pipeline import SkinToneAnalyzer
    from skin_tone_analyzer.errors import AnalysisError

    analyzer = SkinToneAnalyzer.from_config(
        device=args.device,
        upload=not args.no_upload,
        detect_faces=not args.no_face_detection,
    )
    try:
        report = analyzer.analyze_file(args.path)
    except (AnalysisError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)

    if args.json:
        print(json.dumps(report.to_dict(), indent=2))
        return

    console = Console()
    result = report.result
    console.print(f"Prediction: [bold]{result.adjusted_label}[/bold] (raw {result.raw_label})")
    console.print(f"Confidence: {result.confidence * 100:.1f}%")
    console.print(f"Luminance: {result.luminance:.1f}")
    console.print(f"Face detected: {'yes' if result.face_detected else 'no (full frame)'}")
    console.print(f"Swatch: [on {report.mst_color}]      [/] {report.mst_color}")
    console.print(f"Tone group: {result.tone_group}")
    console.print("Recommended:")
    for swatch in result.recommendations.recommended:
        console.print(f"  [on {swatch.hex}]    [/] {swatch.name} ({swatch.hex})")
    console.print("Avoid:")
    for swatch in result.recommendations.avoid:
        console.print(f"  [on {swatch.hex}]    [/] {swatch.name} ({swatch.hex})")
    if not report.image_url.startswith("data:"):
        console.print(f"Image URL: {report.image_url}")
        console.print(f"Processed image URL: {report.processed_image_url}")


def _cmd_batch(args: argparse.Namespace) -> None:
    """Analyze every image in a directory."""
    import mimetypes
    from collections import Counter
    from pathlib import Path

    from rich.console import Console
    from rich.markup import escape
    from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn
    from rich.table import Table

    from skin_tone_analyzer.analyzer.pipeline import SkinToneAnalyzer
    from skin_tone_analyzer.errors import AnalysisError, BackendUnavailable

    directory = Path(args.directory)
    paths = sorted(
        p
        for p in directory.iterdir()
        if p.is_file() and (mimetypes.guess_type(p.name)[0] or "").startswith("image/")
    )
    if args.limit is not None:
        paths = paths[: args.limit]
    if not paths:
        print(f"No images found in {directory}.")
        return

    print(f"Found {len(paths)} images to analyze.")
    analyzer = SkinToneAnalyzer.from_config(device=args.device, upload=not args.no_upload)

    table = Table(title="MST results")
    table.add_column("File")
    table.add_column("Prediction")
    table.add_column("Raw")
    table.add_column("Confidence", justify="right")
    table.add_column("Luminance", justify="right")
    table.add_column("Face")
    table.add_column("Tone group")

    groups: Counter[str] = Counter()
    errors = 0

    with Progress(
        SpinnerColumn(),
        TextColumn("[bold blue]{task.description}"),
        BarColumn(),
        TextColumn("[progress.percentage]{task.percentage:>3.0f}%"),
        TextColumn("{task.completed}/{task.total}"),
    ) as progress:
        task = progress.add_task("Analyzing", total=len(paths))

        for path in paths:
            try:
                report = analyzer.analyze_file(path)
            except BackendUnavailable as exc:
                print(f"Error: {exc}", file=sys.stderr)
                sys.exit(1)
            except AnalysisError as exc:
                errors += 1
                table.add_row(path.name, "-", "-", "-", "-", "-", f"[red]{escape(str(exc))}[/red]")
                progress.advance(task)
                continue

            result = report.result
            groups[str(result.tone_group)] += 1
            table.add_row(
                path.name,
                result.adjusted_label,
                result.raw_label,
                f"{result.confidence * 100:.1f}%",
                f"{result.luminance:.1f}",
                "yes" if result.face_detected else "no",
                str(result.tone_group),
            )
            progress.advance(task)

    Console().print(table)
    print("\nDone.")
    print(f"  Images analyzed: {len(paths) - errors}")
    for group, count in groups.most_common():
        print(f"  {group}: {count}")
    if errors > 0:
        print(f"  Errors: {errors}")


def _cmd_scale() -> None:
    """Print the MST scale swatches."""
    from rich.console import Console
    from rich.table import Table

    from skin_tone_analyzer.tone.palette import CLASS_LABELS, MST_COLORS, tone_group

    table = Table(title="Monk Skin Tone scale")
    table.add_column("Label")
    table.add_column("Swatch")
    table.add_column("Hex")
    table.add_column("Tone group")
    for label, color in zip(CLASS_LABELS, MST_COLORS):
        table.add_row(label, f"[on {color}]      [/]", color, str(tone_group(label)))
    Console().print(table)
