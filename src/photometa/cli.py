"""
Command-line interface for photometa.

Usage:
  photometa photo.jpg                      # Metadata + AI check
  photometa -q *.png                       # One-line summary per image
  photometa --json -o report.json *.png    # JSON export
  photometa --url "https://example.com/a.png"
  photometa --stdin < pasted.png           # Read image bytes from stdin
  photometa --no-remote photo.jpg          # Skip the Gemini second opinion
  photometa --status                       # Show extractor/service status
  photometa --serve                        # Run the visitor-count API
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from photometa._version import __version__
from photometa.analyze import AnalysisSession
from photometa.detectors import BaseVerifier, GeminiVerifier, UnconfiguredVerifier
from photometa.errors import DecodeError, FetchError
from photometa.extractors import get_extractor_status
from photometa.formatters import (
    format_default,
    format_json_list,
    format_quiet,
    format_remote,
)
from photometa.models import AnalysisSnapshot
from photometa.sources import ImageSource, fetch_image


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="photometa",
        description="Image metadata viewer with AI-generation detection.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Checks:
  metadata     Keyword scan of Software/Artist/UserComment/ImageDescription
               tags and Stable Diffusion text chunks (always, instant)
  remote       Gemini visual analysis (when an API key is configured)

Configuration:
  PHOTOMETA_GEMINI_API_KEY              Gemini API key (or GEMINI_API_KEY)
  GA_PROPERTY_ID                        GA4 property for --serve
  GOOGLE_APPLICATION_CREDENTIALS_JSON   Service-account key JSON for --serve

Examples:
  photometa photo.jpg
  photometa -q *.png
  photometa --json -o report.json *.png
  photometa --url "https://example.com/image.png"
        """,
    )
    parser.add_argument("files", nargs="*", help="Image file(s) to analyze")
    parser.add_argument("-o", "--output", help="Save report to JSON file")
    parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    parser.add_argument("--url", "-u", metavar="URL", help="Analyze image from URL")
    parser.add_argument("--stdin", action="store_true", help="Read image bytes from stdin")
    parser.add_argument(
        "--no-remote",
        action="store_true",
        help="Skip remote (Gemini) verification",
    )

    mode_group = parser.add_mutually_exclusive_group()
    mode_group.add_argument("-q", "--quiet", action="store_true", help="Quick summary only")
    mode_group.add_argument("--json", action="store_true", help="Print JSON instead of text")
    mode_group.add_argument(
        "--status",
        action="store_true",
        help="Show extractor and service status",
    )
    mode_group.add_argument(
        "--serve",
        action="store_true",
        help="Run the visitor-count API server",
    )

    parser.add_argument("--host", default="127.0.0.1", help="Bind address for --serve")
    parser.add_argument("--port", type=int, default=8000, help="Port for --serve")
    return parser


def print_status() -> None:
    from photometa.analytics import AnalyticsReporter

    print("photometa status:")
    print("=" * 50)

    print("\nExtractors:")
    print("-" * 50)
    for name, available in sorted(get_extractor_status().items()):
        icon = "✓" if available else "✗"
        print(f"  {icon} {name}")

    print("\nServices:")
    print("-" * 50)
    services = {
        "gemini (remote verification)": GeminiVerifier.from_config().is_configured(),
        "google analytics (visitor count)": AnalyticsReporter.from_config().is_configured(),
    }
    for name, configured in services.items():
        icon = "✓" if configured else "✗"
        print(f"  {icon} {name}")


def serve(host: str, port: int) -> int:
    import uvicorn

    uvicorn.run("photometa.api:app", host=host, port=port)
    return 0


def collect_sources(args: argparse.Namespace) -> tuple[list[ImageSource], int]:
    """Load every requested image; return sources and the error count."""
    sources: list[ImageSource] = []
    errors = 0

    if args.stdin:
        sources.append(ImageSource.from_bytes(sys.stdin.buffer.read()))

    if args.url:
        try:
            sources.append(fetch_image(args.url))
        except FetchError as e:
            print(f"Error: {e}", file=sys.stderr)
            errors += 1

    for path in args.files:
        try:
            sources.append(ImageSource.from_path(path))
        except OSError as e:
            print(f"Error: {e}", file=sys.stderr)
            errors += 1

    return sources, errors


async def run_analysis(
    sources: list[ImageSource], verifier: BaseVerifier, args: argparse.Namespace
) -> tuple[list[AnalysisSnapshot], int]:
    """Analyze sources one after another, printing snapshots as they arrive."""
    session = AnalysisSession(verifier)
    results: list[AnalysisSnapshot] = []
    errors = 0

    for source in sources:
        final: AnalysisSnapshot | None = None
        try:
            async for snapshot in session.analyze(source):
                if not args.quiet and not args.json:
                    # First snapshot is the full local report, later ones
                    # only add the remote section
                    print(format_default(snapshot) if final is None else format_remote(snapshot))
                    sys.stdout.flush()
                final = snapshot
        except DecodeError as e:
            print(f"Error analyzing {source.name}: {e}", file=sys.stderr)
            errors += 1
            continue

        if final is None:
            continue
        results.append(final)
        if args.quiet:
            print(format_quiet(final))
        elif not args.json:
            print()

    return results, errors


def main() -> int:
    """Main entry point for photometa CLI."""
    parser = build_parser()
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.status:
        print_status()
        return 0

    if args.serve:
        return serve(args.host, args.port)

    if not args.files and not args.url and not args.stdin:
        parser.error("the following arguments are required: files (or --url / --stdin)")

    sources, errors = collect_sources(args)

    verifier: BaseVerifier
    if args.no_remote:
        verifier = UnconfiguredVerifier("Remote verification disabled (--no-remote)")
    else:
        verifier = GeminiVerifier.from_config()

    results, analysis_errors = asyncio.run(run_analysis(sources, verifier, args))
    errors += analysis_errors

    if args.json and results:
        print(format_json_list(results))

    if args.output and results:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(format_json_list(results))
        print(f"Report saved to: {args.output}")

    return 1 if errors > 0 else 0


if __name__ == "__main__":
    sys.exit(main())
