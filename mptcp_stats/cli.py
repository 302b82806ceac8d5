# mptcp_stats/cli.py
import argparse
import json
import logging
import sys
from pathlib import Path

from mptcp_stats.config import get_settings
from mptcp_stats.core.ingest import load_results
from mptcp_stats.core.report import (
    build_markdown_report,
    build_text_summary,
    summary_dict,
    write_artifacts,
)
from mptcp_stats.core.summary import classify_hosts


def main(argv=None):
    settings = get_settings()

    ap = argparse.ArgumentParser(prog="mptcp-stats", description="MPTCP scan results :: category counts and host lists")
    ap.add_argument("results", help="Path to results.json written by the scanner")
    ap.add_argument("--out", default=settings.out_dir, help=f"Output directory (default: {settings.out_dir})")
    ap.add_argument("--format", choices=["text", "json", "markdown"], default="text", help="Console output format")
    ap.add_argument("--quiet", action="store_true", help="Counts only, no host lists (text format)")
    ap.add_argument("--no-artifacts", action="store_true", help="Do not write files, print only")
    ap.add_argument("--log-level", default=settings.log_level, help=f"Logging level (default: {settings.log_level})")
    args = ap.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.INFO),
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    # load
    try:
        records = load_results(Path(args.results))
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    # classify
    report = classify_hosts(records, extra_timeout_ports=settings.extra_timeout_ports)

    # console
    if args.format == "json":
        print(json.dumps(summary_dict(report), indent=2))
    elif args.format == "markdown":
        print(build_markdown_report(report))
    else:
        print(build_text_summary(report, verbose=not args.quiet), end="")

    # artifacts
    if not args.no_artifacts:
        paths = write_artifacts(report, Path(args.out))
        for p in paths.values():
            print(f"Artifact written: {p}", file=sys.stderr)

    return 0


if __name__ == "__main__":
    sys.exit(main())
