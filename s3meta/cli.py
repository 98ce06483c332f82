"""
Command line interface for the S3 metadata reporter.
"""

import argparse
import sys
from datetime import datetime, timezone

import duckdb

from .enumerator import PaginatedEnumerator
from .errors import MetaError
from .metrics import chain
from .models import MetaConfig
from .s3_client import S3Lister
from .storage import Storage


def log_stderr(message: str):
    print(message, file=sys.stderr)


def save_report(db_path: str, location: str, report, summary: dict) -> int:
    """Save a finished report to the DuckDB history."""
    try:
        storage = Storage(db_path)
        try:
            return storage.save_report(location, report, summary)
        finally:
            storage.close()
    except (duckdb.Error, OSError) as e:
        raise MetaError.from_exception(e) from e


def cmd_scan(args) -> int:
    """Scan an S3 location and print its report."""
    config = MetaConfig.from_location(
        args.location,
        region=args.region,
        profile=args.profile,
        endpoint_url=args.endpoint_url,
        page_size=args.page_size,
        connect_timeout=args.connect_timeout,
        read_timeout=args.read_timeout,
        max_attempts=args.max_attempts,
        db_path=args.db,
        verbose=args.verbose
    )

    if config.verbose:
        log_stderr(f"Scanning {config.location}")

    lister = S3Lister(config, log_callback=log_stderr if config.verbose else None)
    enumerator = PaginatedEnumerator(output_callback=log_stderr, verbose=config.verbose)

    started_at = datetime.now(timezone.utc).replace(tzinfo=None)
    metrics = chain(prefix=config.prefix)
    report = enumerator.run(metrics, lister)

    if args.rich:
        from .dashboard import render_report
        render_report(report, title=config.location)
    else:
        print(report.to_text())

    if config.db_path:
        general = metrics.get("general")
        summary = enumerator.stats.to_dict()
        summary.update(started_at=started_at, total_files=general.total_keys,
                       total_bytes=general.total_size)
        run_id = save_report(config.db_path, config.location, report, summary)
        if config.verbose:
            log_stderr(f"Saved report as run {run_id} in {config.db_path}")

    return 0


def cmd_history(args) -> int:
    """Show stored reports."""
    try:
        storage = Storage(args.db, read_only=True)
    except (duckdb.Error, OSError) as e:
        raise MetaError.from_exception(e) from e

    try:
        if args.run is not None:
            report = storage.get_report(args.run)
            if report is None:
                raise MetaError(f"Run {args.run} not found in {args.db}")
            if args.rich:
                from .dashboard import render_report
                render_report(report, title=f"Run {args.run}")
            else:
                print(report.to_text())
            return 0

        runs = storage.recent_runs(location=args.location, limit=args.limit)
    finally:
        storage.close()

    if args.rich:
        from .dashboard import render_runs
        render_runs(runs)
        return 0

    for r in runs:
        started = r['started_at'].strftime('%Y-%m-%d %H:%M:%S') if r['started_at'] else 'N/A'
        print(f"  {r['run_id']:>5}  {started}  {r['location']:<40} "
              f"{r['total_files'] or 0:>12,} files  {r['total_bytes'] or 0:>16,} bytes")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='s3-meta',
        description='Metadata report for an S3 bucket or prefix',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Report on a whole bucket
  %(prog)s scan s3://my-bucket

  # Report on a prefix, keeping a history of reports
  %(prog)s scan s3://my-bucket/logs/2018/ --db meta.duckdb

  # Show stored reports
  %(prog)s history --db meta.duckdb
  %(prog)s history --db meta.duckdb --run 3
        """
    )

    subparsers = parser.add_subparsers(dest='command', help='Command')

    # Scan
    scan_p = subparsers.add_parser('scan', help='Scan an S3 location')
    scan_p.add_argument('location', nargs='?',
                        help='S3 location, e.g. s3://bucket/prefix')
    scan_p.add_argument('--region', help='AWS region (default: from environment)')
    scan_p.add_argument('--profile', help='AWS credentials profile')
    scan_p.add_argument('--endpoint-url', help='Custom S3 endpoint')
    scan_p.add_argument('--page-size', type=int, default=1000,
                        help='Keys per listing request (default: 1000)')
    scan_p.add_argument('--connect-timeout', type=int, default=5,
                        help='Connect timeout seconds (default: 5)')
    scan_p.add_argument('--read-timeout', type=int, default=60,
                        help='Read timeout seconds (default: 60)')
    scan_p.add_argument('--max-attempts', type=int, default=5,
                        help='Attempts per listing request (default: 5)')
    scan_p.add_argument('--db', help='Save the report to this DuckDB file')
    scan_p.add_argument('--rich', action='store_true',
                        help='Render the report as tables')
    scan_p.add_argument('--verbose', '-v', action='store_true',
                        help='Print listing progress to stderr')
    scan_p.set_defaults(func=cmd_scan)

    # History
    history_p = subparsers.add_parser('history', help='Show stored reports')
    history_p.add_argument('--db', required=True, help='DuckDB file with saved reports')
    history_p.add_argument('--location', help='Only runs for this location')
    history_p.add_argument('--limit', type=int, default=20,
                           help='Limit results (default: 20)')
    history_p.add_argument('--run', type=int, help='Print the report of this run')
    history_p.add_argument('--rich', action='store_true',
                           help='Render as tables')
    history_p.set_defaults(func=cmd_history)

    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    try:
        return args.func(args)
    except MetaError as e:
        print(e, file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
