#!/usr/bin/env python3
"""
CORS Scanner v1.0
Multi-worker scanner that probes targets with crafted Origin headers to find
CORS misconfigurations.
"""

import argparse
import asyncio
import signal
import sys
import time
from pathlib import Path

from pydantic import ValidationError
from pydantic_settings import SettingsError
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from config import AppConfig, get_config
from core.dispatcher import ScanDispatcher
from core.errors import ConfigurationError
from core.output import error, info, success, warn
from core.progress import ScanProgress
from core.sink import MemorySink
from reporting import CSVWriter, display_results, print_result
from utils.logger import get_logger, setup_logging
from utils.targets import load_targets

console = Console()
logger = get_logger("scanner")
VERSION = "1.0"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cors-scanner",
        description="A multi-threaded CORS vulnerability scanner",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  cors-scanner -u https://example.com
  cors-scanner --url-file urls.txt -t 50 --csv-name results.csv
  cors-scanner -u https://example.com --proxy 127.0.0.1:8080 -v
  cors-scanner -u https://example.com -c 'example.com~~~session=abc; id=1'
        """
    )

    parser.add_argument('-u', '--url', help='specify a single URL')
    parser.add_argument('--url-file', help='specify a file containing URLs')
    parser.add_argument('-t', '--threads', type=int, help='specify number of threads')
    parser.add_argument('--timeout', type=float, help='specify connection timeout in seconds')
    parser.add_argument('--proxy', help='specify a proxy to use (127.0.0.1:8080)')
    parser.add_argument('--custom-header',
                        help='specify a custom header and value, delimited with ~~~')
    parser.add_argument('-c', '--cookies', action='append', default=[],
                        help='specify domain(s) and cookie(s) data delimited with ~~~')
    parser.add_argument('--useragent', help='specify a User Agent string to use')
    parser.add_argument('-r', '--referer', help='specify a referer string to use')
    parser.add_argument('--csv-name', help='specify a CSV file name')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='increase output verbosity')
    parser.add_argument('--config', type=Path, help='YAML configuration file')
    parser.add_argument('--log-file', type=Path, help='write logs to this file')
    return parser


def split_cookie_args(values: list[str]) -> list[str]:
    """Flatten repeated and comma-separated --cookies values"""
    rules = []
    for value in values:
        rules.extend(part.strip() for part in value.split(",") if part.strip())
    return rules


def load_app_config(args: argparse.Namespace) -> AppConfig:
    """Merge file/env configuration with command line overrides"""
    try:
        app = AppConfig.from_yaml(args.config) if args.config else get_config()
        app = app.with_scan(
            threads=args.threads,
            timeout=args.timeout,
            proxy=args.proxy,
            custom_header=args.custom_header,
            cookies=split_cookie_args(args.cookies) or None,
            user_agent=args.useragent,
            referer=args.referer,
            verbose=args.verbose or None,
        )
    except ValidationError as e:
        problems = "; ".join(err["msg"] for err in e.errors())
        raise ConfigurationError(problems) from e
    except SettingsError as e:
        raise ConfigurationError(str(e)) from e

    updates = {}
    if args.csv_name:
        updates["csv_name"] = Path(args.csv_name)
    if args.log_file:
        updates["log_file"] = args.log_file
    return app.model_copy(update=updates) if updates else app


def print_banner(app: AppConfig) -> None:
    console.print(Panel.fit(
        f"[bold cyan]CORS SCANNER[/bold cyan] [dim]v{VERSION}[/dim]\n"
        "[dim]Origin reflection, null origin and wildcard checks[/dim]",
        border_style="cyan"
    ))

    if app.scan.verbose:
        console.print(f"[cyan]Threads:[/cyan] {app.scan.threads}")
        console.print(f"[cyan]Timeout:[/cyan] {app.scan.timeout}")
        if app.scan.proxy:
            console.print(f"[cyan]Proxy:[/cyan] {escape(app.scan.proxy)}")
        console.print()


async def run_scan(app: AppConfig, targets: list[str]) -> tuple:
    """Run the dispatcher, stopping early on Ctrl-C"""
    scan_config = app.scan
    cancel = asyncio.Event()

    loop = asyncio.get_running_loop()
    try:
        loop.add_signal_handler(signal.SIGINT, cancel.set)
    except (NotImplementedError, RuntimeError):
        pass

    sink = MemorySink(on_append=print_result if scan_config.verbose else None)
    progress = ScanProgress(len(targets), "Scanning", enabled=not scan_config.verbose)
    dispatcher = ScanDispatcher(
        scan_config,
        sink,
        on_target_done=progress.increment,
    )

    with progress:
        await dispatcher.run(targets, cancel)

    if cancel.is_set():
        warn("Scan interrupted; showing partial results")
    return sink.freeze()


def write_csv(app: AppConfig, results: tuple) -> None:
    if not results:
        return

    writer = CSVWriter(app.csv_name)
    appending = writer.path.exists()
    if appending:
        success(f"Appending to {escape(str(writer.path))}.")
    else:
        success(f"Writing to {escape(str(writer.path))}.")

    try:
        writer.write(results)
    except OSError as e:
        logger.error(f"Error writing CSV file: {e}")
        error(f"Error writing CSV file: {escape(str(e))}")
        return

    info(f"Complete! Found {len(results)} CORS configurations.")


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        app = load_app_config(args)
    except ConfigurationError as e:
        error(f"Error: {escape(str(e))}")
        return 1

    setup_logging(
        level="DEBUG" if app.scan.verbose else app.log_level,
        log_file=app.log_file,
        structured=app.structured_logs,
    )

    print_banner(app)

    try:
        targets = load_targets(args.url, args.url_file)
    except ConfigurationError as e:
        error(f"Error: {escape(str(e))}")
        return 1

    start_time = time.time()
    results = asyncio.run(run_scan(app, targets))
    duration = time.time() - start_time

    display_results(results, console)
    write_csv(app, results)

    console.print(f"\n[dim]Completed in {duration:.1f}s[/dim]")
    return 0


if __name__ == "__main__":
    sys.exit(main())
