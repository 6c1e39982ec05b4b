"""
Command line demo for the Parallel client.

Usage:
    python -m parallelclient search "latest AI news" --query "AI news this week"
    python -m parallelclient extract https://example.com --objective "headlines"
    python -m parallelclient run "Key highlights of the latest Apple event" --processor base --wait
    python -m parallelclient get RUN_ID
    python -m parallelclient poll RUN_ID --interval 5 --timeout 600
    python -m parallelclient chat "What is the capital of France?"
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from dataclasses import asdict, is_dataclass
from typing import Any

from rich.console import Console
from rich.markup import escape

from .client import ParallelClient
from .config import API_CONFIG
from .errors import ErrorKind, ParallelError
from .result import Result
from .types import ChatMessage, ChatRequest, ExtractRequest, SearchRequest, TaskRunRequest

console = Console()
err_console = Console(stderr=True)

DEFAULT_CHAT_MODEL = "speed"
DEFAULT_PROCESSOR = "base"

EXIT_CODES = {
    ErrorKind.CONFIG: 2,
    ErrorKind.CANCELLED: 3,
}


def output_result(result: Result[Any, ParallelError]) -> int:
    """Print a result and return the process exit code."""
    if result.is_err():
        error = result.error
        err_console.print(f"[red]✗ {error.kind.value}: {escape(error.message)}[/]")
        return EXIT_CODES.get(error.kind, 1)

    value = result.value
    console.print_json(data=asdict(value) if is_dataclass(value) else value, default=str)
    return 0


async def execute_search(client: ParallelClient, args: argparse.Namespace) -> int:
    request = SearchRequest(
        objective=args.objective,
        search_queries=args.query or [],
        max_results=args.max_results,
        max_chars_per_result=args.max_chars,
    )
    return output_result(await client.search(request))


async def execute_extract(client: ParallelClient, args: argparse.Namespace) -> int:
    request = ExtractRequest(
        urls=args.urls,
        objective=args.objective,
        excerpts=args.excerpts,
        full_content=args.full_content,
    )
    return output_result(await client.extract(request))


async def execute_poll(client: ParallelClient, run_id: str, interval: float, timeout: float | None) -> int:
    with console.status(f"Waiting for run {run_id}..."):
        result = await client.poll_until_complete(run_id, interval, timeout=timeout)
    return output_result(result)


async def execute_run(client: ParallelClient, args: argparse.Namespace) -> int:
    started = await client.run_task(TaskRunRequest(input=args.input, processor=args.processor))
    if started.is_err() or not args.wait:
        return output_result(started)

    err_console.print(f"[dim]Run {started.value.run_id} started[/]")
    return await execute_poll(client, started.value.run_id, args.interval, args.timeout)


async def execute_chat(client: ParallelClient, args: argparse.Namespace) -> int:
    messages = []
    if args.system:
        messages.append(ChatMessage(role="system", content=args.system))
    messages.append(ChatMessage(role="user", content=args.message))
    return output_result(await client.chat(ChatRequest(model=args.model, messages=messages)))


async def dispatch(args: argparse.Namespace) -> int:
    client = ParallelClient(api_key=args.api_key, base_url=args.base_url)

    if args.command == "search":
        return await execute_search(client, args)
    if args.command == "extract":
        return await execute_extract(client, args)
    if args.command == "run":
        return await execute_run(client, args)
    if args.command == "get":
        return output_result(await client.get_task(args.run_id))
    if args.command == "poll":
        return await execute_poll(client, args.run_id, args.interval, args.timeout)
    return await execute_chat(client, args)


def _add_poll_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--interval",
        type=float,
        default=API_CONFIG.DEFAULT_POLL_INTERVAL_SECONDS,
        help=f"Seconds between status checks (default: {API_CONFIG.DEFAULT_POLL_INTERVAL_SECONDS})",
    )
    parser.add_argument("--timeout", type=float, help="Give up after this many seconds")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="parallel-client",
        description="Parallel API demo client",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  parallel-client search "Find the latest news on AI." --query "latest AI news"
  parallel-client run "What were the key highlights of the latest Apple event?" --wait
  parallel-client chat "What is the capital of France?" --system "You are a helpful assistant."
        """,
    )
    parser.add_argument("--api-key", help=f"API key (default: ${API_CONFIG.API_KEY_ENV})")
    parser.add_argument("--base-url", help=f"API base URL (default: {API_CONFIG.BASE_URL})")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log requests to stderr")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # SEARCH command
    search_parser = subparsers.add_parser("search", help="Search the web")
    search_parser.add_argument("objective", help="What the search should find")
    search_parser.add_argument("--query", action="append", help="Search query (repeatable)")
    search_parser.add_argument("--max-results", type=int, default=5, help="Maximum results (default: 5)")
    search_parser.add_argument("--max-chars", type=int, default=1500, help="Maximum characters per result (default: 1500)")

    # EXTRACT command
    extract_parser = subparsers.add_parser("extract", help="Extract content from URLs")
    extract_parser.add_argument("urls", nargs="+", help="Pages to extract")
    extract_parser.add_argument("--objective", default="", help="What to extract")
    extract_parser.add_argument("--excerpts", action="store_true", help="Return focused excerpts")
    extract_parser.add_argument("--full-content", action="store_true", help="Return full page content")

    # RUN command
    run_parser = subparsers.add_parser("run", help="Start a task run")
    run_parser.add_argument("input", help="Task input")
    run_parser.add_argument("--processor", default=DEFAULT_PROCESSOR, help=f"Processor (default: {DEFAULT_PROCESSOR})")
    run_parser.add_argument("--wait", action="store_true", help="Poll until the run finishes")
    _add_poll_options(run_parser)

    # GET command
    get_parser = subparsers.add_parser("get", help="Show the status of a task run")
    get_parser.add_argument("run_id", help="Run identifier")

    # POLL command
    poll_parser = subparsers.add_parser("poll", help="Wait for a task run to finish")
    poll_parser.add_argument("run_id", help="Run identifier")
    _add_poll_options(poll_parser)

    # CHAT command
    chat_parser = subparsers.add_parser("chat", help="Send a chat completion request")
    chat_parser.add_argument("message", help="User message")
    chat_parser.add_argument("--system", help="System prompt")
    chat_parser.add_argument("--model", default=DEFAULT_CHAT_MODEL, help=f"Model (default: {DEFAULT_CHAT_MODEL})")

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    # stdout is for JSON output
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        exit_code = asyncio.run(dispatch(args))
    except KeyboardInterrupt:
        err_console.print("\n[yellow]Cancelled[/]")
        exit_code = 130
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
