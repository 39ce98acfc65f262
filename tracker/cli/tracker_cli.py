"""
Repo Streak Tracker CLI.

Runs the same services as the HTTP API against the same storage directory.
"""

import argparse
import asyncio
import sys

from dotenv import load_dotenv

from tracker.api.github_api import GitHubClient
from tracker.cache import FileCacheStore
from tracker.cli.formatters import (
    format_commits,
    format_json,
    format_profile,
    format_repos,
    format_streak,
)
from tracker.config import get_settings
from tracker.exceptions import RepositoryNotFoundError, TrackerError
from tracker.logging import cli_logger, configure_logging
from tracker.services import build_tracker_service

EXIT_ERROR = 1
EXIT_NOT_FOUND = 2


async def _run(operation):
    """Open a GitHub session, build the service and run ``operation`` on it."""
    settings = get_settings()
    async with GitHubClient(
        token=settings.github_token,
        base_url=settings.github_api_base,
        timeout=settings.request_timeout,
        max_concurrent=settings.max_concurrent_requests,
    ) as client:
        service = build_tracker_service(settings, client)
        return await operation(service)


def _emit(args, data, text_formatter) -> None:
    if args.format == "json":
        print(format_json(data))
    else:
        print(text_formatter(data), end="")


def cmd_repos(args):
    """Show the enriched repository catalog."""
    if args.refresh:
        repos = asyncio.run(_run(lambda service: service.refresh_catalog()))
    else:
        repos = asyncio.run(_run(lambda service: service.get_catalog()))
    _emit(args, repos, format_repos)


def cmd_commits(args):
    """Show the commit history of one repository."""
    commits = asyncio.run(_run(lambda service: service.get_commits(args.repo)))
    _emit(args, commits, format_commits)


def cmd_streak(args):
    """Show recomputed streak statistics for one repository."""
    report = asyncio.run(_run(lambda service: service.get_streak(args.repo)))
    _emit(args, report, format_streak)


def cmd_profile(args):
    """Show the identity summary and heatmap."""
    profile = asyncio.run(_run(lambda service: service.get_profile()))
    _emit(args, profile, format_profile)


def cmd_cache_status(args):
    """Show what is stored in the cache directory."""
    health = FileCacheStore(get_settings().storage_dir).health_check()
    for key, value in health.items():
        print(f"{key}: {value}")


def cmd_serve(args):
    """Run the HTTP API."""
    import uvicorn

    uvicorn.run("backend.app.main:app", host=args.host, port=args.port, reload=args.reload)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Repo Streak Tracker - commit streaks and heatmaps across your GitHub repositories"
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    repos_parser = subparsers.add_parser("repos", help="List the enriched repository catalog")
    repos_parser.add_argument("--refresh", action="store_true", help="Rebuild from GitHub")
    repos_parser.add_argument("--format", choices=["text", "json"], default="text")

    commits_parser = subparsers.add_parser("commits", help="Show commits of a repository")
    commits_parser.add_argument("repo", help="owner/name, owner__name or name")
    commits_parser.add_argument("--format", choices=["text", "json"], default="text")

    streak_parser = subparsers.add_parser("streak", help="Show streak statistics of a repository")
    streak_parser.add_argument("repo", help="owner/name, owner__name or name")
    streak_parser.add_argument("--format", choices=["text", "json"], default="text")

    profile_parser = subparsers.add_parser("profile", help="Show profile summary and heatmap")
    profile_parser.add_argument("--format", choices=["text", "json"], default="text")

    subparsers.add_parser("cache-status", help="Show cache status")

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=4000)
    serve_parser.add_argument("--reload", action="store_true")

    return parser


def main(argv=None) -> int:
    """Main entry point with CLI interface."""
    load_dotenv()

    parser = build_parser()
    args = parser.parse_args(argv)

    commands = {
        "repos": cmd_repos,
        "commits": cmd_commits,
        "streak": cmd_streak,
        "profile": cmd_profile,
        "cache-status": cmd_cache_status,
        "serve": cmd_serve,
    }

    if args.command not in commands:
        parser.print_help()
        return 0

    settings = get_settings()
    configure_logging(level="DEBUG" if settings.debug else settings.log_level)

    try:
        commands[args.command](args)
    except RepositoryNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_NOT_FOUND
    except TrackerError as e:
        cli_logger.error("command_failed", command=args.command, error=str(e))
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR
    except ValueError as e:
        # Malformed repository keys and invalid payloads
        cli_logger.error("command_failed", command=args.command, error=str(e))
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR
    return 0


if __name__ == "__main__":
    sys.exit(main())
