"""Conductor Monitor CLI

Usage:
    conductor status
    conductor report --events 100
    conductor delegate backend-engineer "Implement login endpoint"
    conductor direct file_edit "Fixed a typo"
    conductor threshold 0.9
    conductor reminder auto
    conductor serve --port 8000
"""

import argparse
import asyncio
import json
import os
import sys
from typing import Any

from .config import get_settings
from .core.exceptions import StoreError, ValidationError
from .logging_config import configure_logging
from .services import ConductorService

EXIT_STORE_ERROR = 1
EXIT_VALIDATION_ERROR = 2


def _print_json(data: Any) -> None:
    print(json.dumps(data, indent=2, default=str))


def _metadata(raw: str | None) -> dict:
    if not raw:
        return {}
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ValidationError(f"--metadata must be a JSON object: {e}") from e
    if not isinstance(data, dict):
        raise ValidationError("--metadata must be a JSON object")
    return data


async def run_command(args: argparse.Namespace, service: ConductorService) -> None:
    """Dispatch a parsed command against the service"""
    if args.command == "status":
        print(await service.get_formatted_status())
    elif args.command == "report":
        report = await service.generate_report(args.events)
        _print_json(report.to_dict())
    elif args.command == "stats":
        _print_json((await service.compute_stats()).to_dict())
    elif args.command == "events":
        events = await service.list_recent_events(args.limit)
        _print_json([e.to_dict() for e in events])
    elif args.command == "delegate":
        stats = await service.record_delegation(args.agent, args.task, _metadata(args.metadata))
        _print_json(stats.to_dict())
    elif args.command == "direct":
        stats = await service.record_direct_action(
            args.action_type, args.description, _metadata(args.metadata)
        )
        _print_json(stats.to_dict())
    elif args.command == "threshold":
        if args.value is None:
            threshold = await service.get_alert_threshold()
        else:
            threshold = await service.set_alert_threshold(args.value)
        _print_json({"threshold": threshold})
    elif args.command == "reset":
        await service.reset_tracking()
        print("CONDUCTOR delegation tracking has been reset")
    elif args.command == "reminder":
        await _run_reminder(args, service)


async def _run_reminder(args: argparse.Namespace, service: ConductorService) -> None:
    action = args.reminder_command
    if action == "check":
        _print_json((await service.check_reminder(args.interval)).to_dict())
    elif action == "auto":
        reminder = await service.auto_reminder(args.interval)
        if reminder:
            print(reminder)
    elif action == "show":
        print(await service.show_reminder())
    elif action == "count":
        _print_json({"count": await service.get_message_count()})
    elif action == "reset":
        await service.reset_reminder_counter()
        _print_json({"count": 0})
    elif action == "interval":
        if args.value is not None:
            await service.set_reminder_interval(args.value)
        _print_json({"interval": await service.get_reminder_interval()})


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="conductor", description="Conductor delegation monitor"
    )
    parser.add_argument("--redis-url", help="Redis URL (default: REDIS_URL or settings)")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("status", help="Show formatted delegation status")

    report = sub.add_parser("report", help="Print the detailed report as JSON")
    report.add_argument("--events", type=int, default=50, help="Events to analyze")

    sub.add_parser("stats", help="Print aggregate stats as JSON")

    events = sub.add_parser("events", help="List recent events")
    events.add_argument("--limit", type=int, default=50)

    delegate = sub.add_parser("delegate", help="Record a delegation")
    delegate.add_argument("agent")
    delegate.add_argument("task", nargs="?", default="")
    delegate.add_argument("--metadata", help="JSON object stored with the event")

    direct = sub.add_parser("direct", help="Record a direct action")
    direct.add_argument("action_type")
    direct.add_argument("description", nargs="?", default="")
    direct.add_argument("--metadata", help="JSON object stored with the event")

    threshold = sub.add_parser("threshold", help="Get or set the alert threshold")
    threshold.add_argument("value", nargs="?", type=float)

    sub.add_parser("reset", help="Reset delegation tracking")

    reminder = sub.add_parser("reminder", help="Message reminder commands")
    reminder_sub = reminder.add_subparsers(dest="reminder_command", required=True)
    for name in ("check", "auto"):
        cmd = reminder_sub.add_parser(name)
        cmd.add_argument("--interval", type=int)
    reminder_sub.add_parser("show")
    reminder_sub.add_parser("count")
    reminder_sub.add_parser("reset")
    interval = reminder_sub.add_parser("interval", help="Get or set the reminder interval")
    interval.add_argument("value", nargs="?", type=int)

    serve = sub.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host")
    serve.add_argument("--port", type=int)

    return parser


async def _main(args: argparse.Namespace) -> int:
    settings = get_settings()
    if args.redis_url:
        settings = settings.model_copy(update={"redis_url": args.redis_url})

    service = ConductorService.from_settings(settings)
    try:
        await run_command(args, service)
    except ValidationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR
    except StoreError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_STORE_ERROR
    finally:
        await service.close()
    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    configure_logging(settings.log_level)

    if args.command == "serve":
        import uvicorn

        if args.redis_url:
            # conductor.api reads its settings from the environment on import
            os.environ["REDIS_URL"] = args.redis_url
            get_settings.cache_clear()
            settings = get_settings()

        uvicorn.run(
            "conductor.api:app",
            host=args.host or settings.host,
            port=args.port or settings.port,
            reload=False,
        )
        return 0

    return asyncio.run(_main(args))


if __name__ == "__main__":
    sys.exit(main())
