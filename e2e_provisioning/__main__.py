# -*- coding: utf-8 -*-
"""Main CLI for provisioning test data.

Usage:
    python -m e2e_provisioning create-users --count 5 --save-fixture profile
    python -m e2e_provisioning reset-profile
    python -m e2e_provisioning add-contact-method --type SMS
    python -m e2e_provisioning add-notification-rule --delay-minutes 5
    python -m e2e_provisioning clear-contact-methods --user-id <id>
"""

# Standard
import argparse
import asyncio
import logging
import sys
from typing import Any, Dict, List, Optional

# Third-Party
from pydantic import BaseModel
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

# Local
from .config import get_settings, Settings
from .fixtures import FixtureLoader
from .schemas import ContactMethodType, UserRole
from .session import ProvisioningSession

logger = logging.getLogger(__name__)


def _drop_none(values: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in values.items() if v is not None}


def render_records(console: Console, title: str, records: List[BaseModel]) -> None:
    """Print records as a table, one row per record, wire field names as columns."""
    rows = [r.model_dump(by_alias=True, mode="json") for r in records]
    if not rows:
        console.print(f"[dim]{title}: nothing created[/dim]")
        return

    table = Table(title=title)
    columns = list(rows[0])
    for col in columns:
        table.add_column(col, overflow="fold")
    for row in rows:
        table.add_row(*(str(row[c]) for c in columns))
    console.print(table)


async def run_command(args: argparse.Namespace, settings: Settings, console: Console) -> None:
    """Run the selected subcommand against the configured backend."""
    async with ProvisioningSession.from_settings(settings) as session:
        commands = session.commands

        if args.command == "create-users":
            options = [_drop_none({"role": args.role}) for _ in range(args.count)]
            profiles = await commands.create_many_users(options)
            render_records(console, "Users", profiles)
            if args.save_fixture and profiles:
                path = FixtureLoader(settings.fixtures_dir).save(args.save_fixture, profiles[0].model_dump(mode="json"))
                console.print(f"[dim]Saved {profiles[0].id} as fixture '{args.save_fixture}' ({path})[/dim]")

        elif args.command == "reset-profile":
            profile = await commands.reset_profile()
            render_records(console, "Reset profile", [profile])

        elif args.command == "add-contact-method":
            cm = await commands.add_contact_method(_drop_none({"userID": args.user_id, "name": args.name, "type": args.type, "value": args.value}))
            render_records(console, "Contact method", [cm])

        elif args.command == "add-notification-rule":
            rule = await commands.add_notification_rule(
                _drop_none({"userID": args.user_id, "contactMethodID": args.contact_method_id, "delayMinutes": args.delay_minutes})
            )
            render_records(console, "Notification rule", [rule])
            render_records(console, "Contact method", [rule.contact_method])

        elif args.command == "clear-contact-methods":
            deleted = await commands.clear_contact_methods(args.user_id)
            console.print(Panel(f"[bold]Deleted:[/bold] [green]{deleted}[/green]", title="[bold cyan]Clear contact methods[/bold cyan]", border_style="cyan"))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m e2e_provisioning",
        description="Provision end-to-end test data against a live backend",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Configuration is read from E2E_* environment variables (or .env):
  E2E_BASE_URL, E2E_API_TOKEN, E2E_DATABASE_URL, E2E_FIXTURES_DIR, E2E_FAKER_SEED
        """,
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Override log level",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    users = sub.add_parser("create-users", help="Create users with one batch insert")
    users.add_argument("--count", type=int, default=1, help="Number of users (default: 1)")
    users.add_argument("--role", choices=[r.value for r in UserRole], default=None)
    users.add_argument("--save-fixture", type=str, default=None, help="Save the first user as this fixture name")

    sub.add_parser("reset-profile", help="Clear contact methods and restore the active test subject")

    cm = sub.add_parser("add-contact-method", help="Add a contact method")
    cm.add_argument("--user-id", type=str, default=None)
    cm.add_argument("--name", type=str, default=None)
    cm.add_argument("--type", choices=[t.value for t in ContactMethodType], default=None)
    cm.add_argument("--value", type=str, default=None)

    nr = sub.add_parser("add-notification-rule", help="Add a notification rule")
    nr.add_argument("--user-id", type=str, default=None)
    nr.add_argument("--contact-method-id", type=str, default=None)
    nr.add_argument("--delay-minutes", type=int, default=None)

    clear = sub.add_parser("clear-contact-methods", help="Delete a user's contact methods")
    clear.add_argument("--user-id", type=str, default=None, help="Defaults to the active test subject")

    return parser


def main(argv: Optional[List[str]] = None):
    """CLI entry point."""
    args = build_parser().parse_args(argv)
    settings = get_settings()

    log_level = args.log_level or settings.log_level
    logging.basicConfig(level=getattr(logging, log_level), format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    console = Console()
    try:
        asyncio.run(run_command(args, settings, console))
        sys.exit(0)
    except KeyboardInterrupt:
        print("\nInterrupted by user")
        sys.exit(130)
    except Exception as exc:
        logger.error(f"{args.command} failed: {exc}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
