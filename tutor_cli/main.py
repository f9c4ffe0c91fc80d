"""
Main module for Tutor CLI.

This module provides the command-line interface for the tutoring backend. Every API endpoint is exposed as a
subcommand; responses are printed as JSON and the session cookie is kept in an optional session file between runs.

Functions:
    sanitize_input(value: str) -> str:
        Strips ANSI escape sequences from free-text user input.

    parse_assignments(pairs: list[str]) -> Dict[str, Any]:
        Parses key=value arguments, typing each value with YAML scalar rules.

    parse_args(argv=None):
        Parses command-line arguments for the Tutor CLI.

    run_command(args, api: ApiClient):
        Calls the API endpoint matching the parsed subcommand and returns its result.

    execute(args, config: ClientConfig, session_file: Path | None, transport=None) -> int:
        Opens the client, runs the command, prints the outcome and persists the session.

    main(argv=None):
        Entry point for the CLI.

Usage:
    Run as a script or through the "tutor-cli" console script. Use --help on any subcommand for its arguments.

(c) Passlick Development 2025. All rights reserved.
"""


from __future__ import annotations

import argparse
import asyncio
import dataclasses
import json
import logging
import re
from pathlib import Path
from typing import Any, Dict

import httpx
import yaml
from rich.console import Console
from rich.prompt import Prompt

from . import __version__
from .client import ApiClient, ApiError
from .config import ClientConfig, load_config
from .logs import configure_logging, log_event
from .models import NotificationPreferences, PrivacySettings, ProfileUpdate, QuizAnswer
from .session import clear_session, load_session, save_session


console = Console()


_ANSI_CSI_RE = re.compile(r"\x1B\[[0-?]*[ -/]*[@-~]")


def sanitize_input(value: str) -> str:
    if not value:
        return value
    cleaned = _ANSI_CSI_RE.sub("", value)
    cleaned = cleaned.replace("\x1b", "")
    return cleaned


def parse_assignments(pairs: list[str]) -> Dict[str, Any]:
    values: Dict[str, Any] = {}
    for pair in pairs:
        key, sep, raw = pair.partition("=")
        if not sep or not key:
            raise ValueError(f"expected key=value, got {pair!r}")
        try:
            value = yaml.safe_load(raw) if raw else None
        except yaml.YAMLError:
            value = raw
        values[key.strip().replace("-", "_")] = value
    return values


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Tutor CLI - Command line client for the tutoring backend API")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--config", default="tutor.yaml",
                        help="Set path to the YAML configuration file")
    parser.add_argument("--base-url", default=None,
                        help="Set server base URL (overrides the configuration file)")
    parser.add_argument("--session-file", default=None,
                        help="Set path to the file storing session cookies")
    parser.add_argument("--log-file", default=None,
                        help="Set path to log file")
    parser.add_argument("-v", "--verbose", action="count",
                        default=0, help="Verbose output")

    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("login", help="Log in and start a session")
    p.add_argument("email")
    p.add_argument("--password", default=None)

    p = sub.add_parser("register", help="Create an account")
    p.add_argument("name")
    p.add_argument("email")
    p.add_argument("--password", default=None)

    sub.add_parser("logout", help="End the current session")
    sub.add_parser("whoami", help="Show the logged in user")
    sub.add_parser("profile", help="Show the user profile")

    p = sub.add_parser("update-profile", help="Update profile fields (key=value)")
    p.add_argument("fields", nargs="+")

    p = sub.add_parser("change-password", help="Change the account password")
    p.add_argument("--current", default=None)
    p.add_argument("--new", default=None)

    p = sub.add_parser("notifications", help="Update notification preferences (key=value)")
    p.add_argument("fields", nargs="+")

    p = sub.add_parser("privacy", help="Update privacy settings (key=value)")
    p.add_argument("fields", nargs="+")

    p = sub.add_parser("ask", help="Ask the AI tutor a question")
    p.add_argument("question", nargs="*")

    p = sub.add_parser("transcribe", help="Transcribe a WAV recording")
    p.add_argument("file")

    sub.add_parser("quiz", help="Fetch a quiz")

    p = sub.add_parser("submit-quiz", help="Submit quiz answers as ID:BOOL")
    p.add_argument("answers", nargs="+")

    p = sub.add_parser("dashboard", help="Show dashboard data")
    p.add_argument("--range", dest="time_range", default="week",
                   help="Set dashboard range (default: week)")
    return parser.parse_args(argv)


def _prompt_missing(args):
    if args.command in ("login", "register") and not args.password:
        args.password = Prompt.ask("Password", password=True)
    elif args.command == "change-password":
        if not args.current:
            args.current = Prompt.ask("Current password", password=True)
        if not args.new:
            args.new = Prompt.ask("New password", password=True)
    elif args.command == "ask" and not args.question:
        args.question = [Prompt.ask(">>> QUESTION")]


async def run_command(args, api: ApiClient):
    cmd = args.command
    if cmd == "login":
        return await api.login(args.email, args.password)
    if cmd == "register":
        return await api.register(args.name, args.email, args.password)
    if cmd == "logout":
        return await api.logout()
    if cmd == "whoami":
        return await api.get_current_user()
    if cmd == "profile":
        return await api.get_user_profile()
    if cmd == "update-profile":
        return await api.update_user_profile(
            ProfileUpdate.from_dict(parse_assignments(args.fields)))
    if cmd == "change-password":
        return await api.change_password(args.current, args.new)
    if cmd == "notifications":
        return await api.update_notification_preferences(
            NotificationPreferences.from_dict(parse_assignments(args.fields)))
    if cmd == "privacy":
        return await api.update_privacy_settings(
            PrivacySettings.from_dict(parse_assignments(args.fields)))
    if cmd == "ask":
        return await api.ask_question(sanitize_input(" ".join(args.question).strip()))
    if cmd == "transcribe":
        return await api.transcribe_audio(Path(args.file).read_bytes())
    if cmd == "quiz":
        return await api.get_quiz()
    if cmd == "submit-quiz":
        return await api.submit_quiz([QuizAnswer.parse(a) for a in args.answers])
    if cmd == "dashboard":
        return await api.get_dashboard_data(args.time_range)
    raise ValueError(f"unknown command {cmd!r}")


async def execute(args, config: ClientConfig, session_file: Path | None, transport=None) -> int:
    cookies = httpx.Cookies()
    if session_file:
        load_session(cookies, session_file)
    async with ApiClient.from_config(config, cookies=cookies, transport=transport) as api:
        try:
            result = await run_command(args, api)
        except ApiError as e:
            console.print(f"[red]{e.status}[/red] {e.message}")
            return 1
        except httpx.HTTPError as e:
            console.print(f"[red]Request failed[/red]: {e}")
            return 1
        except json.JSONDecodeError as e:
            console.print(f"[red]Bad response[/red]: server returned invalid JSON ({e})")
            log_event("bad_response", level=logging.WARNING, command=args.command, error=str(e))
            return 1
        except (ValueError, OSError) as e:
            console.print(f"[red]Error[/red]: {e}")
            log_event("invalid_input", level=logging.WARNING, command=args.command, error=str(e))
            return 1
        finally:
            if session_file:
                save_session(api.cookies, session_file)
    if session_file and args.command == "logout":
        clear_session(session_file)
    log_event("completed", command=args.command)
    if result is None:
        console.print("[green]OK[/green]")
    else:
        console.print_json(data=result)
    return 0


def main(argv=None):
    args = parse_args(argv)
    configure_logging(args.log_file, args.verbose)
    config = load_config(Path(args.config))
    if args.base_url:
        if config is None:
            config = ClientConfig(base_url=args.base_url)
        else:
            config = dataclasses.replace(config, base_url=args.base_url)
    if config is None:
        console.print(
            f"[red]No usable configuration: create {args.config} or pass --base-url[/red]")
        return 1
    session_file = Path(args.session_file).expanduser() if args.session_file else config.session_file
    _prompt_missing(args)
    log_event("startup", command=args.command, base_url=config.base_url)
    return asyncio.run(execute(args, config, session_file))


if __name__ == "__main__":
    raise SystemExit(main())
