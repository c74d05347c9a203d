# uiauto_appstore/cli.py
"""
@file cli.py
@brief Command-line interface for uiauto-appstore.

Exit codes: 0 success (or "true" for yes/no queries), 1 for a "false"
answer or a usage error, 2 for a typed automation failure.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import List, Optional

from .client import AppStore
from .config import TimeConfig
from .context import ActionContextManager
from .exceptions import AppStoreError
from .process import controlling_application_name
from .repository import Repository
from .timinglogger import TIMING_LOGGER
from .utils.logging import get_logger, setup_logging

EXIT_OK = 0
EXIT_FALSE = 1
EXIT_FAILURE = 2

log = get_logger("cli")


def _resolve_timing_preset(args: argparse.Namespace, repo: Repository) -> str:
    """CLI flags win over the preset named in the configuration file."""
    if getattr(args, "ci", False):
        return "ci"
    if getattr(args, "fast", False):
        return "fast"
    if getattr(args, "slow", False):
        return "slow"
    return repo.app.timing_preset


def _configure_timing_logger_from_env() -> None:
    """Configure timing logging from environment variables."""
    enabled = os.getenv("UIAUTO_APPSTORE_TIMING_LOGGING", "").lower() in {"1", "true", "yes", "on"}
    if not enabled:
        TIMING_LOGGER.disable()
        return

    log_file = os.getenv("UIAUTO_APPSTORE_TIMING_LOG_FILE")
    TIMING_LOGGER.configure(console=True, file_path=log_file)
    TIMING_LOGGER.enable()


def _build_store(repo: Repository) -> AppStore:
    return AppStore.from_repository(repo)


def _answer(value: bool) -> int:
    print("true" if value else "false")
    return EXIT_OK if value else EXIT_FALSE


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="uiauto-appstore",
        description="uiauto-appstore - Mac App Store automation through the accessibility tree",
    )
    p.add_argument("--config", "-c", default=None, help="Optional configuration YAML (app identity, labels, timeouts)")
    p.add_argument("--ci", action="store_true", help="Use CI-optimized timeout settings")
    p.add_argument("--fast", action="store_true", help="Use fast timeout settings for local development")
    p.add_argument("--slow", action="store_true", help="Use slow timeout settings for unstable environments")
    p.add_argument("--log-file", default=None, help="Also write debug logs to this file")
    p.add_argument("--verbose", action="store_true", help="Show debug logs on stderr")
    sub = p.add_subparsers(dest="cmd", required=True)

    # -------------------------
    # install
    # -------------------------
    instp = sub.add_parser("install", help="Install a purchased app and wait for it to finish")
    instp.add_argument("name", help="App name as shown in the Purchases list")
    instp.add_argument("--timeout", "-t", type=float, default=None, help="Seconds to wait for the install")
    instp.add_argument("--username", "-u", default=None, help="Apple ID to sign in with first")
    instp.add_argument("--password", "-p", default=None,
                       help="Apple ID password (default: $UIAUTO_APPSTORE_PASSWORD)")

    # -------------------------
    # app queries
    # -------------------------
    for name, help_text in (
        ("purchased", "Exit 0 if the app was purchased with the signed-in Apple ID"),
        ("installed", "Exit 0 if the app is installed"),
        ("latest-version", "Print the version shown on the app's page"),
    ):
        qp = sub.add_parser(name, help=help_text)
        qp.add_argument("name", help="App name as shown in the Purchases list")

    # -------------------------
    # account
    # -------------------------
    signp = sub.add_parser("sign-in", help="Sign in with an Apple ID")
    signp.add_argument("--username", "-u", default=None, help="Apple ID")
    signp.add_argument("--password", "-p", default=None,
                       help="Apple ID password (default: $UIAUTO_APPSTORE_PASSWORD)")
    sub.add_parser("sign-out", help="Sign out of the App Store")
    sub.add_parser("signed-in", help="Exit 0 if somebody is signed in")
    sub.add_parser("current-user", help="Print the signed-in Apple ID")

    # -------------------------
    # process
    # -------------------------
    sub.add_parser("quit", help="Quit the App Store if it is running")
    sub.add_parser("running", help="Exit 0 if the App Store process is running")
    sub.add_parser("controlling-app", help="Print the application that needs Accessibility privileges")

    # -------------------------
    # validate-config
    # -------------------------
    sub.add_parser("validate-config", help="Validate the --config file and print the effective settings")

    return p


def _run(args: argparse.Namespace, repo: Repository) -> int:
    if args.cmd == "validate-config":
        source = repo.path or "<built-in defaults>"
        print(f"Configuration OK: {source}")
        print(f"  app: {repo.app.name} ({repo.app.bundle_id})")
        print(f"  timing preset: {_resolve_timing_preset(args, repo)}")
        for name in sorted(repo.timeout_overrides):
            print(f"  timeout override: {name}")
        return EXIT_OK

    if args.cmd == "controlling-app":
        print(controlling_application_name())
        return EXIT_OK

    store = _build_store(repo)

    if args.cmd == "install":
        # The environment password only applies to an explicit sign in.
        password = args.password
        if args.username and not password:
            password = os.getenv("UIAUTO_APPSTORE_PASSWORD")
        changed = store.install(args.name, args.timeout, username=args.username, password=password)
        print(f"Installed '{args.name}'" if changed else f"'{args.name}' is already installed")
        return EXIT_OK

    if args.cmd == "purchased":
        return _answer(store.purchased(args.name))

    if args.cmd == "installed":
        return _answer(store.installed(args.name))

    if args.cmd == "latest-version":
        print(store.latest_version(args.name))
        return EXIT_OK

    if args.cmd == "sign-in":
        password = args.password or os.getenv("UIAUTO_APPSTORE_PASSWORD")
        changed = store.sign_in(args.username or "", password or "")
        print(f"Signed in as {args.username}" if changed else f"Already signed in as {args.username}")
        return EXIT_OK

    if args.cmd == "sign-out":
        print("Signed out" if store.sign_out() else "Nobody was signed in")
        return EXIT_OK

    if args.cmd == "signed-in":
        return _answer(store.signed_in())

    if args.cmd == "current-user":
        user = store.current_user()
        if user is None:
            print("Nobody is signed in", file=sys.stderr)
            return EXIT_FALSE
        print(user)
        return EXIT_OK

    if args.cmd == "quit":
        print("Quit requested" if store.quit() else "App Store is not running")
        return EXIT_OK

    if args.cmd == "running":
        return _answer(store.running())

    print(f"Unknown command: {args.cmd}", file=sys.stderr)
    return EXIT_FALSE


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    if argv is None:
        argv = sys.argv[1:]
    args = _build_parser().parse_args(argv)

    setup_logging(
        console_level=logging.DEBUG if args.verbose else logging.WARNING,
        log_file=args.log_file,
    )
    _configure_timing_logger_from_env()

    # Clear any stale action context
    ActionContextManager.clear()

    try:
        repo = Repository(args.config)
        TimeConfig.install_run_config(TimeConfig.build_from(
            preset=_resolve_timing_preset(args, repo),
            overrides=repo.timeout_overrides,
        ))
        return _run(args, repo)
    except AppStoreError as e:
        log.debug("Command %s failed", args.cmd, exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_FAILURE
    finally:
        TimeConfig.clear_run_config()


if __name__ == "__main__":
    sys.exit(main())
