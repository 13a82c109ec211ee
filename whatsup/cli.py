from __future__ import annotations

import argparse
import logging
import sys
from typing import Sequence

import uvicorn
import yaml

from whatsup.checks.ping_check import UnsupportedPlatformError
from whatsup.config import settings
from whatsup.notifier import NotificationDeliveryError
from whatsup.registry import load_config
from whatsup.runner import build_notifier, run_once

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="whatsup",
        description="Check whether endpoints are up and post a summary to Teams.",
    )
    parser.add_argument(
        "--log-level",
        default=settings.WHATSUP_LOG_LEVEL,
        help="Logging level (default: %(default)s)",
    )
    sub = parser.add_subparsers(dest="command")

    check = sub.add_parser("check", help="Check all endpoints once (default)")
    check.add_argument(
        "--config",
        default=settings.WHATSUP_CONFIG_PATH,
        help="Path to the JSON or YAML config file (default: %(default)s)",
    )
    check.add_argument("--tries", type=int, help="Override the configured try count")
    kind = check.add_mutually_exclusive_group()
    kind.add_argument("--https", action="store_true", help="Probe with HTTPS GET requests")
    kind.add_argument("--ping", action="store_true", help="Probe with the OS ping command")
    check.add_argument(
        "--no-notify", action="store_true", help="Print the summary without posting it"
    )

    serve = sub.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default=settings.WHATSUP_HOST)
    serve.add_argument("--port", type=int, default=settings.WHATSUP_PORT)
    return parser


def _check(args: argparse.Namespace) -> int:
    try:
        cfg = load_config(args.config)
    except (OSError, ValueError, yaml.YAMLError) as exc:
        print(f"Error reading config {args.config}: {exc}", file=sys.stderr)
        return 1

    overrides = {}
    if args.tries is not None:
        if args.tries < 0:
            print("Error: --tries must be non-negative", file=sys.stderr)
            return 1
        overrides["tries"] = args.tries
    if args.https or args.ping:
        overrides["https"] = args.https
        overrides["os_ping"] = args.ping
    if overrides:
        cfg = cfg.model_copy(update=overrides)

    try:
        notifier = None if args.no_notify else build_notifier(cfg)
        run_once(cfg, notifier=notifier, echo=print)
    except (UnsupportedPlatformError, ValueError) as exc:
        print(f"Error checking endpoints: {exc}", file=sys.stderr)
        return 1
    except NotificationDeliveryError as exc:
        logger.error("Summary delivery failed: %s", exc)
        print(f"Error checking endpoints: error sending message: {exc}", file=sys.stderr)
        return 1

    print(f"Checked {len(cfg.endpoints)} endpoints.")
    return 0


def _serve(args: argparse.Namespace) -> int:
    uvicorn.run("whatsup.api:app", host=args.host, port=args.port, log_level="info")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=str(args.log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "serve":
        return _serve(args)
    if args.command is None:
        # bare `whatsup` behaves like `whatsup check`
        argv = list(argv) if argv is not None else sys.argv[1:]
        args = _build_parser().parse_args([*argv, "check"])
    return _check(args)


if __name__ == "__main__":
    sys.exit(main())
