from __future__ import annotations

import argparse
import logging
import sys
from typing import Iterable, Optional

from pydantic import ValidationError

from api_smoke.checks.db_check import check_database
from api_smoke.config import build_api_target, build_database_target, settings
from api_smoke.models import Registry
from api_smoke.orchestrator import ensure_running
from api_smoke.registry import get_suite, load_registry
from api_smoke.runner import run_suite

logger = logging.getLogger(__name__)


def _cmd_ensure(args: argparse.Namespace) -> int:
    return 0 if ensure_running(build_api_target()) else 1


def _load_registry(args: argparse.Namespace) -> Registry | None:
    try:
        return load_registry(args.checks_file)
    except (FileNotFoundError, ValueError, ValidationError) as exc:
        logger.error("Invalid smoke checks file: %s", exc)
        return None


def _cmd_smoke(args: argparse.Namespace) -> int:
    reg = _load_registry(args)
    if reg is None:
        return 2
    try:
        suite = get_suite(reg, args.suite)
    except KeyError:
        logger.error("Unknown suite: %s", args.suite)
        return 2
    run_suite(build_api_target(), suite, ensure=args.ensure)
    return 0


def _cmd_suites(args: argparse.Namespace) -> int:
    reg = _load_registry(args)
    if reg is None:
        return 2
    for suite in reg.suites:
        paths = ", ".join(c.path for c in suite.checks)
        print(f"{suite.name:<16} {suite.description} [{paths}]")
    return 0


def _cmd_db(args: argparse.Namespace) -> int:
    res = check_database(build_database_target(), timeout_s=args.timeout)
    return 0 if res.ok else 1


def _cmd_stub(args: argparse.Namespace) -> int:
    from api_smoke.stub_server import serve

    logger.info("Serving stub backend on http://%s:%s", args.host, args.port)
    serve(host=args.host, port=args.port)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="api-smoke",
        description="Make sure the local API is running and smoke-check its endpoints",
    )
    parser.add_argument(
        "--checks-file",
        default=None,
        help="Smoke suites YAML file (default: SMOKE_CHECKS_PATH or the bundled file)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("ensure", help="Start the API if it is not answering; exit 1 if it stays down")
    p.set_defaults(func=_cmd_ensure)

    p = sub.add_parser("smoke", help="Run a smoke suite against the API")
    p.add_argument("suite", help="Suite name (see 'suites')")
    p.add_argument("--ensure", action="store_true", help="Run 'ensure' first")
    p.set_defaults(func=_cmd_smoke)

    p = sub.add_parser("suites", help="List available smoke suites")
    p.set_defaults(func=_cmd_suites)

    p = sub.add_parser("db", help="Check the database port is reachable")
    p.add_argument("--timeout", type=float, default=3.0, help="Connect timeout (seconds)")
    p.set_defaults(func=_cmd_db)

    p = sub.add_parser("stub", help="Serve the stub backend")
    p.add_argument("--host", default="127.0.0.1")
    p.add_argument("--port", type=int, default=settings.API_PORT)
    p.set_defaults(func=_cmd_stub)

    return parser


def main(argv: Optional[Iterable[str]] = None) -> int:
    args = build_parser().parse_args(list(argv) if argv is not None else None)
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    )
    return args.func(args)


def ensure_main() -> int:
    return main(["ensure"])


if __name__ == "__main__":
    sys.exit(main())
