"""Command line entry point: run the server, hash a password, purge challenges."""

import argparse
import logging
from typing import Optional, Sequence

from sqlmodel import Session

from jot.config import load_settings
from jot.logging_config import setup_logging

logger = logging.getLogger(__name__)


def _serve(args: argparse.Namespace) -> int:
    import uvicorn

    settings = load_settings()
    setup_logging(settings.log_level)
    uvicorn.run(
        "jot.main:create_app",
        factory=True,
        host=args.host or settings.host,
        port=args.port or settings.port,
        log_level=settings.log_level.lower(),
    )
    return 0


def _hash(args: argparse.Namespace) -> int:
    from jot.utils.security import hash_password

    print(hash_password(args.password))
    return 0


def _purge(args: argparse.Namespace) -> int:
    from jot.database import create_db_engine, init_db
    from jot.services.device_service import purge_expired

    settings = load_settings()
    setup_logging(settings.log_level)
    engine = create_db_engine(settings)
    init_db(engine)
    with Session(engine) as session:
        removed = purge_expired(session)
    print(f"Removed {removed} expired device challenge(s)")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="jot", description="Jot note server")
    sub = parser.add_subparsers(dest="command")

    serve = sub.add_parser("serve", help="run the HTTP server")
    serve.add_argument("--host", default=None)
    serve.add_argument("--port", type=int, default=None)
    serve.set_defaults(func=_serve)

    hash_cmd = sub.add_parser("hash", help="print an argon2 hash for a password")
    hash_cmd.add_argument("password")
    hash_cmd.set_defaults(func=_hash)

    purge = sub.add_parser("purge", help="delete expired device challenges")
    purge.set_defaults(func=_purge)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not hasattr(args, "func"):
        # Bare `python -m jot` runs the server
        args = parser.parse_args(["serve"])
    return args.func(args)
