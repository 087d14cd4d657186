"""
Admin command line.

    medportal init-db
    medportal create-superadmin --email admin@example.com [--password ...]
    medportal serve [--host 0.0.0.0] [--port 8000] [--reload]
"""

import argparse
import getpass
import logging
import sys

import uvicorn

from medportal.core.db import SessionLocal, init_db
from medportal.core.errors import PortalError
from medportal.core.logging_config import configure_logging
from medportal.core.settings import config_settings
from medportal.models.orm.user import UserRole
from medportal.services.auth_service import AuthService

logger = logging.getLogger("medportal.cli")


def cmd_init_db(args: argparse.Namespace) -> int:
    init_db()
    logger.info("Tables created on %s", config_settings.DATABASE_URL)
    return 0


def cmd_create_superadmin(args: argparse.Namespace) -> int:
    password = args.password or getpass.getpass("Password: ")
    if len(password) < 6:
        logger.error("Password must be at least 6 characters")
        return 2

    init_db()
    db = SessionLocal()
    try:
        service = AuthService(db)
        if service.user_repo.count_by_role(UserRole.SUPER_ADMIN):
            logger.warning("A super administrator already exists; adding another")
        user = service.create_account(args.email, password, UserRole.SUPER_ADMIN)
    except PortalError as e:
        logger.error("Could not create super administrator: %s", e.message)
        return 1
    finally:
        db.close()

    logger.info("Super administrator %s created (%s)", user.email, user.id)
    return 0


def cmd_serve(args: argparse.Namespace) -> int:
    uvicorn.run(
        "medportal.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=config_settings.LOG_LEVEL.lower(),
    )
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="medportal", description="Medical sales portal admin.")
    commands = parser.add_subparsers(dest="command", required=True)

    init = commands.add_parser("init-db", help="Create the database tables.")
    init.set_defaults(func=cmd_init_db)

    admin = commands.add_parser("create-superadmin", help="Create a super administrator account.")
    admin.add_argument("--email", required=True)
    admin.add_argument("--password", help="Prompted for when omitted.")
    admin.set_defaults(func=cmd_create_superadmin)

    serve = commands.add_parser("serve", help="Run the HTTP API.")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8000)
    serve.add_argument("--reload", action="store_true")
    serve.set_defaults(func=cmd_serve)

    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(config_settings.LOG_LEVEL)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
