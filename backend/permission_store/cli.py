from __future__ import annotations

import argparse
import json
import sys
from collections.abc import Callable, Sequence

from pydantic import ValidationError
from sqlalchemy.orm import Session

from permission_store.db import SessionLocal, create_db_engine, create_session_factory
from permission_store.errors import PermissionStoreError
from permission_store.logging_config import logger
from permission_store.models import Base
from permission_store.schemas import (
    PermissionResponse,
    PermissionUpdateRequest,
    UserPermissionResponse,
)
from permission_store.services.permission_service import PermissionStore

SessionFactory = Callable[[], Session]


def _print_json(payload) -> None:
    print(json.dumps(payload, ensure_ascii=False, indent=2, default=str))


def _dump_permission(permission) -> dict:
    return PermissionResponse.model_validate(permission).model_dump(mode="json")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="permission-store",
        description="Manage permissions and their grants to users.",
    )
    parser.add_argument(
        "--database-url",
        help="SQLAlchemy database URL; defaults to DATABASE_URL / settings",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("init-db", help="create all tables (development only, use alembic elsewhere)")

    create = sub.add_parser("create", help="create a permission")
    create.add_argument("name")
    create.add_argument("--description")

    update = sub.add_parser("update", help="rename a permission or change its description")
    update.add_argument("permission_id")
    update.add_argument("--name")
    desc_group = update.add_mutually_exclusive_group()
    desc_group.add_argument("--description")
    desc_group.add_argument("--clear-description", action="store_true")

    delete = sub.add_parser("delete", help="delete a permission and all of its grants")
    delete.add_argument("permission_id")

    grant = sub.add_parser("grant", help="grant a permission to a user")
    grant.add_argument("user_id")
    grant.add_argument("permission_id")
    grant.add_argument("--exist-ok", action="store_true", help="do not fail if already granted")

    revoke = sub.add_parser("revoke", help="revoke a permission from a user")
    revoke.add_argument("user_id")
    revoke.add_argument("permission_id")

    sub.add_parser("list", help="list all permissions")

    user_perms = sub.add_parser("user-permissions", help="list permissions granted to a user")
    user_perms.add_argument("user_id")

    holders = sub.add_parser("holders", help="list users holding a permission")
    holders.add_argument("permission_id")

    return parser


def _run_command(args: argparse.Namespace, store: PermissionStore) -> None:
    if args.command == "create":
        _print_json(_dump_permission(store.create_permission(args.name, args.description)))
    elif args.command == "update":
        fields: dict = {}
        if args.name is not None:
            fields["name"] = args.name
        if args.clear_description:
            fields["description"] = None
        elif args.description is not None:
            fields["description"] = args.description
        payload = PermissionUpdateRequest(**fields)
        _print_json(_dump_permission(store.update_permission(args.permission_id, payload)))
    elif args.command == "delete":
        removed = store.delete_permission(args.permission_id)
        _print_json({"deleted": args.permission_id, "grants_removed": removed})
    elif args.command == "grant":
        record = store.grant_permission(args.user_id, args.permission_id, exist_ok=args.exist_ok)
        _print_json(UserPermissionResponse.model_validate(record).model_dump(mode="json"))
    elif args.command == "revoke":
        _print_json({"revoked": store.revoke_permission(args.user_id, args.permission_id)})
    elif args.command == "list":
        _print_json([_dump_permission(p) for p in store.list_permissions()])
    elif args.command == "user-permissions":
        _print_json([_dump_permission(p) for p in store.list_permissions_for_user(args.user_id)])
    elif args.command == "holders":
        _print_json([str(uid) for uid in store.list_users_for_permission(args.permission_id)])
    else:  # pragma: no cover - argparse rejects unknown commands
        raise ValueError(f"unknown command: {args.command}")


def main(argv: Sequence[str] | None = None, session_factory: SessionFactory | None = None) -> int:
    args = build_parser().parse_args(argv)

    if session_factory is None:
        if args.database_url:
            session_factory = create_session_factory(create_db_engine(args.database_url))
        else:
            session_factory = SessionLocal

    if args.command == "init-db":
        with session_factory() as session:
            Base.metadata.create_all(bind=session.get_bind())
        print("tables created")
        return 0

    with session_factory() as session:
        store = PermissionStore(session)
        try:
            _run_command(args, store)
        except (PermissionStoreError, ValidationError) as exc:
            logger.debug("Command %s failed: %s", args.command, exc)
            print(f"error: {exc}", file=sys.stderr)
            return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
