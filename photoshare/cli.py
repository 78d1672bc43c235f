#!/usr/bin/env python3
from __future__ import annotations

import argparse

from .db import SessionLocal, init_db
from .errors import Conflict, InvalidOperation, NotFound
from .services import user_service

def cmd_db(args: argparse.Namespace) -> int:
    if args.action == "init":
        init_db()
        print("Database tables created.")
        return 0

    print("Unknown db action")
    return 2

def cmd_create_user(args: argparse.Namespace) -> int:
    db = SessionLocal()
    try:
        user = user_service.create_user(db, args.username)
        print(f"Created user {user.username}: {user.id}")
        return 0
    except (Conflict, InvalidOperation) as e:
        print(f"Could not create {args.username}: {e.detail}")
        return 1
    finally:
        db.close()

def cmd_rename_user(args: argparse.Namespace) -> int:
    db = SessionLocal()
    try:
        user = user_service.set_username(db, args.user_id, args.username)
        print(f"User {user.id} is now {user.username}")
        return 0
    except (NotFound, Conflict, InvalidOperation) as e:
        print(f"Could not rename {args.user_id}: {e.detail}")
        return 1
    finally:
        db.close()

def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="photosharectl")
    sub = parser.add_subparsers(dest="cmd", required=True)

    p_db = sub.add_parser("db")
    p_db.add_argument("action", choices=["init"])
    p_db.set_defaults(func=cmd_db)

    p_create = sub.add_parser("create-user")
    p_create.add_argument("--username", required=True)
    p_create.set_defaults(func=cmd_create_user)

    p_rename = sub.add_parser("rename-user")
    p_rename.add_argument("--user-id", required=True)
    p_rename.add_argument("--username", required=True)
    p_rename.set_defaults(func=cmd_rename_user)

    args = parser.parse_args(argv)
    return args.func(args)

if __name__ == "__main__":
    raise SystemExit(main())
