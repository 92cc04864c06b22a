#!/usr/bin/env python3
"""
Developer Portal Admin API -- command-line entry point.

Usage:
  python main.py serve
  python main.py serve --host 0.0.0.0 --port 8080
  python main.py serve --reload
  python main.py hash-password
  python main.py hash-password --stdin < password.txt

Environment variables:
  DEBUG                     true for local development (dev admin password allowed)
  SEED_ADMIN_PASSWORD       password for the seeded admin account
  SEED_ADMIN_PASSWORD_HASH  pre-computed hash for the seeded admin (see hash-password)
                            use a scrypt hash from hash-password; a legacy bcrypt hash
                            is accepted but its login latency differs from other accounts
  See core/config.py for the full list.
"""

import argparse
import getpass
import sys


def _serve(args: argparse.Namespace) -> int:
    import uvicorn

    uvicorn.run("api.main:app", host=args.host, port=args.port, reload=args.reload)
    return 0


def _hash_password(args: argparse.Namespace) -> int:
    """Print an encoded scrypt hash suitable for SEED_ADMIN_PASSWORD_HASH."""
    # Imported lazily: auth.passwords reads settings at import time.
    from auth.passwords import hash_password

    if args.stdin:
        password = sys.stdin.readline().rstrip("\n")
    else:
        password = getpass.getpass("Password: ")
        if getpass.getpass("Confirm:  ") != password:
            print("  [!] Passwords do not match.", file=sys.stderr)
            return 1
    if not password:
        print("  [!] Password must not be empty.", file=sys.stderr)
        return 1
    print(hash_password(password))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Developer portal admin API.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the API server with uvicorn")
    serve.add_argument("--host", default="127.0.0.1", help="Bind address (default: 127.0.0.1)")
    serve.add_argument("--port", type=int, default=8000, help="Bind port (default: 8000)")
    serve.add_argument("--reload", action="store_true", help="Reload on code changes (development)")
    serve.set_defaults(func=_serve)

    hashpw = sub.add_parser("hash-password", help="Hash a password for SEED_ADMIN_PASSWORD_HASH")
    hashpw.add_argument("--stdin", action="store_true", help="Read the password from stdin instead of prompting")
    hashpw.set_defaults(func=_hash_password)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
