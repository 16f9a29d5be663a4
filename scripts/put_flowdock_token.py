#!/usr/bin/env python3
"""
Store the Flowdock API token in AWS Systems Manager Parameter Store.

Usage:
    python scripts/put_flowdock_token.py --stage dev --token-file ~/.flowdock-token

The token is written as a SecureString to:
    <prefix>/<STAGE>/FLOWDOCK_TOKEN

Deploy the stack with -c flowdockTokenParameterName=<that name> so the
function exports it to the notifier process.
"""

from __future__ import annotations

import argparse
import os
import pathlib

import boto3


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Store the Flowdock token in AWS SSM Parameter Store.")
    parser.add_argument(
        "--token-file",
        type=pathlib.Path,
        default=None,
        help="File holding the token; falls back to the FLOWDOCK_TOKEN environment variable",
    )
    parser.add_argument(
        "--prefix",
        default="/flowdock-notifier/env",
        help="Base prefix for the parameter (default: %(default)s)",
    )
    parser.add_argument(
        "--stage",
        default=None,
        help="Stage suffix to append to the prefix (optional)",
    )
    parser.add_argument(
        "--no-overwrite",
        action="store_true",
        help="Do not overwrite an existing parameter (default: overwrite).",
    )
    return parser.parse_args()


def load_token(path: pathlib.Path | None) -> str:
    if path is not None:
        if not path.exists():
            raise FileNotFoundError(f"token file not found at {path}")
        return path.read_text(encoding="utf-8").strip()
    return os.environ.get("FLOWDOCK_TOKEN", "").strip()


def ensure_trailing_slash(prefix: str) -> str:
    return prefix if prefix.endswith("/") else prefix + "/"


def parameter_name(prefix: str, stage: str | None) -> str:
    base_prefix = ensure_trailing_slash(prefix)
    if stage:
        base_prefix = f"{base_prefix}{ensure_trailing_slash(stage.upper())}"
    return f"{base_prefix}FLOWDOCK_TOKEN"


def main() -> None:
    args = parse_args()
    token = load_token(args.token_file)
    if not token:
        print("No Flowdock token found; nothing to upload.")
        return

    name = parameter_name(args.prefix, args.stage)
    client = boto3.client("ssm")
    client.put_parameter(
        Name=name,
        Value=token,
        Type="SecureString",
        Overwrite=not args.no_overwrite,
    )
    print(f"Stored Flowdock token under {name}")


if __name__ == "__main__":
    main()
