#!/usr/bin/env python3
"""Invoke the deployed flowdock-notifier Lambda with a JSON event.

The function name is resolved from the CloudFormation stack outputs unless
--function-name is given. The tail of the execution log is printed so the
notifier's own output can be inspected without opening CloudWatch.
"""

from __future__ import annotations

import argparse
import base64
import json
import sys
from pathlib import Path
from typing import Any, Dict, Optional

import boto3


DEFAULT_STACK_NAME = "FlowdockNotifierStack-dev"


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Send an event to the flowdock-notifier Lambda")
    parser.add_argument("event", nargs="?", default="{}", help="Event JSON (default: %(default)s)")
    parser.add_argument("--event-file", type=Path, help="Read the event JSON from a file instead")
    parser.add_argument("--stack-name", default=DEFAULT_STACK_NAME, help="CloudFormation stack name (default: %(default)s)")
    parser.add_argument("--function-name", help="Lambda function name; skips the stack lookup")
    parser.add_argument("--profile", default=None, help="AWS profile for boto3 session")
    parser.add_argument("--region", default=None, help="AWS region override")
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    session = boto3.session.Session(profile_name=args.profile, region_name=args.region)

    try:
        event = _load_event(args)
    except ValueError as exc:
        print(f"Invalid event: {exc}", file=sys.stderr)
        sys.exit(1)

    function_name = args.function_name or _resolve_function_name(session, args.stack_name)
    if not function_name:
        print("Function name not found; pass --function-name or deploy the stack first.", file=sys.stderr)
        sys.exit(1)

    response = session.client("lambda").invoke(
        FunctionName=function_name,
        InvocationType="RequestResponse",
        LogType="Tail",
        Payload=json.dumps(event).encode("utf-8"),
    )
    log_tail = response.get("LogResult")
    if log_tail:
        print(base64.b64decode(log_tail).decode("utf-8", errors="replace"))

    body = response["Payload"].read().decode("utf-8")
    print(body)
    if response.get("FunctionError"):
        sys.exit(1)


def _load_event(args: argparse.Namespace) -> Any:
    text = args.event_file.read_text(encoding="utf-8") if args.event_file else args.event
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise ValueError(str(exc)) from exc


def _resolve_function_name(session: boto3.session.Session, stack_name: str) -> Optional[str]:
    try:
        outputs = _describe_stack_outputs(session, stack_name)
    except Exception as exc:  # pragma: no cover - diagnostic only
        print(f"Unable to load stack outputs for {stack_name}: {exc}", file=sys.stderr)
        return None
    for key, value in outputs.items():
        if key.startswith("FlowdockNotifierFunctionName"):
            return value
    return None


def _describe_stack_outputs(session: boto3.session.Session, stack_name: str) -> Dict[str, str]:
    cf = session.client("cloudformation")
    stack = cf.describe_stacks(StackName=stack_name)["Stacks"][0]
    outputs = stack.get("Outputs", [])
    return {entry["OutputKey"]: entry["OutputValue"] for entry in outputs}


if __name__ == "__main__":
    main()
