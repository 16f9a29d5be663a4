#!/usr/bin/env python3
import os
import re
from pathlib import Path

from aws_cdk import App, Environment

from notifier_stack import FlowdockNotifierStack


app = App()

stage = app.node.try_get_context("stage") or os.getenv("CDK_STAGE") or "dev"
stage_slug = re.sub(r"[^A-Za-z0-9-]", "-", stage).strip("-") or "dev"

binary_context = app.node.try_get_context("notifierBinaryPath")
binary_path = Path(binary_context) if binary_context else Path(__file__).resolve().parents[1] / "bin" / "flowdock-notifier"
if not binary_path.is_file():
    raise SystemExit(f"flowdock-notifier binary not found at {binary_path}; build it or pass -c notifierBinaryPath=...")

FlowdockNotifierStack(
    app,
    f"FlowdockNotifierStack-{stage_slug}",
    stage=stage_slug,
    binary_path=binary_path,
    env=Environment(
        account=app.node.try_get_context("account"),
        region=app.node.try_get_context("region"),
    ),
)

app.synth()
