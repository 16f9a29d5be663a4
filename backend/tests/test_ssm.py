from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest
from botocore.exceptions import ClientError

root_dir = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(root_dir / "backend" / "lambda_src"))
sys.path.insert(0, str(root_dir / "backend" / "lambda_src" / "common_layer" / "python"))

from common import ssm
from flowdock_notifier.app import NotifierApplication
from flowdock_notifier.models import InvocationResult
from flowdock_notifier.settings import NotifierSettings


class StubSsmClient:
    def __init__(self, values: dict[str, str]) -> None:
        self._values = values
        self.requests: list[tuple[str, bool]] = []

    def get_parameter(self, Name: str, WithDecryption: bool):
        self.requests.append((Name, WithDecryption))
        if Name not in self._values:
            raise ClientError({"Error": {"Code": "ParameterNotFound", "Message": Name}}, "GetParameter")
        return {"Parameter": {"Name": Name, "Value": self._values[Name]}}


@pytest.fixture
def ssm_client(monkeypatch):
    client = StubSsmClient({"/flowdock/token": "secret-token"})
    monkeypatch.setattr(ssm, "_ssm_client", client)
    monkeypatch.setattr(ssm, "_parameter_cache", {})
    return client


def test_hydrate_env_loads_parameter(ssm_client):
    assert ssm.hydrate_env("FLOWDOCK_TOKEN", "/flowdock/token") is True

    assert os.environ["FLOWDOCK_TOKEN"] == "secret-token"
    assert ssm_client.requests == [("/flowdock/token", True)]


def test_hydrate_env_skips_when_variable_present(ssm_client, monkeypatch):
    monkeypatch.setenv("FLOWDOCK_TOKEN", "already-set")

    assert ssm.hydrate_env("FLOWDOCK_TOKEN", "/flowdock/token") is False

    assert os.environ["FLOWDOCK_TOKEN"] == "already-set"
    assert ssm_client.requests == []


def test_hydrate_env_skips_without_parameter(ssm_client):
    assert ssm.hydrate_env("FLOWDOCK_TOKEN", None) is False
    assert ssm_client.requests == []


def test_get_parameter_caches_values(ssm_client):
    assert ssm.get_parameter("/flowdock/token") == "secret-token"
    assert ssm.get_parameter("/flowdock/token") == "secret-token"

    assert len(ssm_client.requests) == 1


def test_get_parameter_rejects_empty_name(ssm_client):
    with pytest.raises(ValueError):
        ssm.get_parameter("")


def test_hydrate_env_propagates_client_errors(ssm_client):
    with pytest.raises(ClientError):
        ssm.hydrate_env("FLOWDOCK_TOKEN", "/flowdock/missing")

    assert "FLOWDOCK_TOKEN" not in os.environ


def test_application_exports_token_before_spawning(ssm_client):
    seen_tokens: list[str | None] = []

    class TokenCheckingProcess:
        def run(self, command):
            seen_tokens.append(os.environ.get("FLOWDOCK_TOKEN"))
            return InvocationResult(returncode=0)

    settings = NotifierSettings(token_parameter="/flowdock/token")
    NotifierApplication(settings=settings, process=TokenCheckingProcess()).handle({})

    assert seen_tokens == ["secret-token"]


def test_application_fails_when_token_cannot_be_loaded(ssm_client):
    commands = []

    class RecordingProcess:
        def run(self, command):
            commands.append(list(command))
            return InvocationResult(returncode=0)

    settings = NotifierSettings(token_parameter="/flowdock/missing")

    with pytest.raises(ClientError):
        NotifierApplication(settings=settings, process=RecordingProcess()).handle({})

    assert commands == []
    assert "FLOWDOCK_TOKEN" not in os.environ


def test_hydrated_token_is_removed_after_test(ssm_client, monkeypatch):
    ssm.hydrate_env("FLOWDOCK_TOKEN", "/flowdock/token")
    monkeypatch.undo()

    assert "FLOWDOCK_TOKEN" not in os.environ
