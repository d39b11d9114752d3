"""Tests for remote endpoint configuration merge order and protocol selection."""

from __future__ import annotations

import json

import httpx
import pytest

from openai_bridge.base.errors import ConversionError
from openai_bridge.base.models import ChatRequest, Message, Role
from openai_bridge.config import (
    RemoteEndpoint,
    RemoteProtocol,
    get_endpoint_config,
    load_remote_endpoint,
    reset_config_cache,
)
from openai_bridge.config.defaults import CONFIG_FILE_ENV
from openai_bridge.config.env import env_overrides, env_prefix, get_env_var_name
from openai_bridge.transport.remote_client import RemoteChatClient
from openai_bridge.tests.utils import completion

_ENV_NAMES = [
    "MY_PROXY_BASE_URL",
    "MY_PROXY_API_KEY",
    "MY_PROXY_MODEL",
    "MY_PROXY_PROTOCOL",
    "OPENAI_BASE_URL",
    "OPENAI_API_KEY",
    "OPENAI_MODEL",
    "OPENAI_PROTOCOL",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in _ENV_NAMES + [CONFIG_FILE_ENV]:
        monkeypatch.delenv(name, raising=False)
    reset_config_cache()
    yield
    reset_config_cache()


def test_env_prefix_normalizes_names():
    assert env_prefix("my-proxy") == "MY_PROXY"  # nosec B101
    assert get_env_var_name("my-proxy", "api_key") == "MY_PROXY_API_KEY"  # nosec B101
    assert get_env_var_name("my-proxy", "unknown") is None  # nosec B101


def test_env_overrides_only_reports_set_variables():
    environ = {"MY_PROXY_MODEL": "gpt-4o", "MY_PROXY_API_KEY": ""}
    assert env_overrides("my-proxy", environ) == {"model": "gpt-4o", "api_key": ""}  # nosec B101


def test_builtin_defaults():
    endpoint = load_remote_endpoint("openai")
    assert endpoint.base_url == "https://api.openai.com"  # nosec B101
    assert endpoint.protocol is RemoteProtocol.OPENAI and endpoint.api_key == ""  # nosec B101
    assert endpoint.model is None  # nosec B101


def test_merge_order_defaults_file_env_overrides(monkeypatch, tmp_path):
    cfg_file = tmp_path / "bridge.json"
    cfg_file.write_text(
        json.dumps({"my-proxy": {"base_url": "https://file.example", "model": "file-model", "api_key": "file-key"}}),
        encoding="utf-8",
    )
    monkeypatch.setenv(CONFIG_FILE_ENV, str(cfg_file))
    monkeypatch.setenv("MY_PROXY_MODEL", "env-model")

    cfg = get_endpoint_config("my-proxy", overrides={"api_key": "override-key", "base_url": None})
    assert cfg["base_url"] == "https://file.example"  # nosec B101
    assert cfg["model"] == "env-model"  # nosec B101
    assert cfg["api_key"] == "override-key"  # nosec B101
    assert cfg["protocol"] == "openai"  # nosec B101


def test_yaml_config_file(monkeypatch, tmp_path):
    cfg_file = tmp_path / "bridge.yaml"
    cfg_file.write_text(
        "my-proxy:\n  base_url: https://yaml.example/llm\n  protocol: native\n",
        encoding="utf-8",
    )
    monkeypatch.setenv(CONFIG_FILE_ENV, str(cfg_file))
    endpoint = load_remote_endpoint("my-proxy")
    assert endpoint.base_url == "https://yaml.example/llm"  # nosec B101
    assert endpoint.protocol is RemoteProtocol.NATIVE  # nosec B101


def test_missing_config_file_is_ignored(monkeypatch, tmp_path, log_events):
    monkeypatch.setenv(CONFIG_FILE_ENV, str(tmp_path / "absent.yaml"))
    monkeypatch.setenv("MY_PROXY_BASE_URL", "https://env.example")
    assert load_remote_endpoint("my-proxy").base_url == "https://env.example"  # nosec B101
    assert any(e.get("event") == "config.file_missing" for e in log_events)  # nosec B101


def test_missing_base_url_raises():
    with pytest.raises(ConversionError):
        load_remote_endpoint("my-proxy")


def test_unknown_protocol_raises(monkeypatch):
    monkeypatch.setenv("MY_PROXY_BASE_URL", "https://env.example")
    monkeypatch.setenv("MY_PROXY_PROTOCOL", "grpc")
    with pytest.raises(ConversionError):
        load_remote_endpoint("my-proxy")


def test_protocol_is_explicit_not_sniffed_from_url():
    # An /api path segment says nothing about the protocol.
    endpoint = load_remote_endpoint("my-proxy", overrides={"base_url": "https://host/api"})
    assert endpoint.protocol is RemoteProtocol.OPENAI  # nosec B101


def test_endpoint_client_for_openai_protocol():
    endpoint = RemoteEndpoint(name="x", base_url="https://remote.example", api_key="k")
    client = endpoint.client()
    assert isinstance(client, RemoteChatClient)  # nosec B101
    assert client.url == "https://remote.example/v1/chat/completions"  # nosec B101


def test_endpoint_model_alias_reaches_outgoing_request(mock_http):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen.update(json.loads(request.content))
        return httpx.Response(200, json=completion("ok"))

    endpoint = load_remote_endpoint(
        "my-proxy",
        overrides={"base_url": "https://remote.example", "model": "gpt-4o-mini"},
    )
    out = []
    request = ChatRequest(model="llama3", messages=[Message(role=Role.USER, content="hi")])
    endpoint.client(http_client=mock_http(handler)).send(request, out.append)
    assert seen["model"] == "gpt-4o-mini"  # nosec B101
    assert out[-1].done is True  # nosec B101


def test_explicit_alias_on_send_wins_over_endpoint_model(mock_http):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen.update(json.loads(request.content))
        return httpx.Response(200, json=completion("ok"))

    endpoint = RemoteEndpoint(name="x", base_url="https://remote.example", model="gpt-4o-mini")
    request = ChatRequest(model="llama3", messages=[Message(role=Role.USER, content="hi")])
    endpoint.client(http_client=mock_http(handler)).send(request, lambda r: None, remote_model="gpt-4o")
    assert seen["model"] == "gpt-4o"  # nosec B101


def test_endpoint_client_rejects_native_protocol():
    endpoint = RemoteEndpoint(name="x", base_url="https://remote.example", protocol=RemoteProtocol.NATIVE)
    with pytest.raises(ConversionError):
        endpoint.client()
