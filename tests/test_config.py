"""
Tests for EnvConfig and LazyValue (configuration and credential resolution).
"""

import asyncio

import pytest

from dynmail.config import EnvConfig
from dynmail.credentials import LazyValue


# ═══════════════════════════════════════════════════════════════════
# EnvConfig
# ═══════════════════════════════════════════════════════════════════


class TestEnvConfig:

    def test_reads_process_environment(self, monkeypatch):
        monkeypatch.setenv("RESEND_API_KEY", "re_from_env")
        assert EnvConfig().get("RESEND_API_KEY") == "re_from_env"

    def test_injected_environ_replaces_process_env(self, monkeypatch):
        monkeypatch.setenv("RESEND_API_KEY", "re_from_env")
        config = EnvConfig(environ={})
        assert config.get("RESEND_API_KEY") is None

    def test_explicit_values_win(self):
        config = EnvConfig({"A": "explicit"}, environ={"A": "env"})
        assert config.get("A") == "explicit"

    def test_env_file_loaded(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("PLUNK_API_KEY=sk_file\nAWS_REGION=eu-west-1\n")
        config = EnvConfig(environ={}, env_file=env_file)
        assert config.get("PLUNK_API_KEY") == "sk_file"
        assert config.get("AWS_REGION") == "eu-west-1"

    def test_environment_beats_env_file(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("AWS_REGION=eu-west-1\n")
        config = EnvConfig(environ={"AWS_REGION": "us-east-1"}, env_file=env_file)
        assert config.get("AWS_REGION") == "us-east-1"

    def test_missing_env_file_ignored(self, tmp_path):
        config = EnvConfig(environ={}, env_file=tmp_path / "nope.env")
        assert config.get("ANYTHING") is None

    def test_empty_value_is_missing(self):
        config = EnvConfig(environ={"RESEND_API_KEY": ""})
        assert config.get("RESEND_API_KEY") is None
        assert config.get("RESEND_API_KEY", "fallback") == "fallback"
        assert "RESEND_API_KEY" not in config

    def test_contains(self):
        config = EnvConfig({"A": "1"}, environ={})
        assert "A" in config
        assert "B" not in config


# ═══════════════════════════════════════════════════════════════════
# LazyValue
# ═══════════════════════════════════════════════════════════════════


class TestLazyValue:

    def test_string_resolved_immediately(self):
        assert LazyValue("key").resolved is True

    @pytest.mark.asyncio
    async def test_string(self):
        assert await LazyValue("key").resolve() == "key"

    @pytest.mark.asyncio
    async def test_sync_function_called_once(self):
        calls = []

        def source():
            calls.append(1)
            return "sync-key"

        value = LazyValue(source)
        assert value.resolved is False
        assert await value.resolve() == "sync-key"
        assert await value.resolve() == "sync-key"
        assert value.resolved is True
        assert len(calls) == 1

    @pytest.mark.asyncio
    async def test_async_function(self):
        async def source():
            return "async-key"

        assert await LazyValue(source).resolve() == "async-key"

    @pytest.mark.asyncio
    async def test_concurrent_first_calls_resolve_once(self):
        calls = []

        async def source():
            calls.append(1)
            await asyncio.sleep(0)
            return "key"

        value = LazyValue(source)
        results = await asyncio.gather(*(value.resolve() for _ in range(5)))
        assert results == ["key"] * 5
        assert len(calls) == 1

    def test_repr_hides_value(self):
        assert repr(LazyValue("secret")) == "LazyValue(resolved)"
        assert "secret" not in repr(LazyValue("secret"))
