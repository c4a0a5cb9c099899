"""Tests for _verify.py: verify(), strict_verify() and ResolvedConfig."""

import json
import logging

import pytest

from env_verify import (
    MissingConfigurationError,
    ResolvedConfig,
    SchemaError,
    VerifyResult,
    insert,
    secret,
    strict_verify,
    verify,
)


class TestVerify:
    def test_nested_value(self):
        result = verify({"db": {"name": "DB_NAME"}}, {"DB_NAME": "prod"})
        assert isinstance(result, VerifyResult)
        assert result.config == {"db": {"name": "prod"}}
        assert result.errors == []

    def test_missing_value_message(self):
        config, errors = verify({"baseUrl": "BASE_URL"}, {})
        assert config == {"baseUrl": None}
        assert errors == ["environment value BASE_URL is missing from config object at baseUrl"]

    def test_transform(self):
        config, errors = verify({"port": ["PORT", lambda v: int(v, 10)]}, {"PORT": "8080"})
        assert config == {"port": 8080}
        assert errors == []

    def test_insert(self):
        config, errors = verify({"flag": insert(True)}, {})
        assert config == {"flag": True}
        assert errors == []

    def test_secret_paths_reported(self):
        result = verify({"db": {"password": secret("DB_PASSWORD")}}, {"DB_PASSWORD": "x"})
        assert result.secret_paths == ["db.password"]

    def test_reads_ambient_environment(self, monkeypatch):
        monkeypatch.setenv("ENV_VERIFY_TEST_NAME", "from-os")
        config, errors = verify({"name": "ENV_VERIFY_TEST_NAME"})
        assert config == {"name": "from-os"}
        assert errors == []

    def test_ambient_environment_reread_each_call(self, monkeypatch):
        schema = {"name": "ENV_VERIFY_TEST_NAME"}
        monkeypatch.delenv("ENV_VERIFY_TEST_NAME", raising=False)
        assert verify(schema).errors != []
        monkeypatch.setenv("ENV_VERIFY_TEST_NAME", "now-set")
        assert verify(schema).errors == []

    def test_explicit_env_ignores_os_environ(self, monkeypatch):
        monkeypatch.setenv("ENV_VERIFY_TEST_NAME", "from-os")
        config, _ = verify({"name": "ENV_VERIFY_TEST_NAME"}, {})
        assert config == {"name": None}

    def test_logs_summary_without_values(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="env_verify"):
            verify({"token": secret("TOKEN"), "url": "URL"}, {"TOKEN": "hunter2"})
        assert "1 missing" in caplog.text
        assert "hunter2" not in caplog.text


class TestSanitizedRendering:
    def test_render_redacts_secret(self):
        config, _ = verify({"db": {"password": secret("DB_PASSWORD")}}, {"DB_PASSWORD": "x"})
        assert config == {"db": {"password": "x"}}
        assert config.render_sanitized() == json.dumps({"db": {"password": "[secret]"}}, indent=2)

    def test_str_and_repr_are_sanitized(self):
        config, _ = verify({"token": secret("TOKEN"), "name": "NAME"}, {"TOKEN": "hunter2", "NAME": "n"})
        assert "hunter2" not in str(config)
        assert "hunter2" not in repr(config)
        assert "hunter2" not in f"{config}"
        assert json.loads(str(config)) == {"token": "[secret]", "name": "n"}

    def test_no_renderer_without_secrets(self):
        config, _ = verify({"name": "NAME"}, {"NAME": "n"})
        assert config.render_sanitized is None
        assert str(config) == str({"name": "n"})

    def test_render_is_lazy_and_not_cached(self):
        config, _ = verify({"token": secret("TOKEN"), "name": "NAME"}, {"TOKEN": "t", "NAME": "n"})
        first = config.render_sanitized()
        config["name"] = "changed"
        assert json.loads(config.render_sanitized())["name"] == "changed"
        assert first != config.render_sanitized()

    def test_render_does_not_mutate_config(self):
        config, _ = verify({"db": secret({"password": "P"})}, {"P": "p"})
        config.render_sanitized()
        assert config == {"db": {"password": "p"}}

    def test_secret_object_hides_every_member(self):
        config, _ = verify({"creds": secret({"user": "USER", "token": "TOKEN"})}, {"USER": "admin", "TOKEN": "tok"})
        text = config.render_sanitized()
        assert "admin" not in text
        assert "tok" not in text
        assert json.loads(text) == {"creds": "[secret]"}

    def test_nested_secret_in_secret_object_rejected(self):
        with pytest.raises(SchemaError):
            verify({"creds": secret({"user": "USER", "token": secret("TOKEN")})}, {"USER": "admin", "TOKEN": "t"})

    def test_repr_with_bytes_transform_output(self):
        config, _ = verify({"raw": ("RAW", lambda v: b"\xff\xfe"), "token": secret("TOKEN")}, {"RAW": "x", "TOKEN": "hunter2"})
        text = repr(config)
        assert "hunter2" not in text
        assert json.loads(text)["raw"] in ("//4=", "__4=")


class TestStrictVerify:
    def test_returns_config(self):
        config = strict_verify({"db": {"name": "DB_NAME"}}, {"DB_NAME": "prod"})
        assert isinstance(config, ResolvedConfig)
        assert config == {"db": {"name": "prod"}}

    def test_raises_on_missing(self):
        with pytest.raises(MissingConfigurationError) as exc_info:
            strict_verify({"db": {"name": "DB_NAME"}, "url": "URL"}, {})
        message = str(exc_info.value)
        assert message.startswith(
            "Missing configuration values: environment value DB_NAME is missing from config object at db.name"
        )
        assert message.endswith("\nenvironment value URL is missing from config object at url")
        assert len(exc_info.value.messages) == 2

    def test_keeps_sanitized_rendering(self):
        config = strict_verify({"token": secret("TOKEN")}, {"TOKEN": "hunter2"})
        assert config["token"] == "hunter2"
        assert "hunter2" not in str(config)

    def test_logs_warning_before_raising(self, caplog):
        with caplog.at_level(logging.WARNING, logger="env_verify"):
            with pytest.raises(MissingConfigurationError):
                strict_verify({"url": "URL"}, {})
        assert "1 value(s) missing" in caplog.text
