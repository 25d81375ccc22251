from pathlib import Path

import pytest

from layercrypt.core.config import LayerCryptConfig, LimitsConfig, LoggingConfig


def test_defaults():
    config = LayerCryptConfig.load()
    assert config.limits.max_pkcs11_encrypt_modules == 1
    assert config.logging.level == "WARNING"
    assert config.logging.log_dir is None


def test_environment_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("LAYERCRYPT_LIMITS__MAX_PKCS11_ENCRYPT_MODULES", "4")
    monkeypatch.setenv("LAYERCRYPT_LOGGING__LEVEL", "debug")
    monkeypatch.setenv("LAYERCRYPT_LOGGING__ENABLE_CONSOLE", "false")
    monkeypatch.setenv("LAYERCRYPT_LOGGING__ENABLE_JSON", "yes")
    monkeypatch.setenv("LAYERCRYPT_LOGGING__LOG_DIR", str(tmp_path))
    config = LayerCryptConfig.load()
    assert config.limits.max_pkcs11_encrypt_modules == 4
    assert config.logging.level == "DEBUG"
    assert config.logging.enable_console is False
    assert config.logging.enable_json is True
    assert config.logging.log_dir == tmp_path


def test_sensitive_keys_are_ignored(monkeypatch):
    monkeypatch.setenv("LAYERCRYPT_PKCS11__PIN", "1234")
    monkeypatch.setenv("LAYERCRYPT_GPG__PASSWORD", "hunter2")
    overrides = LayerCryptConfig._parse_env_overrides("LAYERCRYPT")
    assert "pkcs11.pin" not in overrides
    assert "gpg.password" not in overrides


def test_invalid_values_fail(monkeypatch):
    monkeypatch.setenv("LAYERCRYPT_LIMITS__MAX_PKCS11_ENCRYPT_MODULES", "0")
    with pytest.raises(ValueError):
        LayerCryptConfig.load()


@pytest.mark.parametrize("kwargs", [
    {"level": "LOUD"},
    {"log_dir": Path("relative/logs")},
])
def test_logging_config_validation(kwargs):
    with pytest.raises(ValueError):
        LoggingConfig(**kwargs)


def test_limits_config_validation():
    with pytest.raises(ValueError):
        LimitsConfig(max_pkcs11_encrypt_modules=0)


def test_config_is_immutable():
    config = LayerCryptConfig.load()
    with pytest.raises(AttributeError):
        config._limits = LimitsConfig(max_pkcs11_encrypt_modules=5)


def test_singleton_and_reset(monkeypatch):
    first = LayerCryptConfig.get_instance()
    assert LayerCryptConfig.get_instance() is first
    monkeypatch.setenv("LAYERCRYPT_LIMITS__MAX_PKCS11_ENCRYPT_MODULES", "2")
    LayerCryptConfig.reset_instance()
    assert LayerCryptConfig.get_instance().limits.max_pkcs11_encrypt_modules == 2


def test_config_hash_tracks_settings():
    default = LayerCryptConfig()
    raised = LayerCryptConfig(limits=LimitsConfig(max_pkcs11_encrypt_modules=2))
    assert default.config_hash == LayerCryptConfig().config_hash
    assert default.config_hash != raised.config_hash
    assert "max_pkcs11_encrypt_modules=2" in repr(raised)
