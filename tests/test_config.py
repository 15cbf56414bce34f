"""Tests for runtime configuration."""
from create_mn_app.core.config import RuntimeConfig, get_config, set_config


class TestRuntimeConfig:
    """Test environment-driven configuration."""

    def test_defaults(self):
        config = RuntimeConfig.from_env()
        assert config.command_timeout == 10
        assert config.install_timeout == 600
        assert config.git_host == "https://github.com"
        assert config.proof_server_image == "midnightntwrk/proof-server"
        assert config.mock is False

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv('CREATE_MN_APP_CLONE_TIMEOUT', '30')
        monkeypatch.setenv('CREATE_MN_APP_MOCK', '1')
        monkeypatch.setenv('CREATE_MN_APP_MIN_PYTHON', '3.12')

        config = RuntimeConfig.from_env()
        assert config.clone_timeout == 30
        assert config.mock is True
        assert config.min_python == "3.12"

    def test_get_config_is_cached(self):
        assert get_config() is get_config()

    def test_set_config(self):
        custom = RuntimeConfig(mock=True)
        set_config(custom)
        assert get_config() is custom
        set_config(None)
        assert get_config() is not custom
