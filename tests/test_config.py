"""Tests for settings loading"""

from toolshim.core.config import Settings


class TestSettings:
    """Test environment-driven settings"""

    def test_defaults(self):
        settings = Settings(_env_file=None)

        assert settings.shell == "auto"
        assert settings.probe_cache is True
        assert settings.log_level == "WARNING"
        assert settings.user_agent.startswith("toolshim/")

    def test_environment_prefix(self, monkeypatch):
        monkeypatch.setenv("TOOLSHIM_SHELL", "cmd")
        monkeypatch.setenv("TOOLSHIM_TAR_COMMAND", "bsdtar")
        monkeypatch.setenv("TOOLSHIM_PROBE_CACHE", "false")

        settings = Settings(_env_file=None)

        assert settings.shell == "cmd"
        assert settings.tar_command == "bsdtar"
        assert settings.probe_cache is False

    def test_production_forces_json_logs(self):
        settings = Settings(_env_file=None, environment="production")
        assert settings.log_format == "json"

    def test_development_keeps_requested_format(self):
        settings = Settings(_env_file=None, environment="development", log_format="console")
        assert settings.log_format == "console"

    def test_env_file(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("TOOLSHIM_USER_AGENT=custom/2.0\n")

        assert Settings(_env_file=str(env_file)).user_agent == "custom/2.0"
