"""Tests for configuration loading."""

from pathlib import Path

import pytest
from pagestage.config import CONFIG_FILENAME, Config


class TestLoad:
    """Tests for Config.load()."""

    def test__explicit_missing_file__raises_file_not_found(self, tmp_path: Path) -> None:
        """Raise FileNotFoundError for a missing explicit path."""
        with pytest.raises(FileNotFoundError, match="Configuration file not found"):
            Config.load(tmp_path / "missing.toml")

    def test__no_config__returns_defaults(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Return defaults when no config file is discovered."""
        monkeypatch.chdir(tmp_path)

        config = Config.load()

        assert config.server.port == 8080
        assert config.cache.enabled is True
        assert config.errors.not_found == "/system/not_found"
        assert config.config_path is None

    def test__discovers_config_in_parent(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Find pagestage.toml in a parent directory."""
        (tmp_path / CONFIG_FILENAME).write_text("[server]\nport = 9000\n")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        monkeypatch.chdir(nested)

        config = Config.load()

        assert config.server.port == 9000
        assert config.config_path == tmp_path / CONFIG_FILENAME

    def test__full_config__parsed_relative_to_file(self, tmp_path: Path) -> None:
        """Parse every section; paths resolve against the config directory."""
        config_file = tmp_path / CONFIG_FILENAME
        config_file.write_text(
            """
[server]
host = "0.0.0.0"
port = 9090
admin_host_prefix = "admin."

[content]
manifest = "site/content.toml"
layouts_dir = "site/layouts"
attachments_dir = "site/files"

[cache]
enabled = false
cache_dir = "tmp/cache"

[errors]
not_found = "/errors/404"
raw_errors_for_editors = false

[session]
secret = "s3cret"
cookie_name = "sid"
"""
        )

        config = Config.load(config_file)

        assert config.server.host == "0.0.0.0"
        assert config.server.port == 9090
        assert config.server.admin_host_prefix == "admin."
        assert config.content.manifest == tmp_path / "site" / "content.toml"
        assert config.content.layouts_dir == tmp_path / "site" / "layouts"
        assert config.content.attachments_dir == tmp_path / "site" / "files"
        assert config.cache.enabled is False
        assert config.cache.cache_dir == tmp_path / "tmp" / "cache"
        assert config.errors.not_found == "/errors/404"
        assert config.errors.access_denied == "/system/access_denied"
        assert config.errors.raw_errors_for_editors is False
        assert config.errors.raw_errors_on_admin_site is True
        assert config.session.secret == "s3cret"
        assert config.session.cookie_name == "sid"

    def test__missing_sections__defaults_relative_to_file(self, tmp_path: Path) -> None:
        """Missing sections default relative to the config directory."""
        config_file = tmp_path / CONFIG_FILENAME
        config_file.write_text("")

        config = Config.load(config_file)

        assert config.content.manifest == tmp_path / "content.toml"
        assert config.content.layouts_dir is None
        assert config.cache.cache_dir == tmp_path / ".cache"

    @pytest.mark.parametrize(
        ("content", "message"),
        [
            ('[server]\nport = "80"\n', "server.port must be an integer"),
            ("[cache]\nenabled = 1\n", "cache.enabled must be a boolean"),
            ('[errors]\nnot_found = "system/not_found"\n', "errors.not_found must be a path"),
            ("[errors]\nraw_errors_on_admin_site = 0\n", "errors.raw_errors_on_admin_site"),
            ('[session]\nsecret = ""\n', "session.secret must be a non-empty string"),
            ('content = "x"\n', "content section must be a dictionary"),
        ],
    )
    def test__invalid_values__raise_value_error(
        self, tmp_path: Path, content: str, message: str
    ) -> None:
        """Reject invalid values with a message naming the key."""
        config_file = tmp_path / CONFIG_FILENAME
        config_file.write_text(content)

        with pytest.raises(ValueError, match=message):
            Config.load(config_file)


class TestWithOverrides:
    """Tests for Config.with_overrides()."""

    def test__overrides__applied_without_mutation(self, test_config: Config) -> None:
        """Overrides produce a new config and leave the original untouched."""
        overridden = test_config.with_overrides(port=9999, cache_enabled=False)

        assert overridden.server.port == 9999
        assert overridden.cache.enabled is False
        assert overridden.cache.cache_dir == test_config.cache.cache_dir
        assert test_config.server.port == 8080
        assert test_config.cache.enabled is True

    def test__no_overrides__equal_config(self, test_config: Config) -> None:
        """Without overrides the config is unchanged."""
        assert test_config.with_overrides() == test_config
