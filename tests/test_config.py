"""Tests for configuration loading and validation."""

import pytest

from git_critic.config import CriticConfig, load_config
from git_critic.exceptions import ConfigurationError, ErrorKind


@pytest.fixture(autouse=True)
def isolated(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.chdir(tmp_path)
    for key in ("PROFILE", "SEVERITY", "VERBOSE", "DATABASE", "OUTPUT_FORMAT",
                "PERLCRITIC", "INCLUDE_PATTERN", "REPO_PATH"):
        monkeypatch.delenv(f"GIT_CRITIC_{key}", raising=False)


class TestCriticConfig:
    def test_defaults(self):
        config = CriticConfig()
        assert config.severity == 1
        assert config.verbose == 11
        assert config.database == "git-critic.db"
        assert config.output_format == "json"
        assert config.profile is None

    def test_default_profile_from_home(self, tmp_path):
        home = tmp_path / "home"
        home.mkdir()
        (home / ".perlcriticrc").write_text("severity = 3\n")
        assert CriticConfig().profile == str(home / ".perlcriticrc")

    @pytest.mark.parametrize("kwargs", [{"severity": 0}, {"severity": 6}, {"verbose": 12}, {"include_pattern": "("}])
    def test_invalid_values(self, kwargs):
        with pytest.raises(ConfigurationError) as exc:
            CriticConfig(**kwargs)
        assert exc.value.kind is ErrorKind.FATAL_INPUT
        assert not exc.value.recoverable

    def test_file_regex(self):
        regex = CriticConfig().file_regex
        assert regex.search("lib/Foo.pm")
        assert regex.search("bin/run.pl")
        assert not regex.search("README")


class TestLoadConfig:
    def test_project_file(self, tmp_path):
        (tmp_path / "git-critic.toml").write_text('severity = 4\ndatabase = "critic.db"\n')
        config = load_config()
        assert config.severity == 4
        assert config.database == "critic.db"

    def test_table_form(self, tmp_path):
        path = tmp_path / "custom.toml"
        path.write_text('[git-critic]\noutput_format = "csv"\n')
        assert load_config(path).output_format == "csv"

    def test_priority(self, tmp_path, monkeypatch):
        (tmp_path / "git-critic.toml").write_text("severity = 2\nverbose = 3\n")
        monkeypatch.setenv("GIT_CRITIC_SEVERITY", "4")
        config = load_config(verbose=9)
        assert config.severity == 4
        assert config.verbose == 9

    def test_bad_env_integer(self, monkeypatch):
        monkeypatch.setenv("GIT_CRITIC_SEVERITY", "high")
        with pytest.raises(ConfigurationError) as exc:
            load_config()
        assert not exc.value.recoverable

    def test_unknown_key(self, tmp_path):
        (tmp_path / "git-critic.toml").write_text("colour = true\n")
        with pytest.raises(ConfigurationError, match="colour") as exc:
            load_config()
        assert not exc.value.recoverable

    def test_invalid_toml(self, tmp_path):
        (tmp_path / "git-critic.toml").write_text("severity = = 2\n")
        with pytest.raises(ConfigurationError):
            load_config()

    def test_missing_explicit_file(self, tmp_path):
        with pytest.raises(ConfigurationError):
            load_config(tmp_path / "nope.toml")
