"""
Test cases for environment configuration and options.
"""

import os

import pytest

from jtg.config_utils import (
    env_file_name,
    get_options_from_env,
    get_property_name_format,
    load_environment_config,
)
from jtg.hints import Hint
from jtg.options import Options
from jtg.shape import STRING, Field, record
from jtg.word_case import StringTransform

JTG_VARIABLES = ("JTG_ENV", "JTG_UNWRAP", "JTG_PROPERTY_NAME_FORMAT", "JTG_HINTS")


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Run in an empty directory with no JTG_* variables set"""
    for name in JTG_VARIABLES:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    yield tmp_path
    # dotenv writes os.environ directly, outside monkeypatch
    for name in JTG_VARIABLES:
        os.environ.pop(name, None)


class TestEnvironmentFiles:
    """Test cases for locating and loading dotenv files"""

    def test_env_file_name(self):
        """Test the dotenv file name for each environment"""
        assert env_file_name(None) == ".env"
        assert env_file_name("") == ".env"
        assert env_file_name("ci") == ".env.jtg.ci"
        assert env_file_name("prod_eu-1") == ".env.jtg.prod_eu-1"

    @pytest.mark.parametrize("environment", ["../secrets", "a b", "dev/x"])
    def test_env_file_name_rejects_paths(self, environment):
        """Test that an environment name cannot point outside the directory"""
        with pytest.raises(ValueError, match="JTG_ENV"):
            env_file_name(environment)

    def test_named_environment_file(self, clean_env, monkeypatch):
        """Test that JTG_ENV=dev loads .env.jtg.dev"""
        (clean_env / ".env.jtg.dev").write_text("JTG_UNWRAP=/items/-\n")
        monkeypatch.setenv("JTG_ENV", "dev")

        loaded = load_environment_config()

        assert loaded == clean_env / ".env.jtg.dev"
        assert os.environ["JTG_UNWRAP"] == "/items/-"

    def test_default_env_file(self, clean_env):
        """Test that .env is read when no environment is named"""
        (clean_env / ".env").write_text("JTG_UNWRAP=/rows/-\n")

        assert load_environment_config() == clean_env / ".env"
        assert os.environ["JTG_UNWRAP"] == "/rows/-"

    def test_process_environment_wins(self, clean_env, monkeypatch):
        """Test that variables already set are not overridden by the file"""
        (clean_env / ".env.jtg.dev").write_text("JTG_UNWRAP=/items/-\n")
        monkeypatch.setenv("JTG_UNWRAP", "/data/-")

        load_environment_config("dev")

        assert os.environ["JTG_UNWRAP"] == "/data/-"

    def test_directory_argument(self, clean_env, tmp_path_factory):
        """Test loading from a directory other than the working directory"""
        settings = tmp_path_factory.mktemp("settings")
        (settings / ".env.jtg.ci").write_text("JTG_PROPERTY_NAME_FORMAT=snake_case\n")

        assert load_environment_config("ci", directory=settings) == settings / ".env.jtg.ci"
        assert get_property_name_format() is StringTransform.SNAKE_CASE

    def test_missing_environment_file_is_not_fatal(self, clean_env):
        """Test that a missing .env.jtg.prod only logs a warning"""
        assert load_environment_config("prod") is None


class TestOptionsFromEnv:
    """Test cases for building options from the environment"""

    def test_defaults(self, clean_env):
        """Test that no variables give default options"""
        options = get_options_from_env()

        assert options == Options()

    def test_variables(self, clean_env, monkeypatch):
        """Test that JTG_* variables populate the options"""
        monkeypatch.setenv("JTG_UNWRAP", "/data/-")
        monkeypatch.setenv("JTG_PROPERTY_NAME_FORMAT", "snake_case")
        monkeypatch.setenv("JTG_HINTS", '{"/id": {"use_type": "string"}}')

        options = get_options_from_env()

        assert options.unwrap == "/data/-"
        assert options.property_name_format is StringTransform.SNAKE_CASE
        assert options.hints == [("/id", Hint.force("string"))]

    def test_environment_file(self, clean_env, monkeypatch):
        """Test that options are read from the selected environment file"""
        (clean_env / ".env.jtg.dev").write_text(
            "JTG_UNWRAP=/items/-\n"
            "JTG_HINTS='{\"/id\": {\"optional\": true}}'\n"
        )
        monkeypatch.setenv("JTG_ENV", "dev")

        options = get_options_from_env()

        assert options.unwrap == "/items/-"
        assert options.hints == [("/id", Hint.optional())]

    def test_unknown_property_name_format(self, clean_env, monkeypatch):
        """Test that an unknown transform name is rejected"""
        monkeypatch.setenv("JTG_PROPERTY_NAME_FORMAT", "Title Case")

        with pytest.raises(ValueError, match="JTG_PROPERTY_NAME_FORMAT"):
            get_property_name_format()

    @pytest.mark.parametrize("value", ["{not json", "[1, 2]"])
    def test_malformed_hints(self, clean_env, monkeypatch, value):
        """Test that JTG_HINTS must be a JSON object"""
        monkeypatch.setenv("JTG_HINTS", value)

        with pytest.raises(ValueError, match="JTG_HINTS"):
            get_options_from_env()


class TestOptions:
    """Test cases for the Options convenience methods"""

    def test_infer_uses_hints_and_unwrap(self):
        """Test that Options.infer applies its hints and unwrap pointer"""
        options = Options(hints=[("/id", Hint.force("string"))], unwrap="/data/-")

        shape = options.infer(b'{"data": [{"id": 1}]}')

        assert shape == record({"id": Field(STRING)})

    def test_field_name_uses_property_name_format(self):
        """Test that the configured transform names fields"""
        assert Options().field_name("first_name") == "firstName"
        assert Options(property_name_format=StringTransform.KEBAB_CASE).field_name("firstName") == "first-name"
