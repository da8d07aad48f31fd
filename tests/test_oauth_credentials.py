import logging

import pytest

from oauth_login.core import config
from oauth_login.services.oauth import ConfigurationError, load_client_credentials
from oauth_login.services.oauth.credentials import read_properties


def test_credentials_from_settings(test_settings):
    creds = load_client_credentials(test_settings)

    assert creds.client_id == "test-client-id"
    assert creds.client_secret == "test-client-secret"


def test_secret_not_in_repr(test_settings):
    creds = load_client_credentials(test_settings)

    assert "test-client-secret" not in repr(creds)


def test_missing_credentials_raise(unconfigured_settings):
    with pytest.raises(ConfigurationError):
        load_client_credentials(unconfigured_settings)


def test_blank_credentials_count_as_missing():
    settings = config.TestSettings(GITHUB_CLIENT_ID="  ", GITHUB_CLIENT_SECRET="secret", _env_file=None)

    assert settings.GITHUB_CLIENT_ID is None
    with pytest.raises(ConfigurationError):
        load_client_credentials(settings)


def test_credentials_from_properties_file(tmp_path):
    props = tmp_path / "github.properties"
    props.write_text(
        "# GitHub OAuth app\n"
        "github.client.id = file-client-id\n"
        "github.client.secret=file-client-secret\n"
    )
    settings = config.TestSettings(GITHUB_PROPERTIES_FILE=str(props), _env_file=None)

    creds = load_client_credentials(settings)

    assert creds.client_id == "file-client-id"
    assert creds.client_secret == "file-client-secret"


def test_environment_takes_precedence_over_properties_file(tmp_path):
    props = tmp_path / "github.properties"
    props.write_text("github.client.id=file-id\ngithub.client.secret=file-secret\n")
    settings = config.TestSettings(
        GITHUB_CLIENT_ID="env-id",
        GITHUB_PROPERTIES_FILE=str(props),
        _env_file=None,
    )

    creds = load_client_credentials(settings)

    assert creds.client_id == "env-id"
    assert creds.client_secret == "file-secret"


def test_unreadable_properties_file_is_logged(tmp_path, caplog):
    settings = config.TestSettings(GITHUB_PROPERTIES_FILE=str(tmp_path / "missing.properties"), _env_file=None)

    with caplog.at_level(logging.ERROR):
        with pytest.raises(ConfigurationError):
            load_client_credentials(settings)

    assert "Error loading properties" in caplog.text


def test_read_properties_formats(tmp_path):
    props = tmp_path / "x.properties"
    props.write_text("! comment\n\na=1\nb: two\nc\nd=x=y\n")

    assert read_properties(props) == {"a": "1", "b": "two", "c": "", "d": "x=y"}


def test_whitespace_separated_properties_file(tmp_path):
    props = tmp_path / "gh.properties"
    props.write_text("github.client.id abc123\ngithub.client.secret\tsecret456\n")
    settings = config.TestSettings(GITHUB_PROPERTIES_FILE=str(props), _env_file=None)

    creds = load_client_credentials(settings)

    assert creds.client_id == "abc123"
    assert creds.client_secret == "secret456"


def test_read_properties_continuations_and_escapes(tmp_path):
    props = tmp_path / "x.properties"
    props.write_text(
        "github.client.secret = sec\\\n"
        "    ret456\n"
        "path\\ with\\ spaces : a\\tb\n"
        "colon\\:key=\\u0041BC\n"
        "   # indented comment\n"
        "trailing=backslash\\\\\n"
        "  spaced   =   value\n"
    )

    assert read_properties(props) == {
        "github.client.secret": "secret456",
        "path with spaces": "a\tb",
        "colon:key": "ABC",
        "trailing": "backslash\\",
        "spaced": "value",
    }


def test_windows_line_endings(tmp_path):
    props = tmp_path / "x.properties"
    props.write_bytes(b"github.client.id=abc\r\ngithub.client.secret=def\r\n")

    assert read_properties(props) == {"github.client.id": "abc", "github.client.secret": "def"}
