"""Tests for the command-line interface."""

import json

import pytest
from httpprovider import __version__
from httpprovider.cli import build_config, create_parser, main, parse_header


class TestParser:
    """Tests for argument parsing."""

    def test_serve_debug(self):
        """Test the serve command with --debug."""
        args = create_parser().parse_args(["serve", "--debug"])
        assert args.command == "serve"
        assert args.debug is True

    def test_fetch_arguments(self):
        """Test the fetch command arguments."""
        args = create_parser().parse_args(
            ["fetch", "https://example.com", "-X", "POST", "-H", "Accept: text/plain", "-d", "q=1"]
        )
        assert args.url == "https://example.com"
        assert args.method == "POST"
        assert args.header == ["Accept: text/plain"]
        assert args.data == "q=1"

    def test_command_required(self):
        """Test that a command must be given."""
        with pytest.raises(SystemExit):
            create_parser().parse_args([])

    def test_version(self, capsys):
        """Test --version."""
        with pytest.raises(SystemExit):
            create_parser().parse_args(["--version"])
        assert __version__ in capsys.readouterr().out


class TestBuildConfig:
    """Tests for build_config."""

    def test_defaults(self):
        """Test config from no flags."""
        config = build_config(create_parser().parse_args(["schema"]))
        assert config.timeout == 30.0
        assert config.debug is False

    def test_debug_forces_debug_logging(self):
        """Test that --debug selects DEBUG logging."""
        config = build_config(create_parser().parse_args(["serve", "--debug", "--timeout", "5"]))
        assert config.debug is True
        assert config.log_level == "DEBUG"
        assert config.timeout == 5.0


class TestParseHeader:
    """Tests for parse_header."""

    def test_valid(self):
        """Test splitting a header argument."""
        assert parse_header("X-Token:  abc ") == ("X-Token", "abc")

    def test_value_with_colon(self):
        """Test that only the first colon separates name and value."""
        assert parse_header("Referer: https://example.com") == ("Referer", "https://example.com")

    @pytest.mark.parametrize("value", ["no-colon", ": value"])
    def test_invalid(self, value):
        """Test malformed header arguments."""
        with pytest.raises(ValueError):
            parse_header(value)


class TestMain:
    """Tests for main()."""

    def test_schema_command(self, capsys):
        """Test printing the schema."""
        assert main(["schema"]) == 0
        schema = json.loads(capsys.readouterr().out)
        assert "http" in schema["resources"]

    def test_fetch_invalid_header(self):
        """Test that a malformed header fails the command."""
        assert main(["fetch", "https://example.com", "-H", "broken"]) == 1

    def test_fetch_invalid_method(self, capsys):
        """Test that validation errors fail the command without a request."""
        assert main(["fetch", "https://example.com", "-X", "DELETE"]) == 1
        assert "Invalid attribute value" in capsys.readouterr().err

    def test_invalid_timeout(self):
        """Test that invalid configuration fails the command."""
        assert main(["fetch", "https://example.com", "--timeout", "-1"]) == 1
