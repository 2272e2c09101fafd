"""Tests for configuration models and logging setup."""

import logging

import pytest
from pydantic import ValidationError
from requestkit import DEFAULT_CHARSET, DEFAULT_MAX_RETRY_TIMES, ClientConfig, HttpMethod, setup_logging
from requestkit.models import ByteSize


class TestClientConfig:
    """Tests for ClientConfig."""

    def test_default_config(self):
        """Test creating default config."""
        config = ClientConfig()
        assert config.charset == DEFAULT_CHARSET
        assert config.max_retry_times == DEFAULT_MAX_RETRY_TIMES
        assert config.default_headers == {}
        assert config.max_content_size == 50 * 1024 * 1024
        assert config.user_agent is None

    def test_unknown_charset_rejected(self):
        """Test that charsets are checked against the codec registry."""
        with pytest.raises(ValidationError):
            ClientConfig(charset="no-such-charset")

    def test_binary_codec_charset_rejected(self):
        """Test that codecs which cannot encode text are rejected."""
        with pytest.raises(ValidationError):
            ClientConfig(charset="base64")

    def test_negative_retries_rejected(self):
        """Test retry count bounds."""
        with pytest.raises(ValidationError):
            ClientConfig(max_retry_times=-1)

    def test_extra_fields_forbidden(self):
        """Test that unknown keys are rejected."""
        with pytest.raises(ValidationError):
            ClientConfig(proxy="http://proxy:8080")

    def test_human_readable_content_size(self):
        """Test ByteSize parsing through the config."""
        assert ClientConfig(max_content_size="2kb").max_content_size == 2048

    def test_config_to_yaml(self):
        """Test config serialization to YAML."""
        yaml_str = ClientConfig(charset="ISO-8859-1", max_retry_times=5).to_yaml()
        assert "charset: ISO-8859-1" in yaml_str
        assert "max_retry_times: 5" in yaml_str

    def test_config_from_yaml(self):
        """Test config loading from YAML."""
        yaml_str = """
charset: ISO-8859-1
max_retry_times: 1
default_headers:
  Accept: application/json
max_content_size: 1mb
"""
        config = ClientConfig.from_yaml(yaml_str)
        assert config.charset == "ISO-8859-1"
        assert config.max_retry_times == 1
        assert config.default_headers == {"Accept": "application/json"}
        assert config.max_content_size == 1024 * 1024

    def test_config_from_empty_yaml(self):
        """Test that an empty document gives defaults."""
        assert ClientConfig.from_yaml("") == ClientConfig()

    def test_config_from_yaml_file(self, tmp_path):
        """Test config loading from a file."""
        path = tmp_path / "client.yaml"
        path.write_text("user_agent: requestkit-tests/1.0\n", encoding="utf-8")
        assert ClientConfig.from_yaml_file(path).user_agent == "requestkit-tests/1.0"


class TestByteSize:
    """Tests for ByteSize parsing."""

    def test_units(self):
        """Test size suffixes."""
        assert ByteSize._parse("200kb") == 204800
        assert ByteSize._parse("1mb") == 1048576
        assert ByteSize._parse("1.5 gb") == int(1.5 * 1024**3)
        assert ByteSize._parse("10b") == 10
        assert ByteSize._parse(1024) == 1024

    def test_invalid(self):
        """Test rejection of malformed sizes."""
        with pytest.raises(ValueError):
            ByteSize._parse("lots")


class TestHttpMethod:
    """Tests for HttpMethod."""

    def test_values(self):
        """Test that methods are their upper-case names."""
        assert HttpMethod("PATCH") is HttpMethod.PATCH
        assert HttpMethod.GET.value == "GET"


class TestSetupLogging:
    """Tests for setup_logging()."""

    @pytest.fixture(autouse=True)
    def restore_logger(self):
        """Leave the requestkit logger as pytest expects it."""
        logger = logging.getLogger("requestkit")
        yield
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()
        logger.propagate = True
        logger.setLevel(logging.NOTSET)

    def test_console_and_file_handlers(self, tmp_path):
        """Test handler setup with a log file."""
        log_file = tmp_path / "requestkit.log"
        logger = setup_logging("DEBUG", log_file=str(log_file), force=True)

        assert logger.name == "requestkit"
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 2
        assert logger.propagate is False

        logging.getLogger("requestkit.request").debug("hello")
        for handler in logger.handlers:
            handler.flush()
        assert "hello" in log_file.read_text(encoding="utf-8")

    def test_not_reconfigured_without_force(self):
        """Test that existing handlers are kept unless forced."""
        setup_logging("INFO", force=True)
        logger = setup_logging("WARNING")
        assert len(logger.handlers) == 1
        assert logger.level == logging.WARNING

    def test_driven_by_client_config(self, tmp_path):
        """Test that ClientConfig.log_level and log_file configure the logger."""
        log_file = tmp_path / "client.log"
        config = ClientConfig.from_yaml(f"log_level: WARNING\nlog_file: {log_file}\n")

        logger = config.setup_logging(force=True)

        assert logger.level == logging.WARNING
        assert len(logger.handlers) == 2
        logging.getLogger("requestkit.http.client").warning("retrying")
        for handler in logger.handlers:
            handler.flush()
        assert "retrying" in log_file.read_text(encoding="utf-8")

    def test_numeric_level(self):
        """Test that numeric levels are accepted as-is."""
        assert setup_logging(logging.ERROR, force=True).level == logging.ERROR

    def test_unknown_level_falls_back_to_info(self):
        """Test fallback for unknown level names."""
        assert setup_logging("CHATTY", force=True).level == logging.INFO
