"""Pydantic configuration models for requestkit."""

import codecs
import logging
from enum import Enum
from pathlib import Path
from typing import Any, Literal, Optional

from pydantic import BaseModel, Field, field_validator

from ..logging_config import setup_logging

DEFAULT_CHARSET = "UTF-8"
DEFAULT_MAX_RETRY_TIMES = 3


class HttpMethod(str, Enum):
    """HTTP methods a Request can be dispatched with."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"
    TRACE = "TRACE"
    PATCH = "PATCH"


class ByteSize(int):
    """
    Custom type that parses human-readable byte sizes.

    Accepts:
        - Integers (bytes)
        - Strings like '200kb', '1mb', '5gb'

    Examples:
        >>> ByteSize._parse('200kb')
        204800
        >>> ByteSize._parse('1mb')
        1048576
        >>> ByteSize._parse(1024)
        1024
    """

    @classmethod
    def __get_pydantic_core_schema__(cls, source: Any, handler: Any) -> Any:
        from pydantic_core import core_schema

        return core_schema.no_info_plain_validator_function(cls._parse)

    @classmethod
    def _parse(cls, v: Any) -> int:
        if isinstance(v, int):
            return v
        if isinstance(v, str):
            v = v.lower().strip()
            # Order matters: check longer suffixes first
            units = [("gb", 1024**3), ("mb", 1024**2), ("kb", 1024), ("b", 1)]
            for unit, mult in units:
                if v.endswith(unit):
                    num_str = v[: -len(unit)].strip()
                    try:
                        return int(float(num_str) * mult)
                    except ValueError as err:
                        raise ValueError(f"Invalid number in byte size: {v}") from err
            try:
                return int(v)
            except ValueError:
                pass
        raise ValueError(f"Invalid byte size: {v}. Use format like '200kb', '1mb', or integer bytes.")


class ClientConfig(BaseModel):
    """
    Client-wide defaults applied to new requests and to the transport.

    Example:
        config = ClientConfig(
            charset="ISO-8859-1",
            max_retry_times=5,
            default_headers={"Accept": "application/json"},
        )

    YAML format:
        charset: UTF-8
        max_retry_times: 5
        default_headers:
          Accept: application/json
        max_content_size: 10mb
    """

    charset: str = Field(DEFAULT_CHARSET, description="Character set for URL and text encoding")
    max_retry_times: int = Field(
        DEFAULT_MAX_RETRY_TIMES,
        ge=0,
        description="Maximum retry attempts for failed requests",
    )
    retry_base_delay: float = Field(1.0, ge=0, description="Base delay for exponential backoff (seconds)")
    default_timeout: float = Field(30.0, gt=0, description="Default request timeout in seconds")
    user_agent: Optional[str] = Field(None, description="Custom User-Agent header")
    default_headers: dict[str, str] = Field(
        default_factory=dict,
        description="Headers sent with every request unless the request overrides them",
    )
    max_content_size: ByteSize = Field(
        ByteSize(50 * 1024 * 1024),
        description="Maximum response size (e.g., '200kb', '50mb')",
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        "INFO",
        description="Logging level",
    )
    log_file: Optional[Path] = Field(None, description="Optional file receiving log output")

    model_config = {"extra": "forbid"}

    @field_validator("charset")
    @classmethod
    def _known_charset(cls, v: str) -> str:
        try:
            codecs.lookup(v)
            # Binary codecs such as base64 resolve but cannot encode text
            "".encode(v)
        except LookupError as err:
            raise ValueError(f"Unknown charset: {v}") from err
        return v

    def to_yaml(self) -> str:
        """Serialize config to YAML string."""
        import yaml

        return yaml.dump(self.model_dump(mode="json", exclude_none=True), default_flow_style=False)

    @classmethod
    def from_yaml(cls, yaml_str: str) -> "ClientConfig":
        """Load config from YAML string."""
        import yaml

        data = yaml.safe_load(yaml_str) or {}
        return cls.model_validate(data)

    @classmethod
    def from_yaml_file(cls, path: Path) -> "ClientConfig":
        """Load config from YAML file."""
        return cls.from_yaml(Path(path).read_text(encoding="utf-8"))

    def setup_logging(self, force: bool = False) -> logging.Logger:
        """
        Configure the requestkit logger from log_level and log_file.

        Args:
            force: If True, replace handlers configured earlier

        Returns:
            The configured requestkit logger
        """
        return setup_logging(
            self.log_level,
            log_file=str(self.log_file) if self.log_file else None,
            force=force,
        )
