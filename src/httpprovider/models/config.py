"""Pydantic configuration model for httpprovider."""

from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, Field

from .. import __version__

DEFAULT_USER_AGENT = f"httpprovider/{__version__}"


class ProviderConfig(BaseModel):
    """
    Provider-level configuration.

    Supplied by the host through ConfigureProvider or by CLI flags.

    Example:
        config = ProviderConfig(timeout=10.0, log_level="DEBUG")
    """

    timeout: Optional[float] = Field(
        30.0,
        gt=0,
        description="Total deadline per request in seconds (None = no deadline)",
    )
    user_agent: str = Field(DEFAULT_USER_AGENT, description="Default User-Agent header")
    max_redirects: int = Field(10, ge=0, description="Maximum redirects followed per request")

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        "INFO",
        description="Logging level",
    )
    log_file: Optional[Path] = Field(None, description="Log file path")
    debug: bool = Field(False, description="Serve in debugger-attachable mode")

    model_config = {"extra": "forbid"}
