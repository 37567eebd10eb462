"""Run configuration for the edition courier.

Configuration is read from the environment once, at startup, and passed by
value to the components that need it. Nothing below the CLI reads
``os.environ`` directly.
"""

import os
from collections.abc import Mapping
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError

from .exceptions import ConfigError

REQUIRED_ENV_VARS = ("NEWSPAPER_BASE_URL", "SLACK_BOT_TOKEN", "SLACK_CHANNEL_ID")

DEFAULT_OUTPUT_DIR = Path("./downloads")

TRUTHY = {"1", "true", "t", "yes", "y", "on"}


class ViewerSelectors(BaseModel):
    """CSS selectors for the controls of the page-flip viewer."""

    page_select: str = "#tpgnumber"
    page_ready: str = ".flipbook-viewport"
    export_button: str = 'span.teIcoImg[onclick*="currentissues"]'

    model_config = {"frozen": True}


class CourierConfig(BaseModel):
    """Immutable settings for one courier run.

    Attributes:
        base_url: Root URL of the page-flip viewer
        slack_token: Bot token for the Slack Web API
        slack_channel_id: Channel the merged edition is shared into
        slack_api_url: Base URL of the Slack Web API
        output_dir: Directory for per-page and merged PDFs
        headless: Run the browser without a window
        max_navigation_attempts: Navigation attempts before giving up
        navigation_timeout: Seconds to wait for the viewer to load
        settle_delay: Seconds to let client-side rendering finish after load
        retry_delay: Seconds to wait between navigation attempts
        render_timeout: Seconds to wait for a selected page to render
        export_timeout: Seconds to wait for the export control
        download_timeout: Seconds to wait for the export download
        selectors: Viewer control selectors
    """

    base_url: str = Field(min_length=1)
    slack_token: str = Field(min_length=1)
    slack_channel_id: str = Field(min_length=1)
    slack_api_url: str = "https://slack.com/api"
    output_dir: Path = DEFAULT_OUTPUT_DIR
    headless: bool = True
    max_navigation_attempts: int = Field(default=3, ge=1)
    navigation_timeout: float = Field(default=60.0, gt=0)
    settle_delay: float = Field(default=2.0, ge=0)
    retry_delay: float = Field(default=5.0, ge=0)
    render_timeout: float = Field(default=30.0, gt=0)
    export_timeout: float = Field(default=30.0, gt=0)
    download_timeout: float = Field(default=60.0, gt=0)
    selectors: ViewerSelectors = Field(default_factory=ViewerSelectors)

    model_config = {"frozen": True}

    @classmethod
    def from_env(
        cls,
        env: Mapping[str, str] | None = None,
        **overrides,
    ) -> "CourierConfig":
        """Build the configuration from environment variables.

        Args:
            env: Mapping to read from (defaults to os.environ)
            **overrides: Field values that take precedence over the environment

        Returns:
            Validated CourierConfig

        Raises:
            ConfigError: If a required variable is missing or a value is invalid
        """
        env = os.environ if env is None else env

        missing = [name for name in REQUIRED_ENV_VARS if not env.get(name, "").strip()]
        if missing:
            raise ConfigError(
                f"Missing required environment variables: {', '.join(missing)}"
            )

        values: dict = {
            "base_url": env["NEWSPAPER_BASE_URL"].strip(),
            "slack_token": env["SLACK_BOT_TOKEN"].strip(),
            "slack_channel_id": env["SLACK_CHANNEL_ID"].strip(),
        }
        if env.get("SLACK_API_URL"):
            values["slack_api_url"] = env["SLACK_API_URL"].strip()
        if env.get("EDITION_OUTPUT_DIR"):
            values["output_dir"] = Path(env["EDITION_OUTPUT_DIR"])
        if env.get("EDITION_HEADLESS"):
            values["headless"] = env["EDITION_HEADLESS"].strip().lower() in TRUTHY

        values.update({k: v for k, v in overrides.items() if v is not None})

        try:
            return cls.model_validate(values)
        except ValidationError as e:
            raise ConfigError(f"Invalid configuration: {e}") from e

    def slack_client_config(self) -> dict:
        """Config dict for SlackClient.

        Distribution is not retried, so transport retries are disabled.
        """
        return {
            "base_url": self.slack_api_url,
            "token": self.slack_token,
            "retry_attempts": 1,
            "headers": {"User-Agent": "edition-courier/1.0"},
        }


def load_env_file(path: Path | None = None) -> bool:
    """Load a .env file into the process environment.

    Existing environment variables win over values in the file.

    Returns:
        True if a file was found and loaded
    """
    if path is None:
        return load_dotenv()
    return load_dotenv(path)
