"""Slack Web API client for the external file upload flow."""

import logging
from typing import TypeVar

import httpx
from pydantic import ValidationError as PydanticValidationError

from schemas.slack import CompleteUpload, SlackResponse, UploadTarget

from .client import Client
from .exceptions import SlackAPIError, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_SLACK_API_URL = "https://slack.com/api"

ResponseT = TypeVar("ResponseT", bound=SlackResponse)


class SlackClient(Client):
    """Client for Slack's three-step external upload protocol.

    Slack replaced files.upload with a flow that asks for an upload URL,
    accepts the raw bytes at that URL, and then attaches the uploaded file
    to a channel. Each step is exposed as its own method so callers can
    report exactly which one failed.

    Config keys (in addition to those of Client):
        token (required): Bot token sent as a bearer credential

    Example:
        config = {"base_url": "https://slack.com/api", "token": "xoxb-..."}
        with SlackClient(config) as client:
            target = client.get_upload_target("paper.pdf", 1024)
    """

    UPLOAD_URL_METHOD = "files.getUploadURLExternal"
    COMPLETE_UPLOAD_METHOD = "files.completeUploadExternal"

    def __init__(self, config: dict):
        if not config.get("token"):
            raise ValueError("config must include 'token'")
        config = {"base_url": DEFAULT_SLACK_API_URL, **config}
        super().__init__(config)
        self._upload_client: httpx.Client | None = None

    @property
    def headers(self) -> dict[str, str]:
        headers = super().headers
        headers["Authorization"] = f"Bearer {self._config['token']}"
        return headers

    @property
    def upload_client(self) -> httpx.Client:
        """Lazy client for the pre-signed upload URL.

        The upload URL carries its own authorization, so the bot token is
        not sent there.
        """
        if self._upload_client is None:
            self._upload_client = httpx.Client(
                timeout=self.timeout,
                headers=super().headers,
            )
        return self._upload_client

    def close(self) -> None:
        super().close()
        if self._upload_client is not None:
            self._upload_client.close()
            self._upload_client = None

    def get_upload_target(self, filename: str, length: int) -> UploadTarget:
        """Ask Slack where to send the file bytes.

        Args:
            filename: Name the file will carry in Slack
            length: Size of the file in bytes

        Returns:
            UploadTarget with upload_url and file_id

        Raises:
            SlackAPIError: If Slack answers ok=false
            ValidationError: If upload_url or file_id is missing
            APIError: If the API returns a non-2xx response
            ConnectionError: If the network connection fails
        """
        response = self.post(
            f"/{self.UPLOAD_URL_METHOD}",
            data={"filename": filename, "length": str(length)},
        )
        target = self._parse(self.UPLOAD_URL_METHOD, response, UploadTarget)

        if not target.upload_url:
            raise ValidationError("No upload URL provided by Slack")
        if not target.file_id:
            raise ValidationError("No file ID provided by Slack")
        return target

    def upload_bytes(
        self,
        upload_url: str,
        filename: str,
        content: bytes,
        content_type: str = "application/pdf",
    ) -> None:
        """Send the file bytes to the URL handed out by get_upload_target.

        Raises:
            APIError: If the upload endpoint returns a non-2xx response
            ConnectionError: If the network connection fails
        """
        self._request(
            "POST",
            upload_url,
            http_client=self.upload_client,
            files={"file": (filename, content, content_type)},
        )
        logger.debug(f"Uploaded {len(content)} bytes for {filename}")

    def complete_upload(
        self,
        file_id: str,
        title: str,
        channel_id: str,
        initial_comment: str | None = None,
    ) -> CompleteUpload:
        """Finalize an upload and share the file into a channel.

        Raises:
            SlackAPIError: If Slack answers ok=false
            APIError: If the API returns a non-2xx response
            ConnectionError: If the network connection fails
        """
        body: dict = {
            "files": [{"id": file_id, "title": title}],
            "channel_id": channel_id,
        }
        if initial_comment:
            body["initial_comment"] = initial_comment

        response = self.post(f"/{self.COMPLETE_UPLOAD_METHOD}", json=body)
        return self._parse(self.COMPLETE_UPLOAD_METHOD, response, CompleteUpload)

    def _parse(
        self, method: str, response: httpx.Response, model: type[ResponseT]
    ) -> ResponseT:
        """Validate a Slack response body and check its ok flag."""
        try:
            data = response.json()
        except ValueError as e:
            raise ValidationError(f"Slack {method} returned a non-JSON body") from e

        try:
            parsed = model.model_validate(data)
        except PydanticValidationError as e:
            raise ValidationError(
                f"Slack {method} response failed validation",
                errors=[str(err) for err in e.errors()],
            ) from e

        if not parsed.ok:
            raise SlackAPIError(method, parsed.error)
        return parsed
