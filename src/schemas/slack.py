"""Slack Web API response schemas for the external file upload flow."""

from pydantic import BaseModel


class SlackResponse(BaseModel):
    """Fields common to every Slack Web API response."""

    ok: bool
    error: str | None = None

    model_config = {"extra": "allow"}


class UploadTarget(SlackResponse):
    """Response from files.getUploadURLExternal."""

    upload_url: str | None = None
    file_id: str | None = None


class SlackFile(BaseModel):
    """A file reference returned by files.completeUploadExternal."""

    id: str
    title: str | None = None

    model_config = {"extra": "allow"}


class CompleteUpload(SlackResponse):
    """Response from files.completeUploadExternal."""

    files: list[SlackFile] = []
