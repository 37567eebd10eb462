"""Delivery of the merged edition to a Slack channel."""

import logging

from edition_courier.clients import ClientError, SlackClient
from edition_courier.exceptions import DistributionFailure
from schemas.document import DistributionOutcome, MergedDocument

logger = logging.getLogger(__name__)

COMMENT_TEMPLATE = "📰 Daily Newspaper - {filename}"


class SlackDistributor:
    """Share a merged edition into a Slack channel.

    Runs Slack's external upload flow: request an upload URL, send the bytes
    there, then complete the upload against the channel with a caption.
    Failures at any step are reported in the returned outcome; this class
    never raises for a failed delivery, and never retries one.

    Example:
        with SlackClient(config.slack_client_config()) as client:
            outcome = SlackDistributor(client).distribute(document, "C0123")
    """

    def __init__(self, client: SlackClient):
        self.client = client

    def distribute(self, document: MergedDocument, channel_id: str) -> DistributionOutcome:
        """Upload the document and share it into the channel.

        Args:
            document: The merged edition
            channel_id: Slack channel to share into

        Returns:
            Success with the Slack file id, or failure with a reason
        """
        filename = document.filename
        try:
            content = self._read(document)
            remote_id = self._upload(filename, content, channel_id)
        except DistributionFailure as e:
            logger.error(f"Error sending file to Slack: {e}")
            return DistributionOutcome.failure(str(e))

        logger.info(f"Sent {filename} to Slack channel {channel_id}")
        return DistributionOutcome.success(remote_id)

    def _read(self, document: MergedDocument) -> bytes:
        if document.payload:
            return document.payload
        if document.path is None:
            raise DistributionFailure("read", "Document has no payload and no path")
        try:
            return document.path.read_bytes()
        except OSError as e:
            raise DistributionFailure("read", str(e)) from e

    def _upload(self, filename: str, content: bytes, channel_id: str) -> str | None:
        """Run the three upload steps, translating client errors."""
        try:
            target = self.client.get_upload_target(filename, len(content))
        except ClientError as e:
            raise DistributionFailure(SlackClient.UPLOAD_URL_METHOD, e.message) from e

        try:
            self.client.upload_bytes(target.upload_url, filename, content)
        except ClientError as e:
            raise DistributionFailure("upload", e.message) from e

        try:
            completed = self.client.complete_upload(
                target.file_id,
                title=filename,
                channel_id=channel_id,
                initial_comment=COMMENT_TEMPLATE.format(filename=filename),
            )
        except ClientError as e:
            raise DistributionFailure(SlackClient.COMPLETE_UPLOAD_METHOD, e.message) from e

        if completed.files:
            return completed.files[0].id
        return target.file_id
