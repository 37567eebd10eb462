"""Schema definitions for Edition Courier."""

from .artifact import ArtifactStatus, PageArtifact, RunResult
from .document import DistributionOutcome, MergedDocument
from .edition import Edition
from .slack import CompleteUpload, SlackFile, SlackResponse, UploadTarget

__all__ = [
    "ArtifactStatus",
    "CompleteUpload",
    "DistributionOutcome",
    "Edition",
    "MergedDocument",
    "PageArtifact",
    "RunResult",
    "SlackFile",
    "SlackResponse",
    "UploadTarget",
]
