"""PDF Assembler for merging per-page exports into one edition PDF.

Uses PyMuPDF to append every page of every acquired export, in order, to a
single output document.
"""

import logging
from collections.abc import Sequence
from datetime import date
from pathlib import Path

import fitz  # PyMuPDF

from edition_courier.exceptions import MergeError
from schemas.artifact import PageArtifact
from schemas.document import MergedDocument

from .assembler import Assembler

logger = logging.getLogger(__name__)


class PDFAssembler(Assembler):
    """Merge page artifacts into one PDF.

    The PDFAssembler:
    1. Skips artifacts that were not acquired (mismatches carry no payload)
    2. Opens each remaining payload as a PDF
    3. Inserts all of its pages, in their own order, after the pages so far
    4. Serializes the accumulated document

    Artifacts are taken in the order given; nothing is re-sorted.
    """

    def merge(
        self, artifacts: Sequence[PageArtifact], edition_date: date
    ) -> MergedDocument:
        """Merge the acquired artifacts into a single PDF.

        Args:
            artifacts: Page artifacts in output order
            edition_date: Publication date of the edition

        Returns:
            MergedDocument with the PDF bytes and its page count

        Raises:
            MergeError: If an artifact is not a readable PDF, or nothing
                was acquired
        """
        acquired = [a for a in artifacts if a.is_ok]
        if not acquired:
            raise MergeError("No acquired pages to merge")

        logger.info("Starting PDF merge process...")
        merged = fitz.open()
        try:
            for position, artifact in enumerate(acquired, start=1):
                logger.debug(
                    f"Merging page {artifact.page_index} ({position}/{len(acquired)})"
                )
                self._append(merged, artifact)

            payload = merged.tobytes(garbage=3, deflate=True)
            page_count = merged.page_count
        finally:
            merged.close()

        logger.info(f"Merged {len(acquired)} pages into a {page_count}-page PDF")
        return MergedDocument(
            edition_date=edition_date,
            payload=payload,
            page_count=page_count,
            source_pages=tuple(a.page_index for a in acquired),
        )

    def write(self, document: MergedDocument, path: Path) -> MergedDocument:
        """Write the merged PDF to disk.

        Returns:
            The document with its path set
        """
        path.write_bytes(document.payload)
        logger.info(f"PDF merge complete! Saved as: {path}")
        return document.written_to(path)

    def _append(self, merged: fitz.Document, artifact: PageArtifact) -> None:
        """Insert every page of one artifact at the end of the merged PDF."""
        if not artifact.payload:
            raise MergeError(
                f"Page {artifact.page_index} has no payload",
                page_index=artifact.page_index,
            )

        try:
            source = fitz.open(stream=artifact.payload, filetype="pdf")
        except (fitz.FileDataError, RuntimeError, ValueError) as e:
            raise MergeError(
                f"Page {artifact.page_index} is not a readable PDF: {e}",
                page_index=artifact.page_index,
            ) from e

        try:
            if source.page_count == 0:
                raise MergeError(
                    f"Page {artifact.page_index} export contains no pages",
                    page_index=artifact.page_index,
                )
            merged.insert_pdf(source)
        finally:
            source.close()
