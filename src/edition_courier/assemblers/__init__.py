"""Assemblers for combining page artifacts into one document."""

from .assembler import Assembler
from .pdf_assembler import PDFAssembler

__all__ = ["Assembler", "PDFAssembler"]
