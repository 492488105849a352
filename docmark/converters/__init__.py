from .pdf_converter import PDFConverter
from .office_converter import OfficeConverter

__all__ = ["PDFConverter", "OfficeConverter"]
