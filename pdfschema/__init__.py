"""
pdfschema - Extract schema-conformant JSON from PDF documents.

Example:
    >>> from pdfschema.domains.extraction import ExtractionRequest, ExtractorConfig, PdfDataExtractor
    >>> extractor = PdfDataExtractor(ExtractorConfig(api_key="sk-..."))
    >>> result = await extractor.extract(
    ...     ExtractionRequest(schema={"invoiceNumber": {"type": "string"}}, pdf_path="invoice.pdf")
    ... )
"""

__version__ = "0.3.0"
__all__ = ["__version__"]
