from io import BytesIO

from pypdf import PdfReader
from pypdf.errors import PdfReadError

MAX_PAGES = 50


class UnreadablePdf(ValueError):
    """Corrupt, truncated or password-protected upload."""


def extract_text_from_pdf(file_content: bytes) -> str:
    """Text of the first MAX_PAGES pages; empty string when nothing is extractable (e.g. scanned PDFs)."""
    try:
        reader = PdfReader(BytesIO(file_content))
        if reader.is_encrypted:
            # Lab portals often export with an empty owner password
            if not reader.decrypt(""):
                raise UnreadablePdf("PDF is password protected")
        parts = []
        for i, page in enumerate(reader.pages):
            if i >= MAX_PAGES:
                break
            text = page.extract_text()
            if text:
                parts.append(text.strip())
    except PdfReadError as e:
        raise UnreadablePdf(f"Could not read PDF: {e}") from e
    return "\n\n".join(parts).strip()
