import logging
import re
from io import BytesIO
from typing import List

import pdfplumber

logger = logging.getLogger(__name__)

# Tuned for exported profile PDFs: tight enough to keep words apart, loose
# enough not to split them
X_TOLERANCE = 1.5

# Exports stamp every page with "Page 2 of 4"
PAGE_FOOTER_RE = re.compile(r"^page\s+\d+\s+of\s+\d+$", re.IGNORECASE)


def extract_pdf_lines(pdf_bytes: bytes) -> List[str]:
    """
    Deterministically extract text lines from a PDF text layer, page by page.

    Page footers are dropped so they cannot leak into the section that spans
    a page break. Returns an empty list for image-only PDFs (no OCR).
    """
    out: List[str] = []

    with pdfplumber.open(BytesIO(pdf_bytes)) as pdf:
        for page_i, page in enumerate(pdf.pages, start=1):
            text = page.extract_text(x_tolerance=X_TOLERANCE) or ""
            lines = [ln.strip() for ln in text.splitlines() if ln.strip()]
            kept = [ln for ln in lines if not PAGE_FOOTER_RE.match(ln)]
            logger.debug(f"pdf page {page_i}: {len(kept)} lines ({len(lines) - len(kept)} footer lines dropped)")
            out.extend(kept)

    return out
