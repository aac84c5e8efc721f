from io import BytesIO
from typing import List

from docx import Document


def extract_docx_lines(docx_bytes: bytes) -> List[str]:
    """
    Deterministically extract non-empty paragraph text from a DOCX export,
    followed by the text of any table cells (some exports lay the sidebar
    out as a table).
    """
    doc = Document(BytesIO(docx_bytes))
    out: List[str] = []
    for p in doc.paragraphs:
        t = (p.text or "").strip()
        if t:
            out.append(t)
    for table in doc.tables:
        for row in table.rows:
            for cell in row.cells:
                for ln in (cell.text or "").splitlines():
                    if ln.strip():
                        out.append(ln.strip())
    return out
