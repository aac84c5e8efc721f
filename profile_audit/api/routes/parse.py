from typing import Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile

from profile_audit.api.deps import enforce_rate_limit
from profile_audit.core.config import settings
from profile_audit.core.docx_extractor import extract_docx_lines
from profile_audit.core.document_parser import parse_document_text
from profile_audit.core.errors import InputError
from profile_audit.core.pdf_extractor import extract_pdf_lines
from profile_audit.core.schemas import ProfileDocument

router = APIRouter(tags=["parse"])

DOCX_CONTENT_TYPES = {"application/vnd.openxmlformats-officedocument.wordprocessingml.document"}


@router.post(
    "/parse",
    response_model=ProfileDocument,
    response_model_exclude_none=True,
    dependencies=[Depends(enforce_rate_limit)],
    summary="Parse Profile Export",
    description="Extract structured profile sections from an exported profile document (PDF, DOCX, or TXT).",
    responses={
        200: {
            "description": "Successfully parsed document",
            "content": {
                "application/json": {
                    "example": {
                        "headline": "Backend Engineer building payment systems",
                        "about": "I design and run distributed services...",
                        "experiences": [
                            {
                                "title": "Senior Engineer",
                                "company": "Acme",
                                "description": "Led the ledger rewrite.",
                                "startDate": "Jan 2021",
                                "endDate": "Present",
                            }
                        ],
                        "skills": ["Python", "PostgreSQL", "Kafka"],
                        "location": "Istanbul, Turkey",
                        "customUrlClean": True,
                    }
                }
            },
        },
        400: {"description": "Empty file or no text content"},
        413: {"description": "File too large"},
        415: {"description": "Unsupported file format"},
        422: {"description": "File has no extractable text"},
    },
)
async def parse_document(
    file: UploadFile = File(..., description="Profile export (PDF, DOCX, or TXT)"),
    profile_url: Optional[str] = Form(default=None, description="Public profile URL, used to judge whether it was customized"),
):
    """
    Parse an exported profile document.

    **Supported formats:**
    - PDF (.pdf) - Text-layer extraction only, OCR not supported
    - DOCX (.docx)
    - TXT (.txt)

    Sections that are missing from the document are simply omitted from the response.
    """
    raw = await file.read()
    if not raw:
        raise HTTPException(status_code=400, detail="Empty file uploaded.")
    if len(raw) > settings.MAX_UPLOAD_BYTES:
        raise HTTPException(status_code=413, detail=f"File exceeds {settings.MAX_UPLOAD_BYTES} bytes.")

    filename = (file.filename or "").lower()
    content_type = (file.content_type or "").lower()

    # PDF
    if filename.endswith(".pdf") or content_type == "application/pdf":
        lines = extract_pdf_lines(raw)
        if not lines:
            raise HTTPException(
                status_code=422,
                detail="PDF appears to have no extractable text. OCR is not supported.",
            )
        text = "\n".join(lines)
    # DOCX
    elif filename.endswith(".docx") or content_type in DOCX_CONTENT_TYPES:
        text = "\n".join(extract_docx_lines(raw))
    # Text
    elif content_type in {"text/plain", "text/markdown"} or filename.endswith((".txt", ".md")):
        text = raw.decode("utf-8", errors="replace")
    else:
        raise HTTPException(status_code=415, detail=f"Unsupported content type: {file.content_type}")

    try:
        return parse_document_text(text, profile_url=profile_url)
    except InputError as e:
        raise HTTPException(status_code=400, detail=str(e))
