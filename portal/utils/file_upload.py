"""
File Upload Utility - validate study material uploads.

Supported formats:
- Documents: PDF, Word, PowerPoint, plain text
- Images: PNG, JPEG (scanned notes)

Max file size comes from settings (default 10MB).
"""

from typing import Tuple
from fastapi import UploadFile, HTTPException

from portal.core.config import get_settings


ALLOWED_EXTENSIONS = {
    '.pdf': 'application/pdf',
    '.doc': 'application/msword',
    '.docx': 'application/vnd.openxmlformats-officedocument.wordprocessingml.document',
    '.ppt': 'application/vnd.ms-powerpoint',
    '.pptx': 'application/vnd.openxmlformats-officedocument.presentationml.presentation',
    '.txt': 'text/plain',
    '.png': 'image/png',
    '.jpg': 'image/jpeg',
    '.jpeg': 'image/jpeg',
}


def get_file_extension(filename: str) -> str:
    """Get lowercase file extension."""
    if '.' not in filename:
        return ''
    return '.' + filename.rsplit('.', 1)[1].lower()


async def read_upload(file: UploadFile) -> Tuple[bytes, str, str]:
    """
    Read and validate an uploaded file.

    Returns:
        Tuple of (content, filename, content_type)

    Raises:
        HTTPException on validation errors
    """
    if not file.filename:
        raise HTTPException(status_code=400, detail="No filename provided")

    ext = get_file_extension(file.filename)
    if ext not in ALLOWED_EXTENSIONS:
        raise HTTPException(
            status_code=400,
            detail=f"Unsupported file type '{ext}'. Allowed: {', '.join(sorted(ALLOWED_EXTENSIONS))}"
        )

    content = await file.read()

    max_mb = get_settings().max_upload_mb
    if len(content) > max_mb * 1024 * 1024:
        raise HTTPException(
            status_code=413,
            detail=f"File too large. Maximum size: {max_mb}MB"
        )

    if not content:
        raise HTTPException(status_code=400, detail="Uploaded file is empty")

    content_type = file.content_type
    if not content_type or content_type == "application/octet-stream":
        content_type = ALLOWED_EXTENSIONS[ext]

    return content, file.filename, content_type


def get_supported_formats() -> dict:
    """Get info about supported file formats."""
    return {
        "supported_formats": sorted(ALLOWED_EXTENSIONS),
        "max_size_mb": get_settings().max_upload_mb
    }
