"""Validation of uploaded page images."""
from typing import List

from fastapi import HTTPException, UploadFile

from papergrade.core.schemas.llm_contracts import PageImage

# Leading bytes of the accepted image formats
IMAGE_SIGNATURES = {
    b"\xff\xd8\xff": "image/jpeg",
    b"\x89PNG\r\n\x1a\n": "image/png",
}


def sniff_image_type(content: bytes):
    """Return the media type for JPEG/PNG content, or None."""
    for signature, mime_type in IMAGE_SIGNATURES.items():
        if content.startswith(signature):
            return mime_type
    return None


async def read_page_images(files: List[UploadFile], field: str, max_bytes: int) -> List[PageImage]:
    """Read uploads into PageImage objects, or raise 422 listing every bad file.

    The media type sent to the model comes from the file content, not from
    the client-declared content type.
    """
    if not files:
        raise HTTPException(status_code=422, detail=[{
            "loc": ["body", field],
            "msg": "At least one image is required",
            "type": "value_error",
        }])

    pages = []
    errors = []
    for index, upload in enumerate(files):
        # one byte past the limit is enough to tell it is too large
        content = await upload.read(max_bytes + 1)
        loc = ["body", field, index]
        mime_type = sniff_image_type(content)
        if mime_type is None:
            errors.append({"loc": loc, "msg": "File must be a JPEG or PNG image", "type": "value_error"})
        elif len(content) > max_bytes:
            errors.append({
                "loc": loc,
                "msg": f"Image must not be larger than {max_bytes // 1024} KB",
                "type": "value_error",
            })
        else:
            pages.append(PageImage(content=content, mime_type=mime_type, filename=upload.filename or ""))

    if errors:
        raise HTTPException(status_code=422, detail=errors)
    return pages
