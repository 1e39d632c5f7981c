from fastapi import APIRouter, Query
from fastapi.responses import StreamingResponse
from urllib.parse import quote
import io
import re

from dependencies.portfolio import PortfolioServiceDep

router = APIRouter()

# Anything that could end the quoted filename or split the header
_UNSAFE_FILENAME_CHARS = re.compile(r'[\x00-\x1f\x7f"\;]')

def content_disposition(disposition: str, filename: str) -> str:
    """Header value with an ASCII fallback name and the RFC 5987 encoded original"""
    fallback = _UNSAFE_FILENAME_CHARS.sub("_", filename).encode("ascii", "replace").decode("ascii")
    fallback = fallback.replace("?", "_") or "file"
    return f"{disposition}; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename, safe='')}"

@router.get("/files/{file_id}")
async def get_file(
    file_id: str,
    portfolio_service: PortfolioServiceDep,
    download: bool = Query(False, description="Set to true to download the file instead of viewing it")
):
    """Serve an uploaded avatar, CV or portfolio file"""
    stored, content = await portfolio_service.get_file_content(file_id)

    return StreamingResponse(
        io.BytesIO(content),
        media_type=stored.file_type,
        headers={
            "Content-Disposition": content_disposition("attachment" if download else "inline", stored.filename),
            "Content-Length": str(len(content)),
        }
    )
