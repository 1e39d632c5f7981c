# Object storage helpers for avatars, CVs and portfolio files
from typing import Any, Dict, Tuple
from fastapi import HTTPException, status
from minio import Minio
from minio.error import S3Error
from PIL import Image, UnidentifiedImageError
import io
import os
import uuid

from config import settings
from logger.logger import logger
from models.enums import UploadKind

# Content types accepted for each kind of upload
ALLOWED_CONTENT_TYPES = {
    UploadKind.AVATAR: ("image/",),
    UploadKind.CV: (
        "application/pdf",
        "application/msword",
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    ),
    UploadKind.PORTFOLIO: (
        "image/",
        "video/",
        "application/pdf",
        "application/msword",
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    ),
}

# Avatars are small on every screen they show up on
AVATAR_MAX_SIZE = (512, 512)

def validate_upload(kind: UploadKind, content_type: str, size: int) -> None:
    """Reject files of the wrong type or over the size limit before storing anything"""
    allowed = ALLOWED_CONTENT_TYPES[kind]
    if not content_type or not any(
        content_type.startswith(prefix) if prefix.endswith("/") else content_type == prefix
        for prefix in allowed
    ):
        raise HTTPException(
            status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
            detail=f"File type '{content_type}' is not allowed for {kind.value} uploads"
        )

    max_bytes = settings.MAX_UPLOAD_SIZE_MB * 1024 * 1024
    if size > max_bytes:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"File exceeds the {settings.MAX_UPLOAD_SIZE_MB} MB limit"
        )
    if size == 0:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="File is empty")

def process_image(image_data: bytes, max_size: Tuple[int, int] = AVATAR_MAX_SIZE, quality: int = 85) -> Tuple[bytes, str]:
    """
    Shrink an image to fit max_size and convert it to WebP

    Returns:
        Tuple of (processed_image_bytes, content_type)
    """
    try:
        image = Image.open(io.BytesIO(image_data))

        # Flatten transparency onto a white background
        if image.mode in ('RGBA', 'LA'):
            background = Image.new('RGB', image.size, (255, 255, 255))
            background.paste(image, mask=image.split()[-1])
            image = background
        elif image.mode != 'RGB':
            image = image.convert('RGB')

        if image.size[0] > max_size[0] or image.size[1] > max_size[1]:
            image.thumbnail(max_size, Image.Resampling.LANCZOS)

        output = io.BytesIO()
        image.save(output, format='WEBP', quality=quality, method=6)
        return output.getvalue(), 'image/webp'
    except (UnidentifiedImageError, OSError) as e:
        logger.error(f"[Image Processing] Error processing image: {e}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Uploaded file is not a readable image"
        )

def upload_to_minio(
    data: bytes,
    filename: str,
    content_type: str,
    minio_client: Minio,
    folder: str,
    convert_images: bool = False,
) -> Dict[str, Any]:
    """
    Upload data to the bucket under folder/<uuid>.<ext>

    Returns:
        Dict with file metadata and MinIO information
    """
    if convert_images and content_type.startswith('image/'):
        data, content_type = process_image(data)
        filename = os.path.splitext(filename)[0] + '.webp'

    file_id = str(uuid.uuid4())
    file_extension = os.path.splitext(filename)[1].lstrip('.').lower() or "bin"
    object_name = f"{folder}/{file_id}.{file_extension}"

    try:
        minio_client.put_object(
            bucket_name=settings.MINIO_BUCKET,
            object_name=object_name,
            data=io.BytesIO(data),
            length=len(data),
            content_type=content_type
        )
    except S3Error as e:
        logger.error(f"[MinIO Upload] Error uploading {object_name}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to upload file"
        )
    logger.info(f"[MinIO Upload] Stored {object_name} ({len(data)} bytes)")

    return {
        "file_id": file_id,
        "filename": filename,
        "file_type": content_type,
        "file_extension": file_extension,
        "size": len(data),
        "object_name": object_name,
    }

def read_from_minio(minio_client: Minio, object_name: str) -> bytes:
    response = None
    try:
        response = minio_client.get_object(settings.MINIO_BUCKET, object_name)
        return response.read()
    except S3Error as e:
        logger.error(f"[MinIO Read] Error reading {object_name}: {e}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="File content not found")
    finally:
        if response is not None:
            response.close()
            response.release_conn()

def remove_from_minio(minio_client: Minio, object_name: str) -> None:
    """Remove an object; a missing object only gets logged"""
    try:
        minio_client.remove_object(settings.MINIO_BUCKET, object_name)
    except S3Error as e:
        logger.warning(f"[MinIO Remove] Could not remove {object_name}: {e}")
