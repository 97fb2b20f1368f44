import logging
import uuid

from fastapi import APIRouter, Depends, File, UploadFile

from coffeelog.core.auth import require_user_id
from coffeelog.core.exceptions import ValidationError
from coffeelog.domains.social.schemas import UploadResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/uploads", tags=["uploads"])

ALLOWED_IMAGE_TYPES = {"image/jpeg", "image/png", "image/webp", "image/gif"}
MAX_IMAGE_SIZE = 5 * 1024 * 1024

# Файлы не сохраняются: клиент получает адрес заглушки
PLACEHOLDER_IMAGE_URL = "https://via.placeholder.com/400x300"


@router.post("/image", response_model=UploadResponse)
async def upload_image(
    file: UploadFile = File(...),
    user_id: uuid.UUID = Depends(require_user_id)
):
    """Проверка изображения для поста"""
    if file.content_type not in ALLOWED_IMAGE_TYPES:
        raise ValidationError("Only JPG, PNG, WebP and GIF images are supported")

    # Читаем на байт больше лимита, чтобы не держать в памяти весь файл
    data = await file.read(MAX_IMAGE_SIZE + 1)
    if len(data) > MAX_IMAGE_SIZE:
        raise ValidationError("Image must be 5MB or smaller")

    logger.info(f"User {user_id} uploaded {file.filename} ({len(data)} bytes)")
    return UploadResponse(url=PLACEHOLDER_IMAGE_URL)
