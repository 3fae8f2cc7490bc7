import logging
import os
import shutil
import uuid
from typing import Any, Optional
from fastapi import APIRouter, Depends, UploadFile, File

from app.core.config import settings
from app.helpers.enums import UserRole
from app.helpers.exception_handler import CustomException, ValidationError
from app.helpers.login_manager import PermissionRequired
from app.schemas.sche_base import DataResponse
from app.schemas.sche_user import Principal

logger = logging.getLogger(__name__)
router = APIRouter()

ALLOWED_IMAGE_EXTENSIONS = {'png', 'jpg', 'jpeg', 'gif', 'webp'}
MEDICATION_UPLOAD_FOLDER = 'medication'


def validate_file_extension(filename: Optional[str]) -> Optional[str]:
    if not filename or '.' not in filename:
        return None
    ext = filename.rsplit('.', 1)[-1].lower()
    return ext if ext in ALLOWED_IMAGE_EXTENSIONS else None


@router.post("", response_model=DataResponse[str])
def upload_medication_photo(
    file: UploadFile = File(...),
    principal: Principal = Depends(PermissionRequired(UserRole.CLINICIAN))
) -> Any:
    """
    Store a medication photo and return the relative path to use as ``photo_ref``.
    """
    file_extension = validate_file_extension(file.filename)
    if not file_extension:
        raise ValidationError(message="File type not allowed. Only images are supported.")

    upload_path = os.path.join(settings.UPLOAD_DIR, MEDICATION_UPLOAD_FOLDER)
    new_filename = f"Medication_{uuid.uuid4().hex}.{file_extension}"
    try:
        os.makedirs(upload_path, exist_ok=True)
        with open(os.path.join(upload_path, new_filename), "wb") as buffer:
            shutil.copyfileobj(file.file, buffer)
    except OSError as e:
        logger.error(f"Failed to store upload {file.filename}: {str(e)}", exc_info=True)
        raise CustomException(http_code=500, code='500', message='Failed to store file')

    logger.info(f"Clinician {principal.id} uploaded {new_filename}")
    return DataResponse().success_response(data=f"/static/uploads/{MEDICATION_UPLOAD_FOLDER}/{new_filename}")
