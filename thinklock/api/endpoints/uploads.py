# ==============================================================================
# UPLOAD ENDPOINTS - Profile & Course Images
# ==============================================================================
# Multipart image uploads forwarded to ImageKit
# ==============================================================================

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, File, UploadFile

from thinklock.api.dependencies import ImageStorageDep, InstructorGuard
from thinklock.clients.image_storage import ImageStorage
from thinklock.core.constants import ImageFolders
from thinklock.core.exceptions import ValidationError
from thinklock.schemas.base import APIResponse

router = APIRouter(tags=["Uploads"])


async def _upload_image(
    storage: ImageStorage,
    upload: UploadFile,
    folder: str,
    field: str,
) -> Dict[str, Any]:
    if not (upload.content_type or "").startswith("image/"):
        raise ValidationError(
            message="Only image uploads are accepted",
            errors={field: upload.content_type},
        )
    content = await upload.read()
    if not content:
        raise ValidationError(message="Uploaded file is empty", errors={field: "empty"})
    return await storage.upload(
        content,
        upload.filename or field,
        folder,
        content_type=upload.content_type,
    )


@router.post(
    "/users/upload-ui",
    response_model=APIResponse[Dict[str, Any]],
    summary="Upload profile image",
)
async def upload_user_image(
    storage: ImageStorageDep,
    user_img: UploadFile = File(..., alias="userImg"),
) -> APIResponse[Dict[str, Any]]:
    result = await _upload_image(storage, user_img, ImageFolders.USERS, "userImg")
    return APIResponse.ok(data=result, message="Image uploaded")


@router.post(
    "/new-course/upload-ci",
    response_model=APIResponse[Dict[str, Any]],
    dependencies=[InstructorGuard],
    summary="Upload course image",
)
async def upload_course_image(
    storage: ImageStorageDep,
    course_img: UploadFile = File(..., alias="courseImg"),
) -> APIResponse[Dict[str, Any]]:
    result = await _upload_image(storage, course_img, ImageFolders.COURSES, "courseImg")
    return APIResponse.ok(data=result, message="Image uploaded")
