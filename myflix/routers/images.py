# myflix/routers/images.py
from typing import List

from fastapi import APIRouter, Depends, File, Path, UploadFile, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import StreamingResponse

from myflix.schemas.image import ImageObject, ImageUploaded
from myflix.services.storage_service import ImageStorage, get_storage, image_key

router = APIRouter(prefix="/images", tags=["images"])


def _key_or_422(filename: str, location: str, field: str) -> str:
    try:
        return image_key(filename)
    except ValueError as exc:
        raise RequestValidationError(
            [{"loc": (location, field), "msg": str(exc), "type": "value_error"}]
        )


@router.get(
    "",
    response_model=List[ImageObject],
    status_code=status.HTTP_200_OK,
    summary="List the images stored in the bucket",
)
def list_images(storage: ImageStorage = Depends(get_storage)):
    return storage.list_images()


@router.post(
    "",
    response_model=ImageUploaded,
    status_code=status.HTTP_201_CREATED,
)
def upload_image(
    image: UploadFile = File(...),
    storage: ImageStorage = Depends(get_storage),
):
    """
    Store the uploaded file under its base file name, replacing any object
    already stored under that key. Bytes go straight from the request to S3.
    """
    key = _key_or_422(image.filename, "body", "image")
    return storage.upload_image(key, image.file, image.content_type)


@router.get(
    "/{fileName}",
    response_class=StreamingResponse,
    status_code=status.HTTP_200_OK,
)
def get_image(
    file_name: str = Path(..., alias="fileName"),
    storage: ImageStorage = Depends(get_storage),
):
    key = _key_or_422(file_name, "path", "fileName")
    stored = storage.get_image(key)
    return StreamingResponse(
        stored.body,
        media_type=stored.content_type,
        headers={"Content-Length": str(stored.content_length)},
    )
