# myflix/schemas/image.py
from datetime import datetime
from typing import Optional

from pydantic import BaseModel


# field names mirror the S3 ListObjectsV2 / PutObject response keys
class ImageObject(BaseModel):
    Key: str
    Size: Optional[int] = None
    LastModified: Optional[datetime] = None
    ETag: Optional[str] = None


class ImageUploaded(BaseModel):
    Key: str
    ETag: Optional[str] = None
