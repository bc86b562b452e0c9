# landscape/services/encoder.py
import base64
import logging
from dataclasses import dataclass
from typing import Optional

from fastapi import UploadFile
from fastapi.concurrency import run_in_threadpool

from landscape.errors import PayloadTooLarge, UnsupportedMediaType

logger = logging.getLogger(__name__)

DEFAULT_MAX_BYTES = 5 * 1024 * 1024


@dataclass(frozen=True)
class ReferenceImage:
    filename: str
    content_type: str
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)


def check_reference(content_type: Optional[str], size: Optional[int], max_bytes: int = DEFAULT_MAX_BYTES) -> None:
    """Media-type and size checks, done at the point of input."""
    if not content_type or not content_type.startswith("image/"):
        raise UnsupportedMediaType("Please upload an image file (JPEG, PNG, etc.)")
    if size is not None and size > max_bytes:
        raise PayloadTooLarge(f"File too large — maximum {max_bytes // (1024 * 1024)}MB")


async def read_upload(upload: UploadFile, max_bytes: int = DEFAULT_MAX_BYTES) -> ReferenceImage:
    check_reference(upload.content_type, upload.size, max_bytes)
    data = await upload.read()
    # upload.size is not always known up front
    check_reference(upload.content_type, len(data), max_bytes)
    return ReferenceImage(filename=upload.filename or "reference", content_type=upload.content_type, data=data)


def to_data_uri(image: ReferenceImage) -> str:
    return f"data:{image.content_type};base64,{base64.b64encode(image.data).decode('ascii')}"


async def encode_reference(image: ReferenceImage) -> str:
    """Base64 body of the image's data URI, header stripped."""
    data_uri = await run_in_threadpool(to_data_uri, image)
    logger.debug("Encoded reference %s (%d bytes)", image.filename, image.size)
    return data_uri.split(",", 1)[1]
