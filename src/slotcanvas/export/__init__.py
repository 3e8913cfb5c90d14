"""Export: still images, frame sequences, and uploaders."""

from .driver import (
    Frame,
    create_slug,
    encode_image,
    export_filename,
    export_preset,
    export_session_still,
    export_still,
    iter_frames,
)
from .uploaders import DirectoryUploader, UploadResult, Uploader

__all__ = [
    "DirectoryUploader",
    "Frame",
    "UploadResult",
    "Uploader",
    "create_slug",
    "encode_image",
    "export_filename",
    "export_preset",
    "export_session_still",
    "export_still",
    "iter_frames",
]
