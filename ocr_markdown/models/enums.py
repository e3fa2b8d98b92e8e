from enum import Enum


class PipelineStep(str, Enum):
    UPLOAD = "file upload"
    SIGNED_URL = "get signed URL"
    OCR = "OCR processing"
    DELETE = "file delete"
