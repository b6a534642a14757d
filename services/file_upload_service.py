from typing import List, Tuple
from fastapi import UploadFile


def read_upload(file: UploadFile) -> Tuple[str, bytes]:
    """
    Read an uploaded file fully into memory.
    Uploads are never written to disk; the bytes live only for the decode.
    """
    return file.filename or "", file.file.read()


def read_uploads(files: List[UploadFile]) -> List[Tuple[str, bytes]]:
    return [read_upload(f) for f in files]
