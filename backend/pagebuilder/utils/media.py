import os
import uuid
from typing import List
from werkzeug.datastructures import FileStorage, MultiDict
from werkzeug.utils import secure_filename
from flask import current_app

from pagebuilder.domain.exceptions import InvalidUpload
from pagebuilder.domain.uploads import UPLOAD_FOLDER, UploadedFile

IMAGE_EXTENSIONS = {'jpg', 'jpeg', 'png', 'gif', 'webp'}
VIDEO_EXTENSIONS = {'mp4', 'webm', 'ogg', 'avi', 'mov'}
ALLOWED_EXTENSIONS = IMAGE_EXTENSIONS | VIDEO_EXTENSIONS

def _extension(filename):
    return filename.rsplit('.', 1)[1].lower() if '.' in filename else ''

def allowed_file(filename):
    return _extension(filename) in ALLOWED_EXTENSIONS

def get_file_type(filename):
    ext = _extension(filename)
    if ext in IMAGE_EXTENSIONS:
        return 'image'
    if ext in VIDEO_EXTENSIONS:
        return 'video'
    return 'file'

def upload_dir():
    return os.path.join(current_app.config['MEDIA_ROOT'], UPLOAD_FOLDER)

def save_file(file: FileStorage, field_name: str) -> UploadedFile:
    """
    Stores an uploaded file as <name>-<uuid>.<ext> inside the uploads folder.
    """
    if not file.filename or not allowed_file(file.filename):
        raise InvalidUpload("Only image and video files are allowed!")

    filename = secure_filename(file.filename)
    stem, ext = filename.rsplit('.', 1)[0], _extension(filename)
    unique_filename = f"{stem or 'upload'}-{uuid.uuid4().hex}.{ext}"

    folder = upload_dir()
    os.makedirs(folder, exist_ok=True)
    file.save(os.path.join(folder, unique_filename))
    current_app.logger.debug(f"Stored upload {file.filename} as {unique_filename}")

    return UploadedFile(
        field_name=field_name,
        filename=unique_filename,
        original_name=file.filename,
    )

def save_request_files(files: MultiDict) -> List[UploadedFile]:
    """
    Stores every file part of a multipart request. If one part is rejected,
    the parts already written are removed before the error propagates.
    """
    saved: List[UploadedFile] = []
    try:
        for field_name, storage in files.items(multi=True):
            saved.append(save_file(storage, field_name))
    except InvalidUpload:
        for upload in saved:
            _remove_quietly(os.path.join(upload_dir(), upload.filename))
        raise
    return saved

def _remove_quietly(file_path):
    try:
        os.remove(file_path)
    except OSError as e:
        current_app.logger.error(f"Failed to delete file {file_path}: {e}")
