import os
import time
import uuid
import logging
from contextlib import contextmanager
from flask import current_app
from werkzeug.utils import secure_filename
from portfolio.errors import UploadRejected

logger = logging.getLogger(__name__)

# upload form field -> (subdirectory, accepted kind)
UPLOAD_FIELDS = {
    'image': ('images', 'image'),
    'profileImage': ('images', 'image'),
    'pdf': ('pdfs', 'document'),
    'resume': ('resumes', 'document'),
}

# fallback when the client filename carries no usable extension
MIMETYPE_EXTENSIONS = {
    'image/jpeg': '.jpg',
    'image/jpg': '.jpg',
    'image/png': '.png',
    'image/webp': '.webp',
    'application/pdf': '.pdf',
}

def _file_size(file):
    stream = file.stream
    stream.seek(0, os.SEEK_END)
    size = stream.tell()
    stream.seek(0)
    return size

def _extension(file):
    ext = os.path.splitext(file.filename or '')[1].lower()
    if ext and secure_filename(ext) == ext.lstrip('.'):
        return ext
    return MIMETYPE_EXTENSIONS.get(file.mimetype, '')

def _unique_name(file):
    ext = _extension(file)
    return f'{int(time.time() * 1000)}-{uuid.uuid4().hex[:12]}{ext}'

def save_upload(file, field_name):
    """Validates and stores one uploaded file.

    Returns the relative path ``uploads/<subdir>/<unique-name>.<ext>``.
    """
    subdir, kind = UPLOAD_FIELDS[field_name]
    config = current_app.config

    allowed = config['ALLOWED_IMAGE_TYPES'] if kind == 'image' else config['ALLOWED_DOCUMENT_TYPES']
    if file.mimetype not in allowed:
        logger.warning(f'Rejected upload {file.filename!r} with type {file.mimetype}')
        if kind == 'image':
            raise UploadRejected('Only image files are allowed!')
        raise UploadRejected('Only PDF files are allowed!')

    if _file_size(file) > config['MAX_UPLOAD_SIZE']:
        logger.warning(f'Rejected upload {file.filename!r}: larger than {config["MAX_UPLOAD_SIZE"]} bytes')
        raise UploadRejected('File too large')

    filename = _unique_name(file)
    relative_path = f'uploads/{subdir}/{filename}'
    upload_path = os.path.join(config['UPLOAD_FOLDER'], 'uploads', subdir, filename)
    os.makedirs(os.path.dirname(upload_path), exist_ok=True)
    file.save(upload_path)
    return relative_path

def optional_upload(request, field_name):
    """Path of the stored file for ``field_name``, or None when no file was sent."""
    if field_name not in request.files:
        return None
    file = request.files[field_name]
    if not file or not file.filename:
        return None
    return save_upload(file, field_name)

def discard_upload(relative_path):
    if not relative_path:
        return
    upload_path = os.path.join(current_app.config['UPLOAD_FOLDER'], relative_path)
    try:
        os.remove(upload_path)
    except OSError as e:
        logger.error(f'Could not remove upload {relative_path}: {e}')

@contextmanager
def discard_on_error(*relative_paths):
    """Removes the stored files again when the write using them fails."""
    try:
        yield
    except Exception:
        for relative_path in relative_paths:
            discard_upload(relative_path)
        raise
