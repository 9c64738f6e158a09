import uuid

ALLOWED_EXTENSIONS = {
    # images
    'jpeg', 'jpg', 'png', 'gif', 'webp',
    # video
    'mp4', 'webm', 'ogg',
    # documents
    'pdf',
}

CONTENT_TYPES = {
    'jpeg': 'image/jpeg',
    'jpg': 'image/jpeg',
    'png': 'image/png',
    'gif': 'image/gif',
    'webp': 'image/webp',
    'mp4': 'video/mp4',
    'webm': 'video/webm',
    'ogg': 'video/ogg',
    'pdf': 'application/pdf',
}


def file_extension(filename):
    if not filename or '.' not in filename:
        return None
    return filename.rsplit('.', 1)[1].lower()


def allowed_file(filename):
    return file_extension(filename) in ALLOWED_EXTENSIONS


def guess_content_type(filename, declared=None):
    if declared and declared != 'application/octet-stream':
        return declared
    return CONTENT_TYPES.get(file_extension(filename), 'application/octet-stream')


def random_filename(filename):
    """Randomized storage name that keeps the original extension."""
    # Extension comes from the raw name; only ASCII alphanumerics survive
    ext = file_extension(filename)
    if ext and not (ext.isascii() and ext.isalnum()):
        ext = None
    return f"{uuid.uuid4().hex}.{ext}" if ext else uuid.uuid4().hex


def storage_path(page_id, filename):
    return f"{page_id}/{random_filename(filename)}"
