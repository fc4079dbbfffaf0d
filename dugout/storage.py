# Standard library imports
import base64
import os
import re

# Third-party imports
from flask import current_app, url_for
from werkzeug.utils import secure_filename

# Local application imports
from dugout.audit import audit_log_file_operation
from dugout.utils import timestamp_ms


class StorageError(Exception):
    """Raised when a file cannot be stored, found or removed."""


class InvalidSignatureError(StorageError):
    """Raised when a submitted signature is not a usable PNG data URL."""


def validate_storage_key(key, base_path):
    """
    Validate that a storage key is safe and stays within the store directory.

    Keys may contain forward-slash separated folders (``12/1700000000.pdf``).

    Args:
        key (str): The storage key to validate.
        base_path (str): The root directory of the file store.

    Returns:
        str: The validated full path if safe, None if unsafe.
    """
    if not key or '..' in key or key.startswith('/') or '\\' in key:
        return None

    full_path = os.path.normpath(os.path.join(base_path, *key.split('/')))
    root = os.path.normpath(base_path)
    if not full_path.startswith(root + os.sep):
        return None

    return full_path


def get_storage_path(key):
    """Absolute path for a storage key, or None if the key is unsafe."""
    return validate_storage_key(key, current_app.config['STORAGE_PATH'])


def file_extension(filename, default=''):
    """Lowercase extension of an uploaded file name, without the dot."""
    name = secure_filename(filename or '')
    if '.' not in name:
        return default
    return name.rsplit('.', 1)[1].lower()


def save_bytes(data, key):
    """
    Write raw bytes to the file store.

    Returns:
        str: The storage key that was written.

    Raises:
        StorageError: If the key is unsafe or the write fails.
    """
    path = get_storage_path(key)
    if not path:
        raise StorageError(f'Invalid storage key: {key}')

    try:
        os.makedirs(os.path.dirname(path), exist_ok=True)
        with open(path, 'wb') as fh:
            fh.write(data)
    except OSError as e:
        raise StorageError(f'Could not store {key}: {e}') from e

    audit_log_file_operation('UPLOAD', key, f'Stored {len(data)} bytes')
    return key


def save_upload(file_storage, key):
    """Store a werkzeug ``FileStorage`` upload under ``key``."""
    path = get_storage_path(key)
    if not path:
        raise StorageError(f'Invalid storage key: {key}')

    try:
        os.makedirs(os.path.dirname(path), exist_ok=True)
        file_storage.save(path)
    except OSError as e:
        raise StorageError(f'Could not store {key}: {e}') from e

    audit_log_file_operation('UPLOAD', key, f'Stored upload {file_storage.filename}')
    return key


def delete_file(key):
    """Remove a stored file. Missing files are ignored."""
    path = get_storage_path(key)
    if not path:
        raise StorageError(f'Invalid storage key: {key}')

    if os.path.exists(path):
        try:
            os.remove(path)
        except OSError as e:
            raise StorageError(f'Could not delete {key}: {e}') from e
        audit_log_file_operation('DELETE', key, 'Removed stored file')
    else:
        current_app.logger.warning(f"Stored file already missing: {key}")


def read_bytes(key):
    """Contents of a stored file, or None if it does not exist."""
    path = get_storage_path(key)
    if not path or not os.path.exists(path):
        return None
    with open(path, 'rb') as fh:
        return fh.read()


def file_url(key, external=False):
    """URL that serves a stored file."""
    if not key:
        return None
    return url_for('main.serve_file', key=key, _external=external)


def document_key(tournament_id, filename):
    """Storage key for a tournament document: ``<tournament_id>/<timestamp>.<ext>``."""
    ext = file_extension(filename, default='bin')
    return f"{tournament_id}/{timestamp_ms()}.{ext}"


def tournament_image_key(tournament_id, filename):
    """Storage key for a tournament banner image."""
    ext = file_extension(filename, default='png')
    return f"tournament-images/tournament-{tournament_id}-{timestamp_ms()}.{ext}"


def signature_key(invitation_id):
    """Storage key for a signature image."""
    return f"signatures/{invitation_id}_{timestamp_ms()}.png"


_DATA_URL_RE = re.compile(r'^data:image/png;base64,(?P<data>[A-Za-z0-9+/=\s]+)$')


def decode_png_data_url(data_url):
    """
    Decode a ``data:image/png;base64,...`` URL produced by a signature pad.

    Raises:
        InvalidSignatureError: If the value is not a PNG data URL.
    """
    match = _DATA_URL_RE.match((data_url or '').strip())
    if not match:
        raise InvalidSignatureError('Signature must be a PNG image')
    try:
        data = base64.b64decode(match.group('data'), validate=False)
    except (ValueError, TypeError) as e:
        raise InvalidSignatureError('Signature image could not be decoded') from e
    if not data.startswith(b'\x89PNG'):
        raise InvalidSignatureError('Signature must be a PNG image')
    return data
