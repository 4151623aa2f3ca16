"""Blob transport - embed uploaded files as self-describing data strings.

A blob has the form ``data:<mime-type>;base64,<payload>``. Anything that does
not start with ``data:`` is treated as an external link.
"""
import base64
import binascii
import mimetypes
import re
from collections import namedtuple

from design_tracker.services.errors import PayloadTooLarge, ValidationError

MAX_UPLOAD_BYTES = 15 * 1024 * 1024  # 15 MiB, measured before encoding
DEFAULT_MIME_TYPE = 'application/octet-stream'

IMAGE_LINK_RE = re.compile(r'\.(jpeg|jpg|gif|png|webp)$', re.IGNORECASE)

Upload = namedtuple('Upload', ['filename', 'data'])


def check_upload_size(size):
    """Raise PayloadTooLarge unless size is below the upload ceiling."""
    if size >= MAX_UPLOAD_BYTES:
        raise PayloadTooLarge('File too large (max 15MB).')


def is_blob(ref):
    return bool(ref) and ref.startswith('data:')


def encode_blob(data, filename=None):
    """Encode raw bytes as a data string, tagged with the guessed mime type."""
    check_upload_size(len(data))
    mime_type = None
    if filename:
        mime_type, _ = mimetypes.guess_type(filename)
    mime_type = mime_type or DEFAULT_MIME_TYPE
    payload = base64.b64encode(data).decode('ascii')
    return f'data:{mime_type};base64,{payload}'


def decode_blob(blob):
    """
    Decode a data string back into its parts.

    Returns:
        (mime_type, bytes)

    Raises:
        ValidationError if the string is not a well-formed base64 blob.
    """
    if not is_blob(blob):
        raise ValidationError('Not an embedded file.')
    header, sep, payload = blob.partition(',')
    if not sep or not header.endswith(';base64'):
        raise ValidationError('Embedded file is not base64 encoded.')
    mime_type = header[len('data:'):-len(';base64')].split(';')[0] or DEFAULT_MIME_TYPE
    try:
        data = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError):
        raise ValidationError('Embedded file is corrupt.')
    return mime_type, data


def blob_mime_type(ref):
    if not is_blob(ref):
        return None
    header = ref.partition(',')[0]
    return header[len('data:'):].split(';')[0] or DEFAULT_MIME_TYPE


def blob_kind(ref):
    """Classify a reference as 'image', 'pdf' or 'other' for previews."""
    if not ref:
        return 'other'
    mime_type = blob_mime_type(ref)
    if mime_type is not None:
        if mime_type.startswith('image/'):
            return 'image'
        if mime_type == 'application/pdf':
            return 'pdf'
        return 'other'
    if IMAGE_LINK_RE.search(ref):
        return 'image'
    if ref.lower().endswith('.pdf'):
        return 'pdf'
    return 'other'


def suggest_filename(ref, label='file', stored_name=None):
    """
    Pick a download name for a blob.

    The stored file name wins when it carries an extension; otherwise the
    extension is derived from the blob's mime type.
    """
    if stored_name and '.' in stored_name:
        return stored_name
    mime_type = blob_mime_type(ref) or DEFAULT_MIME_TYPE
    extension = mimetypes.guess_extension(mime_type) or '.bin'
    return f'{label}{extension}'
