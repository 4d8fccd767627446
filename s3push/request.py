# Copyright (c) 2026 The s3push Authors
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#    http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or
# implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Turns an upload into a signed, ready to send ``PUT`` request.
"""

import logging
import mimetypes
import os
import time

from s3push.common.compression import compress, is_gzipped
from s3push.common.exceptions import ConfigurationError, UploadIOError
from s3push.common.header_key_dict import HeaderKeyDict
from s3push.common.utils import http_date, md5_b64, quote
from s3push.options import DEFAULT_OPTIONS
from s3push.signature import canonical_string, sign

DEFAULT_STORAGE_HOST = 's3.amazonaws.com'
DEFAULT_CONTENT_TYPE = 'application/octet-stream'

# headers computed for every request; callers cannot override these
PROTECTED_HEADERS = frozenset((
    'authorization', 'date', 'content-type', 'content-md5',
    'content-length', 'host'))
# optional computed headers; an extra header only fills in when the
# options did not produce one
OPTIONAL_HEADERS = frozenset((
    'content-encoding', 'cache-control', 'x-amz-storage-class'))


def guess_content_type(filename):
    """
    Content type for ``filename`` from its extension, falling back to
    ``application/octet-stream``.
    """
    if filename:
        guessed_type, _junk = mimetypes.guess_type(filename)
        if guessed_type:
            return guessed_type
    return DEFAULT_CONTENT_TYPE


class UploadRequest(object):
    """
    One object to upload.

    :param bucket: destination bucket
    :param key: object key; must not start with '/'
    :param payload: the object body as bytes, or None for file uploads
    :param content_type: Content-Type; guessed when not given
    :param headers: extra headers, a mapping or list of (name, value)
                    pairs, sent in the given order and case
    :param options: :class:`s3push.options.UploadOptions`
    :param path: local file to read the body from instead of ``payload``
    """

    def __init__(self, bucket, key, payload=None, content_type=None,
                 headers=None, options=None, path=None):
        self.bucket = bucket
        self.key = key
        self.payload = payload
        self.content_type = content_type
        if headers is None:
            headers = []
        elif hasattr(headers, 'items'):
            headers = list(headers.items())
        self.headers = list(headers)
        self.options = options or DEFAULT_OPTIONS
        self.path = path

    @classmethod
    def from_file(cls, bucket, key, path, **kwargs):
        return cls(bucket, key, path=path, **kwargs)

    def validate(self):
        """
        :raises ConfigurationError: for a missing bucket or key, or a key
                                    starting with '/'
        """
        if not self.bucket:
            raise ConfigurationError('Missing bucket name')
        if not self.key:
            raise ConfigurationError('Missing object key')
        if self.key.startswith('/'):
            raise ConfigurationError(
                'Object key must not start with "/": %r' % self.key)
        if self.payload is None and self.path is None:
            raise ConfigurationError('Nothing to upload for %r' % self.key)

    def read_body(self):
        """
        The raw body: the payload, or the whole file read into memory.

        :raises ConfigurationError: if the payload is not bytes or str
        :raises UploadIOError: if the file cannot be read
        """
        if self.path is None:
            if isinstance(self.payload, str):
                return self.payload.encode('utf-8')
            if not isinstance(self.payload, (bytes, bytearray, memoryview)):
                raise ConfigurationError(
                    'Payload must be bytes or str, not %s' %
                    type(self.payload).__name__)
            return bytes(self.payload)
        try:
            with open(self.path, 'rb') as fp:
                return fp.read()
        except (IOError, OSError) as err:
            raise UploadIOError('Unable to read %s: %s' % (
                self.path, err.strerror or err), path=self.path,
                errno=err.errno)

    def resolve_content_type(self):
        if self.content_type:
            return self.content_type
        filename = self.path and os.path.basename(self.path)
        return guess_content_type(filename or self.key)

    def __repr__(self):
        return '<%s %s/%s>' % (self.__class__.__name__, self.bucket,
                               self.key)


class PreparedRequest(object):
    """
    Everything the transport needs to send one request.
    """

    def __init__(self, method, scheme, host, port, path, headers, body):
        self.method = method
        self.scheme = scheme
        self.host = host
        self.port = port
        self.path = path
        self.headers = HeaderKeyDict(headers)
        self.body = body

    @property
    def ssl(self):
        return self.scheme == 'https'

    @property
    def url(self):
        netloc = self.host
        if self.port:
            netloc = '%s:%s' % (self.host, self.port)
        return '%s://%s%s' % (self.scheme, netloc, self.path)

    def __repr__(self):
        return '<%s %s %s>' % (self.__class__.__name__, self.method,
                               self.url)


def _merge_extra_headers(headers, extra_headers, logger):
    computed = set(name.lower() for name in headers)
    for name, value in extra_headers:
        lower = name.lower()
        if lower in PROTECTED_HEADERS or (
                lower in OPTIONAL_HEADERS and lower in computed):
            logger.warning('Ignoring extra header %s; it would replace a '
                           'computed value', name)
            continue
        if name in headers:
            # same extra header given twice; S3 folds them with commas
            headers[name] = '%s,%s' % (headers[name], value)
        else:
            headers[name] = value


def build_request(upload_request, credentials,
                  storage_host=DEFAULT_STORAGE_HOST, port=None, now=None,
                  logger=None):
    """
    Build and sign the ``PUT`` for ``upload_request``.

    The Date header and the string to sign share one timestamp.

    :param upload_request: an :class:`UploadRequest`
    :param credentials: a :class:`s3push.options.Credentials`
    :param storage_host: service host; the bucket is prepended to it
    :param port: optional TCP port
    :param now: unix time to sign with; defaults to the current time
    :param logger: logger for warnings about dropped headers
    :returns: a :class:`PreparedRequest`
    :raises ConfigurationError: for a bad key/bucket or missing credentials
    :raises UploadIOError: if a file payload cannot be read
    :raises SigningError: if signing fails
    """
    logger = logger or logging.getLogger(__name__)
    upload_request.validate()
    credentials.validate()
    options = upload_request.options

    body = upload_request.read_body()
    content_type = upload_request.resolve_content_type()

    headers = HeaderKeyDict()
    if options.detect_gzip:
        if not is_gzipped(body):
            body = compress(body)
        headers['Content-Encoding'] = 'gzip'
    if options.cache_conflict:
        logger.warning('Both no_cache and permanent_cache set for %s; '
                       'sending no-cache', upload_request.key)
    headers['Cache-Control'] = options.cache_control
    headers['x-amz-storage-class'] = options.storage_class
    _merge_extra_headers(headers, upload_request.headers, logger)

    content_md5 = md5_b64(body)
    date = http_date(time.time() if now is None else now)
    string_to_sign = canonical_string(
        'PUT', content_md5, content_type, date, headers.items(),
        upload_request.bucket, upload_request.key)
    authorization = sign(string_to_sign, credentials)

    signed_headers = HeaderKeyDict([
        ('Date', date),
        ('Content-Type', content_type),
        ('Content-MD5', content_md5),
        ('Content-Length', len(body)),
        ('Authorization', authorization),
    ])
    signed_headers.update(headers)
    return PreparedRequest(
        'PUT', options.scheme,
        '%s.%s' % (upload_request.bucket, storage_host), port,
        '/' + quote(upload_request.key), signed_headers, body)
