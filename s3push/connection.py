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
Upload client for S3 compatible object storage.

Keys must not start with a ``/``::

    conn = S3Connection(access_key_id, secret_access_key, 'my-bucket')
    handle = conn.upload_data(b'hello', 'greetings/hello.txt',
                              content_type='text/plain',
                              options=UploadOptions(secure=True))
    error = handle.wait()

An :class:`S3Connection` runs at most one transfer at a time. Starting an
upload while another one is still in flight cancels the earlier one; its
callback then receives :class:`s3push.common.exceptions.TransferCancelled`.
"""

from s3push.common.utils import config_port_value, get_logger
from s3push.options import Credentials, UploadOptions
from s3push.request import DEFAULT_STORAGE_HOST, UploadRequest
from s3push.transfer import TransferController
from s3push.transport import HTTPTransport


class S3Connection(object):
    """
    :param access_key_id: access key id
    :param secret_access_key: secret access key
    :param bucket: bucket every upload goes to
    :param storage_host: service host; the bucket is prepended to it
    :param port: optional TCP port
    :param transport: transport to send requests with
    :param logger: logger to use
    """

    def __init__(self, access_key_id, secret_access_key, bucket,
                 storage_host=DEFAULT_STORAGE_HOST, port=None,
                 transport=None, logger=None):
        self._credentials = Credentials(access_key_id, secret_access_key)
        self._bucket = bucket
        self.logger = logger or get_logger({}, log_route='s3push')
        self._controller = TransferController(
            self._credentials, transport=transport,
            storage_host=storage_host, port=port, logger=self.logger)
        self._current = None

    @classmethod
    def from_conf(cls, conf, logger=None):
        """
        Build a connection from a config dict, e.g. the ``[s3push]`` section
        read with :func:`s3push.common.utils.readconf`.
        """
        return cls(conf.get('access_key_id'), conf.get('secret_access_key'),
                   conf.get('bucket'),
                   storage_host=conf.get('storage_host') or
                   DEFAULT_STORAGE_HOST,
                   port=config_port_value(conf.get('storage_port')),
                   transport=HTTPTransport.from_conf(conf),
                   logger=logger or get_logger(conf, log_route='s3push'))

    @property
    def credentials(self):
        return self._credentials

    @property
    def access_key_id(self):
        return self._credentials.access_key_id

    @property
    def bucket(self):
        return self._bucket

    @property
    def current_transfer(self):
        """The in-flight :class:`TransferHandle`, or None."""
        if self._current is not None and not self._current.active:
            self._current = None
        return self._current

    def cancel_current_transfer(self):
        """
        Cancel the transfer this connection has in flight, if any.

        :returns: True if a transfer was cancelled
        """
        current, self._current = self._current, None
        if current is None:
            return False
        return current.cancel()

    def _start(self, upload_request, callback):
        if self.cancel_current_transfer():
            self.logger.info('Replaced in-flight upload with %s',
                             upload_request.key)
        handle = self._controller.start(upload_request, callback)
        if handle.active:
            self._current = handle
        return handle

    def upload_data(self, data, key, content_type=None, options=None,
                    callback=None, headers=None):
        """
        Upload ``data`` to ``key``.

        :param data: bytes to upload
        :param key: object key, must not start with '/'
        :param content_type: Content-Type; guessed from the key if not given
        :param options: :class:`s3push.options.UploadOptions`
        :param callback: called once as ``callback(error)``
        :param headers: extra headers to send
        :returns: a :class:`s3push.transfer.TransferHandle`
        """
        return self._start(UploadRequest(
            self._bucket, key, payload=data, content_type=content_type,
            headers=headers, options=options), callback)

    def upload_file(self, path, key, options=None, callback=None,
                    headers=None, content_type=None):
        """
        Upload the file at ``path`` to ``key``. The whole file is read into
        memory; the content type is guessed from the file name unless given.

        :returns: a :class:`s3push.transfer.TransferHandle`
        """
        return self._start(UploadRequest.from_file(
            self._bucket, key, path, content_type=content_type,
            headers=headers, options=options), callback)

    def __repr__(self):
        return '<%s %s bucket=%s>' % (self.__class__.__name__,
                                      self.access_key_id, self._bucket)


def _controller(access_key_id, secret_access_key, storage_host, port,
                transport, logger):
    return TransferController(
        Credentials(access_key_id, secret_access_key), transport=transport,
        storage_host=storage_host, port=port, logger=logger)


def upload_data(data, bucket, key, content_type, access_key_id,
                secret_access_key, options=None, callback=None, headers=None,
                storage_host=DEFAULT_STORAGE_HOST, port=None, transport=None,
                logger=None):
    """
    One-shot upload of ``data``; no :class:`S3Connection` needed and no
    state shared with any other upload.

    :returns: a :class:`s3push.transfer.TransferHandle`
    """
    return _controller(
        access_key_id, secret_access_key, storage_host, port, transport,
        logger).start(UploadRequest(
            bucket, key, payload=data, content_type=content_type,
            headers=headers, options=options), callback)


def upload_file(path, bucket, key, access_key_id, secret_access_key,
                options=None, callback=None, headers=None, content_type=None,
                storage_host=DEFAULT_STORAGE_HOST, port=None, transport=None,
                logger=None):
    """
    One-shot upload of the file at ``path``.

    :returns: a :class:`s3push.transfer.TransferHandle`
    """
    return _controller(
        access_key_id, secret_access_key, storage_host, port, transport,
        logger).start(UploadRequest.from_file(
            bucket, key, path, content_type=content_type, headers=headers,
            options=options), callback)


__all__ = ['S3Connection', 'UploadOptions', 'upload_data', 'upload_file']
