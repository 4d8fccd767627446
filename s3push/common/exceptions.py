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

from eventlet import Timeout


class S3PushException(Exception):
    """
    Base class for every error delivered to an upload's completion
    callback. ``domain`` names the category of the failure.
    """
    domain = 's3push'

    def __init__(self, msg=''):
        super(S3PushException, self).__init__(msg)
        self.msg = msg

    def __str__(self):
        return self.msg


class ConfigurationError(S3PushException):
    domain = 'configuration'


class UploadIOError(S3PushException):
    domain = 'io'

    def __init__(self, msg, path=None, errno=None):
        super(UploadIOError, self).__init__(msg)
        self.path = path
        self.errno = errno


class SigningError(S3PushException):
    domain = 'signing'


class TransportError(S3PushException):
    domain = 'transport'


class TransferCancelled(S3PushException):
    domain = 'cancelled'

    def __init__(self, msg='Transfer cancelled'):
        super(TransferCancelled, self).__init__(msg)


class ConnectionTimeout(Timeout):
    pass


class ResponseTimeout(Timeout):
    pass


class ClientException(S3PushException):

    def __init__(self, msg, http_scheme='', http_host='', http_port='',
                 http_path='', http_query='', http_status=None, http_reason='',
                 http_response_content='', http_headers=None):
        super(ClientException, self).__init__(msg)
        self.http_scheme = http_scheme
        self.http_host = http_host
        self.http_port = http_port
        self.http_path = http_path
        self.http_query = http_query
        self.http_status = http_status
        self.http_reason = http_reason
        self.http_response_content = http_response_content
        self.http_headers = http_headers or {}

    def __str__(self):
        a = self.msg
        b = ''
        if self.http_scheme:
            b += '%s://' % self.http_scheme
        if self.http_host:
            b += self.http_host
        if self.http_port:
            b += ':%s' % self.http_port
        if self.http_path:
            b += self.http_path
        if self.http_query:
            b += '?%s' % self.http_query
        if self.http_status:
            if b:
                b = '%s %s' % (b, self.http_status)
            else:
                b = str(self.http_status)
        if self.http_reason:
            if b:
                b = '%s %s' % (b, self.http_reason)
            else:
                b = '- %s' % self.http_reason
        if self.http_response_content:
            if len(self.http_response_content) <= 60:
                b += '   %s' % self.http_response_content
            else:
                b += '  [first 60 chars of response] %s' \
                    % self.http_response_content[:60]
        return b and '%s: %s' % (a, b) or a


class ServerError(ClientException):
    """
    The storage service answered with a non-2xx status. The response body
    is kept in ``http_response_content`` for diagnostics.
    """
    domain = 'server'

    def __init__(self, request, response):
        body = response.body
        if isinstance(body, bytes):
            body = body.decode('utf-8', 'replace')
        super(ServerError, self).__init__(
            '%s %s gave status %s' % (request.method, request.path,
                                      response.status),
            http_scheme=request.scheme, http_host=request.host,
            http_port=request.port or '', http_path=request.path,
            http_status=response.status, http_reason=response.reason,
            http_response_content=body, http_headers=response.headers)
