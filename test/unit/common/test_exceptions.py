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

import unittest

from eventlet import Timeout

from s3push.common import exceptions
from s3push.request import PreparedRequest
from s3push.transport import TransportResponse


class TestExceptions(unittest.TestCase):

    def test_domains(self):
        for cls, domain in (
                (exceptions.ConfigurationError, 'configuration'),
                (exceptions.UploadIOError, 'io'),
                (exceptions.SigningError, 'signing'),
                (exceptions.TransportError, 'transport'),
                (exceptions.TransferCancelled, 'cancelled')):
            exc = cls('boom')
            self.assertIsInstance(exc, exceptions.S3PushException)
            self.assertEqual(exc.domain, domain)
            self.assertEqual(str(exc), 'boom')
            self.assertEqual(exc.msg, 'boom')

    def test_base_exception(self):
        self.assertEqual(str(exceptions.S3PushException()), '')
        self.assertEqual(str(exceptions.S3PushException('test')), 'test')

    def test_transfer_cancelled(self):
        self.assertEqual(str(exceptions.TransferCancelled()),
                         'Transfer cancelled')

    def test_upload_io_error(self):
        exc = exceptions.UploadIOError('nope', path='/tmp/x', errno=2)
        self.assertEqual(exc.path, '/tmp/x')
        self.assertEqual(exc.errno, 2)

    def test_timeouts(self):
        for cls in (exceptions.ConnectionTimeout, exceptions.ResponseTimeout):
            exc = cls(15)
            try:
                self.assertIsInstance(exc, Timeout)
                self.assertEqual(exc.seconds, 15)
            finally:
                exc.cancel()

    def test_client_exception(self):
        strerror = 'test: HTTP://random:888/randompath?foo=1 666 reason' \
                   '   content'
        exc = exceptions.ClientException('test', http_scheme='HTTP',
                                         http_host='random',
                                         http_port=888,
                                         http_path='/randompath',
                                         http_query='foo=1',
                                         http_status=666,
                                         http_reason='reason',
                                         http_response_content='content')
        self.assertEqual(str(exc), strerror)
        self.assertEqual(exc.http_headers, {})
        self.assertEqual(str(exceptions.ClientException('bare')), 'bare')
        self.assertEqual(
            str(exceptions.ClientException('x', http_reason='Gone')),
            'x: - Gone')

    def test_client_exception_long_content(self):
        exc = exceptions.ClientException('test', http_status=500,
                                         http_response_content='x' * 100)
        self.assertEqual(str(exc), 'test: 500  [first 60 chars of '
                         'response] ' + 'x' * 60)

    def test_server_error(self):
        request = PreparedRequest(
            'PUT', 'https', 'bucket.s3.amazonaws.com', None,
            '/reports/out.txt', [], b'0123456789')
        response = TransportResponse(
            403, 'Forbidden', [('x-amz-request-id', 'abc')],
            b'<Error><Code>AccessDenied</Code></Error>')
        exc = exceptions.ServerError(request, response)
        self.assertIsInstance(exc, exceptions.ClientException)
        self.assertEqual(exc.domain, 'server')
        self.assertEqual(exc.http_status, 403)
        self.assertEqual(exc.http_reason, 'Forbidden')
        self.assertEqual(exc.http_host, 'bucket.s3.amazonaws.com')
        self.assertEqual(exc.http_path, '/reports/out.txt')
        self.assertEqual(exc.http_response_content,
                         '<Error><Code>AccessDenied</Code></Error>')
        self.assertEqual(exc.http_headers['X-Amz-Request-Id'], 'abc')
        self.assertEqual(exc.msg, 'PUT /reports/out.txt gave status 403')
        self.assertEqual(
            str(exc), 'PUT /reports/out.txt gave status 403: '
            'https://bucket.s3.amazonaws.com/reports/out.txt 403 Forbidden'
            '   <Error><Code>AccessDenied</Code></Error>')

    def test_server_error_undecodable_body(self):
        request = PreparedRequest('PUT', 'http', 'b.example.com', 8080,
                                  '/k', [], b'')
        exc = exceptions.ServerError(request, TransportResponse(
            500, 'Internal Error', body=b'\xff'))
        self.assertEqual(exc.http_response_content, '\ufffd')
        self.assertEqual(exc.http_port, 8080)


if __name__ == '__main__':
    unittest.main()
