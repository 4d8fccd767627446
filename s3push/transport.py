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
The HTTP side of an upload: send a :class:`s3push.request.PreparedRequest`
and hand back the status, headers and body.
"""

from http.client import HTTPException

from eventlet import Timeout

from s3push.common.bufferedhttp import http_connect_raw
from s3push.common.exceptions import ConnectionTimeout, ResponseTimeout, \
    TransferCancelled, TransportError
from s3push.common.header_key_dict import HeaderKeyDict
from s3push.common.utils import non_negative_float


class CancelToken(object):
    """
    Passed to :meth:`HTTPTransport.send` so the owner of a transfer can
    abort it. Callbacks registered with :meth:`add_callback` run once, when
    the token is cancelled, or immediately if it already was.
    """

    def __init__(self):
        self.cancelled = False
        self._callbacks = []

    def add_callback(self, func):
        if self.cancelled:
            func()
        else:
            self._callbacks.append(func)

    def cancel(self):
        if self.cancelled:
            return
        self.cancelled = True
        callbacks, self._callbacks = self._callbacks, []
        for func in callbacks:
            func()

    def raise_if_cancelled(self):
        if self.cancelled:
            raise TransferCancelled()


class TransportResponse(object):

    def __init__(self, status, reason='', headers=None, body=b''):
        self.status = status
        self.reason = reason
        self.headers = HeaderKeyDict(headers or {})
        self.body = body

    def __repr__(self):
        return '<%s %s %s>' % (self.__class__.__name__, self.status,
                               self.reason)


class HTTPTransport(object):
    """
    Sends requests with eventlet green connections. The calling green
    thread blocks; other green threads keep running.

    :param conn_timeout: seconds to wait for the TCP/TLS connection
    :param response_timeout: seconds to wait for the response after the
                             body was sent
    :param send_timeout: seconds allowed for sending the body

    A timeout of 0 disables that timeout.
    """

    def __init__(self, conn_timeout=10, response_timeout=60,
                 send_timeout=60):
        self.conn_timeout = non_negative_float(conn_timeout)
        self.response_timeout = non_negative_float(response_timeout)
        self.send_timeout = non_negative_float(send_timeout)

    @classmethod
    def from_conf(cls, conf):
        return cls(conn_timeout=conf.get('conn_timeout', 10),
                   response_timeout=conf.get('response_timeout', 60),
                   send_timeout=conf.get('send_timeout', 60))

    def send(self, request, cancel_token=None):
        """
        :param request: a :class:`s3push.request.PreparedRequest`
        :param cancel_token: a :class:`CancelToken`, or None
        :returns: a :class:`TransportResponse`
        :raises TransportError: for connection failures and timeouts
        :raises TransferCancelled: if the token was cancelled before the
                                   connection was made
        """
        cancel_token = cancel_token or CancelToken()
        cancel_token.raise_if_cancelled()
        conn = None
        try:
            with ConnectionTimeout(self.conn_timeout or None):
                conn = http_connect_raw(
                    request.host, request.port, request.method,
                    request.path, request.headers, ssl=request.ssl)
            cancel_token.add_callback(conn.close)
            with Timeout(self.send_timeout or None):
                conn.send(request.body)
            with ResponseTimeout(self.response_timeout or None):
                resp = conn.getresponse()
                body = resp.read()
        except Timeout as err:
            raise TransportError('%s %s: %s (%ss)' % (
                request.method, request.url, err.__class__.__name__,
                err.seconds))
        except (HTTPException, OSError) as err:
            raise TransportError('%s %s: %s' % (
                request.method, request.url, err))
        finally:
            if conn is not None:
                conn.close()
        return TransportResponse(resp.status, resp.reason,
                                 resp.getheaders(), body)
