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
Helpers to make HTTP connections through eventlet's green ``http.client``
so that a blocked request only suspends its own green thread.

.. warning::

    If you use this, be sure that the libraries you are using do not access
    the socket directly, and instead make all calls through http.client.
"""

import logging
import socket
import time

from eventlet.green.http.client import HTTPConnection, HTTPSConnection


class _TimedConnectionMixin(object):

    def connect(self):
        self._connected_time = time.time()
        ret = super(_TimedConnectionMixin, self).connect()
        self.sock.setsockopt(socket.IPPROTO_TCP, socket.TCP_NODELAY, 1)
        return ret

    def putrequest(self, method, url, skip_host=0, skip_accept_encoding=0):
        '''Send a request to the server.

        :param method: specifies an HTTP request method, e.g. 'PUT'.
        :param url: specifies the object being requested, e.g. '/index.html'.
        :param skip_host: if True does not add automatically a 'Host:' header
        :param skip_accept_encoding: if True does not add automatically an
           'Accept-Encoding:' header
        '''
        self._method = method
        self._path = url
        return super(_TimedConnectionMixin, self).putrequest(
            method, url, skip_host, skip_accept_encoding)

    def getresponse(self):
        response = super(_TimedConnectionMixin, self).getresponse()
        logging.debug("HTTP PERF: %(time).5f seconds to %(method)s "
                      "%(host)s:%(port)s %(path)s)",
                      {'time': time.time() - self._connected_time,
                       'method': self._method, 'host': self.host,
                       'port': self.port, 'path': self._path})
        return response


class BufferedHTTPConnection(_TimedConnectionMixin, HTTPConnection):
    """HTTPConnection class that logs request timings"""


class BufferedHTTPSConnection(_TimedConnectionMixin, HTTPSConnection):
    """HTTPSConnection class that logs request timings"""


def http_connect_raw(host, port, method, path, headers=None,
                     query_string=None, ssl=False):
    """
    Helper function to create an HTTPConnection object. If ssl is set True,
    BufferedHTTPSConnection will be used, otherwise BufferedHTTPConnection.
    The request line and headers are sent; the caller sends the body and
    reads the response.

    :param host: host name or address to connect to
    :param port: port to connect to; defaults to 443 or 80
    :param method: HTTP method to request ('GET', 'PUT', 'POST', etc.)
    :param path: request path, already quoted
    :param headers: mapping or list of (name, value) pairs
    :param query_string: request query string
    :param ssl: set True if SSL should be used (default: False)
    :returns: HTTPConnection object
    """
    if not port:
        port = 443 if ssl else 80
    if ssl:
        conn = BufferedHTTPSConnection(host, port)
    else:
        conn = BufferedHTTPConnection(host, port)
    if query_string:
        path += '?' + query_string
    conn.path = path
    if headers is None:
        headers = []
    elif hasattr(headers, 'items'):
        headers = list(headers.items())
    skip_host = any(name.lower() == 'host' for name, _value in headers)
    conn.putrequest(method, path, skip_host=skip_host,
                    skip_accept_encoding=True)
    for header, value in headers:
        conn.putheader(header, str(value))
    conn.endheaders()
    return conn
