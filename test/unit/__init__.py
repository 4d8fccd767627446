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

""" S3Push tests """

from contextlib import contextmanager
import functools
import os
from shutil import rmtree
from tempfile import mkdtemp, NamedTemporaryFile

import eventlet
from eventlet.event import Event

from s3push.transport import TransportResponse


@contextmanager
def tmpfile(content):
    mode = 'wb' if isinstance(content, bytes) else 'w'
    with NamedTemporaryFile(mode, delete=False) as f:
        file_name = f.name
        f.write(content)
    try:
        yield file_name
    finally:
        os.unlink(file_name)


def with_tempdir(f):
    """
    Decorator to give a single test a tempdir as argument to test method.
    """
    @functools.wraps(f)
    def wrapped(*args, **kwargs):
        tempdir = mkdtemp()
        args = list(args)
        args.append(tempdir)
        try:
            return f(*args, **kwargs)
        finally:
            rmtree(tempdir)
    return wrapped


class FakeTransport(object):
    """
    Answers each request with the next status from ``statuses``; a status
    that is an exception instance is raised instead. Every request and
    token it was given is kept in ``requests``.
    """

    def __init__(self, *statuses, **kwargs):
        self.statuses = list(statuses) or [200]
        self.body = kwargs.get('body', b'')
        self.headers = kwargs.get('headers', {})
        self.requests = []
        self.tokens = []

    def send(self, request, cancel_token=None):
        self.requests.append(request)
        self.tokens.append(cancel_token)
        status = self.statuses.pop(0) if len(self.statuses) > 1 \
            else self.statuses[0]
        if isinstance(status, BaseException):
            raise status
        return TransportResponse(status, 'Fake', self.headers, self.body)

    @property
    def last_request(self):
        return self.requests[-1]


class BlockingTransport(FakeTransport):
    """
    Like FakeTransport, but every send() blocks until :meth:`release` is
    called, so tests can act while a transfer is in flight.
    """

    def __init__(self, *statuses, **kwargs):
        super(BlockingTransport, self).__init__(*statuses, **kwargs)
        self._release = Event()
        self.started = 0
        self.finished = 0

    def send(self, request, cancel_token=None):
        self.started += 1
        self._release.wait()
        self.finished += 1
        return super(BlockingTransport, self).send(request, cancel_token)

    def release(self):
        if not self._release.ready():
            self._release.send(True)
        eventlet.sleep(0)


def in_flight():
    """Let spawned transfers reach the transport."""
    eventlet.sleep(0)
