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
Runs uploads: build the signed request, send it on a green thread and
report the outcome exactly once.

A transfer moves through these states::

    idle -> building -> in_flight -> completed | failed | cancelled
    building -> failed  (the request could not be built)

The completion callback is always called on its own green thread, after
the terminal state is set, and never from inside ``start()`` or
``cancel()``. Everything here must be driven from green threads of a
single OS thread; callers have to yield to the eventlet hub (for instance
with :meth:`TransferHandle.wait`) for transfers to make progress.
"""

import itertools
import time

import eventlet
from eventlet.event import Event
from eventlet.greenthread import getcurrent

from s3push.common.exceptions import ConfigurationError, S3PushException, \
    ServerError, TransferCancelled, TransportError
from s3push.common.http import is_client_error, is_success
from s3push.common.utils import elapsed, get_logger
from s3push.request import DEFAULT_STORAGE_HOST, build_request
from s3push.transport import CancelToken, HTTPTransport

IDLE = 'idle'
BUILDING = 'building'
IN_FLIGHT = 'in_flight'
COMPLETED = 'completed'
FAILED = 'failed'
CANCELLED = 'cancelled'
TERMINAL_STATES = frozenset((COMPLETED, FAILED, CANCELLED))

_transfer_ids = itertools.count(1)


class TransferHandle(object):
    """
    The single result of one transfer. ``wait()`` gives the error the
    callback received, or None on success.
    """

    def __init__(self, controller, upload_request, callback=None):
        self.transfer_id = next(_transfer_ids)
        self.upload_request = upload_request
        self.state = IDLE
        self.error = None
        self.request = None
        self.response = None
        self.started_at = time.time()
        self._controller = controller
        self._callback = callback
        self._token = None
        self._thread = None
        self._done = Event()

    @property
    def key(self):
        return self.upload_request.key

    @property
    def active(self):
        return self.state not in TERMINAL_STATES

    def ready(self):
        """True once the callback has run."""
        return self._done.ready()

    def wait(self, timeout=None):
        """
        Block the calling green thread until the callback has run.

        :param timeout: seconds to wait, or None to wait forever
        :returns: the error passed to the callback, or None on success
        :raises eventlet.Timeout: if ``timeout`` expires first
        """
        with eventlet.Timeout(timeout):
            return self._done.wait()

    def cancel(self):
        """
        Cancel the transfer if it is in flight.

        :returns: True if this call cancelled it
        """
        return self._controller.cancel(self)

    def __repr__(self):
        return '<%s #%s %s %s>' % (self.__class__.__name__,
                                   self.transfer_id, self.key, self.state)


class TransferController(object):
    """
    Starts and cancels transfers. A controller keeps no per-transfer state
    of its own, so one instance can run any number of transfers; each
    :class:`TransferHandle` carries its own cancel token.

    :param credentials: a :class:`s3push.options.Credentials`
    :param transport: object with ``send(request, cancel_token)``;
                      defaults to :class:`s3push.transport.HTTPTransport`
    :param storage_host: service host name
    :param port: optional port
    :param logger: logger to use
    """

    def __init__(self, credentials, transport=None,
                 storage_host=DEFAULT_STORAGE_HOST, port=None, logger=None):
        self.credentials = credentials
        self.transport = transport or HTTPTransport()
        self.storage_host = storage_host
        self.port = port
        self.logger = logger or get_logger({}, log_route='s3push.transfer')

    def start(self, upload_request, callback=None):
        """
        Build, sign and dispatch ``upload_request``.

        Build errors are not raised; they fail the transfer and go to the
        callback like any other error.

        :param upload_request: an :class:`s3push.request.UploadRequest`
        :param callback: called as ``callback(error)`` exactly once, with
                         None on success
        :returns: a :class:`TransferHandle`
        """
        handle = TransferHandle(self, upload_request, callback)
        handle.state = BUILDING
        try:
            handle.request = build_request(
                upload_request, self.credentials,
                storage_host=self.storage_host, port=self.port,
                logger=self.logger)
        except S3PushException as err:
            self._finish(handle, FAILED, err)
            return handle
        except (TypeError, ValueError) as err:
            self._finish(handle, FAILED, ConfigurationError(
                'Invalid upload of %r: %s' % (upload_request.key, err)))
            return handle

        handle._token = CancelToken()
        handle.state = IN_FLIGHT
        self.logger.debug('Starting upload #%s: %r (%d bytes)',
                          handle.transfer_id, handle.request,
                          len(handle.request.body))
        handle._thread = eventlet.spawn(self._run, handle)
        return handle

    def cancel(self, handle):
        """
        Abort ``handle`` if it is in flight; otherwise do nothing.

        The request may still have reached the server.

        :returns: True if the transfer was cancelled by this call
        """
        if handle.state != IN_FLIGHT:
            return False
        self._finish(handle, CANCELLED, TransferCancelled(
            'Upload of %s cancelled' % handle.key))
        # kill first: the worker's own cleanup closes the connection it was
        # blocked on, then the token covers transports running elsewhere
        if handle._thread is not None and handle._thread is not getcurrent():
            handle._thread.kill()
        handle._token.cancel()
        return True

    def _run(self, handle):
        try:
            response = self.transport.send(handle.request, handle._token)
        except S3PushException as err:
            self._finish(handle, FAILED, err)
            return
        except Exception as err:
            self.logger.exception('Unexpected error sending upload #%s',
                                  handle.transfer_id)
            self._finish(handle, FAILED, TransportError(
                '%s %s: %s' % (handle.request.method, handle.request.url,
                               err)))
            return
        handle.response = response
        if is_success(response.status):
            self._finish(handle, COMPLETED, None)
        else:
            self._finish(handle, FAILED,
                         ServerError(handle.request, response))

    def _finish(self, handle, state, error):
        if handle.state in TERMINAL_STATES:
            return False
        handle.state = state
        handle.error = error
        if state == COMPLETED:
            self.logger.info('Uploaded %s to %s (%.4fs)', handle.key,
                             handle.request.url, elapsed(handle.started_at))
        elif state == CANCELLED:
            self.logger.info('Upload #%s of %s cancelled', handle.transfer_id,
                             handle.key)
        elif isinstance(error, ServerError) and \
                is_client_error(error.http_status):
            self.logger.warning('Upload #%s failed: %s', handle.transfer_id,
                                error)
        else:
            self.logger.error('Upload #%s failed: %s', handle.transfer_id,
                              error)
        eventlet.spawn_n(self._deliver, handle)
        return True

    def _deliver(self, handle):
        try:
            if handle._callback is not None:
                handle._callback(handle.error)
        except Exception:
            self.logger.exception('Error in completion callback for %s',
                                  handle.key)
        finally:
            handle._done.send(handle.error)
