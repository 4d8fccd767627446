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

import errno
import logging
from logging.handlers import SysLogHandler
import os
import socket
import stat
import sys
import time

import eventlet
from eventlet.green.http import client as green_http_client
import http.client


class S3LogAdapter(logging.LoggerAdapter, object):
    """
    A LogAdapter that modifies the adapted ``Logger`` instance
    in the following ways:

    * Performs some reformatting on calls to :meth:`exception`.
    * Adds the server attribute to the ``extras`` dict when a message is
      processed.
    * Adds the given prefix to the start of each log message.
    """

    def __init__(self, logger, server, prefix=''):
        logging.LoggerAdapter.__init__(self, logger, {})
        self.prefix = prefix
        self.server = server

    def process(self, msg, kwargs):
        """
        Add extra info to message
        """
        kwargs['extra'] = {'server': self.server}
        msg = '%s%s' % (self.prefix, msg)
        return msg, kwargs

    def _exception(self, msg, *args, **kwargs):
        logging.LoggerAdapter.exception(self, msg, *args, **kwargs)

    def exception(self, msg, *args, **kwargs):
        _junk, exc, _junk = sys.exc_info()
        call = self.error
        emsg = ''
        if isinstance(exc, (http.client.BadStatusLine,
                            green_http_client.BadStatusLine)):
            emsg = repr(exc)
        elif isinstance(exc, (OSError, socket.error)):
            if exc.errno == errno.ECONNREFUSED:
                emsg = 'Connection refused'
            elif exc.errno == errno.ECONNRESET:
                emsg = 'Connection reset'
            elif exc.errno == errno.EHOSTUNREACH:
                emsg = 'Host unreachable'
            elif exc.errno == errno.ENETUNREACH:
                emsg = 'Network unreachable'
            elif exc.errno == errno.ETIMEDOUT:
                emsg = 'Connection timeout'
            elif exc.errno == errno.EPIPE:
                emsg = 'Broken pipe'
            else:
                call = self._exception
        elif isinstance(exc, eventlet.Timeout):
            emsg = '%s (%ss)' % (exc.__class__.__name__, exc.seconds)
        else:
            call = self._exception
        call('%s: %s' % (msg, emsg), *args, **kwargs)


class S3LogFormatter(logging.Formatter):
    """
    Custom logging.Formatter that keeps each record on one line and
    optionally shortens overly long log lines.
    """

    def __init__(self, fmt=None, datefmt=None, max_line_length=0):
        logging.Formatter.__init__(self, fmt=fmt, datefmt=datefmt)
        self.max_line_length = max_line_length

    def format(self, record):
        if not hasattr(record, 'server'):
            # Catch log messages that were not initiated by s3push
            record.server = record.name

        record.message = record.getMessage()
        if self._fmt.find('%(asctime)') >= 0:
            record.asctime = self.formatTime(record, self.datefmt)
        msg = (self._fmt % record.__dict__).replace('\n', '#012')
        if record.exc_info:
            if not record.exc_text:
                record.exc_text = self.formatException(
                    record.exc_info).replace('\n', '#012')
        if record.exc_text:
            if not msg.endswith('#012'):
                msg = msg + '#012'
            msg = msg + record.exc_text

        if self.max_line_length > 0 and len(msg) > self.max_line_length:
            if self.max_line_length < 7:
                msg = msg[:self.max_line_length]
            else:
                approxhalf = (self.max_line_length - 5) // 2
                msg = msg[:approxhalf] + " ... " + msg[-approxhalf:]
        return msg


def _syslog_handler(conf):
    facility = getattr(SysLogHandler, conf.get('log_facility', 'LOG_LOCAL0'),
                       SysLogHandler.LOG_LOCAL0)
    udp_host = conf.get('log_udp_host')
    if udp_host:
        udp_port = int(conf.get('log_udp_port',
                                logging.handlers.SYSLOG_UDP_PORT))
        return SysLogHandler(address=(udp_host, udp_port), facility=facility)
    log_address = conf.get('log_address')
    if not log_address:
        return None
    try:
        mode = os.stat(log_address).st_mode
    except OSError as e:
        if e.errno != errno.ENOENT:
            raise
        return None
    if stat.S_ISSOCK(mode):
        return SysLogHandler(address=log_address, facility=facility)
    return None


def get_logger(conf, name=None, log_to_console=False, log_route=None,
               fmt="%(server)s: %(message)s"):
    """
    Get a logger configured from config settings.

    **Log config and defaults**::

        log_facility = LOG_LOCAL0
        log_level = (unchanged)
        log_name = s3push
        log_max_line_length = 0
        log_udp_host = (disabled)
        log_udp_port = logging.handlers.SYSLOG_UDP_PORT
        log_address = (disabled)

    Unlike a daemon, a library does not log to syslog unless asked to; with
    no syslog settings and no console the records only reach whatever
    handlers the application installed on the root logger.

    :param conf: Configuration dict to read settings from
    :param name: This value is used to populate the ``server`` field in
                 the log format, as the default value for ``log_route``;
                 defaults to the ``log_name`` value in ``conf``, if it exists,
                 or to 's3push'.
    :param log_to_console: Add handler which writes to console on stderr
    :param log_route: Route for the logging, not emitted to the log, just used
                      to separate logging configurations
    :param fmt: Override log format
    :return: an instance of ``S3LogAdapter``
    """
    if not conf:
        conf = {}
    if name is None:
        name = conf.get('log_name', 's3push')
    if not log_route:
        log_route = name
    logger = logging.getLogger(log_route)
    formatter = S3LogFormatter(
        fmt=fmt, max_line_length=int(conf.get('log_max_line_length', 0)))

    # get_logger will only ever add one handler of each kind to a logger
    if not hasattr(get_logger, 'handler4logger'):
        get_logger.handler4logger = {}
    if logger in get_logger.handler4logger:
        logger.removeHandler(get_logger.handler4logger.pop(logger))

    handler = _syslog_handler(conf)
    if handler is not None:
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.propagate = False
        get_logger.handler4logger[logger] = handler

    if log_to_console:
        if not hasattr(get_logger, 'console_handler4logger'):
            get_logger.console_handler4logger = {}
        if logger in get_logger.console_handler4logger:
            logger.removeHandler(
                get_logger.console_handler4logger[logger])

        console_handler = logging.StreamHandler(sys.__stderr__)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)
        logger.propagate = False
        get_logger.console_handler4logger[logger] = console_handler

    # without log_level the level set by the application is left alone
    if conf.get('log_level'):
        logger.setLevel(getattr(logging, conf['log_level'].upper(),
                                logging.INFO))

    return S3LogAdapter(logger, name)


def elapsed(start_time):
    """Seconds since ``start_time`` rounded for log lines."""
    return round(time.time() - start_time, 4)
