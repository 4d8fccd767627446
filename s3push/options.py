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
Credentials and per-upload options.
"""

from s3push.common.exceptions import ConfigurationError
from s3push.common.utils import config_true_value

NO_CACHE = 'no-cache'
PERMANENT_CACHE = 'public, max-age=31536000'
REDUCED_REDUNDANCY = 'REDUCED_REDUNDANCY'


class Credentials(object):
    """
    An access key pair. Read-only once built, and never shown by ``repr``.
    """
    __slots__ = ('_access_key_id', '_secret_access_key')

    def __init__(self, access_key_id, secret_access_key):
        object.__setattr__(self, '_access_key_id', access_key_id or '')
        object.__setattr__(self, '_secret_access_key',
                           secret_access_key or '')

    def __setattr__(self, name, value):
        raise AttributeError('Credentials are read-only')

    @property
    def access_key_id(self):
        return self._access_key_id

    @property
    def secret_access_key(self):
        return self._secret_access_key

    def validate(self):
        """
        :raises ConfigurationError: if either half of the pair is missing
        """
        if not self._access_key_id:
            raise ConfigurationError('Missing access key id')
        if not self._secret_access_key:
            raise ConfigurationError('Missing secret access key')

    def __repr__(self):
        return '%s(access_key_id=%r, secret_access_key=<hidden>)' % (
            self.__class__.__name__, self._access_key_id)


class UploadOptions(object):
    """
    The independent switches of one upload.

    :param detect_gzip: gzip the body and send ``Content-Encoding: gzip``
    :param no_cache: send ``Cache-Control: no-cache``
    :param permanent_cache: send a one year ``Cache-Control``; ignored when
                            ``no_cache`` is also set
    :param reduced_redundancy: store the object as ``REDUCED_REDUNDANCY``
    :param secure: use https rather than http
    """
    FLAGS = ('detect_gzip', 'no_cache', 'permanent_cache',
             'reduced_redundancy', 'secure')
    __slots__ = FLAGS

    def __init__(self, detect_gzip=False, no_cache=False,
                 permanent_cache=False, reduced_redundancy=False,
                 secure=False):
        for name, value in zip(self.FLAGS, (
                detect_gzip, no_cache, permanent_cache,
                reduced_redundancy, secure)):
            object.__setattr__(self, name, bool(value))

    def __setattr__(self, name, value):
        raise AttributeError('UploadOptions are read-only')

    @classmethod
    def from_conf(cls, conf):
        """
        Build options from a config dict using the flag names as keys,
        e.g. ``detect_gzip = yes``.
        """
        return cls(**dict((name, config_true_value(conf.get(name, False)))
                          for name in cls.FLAGS))

    def replace(self, **kwargs):
        values = dict((name, getattr(self, name)) for name in self.FLAGS)
        values.update(kwargs)
        return self.__class__(**values)

    @property
    def cache_control(self):
        """
        The ``Cache-Control`` value to send, or None. ``no_cache`` wins over
        ``permanent_cache`` when both are set.
        """
        if self.no_cache:
            return NO_CACHE
        if self.permanent_cache:
            return PERMANENT_CACHE
        return None

    @property
    def cache_conflict(self):
        return self.no_cache and self.permanent_cache

    @property
    def storage_class(self):
        if self.reduced_redundancy:
            return REDUCED_REDUNDANCY
        return None

    @property
    def scheme(self):
        return 'https' if self.secure else 'http'

    def __eq__(self, other):
        if not isinstance(other, UploadOptions):
            return NotImplemented
        return all(getattr(self, name) == getattr(other, name)
                   for name in self.FLAGS)

    def __hash__(self):
        return hash(tuple(getattr(self, name) for name in self.FLAGS))

    def __repr__(self):
        return '%s(%s)' % (self.__class__.__name__, ', '.join(
            '%s=%r' % (name, getattr(self, name)) for name in self.FLAGS))


DEFAULT_OPTIONS = UploadOptions()
