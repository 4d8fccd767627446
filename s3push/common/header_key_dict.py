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

from collections.abc import MutableMapping


class HeaderKeyDict(MutableMapping):
    """
    An ordered mapping of HTTP headers with case-insensitive lookups.

    Unlike a plain dict the name a header was first set with is kept, so
    headers go out on the wire spelled the way the caller spelled them.
    Setting a header that is already present replaces its value in place;
    setting a header to ``None`` removes it.
    """
    def __init__(self, base_headers=None, **kwargs):
        self._headers = {}
        if base_headers:
            self.update(base_headers)
        self.update(kwargs)

    def __getitem__(self, key):
        return self._headers[key.lower()][1]

    def __setitem__(self, key, value):
        lower = key.lower()
        if value is None:
            self._headers.pop(lower, None)
            return
        if isinstance(value, bytes):
            value = value.decode('latin-1')
        else:
            value = str(value)
        if lower in self._headers:
            key = self._headers[lower][0]
        self._headers[lower] = (key, value)

    def __delitem__(self, key):
        del self._headers[key.lower()]

    def __contains__(self, key):
        return isinstance(key, str) and key.lower() in self._headers

    def __iter__(self):
        return (name for name, _value in self._headers.values())

    def __len__(self):
        return len(self._headers)

    def __repr__(self):
        return '%s(%r)' % (self.__class__.__name__, list(self.items()))

    def __eq__(self, other):
        if not isinstance(other, MutableMapping):
            return NotImplemented
        other = HeaderKeyDict(other)
        return dict((k.lower(), v) for k, v in self.items()) == \
            dict((k.lower(), v) for k, v in other.items())

    def copy(self):
        return HeaderKeyDict(self)
