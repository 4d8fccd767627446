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

"""Timestamp-related functions for signing requests."""

import email.utils
import time


def http_date(timestamp=None):
    """
    Format a unix timestamp as an RFC 1123 HTTP-date, e.g.
    ``Tue, 27 Mar 2007 19:36:42 GMT``.

    The formatting does not depend on the process locale.

    :param timestamp: seconds since the epoch; defaults to now
    """
    if timestamp is None:
        timestamp = time.time()
    return email.utils.formatdate(int(timestamp), usegmt=True)
