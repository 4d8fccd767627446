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

"""Miscellaneous utility functions used by s3push."""

import base64
import hashlib
from urllib.parse import quote as _quote

from s3push.common.utils.config import (  # noqa
    TRUE_VALUES, config_true_value, non_negative_float, config_port_value,
    readconf)
from s3push.common.utils.logs import (  # noqa
    S3LogAdapter, S3LogFormatter, get_logger, elapsed)
from s3push.common.utils.timestamp import (  # noqa
    http_date)


def quote(value, safe='/'):
    """
    Patched version of urllib.quote that encodes utf-8 strings before quoting
    """
    if isinstance(value, str):
        value = value.encode('utf-8')
    return _quote(value, safe)


def base64_str(value):
    return base64.b64encode(value).decode('ascii')


def md5_b64(body):
    """
    Return the base64 encoded MD5 digest of ``body``, the form used by the
    ``Content-MD5`` header.
    """
    return base64_str(hashlib.md5(body, usedforsecurity=False).digest())
