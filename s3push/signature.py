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
AWS signature version 2 for S3 requests.

The string to sign is::

    HTTP-Verb + "\n" +
    Content-MD5 + "\n" +
    Content-Type + "\n" +
    Date + "\n" +
    CanonicalizedAmzHeaders +
    CanonicalizedResource

and the ``Authorization`` header carries
``AWS <access key id>:base64(hmac-sha1(secret, string to sign))``.
"""

import binascii
from collections import defaultdict
from hashlib import sha1
import hmac

from s3push.common.exceptions import ConfigurationError, SigningError
from s3push.common.utils import base64_str, quote

AUTH_SCHEME = 'AWS'
AMZ_PREFIX = 'x-amz-'


def _header_strip(value):
    # S3 strips leading/trailing whitespace from header values it signs
    if value is None:
        return ''
    return value.strip()


def canonical_amz_headers(headers):
    """
    Return the sorted ``name:value`` lines for every ``x-amz-`` header.

    Names are lower-cased; repeated names are folded into one line with
    their values joined by commas in the order given.

    :param headers: mapping or list of (name, value) pairs
    """
    if hasattr(headers, 'items'):
        headers = headers.items()
    amz_headers = defaultdict(list)
    for key, value in headers:
        key = key.strip().lower()
        if not key.startswith(AMZ_PREFIX):
            continue
        amz_headers[key].append(_header_strip(value))
    return ['%s:%s' % (key, ','.join(values))
            for key, values in sorted(amz_headers.items())]


def canonical_resource(bucket, key):
    return '/%s/%s' % (bucket, quote(key))


def canonical_string(method, content_md5, content_type, date, headers,
                     bucket, key):
    """
    Create the 'StringToSign' value in Amazon terminology for v2.

    :param method: HTTP verb, e.g. 'PUT'
    :param content_md5: base64 MD5 of the body, or '' if not sent
    :param content_type: value of the Content-Type header, or ''
    :param date: value of the Date header
    :param headers: every other header sent with the request; only the
                    ``x-amz-`` ones are used
    :param bucket: bucket name
    :param key: object key, not yet quoted
    :returns: the string to sign as bytes
    """
    assert method, 'method is required'
    amz_lines = canonical_amz_headers(headers or [])
    buf = [method, _header_strip(content_md5), _header_strip(content_type)]
    if any(line.startswith('x-amz-date:') for line in amz_lines):
        # x-amz-date replaces Date; the Date line stays but is empty
        buf.append('')
    else:
        buf.append(_header_strip(date))
    buf.extend(amz_lines)
    buf.append(canonical_resource(bucket, key))
    return '\n'.join(buf).encode('utf-8')


def get_signature(string_to_sign, secret_access_key):
    """
    Base64 encoded HMAC-SHA1 of ``string_to_sign``.

    :raises ConfigurationError: if the secret is empty
    :raises SigningError: if the digest could not be computed
    """
    if not secret_access_key:
        raise ConfigurationError('Missing secret access key')
    if isinstance(secret_access_key, str):
        secret_access_key = secret_access_key.encode('utf-8')
    if isinstance(string_to_sign, str):
        string_to_sign = string_to_sign.encode('utf-8')
    try:
        return base64_str(
            hmac.new(secret_access_key, string_to_sign, sha1).digest())
    except (TypeError, ValueError, binascii.Error) as err:
        raise SigningError('Unable to sign request: %s' % err)


def sign(string_to_sign, credentials):
    """
    Build the ``Authorization`` header value for ``string_to_sign``.

    :param string_to_sign: output of :func:`canonical_string`
    :param credentials: a :class:`s3push.options.Credentials`
    :returns: ``'AWS <access key id>:<signature>'``
    """
    credentials.validate()
    return '%s %s:%s' % (
        AUTH_SCHEME, credentials.access_key_id,
        get_signature(string_to_sign, credentials.secret_access_key))
