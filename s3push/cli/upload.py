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
Command line tool to upload one file to a bucket.
"""

import os
import sys
from optparse import OptionParser

from s3push.common.utils import get_logger, readconf
from s3push.connection import S3Connection
from s3push.options import UploadOptions
from s3push.request import DEFAULT_STORAGE_HOST

USAGE = '''%prog [options] <bucket> <file> [<key>]

Uploads <file> to <bucket>. The key defaults to the file's base name.
Credentials come from the [s3push] section of --conf, or from the
S3PUSH_ACCESS_KEY_ID and S3PUSH_SECRET_ACCESS_KEY environment variables.'''


def _parser():
    parser = OptionParser(USAGE)
    parser.add_option('-c', '--conf', dest='conf',
                      help='config file with an [s3push] section')
    parser.add_option('-t', '--content-type', dest='content_type',
                      help='Content-Type to send; guessed from the file '
                      'name if not given')
    parser.add_option('-H', '--header', dest='headers', action='append',
                      default=[], metavar='NAME:VALUE',
                      help='extra header to send; may be repeated')
    parser.add_option('--host', dest='storage_host',
                      help='storage host (default %s)' % DEFAULT_STORAGE_HOST)
    parser.add_option('-z', '--gzip', dest='detect_gzip', action='store_true',
                      default=False, help='gzip the object before upload')
    parser.add_option('--no-cache', dest='no_cache', action='store_true',
                      default=False, help='send Cache-Control: no-cache')
    parser.add_option('--permanent-cache', dest='permanent_cache',
                      action='store_true', default=False,
                      help='send a one year Cache-Control')
    parser.add_option('-r', '--reduced-redundancy',
                      dest='reduced_redundancy', action='store_true',
                      default=False, help='use reduced redundancy storage')
    parser.add_option('-s', '--secure', dest='secure', action='store_true',
                      default=False, help='use https')
    parser.add_option('-v', '--verbose', dest='verbose', action='store_true',
                      default=False, help='log to the console')
    return parser


def parse_headers(header_args):
    """
    Turn ``NAME:VALUE`` strings into (name, value) pairs.

    :raises ValueError: for an argument without a colon or name
    """
    headers = []
    for arg in header_args:
        name, sep, value = arg.partition(':')
        if not sep or not name.strip():
            raise ValueError('Invalid header %r; use NAME:VALUE' % arg)
        headers.append((name.strip(), value.strip()))
    return headers


def main(args=None):
    parser = _parser()
    options, args = parser.parse_args(args)
    if len(args) not in (2, 3):
        parser.print_help()
        return 1
    bucket, path = args[:2]
    key = args[2] if len(args) == 3 else os.path.basename(path)

    conf = {}
    if options.conf:
        try:
            conf = readconf(options.conf, 's3push', log_name='s3push-upload')
        except (IOError, ValueError) as err:
            print('Unable to read config: %s' % err, file=sys.stderr)
            return 1
    conf.setdefault('access_key_id', os.environ.get('S3PUSH_ACCESS_KEY_ID'))
    conf.setdefault('secret_access_key',
                    os.environ.get('S3PUSH_SECRET_ACCESS_KEY'))
    conf['bucket'] = bucket
    if options.storage_host:
        conf['storage_host'] = options.storage_host
    conf.setdefault('log_level', 'DEBUG' if options.verbose else 'INFO')

    try:
        headers = parse_headers(options.headers)
    except ValueError as err:
        print(err, file=sys.stderr)
        return 1

    upload_options = UploadOptions.from_conf(conf).replace(**dict(
        (name, True) for name in UploadOptions.FLAGS
        if getattr(options, name)))
    logger = get_logger(conf, name='s3push-upload',
                        log_to_console=options.verbose,
                        log_route='s3push-upload')
    conn = S3Connection.from_conf(conf, logger=logger)
    error = conn.upload_file(path, key, options=upload_options,
                             headers=headers,
                             content_type=options.content_type).wait()
    if error is not None:
        print('Upload failed (%s): %s' % (error.domain, error),
              file=sys.stderr)
        return 1
    print('%s -> %s/%s' % (path, bucket, key))
    return 0
