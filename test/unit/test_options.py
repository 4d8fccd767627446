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

import unittest

from s3push.common.exceptions import ConfigurationError
from s3push.options import Credentials, DEFAULT_OPTIONS, NO_CACHE, \
    PERMANENT_CACHE, REDUCED_REDUNDANCY, UploadOptions


class TestCredentials(unittest.TestCase):

    def test_attributes(self):
        creds = Credentials('AKID', 'shh')
        self.assertEqual(creds.access_key_id, 'AKID')
        self.assertEqual(creds.secret_access_key, 'shh')
        creds.validate()

    def test_read_only(self):
        creds = Credentials('AKID', 'shh')
        with self.assertRaises(AttributeError):
            creds.access_key_id = 'other'
        with self.assertRaises(AttributeError):
            creds.token = 'x'

    def test_repr(self):
        self.assertEqual(
            repr(Credentials('AKID', 'shh')),
            "Credentials(access_key_id='AKID', secret_access_key=<hidden>)")

    def test_validate(self):
        for creds in (Credentials('', 'shh'), Credentials(None, 'shh')):
            with self.assertRaises(ConfigurationError) as caught:
                creds.validate()
            self.assertEqual(str(caught.exception), 'Missing access key id')
            self.assertEqual(caught.exception.domain, 'configuration')
        with self.assertRaises(ConfigurationError) as caught:
            Credentials('AKID', '').validate()
        self.assertEqual(str(caught.exception), 'Missing secret access key')


class TestUploadOptions(unittest.TestCase):

    def test_defaults(self):
        options = UploadOptions()
        for name in UploadOptions.FLAGS:
            self.assertIs(getattr(options, name), False)
        self.assertIsNone(options.cache_control)
        self.assertIsNone(options.storage_class)
        self.assertEqual(options.scheme, 'http')
        self.assertFalse(options.cache_conflict)
        self.assertEqual(options, DEFAULT_OPTIONS)

    def test_flags(self):
        self.assertEqual(UploadOptions(no_cache=True).cache_control,
                         NO_CACHE)
        self.assertEqual(UploadOptions(permanent_cache=True).cache_control,
                         PERMANENT_CACHE)
        self.assertEqual(
            UploadOptions(reduced_redundancy=True).storage_class,
            REDUCED_REDUNDANCY)
        self.assertEqual(UploadOptions(secure=True).scheme, 'https')

    def test_no_cache_wins(self):
        options = UploadOptions(no_cache=True, permanent_cache=True)
        self.assertEqual(options.cache_control, 'no-cache')
        self.assertTrue(options.cache_conflict)

    def test_values_are_coerced(self):
        options = UploadOptions(detect_gzip=1, secure='')
        self.assertIs(options.detect_gzip, True)
        self.assertIs(options.secure, False)

    def test_read_only(self):
        with self.assertRaises(AttributeError):
            DEFAULT_OPTIONS.secure = True
        self.assertFalse(DEFAULT_OPTIONS.secure)

    def test_replace(self):
        options = UploadOptions(secure=True)
        replaced = options.replace(detect_gzip=True)
        self.assertIsNot(replaced, options)
        self.assertEqual(replaced,
                         UploadOptions(secure=True, detect_gzip=True))
        self.assertFalse(options.detect_gzip)
        self.assertRaises(TypeError, options.replace, bogus=True)

    def test_from_conf(self):
        options = UploadOptions.from_conf({
            'detect_gzip': 'yes', 'no_cache': 'false', 'secure': 'On',
            'reduced_redundancy': 'nope', 'log_name': 'x'})
        self.assertEqual(options, UploadOptions(detect_gzip=True,
                                                secure=True))
        self.assertEqual(UploadOptions.from_conf({}), DEFAULT_OPTIONS)

    def test_equality_and_hash(self):
        self.assertEqual(UploadOptions(secure=True),
                         UploadOptions(secure=True))
        self.assertNotEqual(UploadOptions(secure=True), UploadOptions())
        self.assertNotEqual(UploadOptions(), 'options')
        self.assertEqual(len(set([UploadOptions(), UploadOptions(),
                                  UploadOptions(no_cache=True)])), 2)

    def test_repr(self):
        self.assertEqual(
            repr(UploadOptions(secure=True)),
            'UploadOptions(detect_gzip=False, no_cache=False, '
            'permanent_cache=False, reduced_redundancy=False, secure=True)')


if __name__ == '__main__':
    unittest.main()
