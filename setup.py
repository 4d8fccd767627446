#!/usr/bin/python3
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

from setuptools import setup, find_packages

# s3push.__version__ is read back from the installed metadata
version = '1.0.0'


name = 's3push'


setup(
    name=name,
    version=version,
    description='Signed uploads to S3 compatible object storage',
    license='Apache License (2.0)',
    author='The s3push Authors',
    packages=find_packages(exclude=['test', 'test.*', 'bin']),
    python_requires='>=3.9',
    classifiers=[
        'Development Status :: 4 - Beta',
        'License :: OSI Approved :: Apache Software License',
        'Operating System :: POSIX :: Linux',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3 :: Only',
        'Environment :: Console',
        ],
    install_requires=[
        'eventlet>=0.25.0',
        ],
    extras_require={
        'test': [
            'pytest',
            ],
        },
    scripts=[
        'bin/s3push-upload',
    ],
    )
