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

import importlib.metadata

try:
    __version__ = __canonical_version__ = importlib.metadata.distribution(
        's3push').version
except importlib.metadata.PackageNotFoundError:
    # running from a checkout that was never installed
    __version__ = __canonical_version__ = 'unknown'
