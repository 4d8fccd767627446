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

import io
import struct
import zlib

GZIP_MAGIC = b'\x1f\x8b'
# magic, deflate, no flags, zero mtime, max compression, unknown OS
GZIP_HEADER = b'\037\213\010\000\000\000\000\000\002\377'


class CompressingFileReader(object):
    '''
    Wraps a file object and provides a read method that returns gzip'd data.

    One warning: if read is called with a small value, the data returned may
    be bigger than the value. In this case, the "compressed" data will be
    bigger than the original data. To solve this, use a bigger read buffer.

    The gzip header carries a zero mtime, so compressing the same input
    twice gives identical bytes.

    :param file_obj: File object to read from
    :param compresslevel: compression level
    '''

    def __init__(self, file_obj, compresslevel=9):
        self._f = file_obj
        self._compressor = zlib.compressobj(compresslevel,
                                            zlib.DEFLATED,
                                            -zlib.MAX_WBITS,
                                            zlib.DEF_MEM_LEVEL,
                                            0)
        self.done = False
        self.first = True
        self.crc32 = 0
        self.total_size = 0

    def read(self, *a, **kw):
        if self.done:
            return b''
        x = self._f.read(*a, **kw)
        if x:
            self.crc32 = zlib.crc32(x, self.crc32) & 0xffffffff
            self.total_size += len(x)
            compressed = self._compressor.compress(x)
            if not compressed:
                compressed = self._compressor.flush(zlib.Z_SYNC_FLUSH)
        else:
            compressed = self._compressor.flush(zlib.Z_FINISH)
            crc32 = struct.pack("<L", self.crc32 & 0xffffffff)
            size = struct.pack("<L", self.total_size & 0xffffffff)
            footer = crc32 + size
            compressed += footer
            self.done = True
        if self.first:
            self.first = False
            compressed = GZIP_HEADER + compressed
        return compressed

    def __iter__(self):
        return self

    def __next__(self):
        chunk = self.read(65536)
        if not chunk:
            raise StopIteration
        return chunk


def is_gzipped(body):
    """
    Returns True if ``body`` already starts with the gzip magic number.
    """
    return body[:2] == GZIP_MAGIC


def compress(body, compresslevel=9):
    """
    Gzip ``body`` in memory.

    :param body: bytes to compress
    :param compresslevel: zlib compression level
    :returns: the gzip stream as bytes
    """
    return b''.join(CompressingFileReader(io.BytesIO(body), compresslevel))
