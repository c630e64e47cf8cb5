# Copyright 2018 Markus Holmström (MawKKe)
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Reading the AAX file checksum used for activation bytes lookup
"""

import typing as t
from pathlib import Path

from .errors import IoError
from .model import FILE_CHECKSUM_START, CHECKSUM_BUFFER_SIZE


def extract_checksum(
    stream: t.BinaryIO,
    offset: int = FILE_CHECKSUM_START,
    length: int = CHECKSUM_BUFFER_SIZE,
) -> str:
    """
    Read 'length' bytes at absolute position 'offset' of 'stream' and return
    them as a lowercase hex string. Moves the stream position.
    """
    try:
        stream.seek(offset)
        buf = stream.read(length)
    except OSError as exn:
        raise IoError('could not read checksum at offset {}: {}'.format(offset, exn)) from exn

    if len(buf) != length:
        raise IoError(
            'short read at offset {}: wanted {} bytes, got {} (truncated file?)'.format(
                offset, length, len(buf)
            )
        )

    return buf.hex()


def read_checksum(
    path: Path,
    offset: int = FILE_CHECKSUM_START,
    length: int = CHECKSUM_BUFFER_SIZE,
) -> str:
    try:
        with open(path, 'rb') as stream:
            return extract_checksum(stream, offset, length)
    except OSError as exn:
        raise IoError('could not open {}: {}'.format(path, exn)) from exn
