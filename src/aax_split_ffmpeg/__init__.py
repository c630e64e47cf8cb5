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
Split Audible AAX audiobooks into per-chapter MP3 files using ffmpeg


The activation bytes needed for decrypting the file are recovered from the
file checksum with rcrack and a set of precomputed tables. Chapter markers are
read with ffprobe, and each chapter is extracted and re-encoded by its own
ffmpeg process; these run in parallel.

The CLI application should be available as:

    $ aax-split-ffmpeg

...assuming this package installed with 'pip install' or similar.  Run the
script with --help to get started.

The package can also be used as a library. See 'aax_split_ffmpeg/util.py'
(split_audiobook) for how the functions combine into the full pipeline.
"""

from .checksum import extract_checksum, read_checksum
from .rcrack import parse_activation_bytes, resolve_activation_bytes
from .ffprobe import read_fileinfo, chapter_infos
from .ffmpeg import output_name, workitem_to_ffmpeg_cmd, ffmpeg_split_chapter
from .workers import process_workitems
from .util import compute_workitems, split_audiobook
from .runner import ProcessRunner

__all__ = [
    'extract_checksum',
    'read_checksum',
    'parse_activation_bytes',
    'resolve_activation_bytes',
    'read_fileinfo',
    'chapter_infos',
    'output_name',
    'workitem_to_ffmpeg_cmd',
    'ffmpeg_split_chapter',
    'process_workitems',
    'compute_workitems',
    'split_audiobook',
    'ProcessRunner',
]
__version__ = '0.1.0'
