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

import os
import typing as t
from pathlib import Path
from dataclasses import dataclass, field

# Beginning of the AAX file checksum
FILE_CHECKSUM_START = 653
CHECKSUM_BUFFER_SIZE = 20

DEFAULT_BITRATE = '256k'
DEFAULT_RCRACK_DIR = Path('./rcrack')


def _default_concurrency() -> int:
    return os.cpu_count() or 1


@dataclass(frozen=True)
class ChapterInfo:
    title: str
    start: float
    end: float


@dataclass(frozen=True)
class WorkItem:
    """
    Everything a single ffmpeg invocation needs to produce one chapter file
    """

    infile: Path
    outfile: Path
    activation_bytes: str
    bitrate: str
    start: float
    end: float
    ch_title: str


@dataclass
class Options:
    bitrate: str = DEFAULT_BITRATE
    concurrency: int = field(default_factory=_default_concurrency)
    outdir: Path = Path('.')
    rcrack_dir: Path = DEFAULT_RCRACK_DIR
    checksum_offset: int = FILE_CHECKSUM_START
    checksum_length: int = CHECKSUM_BUFFER_SIZE
    activation_bytes: t.Optional[str] = None
    overwrite: bool = True
    unique_names: bool = True
    metadata_encoding: t.Optional[str] = None
    dry_run: bool = False
    verbose: bool = False


@dataclass
class Report:
    total: int = 0
    succeeded: t.List[str] = field(default_factory=list)
    failed: t.List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed
