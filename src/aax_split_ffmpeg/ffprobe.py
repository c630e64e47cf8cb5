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
Reading container metadata and chapter markers with ffprobe
"""

import json
import typing as t
from pathlib import Path
from dataclasses import dataclass, field

from .errors import ContainerError
from .model import ChapterInfo
from .runner import ProcessRunner


@dataclass
class Chapter:
    id: int
    start: int
    end: int
    time_base: t.Tuple[int, int]
    tags: t.Dict[str, str] = field(default_factory=dict)

    def title(self) -> t.Optional[str]:
        return self.tags.get('title', None)

    def seconds(self, ticks: int) -> float:
        num, den = self.time_base
        return ticks * num / den


@dataclass
class Metadata:
    chapters: t.List[Chapter]
    tags: t.Dict[str, str] = field(default_factory=dict)


@dataclass
class FileInfo:
    path: Path
    meta: Metadata


def ffprobe(infile: Path, runner: ProcessRunner, encoding: t.Optional[str] = None) -> str:
    """
    Run ffprobe on 'infile' and return its JSON output (format and chapters) as text.

    The file metadata is assumed to be UTF-8 encoded; the default encoding
    can be overridden with the 'encoding' argument.
    """

    command = [
        'ffprobe',
        '-i',
        str(infile),
        '-v',
        'error',
        '-print_format',
        'json',
        '-show_format',
        '-show_chapters',
    ]

    try:
        proc = runner.run_probe(command)
    except OSError as exn:
        raise ContainerError('failed to start ffprobe: {}'.format(exn)) from exn

    if proc.returncode != 0:
        stderr = (proc.stderr or b'').decode('utf-8', errors='replace').strip()
        raise ContainerError('ffprobe could not open {}: {}'.format(infile, stderr))

    try:
        return proc.stdout.decode(encoding or 'utf-8')
    except UnicodeDecodeError as exn:
        raise ContainerError('ffprobe output is not valid {}: {}'.format(encoding or 'utf-8', exn)) from exn


EXPECT_CHAPTER_KEYS = {'id', 'start', 'end', 'time_base'}


def _parse_timebase(base: str) -> t.Tuple[int, int]:
    try:
        a, b = base.split('/')
        num, den = int(a), int(b)
    except ValueError as exn:
        raise ContainerError('invalid chapter time base: {!r}'.format(base)) from exn
    if den == 0:
        raise ContainerError('invalid chapter time base: {!r}'.format(base))
    return (num, den)


def parse_chapter_dict(chap: t.Dict[str, t.Any]) -> Chapter:
    have_chap_keys = set(chap.keys())

    if missing := EXPECT_CHAPTER_KEYS - have_chap_keys:
        raise ContainerError(
            f'Expected chapter to have keys {EXPECT_CHAPTER_KEYS}, got {have_chap_keys} (missing: {missing})'
        )

    return Chapter(
        id=int(chap['id']),
        start=int(chap['start']),
        end=int(chap['end']),
        time_base=_parse_timebase(chap['time_base']),
        tags=chap.get('tags', {}),
    )


def parse_metadata(content: str) -> Metadata:
    try:
        data = json.loads(content)
    except json.JSONDecodeError as exn:
        raise ContainerError('could not parse ffprobe output: {}'.format(exn)) from exn

    chapters = []
    if 'chapters' in data.keys():
        chapters = [parse_chapter_dict(entry) for entry in data['chapters']]

    tags = data.get('format', {}).get('tags', {})

    return Metadata(chapters, tags)


def read_fileinfo(
    infile: Path, runner: ProcessRunner, metadata_encoding: t.Optional[str] = None
) -> FileInfo:
    meta_content = ffprobe(infile, runner, encoding=metadata_encoding)
    return FileInfo(Path(infile), parse_metadata(meta_content))


def chapter_info(chap: Chapter) -> ChapterInfo:
    # Untitled chapters are named after their id
    title = chap.title() or str(chap.id)
    return ChapterInfo(
        title=title,
        start=chap.seconds(chap.start),
        end=chap.seconds(chap.end),
    )


def chapter_infos(meta: Metadata) -> t.List[ChapterInfo]:
    """
    One ChapterInfo per container chapter, in container order
    """
    return [chapter_info(ch) for ch in meta.chapters]
