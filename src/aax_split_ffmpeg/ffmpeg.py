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
Building and running the per-chapter ffmpeg commands
"""

import logging
import typing as t

from .errors import ExtractionFailed
from .model import ChapterInfo, WorkItem
from .runner import ProcessRunner

logger = logging.getLogger(__name__)


# Special characters interpreted specially by most crappy software

_CHR_BLACKLIST = [
    '\\',
    '/',
    ':',
    '*',
    '?',
    '"',
    '<',
    '>',
    '|',
    '\0',
]


def _sanitize_string(original: str) -> str:
    """
    Filter typical special letters from string
    """
    return ''.join(c for c in original if c not in _CHR_BLACKLIST)


def output_name(book_title: str, chapter_title: str) -> str:
    """
    >>> output_name('book', 'Intro')
    'book - Intro.mp3'
    """
    return '{} - {}.mp3'.format(book_title, _sanitize_string(chapter_title))


def output_names(
    book_title: str, chapters: t.Sequence[ChapterInfo], unique: bool = True
) -> t.List[str]:
    """
    Output filename for each chapter, in the same order.

    Titles with nothing left after sanitizing are replaced by the 1-based
    chapter number.

    With 'unique', a chapter whose name is already taken by an earlier chapter
    gets its chapter number appended, e.g. 'book - Part (3).mp3'; if that is
    taken too, the number is increased until the name is free.
    Otherwise chapters with equal titles share (and overwrite) the same file.
    """
    names: t.List[str] = []
    taken: t.Set[str] = set()
    for num, chap in enumerate(chapters, start=1):
        label = _sanitize_string(chap.title) or str(num)
        name = output_name(book_title, label)
        suffix = num
        while unique and name in taken:
            name = output_name(book_title, '{} ({})'.format(label, suffix))
            suffix += 1
        taken.add(name)
        names.append(name)
    return names


def _fmt_seconds(secs: float) -> str:
    return '{:.6f}'.format(secs)


def workitem_to_ffmpeg_cmd(w_item: WorkItem, overwrite: bool = True) -> t.List[str]:
    """
    Build command list from WorkItem.
    The command list can be directly passed to subprocess.run() or similar.
    """

    # NOTE:
    # '-nostdin' param should prevent your terminal becoming all messed up
    # during the pool processing.  But if it does, you can fix it with 'reset'
    # and/or 'stty sane'.

    return [
        'ffmpeg',
        '-nostdin',
        '-v',
        'error',
        '-activation_bytes',
        w_item.activation_bytes,
        '-i',
        str(w_item.infile),
        '-vn',
        '-b:a',
        w_item.bitrate,
        '-ss',
        _fmt_seconds(w_item.start),
        '-to',
        _fmt_seconds(w_item.end),
        ('-y' if overwrite else '-n'),
        str(w_item.outfile),
    ]


def ffmpeg_split_chapter(
    w_item: WorkItem, runner: ProcessRunner, overwrite: bool = True
) -> WorkItem:
    """
    Split a single chapter using ffmpeg subprocess. Blocks until completion.

    Raises ExtractionFailed naming the chapter if ffmpeg can not be started
    or exits with an error.
    """

    cmd = workitem_to_ffmpeg_cmd(w_item, overwrite=overwrite)

    print('Writing {}... '.format(w_item.outfile))

    try:
        proc = runner.run_transcode(cmd)
    except OSError as exn:
        raise ExtractionFailed(w_item.ch_title, 'failed to start ffmpeg: {}'.format(exn)) from exn

    if proc.returncode != 0:
        stderr = (proc.stderr or b'').decode('utf-8', errors='replace').strip()
        logger.debug('command that failed: %s', cmd)
        raise ExtractionFailed(
            w_item.ch_title, 'ffmpeg exited with {}: {}'.format(proc.returncode, stderr)
        )

    return w_item
