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
Sequencing of the split: checksum, activation bytes, chapters, ffmpeg jobs
"""

import shlex
import logging
import typing as t
from pathlib import Path

from .checksum import read_checksum
from .ffmpeg import output_names, workitem_to_ffmpeg_cmd
from .ffprobe import FileInfo, chapter_infos, read_fileinfo
from .model import ChapterInfo, Options, Report, WorkItem
from .rcrack import resolve_activation_bytes
from .runner import ProcessRunner
from .workers import process_workitems

logger = logging.getLogger(__name__)


def compute_workitems(
    infile: Path,
    chapters: t.Sequence[ChapterInfo],
    activation_bytes: str,
    opts: Options,
) -> t.Iterator[WorkItem]:
    """
    Compute WorkItem's for each chapter to be processed. These WorkItems can be then used
    for launching ffmpeg processes (see ffmpeg_split_chapter)

    Arguments:

    infile
        Path to the AAX file. Its stem is used as the book title in output filenames.
    chapters
        Chapter records, as produced by chapter_infos()
    activation_bytes
        Decryption key passed verbatim to every ffmpeg invocation
    opts
        Bitrate, output directory and filename collision handling
    """

    book_title = Path(infile).stem
    names = output_names(book_title, chapters, unique=opts.unique_names)

    for chapter, name in zip(chapters, names):
        yield WorkItem(
            infile=Path(infile),
            outfile=Path(opts.outdir) / name,
            activation_bytes=activation_bytes,
            bitrate=opts.bitrate,
            start=chapter.start,
            end=chapter.end,
            ch_title=chapter.title,
        )


def print_metadata(info: FileInfo) -> None:
    for key, value in info.meta.tags.items():
        print('{}: {}'.format(key, value))


def split_audiobook(
    infile: Path, opts: Options, runner: t.Optional[ProcessRunner] = None
) -> Report:
    """
    Split 'infile' into per-chapter MP3 files in opts.outdir.

    The activation bytes are resolved before any ffmpeg job is started. Raises
    a SplitError subclass for any failure before dispatch; extraction failures
    are collected in the returned Report.
    """
    runner = runner or ProcessRunner()
    infile = Path(infile)

    info = read_fileinfo(infile, runner, opts.metadata_encoding)
    print_metadata(info)

    if opts.activation_bytes:
        activation_bytes = opts.activation_bytes
        logger.info('Using given activation bytes, skipping rcrack')
    else:
        checksum = read_checksum(infile, opts.checksum_offset, opts.checksum_length)
        print('\nRunning rcrack for {}...'.format(checksum))
        activation_bytes = resolve_activation_bytes(checksum, runner, opts.rcrack_dir)
    print('activation_bytes: {}'.format(activation_bytes))

    chapters = chapter_infos(info.meta)
    work_items = list(compute_workitems(infile, chapters, activation_bytes, opts))
    logger.info('Found: %d chapters to be processed', len(work_items))

    if opts.dry_run:
        print('# NOTE: dry-run requested')
        for w_item in work_items:
            print(shlex.join(workitem_to_ffmpeg_cmd(w_item, overwrite=opts.overwrite)))
        return Report(total=len(work_items))

    Path(opts.outdir).mkdir(parents=True, exist_ok=True)

    return process_workitems(
        work_items, runner, concurrency=opts.concurrency, overwrite=opts.overwrite
    )
