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
Functionality for consuming WorkItems and producing final chapter files
with parallel worker threads.

Every job is run to completion even if some of them fail; failures are
collected and reported by chapter title.
"""

import sys
import logging
import typing as t
from concurrent.futures import (
    Future,
    ThreadPoolExecutor,
    as_completed,
)

from .errors import ExtractionFailed
from .ffmpeg import ffmpeg_split_chapter
from .model import Report, WorkItem
from .runner import ProcessRunner

logger = logging.getLogger(__name__)


def process_workitems(
    work_items: t.Iterable[WorkItem],
    runner: ProcessRunner,
    concurrency: int = 1,
    overwrite: bool = True,
) -> Report:
    """
    Runs ffmpeg worker process for each WorkItem, parallelized with ThreadPoolExecutor
    """

    concurrency = max(1, concurrency)
    logger.info('Starting ThreadPoolExecutor with concurrency=%d', concurrency)

    with ThreadPoolExecutor(max_workers=concurrency) as pool:

        def start_all() -> t.Iterator[t.Tuple['Future[WorkItem]', WorkItem]]:
            for w_item in work_items:
                logger.debug('Submitting job: %s', w_item)
                yield (
                    pool.submit(
                        ffmpeg_split_chapter,
                        w_item,
                        runner,
                        overwrite,
                    ),
                    w_item,
                )

        futs = dict(start_all())
        report = _wait_for_results(futs)

    print(
        'Total jobs: {n}, Success: {success}, Errors: {error}'.format(
            n=report.total, success=len(report.succeeded), error=len(report.failed)
        )
    )

    if not report.ok:
        print(
            'WARNING: Due to errors, these chapters were not processed: {}'.format(
                ', '.join(repr(title) for title in report.failed)
            ),
            file=sys.stderr,
        )

    return report


def _wait_for_results(futs: t.Dict['Future[WorkItem]', WorkItem]) -> Report:
    """
    Collect ffmpeg processing results and display whether chapter was processed correctly
    """
    report = Report(total=len(futs))
    for fut in as_completed(futs):
        w_item = futs[fut]
        try:
            fut.result()
        except ExtractionFailed as exn:
            report.failed.append(exn.chapter_title)
            print('FAILURE: {}'.format(exn), file=sys.stderr)
        else:
            report.succeeded.append(w_item.ch_title)
            logger.info('SUCCESS: %s', w_item.outfile)
    return report
