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
Spawning of the external tools (ffprobe, rcrack, ffmpeg)

All process creation goes through ProcessRunner so that the rest of the
package can be exercised with a runner that returns canned results.
"""

import logging
import subprocess
import typing as t
from pathlib import Path

logger = logging.getLogger(__name__)


class ProcessRunner:
    """
    Runs external commands and blocks until they complete.

    Every method returns a subprocess.CompletedProcess with stdout (and stderr,
    where it is captured separately) as bytes. OSError propagates to the caller
    when the executable cannot be started.
    """

    def run_probe(self, cmd: t.List[str]) -> 'subprocess.CompletedProcess[bytes]':
        logger.debug('probe: %s', cmd)
        # ffmpeg & ffprobe write output into stderr, except when
        # using -show_XXXX and -print_format.
        return subprocess.run(
            cmd,
            check=False,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
        )

    def run_lookup(self, checksum: str, table_dir: Path) -> 'subprocess.CompletedProcess[bytes]':
        """
        Run rcrack against the tables in 'table_dir'; stdout and stderr are combined.
        """
        table_dir = Path(table_dir)
        cmd = [str((table_dir / 'rcrack').resolve()), '.', '-h', checksum]
        logger.debug('lookup: %s (cwd: %s)', cmd, table_dir)
        return subprocess.run(
            cmd,
            cwd=str(table_dir),
            check=False,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
        )

    def run_transcode(self, cmd: t.List[str]) -> 'subprocess.CompletedProcess[bytes]':
        logger.debug('transcode: %s', cmd)
        return subprocess.run(
            cmd,
            check=False,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
        )
