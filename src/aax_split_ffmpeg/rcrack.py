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
Recovering activation bytes from the file checksum with rcrack
"""

import logging
from pathlib import Path

from .errors import LookupFailed, ParseError
from .model import DEFAULT_RCRACK_DIR
from .runner import ProcessRunner

logger = logging.getLogger(__name__)


def parse_activation_bytes(output: str) -> str:
    """
    Activation bytes are whatever follows the last ':' in rcrack output

    >>> parse_activation_bytes('rc_status: 1,0,0,0:ABCD1234\\n')
    'ABCD1234'
    """
    if ':' not in output:
        raise ParseError('unexpected rcrack output, no activation bytes found', output)

    key = output.rsplit(':', 1)[-1].strip()
    if not key:
        raise ParseError('rcrack output ends without activation bytes', output)
    return key


def resolve_activation_bytes(
    checksum: str,
    runner: ProcessRunner,
    rcrack_dir: Path = DEFAULT_RCRACK_DIR,
) -> str:
    try:
        proc = runner.run_lookup(checksum, rcrack_dir)
    except OSError as exn:
        raise LookupFailed('failed to start rcrack in {}: {}'.format(rcrack_dir, exn)) from exn

    output = proc.stdout.decode('utf-8', errors='replace')
    logger.debug('rcrack exited with %s, output: %r', proc.returncode, output)

    return parse_activation_bytes(output)
