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
CLI application implementation for aax-split-ffmpeg
"""

import sys
import logging
import argparse
import typing as t
from pathlib import Path
from multiprocessing import cpu_count

from . import validators
from .errors import SplitError, ValidationError
from .model import DEFAULT_BITRATE, DEFAULT_RCRACK_DIR, Options
from .runner import ProcessRunner
from .util import split_audiobook

logger = logging.getLogger(__name__)


def parse_args(argv: t.List[str]) -> argparse.Namespace:
    """
    Parse argv into argparse.Namespace

    Arguments:

    argv
        a list of strings, usually the value of sys.argv

    WARNING:
        If argv is malformed, the process will exit. Avoid using this function in tests.
    """
    parser = argparse.ArgumentParser(
        prog=Path(argv[0]).name,
        description='Split AAX files from Audible into multiple MP3 files by chapter using ffmpeg.',
    )
    parser.add_argument('infile', metavar='FILE', help='AAX file to split')
    parser.add_argument('-b', '--bitrate', default=DEFAULT_BITRATE,
                        type=validators.argtype(validators.bitrate),
                        help='Set the desired bitrate of outputted MP3 files (default: %(default)s)')
    parser.add_argument('-j', '--concurrency', type=int, default=cpu_count(),
                        help='Number of concurrent ffmpeg worker processes')
    parser.add_argument('-o', '--outdir', type=Path, default=Path('.'),
                        help='Output directory. Created if does not exist yet. (default: current directory)')
    parser.add_argument('--rcrack-dir', type=Path, default=DEFAULT_RCRACK_DIR,
                        help='Directory containing the rcrack executable and its tables (default: %(default)s)')
    parser.add_argument('--activation-bytes',
                        help='Use these activation bytes instead of looking them up with rcrack')
    parser.add_argument('--no-overwrite', dest='overwrite', action='store_false',
                        help='Do not overwrite existing chapter files')
    parser.add_argument('--allow-duplicate-names', dest='unique_names', action='store_false',
                        help='Do not number chapters whose output filenames collide; '
                             'later chapters overwrite earlier ones')
    parser.add_argument('--input-encoding',
                        help='Parse ffprobe output with this encoding (default: UTF8)')
    parser.add_argument('--dry-run', action='store_true',
                        help='Show what ffmpeg commands would be run without running them')
    parser.add_argument('--verbose', action='store_true',
                        help='Show more output')

    args = parser.parse_args(argv[1:])

    # Invalid flags must be reported before the input file is touched
    try:
        args.infile = validators.file_name(args.infile)
    except ValidationError as exn:
        parser.error(str(exn))

    args.concurrency = 1 if args.concurrency < 1 else args.concurrency

    return args


def options_from_args(args: argparse.Namespace) -> Options:
    return Options(
        bitrate=args.bitrate,
        concurrency=args.concurrency,
        outdir=args.outdir,
        rcrack_dir=args.rcrack_dir,
        activation_bytes=args.activation_bytes,
        overwrite=args.overwrite,
        unique_names=args.unique_names,
        dry_run=args.dry_run,
        metadata_encoding=args.input_encoding,
        verbose=args.verbose,
    )


def _main(args: argparse.Namespace, runner: t.Optional[ProcessRunner] = None) -> int:
    """
    CLI main function for aax-split-ffmpeg

    Arguments:

    args
        an argparse.Namespace() object containing the required command line arguments
        See parse_args() for more details.
    runner
        ProcessRunner used for all external commands
    """

    opts = options_from_args(args)

    logging.basicConfig(level=logging.DEBUG if opts.verbose else logging.INFO)
    logger.debug('options: %s', opts)

    try:
        report = split_audiobook(args.infile, opts, runner)
    except SplitError as exn:
        print('ERROR: {}: {}'.format(exn.stage, exn), file=sys.stderr)
        return 1

    return 0 if report.ok else 1


def main() -> t.NoReturn:
    """
    CLI main function for aax-split-ffmpeg
    """
    sys.exit(_main(parse_args(sys.argv)))


if __name__ == '__main__':
    main()
