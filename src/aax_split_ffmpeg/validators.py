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
Validation of command line values
"""

import re
import argparse
import typing as t
from pathlib import Path

from .errors import ValidationError

# e.g. '256k', '1.5M', '128000'
_BITRATE_RE = re.compile(r'^[0-9]+(\.[0-9]+)?[kKM]?$')


def file_name(value: str) -> Path:
    if not value:
        raise ValidationError('file name must not be empty')
    path = Path(value)
    if not path.is_file():
        raise ValidationError('{} does not exist or is not a file'.format(value))
    if path.stat().st_size == 0:
        raise ValidationError('{} is empty'.format(value))
    return path


def bitrate(value: str) -> str:
    if not _BITRATE_RE.match(value):
        raise ValidationError(
            '{!r} is not a valid bitrate (expected e.g. 256k, 1M or 128000)'.format(value)
        )
    return value


def argtype(validator: t.Callable[[str], t.Any]) -> t.Callable[[str], t.Any]:
    """
    Adapt a validator for use as argparse 'type='
    """

    def _check(value: str) -> t.Any:
        try:
            return validator(value)
        except ValidationError as exn:
            raise argparse.ArgumentTypeError(str(exn)) from exn

    _check.__name__ = validator.__name__
    return _check
