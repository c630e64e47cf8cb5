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
Exceptions raised by aax_split_ffmpeg

Every error carries the name of the pipeline stage it came from in 'stage',
which the CLI uses when reporting a fatal error.
"""


class SplitError(Exception):
    stage = 'split'


class ValidationError(SplitError):
    stage = 'validation'


class IoError(SplitError):
    stage = 'io'


class ContainerError(SplitError):
    stage = 'container'


class KeyResolutionError(SplitError):
    stage = 'key lookup'


class LookupFailed(KeyResolutionError):
    pass


class ParseError(KeyResolutionError):
    def __init__(self, msg: str, output: str = '') -> None:
        super().__init__(msg)
        self.output = output


class ExtractionFailed(SplitError):
    stage = 'extraction'

    def __init__(self, chapter_title: str, reason: str = '') -> None:
        msg = 'chapter {!r} failed'.format(chapter_title)
        if reason:
            msg = '{}: {}'.format(msg, reason)
        super().__init__(msg)
        self.chapter_title = chapter_title
        self.reason = reason
