import json
import threading
import subprocess
import typing as t
from pathlib import Path

import pytest

from aax_split_ffmpeg.model import FILE_CHECKSUM_START
from aax_split_ffmpeg.runner import ProcessRunner


# ffprobe -show_format -show_chapters output for a two-chapter book
_raw_ffprobe_json = """
{
    "chapters": [
        {
            "id": 0,
            "time_base": "1/1000",
            "start": 0,
            "start_time": "0.000000",
            "end": 30000,
            "end_time": "30.000000",
            "tags": {
                "title": "Intro"
            }
        },
        {
            "id": 1,
            "time_base": "1/1000",
            "start": 30000,
            "start_time": "30.000000",
            "end": 600000,
            "end_time": "600.000000",
            "tags": {
                "title": "Chapter One"
            }
        }
    ],
    "format": {
        "filename": "book.aax",
        "format_name": "mov,mp4,m4a,3gp,3g2,mj2",
        "tags": {
            "title": "The Book",
            "artist": "Some Author"
        }
    }
}
"""

CHECKSUM_BYTES = bytes.fromhex('deadbeef' * 5)
LOOKUP_OUTPUT = 'rc_status: 1,0,0,0:ABCD1234\n'


class FakeRunner(ProcessRunner):
    """
    ProcessRunner returning canned output and recording every call.

    Transcode jobs whose output filename contains one of 'fail_titles' exit with 1.
    """

    def __init__(
        self,
        probe_output: str = _raw_ffprobe_json,
        lookup_output: str = LOOKUP_OUTPUT,
        probe_returncode: int = 0,
        probe_encoding: str = 'utf-8',
        fail_titles: t.Iterable[str] = (),
        missing: t.Iterable[str] = (),
    ) -> None:
        self.probe_output = probe_output
        self.lookup_output = lookup_output
        self.probe_returncode = probe_returncode
        self.probe_encoding = probe_encoding
        self.fail_titles = set(fail_titles)
        self.missing = set(missing)
        self.probe_calls: t.List[t.List[str]] = []
        self.lookup_calls: t.List[t.Tuple[str, Path]] = []
        self.transcode_calls: t.List[t.List[str]] = []
        self._lock = threading.Lock()

    def run_probe(self, cmd):
        if 'ffprobe' in self.missing:
            raise FileNotFoundError(cmd[0])
        self.probe_calls.append(cmd)
        return subprocess.CompletedProcess(
            cmd, self.probe_returncode, self.probe_output.encode(self.probe_encoding), b'Invalid data found'
        )

    def run_lookup(self, checksum, table_dir):
        if 'rcrack' in self.missing:
            raise FileNotFoundError(str(Path(table_dir) / 'rcrack'))
        self.lookup_calls.append((checksum, table_dir))
        return subprocess.CompletedProcess(['rcrack'], 0, self.lookup_output.encode('utf-8'))

    def run_transcode(self, cmd):
        if 'ffmpeg' in self.missing:
            raise FileNotFoundError(cmd[0])
        with self._lock:
            self.transcode_calls.append(cmd)
        failed = any(title in cmd[-1] for title in self.fail_titles)
        return subprocess.CompletedProcess(
            cmd, 1 if failed else 0, b'', b'Conversion failed!' if failed else b''
        )


@pytest.fixture
def raw_ffprobe_json() -> str:
    return _raw_ffprobe_json


@pytest.fixture
def ffprobe_data(raw_ffprobe_json) -> t.Dict[str, t.Any]:
    return json.loads(raw_ffprobe_json)


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def make_runner():
    return FakeRunner


@pytest.fixture
def book(tmp_path) -> Path:
    """
    Synthetic 'book.aax' with the checksum bytes at the AAX checksum offset
    """
    path = tmp_path / 'book.aax'
    path.write_bytes(b'\x00' * FILE_CHECKSUM_START + CHECKSUM_BYTES + b'\x00' * 64)
    return path
