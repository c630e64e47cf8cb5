from pathlib import Path

from aax_split_ffmpeg import compute_workitems, output_name, workitem_to_ffmpeg_cmd
from aax_split_ffmpeg.ffmpeg import output_names
from aax_split_ffmpeg.model import ChapterInfo, Options, WorkItem


def test_workitem_to_ffmpeg_cmd():
    wi = WorkItem(
        infile=Path('book.aax'),
        outfile=Path('out/book - Intro.mp3'),
        activation_bytes='ABCD1234',
        bitrate='256k',
        start=13.123,
        end=42.5363,
        ch_title='Intro',
    )

    cmd = workitem_to_ffmpeg_cmd(wi)

    expected = [
        'ffmpeg',
        '-nostdin',
        '-v',
        'error',
        '-activation_bytes',
        'ABCD1234',
        '-i',
        'book.aax',
        '-vn',
        '-b:a',
        '256k',
        '-ss',
        '13.123000',
        '-to',
        '42.536300',
        '-y',
        'out/book - Intro.mp3',
    ]

    assert cmd == expected

    cmd = workitem_to_ffmpeg_cmd(wi, overwrite=False)
    assert '-n' in cmd and '-y' not in cmd


def test_output_name():
    assert output_name('book', 'Intro') == 'book - Intro.mp3'
    assert output_name('book', 'Chapter One') == 'book - Chapter One.mp3'


def test_output_name_drops_special_characters():
    assert output_name('book', 'Part 1/2: "Why?"') == 'book - Part 12 Why.mp3'


def test_distinct_titles_give_distinct_names():
    chapters = [ChapterInfo('Intro', 0, 1), ChapterInfo('Outro', 1, 2)]
    names = output_names('book', chapters)
    assert len(set(names)) == 2


def test_duplicate_titles_are_numbered():
    chapters = [
        ChapterInfo('Intro', 0, 1),
        ChapterInfo('Part', 1, 2),
        ChapterInfo('Part', 2, 3),
    ]
    assert output_names('book', chapters) == [
        'book - Intro.mp3',
        'book - Part.mp3',
        'book - Part (3).mp3',
    ]
    assert output_names('book', chapters, unique=False)[1:] == [
        'book - Part.mp3',
        'book - Part.mp3',
    ]


def test_compute_workitems():
    chapters = [ChapterInfo('Intro', 0.0, 30.0), ChapterInfo('Chapter One', 30.0, 600.0)]
    opts = Options(bitrate='128k', outdir=Path('foo'))
    work_items = list(compute_workitems(Path('/books/book.aax'), chapters, 'ABCD1234', opts))
    assert work_items == [
        WorkItem(
            infile=Path('/books/book.aax'),
            outfile=Path('foo/book - Intro.mp3'),
            activation_bytes='ABCD1234',
            bitrate='128k',
            start=0.0,
            end=30.0,
            ch_title='Intro',
        ),
        WorkItem(
            infile=Path('/books/book.aax'),
            outfile=Path('foo/book - Chapter One.mp3'),
            activation_bytes='ABCD1234',
            bitrate='128k',
            start=30.0,
            end=600.0,
            ch_title='Chapter One',
        ),
    ]


def test_compute_workitems_no_chapters():
    assert list(compute_workitems(Path('book.aax'), [], 'ABCD1234', Options())) == []


def test_numbered_name_does_not_collide_with_existing_title():
    chapters = [
        ChapterInfo('A', 0, 1),
        ChapterInfo('A (3)', 1, 2),
        ChapterInfo('A', 2, 3),
    ]
    names = output_names('book', chapters)
    assert len(set(names)) == 3
    assert names == ['book - A.mp3', 'book - A (3).mp3', 'book - A (4).mp3']


def test_title_with_only_special_characters_gets_chapter_number():
    chapters = [ChapterInfo('Intro', 0, 1), ChapterInfo('???', 1, 2), ChapterInfo('/:', 2, 3)]
    assert output_names('book', chapters) == [
        'book - Intro.mp3',
        'book - 2.mp3',
        'book - 3.mp3',
    ]
