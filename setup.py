from setuptools import setup, find_packages
import pathlib

here = pathlib.Path(__file__).parent.resolve()

long_description = (here / 'README.md').read_text(encoding='utf-8')

requirements = []

if __name__ == "__main__":
    setup(
            name="aax-split-ffmpeg",
            version='0.1.0',
            description='Split Audible AAX audiobooks into per-chapter MP3 files using rcrack and ffmpeg',
            long_description=long_description,
            long_description_content_type='text/markdown',
            package_dir={'': 'src'},
            packages=find_packages(where='src'),
            entry_points={
                'console_scripts': [
                    'aax-split-ffmpeg=aax_split_ffmpeg.cli:main'
                ]
            },
            python_requires='>=3.8, <4',
            install_requires=requirements,
            extras_require={
                'dev': [
                    'pytest'
                ]
            },
    )
