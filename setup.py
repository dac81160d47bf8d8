#!/usr/bin/env python3
"""
Setup configuration for spotify-suite
Command-line tools for exporting, enriching and creating Spotify playlists
"""

from setuptools import setup, find_packages

# Read README for long description
with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

# Core requirements (always installed)
core_requirements = [
    "spotipy>=2.23.0",
    "requests>=2.31.0",
    "rich-click>=1.7.0",
    "rich>=13.0.0",
    "tqdm>=4.66.1",
    "pyyaml>=6.0.1",
    "python-dotenv>=1.0.0",
]

setup(
    name="spotify-suite",
    version="1.0.0",
    author="spotify-suite Team",
    description="Export Spotify playlists to CSV, find original albums and create playlists from CSV",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["spotify_suite", "spotify_suite.*"]),
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Console",
        "Intended Audience :: End Users/Desktop",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Multimedia :: Sound/Audio",
        "Topic :: Utilities",
    ],
    python_requires=">=3.10",
    install_requires=core_requirements,
    extras_require={
        "dev": [
            "pytest>=7.4.3",
            "black>=23.11.0",
            "flake8>=6.1.0",
            "mypy>=1.7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "spotify-suite=spotify_suite.cli:main",
            "spotify-export=spotify_suite.cli:export_main",
            "spotify-find-albums=spotify_suite.cli:find_albums_main",
            "spotify-find-albums-csv=spotify_suite.cli:find_albums_csv_main",
            "spotify-create-playlist=spotify_suite.cli:create_playlist_main",
        ],
    },
    keywords="spotify playlist csv export album cli",
)
