"""Shared fixtures: synthetic images and a clean CHROMA_SENSE_* environment."""

import os
from pathlib import Path

import pytest
from PIL import Image


@pytest.fixture(autouse=True)
def _clean_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in list(os.environ):
        if key.startswith('CHROMA_SENSE_'):
            monkeypatch.delenv(key)


@pytest.fixture
def make_png(tmp_path: Path):
    """Write a solid-colour PNG and return its path as a string."""

    def _make(name: str, colour: tuple[int, ...], size: tuple[int, int] = (300, 150)) -> str:
        mode = 'RGBA' if len(colour) == 4 else 'RGB'
        path = tmp_path / name
        Image.new(mode, size, colour).save(path)
        return str(path)

    return _make

