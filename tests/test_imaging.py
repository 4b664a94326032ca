"""Tests for chroma_sense.core.imaging: Pillow loading, buffers and resizing."""

from pathlib import Path

import pytest
from chroma_sense.core.errors import ConfigError, ImageLoadError
from chroma_sense.core.extractor import PaletteExtractor
from chroma_sense.core.imaging import load_image, pil_resize, resample_filter, to_pixel_buffer
from PIL import Image


class TestLoadImage:
    def test_png_converted_to_rgba(self, make_png):
        loaded = load_image(make_png('solid.png', (200, 10, 10)))
        assert loaded.image.mode == 'RGBA'
        assert (loaded.width, loaded.height) == (300, 150)
        assert loaded.original_size == (300, 150)

    def test_palette_mode_image(self, tmp_path: Path):
        path = tmp_path / 'indexed.gif'
        Image.new('RGB', (20, 10), (0, 128, 255)).convert('P').save(path)
        loaded = load_image(str(path))
        assert loaded.image.mode == 'RGBA'

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(ImageLoadError, match='image not found'):
            load_image(str(tmp_path / 'missing.png'))

    def test_not_an_image(self, tmp_path: Path):
        path = tmp_path / 'notes.txt'
        path.write_text('just text')
        with pytest.raises(ImageLoadError, match='not a readable image'):
            load_image(str(path))

    def test_load_error_is_os_error(self, tmp_path: Path):
        with pytest.raises(OSError):
            load_image(str(tmp_path / 'missing.png'))


class TestToPixelBuffer:
    def test_rgb_gets_opaque_alpha(self):
        buf = to_pixel_buffer(Image.new('RGB', (2, 1), (1, 2, 3)))
        assert (buf.width, buf.height) == (2, 1)
        assert bytes(buf.data) == bytes([1, 2, 3, 255, 1, 2, 3, 255])

    def test_rgba_kept(self):
        buf = to_pixel_buffer(Image.new('RGBA', (1, 1), (9, 8, 7, 6)))
        assert bytes(buf.data) == bytes([9, 8, 7, 6])


class TestResample:
    def test_default_bilinear(self):
        assert resample_filter() == Image.Resampling.BILINEAR

    def test_named(self):
        assert resample_filter('nearest') == Image.Resampling.NEAREST
        assert resample_filter('LANCZOS') == Image.Resampling.LANCZOS

    def test_from_env(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv('CHROMA_SENSE_RESAMPLE', 'bicubic')
        assert resample_filter() == Image.Resampling.BICUBIC

    def test_argument_beats_env(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv('CHROMA_SENSE_RESAMPLE', 'bicubic')
        assert resample_filter('nearest') == Image.Resampling.NEAREST

    def test_unknown(self):
        with pytest.raises(ConfigError, match='Unknown resample filter'):
            resample_filter('sinc')


class TestPilResize:
    def test_resizes(self):
        buf = pil_resize(Image.new('RGBA', (300, 150), (0, 0, 0, 255)), 128, 64)
        assert (buf.width, buf.height) == (128, 64)
        assert len(buf.data) == 128 * 64 * 4

    def test_same_size_untouched(self):
        img = Image.new('RGBA', (3, 2), (5, 6, 7, 255))
        assert bytes(pil_resize(img, 3, 2).data) == img.tobytes()

    def test_accepts_loaded_image(self, make_png):
        buf = pil_resize(load_image(make_png('a.png', (0, 0, 0))), 10, 5)
        assert (buf.width, buf.height) == (10, 5)


class TestEndToEnd:
    def test_solid_png(self, make_png):
        loaded = load_image(make_png('solid.png', (200, 10, 10)))
        result = PaletteExtractor().extract(loaded.image)
        assert result.to_dict() == {'dominant': '#c00000', 'palette': ['#c00000']}

    def test_transparent_png(self, make_png):
        loaded = load_image(make_png('clear.png', (200, 10, 10, 0)))
        result = PaletteExtractor().extract(loaded.image)
        assert result.to_dict() == {'dominant': '#000000', 'palette': []}

    def test_half_transparent_png(self, tmp_path: Path):
        img = Image.new('RGBA', (400, 200), (0, 0, 0, 0))
        img.paste((20, 40, 230, 255), (200, 0, 400, 200))
        path = tmp_path / 'half.png'
        img.save(path)
        result = PaletteExtractor().extract(load_image(str(path)).image)
        assert result.dominant.hex == '#1020e0'
        assert result.palette[0].hex == '#1020e0'

    def test_nearest_filter(self, make_png):
        loaded = load_image(make_png('big.png', (90, 180, 45), size=(1024, 512)))
        buf = pil_resize(loaded, 128, 64, resample='nearest')
        result = PaletteExtractor().analyze(buf)
        assert result.dominant.hex == '#50b020'
