"""Tests for palette.py - the fixed-record palette store."""

import pytest

from sketches.color import Color
from sketches.errors import PaletteFormatError, PaletteLoadError, SketchError
from sketches.palette import THEME_SIZE, PaletteStore, encode_palettes, write_palettes
from sketches.rng import RngContext


class TestPaletteFile:
    def test_round_trip(self, themes_file, reference_palette, warm_palette):
        store = PaletteStore.open(themes_file)
        assert len(store) == 2
        assert store.get(0) == reference_palette
        assert store.get(1) == warm_palette

    def test_file_size(self, tmp_path, reference_palette):
        written = write_palettes(tmp_path / "one.bin", [reference_palette])
        assert written == THEME_SIZE
        assert (tmp_path / "one.bin").stat().st_size == THEME_SIZE

    def test_creates_parent_directories(self, tmp_path, reference_palette):
        path = tmp_path / "nested" / "dir" / "themes.bin"
        write_palettes(path, [reference_palette])
        assert path.exists()

    def test_big_endian_layout(self):
        data = bytes([0x00, 0x12, 0x34, 0x56]) + bytes(THEME_SIZE - 4)
        store = PaletteStore(data)
        assert store.get(0)[0] == Color(0x12, 0x34, 0x56)
        assert store.get(0)[1] == Color.black()

    def test_argb_encoding(self, palette_file):
        translucent = [Color(10, 20, 30, 0x80)] * 5
        path = palette_file([translucent], encoding="argb")
        colors = PaletteStore.open(path, "argb").get(0)
        assert colors[0].rgb() == (10, 20, 30)
        assert abs(colors[0].a - 0x80) <= 1

    def test_rgb_encoding_drops_alpha(self, palette_file):
        translucent = [Color(10, 20, 30, 0x80)] * 5
        colors = PaletteStore.open(palette_file([translucent])).get(0)
        assert colors[0] == Color(10, 20, 30)


class TestPaletteErrors:
    def test_missing_file(self, tmp_path):
        with pytest.raises(PaletteLoadError) as exc:
            PaletteStore.open(tmp_path / "nope.bin")
        assert isinstance(exc.value, OSError)
        assert isinstance(exc.value, SketchError)

    def test_length_not_multiple_of_record(self):
        with pytest.raises(PaletteFormatError):
            PaletteStore(bytes(THEME_SIZE + 1))

    def test_empty_store(self):
        with pytest.raises(PaletteFormatError):
            PaletteStore(b"")

    def test_unknown_encoding(self):
        with pytest.raises(PaletteFormatError):
            PaletteStore(bytes(THEME_SIZE), "bgr")

    def test_index_out_of_range(self, store):
        with pytest.raises(PaletteFormatError) as exc:
            store.get(len(store))
        assert isinstance(exc.value, ValueError)
        with pytest.raises(PaletteFormatError):
            store.get(-1)

    def test_encode_wrong_palette_size(self):
        with pytest.raises(PaletteFormatError):
            encode_palettes([[Color.black()] * 4])


class TestPick:
    def test_pick_in_range(self, store):
        rng = RngContext(3)
        for _ in range(20):
            index, theme = store.pick(rng)
            assert 0 <= index < len(store)
            assert theme == store.get(index)

    def test_pick_is_deterministic(self, store):
        a = [store.pick(RngContext(9))[0] for _ in range(3)]
        b = [store.pick(RngContext(9))[0] for _ in range(3)]
        assert a == b
