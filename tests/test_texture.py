import pytest

from titlekit.errors import InvalidArgumentError
from titlekit.texture import (
    MIN_TEXTURE_SIZE,
    TextureSlots,
    next_pow2,
    rgba_to_abgr,
    swizzle,
    texture_coords,
    texture_dimensions,
    tile_rows,
)


@pytest.mark.parametrize("value", [1, 2, 3, 5, 63, 64, 65, 100, 1000, 4097])
def test_next_pow2_is_smallest_power_not_below(value):
    result = next_pow2(value)
    assert result & (result - 1) == 0
    assert value <= result < 2 * value


def test_next_pow2_of_zero_wraps():
    assert next_pow2(0) == 0


def test_texture_dimensions_minimum():
    assert texture_dimensions(10, 3) == (MIN_TEXTURE_SIZE, MIN_TEXTURE_SIZE)


def test_texture_dimensions_large():
    w, h = texture_dimensions(200, 100)
    assert w == next_pow2(200)
    assert h == next_pow2(100)


def test_swizzle_is_permutation():
    width = height = 64
    data = b"".join(i.to_bytes(2, "big") for i in range(width * height))
    out = swizzle(data, width, height, 2)
    assert len(out) == len(data)
    in_pixels = sorted(data[i:i + 2] for i in range(0, len(data), 2))
    out_pixels = sorted(out[i:i + 2] for i in range(0, len(out), 2))
    assert in_pixels == out_pixels


def test_swizzle_morton_order_second_row():
    width = 64
    data = bytes(i % 251 for i in range(width * width))
    out = swizzle(data, width, width, 1)
    assert out[0] == data[0]
    assert out[1] == data[1]
    assert out[2] == data[width]


def test_swizzle_pads_small_image():
    out = swizzle(b"\xAA" * 4, 2, 2, 1)
    assert len(out) == MIN_TEXTURE_SIZE * MIN_TEXTURE_SIZE
    assert out.count(0xAA) == 4


def test_tile_rows_exact_size_is_copy():
    data = bytes(i % 256 for i in range(64 * 64))
    assert tile_rows(data, 64, 64, 1) == data


def test_tile_rows_places_row_blocks():
    width, height = 32, 16
    data = bytes(i % 256 for i in range(width * height))
    out = tile_rows(data, width, height, 1)
    tex_width, tex_height = texture_dimensions(width, height)
    assert len(out) == tex_width * tex_height
    block = width * 8
    assert out[:block] == data[:block]
    assert out[8 * tex_width:8 * tex_width + block] == data[block:2 * block]
    assert out[block:8 * tex_width] == bytes(8 * tex_width - block)


def test_rgba_to_abgr_reverses_pixels():
    assert rgba_to_abgr(b"\x01\x02\x03\x04\x05\x06\x07\x08") == b"\x04\x03\x02\x01\x08\x07\x06\x05"


def test_rgba_to_abgr_is_involution():
    image = bytes(range(32))
    assert rgba_to_abgr(rgba_to_abgr(image)) == image


def test_rgba_to_abgr_rejects_partial_pixel():
    with pytest.raises(ValueError):
        rgba_to_abgr(b"\x00\x01\x02")


def test_texture_coords_full():
    assert texture_coords(64, 64, 64, 64) == (0.0, 0.0, 1.0, 1.0)


def test_texture_coords_partial():
    left, bottom, right, top = texture_coords(64, 64, 32, 16)
    assert left == 0.0
    assert bottom == (64 - 16) / 64
    assert right == 32 / 64
    assert top == 1.0


def test_allocate_free_skips_slot_zero_and_exhausts():
    slots = TextureSlots(3)
    first = slots.allocate_free()
    second = slots.allocate_free()
    assert (first, second) == (1, 2)
    with pytest.raises(RuntimeError):
        slots.allocate_free()


def test_unload_frees_slot():
    slots = TextureSlots(3)
    slots.allocate_free()
    slots.allocate_free()
    slots.unload(1)
    assert slots.allocate_free() == 1


def test_load_and_size():
    slots = TextureSlots(4)
    dims = slots.load(2, 100, 30)
    assert dims == texture_dimensions(100, 30)
    assert slots.size(2) == (100, 30)
    slots.unload(2)
    assert slots.size(2) == (0, 0)


@pytest.mark.parametrize("slot", [-1, 4])
def test_invalid_slot(slot):
    slots = TextureSlots(4)
    with pytest.raises(InvalidArgumentError):
        slots.size(slot)