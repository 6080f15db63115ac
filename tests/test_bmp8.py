import io
import struct

import pytest

from bmpkit.bmp8 import (
    Bmp8Error,
    FilterType,
    choose_filter,
    get_kernel,
    load_image,
    parse_filter_choice,
)


def make_bmp8(width, height, pixels, size_field=None):
    data = bytes(pixels)
    if size_field is None:
        size_field = len(data)
    header = struct.pack(
        "<2sIHHIIiiHHIIiiII",
        b"BM", 1078 + len(data), 0, 0, 1078,
        40, width, height, 1, 8, 0, size_field, 0, 0, 256, 0,
    )
    palette = b"".join(bytes((i, i, i, 0)) for i in range(256))
    return header + palette + data


@pytest.fixture
def image_file(tmp_path):
    path = tmp_path / "img.bmp"
    path.write_bytes(make_bmp8(4, 3, range(0, 240, 20)))
    return path


def test_load_reads_fields(image_file):
    img = load_image(image_file)
    assert (img.width, img.height, img.color_depth, img.data_size) == (4, 3, 8, 12)
    assert list(img.data) == list(range(0, 240, 20))
    assert len(img.header) == 54
    assert len(img.color_table) == 1024


def test_zero_data_size_uses_dimensions(tmp_path):
    path = tmp_path / "z.bmp"
    path.write_bytes(make_bmp8(2, 2, [1, 2, 3, 4], size_field=0))
    assert load_image(path).data_size == 4


def test_missing_file_raises(tmp_path):
    with pytest.raises(Bmp8Error):
        load_image(tmp_path / "absent.bmp")


def test_truncated_file_raises(tmp_path):
    path = tmp_path / "t.bmp"
    path.write_bytes(make_bmp8(4, 3, range(12))[:-3])
    with pytest.raises(Bmp8Error):
        load_image(path)


def test_save_round_trip(image_file, tmp_path):
    img = load_image(image_file)
    out = tmp_path / "copy.bmp"
    img.save(out)
    assert out.read_bytes() == image_file.read_bytes()


def test_save_to_bad_path_raises(image_file, tmp_path):
    img = load_image(image_file)
    with pytest.raises(Bmp8Error):
        img.save(tmp_path / "missing_dir" / "x.bmp")


def test_info_and_print_info(image_file):
    img = load_image(image_file)
    expected = "Image Info :\n\tWidth : 4\n\tHeight : 3\n\tColor depth : 8\n\tData Size : 12\n"
    assert img.info() == expected
    buf = io.StringIO()
    img.print_info(buf)
    assert buf.getvalue() == expected


def test_negative(image_file):
    img = load_image(image_file)
    img.negative()
    assert list(img.data) == [255 - v for v in range(0, 240, 20)]
    img.negative()
    assert list(img.data) == list(range(0, 240, 20))


def test_brightness_clamps(image_file):
    img = load_image(image_file)
    img.brightness(100)
    assert img.data[0] == 100
    assert img.data[-1] == 255
    img.brightness(-300)
    assert set(img.data) == {0}


def test_threshold(image_file):
    img = load_image(image_file)
    img.threshold(100)
    assert list(img.data) == [0, 0, 0, 0, 0, 255, 255, 255, 255, 255, 255, 255]


def test_threshold_clamped_above_255(image_file):
    img = load_image(image_file)
    img.threshold(1000)
    assert set(img.data) == {0}


def test_threshold_clamped_below_zero(image_file):
    img = load_image(image_file)
    img.threshold(-5)
    assert set(img.data) == {255}


@pytest.mark.parametrize(
    "text, expected",
    [
        ("box_blur", FilterType.BOX_BLUR),
        ("1", FilterType.BOX_BLUR),
        ("1.box_blur", FilterType.BOX_BLUR),
        ("gaussian_blur", FilterType.GAUSSIAN_BLUR),
        ("2", FilterType.GAUSSIAN_BLUR),
        ("3.outline\n", FilterType.OUTLINE),
        ("emboss", FilterType.EMBOSS),
        ("5.sharpen", FilterType.SHARPEN),
    ],
)
def test_parse_filter_choice(text, expected):
    assert parse_filter_choice(text) is expected


@pytest.mark.parametrize("text", ["", "6", "Outline", " outline", "blur"])
def test_parse_filter_choice_rejects(text):
    with pytest.raises(ValueError):
        parse_filter_choice(text)


def test_choose_filter_retries():
    out = io.StringIO()
    result = choose_filter(io.StringIO("nope\n4\n"), out)
    assert result is FilterType.EMBOSS
    assert "Votre choix est incorrect" in out.getvalue()
    assert "5.sharpen" in out.getvalue()


def test_choose_filter_eof():
    with pytest.raises(EOFError):
        choose_filter(io.StringIO("bad\n"), io.StringIO())


def test_get_kernel_values():
    assert get_kernel(FilterType.OUTLINE) == [[-1, -1, -1], [-1, 8, -1], [-1, -1, -1]]
    assert get_kernel(FilterType.EMBOSS) == [[-2, -1, 0], [-1, 1, 1], [0, 1, 2]]
    assert get_kernel(5) == [[0, -1, 0], [-1, 5, -1], [0, -1, 0]]
    assert get_kernel(FilterType.GAUSSIAN_BLUR)[1][1] == 0.25
    assert sum(map(sum, get_kernel(FilterType.BOX_BLUR))) == pytest.approx(1.0)


def test_get_kernel_invalid():
    with pytest.raises(ValueError):
        get_kernel(0)


def test_get_kernel_returns_fresh_copy():
    kernel = get_kernel(FilterType.SHARPEN)
    kernel[0][0] = 99
    assert get_kernel(FilterType.SHARPEN)[0][0] == 0


def _uniform(tmp_path, value, width=4, height=4):
    path = tmp_path / "u.bmp"
    path.write_bytes(make_bmp8(width, height, [value] * (width * height)))
    return load_image(path)


@pytest.mark.parametrize(
    "ftype, expected",
    [
        (FilterType.GAUSSIAN_BLUR, 100),
        (FilterType.SHARPEN, 100),
        (FilterType.EMBOSS, 100),
        (FilterType.OUTLINE, 0),
    ],
)
def test_filter_on_uniform_image(tmp_path, ftype, expected):
    img = _uniform(tmp_path, 100)
    img.apply_filter(get_kernel(ftype))
    inner = [img.data[y * 4 + x] for y in (1, 2) for x in (1, 2)]
    assert inner == [expected] * 4
    border = [img.data[i] for i in (0, 1, 2, 3, 4, 7, 8, 11, 12, 15)]
    assert border == [100] * 10


def test_outline_single_point(tmp_path):
    pixels = [0] * 9
    pixels[4] = 10
    path = tmp_path / "p.bmp"
    path.write_bytes(make_bmp8(3, 3, pixels))
    img = load_image(path)
    img.apply_filter(get_kernel(FilterType.OUTLINE))
    assert list(img.data) == [0, 0, 0, 0, 80, 0, 0, 0, 0]


def test_apply_filter_rejects_bad_kernel(tmp_path):
    img = _uniform(tmp_path, 10)
    with pytest.raises(ValueError):
        img.apply_filter([[1.0, 2.0], [3.0, 4.0]])