import pytest

from bounceball.texture import PPMError, PPMImage, parse_ppm_p3, read_ppm_p3

SAMPLE = "P3\n# made by hand\n2 1\n255\n255 0 0\n0 128 255\n"


def test_parse_sample():
    image = parse_ppm_p3(SAMPLE)
    assert (image.width, image.height, image.max_value) == (2, 1, 255)
    assert image.pixels == bytes([255, 0, 0, 0, 128, 255])


def test_parse_several_comments():
    text = "P3\n# one\n# two\n1 1\n255\n10 20 30\n"
    assert parse_ppm_p3(text).pixels == bytes([10, 20, 30])


def test_rest_of_dimension_line_is_ignored():
    image = parse_ppm_p3("P3\n1 1 255\n9\n1 2 3\n")
    assert image.max_value == 9
    assert image.pixels == bytes([1, 2, 3])


def test_pixel_count_matches_dimensions():
    samples = " ".join(str(i) for i in range(18))
    image = parse_ppm_p3(f"P3\n3 2\n255\n{samples}\n")
    assert len(image.pixels) == 3 * image.width * image.height
    assert list(image.pixels) == list(range(18))


def test_extra_samples_are_ignored():
    image = parse_ppm_p3("P3\n1 1\n255\n1 2 3 4 5 6\n")
    assert image.pixels == bytes([1, 2, 3])


def test_not_p3():
    with pytest.raises(PPMError):
        parse_ppm_p3("P6\n1 1\n255\n")


def test_error_is_value_error():
    with pytest.raises(ValueError):
        parse_ppm_p3("")


def test_missing_dimensions():
    with pytest.raises(PPMError):
        parse_ppm_p3("P3\n# only a comment\n")


def test_bad_dimensions():
    with pytest.raises(PPMError):
        parse_ppm_p3("P3\nwide high\n255\n")


def test_zero_width():
    with pytest.raises(PPMError):
        parse_ppm_p3("P3\n0 1\n255\n")


def test_short_pixel_data():
    with pytest.raises(PPMError):
        parse_ppm_p3("P3\n2 1\n255\n1 2 3\n")


def test_non_numeric_sample():
    with pytest.raises(PPMError):
        parse_ppm_p3("P3\n1 1\n255\n1 x 3\n")


def test_read_file(tmp_path):
    path = tmp_path / "tex.ppm"
    path.write_text(SAMPLE)
    assert read_ppm_p3(path) == parse_ppm_p3(SAMPLE)


def test_read_missing_file(tmp_path):
    with pytest.raises(OSError):
        read_ppm_p3(tmp_path / "absent.ppm")


def test_image_is_frozen():
    image = parse_ppm_p3(SAMPLE)
    with pytest.raises(AttributeError):
        image.width = 5
    assert image.width == 2
    assert image == PPMImage(2, 1, 255, bytes([255, 0, 0, 0, 128, 255]))