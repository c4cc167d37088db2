import numpy as np
import pytest
from PIL import Image

from annobsh import DecodedImage, output_name


@pytest.fixture
def image() -> DecodedImage:
    pixels = np.zeros((2, 3, 4), dtype=np.uint8)
    pixels[0, 2] = (10, 20, 30, 255)
    return DecodedImage(pixels, offset=28)


def test_properties(image: DecodedImage):
    assert (image.width, image.height) == (3, 2)
    assert image.offset == 28
    assert repr(image) == "DecodedImage(3x2, offset=28)"


@pytest.mark.parametrize("shape", [(2, 3), (2, 3, 3), (0, 3, 4), (2, 0, 4)])
def test_invalid_shapes(shape):
    with pytest.raises(ValueError):
        DecodedImage(np.zeros(shape, dtype=np.uint8))


def test_to_image(image: DecodedImage):
    img = image.to_image()
    assert img.mode == "RGBA"
    assert img.size == (3, 2)
    assert img.getpixel((2, 0)) == (10, 20, 30, 255)
    assert img.getpixel((0, 1)) == (0, 0, 0, 0)


@pytest.mark.parametrize(
    "kwargs, size",
    [
        ({"scale": 2}, (6, 4)),
        ({"target_width": 6}, (6, 4)),
        ({"target_height": 1}, (1, 1)),
        ({"target_width": 9, "target_height": 9}, (9, 9)),
    ],
)
def test_resize(image: DecodedImage, kwargs, size):
    assert image.to_image(**kwargs).size == size


def test_scaled_image_keeps_colors(image: DecodedImage):
    img = image.to_image(scale=2)
    assert img.getpixel((5, 1)) == (10, 20, 30, 255)
    assert img.getpixel((3, 1)) == (0, 0, 0, 0)


def test_save_png(tmp_path, image: DecodedImage):
    path = tmp_path / "out.png"
    image.save(str(path))
    with Image.open(path) as img:
        assert img.mode == "RGBA"
        assert np.array_equal(np.asarray(img), image.pixels)


def test_output_name():
    assert output_name("STADTFLD.BSH", 0) == "STADTFLD.BSH_0.png"
    assert output_name("/games/anno/GFX/SHIPS.BSH", 12, "gif") == "SHIPS.BSH_12.gif"
