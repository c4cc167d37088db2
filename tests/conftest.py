import pytest

from annobsh import Palette

from .helper_functions import make_palette_bytes


def _default_colors():
    colors = [(i, 255 - i, (i * 7) % 256) for i in range(256)]
    colors[5] = (10, 20, 30)
    colors[255] = (250, 240, 230)
    return colors


@pytest.fixture(scope="session")
def palette_colors():
    return _default_colors()


@pytest.fixture(scope="session")
def palette_bytes(palette_colors) -> bytes:
    return make_palette_bytes(palette_colors)


@pytest.fixture(scope="session")
def palette(palette_bytes) -> Palette:
    return Palette.from_bytes(palette_bytes)
