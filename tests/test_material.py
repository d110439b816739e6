import numpy as np
import pytest
from PIL import Image

from rushhour.material import Material, Texture


@pytest.fixture
def rgb_png(tmp_path):
    path = tmp_path / "rgb.png"
    image = Image.new("RGB", (3, 2), (10, 20, 30))
    image.save(path)
    return path


def test_material_defaults():
    material = Material()
    assert np.allclose(material.emission_color, [0.0, 0.0, 0.0])
    assert np.allclose(material.ambient_color, [0.75, 0.75, 0.75])
    assert np.allclose(material.diffuse_color, [0.75, 0.75, 0.75])
    assert np.allclose(material.specular_color, [0.75, 0.75, 0.75])
    assert material.shininess == 64.0
    assert material.texture is None


def test_material_colour_round_trip():
    material = Material()
    material.diffuse_color = (0.1, 0.2, 0.3)
    assert np.allclose(material.diffuse_color, [0.1, 0.2, 0.3])


def test_material_colour_is_copied():
    material = Material()
    colour = material.ambient_color
    colour[0] = 5.0
    assert np.allclose(material.ambient_color, [0.75, 0.75, 0.75])


def test_material_colour_wrong_shape():
    material = Material()
    with pytest.raises(ValueError):
        material.specular_color = (1.0, 2.0)
    assert np.allclose(material.specular_color, [0.75, 0.75, 0.75])


def test_texture_loads_as_rgba(rgb_png):
    texture = Texture(rgb_png)
    assert texture.width == 3
    assert texture.height == 2
    assert texture.pixels.shape == (2, 3, 4)
    assert texture.pixels[0, 0].tolist() == [10, 20, 30, 255]


def test_texture_keeps_path(rgb_png):
    texture = Texture(rgb_png)
    assert texture.path == str(rgb_png)


def test_texture_missing_file(tmp_path):
    with pytest.raises(OSError):
        Texture(tmp_path / "missing.png")


def test_texture_not_an_image(tmp_path):
    path = tmp_path / "bogus.png"
    path.write_bytes(b"not an image at all")
    with pytest.raises(OSError):
        Texture(path)


def test_material_render_passes_matrix_to_texture(rgb_png):
    material = Material()
    material.texture = Texture(rgb_png)
    matrix = np.arange(16.0).reshape(4, 4)
    material.render(matrix)
    assert np.array_equal(material.texture.view_matrix, matrix)


def test_material_render_without_texture_records_nothing():
    material = Material()
    material.render(np.eye(4))
    assert material.view_matrix is None