"""Loading scene graphs from OVO files.

An OVO file is a sequence of chunks, each a little-endian ``uint32`` type,
a ``uint32`` size and ``size`` bytes of data. Nodes, lights and meshes
carry their number of children. Their children are the objects that
follow them in the file.
"""

from __future__ import annotations

import logging
import math
import os
import struct
from typing import Mapping, Optional

import numpy as np

from rushhour.lights import DirectionalLight, Light, PointLight, SpotLight
from rushhour.material import Material, Texture
from rushhour.mesh import Mesh
from rushhour.node import Node
from rushhour.scene_object import SceneObject

logger = logging.getLogger(__name__)

NO_NAME = "[none]"

_CHUNK_VERSION = 0
_CHUNK_NODE = 1
_CHUNK_MATERIAL = 9
_CHUNK_LIGHT = 16
_CHUNK_MESH = 18

_LIGHT_POINT = 0
_LIGHT_DIRECTIONAL = 1
_LIGHT_SPOT = 2


class OvoFormatError(ValueError):
    """Raised when OVO data is truncated or structurally inconsistent."""


class _Reader:
    """Sequential little-endian reader over a chunk's bytes."""

    def __init__(self, data) -> None:
        self._data = bytes(data)
        self.offset = 0

    def take(self, size: int) -> bytes:
        end = self.offset + size
        if end > len(self._data):
            raise OvoFormatError(
                f"chunk ends at byte {len(self._data)}, needed {size} bytes at {self.offset}"
            )
        chunk = self._data[self.offset:end]
        self.offset = end
        return chunk

    def skip(self, size: int) -> None:
        self.take(size)

    def u8(self) -> int:
        return self.take(1)[0]

    def u32(self) -> int:
        return struct.unpack("<I", self.take(4))[0]

    def f32(self) -> float:
        return struct.unpack("<f", self.take(4))[0]

    def vec3(self) -> tuple[float, float, float]:
        return struct.unpack("<3f", self.take(12))

    def matrix(self) -> np.ndarray:
        # Stored column by column.
        values = struct.unpack("<16f", self.take(64))
        return np.array(values, dtype=float).reshape(4, 4).T

    def string(self) -> str:
        end = self._data.find(b"\x00", self.offset)
        if end < 0:
            raise OvoFormatError(f"unterminated string at byte {self.offset}")
        text = self._data[self.offset:end].decode("latin-1")
        self.offset = end + 1
        return text


def unpack_snorm_3x10_1x2(value: int) -> tuple[float, float, float, float]:
    """Unpack three signed 10-bit and one signed 2-bit normalised component."""

    def signed(bits: int, width: int) -> int:
        return bits - (1 << width) if bits & (1 << (width - 1)) else bits

    value &= 0xFFFFFFFF
    x = signed(value & 0x3FF, 10)
    y = signed((value >> 10) & 0x3FF, 10)
    z = signed((value >> 20) & 0x3FF, 10)
    w = signed((value >> 30) & 0x3, 2)

    def clamp(component: float) -> float:
        return min(max(component, -1.0), 1.0)

    return clamp(x / 511.0), clamp(y / 511.0), clamp(z / 511.0), clamp(float(w))


def unpack_half_2x16(value: int) -> tuple[float, float]:
    """Unpack two half-precision floats; the low 16 bits are the first."""
    first, second = struct.unpack("<2e", struct.pack("<I", value & 0xFFFFFFFF))
    return float(first), float(second)


def parse_node_chunk(data) -> tuple[Node, int]:
    """Parse a node chunk into a node and its number of children."""
    reader = _Reader(data)
    node = Node(reader.string())
    node.base_matrix = reader.matrix()
    return node, reader.u32()


def parse_material_chunk(data) -> tuple[Material, str]:
    """Parse a material chunk into a material and its name.

    The albedo becomes the ambient, diffuse and specular colour, and the
    shininess is ``(1 - sqrt(roughness)) * 128``.
    """
    reader = _Reader(data)
    material = Material(reader.string())
    material.emission_color = reader.vec3()
    albedo = reader.vec3()
    roughness = reader.f32()
    reader.skip(4)  # metalness
    reader.skip(4)  # transparency

    texture_name = reader.string()
    if texture_name != NO_NAME:
        material.texture = Texture(texture_name)

    for _ in range(4):  # normal, height, roughness and metalness maps
        reader.string()

    material.ambient_color = albedo
    material.specular_color = albedo
    material.diffuse_color = albedo
    material.shininess = (1.0 - math.sqrt(roughness)) * 128.0
    return material, material.name


def _skip_physics(reader: _Reader) -> None:
    if not reader.u8():
        return
    reader.skip(40)
    hulls = reader.u32()
    reader.skip(20)
    for _ in range(hulls):
        hull_vertices = reader.u32()
        hull_faces = reader.u32()
        reader.skip(12 + hull_vertices * 12 + hull_faces * 12)


def parse_mesh_chunk(data, materials: Optional[Mapping[str, Material]] = None) -> tuple[Mesh, int]:
    """Parse a mesh chunk into a mesh and its number of children.

    The material is looked up by name in ``materials``; only the first
    level of detail is read.
    """
    materials = {} if materials is None else materials
    reader = _Reader(data)

    name = reader.string()
    matrix = reader.matrix()
    children = reader.u32()
    reader.string()  # target node
    reader.skip(1)  # mesh subtype

    material_name = reader.string()
    material: Optional[Material] = None
    if material_name != NO_NAME:
        material = materials.get(material_name)
        if material is None:
            logger.warning("Out-of-order material loading is not supported.")

    reader.skip(4)  # radius
    reader.skip(12)  # bounding box minimum
    reader.skip(12)  # bounding box maximum
    _skip_physics(reader)

    lods = reader.u32()
    if lods > 1:
        logger.warning(
            "Only one LOD is supported (current mesh has %d). Using the first one.", lods
        )

    vertex_count = reader.u32()
    face_count = reader.u32()

    vertices, normals, uvs = [], [], []
    for _ in range(vertex_count):
        vertices.append(reader.vec3())
        normals.append(unpack_snorm_3x10_1x2(reader.u32())[:3])
        uvs.append(unpack_half_2x16(reader.u32()))
        reader.skip(4)  # tangent

    faces = [struct.unpack("<3I", reader.take(12)) for _ in range(face_count)]

    mesh = Mesh(vertices, faces, normals, uvs, name=name)
    mesh.base_matrix = matrix
    mesh.material = material
    return mesh, children


def parse_light_chunk(data) -> tuple[Light, int]:
    """Parse a light chunk into a point, directional or spot light and its children.

    Unknown subtypes give a default point light without children.
    """
    reader = _Reader(data)
    name = reader.string()
    matrix = reader.matrix()
    children = reader.u32()
    reader.string()  # target node
    subtype = reader.u8()
    color = reader.vec3()
    radius = reader.f32()
    direction = reader.vec3()
    cutoff = reader.f32()
    exponent = reader.f32()

    light: Light
    if subtype == _LIGHT_POINT:
        light = PointLight(name)
        light.radius = radius / 1000.0
    elif subtype == _LIGHT_DIRECTIONAL:
        light = DirectionalLight(name)
        light.direction = direction
    elif subtype == _LIGHT_SPOT:
        light = SpotLight(name)
        light.cutoff = cutoff
        light.radius = radius
        light.exponent = exponent
        light.direction = direction
    else:
        logger.warning("Unknown light subtype: %d. Defaulting to a point light.", subtype)
        return PointLight(), 0

    light.base_matrix = matrix
    light.diffuse_color = color
    light.specular_color = color
    return light, children


def _attach(stack: list, obj: SceneObject, children: int) -> None:
    if not stack:
        raise OvoFormatError(f"object {obj.name!r} has no parent left to attach to")
    parent = stack[-1]
    parent[0].add_child(obj)
    parent[1] -= 1
    stack.append([obj, children])


def parse_scene(data) -> Node:
    """Build a scene graph from OVO bytes; the root is a node named ``Scene Root``."""
    raw = bytes(data)
    root = Node("Scene Root")
    stack: list = [[root, 1]]
    materials: dict[str, Material] = {}
    offset = 0

    while len(raw) - offset >= 4:
        chunk_type = struct.unpack_from("<I", raw, offset)[0]
        offset += 4
        if len(raw) - offset < 4:
            raise OvoFormatError(f"missing chunk size at byte {offset}")
        chunk_size = struct.unpack_from("<I", raw, offset)[0]
        offset += 4
        if len(raw) - offset < chunk_size:
            raise OvoFormatError(
                f"chunk of type {chunk_type} needs {chunk_size} bytes, "
                f"only {len(raw) - offset} left"
            )
        chunk = raw[offset:offset + chunk_size]
        offset += chunk_size

        if chunk_type == _CHUNK_VERSION:
            version = _Reader(chunk).u32()
            logger.debug("Version: %d", version)
        elif chunk_type == _CHUNK_NODE:
            _attach(stack, *parse_node_chunk(chunk))
        elif chunk_type == _CHUNK_MATERIAL:
            material, name = parse_material_chunk(chunk)
            materials[name] = material
        elif chunk_type == _CHUNK_LIGHT:
            _attach(stack, *parse_light_chunk(chunk))
        elif chunk_type == _CHUNK_MESH:
            _attach(stack, *parse_mesh_chunk(chunk, materials))
        else:
            logger.warning("Unsupported chunk ID %d", chunk_type)

        while stack and stack[-1][1] == 0:
            stack.pop()

    return root


def load_scene(path) -> Node:
    """Load the scene graph stored in the OVO file at ``path``."""
    path = os.fspath(path)
    logger.debug('Loading file "%s" ...', path)
    with open(path, "rb") as file:
        data = file.read()
    return parse_scene(data)