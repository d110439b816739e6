"""Scene management for the game: the scene graph, camera, skybox and lights."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import Callable, Iterable, Optional

import numpy as np

from rushhour.cameras import Camera
from rushhour.lights import DirectionalLight, Light, PointLight, SpotLight
from rushhour.mesh import Skybox
from rushhour.scene_object import SceneObject

logger = logging.getLogger(__name__)

RenderList = list[tuple[SceneObject, np.ndarray]]
KeyboardCallback = Callable[[str, int, int], None]


class LightType(enum.IntEnum):
    """Kinds of light handed to the lighting stage."""

    DIRECTIONAL = 0
    POINT = 1
    SPOT = 2


def _zero3() -> np.ndarray:
    return np.zeros(3)


@dataclass
class LightRecord:
    """The lighting parameters of one light, in eye coordinates."""

    kind: LightType
    ambient: np.ndarray
    diffuse: np.ndarray
    specular: np.ndarray
    position: np.ndarray
    direction: np.ndarray = field(default_factory=_zero3)
    radius: float = 0.0
    cutoff: float = 0.0
    exponent: float = 0.0


def find_object_by_name(root: SceneObject, name: str) -> Optional[SceneObject]:
    """Depth-first search below ``root`` (not ``root`` itself) for an object named ``name``."""
    for child in root.children:
        if child.name == name:
            return child
        found = find_object_by_name(child, name)
        if found is not None:
            return found
    return None


def build_render_list(root: SceneObject, parent_matrix=None) -> RenderList:
    """Every object below and including ``root`` with its world matrix, in pre-order."""
    parent = np.eye(4) if parent_matrix is None else np.array(parent_matrix, dtype=float)
    if parent.shape != (4, 4):
        raise ValueError(f"parent matrix must be 4x4, got shape {parent.shape}")
    world = parent @ root.local_matrix()
    render_list: RenderList = [(root, world)]
    for child in root.children:
        render_list.extend(build_render_list(child, world))
    return render_list


def _transform_point(matrix: np.ndarray, point) -> np.ndarray:
    return (matrix @ np.append(np.asarray(point, dtype=float), 1.0))[:3]


def _record(kind: LightType, light: Light, matrix: np.ndarray, **extra) -> LightRecord:
    return LightRecord(
        kind=kind,
        ambient=light.ambient_color,
        diffuse=light.diffuse_color,
        specular=light.specular_color,
        position=_transform_point(matrix, light.position),
        **extra,
    )


def gather_lights(render_list: Iterable[tuple[SceneObject, np.ndarray]]) -> list[LightRecord]:
    """Collect point lights, then directional lights, then spot lights."""
    items = list(render_list)
    records: list[LightRecord] = []
    for obj, matrix in items:
        if isinstance(obj, PointLight):
            records.append(_record(LightType.POINT, obj, matrix, radius=obj.radius))
    for obj, matrix in items:
        if isinstance(obj, DirectionalLight):
            records.append(
                _record(
                    LightType.DIRECTIONAL,
                    obj,
                    matrix,
                    direction=_transform_point(matrix, obj.direction),
                )
            )
    for obj, matrix in items:
        if isinstance(obj, SpotLight):
            records.append(
                _record(
                    LightType.SPOT,
                    obj,
                    matrix,
                    direction=_transform_point(matrix, obj.direction),
                    radius=obj.radius,
                    cutoff=obj.cutoff,
                    exponent=obj.exponent,
                )
            )
    return records


class Engine:
    """Holds the scene, the active camera and the rendering settings of a window."""

    def __init__(self, title: str = "Rush Hour", width: int = 1024, height: int = 512) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"window size must be positive, got {width}x{height}")
        self.title = title
        self.width = width
        self.height = height
        self.scene: Optional[SceneObject] = None
        self.active_camera: Optional[Camera] = None
        self.skybox: Optional[Skybox] = None
        self.sky_color: tuple[float, float, float, float] = (0.0, 0.0, 0.0, 1.0)
        self.eye_distance = 0.0
        self.keyboard_callback: Optional[KeyboardCallback] = None
        self._running = True

    @property
    def is_running(self) -> bool:
        """False once :meth:`stop` has been called."""
        return self._running

    def set_scene(self, scene: SceneObject) -> None:
        """Replace the scene to render; the active camera is cleared."""
        self.scene = scene
        self.active_camera = None

    def set_active_camera(self, camera: Camera) -> None:
        """Make ``camera`` the one the scene is seen through."""
        if self.active_camera is not None:
            self.active_camera.active = False
        camera.active = True
        self.active_camera = camera

    def set_skybox(self, skybox: Optional[Skybox]) -> None:
        """Set the skybox drawn behind the scene, or None for none."""
        self.skybox = skybox

    def set_sky_color(self, red: float, green: float, blue: float) -> None:
        """Set the background colour; components range from 0 to 1."""
        self.sky_color = (float(red), float(green), float(blue), 1.0)

    def set_eye_distance(self, distance: float) -> None:
        """Set the interocular distance used for stereo rendering."""
        self.eye_distance = float(distance)

    def find_object_by_name(self, name: str) -> Optional[SceneObject]:
        """Find an object in the current scene by name, or None with a warning."""
        found = None if self.scene is None else find_object_by_name(self.scene, name)
        if found is None:
            logger.warning('Could not find object with name "%s".', name)
        return found

    def render_list(self) -> RenderList:
        """Objects of the scene with their view matrices, highest priority first.

        Empty while there is no scene or no active camera.
        """
        if self.scene is None or self.active_camera is None:
            return []
        view = np.linalg.inv(self.active_camera.local_matrix())
        items = [(obj, view @ matrix) for obj, matrix in build_render_list(self.scene)]
        items.sort(key=lambda item: item[0].priority, reverse=True)
        return items

    def stop(self) -> None:
        """Ask the main loop to end; repeated calls have no further effect."""
        self._running = False