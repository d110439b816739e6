"""The Rush Hour application: levels, cameras and keyboard controls."""

from __future__ import annotations

import argparse
import os
from typing import Callable, Iterable, Iterator, Optional, TextIO

from rushhour.cameras import OrthoCamera, PerspectiveCamera
from rushhour.engine import Engine
from rushhour.game import Direction
from rushhour.mesh import Mesh, Skybox
from rushhour.node import Node
from rushhour.ovo import load_scene
from rushhour.rush_hour import RushHour
from rushhour.scene_object import SceneObject

ESCAPE = "\x1b"

SKYBOX_TEXTURES = ("posx.png", "negx.png", "posy.png", "negy.png", "posz.png", "negz.png")

_LEVEL_SETTINGS: dict[int, tuple[tuple[float, float, float], tuple[str, ...]]] = {
    1: ((0.15, 0.15, 0.15), ("Box001", "Box002", "Cylinder001")),
    2: ((0.81, 0.53, 0.22), ()),
    3: ((0.53, 0.81, 0.92), ()),
}

_LEVEL_KEYS = {"b": 1, "n": 2, "m": 3}
_MOVE_KEYS = {
    "w": Direction.UP,
    "a": Direction.LEFT,
    "s": Direction.DOWN,
    "d": Direction.RIGHT,
}

_ORTHO_ZOOM = 350.0
_ZOOM_STEP = 5.0
_ROTATION_STEP = 5.0

SceneLoader = Callable[[str], SceneObject]


class App:
    """The game: loads levels into the engine and reacts to keys."""

    def __init__(self, engine: Optional[Engine] = None, asset_dir=".",
                 loader: Optional[SceneLoader] = None) -> None:
        self.engine = Engine("Rush Hour", 1024, 512) if engine is None else engine
        self.asset_dir = os.fspath(asset_dir)
        self.loader: SceneLoader = load_scene if loader is None else loader
        self.rush_hour = RushHour(self.engine)
        self.ortho_camera: Optional[OrthoCamera] = None
        self.perspective_camera: Optional[PerspectiveCamera] = None
        self.perspective_camera_is_used = False
        self.eye_distance = 8.0
        self.engine.set_eye_distance(self.eye_distance)

    def _disable_shadows(self, name: str) -> None:
        mesh = self.engine.find_object_by_name(name)
        if isinstance(mesh, Mesh):
            mesh.cast_shadows = False

    def _world_root(self) -> Optional[Node]:
        root = self.engine.find_object_by_name("[root]")
        return root if isinstance(root, Node) else None

    def start_level(self, level_id: int) -> None:
        """Load the scene of level 1, 2 or 3 and start its puzzle."""
        try:
            sky_color, unshadowed = _LEVEL_SETTINGS[level_id]
        except KeyError:
            raise ValueError(f"unknown level {level_id}") from None

        scene = self.loader(os.path.join(self.asset_dir, f"Level{level_id}.ovo"))
        self.engine.set_sky_color(*sky_color)
        self.engine.set_scene(scene)
        for name in (*unshadowed, "Plane001"):
            self._disable_shadows(name)

        if self.ortho_camera is None or self.perspective_camera is None:
            ortho = OrthoCamera("Camera", zoom=_ORTHO_ZOOM)
            ortho.position = (0.0, 150.0, 0.0)
            perspective = PerspectiveCamera("Camera 2")
            perspective.position = (0.0, 123.0, 55.0)
            self.ortho_camera = ortho
            self.perspective_camera = perspective

        scene.add_child(self.ortho_camera)
        scene.add_child(self.perspective_camera)
        self.engine.set_active_camera(self.ortho_camera)
        self.rush_hour.set_perspective_camera(self.perspective_camera)
        self.rush_hour.load_level(level_id)

    def _zoom(self, step: float) -> None:
        camera = self.engine.find_object_by_name("Camera")
        if isinstance(camera, OrthoCamera):
            camera.zoom = camera.zoom + step

    def _turn(self, step: float) -> None:
        root = self._world_root()
        if root is not None:
            root.rotation = root.rotation + (0.0, step, 0.0)

    def handle_key(self, key: str) -> None:
        """React to one key press."""
        if key == "o":
            self.eye_distance += 1.0
            self.engine.set_eye_distance(self.eye_distance)
        elif key == "p":
            self.eye_distance -= 1.0
            self.engine.set_eye_distance(self.eye_distance)

        if key == ESCAPE:
            self.engine.stop()

        if not self.perspective_camera_is_used:
            if key == "r":
                self._zoom(-_ZOOM_STEP)
            if key == "t":
                self._zoom(_ZOOM_STEP)
            if key == "e":
                self._turn(-_ROTATION_STEP)
            if key == "q":
                self._turn(_ROTATION_STEP)

        if key == "u":
            self.engine.set_active_camera(self.ortho_camera)
            self.perspective_camera_is_used = False

        if key == "i":
            self.engine.set_active_camera(self.perspective_camera)
            self.perspective_camera_is_used = True
            root = self._world_root()
            if root is not None:
                root.rotation = (0.0, 0.0, 0.0)
            camera = self.engine.find_object_by_name("Camera")
            if isinstance(camera, OrthoCamera):
                camera.zoom = _ORTHO_ZOOM

        if key in _LEVEL_KEYS:
            self.start_level(_LEVEL_KEYS[key])

        if len(key) == 1 and "1" <= key <= "9":
            self.rush_hour.select_vehicle(int(key))

        if key in _MOVE_KEYS:
            self.rush_hour.move(_MOVE_KEYS[key])

    def run(self, keys: Iterable[str]) -> None:
        """Start level 1, then handle keys until they run out or the engine stops."""
        self.start_level(1)
        for key in keys:
            if not self.engine.is_running:
                break
            self.handle_key(key)


def _keys_from(stream: TextIO) -> Iterator[str]:
    for line in stream:
        for key in line:
            if key not in "\r\n":
                yield key


def main(argv=None) -> int:
    """Play Rush Hour with keys read from standard input."""
    import sys

    parser = argparse.ArgumentParser(prog="rushhour", description="Play Rush Hour.")
    parser.add_argument(
        "--assets", default=".", help="directory holding the level files and skybox images"
    )
    args = parser.parse_args(argv)

    app = App(asset_dir=args.assets)
    app.engine.set_skybox(
        Skybox([os.path.join(args.assets, name) for name in SKYBOX_TEXTURES])
    )
    app.run(_keys_from(sys.stdin))
    return 0