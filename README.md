# rushhour

The Rush Hour sliding-block puzzle. Cars on a 6×6 board slide along
their own axis. You solve the puzzle by moving the red car (car 1) into
the exit cell on the right of the third row (row 2, column 5).

The game runs on a small scene-graph engine. The engine has nodes, lights,
cameras, materials, meshes and a skybox, and it can load scenes from `.ovo`
files.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Playing

```
rushhour --assets DIR
```

This runs `rushhour.app.main`. `--assets` names the directory that holds
the following files. It defaults to the current directory.

- the level scenes `Level1.ovo`, `Level2.ovo` and `Level3.ovo`
- the skybox images `posx.png`, `negx.png`, `posy.png`, `negy.png`,
  `posz.png` and `negz.png`

If a file is missing, an `OSError` is raised.

Keys come from standard input. Every character typed is one key, and line
breaks are ignored. Level 1 starts at once and car 1 is selected. The
board is printed after each move as a grid of two-digit car ids, with
`00` for an empty cell. The game prints `Selected car: N` when you select
a car and `You won!` when the red car reaches the exit.

| Key         | Action                                                      |
|-------------|-------------------------------------------------------------|
| `1`–`9`     | select a car (ids with no car are ignored)                  |
| `w a s d`   | move the selected car up / left / down / right              |
| `b n m`     | start level 1 / 2 / 3                                       |
| `u` / `i`   | switch to the orthographic / perspective camera             |
| `r` / `t`   | lower / raise the orthographic zoom by 5                    |
| `e` / `q`   | turn the scene object named `[root]` by -5 / +5 degrees     |
| `o` / `p`   | increase / decrease the eye distance by 1                   |
| `Esc`       | stop                                                        |

The game ignores a move that would push a car off the board or onto
another car, and a move across the car's own axis. Zooming and turning
work only while the orthographic camera is in use. Switching to the
perspective camera resets the scene rotation and the zoom of 350.

## Using the pieces

The puzzle logic in `rushhour.game` does not depend on the engine:

```python
from rushhour.game import Direction, GameBoard, GameState
from rushhour.rush_hour import level_cars

state = GameState(GameBoard(), level_cars(1))
state.make_move(1, Direction.RIGHT)
print(state.is_valid)
print(state.render())
print(state.has_won())
```

`GameState.make_move` raises `ValueError` for a car id that is not in the
state. An illegal move leaves the state invalid, and `render()` then
returns `Invalid state!`.

You can load a scene from an `.ovo` file and search it by name:

```python
from rushhour.ovo import load_scene
from rushhour.engine import build_render_list, find_object_by_name

root = load_scene("Level1.ovo")
plane = find_object_by_name(root, "Plane001")
for obj, world in build_render_list(root):
    print(obj.name, world[:3, 3])
```

`rushhour.ovo.parse_scene` does the same from bytes. It raises
`OvoFormatError` for truncated or inconsistent data.

The engine modules are:

- `rushhour.scene_object`: `SceneObject`
- `rushhour.node`: `Node`, `translation_matrix`, `rotation_matrix`, `scale_matrix`
- `rushhour.lights`: `Light`, `PointLight`, `DirectionalLight`, `SpotLight`
- `rushhour.cameras`: `Camera`, `OrthoCamera`, `PerspectiveCamera`, with projection matrices
- `rushhour.material`: `Material`, `Texture`, which loads an image as RGBA pixels
- `rushhour.mesh`: `Mesh`, `Plane`, `Skybox`
- `rushhour.ovo`: the `.ovo` loader
- `rushhour.engine`: `Engine`, `LightRecord`, `build_render_list`, `find_object_by_name`, `gather_lights`

The game modules are:

- `rushhour.game`
- `rushhour.rush_hour`: `RushHour`, `level_cars`
- `rushhour.app`: `App`, `main`

## What it does not do

Nothing is drawn on screen. The package opens no window and has no 3D or
stereo output. The engine keeps the scene graph, the active camera,
projection and view matrices, the sorted render list and the collected
lights. The `render` methods only record the matrix they are given. The
sky colour, skybox and eye distance are stored but not displayed. The
game is played in the terminal through the printed board.