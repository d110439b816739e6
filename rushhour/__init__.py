"""The Rush Hour puzzle, a terminal game built on a small scene-graph engine with an OVO scene loader."""

__version__ = "0.1.0"