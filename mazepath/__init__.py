"""Maze path search - A* and Q-learning routes through wall-based mazes.

Mazes are addressed at doubled resolution: logical cells sit at even
coordinates and the odd coordinates between them record whether a wall
separates two neighbours.
"""

__version__ = "1.0.0"
__author__ = "Maze Path Search"
