"""World constants shared by the server and client prediction.

Both sides must agree on these values: the server spawns inside them and the
client clamps and pre-checks pickups against them.
"""

WORLD_WIDTH = 640
WORLD_HEIGHT = 480

PLAYER_SIZE = 20
COLLECTIBLE_SIZE = 15
MOVE_SPEED = 5

# Spawned positions fall in [SPAWN_MARGIN, WIDTH - SPAWN_MARGIN)
SPAWN_MARGIN = 20

COLLECTIBLE_VALUE = 1

PICKUP_DISTANCE = (PLAYER_SIZE + COLLECTIBLE_SIZE) / 2

DIRECTIONS = ('up', 'down', 'left', 'right')
