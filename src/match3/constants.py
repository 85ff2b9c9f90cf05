GRID_ROWS = 8
GRID_COLS = 8

# A run must cover at least this many identical tiles in one row or column.
MIN_MATCH_LENGTH = 3

# Upper bound on clear/refill passes in a single move or settle.
# A generator that keeps recreating matches trips CascadeLimitExceeded instead of hanging.
MAX_CASCADE_DEPTH = 100

# Tile type names registered by create_world when none are supplied.
DEFAULT_TILE_TYPES = (
    'nature', 'blood', 'shapeshift', 'spirit', 'hex', 'secrets', 'witchfire',
)
