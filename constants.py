# --- Window ---
WIDTH, HEIGHT = 800, 600
FPS = 60

# --- Simulation ---
# y points up in simulation space, so gravity is negative
GRAVITY = -2.0
DELTA_TIME = 0.3
CONSTRAINT_ITERATIONS = 6
REST_LENGTH = 15.0

# cloth grid (particles per row / per column) and where it sits on screen
CLOTH_COLS, CLOTH_ROWS = 35, 20
OFFSET_X, OFFSET_Y = 45, 90

# None = always pick the nearest particle
PICK_RADIUS = None
# half-size of the tear box, None = rest length
TEAR_RADIUS = None

PARTICLE_RADIUS = 0.5
SNAPSHOT_FILE = 'cloth_snapshot.json'

# --- Colors ---
WHITE = (255, 255, 255)
BLACK = (0, 0, 0)
DARK_GREY = (51, 51, 51)
RED = (255, 0, 0)
BLUE = (0, 0, 255)
