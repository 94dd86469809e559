# --- Display ---
WIDTH = 400
HEIGHT = 600
FPS = 60

# --- Simulation clock ---
FIXED_STEP_MS = 1000.0 / 60.0   # physics constants are tuned per tick at this rate

# --- Plane ---
PLANE_X = 66                # plane's fixed x (world scrolls left)
PLANE_START_Y = 240.0
PLANE_W = 96
PLANE_H = 40
MIN_VY = -11.0              # fastest climb (px/tick)
MAX_VY = 12.5               # fastest fall (px/tick)
AIR_DRAG = 0.996
TILT_PER_VY = 0.075
TILT_MIN = -0.62
TILT_MAX = 1.05
TILT_EASE = 0.18
FLAP_BOOST_PER_VY = 0.13    # extra correction when flapping against motion
FLAP_BOOST_MIN = -0.8
FLAP_BOOST_MAX = 1.9
WIND_FREQ = 0.0019          # rad per simulated ms

# --- Menu idle bob ---
IDLE_BOB_AMPLITUDE = 6.0
IDLE_BOB_FREQ = 0.004
IDLE_TILT_AMPLITUDE = 0.08
IDLE_TILT_FREQ = 0.006
IDLE_TILT_EASE = 0.1

# --- Trail hook ---
TRAIL_CLIMB_VY = -1.2
TRAIL_CLIMB_EVERY_MS = 18.0
TRAIL_CRUISE_EVERY_MS = 34.0

# --- Obstacles ---
OBSTACLE_W = 100
OBSTACLE_SPAWN_OFFSET_X = 18    # spawned just past the right edge
OBSTACLE_RETIRE_X = -20         # retired once the right edge is left of this
GAP_RAMP_SCORE = 20             # score at which gaps are fully narrowed
GAP_NARROW_MIN = 12
GAP_NARROW_MAX = 8
SPEED_RAMP_SCORE = 35
SPEED_RAMP_MAX = 1.6
PARALLAX_FACTOR = 0.22
NEAR_MISS_PX = 7.0

# --- Collision padding (sprites carry transparent margins) ---
PLANE_PAD_X = -10           # negative grows the plane box
OBSTACLE_PAD_X = 16         # positive shrinks the obstacle box

# --- Crash sequence ---
SHAKE_MS = 320.0
FLASH_MS = 150.0
FLASH_ALPHA_DIVISOR = 400.0
CRASH_HOLD_MS = 280.0          # boundary breach and other causes
CRASH_HOLD_PIPE_MS = 130.0     # obstacle hits hold shorter
EXPLOSION_DELAY_MS = 950.0
RESULT_DELAY_MS = 500.0
EXPLOSION_FPS = 24
EXPLOSION_FRAMES = 6
EXPLOSION_SIZE = 90

# --- Result panel / retry button ---
RESULT_PANEL_W = 340
RESULT_PANEL_H = 220
RESULT_PANEL_X = (WIDTH - RESULT_PANEL_W) * 0.5
RESULT_PANEL_Y = 130
RETRY_BTN_W = 132
RETRY_BTN_H = 42
RETRY_BTN_X = RESULT_PANEL_X + (RESULT_PANEL_W - RETRY_BTN_W) * 0.5
RETRY_BTN_Y = RESULT_PANEL_Y + 145

# --- Persistence ---
BEST_SCORE_FILE = "floppy_best.json"

# --- Colors (RGB) ---
COLOR_BG = (36, 64, 102)
COLOR_BG_BAND = (46, 80, 124)
COLOR_FG = (232, 243, 255)
COLOR_MUTED = (182, 213, 255)
COLOR_PANEL = (5, 16, 32)
COLOR_PANEL_EDGE = (169, 210, 255)
COLOR_BUILDING = (33, 46, 68)
COLOR_PLANE = (220, 232, 255)
COLOR_PLANE_HIT = (255, 196, 160)
COLOR_EXPLOSION = (255, 150, 60)
COLOR_BUTTON = (17, 52, 90)
