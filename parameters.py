"""System parameters for Rock-Paper-Scissors Minus One.

All system-wide constants are defined here and imported by other modules.
Times are in milliseconds.
"""

# Countdown configuration
FIRST_PICK_TIME_MS = 4000  # Time to commit the first symbol
SECOND_PICK_TIME_MS = 4000  # Time to commit the second symbol
DISCARD_TIME_MS = 2000  # Time to keep one of the two symbols
TICK_INTERVAL_MS = 10  # Clock sampling granularity for the countdown display

# Round configuration
RESULT_DELAY_MS = 3000  # How long a resolved round stays on screen

# Score persistence
SCORE_FILE = "scores/rps_scores.json"
PLAYER_WINS_KEY = "rps-player-wins"
BOT_WINS_KEY = "rps-bot-wins"

# Simulation configuration
NUM_SIMULATIONS = 200  # Rounds simulated per difficulty
MAX_THINK_TIME_MS = 1500  # Upper bound on a simulated player's reaction time
WIN_RATE_WINDOW = 50  # Window for rolling win-rate plots
