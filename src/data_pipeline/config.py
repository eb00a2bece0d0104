from pathlib import Path

# Base project directory
PROJECT_ROOT = Path(__file__).parent.parent.parent

# Data directories
DATA_DIR = PROJECT_ROOT / "data"
RAW_DATA_DIR = DATA_DIR / "raw"
REPORTS_DIR = DATA_DIR / "reports"

# Season export file names (one directory per season)
FILE_NAMES = {
    "games": "games.csv",
    "players": "players.csv",
    "pitching_logs": "pitching_logs.csv",
    "positions_played": "positions_played.csv",
}

# Columns each export must carry (extra columns are kept as-is)
REQUIRED_COLUMNS = {
    "games": ["id", "game_date"],
    "players": ["id", "name", "age"],
    "pitching_logs": ["game_id", "player_id", "penultimate_batter_count"],
    "positions_played": ["game_id", "player_id", "inning_number", "position"],
}

# Scorekeeper shorthand -> canonical position
POSITION_ALIASES = {
    "p": "pitcher",
    "pitcher": "pitcher",
    "c": "catcher",
    "catcher": "catcher",
}

REPORT_FILE_NAME = "season_audit.json"
