"""CSV ingestion for season exports.

A season export is a directory holding one CSV per database table:
games, players, pitching_logs and positions_played. Every column is read as
text; type coercion happens in cleaning so a single malformed cell never
aborts the whole read.
"""

import logging
from pathlib import Path

import pandas as pd

from src.data_pipeline.config import FILE_NAMES, REQUIRED_COLUMNS

logger = logging.getLogger(__name__)


class IngestionError(Exception):
    """Raised when a season export file cannot be used."""


class SeasonExportIngester:
    """Reads the four season export CSVs into pandas DataFrames."""

    def __init__(self, season_dir: Path):
        self.season_dir = Path(season_dir)

    def _resolve_path(self, file_key: str) -> Path:
        """Build the full file path for a given file key, raising if missing."""
        filepath = self.season_dir / FILE_NAMES[file_key]
        if not filepath.exists():
            raise FileNotFoundError(f"Expected file not found: {filepath}")
        return filepath

    def _read_table(self, file_key: str) -> pd.DataFrame:
        filepath = self._resolve_path(file_key)
        logger.info("Reading %s: %s", file_key, filepath.name)

        df = pd.read_csv(filepath, dtype=str, skipinitialspace=True)
        df.columns = [str(c).strip() for c in df.columns]

        missing = [c for c in REQUIRED_COLUMNS[file_key] if c not in df.columns]
        if missing:
            raise IngestionError(
                f"{filepath.name} is missing required columns: {', '.join(missing)}"
            )

        for col in df.columns:
            df[col] = df[col].str.strip()

        # Blank rows left behind by spreadsheet edits
        df = df.dropna(how="all").reset_index(drop=True)

        logger.info("Loaded %d %s rows", len(df), file_key)
        return df

    def read_games(self) -> pd.DataFrame:
        """Games: id, game_date (plus any score / team columns)."""
        return self._read_table("games")

    def read_players(self) -> pd.DataFrame:
        """Players: id, name, age."""
        return self._read_table("players")

    def read_pitching_logs(self) -> pd.DataFrame:
        """Pitching logs: game_id, player_id, penultimate_batter_count."""
        return self._read_table("pitching_logs")

    def read_positions_played(self) -> pd.DataFrame:
        """Positions played: game_id, player_id, inning_number, position."""
        return self._read_table("positions_played")

    def read_all(self) -> dict[str, pd.DataFrame]:
        """Read every export file.

        Returns a dict with keys: games, players, pitching_logs,
        positions_played.
        """
        return {
            "games": self.read_games(),
            "players": self.read_players(),
            "pitching_logs": self.read_pitching_logs(),
            "positions_played": self.read_positions_played(),
        }
