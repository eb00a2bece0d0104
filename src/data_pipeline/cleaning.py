"""Data cleaning for season export CSVs.

Handles the input validation the rule engine expects to have happened
upstream:
- Normalize positions to "pitcher" / "catcher" (scorekeeper shorthand P, C)
- Parse game dates as plain calendar dates
- Coerce ages, inning numbers and pitch tallies to integers
- Drop rows the engine cannot use, logging what was dropped
"""

import logging
from datetime import date
from typing import Optional

import pandas as pd

from src.data_pipeline.config import POSITION_ALIASES
from src.rule_engine.pitch_smart_rules import parse_local_date

logger = logging.getLogger(__name__)


def _to_nullable_int(series: pd.Series) -> pd.Series:
    """Coerce to pandas Int64; non-numeric and fractional values become <NA>."""
    numeric = pd.to_numeric(series, errors="coerce")
    numeric = numeric.where(numeric == numeric.round())
    return numeric.astype("Int64")


def optional_int(val) -> Optional[int]:
    """Plain int for a cleaned cell, or None for <NA>/NaN/None."""
    if val is None or pd.isna(val):
        return None
    return int(val)


class SeasonDataCleaner:
    """Cleans and types the four season export tables."""

    # ------------------------------------------------------------------
    # Value helpers
    # ------------------------------------------------------------------
    @staticmethod
    def normalize_position(position: str) -> Optional[str]:
        """Map a position label to "pitcher" or "catcher".

        Examples:
            "P"        -> "pitcher"
            "Catcher"  -> "catcher"
            "SS"       -> None
        """
        if pd.isna(position):
            return None
        return POSITION_ALIASES.get(str(position).strip().lower())

    @staticmethod
    def parse_game_date(value) -> Optional[date]:
        """Parse a game date cell, returning None for blank or malformed values."""
        if pd.isna(value):
            return None
        try:
            return parse_local_date(value)
        except ValueError:
            return None

    # ------------------------------------------------------------------
    # DataFrame-level cleaning
    # ------------------------------------------------------------------
    def clean_games(self, df: pd.DataFrame) -> pd.DataFrame:
        """Parse game_date; drop games whose date cannot be read."""
        out = df.copy()
        out["game_date"] = out["game_date"].apply(self.parse_game_date)

        bad = out["game_date"].isna()
        if bad.any():
            logger.warning(
                "Dropping %d games with missing or malformed dates: %s",
                bad.sum(),
                out.loc[bad, "id"].tolist(),
            )
            out = out[~bad]

        out = out.drop_duplicates(subset=["id"], keep="last").reset_index(drop=True)
        logger.info("Cleaned games: %d rows", len(out))
        return out

    def clean_players(self, df: pd.DataFrame) -> pd.DataFrame:
        """Coerce age to an integer (missing ages stay <NA>)."""
        out = df.copy()
        out["age"] = _to_nullable_int(out["age"])

        no_age = out["age"].isna()
        if no_age.any():
            logger.warning(
                "%d players have no usable age; age limits will not apply to them",
                no_age.sum(),
            )

        out = out.drop_duplicates(subset=["id"], keep="last").reset_index(drop=True)
        logger.info("Cleaned players: %d rows", len(out))
        return out

    def clean_pitching_logs(self, df: pd.DataFrame) -> pd.DataFrame:
        """Coerce the pre-last-batter tally; negative tallies become <NA>."""
        out = df.copy()
        tally = _to_nullable_int(out["penultimate_batter_count"])
        negative = (tally < 0).fillna(False).astype(bool)
        if negative.any():
            logger.warning("Ignoring %d negative pitch tallies", negative.sum())
            tally = tally.mask(negative)
        out["penultimate_batter_count"] = tally

        if "final_pitch_count" in out.columns:
            out["final_pitch_count"] = _to_nullable_int(out["final_pitch_count"])

        out = out.drop_duplicates(
            subset=["game_id", "player_id"], keep="last"
        ).reset_index(drop=True)
        logger.info("Cleaned pitching logs: %d rows", len(out))
        return out

    def clean_positions_played(self, df: pd.DataFrame) -> pd.DataFrame:
        """Keep pitcher/catcher rows with a positive inning number."""
        out = df.copy()
        out["position"] = out["position"].apply(self.normalize_position)
        out["inning_number"] = _to_nullable_int(out["inning_number"])

        unknown = out["position"].isna()
        if unknown.any():
            logger.warning(
                "Dropping %d rows with positions other than pitcher/catcher",
                unknown.sum(),
            )

        bad_inning = out["inning_number"].isna() | (out["inning_number"] <= 0)
        bad_inning = bad_inning.fillna(True).astype(bool)
        if (bad_inning & ~unknown).any():
            logger.warning(
                "Dropping %d rows with invalid inning numbers",
                (bad_inning & ~unknown).sum(),
            )

        out = out[~unknown & ~bad_inning]
        out = out.drop_duplicates(
            subset=["game_id", "player_id", "inning_number", "position"]
        ).reset_index(drop=True)
        logger.info("Cleaned positions played: %d rows", len(out))
        return out

    def clean_all(self, data: dict[str, pd.DataFrame]) -> dict[str, pd.DataFrame]:
        """Clean all four DataFrames returned by SeasonExportIngester.read_all()."""
        return {
            "games": self.clean_games(data["games"]),
            "players": self.clean_players(data["players"]),
            "pitching_logs": self.clean_pitching_logs(data["pitching_logs"]),
            "positions_played": self.clean_positions_played(data["positions_played"]),
        }
