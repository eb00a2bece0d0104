"""Derived eligibility fields for pitching logs.

The rule engine only compares two already-resolved dates; this module does
the resolving. It joins each pitching log to its game date and the pitcher's
age, computes the log's next eligible pitch date, and answers "what was this
player's most recent restriction before a given game?".
"""

import logging
from datetime import date
from typing import Dict, Iterable, List, Optional

import pandas as pd

from src.data_pipeline.cleaning import optional_int
from src.rule_engine.models import EligibilityRecord
from src.rule_engine.pitch_smart_rules import calculate_next_eligible_date
from src.rule_engine.pitching_display import get_official_pitch_count

logger = logging.getLogger(__name__)


class EligibilityCalculator:
    """Computes next-eligible dates and resolves prior restrictions."""

    def add_next_eligible_dates(
        self,
        pitching_logs: pd.DataFrame,
        games: pd.DataFrame,
        players: pd.DataFrame,
    ) -> pd.DataFrame:
        """Join logs with game date and age, then derive eligibility columns.

        Adds columns:
            game_date                - from the log's game
            age                      - pitcher's age (<NA> if unknown)
            official_pitch_count     - tally + 1 (a one-batter outing logged as 0
                                       counts one pitch), 0 if no tally
            next_eligible_pitch_date - date, or None when no rest rule applies

        Logs whose game is not in *games* are dropped.
        """
        game_dates = games[["id", "game_date"]].rename(columns={"id": "game_id"})
        ages = players[["id", "age"]].rename(columns={"id": "player_id"})

        out = pitching_logs.merge(game_dates, on="game_id", how="left")
        orphaned = out["game_date"].isna()
        if orphaned.any():
            logger.warning(
                "Dropping %d pitching logs for unknown games: %s",
                orphaned.sum(),
                sorted(out.loc[orphaned, "game_id"].unique().tolist()),
            )
            out = out[~orphaned]

        out = out.merge(ages, on="player_id", how="left")

        out["official_pitch_count"] = [
            get_official_pitch_count(optional_int(tally))
            for tally in out["penultimate_batter_count"]
        ]
        out["next_eligible_pitch_date"] = [
            calculate_next_eligible_date(game_date, optional_int(age), official)
            for game_date, age, official in zip(
                out["game_date"], out["age"], out["official_pitch_count"]
            )
        ]

        out = out.sort_values(["game_date", "player_id"], kind="stable")
        out = out.reset_index(drop=True)
        restricted = out["next_eligible_pitch_date"].notna().sum()
        logger.info(
            "Derived eligibility for %d pitching logs (%d with rest restrictions)",
            len(out),
            restricted,
        )
        return out

    @staticmethod
    def previous_eligible_date(
        logs: pd.DataFrame, player_id: str, game_date: date
    ) -> Optional[date]:
        """Most recent non-null next eligible date from a log before *game_date*.

        Only logs dated strictly before *game_date* count, so a player's own
        log for the game being checked never restricts that game.
        """
        prior = logs[
            (logs["player_id"] == player_id)
            & (logs["game_date"] < game_date)
            & logs["next_eligible_pitch_date"].notna()
        ]
        if prior.empty:
            return None
        latest = prior.sort_values(
            ["game_date", "next_eligible_pitch_date"], kind="stable"
        ).iloc[-1]
        return latest["next_eligible_pitch_date"]

    def eligibility_dates_for_game(
        self,
        logs: pd.DataFrame,
        game_date: date,
        player_ids: Iterable[str],
    ) -> Dict[str, Optional[date]]:
        """Map each player to their prior restriction as of *game_date*."""
        return {
            player_id: self.previous_eligible_date(logs, player_id, game_date)
            for player_id in player_ids
        }

    @staticmethod
    def latest_eligibility_records(logs: pd.DataFrame) -> List[EligibilityRecord]:
        """One record per pitcher, from their most recent pitching log."""
        records = []
        if logs.empty:
            return records
        ordered = logs.sort_values(["player_id", "game_date"], kind="stable")
        for player_id, group in ordered.groupby("player_id", sort=True):
            latest = group.iloc[-1]
            next_date = latest["next_eligible_pitch_date"]
            records.append(
                EligibilityRecord(
                    player_id=str(player_id),
                    as_of_game_date=latest["game_date"],
                    next_eligible_pitch_date=None if pd.isna(next_date) else next_date,
                )
            )
        return records
