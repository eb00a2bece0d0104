"""Run the season audit: derive eligibility dates and flag rule violations.

Usage:
    python -m src.data_pipeline.run_update <season_dir> [output_dir]

Examples:
    python -m src.data_pipeline.run_update data/raw/spring_2025
    python -m src.data_pipeline.run_update /path/to/export /tmp/reports
"""

import json
import logging
import sys
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional

import pandas as pd

from src.data_pipeline.cleaning import SeasonDataCleaner, optional_int
from src.data_pipeline.config import REPORT_FILE_NAME, REPORTS_DIR
from src.data_pipeline.eligibility import EligibilityCalculator
from src.data_pipeline.ingestion import SeasonExportIngester
from src.logging_config import setup_logging
from src.rule_engine.models import PlayerViolations
from src.rule_engine.violation_checker import PITCHER, evaluate_game

logger = logging.getLogger(__name__)


def _iso(value: Optional[date]) -> Optional[str]:
    if value is None or pd.isna(value):
        return None
    return value.isoformat()


def _game_positions(positions: pd.DataFrame, game_id: str) -> List[dict]:
    rows = positions[positions["game_id"] == game_id]
    return [
        {
            "player_id": r.player_id,
            "inning_number": int(r.inning_number),
            "position": r.position,
        }
        for r in rows.itertuples(index=False)
    ]


def _game_pitching_logs(logs: pd.DataFrame, game_id: str) -> List[dict]:
    rows = logs[logs["game_id"] == game_id]
    return [
        {
            "player_id": r.player_id,
            "penultimate_batter_count": optional_int(r.penultimate_batter_count),
        }
        for r in rows.itertuples(index=False)
    ]


def _player_violations_to_dict(
    result: PlayerViolations, player_names: Dict[str, str]
) -> dict:
    return {
        "player_id": result.player_id,
        "name": player_names.get(result.player_id),
        "violations": [kind.value for kind in result.violations],
        "messages": result.messages,
    }


def audit_games(
    games: pd.DataFrame,
    players: pd.DataFrame,
    positions: pd.DataFrame,
    logs_with_dates: pd.DataFrame,
) -> List[dict]:
    """Evaluate every game in date order.

    Returns one dict per game with its has_violation flag and the players
    who triggered any rule.
    """
    calculator = EligibilityCalculator()
    player_ages = {
        pid: optional_int(age) for pid, age in zip(players["id"], players["age"])
    }
    player_names = dict(zip(players["id"], players["name"]))

    results = []
    for game in games.sort_values(["game_date", "id"], kind="stable").itertuples(
        index=False
    ):
        game_positions = _game_positions(positions, game.id)
        pitchers = sorted(
            {row["player_id"] for row in game_positions if row["position"] == PITCHER}
        )
        eligibility_dates = calculator.eligibility_dates_for_game(
            logs_with_dates, game.game_date, pitchers
        )

        player_results = evaluate_game(
            game_positions,
            _game_pitching_logs(logs_with_dates, game.id),
            player_ages,
            game_date=game.game_date,
            player_eligibility_dates=eligibility_dates,
        )
        if player_results:
            logger.warning(
                "Game %s (%s): %d players with violations",
                game.id,
                game.game_date,
                len(player_results),
            )

        results.append(
            {
                "game_id": game.id,
                "game_date": _iso(game.game_date),
                "has_violation": bool(player_results),
                "players": [
                    _player_violations_to_dict(r, player_names) for r in player_results
                ],
            }
        )
    return results


def run_pipeline(season_dir: Path, output_dir: Path | None = None) -> Path:
    """Run the complete season audit.

    Args:
        season_dir: Directory containing the season export CSVs.
        output_dir: Directory for the JSON report.
            Defaults to ``data/reports/``.

    Returns:
        Path to the generated JSON report.

    Raises:
        FileNotFoundError: If the season directory or an export file
            doesn't exist.
        IngestionError: If an export file lacks required columns.
    """
    season_dir = Path(season_dir)
    output_dir = Path(output_dir) if output_dir else REPORTS_DIR

    if not season_dir.is_dir():
        raise FileNotFoundError(f"Season directory not found: {season_dir}")

    logger.info("Starting season audit (data: %s)", season_dir)

    # 1. Ingest
    logger.info("Step 1/5: Ingesting CSV files...")
    raw = SeasonExportIngester(season_dir).read_all()
    logger.info(
        "Loaded: %d games, %d players, %d pitching logs, %d position rows",
        len(raw["games"]), len(raw["players"]),
        len(raw["pitching_logs"]), len(raw["positions_played"]),
    )

    # 2. Clean
    logger.info("Step 2/5: Cleaning data...")
    cleaned = SeasonDataCleaner().clean_all(raw)

    # 3. Eligibility dates
    logger.info("Step 3/5: Deriving next eligible pitch dates...")
    calculator = EligibilityCalculator()
    logs = calculator.add_next_eligible_dates(
        cleaned["pitching_logs"], cleaned["games"], cleaned["players"]
    )

    # 4. Rule evaluation
    logger.info("Step 4/5: Checking pitching and catching rules...")
    game_results = audit_games(
        cleaned["games"], cleaned["players"], cleaned["positions_played"], logs
    )

    # 5. Output JSON
    logger.info("Step 5/5: Generating JSON report...")
    flagged = sum(1 for g in game_results if g["has_violation"])
    report = {
        "metadata": {
            "version": "1.0",
            "generated_at": datetime.now(timezone.utc).isoformat(),
            "source": str(season_dir),
            "total_games": len(game_results),
            "games_with_violations": flagged,
        },
        "games": game_results,
        "pitching_logs": [
            {
                "game_id": r.game_id,
                "player_id": r.player_id,
                "game_date": _iso(r.game_date),
                "official_pitch_count": int(r.official_pitch_count),
                "next_eligible_pitch_date": _iso(r.next_eligible_pitch_date),
            }
            for r in logs.itertuples(index=False)
        ],
        "eligibility": [
            {
                "player_id": rec.player_id,
                "as_of_game_date": _iso(rec.as_of_game_date),
                "next_eligible_pitch_date": _iso(rec.next_eligible_pitch_date),
            }
            for rec in calculator.latest_eligibility_records(logs)
        ],
    }

    output_dir.mkdir(parents=True, exist_ok=True)
    output_file = output_dir / REPORT_FILE_NAME

    with open(output_file, "w", encoding="utf-8") as f:
        json.dump(report, f, indent=2)

    logger.info("Audit complete! Output: %s", output_file)
    logger.info("  Games: %d (%d with violations)", len(game_results), flagged)

    return output_file


if __name__ == "__main__":
    setup_logging()

    if len(sys.argv) < 2:
        print("Usage: python -m src.data_pipeline.run_update <season_dir> [output_dir]")
        sys.exit(2)

    season_dir = Path(sys.argv[1])
    output_dir = Path(sys.argv[2]) if len(sys.argv) > 2 else None

    try:
        output = run_pipeline(season_dir, output_dir)
        print(f"Audit complete: {output}")
    except Exception:
        logger.exception("Season audit failed")
        sys.exit(1)
