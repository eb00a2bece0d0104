"""Shared fixtures for the rule engine and season audit test suites."""

import textwrap

import pytest

from src.data_pipeline.cleaning import SeasonDataCleaner
from src.data_pipeline.eligibility import EligibilityCalculator
from src.data_pipeline.ingestion import SeasonExportIngester
from src.rule_engine.violation_checker import ViolationChecker


# ------------------------------------------------------------------
# Lightweight factories – cheap to construct, no I/O
# ------------------------------------------------------------------

@pytest.fixture(scope="module")
def checker():
    return ViolationChecker()


@pytest.fixture(scope="module")
def cleaner():
    return SeasonDataCleaner()


@pytest.fixture(scope="module")
def calculator():
    return EligibilityCalculator()


# ------------------------------------------------------------------
# Season export on disk
# ------------------------------------------------------------------

# g1 2025-05-10: p9 (age 9) pitches 1-3 with 55 official pitches -> eligible 05-14
#                p11 catches 1-4 then pitches 5-6 (four innings catching)
# g2 2025-05-13: p9 pitches again before 05-14 (rest violation)
# g3 2025-05-14: p9 pitches on the eligible date itself (legal)
SEASON_FILES = {
    "games.csv": """\
        id,game_date,home_team,away_team
        g1,2025-05-10,Cubs,Sox
        g2,2025-05-13,Cubs,Mets
        g3,2025-05-14,Sox,Mets
    """,
    "players.csv": """\
        id,name,age,jersey_number
        p9,Sam Ortiz,9,12
        p11,Lee Park,11,4
        p12,Max Hill,12,7
    """,
    "pitching_logs.csv": """\
        game_id,player_id,final_pitch_count,penultimate_batter_count
        g1,p9,58,54
        g1,p11,20,18
        g2,p9,12,10
        g3,p9,16,14
        g3,p12,30,25
    """,
    "positions_played.csv": """\
        game_id,player_id,inning_number,position
        g1,p9,1,pitcher
        g1,p9,2,pitcher
        g1,p9,3,pitcher
        g1,p11,1,catcher
        g1,p11,2,catcher
        g1,p11,3,catcher
        g1,p11,4,catcher
        g1,p11,5,pitcher
        g1,p11,6,pitcher
        g2,p9,1,pitcher
        g2,p9,2,pitcher
        g3,p9,1,pitcher
        g3,p12,2,pitcher
        g3,p12,3,pitcher
    """,
}


def write_season(directory, files=None):
    """Write a season export into *directory*, returning the directory."""
    directory.mkdir(parents=True, exist_ok=True)
    for name, content in (files or SEASON_FILES).items():
        (directory / name).write_text(textwrap.dedent(content))
    return directory


@pytest.fixture
def season_files():
    """Copy of the sample export contents, safe to modify per test."""
    return dict(SEASON_FILES)


@pytest.fixture
def make_season():
    """Factory writing a (possibly modified) season export."""
    return write_season


@pytest.fixture
def season_dir(tmp_path):
    """A complete three-game season export in a temporary directory."""
    return write_season(tmp_path / "season")


@pytest.fixture
def cleaned_season(season_dir, cleaner):
    """Cleaned DataFrames for the sample season."""
    return cleaner.clean_all(SeasonExportIngester(season_dir).read_all())


@pytest.fixture
def logs_with_dates(cleaned_season, calculator):
    """Pitching logs with derived eligibility columns."""
    return calculator.add_next_eligible_dates(
        cleaned_season["pitching_logs"],
        cleaned_season["games"],
        cleaned_season["players"],
    )
