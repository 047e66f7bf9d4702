"""
common/risk.py

The risk-matrix "engine" for the Safety page.

Everything in here is a pure function of the hazard records it is handed.
Nothing is fetched, cached or mutated: the Safety page calls these helpers
fresh on every rerun with whatever register is currently loaded.

- classify():          (likelihood, severity) -> score + band
- cell_members():      which hazards sit in one cell of the 5x5 grid
- group_by_category(): drives the category filter buttons
- build_matrix():      the full 25-cell grid, in display order
- register_frame():    the register as a DataFrame (table + CSV download)
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

import pandas as pd

from common.models import HazardRecord

# Row/column headers of the matrix. Index 0 is rating 1.
LIKELIHOOD_LEVELS = ["Rare", "Unlikely", "Possible", "Likely", "Almost Certain"]
SEVERITY_LEVELS = ["Negligible", "Minor", "Moderate", "Major", "Catastrophic"]

MIN_RATING = 1
MAX_RATING = 5

# Lowest score of each band, checked top-down.
BAND_THRESHOLDS = [
    (20, "Extreme"),
    (13, "High"),
    (6, "Medium"),
    (1, "Low"),
]

BAND_COLORS = {
    "Low": "#22C55E",      # green
    "Medium": "#EAB308",   # yellow
    "High": "#F97316",     # orange
    "Extreme": "#EF4444",  # red
}

BAND_RANGES = {
    "Low": "1-5",
    "Medium": "6-12",
    "High": "13-19",
    "Extreme": "20-25",
}


@dataclass(frozen=True)
class RiskRating:
    score: int
    band: str

    @property
    def label(self) -> str:
        """e.g. 'Extreme (20)'."""
        return f"{self.band} ({self.score})"

    @property
    def color(self) -> str:
        return BAND_COLORS[self.band]


@dataclass(frozen=True)
class MatrixCell:
    likelihood: int
    severity: int
    rating: RiskRating
    hazards: List[HazardRecord]


def band_for(score: int) -> str:
    for floor, band in BAND_THRESHOLDS:
        if score >= floor:
            return band
    return "Low"


def classify(likelihood: int, severity: int) -> RiskRating:
    """
    Maps a likelihood/severity pair to its score and qualitative band.
    Ratings are assumed to be in range; they are validated when records
    are ingested (see HazardRecord.from_row).
    """
    score = likelihood * severity
    return RiskRating(score=score, band=band_for(score))


def ratings_for(record: HazardRecord, use_residual: bool):
    """Returns the (likelihood, severity) pair for the active view."""
    if use_residual:
        return record.residual_likelihood, record.residual_severity
    return record.inherent_likelihood, record.inherent_severity


def classify_record(record: HazardRecord, use_residual: bool) -> RiskRating:
    return classify(*ratings_for(record, use_residual))


def cell_members(records: Sequence[HazardRecord], likelihood: int, severity: int,
                 use_residual: bool) -> List[HazardRecord]:
    """
    Returns the hazards that belong in one grid cell for the active view,
    in the same relative order as `records`. An empty cell is an empty list.
    """
    return [
        record for record in records
        if ratings_for(record, use_residual) == (likelihood, severity)
    ]


def group_by_category(records: Sequence[HazardRecord]) -> Dict[str, List[HazardRecord]]:
    """
    Buckets records by category. Dicts keep insertion order, so the keys
    come out in first-seen order and each bucket keeps the input order.
    """
    groups: Dict[str, List[HazardRecord]] = {}
    for record in records:
        groups.setdefault(record.category, []).append(record)
    return groups


def categories(records: Sequence[HazardRecord]) -> List[str]:
    return list(group_by_category(records).keys())


def filter_by_category(records: Sequence[HazardRecord], category: Optional[str]) -> List[HazardRecord]:
    """`None` is the 'All Risks' filter."""
    if category is None:
        return list(records)
    return group_by_category(records).get(category, [])


def build_matrix(records: Sequence[HazardRecord], use_residual: bool) -> List[List[MatrixCell]]:
    """
    Builds the 5x5 grid in display order: the top row is likelihood 5
    ('Almost Certain'), columns run severity 1 to 5.
    """
    grid = []
    for likelihood in range(MAX_RATING, MIN_RATING - 1, -1):
        row = []
        for severity in range(MIN_RATING, MAX_RATING + 1):
            row.append(MatrixCell(
                likelihood=likelihood,
                severity=severity,
                rating=classify(likelihood, severity),
                hazards=cell_members(records, likelihood, severity, use_residual),
            ))
        grid.append(row)
    return grid


REGISTER_COLUMNS = [
    "ID", "Hazard", "Category", "Likelihood", "Severity", "Score", "Risk",
    "Responsible Person", "Monitoring Method",
]


def register_frame(records: Sequence[HazardRecord], use_residual: bool) -> pd.DataFrame:
    """Flattens the register for st.dataframe / CSV export."""
    rows = []
    for record in records:
        likelihood, severity = ratings_for(record, use_residual)
        rating = classify(likelihood, severity)
        rows.append({
            "ID": record.id,
            "Hazard": record.hazard,
            "Category": record.category,
            "Likelihood": likelihood,
            "Severity": severity,
            "Score": rating.score,
            "Risk": rating.band,
            "Responsible Person": record.responsible_person,
            "Monitoring Method": record.monitoring_method,
        })
    return pd.DataFrame(rows, columns=REGISTER_COLUMNS)
