"""Batch scoring of text collections stored as Parquet, CSV or NDJSON.

Each row's text is run through the same analysis as a single call, and the
numeric results are appended as new columns so a corpus can be ranked or
filtered with ordinary Polars expressions.
"""

import logging
from pathlib import Path
from typing import Dict, Optional

import polars as pl

from humanizer.text.analyzer import TextAnalyzer
from humanizer.text.diagnosis import ScoringParameters, TextDiagnosis

logger = logging.getLogger(__name__)

SCORE_SCHEMA = {
    "ai_score": pl.Int64,
    "readability_score": pl.Int64,
    "word_count": pl.Int64,
    "sentence_count": pl.Int64,
    "avg_sentence_length": pl.Float64,
    "sentence_length_variance": pl.Float64,
    "flagged_phrases": pl.String,
}

SUMMARY_FIELDS = ("ai_score", "readability_score", "word_count", "sentence_length_variance")

READERS = {
    ".parquet": pl.read_parquet,
    ".csv": pl.read_csv,
    ".ndjson": pl.read_ndjson,
    ".jsonl": pl.read_ndjson,
}


def load_corpus(path: str, column: str = "text") -> pl.DataFrame:
    """Read a corpus file and check it has a text column.

    Args:
        path: Path to a .parquet, .csv, .ndjson or .jsonl file
        column: Name of the column holding the text

    Returns:
        The corpus as a DataFrame

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the format is unsupported, the file cannot be parsed
            or the column is missing
    """
    filepath = Path(path)
    if not filepath.exists():
        raise FileNotFoundError(f"Corpus file not found: {path}")

    reader = READERS.get(filepath.suffix.lower())
    if reader is None:
        supported = ", ".join(sorted(READERS))
        raise ValueError(f"Unsupported corpus format '{filepath.suffix}' (expected one of {supported})")

    try:
        df = reader(filepath)
    except (pl.exceptions.PolarsError, OSError) as e:
        raise ValueError(f"Could not read corpus {filepath.name}: {e}") from e

    if column not in df.columns:
        raise ValueError(f"Column '{column}' not found in corpus (columns: {df.columns})")

    logger.info(f"Loaded {len(df)} rows from {filepath.name}")
    return df


def score_row(text: Optional[str], parameters: Optional[ScoringParameters] = None) -> Dict[str, object]:
    """Compute the score columns for a single text. Null text scores as empty."""
    analyzer = TextAnalyzer(text or "")
    result = TextDiagnosis(analyzer, parameters=parameters).diagnose(with_suggestions=False)

    return {
        "ai_score": result.ai_score,
        "readability_score": result.readability_score,
        "word_count": result.word_count,
        "sentence_count": result.sentence_count,
        "avg_sentence_length": analyzer.avg_sentence_length,
        "sentence_length_variance": analyzer.sentence_length_variance,
        "flagged_phrases": ", ".join(p.phrase for p in result.flagged_phrases),
    }


def score_corpus(
    df: pl.DataFrame,
    column: str = "text",
    parameters: Optional[ScoringParameters] = None,
) -> pl.DataFrame:
    """Append score columns to every row of a corpus.

    Args:
        df: Corpus DataFrame
        column: Name of the text column
        parameters: Optional scoring weights

    Returns:
        New DataFrame with the original columns followed by the score columns

    Raises:
        ValueError: If the column is missing or shares a name with a score column
    """
    if column not in df.columns:
        raise ValueError(f"Column '{column}' not found in corpus (columns: {df.columns})")
    if column in SCORE_SCHEMA:
        raise ValueError(f"Text column '{column}' has the same name as a score column")

    records = [score_row(text, parameters) for text in df[column].to_list()]
    scores = pl.DataFrame(records, schema=SCORE_SCHEMA)

    # Score columns replace any stale ones from an earlier run.
    stale = [name for name in SCORE_SCHEMA if name in df.columns]
    return df.drop(stale).hstack(scores)


def summarize(scored: pl.DataFrame) -> Dict[str, Dict[str, Optional[float]]]:
    """Distribution statistics for the main score columns of a scored corpus."""
    summary: Dict[str, Dict[str, Optional[float]]] = {}
    for field in SUMMARY_FIELDS:
        series = scored[field]
        summary[field] = {
            "min": series.min(),
            "median": series.median(),
            "mean": series.mean(),
            "max": series.max(),
        }
    return summary


def write_scores(scored: pl.DataFrame, path: str) -> None:
    """Write a scored corpus as Parquet, or CSV when path ends in .csv."""
    output_filepath = Path(path)
    output_filepath.parent.mkdir(parents=True, exist_ok=True)

    if output_filepath.suffix.lower() == ".csv":
        scored.write_csv(output_filepath)
    else:
        scored.write_parquet(output_filepath)

    logger.info(f"Wrote {len(scored)} scored rows to {output_filepath}")
