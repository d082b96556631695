"""Loading and cleaning the CFPB complaint narratives."""

import logging
import re

import pandas as pd

from .config import NARRATIVE_COL, PRODUCT_COL

logger = logging.getLogger(__name__)


def load_complaints(path):
    """Read the complaints CSV (plain or zipped), keeping narrative and product."""
    header = pd.read_csv(path, nrows=0)
    missing = [c for c in (NARRATIVE_COL, PRODUCT_COL) if c not in header.columns]
    if missing:
        raise ValueError(f"{path} is missing required columns: {missing}")

    df = pd.read_csv(path, usecols=[NARRATIVE_COL, PRODUCT_COL], low_memory=False)
    logger.info("Loaded %d complaints from %s", len(df), path)
    return df


def select_narratives(df):
    # Only the narrative and the product matter here
    df = df[[NARRATIVE_COL, PRODUCT_COL]].dropna()
    logger.info("%d complaints have a narrative", len(df))
    return df


def keep_top_products(df, n):
    top_products = df[PRODUCT_COL].value_counts().nlargest(n).index
    return df[df[PRODUCT_COL].isin(top_products)]


def merge_products(df, merge_map):
    df = df.copy()
    df[PRODUCT_COL] = df[PRODUCT_COL].map(merge_map)
    return df.dropna(subset=[PRODUCT_COL])


def downsample_products(df, n, random_state):
    """Sample up to n complaints per product, so the classes are balanced."""
    parts = [
        group.sample(min(len(group), n), random_state=random_state)
        for _, group in df.groupby(PRODUCT_COL, sort=True)
    ]
    if not parts:
        return df.iloc[0:0].reset_index(drop=True)
    return pd.concat(parts).reset_index(drop=True)


def clean_text(text):
    text = text.lower()
    text = re.sub(r'x{2,}', ' ', text)  # XXXX redactions
    text = re.sub(r'[^a-z\s]', ' ', text)
    text = re.sub(r'\s+', ' ', text).strip()
    return text


def prepare_complaints(df, config):
    """
    Filter, balance and clean a raw complaints table.

    Returns a frame with ``complaint``, ``Product``, ``complaint_clean`` and
    ``word_count`` columns.
    """
    df = select_narratives(df)
    df = keep_top_products(df, config.top_n_products)
    if config.product_merge_map is not None:
        df = merge_products(df, config.product_merge_map)
    df = downsample_products(df, config.sample_per_product, config.random_state)
    df = df.rename(columns={NARRATIVE_COL: "complaint"})

    df["complaint_clean"] = df["complaint"].astype(str).apply(clean_text)
    df = df[df["complaint_clean"] != ""].reset_index(drop=True)
    if df.empty:
        raise ValueError("No complaints left after filtering and cleaning")

    df["word_count"] = df["complaint_clean"].str.split().str.len()

    logger.info("Complaints per product:\n%s", df[PRODUCT_COL].value_counts().to_string())
    logger.info("Word count summary:\n%s", df["word_count"].describe().to_string())
    return df
