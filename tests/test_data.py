"""Tests for loading, filtering and cleaning complaints."""

import pandas as pd
import pytest

from complaint_analysis.config import NARRATIVE_COL, PRODUCT_COL, AnalysisConfig
from complaint_analysis.data import (
    clean_text,
    downsample_products,
    keep_top_products,
    load_complaints,
    merge_products,
    prepare_complaints,
    select_narratives,
)


class TestCleanText:

    def test_removes_redactions_digits_and_punctuation(self):
        assert clean_text("XXXX account $500 closed!!") == "account closed"

    def test_collapses_whitespace(self):
        assert clean_text("  Late\tfees \n\n charged  ") == "late fees charged"

    def test_redacted_dates(self):
        assert clean_text("On XX/XX/2019 I paid") == "on i paid"

    def test_single_x_is_kept(self):
        assert clean_text("x ray") == "x ray"


class TestFiltering:

    def test_select_drops_missing(self, raw_complaints):
        df = select_narratives(raw_complaints)
        assert list(df.columns) == [NARRATIVE_COL, PRODUCT_COL]
        assert df[NARRATIVE_COL].notna().all()
        assert len(df) == len(raw_complaints) - 3

    def test_keep_top_products(self, raw_complaints):
        df = keep_top_products(select_narratives(raw_complaints), 3)
        assert "Student loan" not in set(df[PRODUCT_COL])
        assert df[PRODUCT_COL].nunique() == 3

    def test_merge_products(self):
        df = pd.DataFrame({
            NARRATIVE_COL: ["a", "b", "c", "d"],
            PRODUCT_COL: [
                "Credit reporting or other personal consumer reports",
                "Credit reporting, credit repair services, or other personal consumer reports",
                "Mortgage",
                "Vehicle loan or lease",
            ],
        })
        merged = merge_products(df, AnalysisConfig().product_merge_map)
        assert list(merged[PRODUCT_COL]) == ["Credit reporting", "Credit reporting", "Mortgage"]
        # input untouched
        assert df[PRODUCT_COL].iloc[0].startswith("Credit reporting or")

    def test_downsample_caps_each_product(self, raw_complaints):
        df = select_narratives(raw_complaints)
        sampled = downsample_products(df, 20, random_state=56)
        counts = sampled[PRODUCT_COL].value_counts()
        assert counts["Mortgage"] == 20
        assert counts["Student loan"] == 8

    def test_downsample_is_reproducible(self, raw_complaints):
        df = select_narratives(raw_complaints)
        a = downsample_products(df, 10, random_state=1)
        b = downsample_products(df, 10, random_state=1)
        pd.testing.assert_frame_equal(a, b)


class TestPrepare:

    def test_prepare_complaints(self, raw_complaints):
        config = AnalysisConfig(top_n_products=3, sample_per_product=50)
        df = prepare_complaints(raw_complaints, config)
        assert {"complaint", PRODUCT_COL, "complaint_clean", "word_count"} <= set(df.columns)
        assert df[PRODUCT_COL].value_counts().to_dict() == {
            "Checking or savings account": 50, "Debt collection": 50, "Mortgage": 50,
        }
        assert not df["complaint_clean"].str.contains("xx").any()
        assert (df["word_count"] == df["complaint_clean"].str.split().str.len()).all()

    def test_empty_after_filtering(self):
        df = pd.DataFrame({NARRATIVE_COL: ["XXXX 123", "!!!"], PRODUCT_COL: ["Mortgage", "Mortgage"]})
        with pytest.raises(ValueError):
            prepare_complaints(df, AnalysisConfig())


class TestLoad:

    def test_load_csv(self, tmp_path, raw_complaints):
        path = tmp_path / "complaints.csv"
        raw_complaints.to_csv(path, index=False)
        df = load_complaints(path)
        assert list(df.columns) == [NARRATIVE_COL, PRODUCT_COL]
        assert len(df) == len(raw_complaints)

    def test_missing_columns(self, tmp_path):
        path = tmp_path / "complaints.csv"
        pd.DataFrame({"Product": ["Mortgage"]}).to_csv(path, index=False)
        with pytest.raises(ValueError, match="missing required columns"):
            load_complaints(path)
