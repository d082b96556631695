"""Settings for the complaint analysis: paths, product filters and model knobs."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional, Sequence

# --- Paths ---
DATA_PATH = Path("input_data") / "complaints.csv.zip"
FIGURES_DIR = Path("figures")
ARTIFACTS_DIR = Path("artifacts")

# --- Raw CFPB columns ---
NARRATIVE_COL = "Consumer complaint narrative"
PRODUCT_COL = "Product"

# I only keep the top 6 products, and fold the credit reporting variants together
TOP_N_PRODUCTS = 6
PRODUCT_MERGE_MAP = {
    "Credit reporting, credit repair services, or other personal consumer reports": "Credit reporting",
    "Credit reporting or other personal consumer reports": "Credit reporting",
    "Debt collection": "Debt collection",
    "Mortgage": "Mortgage",
    "Checking or savings account": "Checking or savings account",
    "Money transfer, virtual currency, or money service": "Money transfer",
}

# --- Sampling ---
SAMPLE_PER_PRODUCT = 10000
RANDOM_STATE = 56
TEST_SIZE = 0.2

# --- Document-feature matrices ---
MIN_DF = 5
MAX_DF = 0.95
MAX_FEATURES = 30000
NGRAM_RANGE = (1, 2)

# --- Topic model ---
N_TOPICS = 20
TOPIC_MAX_ITER = 20
N_TOP_TERMS = 10

# --- LASSO / elastic-net ---
L1_RATIO = 1.0  # 1.0 is the LASSO
LASSO_CS = (0.1, 1.0, 10.0)
LASSO_CV = 5
LASSO_MAX_ITER = 2000

# --- Scoring ---
CONFIDENCE = 0.95
PAIRWISE_THRESHOLD = 1000

FIGURE_DPI = 300
LOG_FORMAT = "[%(levelname)s] %(message)s"


@dataclass
class AnalysisConfig:
    data_path: Path = DATA_PATH
    figures_dir: Path = FIGURES_DIR
    artifacts_dir: Path = ARTIFACTS_DIR
    top_n_products: int = TOP_N_PRODUCTS
    product_merge_map: Optional[Dict[str, str]] = field(
        default_factory=lambda: dict(PRODUCT_MERGE_MAP)
    )
    sample_per_product: int = SAMPLE_PER_PRODUCT
    random_state: int = RANDOM_STATE
    test_size: float = TEST_SIZE
    min_df: int = MIN_DF
    max_df: float = MAX_DF
    max_features: int = MAX_FEATURES
    ngram_range: tuple = NGRAM_RANGE
    n_topics: int = N_TOPICS
    topic_max_iter: int = TOPIC_MAX_ITER
    n_top_terms: int = N_TOP_TERMS
    l1_ratio: float = L1_RATIO
    lasso_cs: Sequence[float] = LASSO_CS
    lasso_cv: int = LASSO_CV
    lasso_max_iter: int = LASSO_MAX_ITER
    confidence: float = CONFIDENCE
    figure_dpi: int = FIGURE_DPI
    make_plots: bool = True

    def __post_init__(self):
        self.data_path = Path(self.data_path)
        self.figures_dir = Path(self.figures_dir)
        self.artifacts_dir = Path(self.artifacts_dir)
        if not 0 < self.test_size < 1:
            raise ValueError(f"test_size must be in (0, 1), got {self.test_size}")
        if self.n_topics < 2:
            raise ValueError(f"n_topics must be at least 2, got {self.n_topics}")
        if not 0 <= self.l1_ratio <= 1:
            raise ValueError(f"l1_ratio must be in [0, 1], got {self.l1_ratio}")
        if not 0 < self.confidence < 1:
            raise ValueError(f"confidence must be in (0, 1), got {self.confidence}")


def configure_logging(level="INFO"):
    logging.basicConfig(level=level, format=LOG_FORMAT)
