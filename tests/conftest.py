import matplotlib

matplotlib.use("Agg")

import pytest

from complaint_analysis.config import AnalysisConfig
from complaint_analysis.data import prepare_complaints
from complaint_analysis.models import split_complaints

from .synthetic import make_complaints


@pytest.fixture
def raw_complaints():
    return make_complaints()


@pytest.fixture(scope="session")
def complaint_split():
    config = AnalysisConfig(top_n_products=3, sample_per_product=50)
    df = prepare_complaints(make_complaints(), config)
    return split_complaints(df, test_size=0.2, random_state=56)
