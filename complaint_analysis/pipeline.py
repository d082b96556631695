"""End-to-end run: data -> features -> topics and classifiers -> accuracy vs benchmarks."""

import logging
import pickle
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import matplotlib.pyplot as plt
import pandas as pd

from . import plots
from .config import AnalysisConfig, PRODUCT_COL
from .data import load_complaints, prepare_complaints
from .evaluation import classification_summary, score_predictions
from .features import build_count_matrix, build_tfidf_matrix
from .models import (
    class_probabilities,
    encode_products,
    fit_lasso_scorers,
    fit_product_classifier,
    fit_topic_benchmark,
    lasso_scores,
    majority_baseline,
    split_complaints,
    top_coefficients,
)
from .scoring import RankAccuracyScorer
from .topics import fit_topic_model, top_terms, topic_prevalence, topic_prevalence_se

logger = logging.getLogger(__name__)


@dataclass
class AnalysisReport:
    classifier_accuracy: float
    baseline_accuracy: float
    classification_report: str
    scores: pd.DataFrame
    topic_terms: Dict[str, Dict[str, float]]
    topic_prevalence: pd.DataFrame
    topic_prevalence_se: pd.DataFrame
    lasso_terms: Dict[str, List[Tuple[str, float]]]
    figures: List[Path] = field(default_factory=list)
    artifacts: List[Path] = field(default_factory=list)


def _save_artifacts(artifacts_dir, objects):
    artifacts_dir.mkdir(parents=True, exist_ok=True)
    paths = []
    for name, obj in objects.items():
        path = artifacts_dir / f"{name}.pkl"
        with open(path, "wb") as f:
            pickle.dump(obj, f)
        paths.append(path)
    logger.info("Saved %d artifacts to %s", len(paths), artifacts_dir)
    return paths


def run_analysis(config: Optional[AnalysisConfig] = None, complaints=None) -> AnalysisReport:
    """
    Run the whole analysis once.

    ``complaints`` may be a raw complaints DataFrame, in which case
    ``config.data_path`` is not read.
    """
    config = config or AnalysisConfig()
    raw = complaints if complaints is not None else load_complaints(config.data_path)
    df = prepare_complaints(raw, config)

    train, test = split_complaints(df, config.test_size, config.random_state)
    y_train, le = encode_products(train[PRODUCT_COL])
    y_test = le.transform(test[PRODUCT_COL])
    class_names = list(le.classes_)

    # Topic model on raw counts
    count_vec, counts_train, counts_test = build_count_matrix(
        train["complaint_clean"], test["complaint_clean"],
        config.min_df, config.max_df, config.max_features,
    )
    lda, topics_train = fit_topic_model(
        counts_train, config.n_topics, config.topic_max_iter, config.random_state
    )
    topics_test = lda.transform(counts_test)
    terms = top_terms(lda, count_vec.get_feature_names_out(), config.n_top_terms)
    prevalence = topic_prevalence(topics_train, train[PRODUCT_COL])
    prevalence_se = topic_prevalence_se(topics_train, train[PRODUCT_COL])
    for name, words in terms.items():
        logger.info("%s: %s", name, ", ".join(words))

    # Multinomial classifier on TF-IDF
    tfidf_vec, X_train, X_test = build_tfidf_matrix(
        train["complaint_clean"], test["complaint_clean"],
        config.min_df, config.max_df, config.max_features, config.ngram_range,
    )
    classifier = fit_product_classifier(X_train, y_train, random_state=config.random_state)
    y_pred = classifier.predict(X_test)
    accuracy, report = classification_summary(y_test, y_pred, class_names)
    _, baseline = majority_baseline(y_train, y_test)
    logger.info("Classifier accuracy %.3f vs majority baseline %.3f", accuracy, baseline)
    logger.info("Classification report:\n%s", report)

    # One LASSO scorer per product
    lasso = fit_lasso_scorers(
        X_train, train[PRODUCT_COL],
        l1_ratio=config.l1_ratio, Cs=config.lasso_cs, cv=config.lasso_cv,
        max_iter=config.lasso_max_iter, random_state=config.random_state,
    )
    vocabulary = tfidf_vec.get_feature_names_out()
    lasso_terms = {
        product: top_coefficients(model, vocabulary, config.n_top_terms)
        for product, model in lasso.items()
    }

    topic_clf = fit_topic_benchmark(topics_train, y_train, random_state=config.random_state)

    scorer = RankAccuracyScorer(confidence=config.confidence)
    scores = score_predictions(test[PRODUCT_COL], {
        "Multinomial LR": class_probabilities(classifier, X_test, class_names),
        "LASSO": lasso_scores(lasso, X_test),
        "Topic proportions": class_probabilities(topic_clf, topics_test, class_names),
        "Word count": test["word_count"],
    }, scorer=scorer.score)
    logger.info("Concordance accuracy:\n%s", scores.round(2).to_string(index=False))

    figures = []
    if config.make_plots:
        config.figures_dir.mkdir(parents=True, exist_ok=True)
        dpi = config.figure_dpi
        figure_makers = {
            "product_counts.png": lambda p: plots.plot_product_counts(df, p, dpi),
            "confusion_matrix.png": lambda p: plots.plot_confusion_matrix(
                y_test, y_pred, class_names, p, dpi),
            "model_comparison.png": lambda p: plots.plot_model_comparison(scores, p, dpi),
            "topic_wordclouds.png": lambda p: plots.plot_topic_wordclouds(terms, p, dpi),
            "topic_prevalence.png": lambda p: plots.plot_topic_prevalence(prevalence, p, dpi),
        }
        for filename, make in figure_makers.items():
            path = config.figures_dir / filename
            plt.close(make(path))
            figures.append(path)
        logger.info("Saved %d figures to %s", len(figures), config.figures_dir)

    artifacts = _save_artifacts(config.artifacts_dir, {
        "model": classifier,
        "label_encoder": le,
        "tfidf_vectorizer": tfidf_vec,
        "count_vectorizer": count_vec,
        "topic_model": lda,
    })
    scores_path = config.artifacts_dir / "scores.csv"
    scores.to_csv(scores_path, index=False)
    artifacts.append(scores_path)

    return AnalysisReport(
        classifier_accuracy=accuracy,
        baseline_accuracy=baseline,
        classification_report=report,
        scores=scores,
        topic_terms=terms,
        topic_prevalence=prevalence,
        topic_prevalence_se=prevalence_se,
        lasso_terms=lasso_terms,
        figures=figures,
        artifacts=artifacts,
    )
