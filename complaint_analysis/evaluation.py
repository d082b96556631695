"""Comparing models and benchmarks with the concordance accuracy."""

import logging

import numpy as np
import pandas as pd
from sklearn.metrics import accuracy_score, classification_report

from .scoring import InvalidInputError, kendall_acc

logger = logging.getLogger(__name__)

SCORE_COLUMNS = ["model", "product", "accuracy", "lower", "upper", "n"]


def score_predictions(products, predictions, scorer=kendall_acc):
    """
    Score every model against every product.

    ``predictions`` maps a model name to either a DataFrame with one score
    column per product, or a single Series used for every product (a
    benchmark like narrative length). Truth is the 0/1 indicator of each
    product. Degenerate comparisons are logged and left out.
    """
    products = np.asarray(products)
    rows = []
    for model_name, scores in predictions.items():
        for product in sorted(set(products)):
            if isinstance(scores, pd.DataFrame):
                if product not in scores.columns:
                    logger.warning("%s has no scores for %s", model_name, product)
                    continue
                prediction = scores[product].to_numpy()
            else:
                prediction = np.asarray(scores)
            label = f"{model_name}: {product}"
            try:
                result = scorer((products == product).astype(int), prediction, label=label)
            except InvalidInputError as exc:
                logger.warning("Skipping %s: %s", label, exc)
                continue
            rows.append({
                "model": model_name,
                "product": product,
                "accuracy": result.accuracy,
                "lower": result.lower,
                "upper": result.upper,
                "n": result.n,
            })
    return pd.DataFrame(rows, columns=SCORE_COLUMNS)


def classification_summary(y_true, y_pred, class_names):
    labels = list(range(len(class_names)))
    report = classification_report(
        y_true, y_pred, labels=labels, target_names=list(class_names), zero_division=0
    )
    return accuracy_score(y_true, y_pred), report
