"""Product classifiers, per-product LASSO scorers and their benchmarks."""

import logging

import numpy as np
import pandas as pd
from sklearn.dummy import DummyClassifier
from sklearn.linear_model import LogisticRegression, LogisticRegressionCV
from sklearn.metrics import accuracy_score
from sklearn.model_selection import train_test_split
from sklearn.preprocessing import LabelEncoder
from tqdm import tqdm

from .config import PRODUCT_COL

logger = logging.getLogger(__name__)


def encode_products(products):
    le = LabelEncoder()
    labels = le.fit_transform(products)
    logger.info("Label mapping: %s", dict(zip(le.classes_, le.transform(le.classes_))))
    return labels, le


def split_complaints(df, test_size, random_state):
    """Stratified train/test split of the prepared complaints frame."""
    train, test = train_test_split(
        df, test_size=test_size, random_state=random_state, stratify=df[PRODUCT_COL]
    )
    logger.info("Train: %d | Test: %d", len(train), len(test))
    return train.reset_index(drop=True), test.reset_index(drop=True)


def fit_product_classifier(X, y, max_iter=1000, random_state=None):
    """Multinomial logistic regression over all products at once."""
    model = LogisticRegression(max_iter=max_iter, random_state=random_state)
    model.fit(X, y)
    return model


def majority_baseline(y_train, y_test):
    """Accuracy of always predicting the most common training product."""
    dummy = DummyClassifier(strategy="most_frequent")
    dummy.fit(np.zeros((len(y_train), 1)), y_train)
    y_pred = dummy.predict(np.zeros((len(y_test), 1)))
    return dummy, accuracy_score(y_test, y_pred)


def class_probabilities(model, X, class_names):
    """predict_proba as a frame with one column per product name."""
    proba = model.predict_proba(X)
    columns = [class_names[c] for c in model.classes_]
    return pd.DataFrame(proba, columns=columns)


def fit_lasso_scorers(X, products, l1_ratio=1.0, Cs=(0.1, 1.0, 10.0), cv=5,
                      max_iter=2000, random_state=None):
    """
    One penalized logistic model per product (that product vs the rest).

    ``l1_ratio=1`` is the LASSO; anything lower mixes in a ridge penalty.
    The penalty mix comes from ``l1_ratios`` alone, and its strength is
    picked by cross-validated AUC over ``Cs``.
    """
    products = np.asarray(products)
    models = {}
    for product in tqdm(sorted(set(products)), desc="LASSO scorers"):
        y = (products == product).astype(int)
        model = LogisticRegressionCV(
            Cs=list(Cs),
            cv=cv,
            solver="saga",
            l1_ratios=[l1_ratio],
            scoring="roc_auc",
            max_iter=max_iter,
            random_state=random_state,
        )
        model.fit(X, y)
        models[product] = model
        logger.debug("%s: C=%s, %d non-zero coefficients",
                     product, model.C_[0], int((model.coef_ != 0).sum()))
    return models


def lasso_scores(models, X):
    return pd.DataFrame({
        product: model.predict_proba(X)[:, 1] for product, model in models.items()
    })


def top_coefficients(model, vocabulary, n=10):
    """Terms with the largest positive coefficients, strongest first."""
    coef = np.ravel(model.coef_)
    vocabulary = np.asarray(vocabulary)
    best = [i for i in np.argsort(coef)[::-1][:n] if coef[i] > 0]
    return [(str(vocabulary[i]), float(coef[i])) for i in best]


def fit_topic_benchmark(doc_topics, y, max_iter=1000, random_state=None):
    """Multinomial classifier on topic proportions alone."""
    return fit_product_classifier(doc_topics, y, max_iter=max_iter,
                                  random_state=random_state)
