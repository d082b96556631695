"""LDA topic model over the complaint counts, and topic prevalence by product."""

import logging

import numpy as np
import pandas as pd
from sklearn.decomposition import LatentDirichletAllocation

logger = logging.getLogger(__name__)


def topic_names(n_topics):
    return [f"Topic {k + 1}" for k in range(n_topics)]


def fit_topic_model(counts, n_topics, max_iter=20, random_state=None):
    """Fit LDA and return the model with the per-document topic proportions."""
    lda = LatentDirichletAllocation(
        n_components=n_topics,
        max_iter=max_iter,
        learning_method="batch",
        random_state=random_state,
    )
    doc_topics = lda.fit_transform(counts)
    logger.info("Fitted %d-topic model on %d documents (perplexity %.1f)",
                n_topics, counts.shape[0], lda.perplexity(counts))
    return lda, doc_topics


def top_terms(model, vocabulary, n=10):
    """Highest-weight terms per topic, with their weights."""
    vocabulary = np.asarray(vocabulary)
    terms = {}
    for name, weights in zip(topic_names(model.n_components), model.components_):
        best = np.argsort(weights)[::-1][:n]
        terms[name] = {str(vocabulary[i]): float(weights[i]) for i in best}
    return terms


def _topic_frame(doc_topics, products):
    frame = pd.DataFrame(doc_topics, columns=topic_names(doc_topics.shape[1]))
    frame["product"] = np.asarray(products)
    return frame.groupby("product")


def topic_prevalence(doc_topics, products):
    """Mean topic proportion per product (rows: products, columns: topics)."""
    return _topic_frame(doc_topics, products).mean()


def topic_prevalence_se(doc_topics, products):
    return _topic_frame(doc_topics, products).sem()
