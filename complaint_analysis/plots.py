"""Diagnostic figures. Each function returns its Figure and saves it if given a path."""

import functools
import math

import matplotlib.pyplot as plt
import numpy as np
import seaborn as sns
from sklearn.metrics import ConfusionMatrixDisplay
from wordcloud import WordCloud

from .config import FIGURE_DPI, PRODUCT_COL

def _themed(plot):
    """Apply the whitegrid style and husl palette for one plot only."""
    @functools.wraps(plot)
    def wrapper(*args, **kwargs):
        with sns.axes_style("whitegrid"), sns.color_palette("husl"):
            return plot(*args, **kwargs)
    return wrapper


def _finish(fig, path, dpi):
    fig.tight_layout()
    if path is not None:
        fig.savefig(path, dpi=dpi, bbox_inches="tight")
    return fig


@_themed
def plot_product_counts(df, path=None, dpi=FIGURE_DPI):
    fig, ax = plt.subplots(figsize=(10, 5))
    df[PRODUCT_COL].value_counts().plot(kind="bar", color="steelblue", ax=ax)
    ax.set_title("Complaints by Product")
    ax.set_xlabel("")
    plt.setp(ax.get_xticklabels(), rotation=45, ha="right")
    return _finish(fig, path, dpi)


@_themed
def plot_confusion_matrix(y_true, y_pred, class_names, path=None, dpi=FIGURE_DPI):
    fig, ax = plt.subplots(figsize=(8, 6))
    disp = ConfusionMatrixDisplay.from_predictions(
        y_true, y_pred,
        labels=list(range(len(class_names))),
        display_labels=list(class_names),
        xticks_rotation=45,
        colorbar=False,
        ax=ax,
    )
    disp.ax_.grid(False)
    disp.ax_.set_xticklabels(class_names, rotation=30, ha="right", fontsize=8)
    return _finish(fig, path, dpi)


@_themed
def plot_model_comparison(scores, path=None, dpi=FIGURE_DPI):
    """Accuracy per product and model, with the confidence interval as error bars."""
    products = sorted(scores["product"].unique())
    models = list(dict.fromkeys(scores["model"]))
    x = np.arange(len(products))
    width = 0.8 / max(len(models), 1)

    fig, ax = plt.subplots(figsize=(max(8, 2 * len(products)), 6))
    for k, model in enumerate(models):
        sub = scores[scores["model"] == model].set_index("product").reindex(products)
        acc = sub["accuracy"].to_numpy()
        yerr = np.vstack([acc - sub["lower"].to_numpy(), sub["upper"].to_numpy() - acc])
        ax.bar(x + (k - (len(models) - 1) / 2) * width, acc, width,
               yerr=yerr, capsize=3, label=model)

    ax.axhline(50, color="grey", linestyle="--", linewidth=1)  # chance
    ax.set_xticks(x)
    ax.set_xticklabels(products, rotation=30, ha="right")
    ax.set_ylim(0, 105)
    ax.set_ylabel("Accuracy (%)")
    ax.set_title("Model vs Benchmark Accuracy", fontweight="bold")
    ax.legend(loc="lower right")
    ax.spines[["top", "right"]].set_visible(False)
    return _finish(fig, path, dpi)


@_themed
def plot_topic_wordclouds(terms, path=None, dpi=FIGURE_DPI, ncols=4):
    """One word cloud per topic from its term weights."""
    n = len(terms)
    ncols = min(ncols, n)
    nrows = math.ceil(n / ncols)
    fig, axes = plt.subplots(nrows, ncols, figsize=(4 * ncols, 3 * nrows), squeeze=False)
    for ax, (name, weights) in zip(axes.flat, terms.items()):
        cloud = WordCloud(width=400, height=300, background_color="white",
                          random_state=1).generate_from_frequencies(weights)
        ax.imshow(cloud, interpolation="bilinear")
        ax.set_title(name)
    for ax in axes.flat:
        ax.axis("off")
    return _finish(fig, path, dpi)


@_themed
def plot_topic_prevalence(prevalence, path=None, dpi=FIGURE_DPI):
    fig, ax = plt.subplots(figsize=(max(8, 0.6 * prevalence.shape[1]), 1 + 0.6 * len(prevalence)))
    sns.heatmap(prevalence, cmap="Blues", annot=prevalence.shape[1] <= 12,
                fmt=".2f", cbar=True, ax=ax)
    ax.set_ylabel("")
    ax.set_title("Topic prevalence by product")
    return _finish(fig, path, dpi)
