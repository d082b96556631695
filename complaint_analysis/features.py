"""Document-feature matrices over cleaned complaint text."""

from nltk.stem import PorterStemmer
from sklearn.feature_extraction.text import (
    ENGLISH_STOP_WORDS,
    CountVectorizer,
    TfidfVectorizer,
)

_stemmer = PorterStemmer()


def stem_tokens(text):
    return [
        _stemmer.stem(tok)
        for tok in text.split()
        if len(tok) > 2 and tok not in ENGLISH_STOP_WORDS
    ]


def _fit_vectorizer(vectorizer, train_texts, test_texts):
    # Fit on train only; test goes through the train vocabulary
    X_train = vectorizer.fit_transform(train_texts)
    X_test = vectorizer.transform(test_texts)
    return vectorizer, X_train, X_test


def build_count_matrix(train_texts, test_texts, min_df, max_df, max_features=None):
    """Raw stemmed unigram counts, the input the topic model expects."""
    vectorizer = CountVectorizer(
        tokenizer=stem_tokens,
        token_pattern=None,
        lowercase=False,
        min_df=min_df,
        max_df=max_df,
        max_features=max_features,
    )
    return _fit_vectorizer(vectorizer, train_texts, test_texts)


def build_tfidf_matrix(train_texts, test_texts, min_df, max_df, max_features=None,
                       ngram_range=(1, 2)):
    vectorizer = TfidfVectorizer(
        tokenizer=stem_tokens,
        token_pattern=None,
        lowercase=False,
        min_df=min_df,
        max_df=max_df,
        max_features=max_features,
        ngram_range=ngram_range,
    )
    return _fit_vectorizer(vectorizer, train_texts, test_texts)
