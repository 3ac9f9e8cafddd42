import logging
from typing import List, Sequence

import numpy as np
from sklearn.feature_extraction.text import TfidfVectorizer
from sklearn.metrics.pairwise import linear_kernel

from qa_models import Question

logger = logging.getLogger(__name__)

# Cosine similarity below this is treated as "no match".
MIN_SIMILARITY = 0.1


def _document(question: Question) -> str:
    return " ".join(part for part in (question.title, question.description, question.category) if part)


def substring_matches(questions: Sequence[Question], query: str) -> List[Question]:
    qlow = query.lower()
    return [q for q in questions if qlow in _document(q).lower()]


def tfidf_matches(questions: Sequence[Question], query: str, limit: int = 10) -> List[Question]:
    """Rank questions by TF-IDF cosine similarity to ``query``."""
    texts = [_document(q) for q in questions]
    if not texts:
        return []
    try:
        vectorizer = TfidfVectorizer(stop_words='english')
        matrix = vectorizer.fit_transform(texts)
    except ValueError:
        # every document reduced to stop words
        return []
    scores = linear_kernel(vectorizer.transform([query]), matrix).ravel()
    # stable sort keeps newest-first order among equal scores
    order = np.argsort(-scores, kind="stable")
    ranked = [questions[i] for i in order[:limit] if scores[i] >= MIN_SIMILARITY]
    logger.debug("TF-IDF search %r matched %d of %d questions", query, len(ranked), len(texts))
    return ranked


def search_questions(questions: Sequence[Question], query: str) -> List[Question]:
    """Substring search first, TF-IDF similarity when nothing matches literally."""
    query = (query or "").strip()
    if not query:
        return list(questions)
    results = substring_matches(questions, query)
    if results:
        return results
    return tfidf_matches(questions, query)
