# ecocart/ml/classifier.py

from __future__ import annotations
from pathlib import Path
from typing import Dict, List, Tuple, Iterable
import logging

import numpy as np
from pydantic import BaseModel, ValidationError
from sklearn.feature_extraction.text import CountVectorizer
from sklearn.naive_bayes import MultinomialNB

from ecocart.core.errors import ClassifierUnavailable
from ecocart.ml.training_data import CORPUS_VERSION, TRAINING_DATA

logger = logging.getLogger(__name__)

ARTIFACT_FORMAT = 1
DEFAULT_ALPHA = 1.0

# =============================================================================
#                               ARTIFACT
# =============================================================================

class ClassifierArtifact(BaseModel):
    """
    Serialized naive-Bayes model: everything MultinomialNB needs at predict time,
    stored as raw counts so the file stays diffable and rebuilds are comparable.
      vocabulary[j]        -> term of feature column j
      classes[i]           -> label of row i
      class_count[i]       -> number of training documents with label i
      feature_count[i][j]  -> occurrences of term j in documents of label i
    """
    format_version: int = ARTIFACT_FORMAT
    corpus_version: str
    alpha: float = DEFAULT_ALPHA
    vocabulary: List[str]
    classes: List[str]
    class_count: List[float]
    feature_count: List[List[float]]

    model_config = {"frozen": True}


def train(
    samples: Iterable[Tuple[str, str]] = TRAINING_DATA,
    *,
    alpha: float = DEFAULT_ALPHA,
    corpus_version: str = CORPUS_VERSION,
) -> ClassifierArtifact:
    """
    Offline training step. Deterministic: no sampling, no random state,
    vocabulary sorted by CountVectorizer.
    """
    samples = list(samples)
    texts = [text.lower() for text, _ in samples]
    labels = [label for _, label in samples]

    vectorizer = CountVectorizer()
    X = vectorizer.fit_transform(texts)
    model = MultinomialNB(alpha=alpha).fit(X, labels)

    logger.info(
        "Trained classifier corpus_version=%s docs=%s vocabulary=%s classes=%s",
        corpus_version, len(texts), X.shape[1], list(model.classes_),
    )
    return ClassifierArtifact(
        corpus_version=corpus_version,
        alpha=alpha,
        vocabulary=[str(t) for t in vectorizer.get_feature_names_out()],
        classes=[str(c) for c in model.classes_],
        class_count=model.class_count_.tolist(),
        feature_count=model.feature_count_.tolist(),
    )


def dumps(artifact: ClassifierArtifact) -> str:
    return artifact.model_dump_json(indent=2)

# =============================================================================
#                               HANDLE
# =============================================================================

class ClassifierHandle:
    """
    Read-only classifier rebuilt from an artifact.
    Built once at startup and shared by all requests; nothing mutates it after __init__.
    """

    def __init__(self, artifact: ClassifierArtifact):
        self.artifact = artifact

        fc = np.asarray(artifact.feature_count, dtype=np.float64)
        cc = np.asarray(artifact.class_count, dtype=np.float64)
        if fc.shape != (len(artifact.classes), len(artifact.vocabulary)) or cc.shape != (len(artifact.classes),):
            raise ClassifierUnavailable("Classifier artifact has inconsistent shapes")

        # Same smoothing / prior as MultinomialNB.fit(fit_prior=True)
        smoothed = fc + artifact.alpha
        model = MultinomialNB(alpha=artifact.alpha)
        model.classes_ = np.asarray(artifact.classes)
        model.class_count_ = cc
        model.feature_count_ = fc
        model.feature_log_prob_ = np.log(smoothed) - np.log(smoothed.sum(axis=1).reshape(-1, 1))
        model.class_log_prior_ = np.log(cc) - np.log(cc.sum())
        model.n_features_in_ = fc.shape[1]
        self._model = model

        self._vectorizer = CountVectorizer(vocabulary=artifact.vocabulary)
        # Warm-up: fixes the vectorizer's vocabulary_ now rather than on the first request
        self._vectorizer.transform([""])

    @property
    def labels(self) -> List[str]:
        return list(self.artifact.classes)

    def classify(self, text: str) -> Tuple[str, Dict[str, float]]:
        """
        Label + per-class probabilities for `text`.
        Text without any known term yields the class priors.
        """
        X = self._vectorizer.transform([(text or "").lower()])
        proba = self._model.predict_proba(X)[0]
        label = str(self._model.classes_[int(np.argmax(proba))])
        return label, {str(c): float(p) for c, p in zip(self._model.classes_, proba)}


def load(blob: str | bytes) -> ClassifierHandle:
    try:
        artifact = ClassifierArtifact.model_validate_json(blob)
    except ValidationError as e:
        raise ClassifierUnavailable(f"Invalid classifier artifact: {e}") from e

    if artifact.format_version != ARTIFACT_FORMAT:
        raise ClassifierUnavailable(
            f"Unsupported classifier artifact format {artifact.format_version} (expected {ARTIFACT_FORMAT})"
        )
    if artifact.corpus_version != CORPUS_VERSION:
        logger.warning(
            "Classifier artifact trained on corpus %s, code ships corpus %s; retrain with `python -m ecocart.ml.train`",
            artifact.corpus_version, CORPUS_VERSION,
        )
    return ClassifierHandle(artifact)


def load_from_path(path: str | Path) -> ClassifierHandle:
    try:
        blob = Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise ClassifierUnavailable(f"Cannot read classifier artifact at {path}: {e}") from e
    handle = load(blob)
    logger.info("Classifier loaded from %s (corpus_version=%s)", path, handle.artifact.corpus_version)
    return handle


def classify(handle: ClassifierHandle, text: str) -> Tuple[str, Dict[str, float]]:
    return handle.classify(text)
