# ecocart/ml/train.py
"""
Offline training entry point:

    python -m ecocart.ml.train [--out PATH] [--alpha 1.0]

Writes the JSON artifact loaded by the API at startup (CLASSIFIER_MODEL_PATH).
"""
import argparse
import logging
from pathlib import Path

from ecocart.core.config import DEFAULT_MODEL_PATH
from ecocart.core.logging import configure_logging
from ecocart.ml.classifier import DEFAULT_ALPHA, dumps, train

logger = logging.getLogger(__name__)


def main(argv=None) -> Path:
    parser = argparse.ArgumentParser(description="Train the sustainability text classifier.")
    parser.add_argument("--out", default=DEFAULT_MODEL_PATH, help="Artifact path (JSON)")
    parser.add_argument("--alpha", type=float, default=DEFAULT_ALPHA, help="Laplace smoothing")
    args = parser.parse_args(argv)
    configure_logging()

    artifact = train(alpha=args.alpha)
    out = Path(args.out)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(dumps(artifact) + "\n", encoding="utf-8")
    logger.info("Classifier artifact written to %s", out)
    return out


if __name__ == "__main__":
    main()
