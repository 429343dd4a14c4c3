import asyncio
import logging
from transformers import AutoTokenizer, AutoModelForSequenceClassification
import torch

from ..components.errors import OracleUnavailable

logger = logging.getLogger(__name__)

_score_model = None
_tokenizer = None
_predict_lock = None

HEAD_LABEL = 1


async def load_score_model(model_path="app/model/dep_model"):
    global _score_model, _tokenizer

    try:
        logger.info(f"[ScoreModel] Loading model from {model_path}...")

        _tokenizer = AutoTokenizer.from_pretrained(
            model_path,
            local_files_only=True
        )
        _score_model = AutoModelForSequenceClassification.from_pretrained(
            model_path,
            local_files_only=True
        )

        _score_model.eval()

        logger.info("[ScoreModel] Model loaded successfully")
        return _score_model, _tokenizer

    except Exception as e:
        logger.error(f"[ScoreModel] Error loading model: {str(e)}")
        raise


def get_score_model():
    return _score_model, _tokenizer


def _get_lock():
    global _predict_lock
    if _predict_lock is None:
        _predict_lock = asyncio.Lock()
    return _predict_lock


def build_pair_texts(tokens):
    pairs = []
    texts = []
    for head, head_text in enumerate(tokens):
        for dependent, dependent_text in enumerate(tokens):
            if head == dependent:
                continue
            pairs.append((head, dependent))
            texts.append(f"{head_text} [SEP] {dependent_text}")
    return pairs, texts


def _predict_head_probas(model, tokenizer, texts, batch_size, max_length):
    probas = []
    for start in range(0, len(texts), batch_size):
        batch = texts[start:start + batch_size]
        inputs = tokenizer(
            batch,
            return_tensors="pt",
            padding=True,
            truncation=True,
            max_length=max_length
        )

        with torch.no_grad():
            outputs = model(**inputs)

        probs = torch.softmax(outputs.logits, dim=-1)
        probas.extend(probs[:, HEAD_LABEL].tolist())
    return probas


async def predict_edge_scores(tokens, batch_size=256, max_length=128):
    """Score every ordered token pair; ``scores[h][d]`` is P(h heads d)."""
    model, tokenizer = get_score_model()

    if model is None or tokenizer is None:
        raise OracleUnavailable("score model is not loaded")

    n = len(tokens)
    scores = [[0.0] * n for _ in range(n)]
    if n < 2:
        return scores

    pairs, texts = build_pair_texts(tokens)
    logger.debug(f"[ScoreModel] Scoring {len(pairs)} pairs for {n} tokens")

    try:
        async with _get_lock():
            probas = await asyncio.to_thread(_predict_head_probas, model, tokenizer, texts, batch_size, max_length)
    except Exception as e:
        logger.error(f"[ScoreModel] Batch prediction error: {str(e)}")
        raise OracleUnavailable(f"score model prediction failed: {e}") from e

    for (head, dependent), proba in zip(pairs, probas):
        scores[head][dependent] = proba

    logger.info(f"[ScoreModel] Scored {len(pairs)} pairs for {n} tokens")
    return scores
