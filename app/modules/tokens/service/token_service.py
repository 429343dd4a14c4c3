import unicodedata

from ...dependency.components.errors import OracleUnavailable
from ..components.tokenizer import tokenize


def normalize_text(text: str) -> str:
    if not isinstance(text, str):
        return text

    text = text.replace("（", "(")
    text = text.replace("）", ")")
    text = text.replace("「", "\"")
    text = text.replace("」", "\"")

    return unicodedata.normalize('NFKC', text)


async def tokenize_service(text, nlp):
    if nlp is None:
        raise OracleUnavailable("spaCy tokenizer not loaded")
    return await tokenize(normalize_text(text), nlp)
