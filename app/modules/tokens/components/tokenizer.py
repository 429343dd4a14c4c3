import asyncio

CONTENT_POS = {"NOUN", "PROPN", "VERB", "ADJ", "ADV", "PRON", "NUM"}


def is_content(pos):
    return pos in CONTENT_POS


def doc_to_tokens(doc):
    tokens = []
    for t in doc:
        if t.is_space:
            continue
        tokens.append({
            "id": len(tokens),
            "text": t.text,
            "lemma": t.lemma_,
            "pos": t.pos_,
            "tag": t.tag_,
            "type": "core" if is_content(t.pos_) else "func"
        })
    return tokens


async def tokenize(text, nlp):
    def _tokenize():
        doc = nlp(text)
        return doc_to_tokens(doc)
    return await asyncio.to_thread(_tokenize)
