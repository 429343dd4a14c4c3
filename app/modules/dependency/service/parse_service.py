import asyncio
import logging

from ....settings import ParserSettings
from ...tokens.service.token_service import tokenize_service
from ..components.errors import DependencyParseError
from ..components.parser import CKYDependencyParser
from .score_model_service import predict_edge_scores

logger = logging.getLogger(__name__)


def error_response(e):
    return {
        "status": "error",
        "error": type(e).__name__,
        "message": str(e)
    }


async def run_parser(scores, root=None, settings=None):
    settings = settings or ParserSettings()
    parser = CKYDependencyParser.from_settings(settings)
    return await asyncio.to_thread(parser.parse, scores, root)


async def parse_scores_service(scores, root=None, settings=None):
    logger.info(f"[Parse Service] parse_scores_service called")

    try:
        result = await run_parser(scores, root, settings)
    except DependencyParseError as e:
        logger.warning(f"[Parse Service] {type(e).__name__}: {str(e)}")
        return error_response(e)

    response = {"status": "success", **result.to_dict()}
    logger.info(f"[Parse Service] Success - {response['summary']['edges']} edges, "
                f"{response['summary']['spans_solved']} spans, complete={response['complete']}")
    return response


async def parse_text_service(text, nlp, oracle=None, root=None, settings=None):
    settings = settings or ParserSettings()
    oracle = oracle or predict_edge_scores

    logger.info(f"[Parse Service] parse_text_service called")

    try:
        tokens = await tokenize_service(text, nlp)
        logger.info(f"[Parse Service] Input token count: {len(tokens)}")

        scores = await oracle(
            [t["text"] for t in tokens],
            batch_size=settings.batch_size,
            max_length=settings.max_length
        )
        result = await run_parser(scores, root, settings)
    except DependencyParseError as e:
        logger.warning(f"[Parse Service] {type(e).__name__}: {str(e)}")
        return error_response(e)

    response = {"status": "success", "tokens": tokens, **result.to_dict()}
    logger.info(f"[Parse Service] Success - {len(tokens)} tokens, {response['summary']['edges']} edges, "
                f"complete={response['complete']}")
    return response
