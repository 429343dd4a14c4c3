from typing import Optional
from fastapi import APIRouter, Body, Request
from fastapi.responses import JSONResponse
import logging

from app import startup
from app.modules.dependency.service.parse_service import parse_scores_service, parse_text_service

logger = logging.getLogger(__name__)

router = APIRouter()

ERROR_STATUS = {
    "InvalidInput": 422,
    "OracleUnavailable": 503,
    "SearchBudgetExceeded": 422,
}


def _settings(request):
    return getattr(request.app.state, "settings", None) or startup.get_settings()


def _respond(result):
    if result.get("status") == "error":
        return JSONResponse(status_code=ERROR_STATUS.get(result.get("error"), 500), content=result)
    return result


@router.get("/api/health")
async def health_api(request: Request):
    return {
        "status": "success",
        "tokenizer_loaded": getattr(request.app.state, "nlp", None) is not None,
        "score_model_loaded": bool(getattr(request.app.state, "score_model_loaded", False))
        or getattr(request.app.state, "score_oracle", None) is not None
    }


@router.post("/api/parse/scores")
async def parse_scores_api(request: Request, scores: list = Body(..., embed=True), root: Optional[int] = Body(None, embed=True)):
    """
    スコア行列から依存木を求める API

    リクエスト:
    {
      "scores": [[0.0, 0.9, 0.1], [0.2, 0.0, 0.8], [0.3, 0.4, 0.0]],
      "root": 0
    }

    レスポンス:
    {
      "status": "success",
      "arcs": [{"head": 0, "dependent": 1, "score": 0.9, "label": null}, ...],
      "heads": [-1, 0, 1],
      "score": 0.85,
      "complete": true,
      "summary": {...}
    }
    """
    try:
        size = len(scores) if isinstance(scores, list) else "?"
        logger.info(f"[Parse API] Received {size}x{size} score matrix, root={root}")

        result = await parse_scores_service(scores, root=root, settings=_settings(request))
        return _respond(result)

    except Exception as e:
        logger.error(f"[Parse API] Error: {str(e)}")
        import traceback
        logger.error(traceback.format_exc())
        return JSONResponse(status_code=500, content={
            "status": "error",
            "message": str(e),
            "arcs": []
        })


@router.post("/api/parse")
async def parse_text_api(request: Request, text: str = Body(..., embed=True), root: Optional[int] = Body(None, embed=True)):
    """
    テキストを分かち書きし、スコアモデルで依存木を求める API

    レスポンスは /api/parse/scores と同じ形式に "tokens" を加えたもの
    """
    try:
        logger.info(f"Received text for parse: {text}")

        result = await parse_text_service(
            text,
            getattr(request.app.state, "nlp", None),
            oracle=getattr(request.app.state, "score_oracle", None),
            root=root,
            settings=_settings(request)
        )
        return _respond(result)

    except Exception as e:
        logger.error(f"[Parse API] Error: {str(e)}")
        import traceback
        logger.error(traceback.format_exc())
        return JSONResponse(status_code=500, content={
            "status": "error",
            "message": str(e),
            "arcs": []
        })
