import logging
import spacy
import yaml
import os
from datetime import datetime

from app.settings import load_settings, ParserSettings

logger = logging.getLogger(__name__)

LOG_DIR = os.environ.get("DEP_PARSER_LOG_DIR", "./logs")


def setup_logging(log_dir=LOG_DIR):
    if not os.path.exists(log_dir):
        os.makedirs(log_dir)

    log_filename = os.path.join(log_dir, f"app_{datetime.now().strftime('%Y%m%d_%H%M%S')}.log")

    logging.basicConfig(
        level=logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.FileHandler(log_filename, encoding='utf-8'),
            logging.StreamHandler()
        ]
    )

    logging.getLogger("app").setLevel(logging.INFO)

    logging.getLogger("app.modules.dependency.components.span_solver").setLevel(logging.WARNING)

    logger.warning(f"[Startup] ログファイルを作成: {log_filename}")
    return log_filename


SETTINGS = ParserSettings()


def setup_settings(path=None):
    global SETTINGS

    try:
        SETTINGS = load_settings(path)
    except yaml.YAMLError as e:
        logger.error(f"[Startup] YAML parse error: {e}")
        SETTINGS = ParserSettings()
    except (TypeError, ValueError) as e:
        logger.error(f"[Startup] Invalid parser settings: {e}")
        SETTINGS = ParserSettings()
    return SETTINGS


def setup_spacy(model_name):
    try:
        nlp = spacy.load(model_name)
        logger.info(f"[Startup] spaCy model {model_name} loaded successfully")
        return nlp
    except Exception as e:
        logger.error(f"[Startup] Failed to load spaCy model {model_name}: {e}")
        return None


async def setup_score_model(model_path):
    try:
        from app.modules.dependency.service.score_model_service import load_score_model
        await load_score_model(model_path)
        logger.info("[Startup] Score model loaded successfully")
        return True
    except Exception as e:
        logger.error(f"[Startup] Failed to load score model: {e}")
        return False


def get_settings():
    return SETTINGS
