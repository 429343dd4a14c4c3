from fastapi import FastAPI
from contextlib import asynccontextmanager

from app import startup


@asynccontextmanager
async def lifespan(app: FastAPI):

    startup.setup_logging()

    settings = startup.setup_settings()
    app.state.settings = settings

    app.state.nlp = startup.setup_spacy(settings.spacy_model)

    app.state.score_model_loaded = await startup.setup_score_model(settings.model_path)

    yield


app = FastAPI(lifespan=lifespan)

from app.api.routes import router
app.include_router(router)

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
