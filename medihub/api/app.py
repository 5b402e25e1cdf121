"""
FastAPI application for the MediHub translation layer.

Exposes the Translator to the patient, doctor, hospital and lab portals:
language preferences, single and batch translation, and cache controls.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any

from fastapi import Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from medihub.config import configure_logging, get_settings
from medihub.i18n.batch import LabeledOption, PlainOption
from medihub.i18n.languages import normalize_language_code
from medihub.i18n.state import UnsupportedLanguageError
from medihub.i18n.translator import Translator, create_translator
from medihub.integrations.sentry import init_sentry

logger = logging.getLogger(__name__)


# =============================================================================
# App State
# =============================================================================


class AppState:
    """Application state - initialized at startup."""
    
    translator: Translator


state = AppState()


# =============================================================================
# Lifespan
# =============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize and cleanup app resources."""
    settings = get_settings()
    configure_logging(settings)
    
    init_sentry(settings)
    
    state.translator = create_translator(settings)
    
    logger.info(f"MediHub API starting in {settings.environment} mode")
    
    yield
    
    await state.translator.aclose()
    logger.info("MediHub API shutting down")


# =============================================================================
# App Setup
# =============================================================================


app = FastAPI(
    title="MediHub Translation API",
    description="Translation caching and dispatch for the MediHub portals",
    version="0.1.0",
    lifespan=lifespan,
)


# CORS
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Dependencies
# =============================================================================


def get_translator() -> Translator:
    return state.translator


# =============================================================================
# Request/Response Models
# =============================================================================


class LanguageInfoResponse(BaseModel):
    code: str
    name: str
    native_name: str
    rtl: bool
    flag: str


class LanguageStateResponse(BaseModel):
    language: LanguageInfoResponse
    auto_detect: bool
    direction: str


class ChangeLanguageRequest(BaseModel):
    language: str


class AutoDetectResponse(BaseModel):
    auto_detect: bool


class TranslateRequest(BaseModel):
    text: str
    source_language: str | None = None
    # Another language than the current one, bypassing the UI cache
    target_language: str | None = None
    force: bool = False
    debounce_ms: int | None = Field(default=None, ge=0)


class TranslateResponse(BaseModel):
    text: str
    translated: str
    target_language: str


class BatchTranslateRequest(BaseModel):
    texts: list[str]
    source_language: str | None = None
    force: bool = False


class BatchTranslateResponse(BaseModel):
    translations: list[str]
    target_language: str


class OptionsRequest(BaseModel):
    options: list[str | dict[str, Any]]
    source_language: str | None = None
    force: bool = False


class DetectRequest(BaseModel):
    text: str


class DetectResponse(BaseModel):
    language: str | None


def _language_state(translator: Translator) -> LanguageStateResponse:
    return LanguageStateResponse(
        language=LanguageInfoResponse(**translator.get_current_language_info().to_dict()),
        auto_detect=translator.auto_detect,
        direction=translator.layout_direction.value,
    )


# =============================================================================
# Health Check
# =============================================================================


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "medihub-translation"}


# =============================================================================
# Languages
# =============================================================================


@app.get("/languages")
async def list_languages(translator: Translator = Depends(get_translator)):
    """Languages the translation service can target."""
    return {"languages": await translator.get_supported_languages()}


@app.get("/language", response_model=LanguageStateResponse)
async def get_language(translator: Translator = Depends(get_translator)):
    """Current language, auto-detect flag and layout direction."""
    return _language_state(translator)


@app.put("/language", response_model=LanguageStateResponse)
async def change_language(
    request: ChangeLanguageRequest,
    translator: Translator = Depends(get_translator),
):
    """Switch the UI language."""
    try:
        await translator.change_language(request.language)
    except UnsupportedLanguageError as e:
        raise HTTPException(status_code=400, detail=str(e))
    
    return _language_state(translator)


@app.post("/language/auto-detect", response_model=AutoDetectResponse)
async def toggle_auto_detect(translator: Translator = Depends(get_translator)):
    """Flip source-language auto-detection."""
    return AutoDetectResponse(auto_detect=await translator.toggle_auto_detect())


# =============================================================================
# Translation
# =============================================================================


@app.post("/translate", response_model=TranslateResponse)
async def translate(
    request: TranslateRequest,
    translator: Translator = Depends(get_translator),
):
    """Translate one text into the current language (or the requested one)."""
    translated = await translator.t(
        request.text,
        debounce_ms=request.debounce_ms,
        source_language=request.source_language,
        target_language=request.target_language,
        force=request.force,
    )
    return TranslateResponse(
        text=request.text,
        translated=translated,
        target_language=normalize_language_code(request.target_language or translator.current_language),
    )


@app.post("/translate/batch", response_model=BatchTranslateResponse)
async def translate_batch(
    request: BatchTranslateRequest,
    translator: Translator = Depends(get_translator),
):
    """Translate several texts in one remote call, preserving order."""
    translations = await translator.t_batch(
        request.texts,
        source_language=request.source_language,
        force=request.force,
    )
    return BatchTranslateResponse(
        translations=translations,
        target_language=translator.current_language,
    )


@app.post("/translate/options")
async def translate_options(
    request: OptionsRequest,
    translator: Translator = Depends(get_translator),
):
    """Translate select-option labels; values are kept as given."""
    try:
        options = await translator.t_options(
            request.options,
            source_language=request.source_language,
            force=request.force,
        )
    except (TypeError, ValueError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    
    result: list[Any] = []
    for option in options:
        if isinstance(option, LabeledOption):
            result.append({"value": option.value, "label": option.label})
        elif isinstance(option, PlainOption):
            result.append(option.text)
    
    return {"options": result, "target_language": translator.current_language}


@app.post("/detect", response_model=DetectResponse)
async def detect_language(
    request: DetectRequest,
    translator: Translator = Depends(get_translator),
):
    """Detect the language of a text; null when unknown."""
    return DetectResponse(language=await translator.detect_language(request.text))


# =============================================================================
# Cache
# =============================================================================


@app.get("/translate/status")
async def translation_status(
    text: str,
    source_language: str | None = None,
    translator: Translator = Depends(get_translator),
):
    """Whether a text is loading, and its cached value if any."""
    return {
        "text": text,
        "loading": translator.is_loading(text, source_language),
        "cached": translator.get_cached(text, source_language),
        "target_language": translator.current_language,
    }


@app.get("/translate/cache")
async def cache_stats(translator: Translator = Depends(get_translator)):
    """Cache and dispatch counters."""
    return translator.get_cache_stats()


@app.delete("/translate/cache")
async def clear_cache(translator: Translator = Depends(get_translator)):
    """Drop the UI cache and cancel armed translations."""
    await translator.clear_cache()
    return {"cleared": True, **translator.get_cache_stats()}


# =============================================================================
# Run
# =============================================================================


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.api_host, port=settings.api_port)
