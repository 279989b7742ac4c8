from fastapi import Request

from services.translate import DEFAULT_LANG, SUPPORTED_LANGS


def get_lang(request: Request) -> str:
    """Label language from the ``lang`` cookie; Traditional Chinese unless it names English."""
    lang = request.cookies.get("lang", "").strip().lower()
    return lang if lang in SUPPORTED_LANGS else DEFAULT_LANG
