# moodjournal/core/dependency.py
from fastapi import Depends
from functools import lru_cache
from moodjournal.analysis.ai_providers.openai import ChatGateway
from moodjournal.core.config import Settings, get_settings


@lru_cache(maxsize=None)
def _gateway(settings: Settings) -> ChatGateway:
    return ChatGateway(settings)


def get_chat_gateway(settings: Settings = Depends(get_settings)) -> ChatGateway:
    return _gateway(settings)
