# Handles built once in main.create_app and kept on app.state.
from fastapi import Request
from sqlalchemy import Engine

from daily import DailyGameManager
from settings import Settings
from store import TriviaStore


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_engine(request: Request) -> Engine:
    return request.app.state.engine


def get_store(request: Request) -> TriviaStore:
    return request.app.state.store


def get_manager(request: Request) -> DailyGameManager:
    return request.app.state.manager
