from __future__ import annotations

from collections.abc import Callable, Iterator

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from gamehaven.database import Base, Game, get_db
from gamehaven.main import app
from tests.bgg_documents import GLOOMHAVEN_THING, SEARCH_RESULTS


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(engine) -> Iterator[Session]:
    session = sessionmaker(bind=engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(engine) -> Iterator[TestClient]:
    testing_session = sessionmaker(bind=engine)

    def _get_db():
        db = testing_session()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = _get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def game(db_session: Session) -> Game:
    game = Game(title="Azul", bgg_id="230802", difficulty="2 - Medium Light", play_time="30-45 Minutes")
    db_session.add(game)
    db_session.commit()
    db_session.refresh(game)
    return game


@pytest.fixture
def bgg_transport() -> Callable[..., httpx.MockTransport]:
    """Build a mock BGG transport; records every request it serves."""

    def _build(thing: str = GLOOMHAVEN_THING, status_code: int = 200, search: str = SEARCH_RESULTS):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            body = search if request.url.path.endswith("/search") else thing
            return httpx.Response(status_code, text=body)

        transport = httpx.MockTransport(handler)
        transport.requests = seen  # type: ignore[attr-defined]
        return transport

    return _build
