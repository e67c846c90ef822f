from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request

from .auth.dependencies import require_token
from .auth.models import CredentialsRequest, MessageResponse, TokenResponse
from .auth.tokens import TokenClaims, TokenService
from .auth.users import UserStore, authenticate
from .config import Settings, load_settings
from .errors import StorageError, install_error_handlers
from .restaurants.models import RestaurantIn, RestaurantOut
from .restaurants.repository import RestaurantRepository
from .store.base import Database
from .store.memory import MemoryDatabase
from .store.mongo import MongoDatabase

logger = logging.getLogger(__name__)

USERS_COLLECTION = "users"
RESTAURANTS_COLLECTION = "restaurants"


def _open_database(settings: Settings) -> Database:
    if settings.mongodb_uri:
        return MongoDatabase(settings.mongodb_uri, settings.mongodb_database)
    logger.warning("MONGODB_URI is not set, using the in-memory store")
    return MemoryDatabase()


def _users(request: Request) -> UserStore:
    return request.app.state.users


def _restaurants(request: Request) -> RestaurantRepository:
    return request.app.state.restaurants


def create_app(settings: Settings | None = None, database: Database | None = None) -> FastAPI:
    """Build the API. ``settings`` and ``database`` are fixed for the app's lifetime."""
    settings = settings or load_settings()
    database = database or _open_database(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        app.state.users.ensure_indexes()
        logger.info("Restaurant API ready")
        yield
        database.close()

    app = FastAPI(title="Restaurant API", version="1.0.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.tokens = TokenService(
        settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        ttl=settings.token_ttl,
    )
    app.state.users = UserStore(
        database.collection(USERS_COLLECTION),
        bcrypt_rounds=settings.bcrypt_rounds,
    )
    app.state.restaurants = RestaurantRepository(database.collection(RESTAURANTS_COLLECTION))

    install_error_handlers(app)
    _register_routes(app)
    return app


def _register_routes(app: FastAPI) -> None:
    # ── Public endpoints ─────────────────────────────────────────────────

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    # ── Auth endpoints ───────────────────────────────────────────────────

    @app.post("/signup", status_code=201, response_model=MessageResponse)
    def signup(body: CredentialsRequest, users: UserStore = Depends(_users)) -> MessageResponse:
        try:
            users.register_user(body.email, body.password)
        except StorageError as exc:
            raise StorageError("Error registering user", details=exc.details or exc.message) from exc
        return MessageResponse(message="User successfully registered")

    @app.post("/login", response_model=TokenResponse)
    def login(body: CredentialsRequest, request: Request, users: UserStore = Depends(_users)) -> TokenResponse:
        token = authenticate(users, request.app.state.tokens, body.email, body.password)
        return TokenResponse(token=token)

    @app.post("/logout", response_model=MessageResponse)
    def logout() -> MessageResponse:
        # Tokens are stateless; the client discards its copy.
        return MessageResponse(message="User logged out successfully")

    @app.delete("/users/me", response_model=MessageResponse)
    def delete_me(
        claims: TokenClaims = Depends(require_token),
        users: UserStore = Depends(_users),
    ) -> MessageResponse:
        try:
            users.delete_by_id(claims.user_id)
        except StorageError as exc:
            raise StorageError("Error deleting user", details=exc.details or exc.message) from exc
        return MessageResponse(message="User deleted successfully")

    # ── Restaurant endpoints ─────────────────────────────────────────────

    @app.get(
        "/restaurants/search",
        response_model=list[RestaurantOut],
        dependencies=[Depends(require_token)],
    )
    def search_restaurants(
        name: str | None = None,
        cuisine: str | None = None,
        restaurants: RestaurantRepository = Depends(_restaurants),
    ) -> list[RestaurantOut]:
        try:
            return restaurants.search(name=name, cuisine=cuisine)
        except StorageError as exc:
            raise StorageError(
                "Error searching for restaurants", details=exc.details or exc.message,
            ) from exc

    @app.post(
        "/restaurants",
        status_code=201,
        response_model=RestaurantOut,
        dependencies=[Depends(require_token)],
    )
    def create_restaurant(
        body: RestaurantIn,
        restaurants: RestaurantRepository = Depends(_restaurants),
    ) -> RestaurantOut:
        return restaurants.create(body)

    @app.get(
        "/restaurants",
        response_model=list[RestaurantOut],
        dependencies=[Depends(require_token)],
    )
    def list_restaurants(
        restaurants: RestaurantRepository = Depends(_restaurants),
    ) -> list[RestaurantOut]:
        return restaurants.list_all()

    @app.get(
        "/restaurants/{restaurant_id}",
        response_model=RestaurantOut,
        dependencies=[Depends(require_token)],
    )
    def get_restaurant(
        restaurant_id: str,
        restaurants: RestaurantRepository = Depends(_restaurants),
    ) -> RestaurantOut:
        return restaurants.get(restaurant_id)

    @app.put(
        "/restaurants/{restaurant_id}",
        response_model=RestaurantOut,
        dependencies=[Depends(require_token)],
    )
    def replace_restaurant(
        restaurant_id: str,
        body: RestaurantIn,
        restaurants: RestaurantRepository = Depends(_restaurants),
    ) -> RestaurantOut:
        return restaurants.replace(restaurant_id, body)

    @app.delete(
        "/restaurants/{restaurant_id}",
        response_model=MessageResponse,
        dependencies=[Depends(require_token)],
    )
    def delete_restaurant(
        restaurant_id: str,
        restaurants: RestaurantRepository = Depends(_restaurants),
    ) -> MessageResponse:
        restaurants.delete(restaurant_id)
        return MessageResponse(message="Restaurant deleted successfully")


app = create_app()
