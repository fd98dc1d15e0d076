"""
FastAPI Application - REST API for Lolos tables.

Endpoints:
    POST   /api/v1/games                                  Open a table
    GET    /api/v1/games                                  List active tables
    GET    /api/v1/games/{id}/players/{player_id}/view    One seat's view
    POST   /api/v1/games/{id}/actions                     Apply a player intent
    DELETE /api/v1/games/{id}                             End a table
    GET    /health                                        Health check

Rule violations come back as 400 with an ErrorResponse carrying the
engine's error code; unknown games and seats are 404.
"""

from typing import Union
import logging

from ..config import ServerConfig

logger = logging.getLogger(__name__)

# Environment configuration
SERVER_CONFIG = ServerConfig.from_env()


def create_app(service=None):
    """
    Create the FastAPI application.

    Args:
        service: Optional GameService instance (creates new if not provided)

    Returns:
        FastAPI application instance
    """
    try:
        from fastapi import FastAPI, HTTPException
        from fastapi.middleware.cors import CORSMiddleware
        from fastapi.responses import JSONResponse
    except ImportError:
        raise ImportError(
            "FastAPI not installed. Install with: pip install fastapi uvicorn"
        )

    from .. import __version__
    from .service import GameService
    from .schemas import (
        ActionRequest,
        ActionResponse,
        CreateGameRequest,
        EndGameResponse,
        ErrorCode,
        ErrorResponse,
        GameCreatedResponse,
        GameListResponse,
        HealthResponse,
        PlayerViewResponse,
    )

    app = FastAPI(
        title="Lolos Engine API",
        description="""
Authoritative rule engine for the Lolos arithmetic card game.

Every move is an action posted for a seat. An accepted action returns the
caller's fresh view; every seat can fetch its own view at any time.

## Error Codes

| Code | Description |
|------|-------------|
| `GAME_NOT_FOUND` | Game does not exist or was ended |
| `PLAYER_NOT_FOUND` | No such seat at the table |
| `INVALID_ACTION` | Unknown action type |
| `NOT_YOUR_TURN`, `WRONG_PHASE`, ... | Move rejected by the rules |
        """,
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(SERVER_CONFIG.allowed_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    game_service = service or GameService(server_config=SERVER_CONFIG)

    # =========================================================================
    # Error helpers
    # =========================================================================

    not_found_codes = {ErrorCode.GAME_NOT_FOUND.value, "PLAYER_NOT_FOUND"}

    def make_error_response(error: ErrorResponse) -> JSONResponse:
        """Create a standardized error response."""
        status_code = 404 if error.error_code in not_found_codes else 400
        return JSONResponse(status_code=status_code, content=error.model_dump())

    # =========================================================================
    # Game Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/games",
        response_model=GameCreatedResponse,
        responses={400: {"model": ErrorResponse}},
        tags=["Games"],
        summary="Open a table for a roster",
    )
    async def create_game(request: CreateGameRequest) -> Union[GameCreatedResponse, JSONResponse]:
        """Create a table and deal, or leave it in the lobby for start_game."""
        try:
            return game_service.create_game(request)
        except ValueError as e:
            return make_error_response(
                ErrorResponse(error=str(e), error_code=ErrorCode.INVALID_SETUP.value)
            )

    @app.get(
        "/api/v1/games",
        response_model=GameListResponse,
        tags=["Games"],
        summary="List active tables",
    )
    async def list_games() -> GameListResponse:
        games = game_service.list_games()
        return GameListResponse(games=games, count=len(games))

    @app.get(
        "/api/v1/games/{game_id}/players/{player_id}/view",
        response_model=PlayerViewResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Games"],
        summary="Get one seat's view",
    )
    async def get_view(game_id: str, player_id: str) -> Union[PlayerViewResponse, JSONResponse]:
        """Own hand in full, every other hand as a count."""
        response = game_service.get_view(game_id, player_id)
        if isinstance(response, ErrorResponse):
            return make_error_response(response)
        return response

    @app.post(
        "/api/v1/games/{game_id}/actions",
        response_model=ActionResponse,
        responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
        tags=["Games"],
        summary="Apply a player intent",
    )
    async def apply_action(game_id: str, request: ActionRequest) -> Union[ActionResponse, JSONResponse]:
        """Validate and apply one move; the state is unchanged on rejection."""
        response = game_service.apply_action(game_id, request)
        if isinstance(response, ErrorResponse):
            return make_error_response(response)
        return response

    @app.delete(
        "/api/v1/games/{game_id}",
        response_model=EndGameResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Games"],
        summary="End a table",
    )
    async def end_game(game_id: str) -> EndGameResponse:
        """End a table and release it."""
        if not game_service.end_game(game_id):
            raise HTTPException(status_code=404, detail="Game not found")
        return EndGameResponse(success=True, game_id=game_id)

    # =========================================================================
    # Health Check
    # =========================================================================

    @app.get(
        "/health",
        response_model=HealthResponse,
        tags=["System"],
        summary="Health check",
    )
    async def health_check() -> HealthResponse:
        """Health check endpoint for load balancers."""
        return HealthResponse(
            status="healthy",
            service="lolos-engine",
            version=__version__,
        )

    return app


# For running directly: uvicorn lolos.api.app:app
app = create_app()
