"""
Chess Tournament Standings Backend API
"""
from fastapi import FastAPI, Query, HTTPException, Depends
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel
from typing import Optional, List

from tournament.config import ConfigError, load_config
from tournament.game_data import Game
from tournament.replay_helper import build_replay_data
from tournament.tournament_data import TournamentData, load_tournament, make_source

app = FastAPI(title="Chess Tournament Standings API")

# Enable CORS for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:5173", "http://localhost:5174", "http://localhost:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ============================================
# Pydantic models for responses
# ============================================

class TournamentResponse(BaseModel):
    name: str
    primaryColor: str
    secondaryColor: Optional[str] = None
    logoUrl: Optional[str] = None
    sponsorName: Optional[str] = None
    startDate: Optional[str] = None
    endDate: Optional[str] = None
    location: Optional[str] = None
    type: Optional[str] = None
    prizes: List[str] = []
    tournamentRepo: Optional[str] = None
    roundCount: int
    hasData: bool


class GameResponse(BaseModel):
    id: str
    white: str
    black: str
    result: str
    round: int
    moves: List[str]
    date: Optional[str] = None
    isBye: bool


class RoundResponse(BaseModel):
    number: int
    games: List[GameResponse]


class StandingResponse(BaseModel):
    rank: int
    name: str
    points: float
    played: int
    wins: int
    draws: int
    losses: int


class ReplayResponse(BaseModel):
    gameId: str
    allMoves: List[str]
    ply: int
    fen: str


class ReloadResponse(BaseModel):
    rounds: int
    games: int
    players: int


# ============================================
# Tournament data
# ============================================

# Last loaded snapshot; replaced as a whole on reload
_tournament: Optional[TournamentData] = None


def reload_tournament() -> TournamentData:
    """Load config and all rounds from scratch."""
    global _tournament
    try:
        config = load_config()
        data = load_tournament(config, make_source(config))
    except ConfigError as e:
        raise HTTPException(status_code=500, detail=str(e))
    _tournament = data
    return data


def get_tournament() -> TournamentData:
    """Dependency returning the loaded tournament, loading it on first use."""
    if _tournament is None:
        return reload_tournament()
    return _tournament


def game_to_response(game: Game) -> GameResponse:
    return GameResponse(
        id=game.id,
        white=game.white,
        black=game.black,
        result=game.result,
        round=game.round,
        moves=list(game.moves),
        date=game.date,
        isBye=game.is_bye,
    )


# ============================================
# Endpoints
# ============================================

@app.get("/api/tournament", response_model=TournamentResponse)
async def get_tournament_info(data: TournamentData = Depends(get_tournament)):
    """Tournament details from the config."""
    config = data.config
    return TournamentResponse(
        **config.model_dump(exclude={"rounds", "dataBranch", "dataPath"}),
        roundCount=len(data.rounds),
        hasData=len(data.rounds) > 0,
    )


@app.get("/api/rounds", response_model=List[RoundResponse])
async def get_rounds(data: TournamentData = Depends(get_tournament)):
    """All rounds in config order."""
    return [
        RoundResponse(number=r.number, games=[game_to_response(g) for g in r.games])
        for r in data.rounds
    ]


@app.get("/api/standings", response_model=List[StandingResponse])
async def get_standings(
    search: Optional[str] = Query(None, description="Filter players by name (case-insensitive)"),
    data: TournamentData = Depends(get_tournament),
):
    """
    Ranked standings. Ranks are assigned before filtering, so a filtered
    player keeps their overall rank.
    """
    response = [
        StandingResponse(
            rank=index,
            name=s.name,
            points=s.points,
            played=s.played,
            wins=s.wins,
            draws=s.draws,
            losses=s.losses,
        )
        for index, s in enumerate(data.standings, start=1)
    ]

    if search:
        query = search.lower()
        response = [s for s in response if query in s.name.lower()]

    return response


@app.get("/api/games/{game_id:path}/replay", response_model=ReplayResponse)
async def get_game_replay(
    game_id: str,
    ply: int = Query(0, description="Half-moves played before the shown position"),
    data: TournamentData = Depends(get_tournament),
):
    """Position of a game after a number of half-moves."""
    game = data.games_by_id.get(game_id)
    if game is None:
        raise HTTPException(status_code=404, detail="Game not found")

    replay = build_replay_data(game, ply)
    return ReplayResponse(
        gameId=game.id,
        allMoves=replay["all_moves"],
        ply=replay["ply"],
        fen=replay["fen"],
    )


@app.post("/api/reload", response_model=ReloadResponse)
def reload():
    """Fetch all rounds again and recompute standings."""
    data = reload_tournament()
    return ReloadResponse(
        rounds=len(data.rounds),
        games=sum(len(r.games) for r in data.rounds),
        players=len(data.standings),
    )


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "ok"}
