from fastapi import APIRouter, HTTPException, Depends, status
from typing import Annotated

from ....core.config import settings
from ....core.http_client import get_http_client
from ....domain.errors import (
    InvalidTransition,
    NetworkFailure,
    NoActiveGame,
    SourceUnavailable,
)
from ....domain.model import Difficulty, QuizPhase
from ....repositories.trivia_repository import TriviaRepository
from ....schemas.game_schemas import (
    AnswerIn,
    AnswerOut,
    DifficultiesOut,
    GameStateOut,
    QuestionOut,
    ResultOut,
    StartGameIn,
)
from ....services.game_service import GameService
from ....services.question_acquirer import QuestionAcquirer
from ....services.quiz_engine import QuizEngine
from ....services.results import percentage
from ....services.translator import Translator

router = APIRouter(prefix="/game", tags=["game"])

_service: GameService | None = None


def get_service() -> GameService:
    # one game per process: the service is built once and kept
    global _service
    if _service is None:
        client = get_http_client()
        repo = TriviaRepository(client, str(settings.TRIVIA_API_URL))
        translator = Translator(client, str(settings.TRANSLATE_API_URL), settings.TARGET_LANG)
        _service = GameService(QuestionAcquirer(repo, translator))
    return _service


def reset_service() -> None:
    global _service
    _service = None


ServiceDep = Annotated[GameService, Depends(get_service)]


def _engine(svc: GameService) -> QuizEngine:
    try:
        return svc.engine
    except NoActiveGame as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


def _conflict(e: InvalidTransition) -> HTTPException:
    return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))


def _state(svc: GameService, engine: QuizEngine) -> GameStateOut:
    in_progress = engine.phase is QuizPhase.IN_PROGRESS
    number = engine.progress()[0] if in_progress else None
    if engine.is_complete():
        percent = 100
    elif number is not None:
        percent = percentage(number, engine.total())
    else:
        percent = 0
    return GameStateOut(
        phase=engine.phase,
        difficulty=svc.difficulty,
        questionNumber=number,
        total=engine.total(),
        score=engine.score(),
        answered=engine.locked,
        progressPercent=percent,
        complete=engine.is_complete(),
    )


@router.get("/difficulties", response_model=DifficultiesOut)
async def list_difficulties():
    return DifficultiesOut(difficulties=list(Difficulty), defaultCount=settings.QUESTION_COUNT)


@router.post("/start", response_model=GameStateOut, status_code=status.HTTP_201_CREATED)
async def start_game(payload: StartGameIn, svc: ServiceDep):
    try:
        engine = await svc.start(payload.difficulty, payload.count)
    except SourceUnavailable as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))
    except NetworkFailure as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))
    return _state(svc, engine)


@router.get("/state", response_model=GameStateOut)
async def get_state(svc: ServiceDep):
    return _state(svc, _engine(svc))


@router.get("/question", response_model=QuestionOut)
async def get_question(svc: ServiceDep):
    engine = _engine(svc)
    try:
        question = engine.current_question()
        number, total = engine.progress()
    except InvalidTransition as e:
        raise _conflict(e)
    return QuestionOut(
        questionNumber=number,
        total=total,
        questionText=question.prompt,
        answers=list(question.answers),
        answered=engine.locked,
    )


@router.post("/answer", response_model=AnswerOut)
async def submit_answer(payload: AnswerIn, svc: ServiceDep):
    engine = _engine(svc)
    try:
        correct = engine.submit_answer(payload.choice)
        question = engine.current_question()
    except InvalidTransition as e:
        raise _conflict(e)
    return AnswerOut(
        correct=correct,
        correctAnswer=question.correct_answer,
        score=engine.score(),
        advanceAfterMs=settings.FEEDBACK_DELAY_MS,
    )


@router.post("/advance", response_model=GameStateOut)
async def advance(svc: ServiceDep):
    engine = _engine(svc)
    try:
        engine.advance()
    except InvalidTransition as e:
        raise _conflict(e)
    return _state(svc, engine)


@router.get("/result", response_model=ResultOut)
async def get_result(svc: ServiceDep):
    _engine(svc)
    try:
        res = svc.result()
    except InvalidTransition as e:
        raise _conflict(e)
    return ResultOut(
        score=res.score,
        total=res.total,
        percentage=res.percentage,
        tier=res.tier,
        emoji=res.emoji,
        message=res.message,
    )
