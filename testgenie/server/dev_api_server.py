"""FastAPI development backend speaking the same JSON contract as the real quiz API."""

from __future__ import annotations

import logging
from threading import Thread

from fastapi import APIRouter, Depends, FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
import uvicorn

from testgenie.constants.network_constants import (
    DEV_SERVER_API_PREFIX,
    DEV_SERVER_HOST,
    DEV_SERVER_PORT,
)
from testgenie.core.schemas import (
    LoginPayload,
    PasswordResetPayload,
    ProfileUpdatePayload,
    QuizSettings,
    RegisterPayload,
    SubmitPayload,
)
from testgenie.server.dev_store import (
    Attempt,
    DevStore,
    StoredQuestion,
    StoredQuiz,
    StoredUser,
    StoreError,
)

logger = logging.getLogger(__name__)

_AI_QUOTA_MESSAGE = "AI generation quota exceeded. Please try again later or use basic generation."


def _user_json(user: StoredUser, store: DevStore) -> dict[str, object]:
    stats = store.user_stats(user)
    return {
        "_id": user.id,
        "name": user.name,
        "email": user.email,
        "imageUrl": None,
        "role": "user",
        "quizzesTaken": stats["quizzesTaken"],
        "averageScore": stats["averageScore"],
        "totalScore": stats["totalScore"],
        "averageCompletionTime": stats["averageCompletionTime"],
        "createdAt": user.created_at,
        "lastLogin": user.last_login,
    }


def _question_json(question: StoredQuestion, reveal: bool) -> dict[str, object]:
    options = []
    for option in question.options:
        item: dict[str, object] = {"_id": option.id, "text": option.text}
        if reveal:
            item["isCorrect"] = option.is_correct
        options.append(item)
    return {
        "_id": question.id,
        "text": question.text,
        "options": options,
        "explanation": question.explanation,
    }


def _quiz_json(quiz: StoredQuiz, attempt: Attempt | None, listing: bool = False) -> dict[str, object]:
    """Serialize a quiz as seen by one user; correctness is hidden until they complete it."""
    completed = attempt is not None
    body: dict[str, object] = {
        "_id": quiz.id,
        "userId": quiz.user_id,
        "title": quiz.title,
        "subject": quiz.subject,
        "description": quiz.description,
        "difficulty": quiz.difficulty,
        "timeLimit": quiz.time_limit,
        "isPublic": quiz.is_public,
        "tags": list(quiz.tags),
        "attempts": quiz.attempts,
        "createdAt": quiz.created_at,
        "isCompleted": completed,
    }
    if listing:
        body["questions"] = len(quiz.questions)
    else:
        body["questions"] = [_question_json(q, reveal=completed) for q in quiz.questions]
    if attempt is not None:
        body["score"] = attempt.score
        body["userAnswers"] = dict(attempt.answers)
        body["completionTime"] = attempt.completion_time
    return body


def _feedback(score: float) -> str:
    if score >= 80:
        return "Excellent work!"
    if score >= 60:
        return "Good job! Review the questions you missed."
    return "Keep practicing and try again."


def _store_dependency(store: DevStore):
    def dependency() -> DevStore:
        return store

    return dependency


def create_dev_app(store: DevStore | None = None, ai_available: bool = False) -> FastAPI:
    """Create the development API; ``ai_available=False`` makes /quiz/generate answer 429."""
    store = store or DevStore()
    store_dep = _store_dependency(store)
    app = FastAPI(title="TestGenie Development API", version="0.1.0")
    router = APIRouter(prefix=DEV_SERVER_API_PREFIX)

    @app.exception_handler(StoreError)
    async def handle_store_error(request: Request, exc: StoreError) -> JSONResponse:
        return JSONResponse(status_code=exc.status, content={"message": exc.message})

    @app.exception_handler(HTTPException)
    async def handle_http_error(request: Request, exc: HTTPException) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content={"message": str(exc.detail)})

    def current_user(request: Request, db: DevStore = Depends(store_dep)) -> StoredUser:
        header = request.headers.get("Authorization", "")
        if not header.startswith("Bearer "):
            raise HTTPException(status_code=401, detail="Not authorized, no token")
        return db.user_for_token(header.removeprefix("Bearer ").strip())

    # --- Auth ---

    @router.post("/auth/register", status_code=201)
    def register(payload: RegisterPayload, db: DevStore = Depends(store_dep)) -> dict[str, object]:
        token, user = db.register(payload.name, payload.email, payload.password)
        logger.info("Registered dev user %s", user.email)
        return {"token": token, "user": _user_json(user, db)}

    @router.post("/auth/login")
    def login(payload: LoginPayload, db: DevStore = Depends(store_dep)) -> dict[str, object]:
        token, user = db.login(payload.email, payload.password)
        return {"token": token, "user": _user_json(user, db)}

    @router.get("/auth/me")
    def me(
        user: StoredUser = Depends(current_user), db: DevStore = Depends(store_dep)
    ) -> dict[str, object]:
        return {"success": True, "data": _user_json(user, db)}

    @router.get("/auth/stats")
    def stats(
        user: StoredUser = Depends(current_user), db: DevStore = Depends(store_dep)
    ) -> dict[str, object]:
        return {"success": True, "data": db.user_stats(user)}

    @router.post("/auth/forgot-password")
    def forgot_password(payload: PasswordResetPayload) -> dict[str, object]:
        # Never reveal whether the address is registered.
        return {
            "success": True,
            "message": f"If an account exists for {payload.email}, a reset link has been sent.",
        }

    # --- User ---

    @router.put("/user/profile")
    def update_profile(
        payload: ProfileUpdatePayload,
        user: StoredUser = Depends(current_user),
        db: DevStore = Depends(store_dep),
    ) -> dict[str, object]:
        updated = db.update_profile(
            user, payload.name, payload.email, payload.current_password, payload.new_password
        )
        return {"success": True, "data": _user_json(updated, db)}

    @router.delete("/user/account")
    def delete_account(
        user: StoredUser = Depends(current_user), db: DevStore = Depends(store_dep)
    ) -> dict[str, object]:
        db.delete_account(user)
        return {"success": True, "message": "Account deleted"}

    @router.get("/user/leaderboard")
    def leaderboard(
        user: StoredUser = Depends(current_user), db: DevStore = Depends(store_dep)
    ) -> dict[str, object]:
        return {"success": True, "data": db.leaderboard()}

    # --- Quizzes ---

    @router.post("/quiz/generate", status_code=201)
    def generate_quiz(
        settings: QuizSettings,
        user: StoredUser = Depends(current_user),
        db: DevStore = Depends(store_dep),
    ) -> dict[str, object]:
        if not ai_available:
            raise HTTPException(status_code=429, detail=_AI_QUOTA_MESSAGE)
        return _create(settings, user, db)

    @router.post("/quiz/generate-basic", status_code=201)
    def generate_basic_quiz(
        settings: QuizSettings,
        user: StoredUser = Depends(current_user),
        db: DevStore = Depends(store_dep),
    ) -> dict[str, object]:
        return _create(settings, user, db)

    def _create(settings: QuizSettings, user: StoredUser, db: DevStore) -> dict[str, object]:
        quiz = db.create_quiz(
            user,
            title=settings.title,
            subject=settings.subject,
            num_questions=settings.num_questions,
            difficulty=settings.difficulty,
            description=settings.description,
            time_limit=settings.time_limit,
        )
        logger.info("Generated dev quiz %s (%d questions)", quiz.id, len(quiz.questions))
        return {"success": True, "data": _quiz_json(quiz, None)}

    @router.get("/quiz/user/quizzes")
    def user_quizzes(
        user: StoredUser = Depends(current_user), db: DevStore = Depends(store_dep)
    ) -> dict[str, object]:
        quizzes = [
            _quiz_json(quiz, db.attempt_for(user, quiz.id), listing=True) for quiz in db.user_quizzes(user)
        ]
        return {"success": True, "data": quizzes}

    @router.get("/quiz/{quiz_id}")
    def get_quiz(
        quiz_id: str,
        user: StoredUser = Depends(current_user),
        db: DevStore = Depends(store_dep),
    ) -> dict[str, object]:
        quiz = db.get_quiz(user, quiz_id)
        return {"success": True, "data": _quiz_json(quiz, db.attempt_for(user, quiz_id))}

    @router.delete("/quiz/{quiz_id}")
    def delete_quiz(
        quiz_id: str,
        user: StoredUser = Depends(current_user),
        db: DevStore = Depends(store_dep),
    ) -> dict[str, object]:
        db.delete_quiz(user, quiz_id)
        return {"success": True, "message": "Quiz deleted"}

    @router.post("/quiz/{quiz_id}/submit")
    def submit_quiz(
        quiz_id: str,
        payload: SubmitPayload,
        retake: bool = False,
        user: StoredUser = Depends(current_user),
        db: DevStore = Depends(store_dep),
    ) -> dict[str, object]:
        quiz, attempt = db.submit(user, quiz_id, payload.answers, payload.completion_time, retake)
        logger.info("Dev quiz %s submitted: %.1f%%", quiz_id, attempt.score)
        return {
            "quiz": _quiz_json(quiz, attempt),
            "score": attempt.score,
            "correctAnswers": attempt.correct_answers,
            "totalQuestions": len(quiz.questions),
            "timeTaken": attempt.completion_time,
            "feedback": _feedback(attempt.score),
        }

    app.include_router(router)
    return app


def start_dev_server(
    host: str = DEV_SERVER_HOST,
    port: int = DEV_SERVER_PORT,
    store: DevStore | None = None,
) -> Thread:
    """Start the development API in a background daemon thread."""
    app = create_dev_app(store)
    config = uvicorn.Config(app=app, host=host, port=port, log_level="info")
    server = uvicorn.Server(config)

    def run_server() -> None:
        server.run()

    thread = Thread(target=run_server, name="TestGenieDevApi", daemon=True)
    thread.start()
    logger.info("Development API listening on http://%s:%d%s", host, port, DEV_SERVER_API_PREFIX)
    return thread
