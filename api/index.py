# FastAPI Imports
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging


# Projects Import
from app.authentication.main import app as auth_router
from app.users.main import router as user_router
from app.quiz.main import app as quiz_app
from app.leaderboard.main import app as leaderboard_app
from app.features.main import app as features_app
from app.scramble.main import app as scramble_app
from helper.config import QUIZ_APP_URL, ANOTHER_URL, LOG_LEVEL

logging.basicConfig(
    level=LOG_LEVEL, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

app = FastAPI(title="Billions Quiz Arena API")


@app.get("/", tags=["Index"])
def index_page():
    return {"message": "Billions Quiz Arena API"}


app.include_router(auth_router, prefix="/auth", tags=["Authentication"])
app.include_router(quiz_app, prefix="/quiz", tags=["Quiz"])
app.include_router(user_router, prefix="/user", tags=["User"])
app.include_router(leaderboard_app, prefix="/leaderboard", tags=["Leaderboard"])
app.include_router(scramble_app, prefix="/scramble", tags=["Scramble"])
app.include_router(features_app, tags=["Features"])

app.add_middleware(
    CORSMiddleware,
    allow_origins=[QUIZ_APP_URL, ANOTHER_URL],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
