from dotenv import load_dotenv
import os

load_dotenv()

# Database
DATABASE_URL = os.getenv("DATABASE_URL")

# Fernet (quiz sessions & scramble rounds)
ENCRYPTION_KEY = os.getenv("ENCRYPTION_KEY")

# JWT Authentication
JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")

# JWT Time
ACCESS_TOKEN_EXPIRY = int(os.getenv("ACCESS_TOKEN_EXPIRY", 1440))  # Minutes

# Email
EMAIL_HOST = os.getenv("EMAIL_HOST")
EMAIL_PORT = int(os.getenv("EMAIL_PORT", 587))
EMAIL_USERNAME = os.getenv("EMAIL_USERNAME")
EMAIL_PASSWORD = os.getenv("EMAIL_PASSWORD")
FEEDBACK_TO_EMAIL = os.getenv("FEEDBACK_TO_EMAIL")

# Leaderboard
LEADERBOARD_DEFAULT_LIMIT = int(os.getenv("LEADERBOARD_DEFAULT_LIMIT", 10))
LEADERBOARD_MAX_LIMIT = int(os.getenv("LEADERBOARD_MAX_LIMIT", 500))

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Quiz Arena URL
QUIZ_APP_URL = os.getenv("QUIZ_APP_URL", "http://localhost:3000")
ANOTHER_URL = os.getenv("ANOTHER_URL", "http://localhost:8081")
