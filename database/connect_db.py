from dotenv import load_dotenv
import os
import psycopg2

# Project Imports
from helper.config import DATABASE_URL

load_dotenv()


def connect_database():
    # Hosted Postgres (e.g. Supabase) hands out a single connection string
    if DATABASE_URL:
        return psycopg2.connect(DATABASE_URL)

    connect = psycopg2.connect(
        database=os.getenv("DATABASE_NAME"),
        user=os.getenv("DATABASE_USER"),
        password=os.getenv("DATABASE_PASSWORD"),
        host=os.getenv("DATABASE_HOST"),
        port=os.getenv("DATABASE_PORT"),
    )

    return connect
