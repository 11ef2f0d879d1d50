# config.py
import os
from datetime import timedelta


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-key-change-me")
    JWT_SECRET_KEY = os.environ.get("JWT_SECRET_KEY", "dev-jwt-secret-change-me")

    SQLALCHEMY_DATABASE_URI = os.environ.get(
        "DATABASE_URL",
        "mysql+pymysql://root:@localhost/teamboard"
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # 🔐 JWT config
    JWT_TOKEN_LOCATION = ["headers"]
    JWT_HEADER_NAME = "Authorization"
    JWT_HEADER_TYPE = "Bearer"
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(days=7)

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

    # Dashboard
    MONTHLY_WORKOUT_GOAL = int(os.environ.get("MONTHLY_WORKOUT_GOAL", 30))
    DASHBOARD_ACTIVITY_LIMIT = 5
    DASHBOARD_EVENT_LIMIT = 5
    DASHBOARD_NEWS_LIMIT = 3
    REPORT_POPULAR_EXERCISE_LIMIT = 5


class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    JWT_SECRET_KEY = "test-jwt-secret-with-enough-length-for-hs256"
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(hours=1)
