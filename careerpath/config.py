import os
from dotenv import load_dotenv

load_dotenv(os.path.join(os.path.dirname(__file__), '.env'))

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key-change-in-production-env'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///careerpath.db'
    OPENAI_API_KEY = os.environ.get('OPENAI_API_KEY')
    OPENAI_MODEL = os.environ.get('OPENAI_MODEL') or 'gpt-4o-mini'
    LOG_LEVEL = os.environ.get('LOG_LEVEL') or 'INFO'

    TOKEN_EXPIRY_HOURS = int(os.environ.get('TOKEN_EXPIRY_HOURS') or 24)
    # Naive booking times from the client are read in this zone
    TIMEZONE = os.environ.get('TIMEZONE') or 'Asia/Kolkata'

    # Business Rules Defaults
    PRICE_BUDGET_MAX = 1500    # budget < 1500 <= mid
    PRICE_PREMIUM_MIN = 2000   # mid < 2000 <= premium
    MAX_BOOKING_MINUTES = 240

class DevelopmentConfig(Config):
    DEBUG = True

class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    OPENAI_API_KEY = 'test-key'

class ProductionConfig(Config):
    DEBUG = False
    LOG_LEVEL = os.environ.get('LOG_LEVEL') or 'WARNING'
    # In prod, rely on env vars strictly
