import os
from dotenv import load_dotenv

load_dotenv()

class BaseConfig:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret")
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", SECRET_KEY)
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # Media storage
    STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "local")  # local | s3
    UPLOAD_FOLDER = os.getenv("UPLOAD_FOLDER", "uploads")
    MEDIA_BASE_URL = os.getenv("MEDIA_BASE_URL", "/uploads")
    S3_BUCKET = os.getenv("S3_BUCKET")
    S3_ENDPOINT_URL = os.getenv("S3_ENDPOINT_URL")
    S3_REGION = os.getenv("S3_REGION", "us-east-1")
    MAX_MEDIA_BYTES = int(os.getenv("MAX_MEDIA_BYTES", 10 * 1024 * 1024))
    # Whole request body; larger requests are refused with 413
    MAX_CONTENT_LENGTH = int(os.getenv("MAX_CONTENT_LENGTH", 5 * MAX_MEDIA_BYTES))
    MEDIA_UPLOAD_WORKERS = int(os.getenv("MEDIA_UPLOAD_WORKERS", 3))

    # Repository sync
    SYNC_SETTINGS_PATH = os.getenv("SYNC_SETTINGS_PATH", "instance/sync_settings.json")
    GITHUB_API_URL = os.getenv("GITHUB_API_URL", "https://api.github.com")
    GITHUB_TIMEOUT = float(os.getenv("GITHUB_TIMEOUT", 10))

    # trusted | no-scripts | escaped
    RENDER_POLICY = os.getenv("RENDER_POLICY", "trusted")

class DevelopmentConfig(BaseConfig):
    DEBUG = True
    SQLALCHEMY_DATABASE_URI = os.getenv("DEV_DATABASE_URI", "sqlite:///contenthub-dev.db")

class ProductionConfig(BaseConfig):
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URI")

class TestingConfig(BaseConfig):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    JWT_SECRET_KEY = "testing-secret-key-with-enough-length"
    LOG_LEVEL = "WARNING"
    MEDIA_UPLOAD_WORKERS = 2

config_by_name = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
    "testing": TestingConfig,
}
