import os

class BaseConfig:
    JSON_SORT_KEYS = False
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    CORS_ALLOWED_ORIGINS = os.getenv(
        "CORS_ALLOWED_ORIGINS",
        "http://localhost:8080,http://localhost:3000",
    )
    RATELIMIT_STORAGE_URL = os.getenv("RATELIMIT_STORAGE_URL", "memory://")
    SIGNUP_LIMIT_PER_IP = os.getenv("SIGNUP_LIMIT_PER_IP", "10 per hour")
    SIGNIN_LIMIT_PER_IP = os.getenv("SIGNIN_LIMIT_PER_IP", "20 per 15 minutes")
    CHECKOUT_LIMIT_PER_IP = os.getenv("CHECKOUT_LIMIT_PER_IP", "30 per hour")
    JWT_SECRET = os.getenv("JWT_SECRET", "dev-insecure-jwt-key")
    ACCESS_TOKEN_LIFETIME_DAYS = int(os.getenv("ACCESS_TOKEN_LIFETIME_DAYS", 7))
    ADMIN_EMAIL = os.getenv("ADMIN_EMAIL")
    ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD")
    # Signups with these emails get the admin role
    ADMIN_EMAILS = os.getenv("ADMIN_EMAILS", "")
    STRIPE_SECRET_KEY = os.getenv("STRIPE_SECRET_KEY")
    STRIPE_API_VERSION = os.getenv("STRIPE_API_VERSION", "2023-10-16")
    DEFAULT_CURRENCY = os.getenv("DEFAULT_CURRENCY", "usd")
    # Stripe caps every metadata value at 500 characters
    PAYMENT_METADATA_VALUE_LIMIT = int(os.getenv("PAYMENT_METADATA_VALUE_LIMIT", 500))
    MAX_PAGE_SIZE = int(os.getenv("MAX_PAGE_SIZE", 100))
    OTEL_SERVICE_NAME = os.getenv("OTEL_SERVICE_NAME", "storefront-api")
    OTEL_EXPORTER_OTLP_ENDPOINT = os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT")

class DevelopmentConfig(BaseConfig):
    DEBUG = True
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-insecure-key")
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///dev.db")

class TestingConfig(BaseConfig):
    TESTING = True
    SECRET_KEY = "test-key"
    JWT_SECRET = "test-jwt-key"
    SQLALCHEMY_DATABASE_URI = os.getenv("TEST_DATABASE_URL", "sqlite:///:memory:")
    CORS_ALLOWED_ORIGINS = os.getenv("CORS_ALLOWED_ORIGINS", "*")
    SIGNUP_LIMIT_PER_IP = "1000 per minute"
    SIGNIN_LIMIT_PER_IP = "1000 per minute"
    CHECKOUT_LIMIT_PER_IP = "1000 per minute"
    ADMIN_EMAILS = "owner@example.com"
    STRIPE_SECRET_KEY = "sk_test_dummy"

class ProductionConfig(BaseConfig):
    DEBUG = False
    TESTING = False
    SECRET_KEY = os.getenv("SECRET_KEY")
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL")

    @staticmethod
    def validate():
        missing = []
        for key in ("SECRET_KEY", "DATABASE_URL", "JWT_SECRET", "STRIPE_SECRET_KEY"):
            if not os.getenv(key):
                missing.append(key)
        if missing:
            raise RuntimeError(
                f"Missing required env vars in production: {', '.join(missing)}"
            )

def get_config_class():
    env = os.getenv("APP_ENV", "development").lower()
    if env == "production":
        ProductionConfig.validate()
        return ProductionConfig
    if env == "testing":
        return TestingConfig
    return DevelopmentConfig
