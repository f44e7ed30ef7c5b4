import os
from pydantic_settings import BaseSettings
from dotenv import load_dotenv

# Load the appropriate environment file
env_file = '.env.local'
load_dotenv(env_file)

class Settings(BaseSettings):
    """Application settings."""
    # App settings
    APP_ENV: str = os.getenv('APP_ENV', 'production')
    PORT: int = int(os.getenv('PORT', 3002))

    # Database settings. SUPABASE_DB_URL wins over the individual DB_* parts.
    SUPABASE_DB_URL: str = os.getenv('SUPABASE_DB_URL', '')
    DB_HOST: str = os.getenv('DB_HOST', 'localhost')
    DB_PORT: str = os.getenv('DB_PORT', '5432')
    DB_NAME: str = os.getenv('DB_NAME', 'multi_srms')
    DB_USER: str = os.getenv('DB_USER', 'postgres')
    DB_PASSWORD: str = os.getenv('DB_PASSWORD', 'postgres')

    # Auth settings
    JWT_SECRET: str = os.getenv('JWT_SECRET', 'multi_srms_secret_key')
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRES_IN: str = os.getenv('JWT_EXPIRES_IN', '24h')
    MIN_PASSWORD_LENGTH: int = 6

    # Email settings
    EMAIL_SERVICE: str = os.getenv('EMAIL_SERVICE', 'console')
    EMAIL_USER: str = os.getenv('EMAIL_USER', '')
    EMAIL_PASS: str = os.getenv('EMAIL_PASS', '')
    EMAIL_FROM: str = os.getenv('EMAIL_FROM', '')

    # Password reset
    OTP_EXPIRY_MINUTES: int = int(os.getenv('OTP_EXPIRY_MINUTES', 15))
    OTP_MAX_VERIFY_ATTEMPTS: int = int(os.getenv('OTP_MAX_VERIFY_ATTEMPTS', 5))

    # Excel uploads
    UPLOAD_DIR: str = os.getenv('UPLOAD_DIR', 'uploads')
    MAX_UPLOAD_SIZE_BYTES: int = int(os.getenv('MAX_UPLOAD_SIZE_BYTES', 5 * 1024 * 1024))

    # Used when the current_academic_year application setting is missing
    DEFAULT_ACADEMIC_YEAR: int = int(os.getenv('DEFAULT_ACADEMIC_YEAR', 2082))

    # CORS
    FRONTEND_URL: str = os.getenv('FRONTEND_URL', '')
    ALLOW_ALL_ORIGINS: bool = os.getenv('ALLOW_ALL_ORIGINS', 'false').lower() == 'true'

    # API settings
    API_TITLE: str = "Multi-School Result Management API"
    API_DESCRIPTION: str = "Backend API for school records, marks and grade reports"
    API_VERSION: str = "1.0.0"
    API_DOCS_URL: str = "/api/docs"
    API_REDOC_URL: str = "/api/redoc"
    API_OPENAPI_URL: str = "/api/openapi.json"

    @property
    def database_url(self) -> str:
        if self.SUPABASE_DB_URL:
            url = self.SUPABASE_DB_URL
            # SQLAlchemy no longer accepts the legacy postgres:// scheme
            if url.startswith("postgres://"):
                url = "postgresql://" + url[len("postgres://"):]
            return url
        return f"postgresql://{self.DB_USER}:{self.DB_PASSWORD}@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"

    class Config:
        env_file = env_file
        extra = "ignore"

settings = Settings()
