import os
from dotenv import load_dotenv

# Load .env without clobbering variables already set in the environment
load_dotenv(override=False)

SQLALCHEMY_DATABASE_URL = os.getenv("SQLALCHEMY_DATABASE_URL", "sqlite:///./mealprep.db")
SECRET_KEY = os.getenv("SECRET_KEY", "change-me")  # Use a strong random string
ALGORITHM = os.getenv("ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "1440"))

OPENROUTER_API_KEY = os.getenv("OPENROUTER_API_KEY")

# LLM Selection Configuration
LLM_PROVIDER = os.getenv("LLM_PROVIDER", "ollama").lower() # Options: ollama, openrouter, openai
LLM_API_KEY = os.getenv("LLM_API_KEY") or OPENROUTER_API_KEY # Fallback for backward compatibility
LLM_MODEL = os.getenv("LLM_MODEL") # Optional override
OLLAMA_URL = os.getenv("OLLAMA_URL", "http://localhost:11434")
LLM_TIMEOUT_SECONDS = float(os.getenv("LLM_TIMEOUT_SECONDS", "120"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Comma separated, "*" allows any origin
CORS_ORIGINS = [origin.strip() for origin in os.getenv("CORS_ORIGINS", "*").split(",") if origin.strip()]
