"""Application configuration and constants"""
import os
from dotenv import load_dotenv

load_dotenv()

# Database
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./mailpolish.db")

# LLM configuration
GROQ_API_KEY = os.getenv("GROQ_API_KEY")
GROQ_MODEL_NAME = os.getenv("GROQ_MODEL_NAME", "llama-3.3-70b-versatile")
POLISH_TEMPERATURE = float(os.getenv("POLISH_TEMPERATURE", "0.7"))
POLISH_MAX_TOKENS = int(os.getenv("POLISH_MAX_TOKENS", "1024"))

# Sessions
SESSION_DURATION_HOURS = int(os.getenv("SESSION_DURATION_HOURS", "2"))

# Security
MAX_EMAIL_LENGTH = 50000

# CORS Origins
ALLOWED_ORIGINS = [
    origin.strip()
    for origin in os.getenv("ALLOWED_ORIGINS", "http://localhost:4321,http://localhost:8000").split(",")
    if origin.strip()
]

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
