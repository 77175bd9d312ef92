import os

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///trivia.db'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    PORT = int(os.environ.get('PORT', '8080'))
    # Any non-empty value recreates tables and reseeds the question catalog on startup
    RESET_DATABASE = bool(os.environ.get('RESET_DATABASE'))
    BCRYPT_LOG_ROUNDS = int(os.environ.get('BCRYPT_LOG_ROUNDS', '12'))
    # Pre-hash passwords past bcrypt's 72-byte input limit with SHA-256
    BCRYPT_HANDLE_LONG_PASSWORDS = True
    # Leaderboard cutoff and update policy ('overwrite' or 'max')
    HIGHSCORE_LIMIT = int(os.environ.get('HIGHSCORE_LIMIT', '10'))
    HIGHSCORE_POLICY = os.environ.get('HIGHSCORE_POLICY', 'overwrite')
    CORS_ORIGINS = [o.strip() for o in os.environ.get('CORS_ORIGINS', '*').split(',') if o.strip()]
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
