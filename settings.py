from __future__ import annotations

import os

# Load once at module import
QUESTIONS_PER_ROUND = int(os.getenv("HELIX_QUESTIONS_PER_ROUND", "5"))
XP_PER_CORRECT = int(os.getenv("HELIX_XP_PER_CORRECT", "100"))
BOOKWORK_CHANCE = float(os.getenv("HELIX_BOOKWORK_CHANCE", "0.3"))
MAX_SESSIONS = max(1, int(os.getenv("HELIX_MAX_SESSIONS", "1000")))

# Anti-duplicate regeneration attempts per question
MAX_REGENERATE_ATTEMPTS = 5

# Submissions longer than this are rejected by the request schemas
ANSWER_MAX_LEN = 100

_DEFAULT_ORIGINS = "http://localhost:3000,http://127.0.0.1:3000"
CORS_ORIGINS = [
    o.strip() for o in os.getenv("HELIX_CORS_ORIGINS", _DEFAULT_ORIGINS).split(",") if o.strip()
]
