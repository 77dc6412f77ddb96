# schemas/questions.py
from pydantic import BaseModel


class QuestionOut(BaseModel):
    # canonical answers never leave the server
    id: int
    topic: str
    prompt: str
