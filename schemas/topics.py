# schemas/topics.py
from pydantic import BaseModel


class TopicOut(BaseModel):
    id: str
    title: str
    category: str
    position: int
    locked: bool


class ExplainerOut(BaseModel):
    topic_id: str
    title: str
    content: str
