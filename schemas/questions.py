# schemas/questions.py
from pydantic import BaseModel, ConfigDict


class QuestionOut(BaseModel):
    # never carries the answer
    model_config = ConfigDict(from_attributes=True)
    id: str
    category: str
    prompt: str
    difficulty: str
