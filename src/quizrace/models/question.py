"""Trivia questions and a sequential question bank."""

from pydantic import BaseModel, Field, model_validator


class Question(BaseModel):
    """A multiple-choice question."""

    id: int = Field(default=0, description="Question identifier")
    stage: int = Field(default=1, ge=1, description="Stage the question belongs to")
    text: str = Field(..., description="Question text")
    options: list[str] = Field(..., min_length=4, max_length=4, description="Four answer options")
    correct_index: int = Field(..., ge=0, le=3, description="Index of the correct option")

    def is_correct(self, index: int) -> bool:
        return index == self.correct_index


class QuestionBank(BaseModel):
    """Serves questions in order, cycling back to the start when exhausted.

    Questions of the requested stage are preferred; when a stage has none the
    whole bank is used instead.
    """

    questions: list[Question] = Field(default_factory=list)
    cursors: dict[int, int] = Field(
        default_factory=dict,
        description="Next index per stage (0 = whole bank)",
    )

    @model_validator(mode="after")
    def _sort_by_id(self) -> "QuestionBank":
        self.questions.sort(key=lambda q: q.id)
        return self

    def __len__(self) -> int:
        return len(self.questions)

    def next_question(self, stage: int) -> Question | None:
        """Return the next question for a stage, or None if the bank is empty."""
        if not self.questions:
            return None

        pool = [q for q in self.questions if q.stage == stage]
        key = stage
        if not pool:
            pool = self.questions
            key = 0

        cursor = self.cursors.get(key, 0)
        if cursor >= len(pool):
            cursor = 0
        self.cursors[key] = cursor + 1
        return pool[cursor]
