# model/corpus.py
from pydantic import BaseModel, ConfigDict, Field, model_validator

NOT_FOUND = "Not found"


class CourseInfo(BaseModel):
    """Descriptive course metadata; passed through untouched by the matcher."""

    model_config = ConfigDict(frozen=True)

    courseName: str = NOT_FOUND
    courseCode: str = NOT_FOUND
    semester: str = NOT_FOUND
    year: str = NOT_FOUND
    instructor: str = NOT_FOUND


class QAEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    category: str
    keywords: tuple[str, ...] = ()
    question: str
    alternateQuestions: tuple[str, ...] = ()
    answer: str


class Corpus(BaseModel):
    """
    Read-only snapshot loaded once at startup. Iteration order of `qaPairs`
    is the file order and decides ties between equally scored entries.
    """

    model_config = ConfigDict(frozen=True)

    courseInfo: CourseInfo = Field(default_factory=CourseInfo)
    qaPairs: tuple[QAEntry, ...] = ()

    @model_validator(mode="after")
    def _unique_ids(self) -> "Corpus":
        seen: set[int] = set()
        for entry in self.qaPairs:
            if entry.id in seen:
                raise ValueError(f"duplicate qaPairs id {entry.id}")
            seen.add(entry.id)
        return self
