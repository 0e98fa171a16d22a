# repository/corpus_repository.py
import logging
from pathlib import Path
from typing import Optional
from pydantic import ValidationError
from model.corpus import Corpus
from util.timing import timed

logger = logging.getLogger(__name__)


class CorpusRepository:
    """
    Loads the Q&A corpus file once. A missing or invalid file yields None,
    which keeps the service in its "initializing" state instead of crashing.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    def load(self) -> Optional[Corpus]:
        try:
            with timed(logger, "corpus.load", path=self._path.name):
                raw = self._path.read_bytes()
                corpus = Corpus.model_validate_json(raw)
        except FileNotFoundError:
            logger.error("corpus.load.missing path=%s", self._path)
            return None
        except ValidationError as e:
            logger.error(
                "corpus.load.invalid path=%s errors=%d first=%s",
                self._path,
                e.error_count(),
                e.errors()[0].get("msg") if e.errors() else "",
            )
            return None
        except OSError as e:
            logger.error("corpus.load.io_error path=%s err=%s", self._path, type(e).__name__)
            return None

        logger.info(
            "corpus.load.ok pairs=%d course=%s",
            len(corpus.qaPairs),
            corpus.courseInfo.courseCode,
        )
        return corpus
