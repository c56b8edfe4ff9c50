import threading
import time
from typing import Any

from docworker.logging.logger import Log
from docworker.summarization.client_base import BaseSummarizationClient
from docworker.summarization.exceptions import SummarizationError


class TransformersClientAdapter(BaseSummarizationClient):
    """Local Hugging Face summarization pipeline (BART family models).

    The model is loaded on first use, once per process, and then shared by
    every concurrent caller.
    """

    def __init__(self, *, model_name: str) -> None:
        self._model_name = model_name
        self._pipeline: Any = None
        self._init_lock = threading.Lock()

    def summarize(self, text: str, *, min_length: int, max_length: int) -> str:
        pipeline = self._get_pipeline()
        try:
            result = pipeline(
                text,
                min_length=min_length,
                max_length=max_length,
                do_sample=False,
                truncation=True,
            )
            return str(result[0]["summary_text"]).strip()
        except Exception as exc:
            raise SummarizationError(f"Model inference failed: {exc}") from exc

    def _get_pipeline(self) -> Any:
        if self._pipeline is not None:
            return self._pipeline
        with self._init_lock:
            if self._pipeline is None:
                self._pipeline = self._load()
        return self._pipeline

    def _load(self) -> Any:
        Log.info(f"Initializing summarization model {self._model_name}")
        started = time.monotonic()
        try:
            from transformers import pipeline

            loaded = pipeline("summarization", model=self._model_name)
        except Exception as exc:
            raise SummarizationError(
                f"Cannot load summarization model {self._model_name}: {exc}"
            ) from exc
        Log.info(f"Model initialized in {time.monotonic() - started:.2f} seconds")
        return loaded
