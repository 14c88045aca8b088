"""One-time initialization of the keyword classification."""

import enum
import logging
import threading
from typing import Callable, List, Mapping, Optional, Tuple

from .classification import KeywordClassification
from .config import ExtractorConfig, load_config
from .errors import UninitializedAccessError
from .loader import load_grammar_tables
from .model import Keyword

log = logging.getLogger(__name__)


class State(enum.Enum):
    UNINITIALIZED = "uninitialized"
    INITIALIZING = "initializing"
    INITIALIZED = "initialized"


class KeywordExtractor:
    """Loads the grammar at most once and answers keyword queries afterwards.

    The classification is built by the first successful ``initialize()``;
    concurrent first callers wait on a lock and share the result. If the load
    fails the extractor stays uninitialized and the error propagates, so an
    explicit second ``initialize()`` retries.
    """

    def __init__(
        self,
        config: Optional[ExtractorConfig] = None,
        load: Callable = load_grammar_tables,
    ):
        self._config = config
        self._load = load
        self._lock = threading.Lock()
        self._state = State.UNINITIALIZED
        self._classification: Optional[KeywordClassification] = None

    @property
    def state(self) -> State:
        return self._state

    @property
    def config(self) -> ExtractorConfig:
        if self._config is None:
            self._config = load_config()
        return self._config

    def initialize(self) -> KeywordClassification:
        classification = self._classification
        if classification is not None:
            return classification

        with self._lock:
            if self._classification is not None:
                return self._classification

            self._state = State.INITIALIZING
            try:
                config = self.config
                tables = self._load(config.grammar_path, config.scratch_dir, config.options)
                classification = KeywordClassification.from_tables(tables, config.options)
            except BaseException:
                self._state = State.UNINITIALIZED
                raise

            self._classification = classification
            self._state = State.INITIALIZED
            log.info(
                "classified %d keywords, %d restricted",
                len(classification.keywords()),
                len(classification.restricted_keywords()),
            )
            return classification

    @property
    def classification(self) -> KeywordClassification:
        if self._classification is None:
            raise UninitializedAccessError(
                f"keyword queries need initialize() first (state: {self._state.value})"
            )
        return self._classification

    def keywords(self) -> Tuple[Keyword, ...]:
        return self.classification.keywords()

    def image_for_label(self, label: str) -> Optional[str]:
        return self.classification.image_for_label(label)

    def whitelist(self) -> Mapping[str, Tuple[str, ...]]:
        return self.classification.whitelist()

    def whitelist_for(self, *names: str) -> List[str]:
        return self.classification.whitelist_for(*names)

    def restricted_keywords(self) -> List[str]:
        return self.classification.restricted_keywords()
