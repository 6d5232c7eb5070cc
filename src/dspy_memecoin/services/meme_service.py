"""Service for generating memes from prompts."""

import threading
from collections import OrderedDict
from typing import List, Optional

from ..agents.caption_generator import CaptionGenerator
from ..agents.template_selector import TemplateSelector, TemplateUsage
from ..config.config import settings
from ..exceptions.meme_specific import PromptValidationError
from ..models.meme import Meme
from ..utils.logging import bind_context, get_logger
from .catalog import ALL_CATEGORIES
from .meme_store import MemeStore

logger = get_logger(__name__)

DEFAULT_SESSION = "default"


class BatchSessions:
    """
    Template usage per generation session, keyed by session id.

    At most ``max_sessions`` are kept; the least recently used session is
    evicted when a new one would exceed the limit.
    """

    def __init__(self, max_sessions: Optional[int] = None) -> None:
        self.max_sessions = settings.max_batch_sessions if max_sessions is None else max_sessions
        self._lock = threading.Lock()
        self._sessions: "OrderedDict[str, TemplateUsage]" = OrderedDict()

    def get(self, session_id: Optional[str] = None) -> TemplateUsage:
        key = session_id or DEFAULT_SESSION
        with self._lock:
            usage = self._sessions.get(key)
            if usage is not None:
                self._sessions.move_to_end(key)
                return usage
            usage = self._sessions[key] = TemplateUsage()
            while len(self._sessions) > self.max_sessions:
                evicted, _ = self._sessions.popitem(last=False)
                logger.debug("batch_session_evicted", session_id=evicted)
            return usage

    def discard(self, session_id: Optional[str] = None) -> None:
        with self._lock:
            self._sessions.pop(session_id or DEFAULT_SESSION, None)

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)


class MemeGenerationService:
    """Selects a template, writes captions and stores the resulting meme."""

    def __init__(
        self,
        store: MemeStore,
        selector: Optional[TemplateSelector] = None,
        caption_generator: Optional[CaptionGenerator] = None,
        sessions: Optional[BatchSessions] = None,
    ) -> None:
        self.store = store
        self.selector = selector or TemplateSelector()
        self.caption_generator = caption_generator or CaptionGenerator()
        self.sessions = sessions or BatchSessions()

    def generate(
        self,
        prompt: str,
        category: Optional[str] = None,
        language: str = "en",
        reset_templates: bool = False,
        batch_index: Optional[int] = None,
        session_id: Optional[str] = None,
    ) -> Meme:
        """
        Generate and store one meme.

        Args:
            prompt: What the meme is about
            category: Optional template category filter
            language: Caption language
            reset_templates: Clear the session's used templates first
            batch_index: Pick the template by index instead of asking the classifier
            session_id: Batch session whose template usage applies

        Returns:
            The stored meme

        Raises:
            PromptValidationError: If the prompt is empty
        """
        if not prompt or not prompt.strip():
            raise PromptValidationError()

        with bind_context(session_id=session_id or DEFAULT_SESSION):
            usage = self.sessions.get(session_id)
            if reset_templates:
                usage.reset()

            selection = self.selector(prompt=prompt, category=category, usage=usage, batch_index=batch_index)
            template = selection.template
            captions = self.caption_generator(prompt=prompt, template=template, language=language or "en")

            meme = Meme(
                template_id=template.id,
                template_name=template.name,
                image_url=template.image_ref,
                prompt=prompt,
                top_text=captions.top_text,
                bottom_text=captions.bottom_text,
                category=category if category and category != ALL_CATEGORIES else None,
                language=language or "en",
            )
            self.store.add(meme)
            logger.info(
                "meme_generated",
                meme_id=meme.id,
                template_id=template.id,
                selection=selection.method.value,
            )
        return meme

    def generate_batch(
        self,
        prompt: str,
        count: int,
        category: Optional[str] = None,
        language: str = "en",
        session_id: Optional[str] = None,
        deterministic: bool = True,
    ) -> List[Meme]:
        """
        Generate ``count`` memes for one prompt, one after another.

        The first call resets the session's template usage. With
        ``deterministic`` the template is chosen by batch index.
        """
        if count < 1:
            raise ValueError("count must be at least 1")
        return [
            self.generate(
                prompt,
                category=category,
                language=language,
                reset_templates=index == 0,
                batch_index=index if deterministic else None,
                session_id=session_id,
            )
            for index in range(count)
        ]
