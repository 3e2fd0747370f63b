"""
Analysis lifecycle state machine.

Drives one analysis session: idle -> loading -> success | error, with
retry. State is written only from the coordinator's own coroutines on the
event loop that runs them and published to subscribers in order.
"""

import logging
from collections.abc import Callable
from typing import Protocol

from PIL import Image

from menusnap.core.exceptions import MenuAnalysisError
from menusnap.models.menu import AnalysisState, MenuItem

logger = logging.getLogger(__name__)

NO_ITEMS_MESSAGE = "No menu items could be identified. Try a clearer photo."
UNEXPECTED_ERROR_MESSAGE = "Something went wrong while analyzing the menu. Please try again."

StateListener = Callable[[AnalysisState], None]


class MenuAnalyzer(Protocol):
    """Anything that turns a menu photo into parsed menu items."""

    async def analyze_menu(self, image: Image.Image | bytes) -> list[MenuItem]: ...


def rank_items(items: list[MenuItem]) -> list[MenuItem]:
    """Sort by health score, highest first; ties keep their original order."""
    return sorted(items, key=lambda item: item.health_score, reverse=True)


class AnalysisCoordinator:
    """
    Owns the AnalysisState for one analysis session.

    Overlapping ``analyze`` calls are not cancelled, but only the most
    recently started call may publish its terminal state.
    """

    def __init__(self, analyzer: MenuAnalyzer) -> None:
        self._analyzer = analyzer
        self._state = AnalysisState.idle()
        self._listeners: list[StateListener] = []
        self._generation = 0

    @property
    def state(self) -> AnalysisState:
        return self._state

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """
        Register a listener called with every new state.

        Returns:
            A function that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _publish(self, state: AnalysisState) -> None:
        logger.debug(f"Analysis state -> {state.status.value}")
        self._state = state
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:
                logger.exception("Analysis state listener failed")

    async def analyze(self, image: Image.Image | bytes) -> AnalysisState:
        """
        Run one analysis attempt and publish its outcome.

        Returns:
            The terminal state of this attempt (which may not be published
            if a newer attempt started meanwhile)
        """
        self._generation += 1
        generation = self._generation
        self._publish(AnalysisState.loading())

        try:
            items = await self._analyzer.analyze_menu(image)
        except MenuAnalysisError as e:
            logger.warning(f"Menu analysis failed ({e.error_code}): {e.message}")
            result = AnalysisState.failure(e.user_message)
        except Exception:
            logger.exception("Unexpected error during menu analysis")
            result = AnalysisState.failure(UNEXPECTED_ERROR_MESSAGE)
        else:
            if items:
                result = AnalysisState.success(rank_items(items))
            else:
                result = AnalysisState.failure(NO_ITEMS_MESSAGE)

        if generation == self._generation:
            self._publish(result)
        else:
            logger.info("Discarding result of superseded analysis")
        return result

    async def retry(self, image: Image.Image | bytes) -> AnalysisState:
        """Run a fresh, independent attempt on the same image."""
        return await self.analyze(image)
