# SPDX-License-Identifier: MIT
# Copyright (c) 2026 pi-gateway-extensions contributors

"""
Transient widgets that remove themselves after a fixed delay.
"""

import asyncio
import logging
from typing import Optional, Sequence

from rich.text import Text

from gateway_library.core.constants import DEFAULT_QUOTA_WIDGET_TTL

from .host import WIDGET_PLACEMENT_ABOVE_EDITOR, ExtensionUI

app_logger = logging.getLogger("extension_app")


class TransientWidget:
    """
    A host widget slot that is cleared `ttl` seconds after the last show().

    Showing again before expiry replaces the content, cancels the pending
    clear and starts a new window. A superseded clear never fires.
    """

    def __init__(
        self,
        key: str,
        ttl: float = DEFAULT_QUOTA_WIDGET_TTL,
        placement: str = WIDGET_PLACEMENT_ABOVE_EDITOR,
    ):
        self.key = key
        self.ttl = ttl
        self.placement = placement
        self._expiry_task: Optional[asyncio.Task] = None
        self._generation = 0

    @property
    def is_pending(self) -> bool:
        """True while a clear is scheduled."""
        return self._expiry_task is not None and not self._expiry_task.done()

    def show(self, ui: ExtensionUI, lines: Sequence[Text]) -> None:
        """Display lines and (re)schedule the automatic clear. Needs a running loop."""
        loop = asyncio.get_running_loop()
        self._cancel_pending()
        ui.set_widget(self.key, list(lines), self.placement)
        self._generation += 1
        self._expiry_task = loop.create_task(self._expire_after(ui, self._generation))

    def clear(self, ui: ExtensionUI) -> None:
        """Remove the widget now and drop any pending clear."""
        self._cancel_pending()
        self._generation += 1
        ui.set_widget(self.key, None, self.placement)

    def _cancel_pending(self) -> None:
        if self._expiry_task is not None and not self._expiry_task.done():
            self._expiry_task.cancel()
        self._expiry_task = None

    async def _expire_after(self, ui: ExtensionUI, generation: int) -> None:
        await asyncio.sleep(self.ttl)
        if generation != self._generation:
            return
        app_logger.debug(f"Widget '{self.key}' expired after {self.ttl}s")
        ui.set_widget(self.key, None, self.placement)
