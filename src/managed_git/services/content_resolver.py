"""Content type resolver: turns a traversal result into typed managed content.

Classification happens once per fetch.  JSON that the transport already
decoded is wrapped as-is; text requested at a ``.json`` path is parsed only
when its content is read, so callers that never look at the body never pay for
the parse.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from dataclasses import replace
from functools import reduce
from typing import Any

from managed_git.domain.content import (
    ContentContext,
    ContentEnhancer,
    ManagedGitContent,
    ManagedGitJsonFile,
    ManagedGitTextFile,
)
from managed_git.domain.traversal import (
    TraversalJsonContent,
    TraversalResult,
    TraversalTextContent,
)

logger = logging.getLogger(__name__)


def prepare_managed_git_content(
    ctx: ContentContext, traversal: TraversalResult | None
) -> ManagedGitContent | None:
    """Classify *traversal* for the file requested in *ctx*.

    Returns ``None`` when the body is neither JSON nor text; that is an
    ordinary outcome, not an error.
    """
    match traversal:
        case TraversalJsonContent(json_instance=value):
            return ManagedGitJsonFile(path=ctx.path, traversal=traversal, decode=lambda: value)
        case TraversalTextContent(body_text=text) if ctx.path.endswith(".json"):
            return ManagedGitJsonFile(
                path=ctx.path, traversal=traversal, decode=lambda: json.loads(text)
            )
        case TraversalTextContent():
            return ManagedGitTextFile(path=ctx.path, traversal=traversal)
        case None:
            return None
        case _:
            logger.debug("Unclassifiable content for %s (%s)", ctx.path, type(traversal).__name__)
            return None


# ── Enhancers ───────────────────────────────────────────────────────────────


def compose_enhancers(*enhancers: ContentEnhancer) -> ContentEnhancer:
    """Chain *enhancers* left to right into a single enhancer."""

    def _composed(ctx: ContentContext, content: ManagedGitContent) -> ManagedGitContent:
        return reduce(lambda current, enhance: enhance(ctx, current), enhancers, content)

    return _composed


def enrich_managed_git_content(
    ctx: ContentContext, content: ManagedGitContent | None
) -> ManagedGitContent | None:
    """Apply ``ctx.enrich_content`` to *content* when both are present."""
    if content is None or ctx.enrich_content is None:
        return content
    return ctx.enrich_content(ctx, content)


def map_json_content(transform: Callable[[Any], Any]) -> ContentEnhancer:
    """Enhancer that post-processes decoded JSON; other content passes through.

    The transform runs when the resulting file's content is read, so lazily
    parsed files stay lazy.
    """

    def _enhance(ctx: ContentContext, content: ManagedGitContent) -> ManagedGitContent:
        if isinstance(content, ManagedGitJsonFile):
            decode = content.decode
            return replace(content, decode=lambda: transform(decode()))
        return content

    return _enhance
