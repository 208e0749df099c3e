"""Lookup orchestration.

Runs the identity lookup and then the public-key lookup for the same batch of
usernames, and folds both outcomes into a `LookupReport`. Printing and exit
codes stay in the CLI; this module only aggregates.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Sequence

from adapters.keybase import KeybaseLookupService
from core.config import AppSettings
from core.domain.errors import KeybaseError, NotFoundError
from core.domain.models import LookupKind, LookupReport, LookupResult
from core.interfaces.lookup import UserLookupService
from core.logging_setup import get_logger


@dataclass
class PipelineHooks:
    """Optional callbacks for UI layers."""

    lookup_done: Callable[[LookupResult], None] | None = None
    lookup_error: Callable[[LookupKind, KeybaseError], None] | None = None


async def _run_one(
    service: UserLookupService,
    identifiers: Sequence[str],
    kind: LookupKind,
    *,
    hooks: PipelineHooks,
    errors: list[str],
    logger: logging.Logger,
) -> LookupResult | None:
    try:
        result = await service.lookup(identifiers, kind)
    except KeybaseError as exc:
        logger.error("error during keybase %s lookup: %s", kind.label(), exc)
        errors.append(str(exc))
        if hooks.lookup_error:
            hooks.lookup_error(kind, exc)
        # Not-found still carries the usable part of the answer.
        return exc.result if isinstance(exc, NotFoundError) else None

    if hooks.lookup_done:
        hooks.lookup_done(result)
    return result


async def run_lookups(
    *,
    settings: AppSettings,
    identifiers: Sequence[str],
    include_public_keys: bool = True,
    service: UserLookupService | None = None,
    hooks: PipelineHooks | None = None,
    logger: logging.Logger | None = None,
) -> LookupReport:
    """Look up `identifiers`, then their public keys.

    The public-key lookup only runs when every username resolved; any
    identity error (not-found included) ends the run there.
    """

    hooks = hooks or PipelineHooks()
    logger = logger or get_logger("pipeline")
    service = service or KeybaseLookupService(settings, logger=logger)

    names = list(identifiers)
    report = LookupReport(identifiers=names, api_base_url=service.base_url)

    report.identity = await _run_one(
        service,
        names,
        LookupKind.IDENTITY,
        hooks=hooks,
        errors=report.errors,
        logger=logger,
    )
    if report.errors:
        logger.debug("skipping public key lookup after identity lookup errors")
        return report

    if include_public_keys:
        report.public_keys = await _run_one(
            service,
            names,
            LookupKind.PUBLIC_KEY,
            hooks=hooks,
            errors=report.errors,
            logger=logger,
        )
    return report
