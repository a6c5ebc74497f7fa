"""
Per-file transform pipeline: parse, inject try/catch, print.

Every failure is fail-open: the caller gets the original source back and
the error is reported on the log, so a build using the loader never breaks
because of it.
"""

import asyncio
import traceback
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from jitc.config import settings
from jitc.core.traversal import inject_try_catch as run_injection
from jitc.errors import UnsupportedFileError
from jitc.models.error import ErrorRecord
from jitc.models.transform import TransformOptions, TransformResult
from jitc.utils.logging import get_logger, log_error_with_context
from jitc.utils.metrics import StatsAccumulator, TransformStats, track_transform
from plugins.manager import PluginManager, create_default_plugin_manager

logger = get_logger(__name__)

_default_manager: Optional[PluginManager] = None


def get_plugin_manager() -> PluginManager:
    """Lazily created manager holding the bundled plugins."""
    global _default_manager
    if _default_manager is None:
        _default_manager = create_default_plugin_manager()
    return _default_manager


async def transform_source(
    source: str,
    options: TransformOptions,
    plugin_manager: Optional[PluginManager] = None,
    accumulator: Optional[StatsAccumulator] = None,
) -> TransformResult:
    """
    Add fallback try/catch handling around unprotected await expressions.

    Args:
        source: Original source text
        options: Per-file options; ``filename`` selects the language plugin
        plugin_manager: Plugins to choose from (bundled plugins by default)
        accumulator: Running timing total shared across invocations

    Returns:
        TransformResult whose ``code`` is the rewritten source, or the
        original source if anything went wrong
    """
    manager = plugin_manager or get_plugin_manager()
    file_logger = logger.with_context(file=options.filename)
    stats = TransformStats(options.filename, options.stats, accumulator)
    result = TransformResult(filename=options.filename, code=source)
    phase = "select_plugin"

    async with track_transform(stats):
        try:
            plugin = manager.get_plugin_for_file(options.filename)
            if plugin is None:
                raise UnsupportedFileError(
                    f"No language plugin for {options.filename}"
                )

            phase = "parse"
            tree = await plugin.parse_file(options.filename, source)

            phase = "transform"
            report = run_injection(tree, plugin.parse_fragment)
            result.report = report

            phase = "print"
            code = await plugin.print_tree(tree)

            result.code = code
            result.changed = code != source
            if options.debug:
                file_logger.debug(
                    f"Rewrote {report.rewritten} of {report.visited} await expressions",
                    extra=report.model_dump(),
                )
                file_logger.debug(f"jitc ~ transform ~ new source:\n{code}")

        except Exception as e:
            result.code = source
            result.changed = False
            result.error = ErrorRecord(
                phase=phase,
                error_type=type(e).__name__,
                message=str(e),
                stack_trace=traceback.format_exc(),
                timestamp=datetime.now(timezone.utc),
            )
            if options.debug:
                log_error_with_context(
                    file_logger,
                    "jsx-inject-try-catch failed with exception",
                    e,
                    phase=phase,
                )
            else:
                file_logger.warning(
                    f"jsx-inject-try-catch skipped {options.filename}: {e}",
                    extra={"phase": phase},
                )

    result.duration_ms = stats.duration_ms
    return result


async def inject_try_catch(source: str, filename: str, **options: Any) -> str:
    """
    Convenience wrapper returning only the transformed source.

    Args:
        source: Original source text
        filename: Source file name
        **options: Remaining ``TransformOptions`` fields (debug, stats)
    """
    result = await transform_source(
        source, TransformOptions(filename=filename, **options)
    )
    return result.code


async def transform_many(
    sources: Dict[str, str],
    debug: Optional[bool] = None,
    stats: Optional[bool] = None,
    plugin_manager: Optional[PluginManager] = None,
    accumulator: Optional[StatsAccumulator] = None,
    max_workers: Optional[int] = None,
) -> Dict[str, TransformResult]:
    """
    Transform several files concurrently.

    Each file is parsed into its own tree; only ``accumulator`` is shared.

    Args:
        sources: Mapping of file name to source text
        debug: Override for ``settings.debug``
        stats: Override for ``settings.stats``
        plugin_manager: Plugins to choose from (bundled plugins by default)
        accumulator: Running timing total shared by all files
        max_workers: Concurrency bound, ``settings.max_workers`` by default

    Returns:
        Mapping of file name to its TransformResult
    """
    manager = plugin_manager or get_plugin_manager()
    semaphore = asyncio.Semaphore(max_workers or settings.max_workers)
    overrides = {
        key: value
        for key, value in (("debug", debug), ("stats", stats))
        if value is not None
    }

    async def _run(filename: str, source: str) -> TransformResult:
        async with semaphore:
            return await transform_source(
                source,
                TransformOptions(filename=filename, **overrides),
                plugin_manager=manager,
                accumulator=accumulator,
            )

    results = await asyncio.gather(
        *(_run(filename, source) for filename, source in sources.items())
    )
    return {result.filename: result for result in results}
