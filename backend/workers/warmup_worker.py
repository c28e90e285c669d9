"""
Warm-up Worker Handler

Triggered on a schedule (daily, 03:00) to refresh the link cache for a
fixed list of companies so the first user request is served from memory.

Event format (all optional):
{
    "company_names": ["腾讯", "字节跳动"]   # defaults to JOBS_SCHEDULER_COMPANY_NAMES
}

"company_names" may also be a comma-separated string.

Workflow:
1. Resolve the company list (event, else settings)
2. For each company, recompute links ignoring the cache and overwrite the entry
3. Return per-company link counts

Companies are refreshed one after another to keep load on third-party
sites low; each refresh already fans out across its own sources.

Log Format:
All logs use prefix [WarmupWorker] for filtering.
"""

import asyncio
import logging
from typing import Dict, List, Optional

from config.settings import settings
from sourcing.orchestrator import LinkAggregator, get_aggregator

logger = logging.getLogger()
logger.setLevel(logging.INFO)

LOG_PREFIX = "[WarmupWorker]"


async def refresh_companies(aggregator: LinkAggregator, company_names: List[str]) -> Dict[str, int]:
    """
    Refresh cached links for each company

    Args:
        aggregator: Aggregator whose cache is refreshed
        company_names: Display names to refresh (blank entries skipped)

    Returns:
        Dict mapping company name to number of links now cached
    """
    counts: Dict[str, int] = {}
    for name in company_names:
        name = name.strip()
        if not name:
            continue
        links = await aggregator.refresh(name)
        counts[name] = len(links)
        logger.info(f"{LOG_PREFIX} Refreshed '{name}': {len(links)} links")
    return counts


def handler(event: Optional[dict], context, aggregator: Optional[LinkAggregator] = None) -> dict:
    """
    Scheduled entry point

    Args:
        event: Trigger payload (see module docstring)
        context: Runtime context (unused)
        aggregator: Override for tests; defaults to the process-wide aggregator

    Returns:
        {"status": "success", "refreshed": {company: count, ...}}
    """
    event = event or {}
    names = event.get("company_names") or settings.get_scheduler_company_names()
    if isinstance(names, str):
        names = names.split(",")
    logger.info(f"{LOG_PREFIX} Starting refresh of {len(names)} companies")

    counts = asyncio.run(refresh_companies(aggregator or get_aggregator(), names))

    logger.info(f"{LOG_PREFIX} Done, {sum(counts.values())} links across {len(counts)} companies")
    return {"status": "success", "refreshed": counts}
