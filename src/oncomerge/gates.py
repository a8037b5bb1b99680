"""Fetch gates for enrichment lookups.

Each gate checks a cheap local condition on already-loaded mutations and only
calls its injected client when there is something to look up:

- fetch_cosmic_data: COSMIC counts, only when some mutation has a keyword.
- fetch_oncokb_data: OncoKB annotations, only when some called mutation
  has a gene symbol and protein change.

Gates call their client at most once and never retry or swallow its errors.
A gate that declines returns a "not attempted" value (None for COSMIC, an
empty OncoKbData for OncoKB) without touching the client.
"""

from typing import Any, Protocol, Sequence

from oncomerge.config.constants import DEFAULT_TUMOR_TYPE, IDENTITY_DELIMITER
from oncomerge.config.debug import get_logger
from oncomerge.merge import MutationSource, concat_mutations, mutation_records
from oncomerge.models.cosmic import CosmicCount
from oncomerge.models.mutation import Mutation
from oncomerge.models.oncokb import OncoKbData, OncoKbQuery

logger = get_logger(__name__)


class CosmicCountFetcher(Protocol):
    """Anything that can look up COSMIC counts for a list of keywords."""

    async def fetch_cosmic_counts(self, keywords: list[str]) -> list[CosmicCount]: ...


class OncoKbAnnotator(Protocol):
    """Anything that can annotate protein-change queries against OncoKB."""

    async def annotate_mutations(self, queries: list[OncoKbQuery]) -> dict[str, dict[str, Any]]: ...


def collect_keywords(mutations: Sequence[Mutation]) -> list[str]:
    """Distinct non-empty keywords in first-seen order."""
    return list(dict.fromkeys(m.keyword for m in mutations if m.has_keyword))


async def fetch_cosmic_data(
    called: MutationSource,
    uncalled: MutationSource,
    client: CosmicCountFetcher,
) -> list[CosmicCount] | None:
    """Fetch COSMIC counts for the keywords of called and uncalled mutations.

    Args:
        called: Called mutations (already loaded)
        uncalled: Uncalled mutations (already loaded)
        client: COSMIC count fetcher, e.g. CBioPortalClient

    Returns:
        The client's result unmodified, or None when no mutation carries a
        keyword and nothing was fetched

    Raises:
        EnrichmentFetchError: Propagated from the client
    """
    mutations = concat_mutations(called, uncalled)
    keywords = collect_keywords(mutations)

    if not keywords:
        logger.debug(f"Skipping COSMIC lookup: no keywords among {len(mutations)} mutations")
        return None

    logger.info(f"Fetching COSMIC counts for {len(keywords)} keywords")
    return await client.fetch_cosmic_counts(keywords)


def build_oncokb_queries(
    mutations: Sequence[Mutation],
    sample_to_tumor_map: dict[str, str],
) -> list[OncoKbQuery]:
    """One query per distinct (gene, protein change, tumor type).

    Query ids join the three fields with the identity delimiter, so protein
    changes containing "_" (e.g. "X125_splice") keep distinct ids.

    Mutations without a gene symbol or protein change cannot be annotated and
    are left out.
    """
    queries: dict[str, OncoKbQuery] = {}
    for mutation in mutations:
        if not mutation.gene_symbol or not mutation.protein_change:
            continue
        tumor_type = sample_to_tumor_map.get(mutation.sample_id or "", DEFAULT_TUMOR_TYPE)
        query_id = IDENTITY_DELIMITER.join((mutation.gene_symbol, mutation.protein_change, tumor_type))
        if query_id not in queries:
            queries[query_id] = OncoKbQuery(
                id=query_id,
                hugo_symbol=mutation.gene_symbol,
                alteration=mutation.protein_change,
                tumor_type=tumor_type,
            )
    return list(queries.values())


async def fetch_oncokb_data(
    sample_to_tumor_map: dict[str, str],
    called: MutationSource,
    client: OncoKbAnnotator,
) -> OncoKbData:
    """Annotate called mutations with OncoKB.

    Args:
        sample_to_tumor_map: Sample id to tumor type name
        called: Called mutations (already loaded)
        client: OncoKB annotator, e.g. OncoKbClient

    Returns:
        OncoKbData; empty when there was nothing to annotate

    Raises:
        EnrichmentFetchError: Propagated from the client
    """
    mutations = mutation_records(called)
    queries = build_oncokb_queries(mutations, sample_to_tumor_map)

    if not queries:
        logger.debug("Skipping OncoKB lookup: no annotatable mutations")
        return OncoKbData()

    logger.info(f"Annotating {len(queries)} mutations with OncoKB")
    indicator_map = await client.annotate_mutations(queries)
    return OncoKbData(
        sample_to_tumor_map=dict(sample_to_tumor_map),
        indicator_map=indicator_map,
    )
