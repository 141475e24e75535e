"""
Source validation.

Documents pointing at placeholder hosts (example.com and friends) are
artifacts of tests or bad scrapes and must never be cited to a user.

Dependencies: None
System role: Last filter before results leave the retrieval engine
"""

import logging
from typing import Iterable, Sequence
from urllib.parse import urlsplit

from knowledge_retrieval.configs.retrieval import PLACEHOLDER_DOMAINS
from knowledge_retrieval.models.knowledge import KnowledgeDocument

logger = logging.getLogger(__name__)


def _host_of(url: str) -> str | None:
    candidate = url.strip()
    if "://" not in candidate:
        candidate = f"//{candidate}"
    try:
        host = urlsplit(candidate).hostname
    except ValueError:
        return None
    return host.rstrip(".").lower() if host else None


def is_trusted_url(url: str, placeholder_domains: Iterable[str] = PLACEHOLDER_DOMAINS) -> bool:
    """
    Check that a URL does not point at a placeholder host.

    A host is rejected when it equals a placeholder domain or is one of its
    subdomains. URLs without a parseable host are rejected only if they
    contain a placeholder domain anywhere.

    Args:
        url: URL to check
        placeholder_domains: Hosts to reject

    Returns:
        bool: False for placeholder URLs
    """
    domains = [domain.lower() for domain in placeholder_domains]
    host = _host_of(url)
    if host is None:
        lowered = url.lower()
        return not any(domain in lowered for domain in domains)
    return not any(host == domain or host.endswith(f".{domain}") for domain in domains)


def filter_valid_results(
    documents: Sequence[KnowledgeDocument],
    placeholder_domains: Iterable[str] = PLACEHOLDER_DOMAINS,
) -> list[KnowledgeDocument]:
    """
    Drop documents whose URL is a placeholder. Documents without a URL are kept.

    Args:
        documents: Ranked documents
        placeholder_domains: Hosts to reject

    Returns:
        list[KnowledgeDocument]: Surviving documents in their original order
    """
    domains = tuple(placeholder_domains)
    valid = []
    for document in documents:
        if document.url and not is_trusted_url(document.url, domains):
            logger.debug(f"{__name__}:filter_valid_results - Dropped placeholder source {document.url}")
            continue
        valid.append(document)
    return valid
