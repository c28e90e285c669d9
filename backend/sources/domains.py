"""
Company name -> official domain lookup.

Static table from configuration, keyed by company key so that
"字节跳动有限公司" and "字节跳动" resolve to the same domain.
"""

from typing import Dict, Optional, Protocol

from utils.company_key import company_key


class DomainResolver(Protocol):
    """Anything that can map a company display name to its official domain."""

    def resolve_domain(self, company_name: str) -> Optional[str]:
        ...


class StaticDomainResolver:
    """Resolves domains from a configured name -> domain table."""

    def __init__(self, domain_map: Optional[Dict[str, str]] = None):
        self._domains: Dict[str, str] = {}
        for name, domain in (domain_map or {}).items():
            key = company_key(name)
            if key and domain and domain.strip():
                self._domains[key] = domain.strip()

    def resolve_domain(self, company_name: str) -> Optional[str]:
        return self._domains.get(company_key(company_name))

    def __len__(self) -> int:
        return len(self._domains)
