"""
Apply-link sourcing module

Aggregates apply links for a company from every configured source,
dedupes them by canonical URL, caps and caches the result.
"""
