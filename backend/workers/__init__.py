"""
Worker Lambda handlers for scheduled processing.

Workers:
- warmup_worker: Refreshes the link cache for a fixed company list (scheduled)
"""
