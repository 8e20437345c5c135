"""
Restaurant search flow.

Responsibilities:
- Hold the per-visitor query, location and request status.
- Validate a search locally before any request is sent.
- Run one Gemini request per search and keep its outcome.
"""
