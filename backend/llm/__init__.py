"""
LLM integration layer.

Responsibilities:
- Manage Gemini API configuration and credentials.
- Ask Gemini, grounded with the Google Maps tool, about restaurants near a location.
- Turn SDK failures and empty answers into one readable error message.
"""
