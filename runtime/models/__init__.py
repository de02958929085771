"""
Pydantic / datamodels used by the CatChat runtime.

Split into:
- session_models: SessionState + SessionStatus + TranscriptEntry + ChatSession
- api_models: HTTP request/response schemas
"""
