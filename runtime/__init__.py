"""
Runtime package for the CatChat bot.

This package contains:
- API layer (FastAPI server + routes)
- Agents (turn controller, responders, session terminator, conversation flow)
- Render (the per-session transcript)
- Stores (sessions, event log)
- Models (Pydantic / dataclasses for requests and sessions)
"""
