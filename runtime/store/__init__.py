"""
Storage abstractions for the CatChat runtime.

Includes:
- SessionStore: in-memory chat sessions (state, transcript, content banks)
- LogStore: structured event logging on top of the logging module
"""
