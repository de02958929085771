"""
Rendering for the CatChat runtime.

- Transcript: the per-session chat window agents append bubbles to
"""
