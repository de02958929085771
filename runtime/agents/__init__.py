"""
Agents used by the CatChat runtime.

- TurnController: counts turns against the session's random limit
- CatFactResponder / TriviaResponder: normal bot replies from the content banks
- SessionTerminator: the final "on this day" excuse; disables input
- ConversationAgent: ties them together per user message
"""
