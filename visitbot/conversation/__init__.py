"""Conversation layer: command routing, session state machine, prompts."""
