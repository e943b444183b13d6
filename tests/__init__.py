"""
Emoji Kitchen Test Suite

Structure:
- unit/: Unit tests for individual components (service, config, logging, helpers)
- integration/: FastAPI proxy and CLI script with a mocked transport, plus an
  opt-in live test (EMOJI_KITCHEN_LIVE=1)
"""
